"""
Tests for Coolify web UI deep-links.
"""

from coolctl.core.services.urls import (
    console_logs_url,
    deployment_url,
    environment_url,
    is_http_url,
    normalize_url,
    private_key_url,
    project_url,
    resolve_deploy_url,
    resource_url,
    team_url,
)

INSTANCE = "https://coolify.example.com"


class TestLinks:
    def test_project_and_environment(self):
        assert project_url(INSTANCE, "p1") == f"{INSTANCE}/project/p1"
        assert environment_url(INSTANCE, "p1", "e1") == f"{INSTANCE}/project/p1/environment/e1"

    def test_environment_falls_back_to_instance(self):
        assert environment_url(INSTANCE, None, "e1") == INSTANCE
        assert environment_url(INSTANCE, "p1", None) == INSTANCE

    def test_resource(self):
        assert resource_url(INSTANCE + "/", "p1", "e1", "service", "s1") == (
            f"{INSTANCE}/project/p1/environment/e1/service/s1"
        )
        assert resource_url(INSTANCE, "p1", "e1", "service", None) is None

    def test_logs_and_deployment(self):
        base = f"{INSTANCE}/project/p1/environment/e1/application/a1"
        assert console_logs_url(INSTANCE, "p1", "e1", "a1") == f"{base}/logs"
        assert deployment_url(INSTANCE, "p1", "e1", "a1", "d1") == f"{base}/deployment/d1"
        assert deployment_url(INSTANCE, "p1", "e1", "a1", None) is None

    def test_team_and_key(self):
        assert team_url(INSTANCE, 0) == f"{INSTANCE}/team/0"
        assert team_url(INSTANCE, None) is None
        assert private_key_url(INSTANCE, "k1") == f"{INSTANCE}/private-key/k1"


class TestUrlHelpers:
    def test_is_http_url(self):
        assert is_http_url("https://a.com")
        assert not is_http_url("ftp://a.com")
        assert not is_http_url("a.com")
        assert not is_http_url(None)

    def test_normalize_url(self):
        assert normalize_url("a.com") == "https://a.com"
        assert normalize_url("http://a.com") == "http://a.com"
        assert normalize_url("") is None

    def test_resolve_deploy_url(self):
        assert resolve_deploy_url("/project/p/x", INSTANCE) == f"{INSTANCE}/project/p/x"
        assert resolve_deploy_url("project/p/x", INSTANCE) == f"{INSTANCE}/project/p/x"
        assert resolve_deploy_url("host.com/x", INSTANCE) == "https://host.com/x"
        assert resolve_deploy_url("https://x.io", INSTANCE) == "https://x.io"
        assert resolve_deploy_url("  ", INSTANCE) is None
