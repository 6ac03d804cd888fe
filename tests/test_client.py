"""
Tests for the Coolify REST client and response decoding.
"""

import urllib.error

import pytest

from coolctl.adapters.coolify.client import CoolifyAuthError, CoolifyClient, CoolifyError
from coolctl.adapters.coolify.decode import decode_list, decode_logs, decode_message

from conftest import BASE_URL, FakeTransport


def _client(transport, token="tok"):
    return CoolifyClient(BASE_URL, token, timeout=5, transport=transport)


# ── Decoding ────────────────────────────────────────────────────


class TestDecode:
    def test_list_shapes(self):
        assert decode_list([{"a": 1}]) == [{"a": 1}]
        assert decode_list({"data": [{"a": 1}]}) == [{"a": 1}]
        assert decode_list({"deployments": [{"a": 1}]}) == [{"a": 1}]

    def test_unrecognized_is_empty(self):
        assert decode_list(None) == []
        assert decode_list({"items": []}) == []
        assert decode_list("text") == []
        assert decode_list({"data": "x"}) == []

    def test_non_dict_entries_dropped(self):
        assert decode_list([{"a": 1}, 2, None]) == [{"a": 1}]

    def test_logs(self):
        assert decode_logs("line") == "line"
        assert decode_logs({"logs": "a\nb"}) == "a\nb"
        assert decode_logs({"logs": None}) == ""
        assert decode_logs(None) == ""

    def test_message(self):
        assert decode_message({"message": "ok"}) == "ok"
        assert decode_message({"deployments": [{"message": "queued"}]}) == "queued"
        assert decode_message("plain") == "plain"
        assert decode_message(None) == ""


# ── Requests ────────────────────────────────────────────────────


class TestRequests:
    def test_headers_and_url(self):
        transport = FakeTransport()
        transport.add("/projects", [])
        _client(transport).list_projects()
        req = transport.requests[0]
        assert req["path"] == "/projects"
        assert req["headers"]["Authorization"] == "Bearer tok"
        assert req["headers"]["Accept"] == "application/json"
        assert req["headers"]["User-agent"].startswith("coolctl/")
        assert req["timeout"] == 5

    def test_missing_token_does_no_io(self):
        transport = FakeTransport()
        with pytest.raises(CoolifyAuthError):
            _client(transport, token="").list_projects()
        assert transport.requests == []

    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_errors(self, status):
        transport = FakeTransport()
        transport.add("/applications", {"message": "Unauthenticated."}, status=status)
        with pytest.raises(CoolifyAuthError) as exc:
            _client(transport).list_applications()
        assert exc.value.status == status

    def test_http_error_includes_detail(self):
        transport = FakeTransport()
        transport.add("/services", {"message": "Server exploded"}, status=500)
        with pytest.raises(CoolifyError, match=r"Request failed \(500\) for /services: Server exploded"):
            _client(transport).list_services()

    def test_network_error(self):
        transport = FakeTransport({("GET", "/databases"): urllib.error.URLError("refused")})
        with pytest.raises(CoolifyError, match="Cannot reach"):
            _client(transport).list_databases()

    def test_invalid_json(self):
        transport = FakeTransport()
        transport.add("/projects", b"{not json")
        with pytest.raises(CoolifyError, match="Invalid JSON"):
            _client(transport).list_projects()

    def test_empty_body(self):
        transport = FakeTransport()
        transport.add("/teams", b"")
        assert _client(transport).list_teams() == []


class TestEndpoints:
    def test_deploy_params(self):
        transport = FakeTransport()
        transport.add("/deploy", {"deployments": [{"message": "Deployment queued."}]})
        message = _client(transport).deploy("a-1", force=True)
        assert message == "Deployment queued."
        assert transport.requests[0]["query"] == {"uuid": "a-1", "force": "true"}

    def test_deploy_without_force(self):
        transport = FakeTransport()
        transport.add("/deploy", {})
        assert _client(transport).deploy("a-1") == ""
        assert transport.requests[0]["query"] == {"uuid": "a-1"}

    def test_logs(self):
        transport = FakeTransport()
        transport.add("/applications/a-1/logs", {"logs": "hello"})
        assert _client(transport).application_logs("a-1", lines=50) == "hello"
        assert transport.requests[0]["query"] == {"lines": "50"}

    def test_plain_text_logs(self):
        transport = FakeTransport()
        transport.add("/applications/a-1/logs", "raw text")
        assert _client(transport).application_logs("a-1") == "raw text"

    def test_misc_paths(self):
        transport = FakeTransport()
        for path in (
            "/projects/p-1/environments",
            "/teams/3/members",
            "/security/keys",
            "/applications/a-1/envs",
            "/services/s-1/envs",
        ):
            transport.add(path, [])
        client = _client(transport)
        client.project_environments("p-1")
        client.team_members(3)
        client.list_private_keys()
        client.resource_envs("application", "a-1")
        client.resource_envs("service", "s-1")
        assert transport.paths() == [
            "/projects/p-1/environments",
            "/teams/3/members",
            "/security/keys",
            "/applications/a-1/envs",
            "/services/s-1/envs",
        ]

    def test_envs_rejects_databases(self):
        with pytest.raises(ValueError):
            _client(FakeTransport()).resource_envs("database", "d-1")
