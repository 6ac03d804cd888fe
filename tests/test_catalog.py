"""
Tests for the catalog and actions use cases.
"""

import pytest

from coolctl.adapters.coolify.client import CoolifyError
from coolctl.core.use_cases.actions import application_logs, environment_variables, redeploy
from coolctl.core.use_cases.catalog import (
    fetch_project_environments,
    load_catalog,
    resource_filter_options,
    resource_view,
)

INSTANCE = "https://coolify.example.com"


class TestLoadCatalog:
    def test_joins_everything(self, client, cache):
        catalog = load_catalog(client, cache)
        assert catalog.ok
        assert len(catalog.projects) == 2
        assert len(catalog.resources) == 4
        assert catalog.index.env_to_project["20"] == "2"

    def test_partial_failure(self, client, cache, transport):
        transport.add("/services", {"message": "nope"}, status=500)
        catalog = load_catalog(client, cache)
        assert not catalog.ok
        assert "services" in catalog.errors
        assert [r.name for r in catalog.resources] == ["web", "blog", "postgres"]

    def test_stale_data_on_refetch_failure(self, client, cache, transport):
        load_catalog(client, cache)
        transport.add("/applications", {"message": "down"}, status=502)
        catalog = load_catalog(client, cache)
        assert "applications" in catalog.stale
        assert "applications" in catalog.errors
        assert len(catalog.applications) == 2

    def test_collections_subset(self, client, cache, transport):
        catalog = load_catalog(client, cache, collections=("databases",))
        assert [r.name for r in catalog.resources] == ["postgres"]
        assert "/applications" not in transport.paths()

    def test_environments_fetched_when_not_embedded(self, client, cache, transport):
        transport.add("/projects", [{"id": 7, "uuid": "p-7", "name": "Lean"}])
        transport.add("/projects/p-7/environments", [{"id": 70, "uuid": "e-70", "name": "dev"}])
        catalog = load_catalog(client, cache)
        assert catalog.index.env_to_project == {"70": "7"}
        assert catalog.index.project_name_for("70") == "Lean"

    def test_fetch_project_environments_keeps_embedded(self, client, cache, transport, projects_payload):
        tree = fetch_project_environments(client, cache, projects_payload)
        assert tree == projects_payload
        assert transport.requests == []


class TestResourceView:
    def test_grouped_and_filtered(self, client, cache):
        catalog = load_catalog(client, cache)
        view = resource_view(catalog, token="env:production")
        assert view.total == 4
        assert view.count == 3
        assert [g.project_name for g in view.groups] == ["Blog", "Shop"]
        data = view.to_dict()
        assert data["groups"][0]["resources"][0]["name"] == "blog"
        assert data["groups"][0]["resources"][0]["environment"] == "production"

    def test_search(self, client, cache):
        catalog = load_catalog(client, cache)
        view = resource_view(catalog, search="postgres")
        assert view.count == 1

    def test_links(self, client, cache):
        catalog = load_catalog(client, cache)
        item = catalog.find_resource("a-web")
        links = catalog.resource_links(item, INSTANCE)
        base = f"{INSTANCE}/project/p-shop/environment/e-shop-prod"
        assert links["environment"] == base
        assert links["resource"] == f"{base}/application/a-web"
        assert links["console_logs"] == f"{base}/application/a-web/logs"
        assert links["application"] == "https://shop.example.com"
        assert catalog.find_resource("missing") is None

    def test_filter_options(self, client, cache):
        catalog = load_catalog(client, cache)
        tokens = [t for _, t in resource_filter_options(catalog)]
        assert tokens[0] == "all"
        assert "type:database" in tokens


class TestActions:
    def test_redeploy(self, client, transport):
        transport.add("/deploy", {"deployments": [{"message": "Deployment request queued."}]})
        result = redeploy(client, "a-web", force=True)
        assert result.ok
        assert result.message == "Deployment request queued."

    def test_redeploy_default_message(self, client, transport):
        transport.add("/deploy", b"")
        assert redeploy(client, "a-web").message == "Redeploy triggered"
        assert redeploy(client, "a-web", force=True).message == "Force redeploy triggered"

    def test_redeploy_failure(self, client, transport):
        transport.add("/deploy", {"message": "Resource not found"}, status=404)
        result = redeploy(client, "x")
        assert not result.ok
        assert result.error.startswith("Failed to redeploy:")
        assert result.to_dict() == {"ok": False, "error": result.error}

    def test_logs(self, client, transport):
        transport.add("/applications/a-web/logs", {"logs": "hello"})
        assert application_logs(client, "a-web", lines=10) == "hello"

    def test_logs_error_propagates(self, client, transport):
        transport.add("/applications/a-web/logs", {"message": "x"}, status=500)
        with pytest.raises(CoolifyError) as exc:
            application_logs(client, "a-web")
        assert exc.value.status == 500

    def test_environment_variables(self, client, transport):
        transport.add("/services/s-1/envs", [{"key": "B"}, {"key": "A"}])
        assert [v["key"] for v in environment_variables(client, "service", "s-1")] == ["B", "A"]
