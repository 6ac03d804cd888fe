"""
Tests for resource aggregation.
"""

from coolctl.core.models.resource import ResourceType
from coolctl.core.services.resources import (
    application_item,
    build_resources,
    database_item,
    primary_url,
    service_item,
)


class TestBuildResources:
    def test_order_apps_services_databases(self, applications_payload, services_payload, databases_payload):
        items = build_resources(applications_payload, services_payload, databases_payload)
        assert [i.type for i in items] == [
            ResourceType.APPLICATION,
            ResourceType.APPLICATION,
            ResourceType.SERVICE,
            ResourceType.DATABASE,
        ]
        assert len(items) == 4

    def test_missing_collections(self):
        assert build_resources(None, None, None) == []
        items = build_resources(None, [{"id": 1}], None)
        assert len(items) == 1

    def test_skips_non_dicts(self):
        assert build_resources([None, "x"], [], [1]) == []

    def test_ids_never_empty(self):
        items = build_resources([{}], [{}], [{}])
        assert [i.id for i in items] == ["app", "service", "db"]
        assert all(i.environment_id == "" for i in items)


class TestApplicationItem:
    def test_fields(self, applications_payload):
        item = application_item(applications_payload[0])
        assert item.id == "100"
        assert item.uuid == "a-web"
        assert item.environment_id == "10"
        assert item.repo == "acme/shop"
        assert item.url == "https://shop.example.com"
        assert item.subtitle == "main • https://shop.example.com"
        assert item.status == "running:healthy"

    def test_id_fallback_order(self):
        assert application_item({"uuid": "u", "name": "n"}).id == "u"
        assert application_item({"name": "n"}).id == "n"
        assert application_item({"id": " ", "uuid": "u"}).id == "u"

    def test_environment_uuid_fallback(self):
        assert application_item({"environment_uuid": "e-u"}).environment_id == "e-u"

    def test_status_fallbacks(self):
        assert application_item({"deployment_status": "queued"}).status == "queued"
        assert application_item({"last_deployment_status": "failed"}).status == "failed"
        assert application_item({}).status is None

    def test_defaults(self):
        item = application_item({})
        assert item.name == "Unnamed Application"
        assert item.subtitle == ""
        assert item.url is None

    def test_fqdn_first_host(self):
        assert application_item({"fqdn": "a.com,b.com"}).url == "https://a.com"


class TestServiceAndDatabase:
    def test_service(self, services_payload):
        item = service_item(services_payload[0])
        assert item.kind == "plausible"
        assert item.environment_id == "20"
        assert item.url is None

    def test_database_kind_fallback(self, databases_payload):
        item = database_item(databases_payload[0])
        assert item.id == "d-pg"
        assert item.kind == "standalone-postgresql"
        assert database_item({"db_type": "redis"}).kind == "redis"

    def test_default_names(self):
        assert service_item({}).name == "Unnamed Service"
        assert database_item({}).name == "Unnamed Database"


class TestPrimaryUrl:
    def test_cases(self):
        assert primary_url("a.com, b.com") == "https://a.com"
        assert primary_url("http://a.com") == "http://a.com"
        assert primary_url("") is None
        assert primary_url(None) is None
        assert primary_url(",b.com") is None
