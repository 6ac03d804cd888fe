"""
Resource aggregation — applications, services and databases as one list.

Each API collection has its own field names; the mappers below reduce
them to :class:`ResourceItem`.  Output order is all applications, then
services, then databases, each in input order.  Sorting is a separate
concern (see ``filters.sort_resources``).
"""

from __future__ import annotations

from typing import Any, Iterable

from coolctl.core.models.resource import ResourceItem, ResourceType
from coolctl.core.services.identifiers import first_present, to_id, to_key

SUBTITLE_SEPARATOR = " • "


def _item_id(record: dict[str, Any], placeholder: str) -> str:
    for candidate in (record.get("id"), record.get("uuid"), record.get("name")):
        key = to_id(candidate)
        if key:
            return key
    return placeholder


def _env_ref(record: dict[str, Any]) -> str:
    return to_key(first_present(record.get("environment_id"), record.get("environment_uuid")))


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text or None


def primary_url(fqdn: Any) -> str | None:
    """First host of a comma-separated ``fqdn`` field as an absolute URL."""
    if not fqdn or not isinstance(fqdn, str):
        return None
    raw = fqdn.split(",")[0].strip()
    if not raw:
        return None
    if raw.startswith(("http://", "https://")):
        return raw
    return f"https://{raw}"


def application_item(app: dict[str, Any]) -> ResourceItem:
    url = primary_url(app.get("fqdn"))
    parts = [p for p in (app.get("git_branch"), url) if p]
    return ResourceItem(
        id=_item_id(app, "app"),
        type=ResourceType.APPLICATION,
        name=app.get("name") or "Unnamed Application",
        subtitle=SUBTITLE_SEPARATOR.join(str(p) for p in parts),
        environment_id=_env_ref(app),
        uuid=_text(app.get("uuid")),
        repo=_text(app.get("git_repository")),
        url=url,
        status=_text(first_present(
            app.get("status"), app.get("deployment_status"), app.get("last_deployment_status"),
        )),
    )


def service_item(service: dict[str, Any]) -> ResourceItem:
    return ResourceItem(
        id=_item_id(service, "service"),
        type=ResourceType.SERVICE,
        name=service.get("name") or "Unnamed Service",
        subtitle=service.get("description") or "",
        environment_id=_env_ref(service),
        uuid=_text(service.get("uuid")),
        kind=_text(service.get("service_type")),
        status=_text(service.get("status")),
    )


def database_item(database: dict[str, Any]) -> ResourceItem:
    return ResourceItem(
        id=_item_id(database, "db"),
        type=ResourceType.DATABASE,
        name=database.get("name") or "Unnamed Database",
        subtitle=database.get("description") or "",
        environment_id=_env_ref(database),
        uuid=_text(database.get("uuid")),
        kind=_text(first_present(database.get("db_type"), database.get("database_type"))),
        status=_text(database.get("status")),
    )


def build_resources(
    applications: Iterable[dict[str, Any]] | None,
    services: Iterable[dict[str, Any]] | None,
    databases: Iterable[dict[str, Any]] | None,
) -> list[ResourceItem]:
    """Merge the three collections: applications, services, databases."""
    items: list[ResourceItem] = []
    items.extend(application_item(a) for a in applications or [] if isinstance(a, dict))
    items.extend(service_item(s) for s in services or [] if isinstance(s, dict))
    items.extend(database_item(d) for d in databases or [] if isinstance(d, dict))
    return items
