"""
Deployment list logic — environment resolution, filters, ordering.

Deployment records only reference their application, so the
environment is found through the application list first and through
the deployment's own ``environment_id``/``environment_uuid`` second.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable, Sequence

from coolctl.core.services.filters import (
    ENV_PREFIX,
    FILTER_ALL,
    PROJECT_PREFIX,
    STATUS_PREFIX,
    matches_search,
)
from coolctl.core.services.identifiers import first_present, to_id

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = frozenset({"running", "queued", "pending"})


def build_app_env_map(applications: Iterable[dict[str, Any]]) -> dict[str, str]:
    """Application id and uuid → environment key."""
    mapping: dict[str, str] = {}
    for app in applications:
        env_id = to_id(first_present(app.get("environment_id"), app.get("environment_uuid")))
        if not env_id:
            continue
        if app.get("id") is not None:
            mapping[str(app["id"])] = env_id
        if app.get("uuid"):
            mapping[str(app["uuid"])] = env_id
    return mapping


def build_app_lookup(applications: Iterable[dict[str, Any]]) -> dict[str, dict[str, Any]]:
    """Application id and uuid → application record."""
    mapping: dict[str, dict[str, Any]] = {}
    for app in applications:
        if app.get("id") is not None:
            mapping[str(app["id"])] = app
        if app.get("uuid"):
            mapping[str(app["uuid"])] = app
    return mapping


def resolve_app_key(deployment: dict[str, Any]) -> str:
    value = first_present(
        deployment.get("source_app_uuid"),
        deployment.get("application_uuid"),
        deployment.get("application_id"),
    )
    return "" if value is None else str(value)


def resolve_env_id(deployment: dict[str, Any], app_env_map: dict[str, str]) -> str:
    from_app = app_env_map.get(resolve_app_key(deployment))
    if from_app:
        return from_app
    direct = to_id(first_present(deployment.get("environment_id"), deployment.get("environment_uuid")))
    return direct or ""


def is_active(deployment: dict[str, Any]) -> bool:
    return (deployment.get("status") or "").lower() in ACTIVE_STATUSES


def filter_deployments(
    items: Sequence[dict[str, Any]],
    token: str,
    env_to_project: dict[str, str],
    env_name_to_ids: dict[str, set[str]],
    app_env_map: dict[str, str],
) -> list[dict[str, Any]]:
    if token == FILTER_ALL:
        return list(items)
    if token == f"{STATUS_PREFIX}active":
        return [d for d in items if is_active(d)]
    if token.startswith(PROJECT_PREFIX):
        project_id = token[len(PROJECT_PREFIX):]
        return [
            d for d in items
            if env_to_project.get(resolve_env_id(d, app_env_map)) == project_id
        ]
    if token.startswith(ENV_PREFIX):
        env_ids = env_name_to_ids.get(token[len(ENV_PREFIX):])
        if not env_ids:
            return []
        return [d for d in items if resolve_env_id(d, app_env_map) in env_ids]
    return list(items)


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an API timestamp (ISO 8601, ``Z`` suffix allowed)."""
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unparseable timestamp: %r", value)
        return None


def _epoch(deployment: dict[str, Any]) -> float:
    ts = parse_timestamp(deployment.get("created_at"))
    return ts.timestamp() if ts else 0.0


def sort_deployments(items: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
    """Newest first; deployments without ``created_at`` sink to the end."""
    return sorted(items, key=_epoch, reverse=True)


def search_deployments(items: Sequence[dict[str, Any]], text: str) -> list[dict[str, Any]]:
    return [
        d for d in items
        if matches_search(
            (d.get("application_name"), d.get("commit_message"), d.get("commit"), d.get("status")),
            text,
        )
    ]


def deployment_title(deployment: dict[str, Any]) -> str:
    return deployment.get("commit_message") or deployment.get("commit") or "No commit message"


def status_label(app: dict[str, Any]) -> str | None:
    """Coarse application status: failed, ready, queued or the raw value."""
    raw = (
        app.get("status") or app.get("deployment_status") or app.get("last_deployment_status") or ""
    ).lower()
    if not raw:
        return None
    if "fail" in raw or "error" in raw:
        return "failed"
    if "running" in raw or "ready" in raw or "success" in raw:
        return "ready"
    if "queue" in raw or "pending" in raw or "building" in raw:
        return "queued"
    return raw
