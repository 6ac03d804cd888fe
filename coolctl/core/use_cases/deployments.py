"""
Deployments use case — recent deployments of every application.

Deployments are listed per application (``/deployments/applications/{uuid}``),
so one request per application runs in parallel and the results are
merged, tagged with the application they were fetched for.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field
from typing import Any

from coolctl.adapters.coolify.client import CoolifyClient
from coolctl.core.services.deployments import (
    build_app_env_map,
    build_app_lookup,
    deployment_title,
    filter_deployments,
    resolve_app_key,
    resolve_env_id,
    search_deployments,
    sort_deployments,
)
from coolctl.core.services.fetch_cache import FetchCache
from coolctl.core.services.filters import filter_options
from coolctl.core.services.urls import (
    console_logs_url,
    deployment_url,
    environment_url,
    is_http_url,
    resolve_deploy_url,
)
from coolctl.core.use_cases.catalog import Catalog, cached_list

logger = logging.getLogger(__name__)


@dataclass
class DeploymentRow:
    """One deployment, joined with its application and environment."""

    title: str
    status: str
    application: str
    deployment_uuid: str | None = None
    application_uuid: str = ""
    environment: str = ""
    project: str = ""
    branch: str = ""
    commit: str | None = None
    created_at: str | None = None
    server: str | None = None
    coolify_url: str | None = None
    application_url: str | None = None
    deploy_url: str | None = None
    logs_url: str | None = None
    console_logs_url: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DeploymentView:
    rows: list[DeploymentRow] = field(default_factory=list)
    filter_token: str = "all"
    search: str = ""
    total: int = 0
    errors: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "filter": self.filter_token,
            "search": self.search,
            "total": self.total,
            "count": len(self.rows),
            "deployments": [r.to_dict() for r in self.rows],
            "errors": self.errors,
        }


def fetch_deployments(
    client: CoolifyClient,
    cache: FetchCache,
    catalog: Catalog,
    *,
    take: int = 20,
    force: bool = False,
) -> list[dict[str, Any]]:
    """Recent deployments of every application, tagged with ``source_app_uuid``."""
    uuids = [str(a["uuid"]) for a in catalog.applications if a.get("uuid")]
    if not uuids:
        return []

    def load(uuid: str) -> list[dict[str, Any]]:
        rows = cached_list(
            cache, ("deployments", uuid, take),
            lambda: client.application_deployments(uuid, take=take),
            name=f"deployments:{uuid}", force=force, catalog=catalog,
        )
        return [{**row, "source_app_uuid": uuid} for row in rows]

    merged: list[dict[str, Any]] = []
    with ThreadPoolExecutor(max_workers=min(8, len(uuids))) as pool:
        for rows in pool.map(load, uuids):
            merged.extend(rows)
    logger.debug("Fetched %d deployments across %d applications", len(merged), len(uuids))
    return merged


def _links(url: str | None) -> str | None:
    return url if is_http_url(url) else None


def build_row(
    deployment: dict[str, Any],
    catalog: Catalog,
    instance: str,
    app_env_map: dict[str, str],
    app_lookup: dict[str, dict[str, Any]],
) -> DeploymentRow:
    app_key = resolve_app_key(deployment)
    app = app_lookup.get(app_key, {})
    env_id = resolve_env_id(deployment, app_env_map)
    env = catalog.index.environment(env_id)
    project_uuid = env.project_uuid if env else None
    env_uuid = env.uuid if env else None
    application_uuid = str(
        app.get("uuid") or deployment.get("source_app_uuid") or deployment.get("application_uuid") or ""
    )

    env_link = environment_url(instance, project_uuid, env_uuid)
    app_link = (
        f"{env_link}/application/{application_uuid}"
        if project_uuid and env_uuid and application_uuid else env_link
    )
    logs = deployment.get("logs")

    return DeploymentRow(
        title=deployment_title(deployment),
        status=deployment.get("status") or "unknown",
        application=(
            deployment.get("application_name") or deployment.get("name") or app.get("name") or "Application"
        ),
        deployment_uuid=deployment.get("deployment_uuid"),
        application_uuid=application_uuid,
        environment=catalog.index.env_name_map.get(env_id, ""),
        project=env.project_name if env else "",
        branch=app.get("git_branch") or "",
        commit=deployment.get("commit"),
        created_at=deployment.get("created_at"),
        server=deployment.get("server_name"),
        coolify_url=_links(deployment_url(
            instance, project_uuid, env_uuid, application_uuid, deployment.get("deployment_uuid"),
        )),
        application_url=_links(app_link),
        deploy_url=_links(resolve_deploy_url(deployment.get("deployment_url"), instance)),
        logs_url=_links(resolve_deploy_url(logs, instance) if isinstance(logs, str) else None),
        console_logs_url=_links(console_logs_url(instance, project_uuid, env_uuid, application_uuid)),
    )


def deployment_view(
    deployments: list[dict[str, Any]],
    catalog: Catalog,
    instance: str,
    token: str = "all",
    search: str = "",
) -> DeploymentView:
    """Filter, sort (newest first) and search deployments, then join them."""
    app_env_map = build_app_env_map(catalog.applications)
    app_lookup = build_app_lookup(catalog.applications)

    items = filter_deployments(
        deployments, token,
        catalog.index.env_to_project, catalog.index.env_name_to_ids, app_env_map,
    )
    items = search_deployments(sort_deployments(items), search)
    return DeploymentView(
        rows=[build_row(d, catalog, instance, app_env_map, app_lookup) for d in items],
        filter_token=token,
        search=search,
        total=len(deployments),
        errors=dict(catalog.errors),
    )


def deployment_filter_options(catalog: Catalog) -> list[tuple[str, str]]:
    return filter_options(catalog.projects, catalog.index, include_types=False, include_active=True)
