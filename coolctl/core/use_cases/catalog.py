"""
Catalog use case — fetch everything a list view needs, then join it.

Projects, applications, services and databases are fetched in
parallel; environments follow once projects are known.  Any fetch may
fail: its error is recorded in ``Catalog.errors`` and the view is built
from whatever did arrive (or from the cache's last-good copy, flagged
in ``Catalog.stale``).  The derived structures are rebuilt from scratch
every time.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Hashable

from coolctl.adapters.coolify.client import CoolifyClient, CoolifyError
from coolctl.core.models.resource import ResourceItem
from coolctl.core.services.environments import EnvironmentIndex, flatten_environments
from coolctl.core.services.fetch_cache import FetchCache
from coolctl.core.services.filters import (
    ResourceGroup,
    apply_filter,
    filter_options,
    group_by_project,
    search_resources,
)
from coolctl.core.services.resources import build_resources
from coolctl.core.services.urls import console_logs_url, environment_url, resource_url

logger = logging.getLogger(__name__)

COLLECTIONS = ("applications", "services", "databases")


@dataclass
class Catalog:
    """Raw collections plus the joined environment index and resources."""

    projects: list[dict[str, Any]] = field(default_factory=list)
    applications: list[dict[str, Any]] = field(default_factory=list)
    services: list[dict[str, Any]] = field(default_factory=list)
    databases: list[dict[str, Any]] = field(default_factory=list)
    index: EnvironmentIndex = field(default_factory=EnvironmentIndex)
    resources: list[ResourceItem] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)
    stale: set[str] = field(default_factory=set)

    @property
    def ok(self) -> bool:
        return not self.errors

    def find_resource(self, uuid: str) -> ResourceItem | None:
        for item in self.resources:
            if item.uuid == uuid:
                return item
        return None

    def resource_links(self, item: ResourceItem, instance: str) -> dict[str, str | None]:
        """Browser links for one resource (environment, resource, logs, app)."""
        env = self.index.environment(item.environment_id)
        project_uuid = env.project_uuid if env else None
        env_uuid = env.uuid if env else None
        links: dict[str, str | None] = {
            "environment": environment_url(instance, project_uuid, env_uuid),
            "resource": resource_url(instance, project_uuid, env_uuid, item.type.value, item.uuid),
            "application": item.url,
            "console_logs": None,
        }
        if item.type == "application":
            links["console_logs"] = console_logs_url(instance, project_uuid, env_uuid, item.uuid)
        return links


def cached_list(
    cache: FetchCache,
    key: Hashable,
    fetch: Callable[[], list],
    *,
    name: str,
    force: bool,
    catalog: Catalog,
) -> list[dict[str, Any]]:
    try:
        read = cache.get(key, fetch, force=force)
    except CoolifyError as e:
        logger.warning("Fetching %s failed: %s", name, e)
        catalog.errors[name] = str(e)
        return []
    if read.stale:
        catalog.stale.add(name)
        catalog.errors[name] = read.error
    return list(read.value or [])


def fetch_project_environments(
    client: CoolifyClient,
    cache: FetchCache,
    projects: list[dict[str, Any]],
    *,
    force: bool = False,
    catalog: Catalog | None = None,
) -> list[dict[str, Any]]:
    """Return *projects* with an ``environments`` list on each.

    Projects that already embed their environments are used as-is; the
    rest are fetched per project uuid, in parallel.
    """
    catalog = catalog if catalog is not None else Catalog()
    missing = [
        p for p in projects
        if not isinstance(p.get("environments"), list) and p.get("uuid")
    ]
    fetched: dict[str, list[dict[str, Any]]] = {}

    if missing:
        def load(project: dict[str, Any]) -> tuple[str, list[dict[str, Any]]]:
            uuid = str(project["uuid"])
            envs = cached_list(
                cache, ("project_environments", uuid),
                lambda: client.project_environments(uuid),
                name=f"environments:{uuid}", force=force, catalog=catalog,
            )
            return uuid, envs

        with ThreadPoolExecutor(max_workers=min(8, len(missing))) as pool:
            for uuid, envs in pool.map(load, missing):
                fetched[uuid] = envs

    tree: list[dict[str, Any]] = []
    for project in projects:
        if isinstance(project.get("environments"), list):
            tree.append(project)
        else:
            tree.append({**project, "environments": fetched.get(str(project.get("uuid")), [])})
    return tree


def load_catalog(
    client: CoolifyClient,
    cache: FetchCache,
    *,
    collections: tuple[str, ...] = COLLECTIONS,
    force: bool = False,
) -> Catalog:
    """Fetch projects, environments and the requested resource collections."""
    catalog = Catalog()
    fetchers: dict[str, Callable[[], list]] = {
        "projects": client.list_projects,
        "applications": client.list_applications,
        "services": client.list_services,
        "databases": client.list_databases,
    }
    wanted = ["projects", *[c for c in collections if c in fetchers]]

    with ThreadPoolExecutor(max_workers=len(wanted)) as pool:
        futures = {
            name: pool.submit(
                cached_list, cache, name, fetchers[name],
                name=name, force=force, catalog=catalog,
            )
            for name in wanted
        }
        results = {name: future.result() for name, future in futures.items()}

    catalog.projects = results["projects"]
    catalog.applications = results.get("applications", [])
    catalog.services = results.get("services", [])
    catalog.databases = results.get("databases", [])

    tree = fetch_project_environments(client, cache, catalog.projects, force=force, catalog=catalog)
    catalog.index = EnvironmentIndex.build(flatten_environments(tree))
    catalog.resources = build_resources(catalog.applications, catalog.services, catalog.databases)

    logger.info(
        "Catalog: %d projects, %d environments, %d resources (%d errors)",
        len(catalog.projects), len(catalog.index.environments),
        len(catalog.resources), len(catalog.errors),
    )
    return catalog


# ── Resource view ───────────────────────────────────────────────


@dataclass
class ResourceView:
    """The grouped, filtered resources list."""

    groups: list[ResourceGroup] = field(default_factory=list)
    filter_token: str = "all"
    search: str = ""
    total: int = 0
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def count(self) -> int:
        return sum(len(g.entries) for g in self.groups)

    def to_dict(self) -> dict:
        return {
            "filter": self.filter_token,
            "search": self.search,
            "total": self.total,
            "count": self.count,
            "groups": [
                {
                    "project": g.project_name,
                    "resources": [
                        {**e.item.to_dict(), "environment": e.env_name} for e in g.entries
                    ],
                }
                for g in self.groups
            ],
            "errors": self.errors,
        }


def resource_view(catalog: Catalog, token: str = "all", search: str = "") -> ResourceView:
    """Filter, search, sort and group the catalog's resources."""
    items = apply_filter(
        catalog.resources, token,
        catalog.index.env_to_project, catalog.index.env_name_to_ids,
    )
    items = search_resources(items, search)
    return ResourceView(
        groups=group_by_project(items, catalog.index),
        filter_token=token,
        search=search,
        total=len(catalog.resources),
        errors=dict(catalog.errors),
    )


def resource_filter_options(catalog: Catalog, include_types: bool = True) -> list[tuple[str, str]]:
    return filter_options(catalog.projects, catalog.index, include_types=include_types)
