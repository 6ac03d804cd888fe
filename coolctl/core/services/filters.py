"""
Filter tokens, search and ordering for resource lists.

Filter tokens (one at a time, as chosen from the filter dropdown):

    all               everything
    project:<id>      items whose environment belongs to project <id>
    env:<name>        items in any environment called <name>
    type:<kind>       application | service | database
    status:<value>    items whose status equals <value> (case-insensitive)

Unknown tokens behave like ``all``.  ``env:`` with an unknown name
matches nothing.
"""

from __future__ import annotations

import locale
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from coolctl.core.models.resource import ResourceItem, ResourceType, type_rank
from coolctl.core.services.environments import (
    EnvironmentIndex,
    project_display_name,
    project_key,
)

FILTER_ALL = "all"
PROJECT_PREFIX = "project:"
ENV_PREFIX = "env:"
TYPE_PREFIX = "type:"
STATUS_PREFIX = "status:"


def apply_filter(
    items: Sequence[ResourceItem],
    token: str,
    env_to_project: dict[str, str],
    env_name_to_ids: dict[str, set[str]],
) -> list[ResourceItem]:
    """Apply one filter token to a resource list (order preserved)."""
    if token == FILTER_ALL:
        return list(items)

    if token.startswith(PROJECT_PREFIX):
        project_id = token[len(PROJECT_PREFIX):]
        return [
            item for item in items
            if env_to_project.get(item.environment_id) == project_id
        ]

    if token.startswith(ENV_PREFIX):
        env_ids = env_name_to_ids.get(token[len(ENV_PREFIX):])
        if not env_ids:
            return []
        return [item for item in items if item.environment_id in env_ids]

    if token.startswith(TYPE_PREFIX):
        wanted = token[len(TYPE_PREFIX):]
        return [item for item in items if item.type == wanted]

    if token.startswith(STATUS_PREFIX):
        wanted = token[len(STATUS_PREFIX):].lower()
        return [item for item in items if (item.status or "").lower() == wanted]

    return list(items)


def matches_search(values: Iterable[Any], text: str) -> bool:
    """Case-insensitive substring match over the non-empty *values*."""
    needle = text.strip().lower()
    if not needle:
        return True
    haystack = " ".join(str(v) for v in values if v).lower()
    return needle in haystack


def search_resources(items: Sequence[ResourceItem], text: str) -> list[ResourceItem]:
    return [
        item for item in items
        if matches_search((item.name, item.subtitle, item.repo, item.kind, item.type.value), text)
    ]


# ── Ordering & grouping ─────────────────────────────────────────


def collate(text: str) -> tuple[str, str]:
    """Locale-aware, case-insensitive sort key for display names.

    Casefolding first keeps "alpha" ahead of "Zeta" even under the C
    locale, where ``strxfrm`` is a plain codepoint comparison.  The raw
    text breaks ties between names that differ only in case.
    """
    return locale.strxfrm(text.casefold()), text


def sort_resources(items: Sequence[ResourceItem], index: EnvironmentIndex) -> list[ResourceItem]:
    """Stable sort by project name, environment name, type, item name."""
    def key(item: ResourceItem) -> tuple:
        env_id = item.environment_id
        return (
            collate(index.project_name_for(env_id)),
            collate(index.env_name_for(env_id)),
            type_rank(item.type),
            collate(item.name),
        )

    return sorted(items, key=key)


@dataclass
class ResourceEntry:
    item: ResourceItem
    project_name: str
    env_name: str


@dataclass
class ResourceGroup:
    """One project section of the grouped resources view."""

    project_name: str
    entries: list[ResourceEntry] = field(default_factory=list)


def group_by_project(items: Sequence[ResourceItem], index: EnvironmentIndex) -> list[ResourceGroup]:
    """Sort *items* and split them into per-project sections."""
    groups: dict[str, ResourceGroup] = {}
    for item in sort_resources(items, index):
        project_name = index.project_name_for(item.environment_id)
        group = groups.get(project_name)
        if group is None:
            group = groups[project_name] = ResourceGroup(project_name=project_name)
        group.entries.append(ResourceEntry(
            item=item,
            project_name=project_name,
            env_name=index.env_name_for(item.environment_id),
        ))
    return list(groups.values())


# ── Filter choices ──────────────────────────────────────────────


def filter_options(
    projects: Iterable[dict[str, Any]],
    index: EnvironmentIndex,
    *,
    include_types: bool = True,
    include_active: bool = False,
) -> list[tuple[str, str]]:
    """(title, token) pairs offered by a list's filter dropdown."""
    options: list[tuple[str, str]] = [("All", FILTER_ALL)]
    if include_active:
        options.append(("Active (Running/Queued)", f"{STATUS_PREFIX}active"))
    for project in projects:
        if not isinstance(project, dict):
            continue
        pid = project_key(project)
        if pid:
            options.append((project_display_name(project), f"{PROJECT_PREFIX}{pid}"))
    for name in index.environment_names():
        options.append((name, f"{ENV_PREFIX}{name}"))
    if include_types:
        options.extend([
            ("Applications", f"{TYPE_PREFIX}{ResourceType.APPLICATION}"),
            ("Services", f"{TYPE_PREFIX}{ResourceType.SERVICE}"),
            ("Databases", f"{TYPE_PREFIX}{ResourceType.DATABASE}"),
        ])
    return options
