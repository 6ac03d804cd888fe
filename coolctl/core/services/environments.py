"""
Environment flattening and lookup indexes.

Projects arrive with (optionally) embedded environment lists.  Views
need the reverse direction: given a resource's ``environment_id``,
which environment is it and which project owns it?  So the project
tree is flattened once and four indexes are derived from the flat list:

    env_to_project    env key → canonical project id
    env_name_map      env key → display name
    env_lookup        env key → ProjectEnvironment
    env_name_to_ids   display name → set of env keys

Environment names are not unique across projects ("production" exists
in most of them), hence the multimap.  Records without a usable id are
left out of every index.  All indexes are rebuilt as a unit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from coolctl.core.models.environment import (
    UNNAMED_PROJECT,
    ProjectEnvironment,
)
from coolctl.core.services.identifiers import canonical_id, first_present, to_id

logger = logging.getLogger(__name__)


# ── Flattening ──────────────────────────────────────────────────


def project_key(project: dict[str, Any]) -> str | None:
    """Canonical project id (id, then uuid)."""
    return canonical_id(project, "id", "uuid")


def project_display_name(project: dict[str, Any]) -> str:
    name = project.get("name")
    return name if name is not None else UNNAMED_PROJECT


def _embedded_environments(project: dict[str, Any]) -> list[dict[str, Any]]:
    envs = project.get("environments")
    if not isinstance(envs, list):
        return []
    return [e for e in envs if isinstance(e, dict)]


def flatten_environments(projects: Iterable[dict[str, Any]] | None) -> list[ProjectEnvironment]:
    """Flatten a project tree into environments with project context.

    Output order is project order, then environment order.  The owning
    project's id wins over any project reference carried by the
    environment record itself; that reference is only used when the
    project has no usable id.
    """
    items: list[ProjectEnvironment] = []

    for project in projects or []:
        if not isinstance(project, dict):
            continue
        pid = project_key(project)
        puuid = project.get("uuid")
        project_uuid = str(puuid) if puuid else None
        project_name = project_display_name(project)

        for env in _embedded_environments(project):
            owner = pid
            if owner is None:
                owner = canonical_id(env, "project_id", "project_uuid")
            items.append(ProjectEnvironment(
                raw=dict(env),
                project_id=owner,
                project_uuid=project_uuid,
                project_name=project_name,
            ))

    logger.debug("Flattened %d environments", len(items))
    return items


# ── Lookup builders ─────────────────────────────────────────────


def build_env_to_project_map(envs: Iterable[ProjectEnvironment]) -> dict[str, str]:
    """env key → canonical project id."""
    mapping: dict[str, str] = {}
    for env in envs:
        env_id = env.key
        project_id = to_id(first_present(
            env.project_id, env.get("project_uuid"), env.get("project_id"),
        ))
        if env_id and project_id:
            mapping[env_id] = project_id
    return mapping


def build_env_name_map(envs: Iterable[ProjectEnvironment]) -> dict[str, str]:
    """env key → environment display name."""
    mapping: dict[str, str] = {}
    for env in envs:
        env_id = env.key
        if env_id:
            mapping[env_id] = env.name
    return mapping


def build_env_lookup(envs: Iterable[ProjectEnvironment]) -> dict[str, ProjectEnvironment]:
    """env key → full environment record."""
    mapping: dict[str, ProjectEnvironment] = {}
    for env in envs:
        env_id = env.key
        if env_id:
            mapping[env_id] = env
    return mapping


def build_env_name_to_ids_map(envs: Iterable[ProjectEnvironment]) -> dict[str, set[str]]:
    """environment display name → every env key carrying that name."""
    mapping: dict[str, set[str]] = {}
    for env in envs:
        env_id = env.key
        if not env_id:
            continue
        mapping.setdefault(env.name, set()).add(env_id)
    return mapping


@dataclass(frozen=True)
class EnvironmentIndex:
    """All four lookups, built together from one flattened list."""

    environments: list[ProjectEnvironment] = field(default_factory=list)
    env_to_project: dict[str, str] = field(default_factory=dict)
    env_name_map: dict[str, str] = field(default_factory=dict)
    env_lookup: dict[str, ProjectEnvironment] = field(default_factory=dict)
    env_name_to_ids: dict[str, set[str]] = field(default_factory=dict)

    @classmethod
    def build(cls, envs: Iterable[ProjectEnvironment] | None) -> EnvironmentIndex:
        items = list(envs or [])
        return cls(
            environments=items,
            env_to_project=build_env_to_project_map(items),
            env_name_map=build_env_name_map(items),
            env_lookup=build_env_lookup(items),
            env_name_to_ids=build_env_name_to_ids_map(items),
        )

    def environment(self, env_id: str) -> ProjectEnvironment | None:
        return self.env_lookup.get(env_id)

    def project_name_for(self, env_id: str, default: str = "Unassigned") -> str:
        env = self.env_lookup.get(env_id)
        return env.project_name if env is not None else default

    def env_name_for(self, env_id: str, default: str = "Unknown") -> str:
        return self.env_name_map.get(env_id, default)

    def environment_names(self) -> list[str]:
        """Distinct environment names, in first-seen order."""
        return list(self.env_name_to_ids)
