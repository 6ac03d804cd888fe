"""
Environment model — one deployment context with its project context.

Produced by :func:`coolctl.core.services.environments.flatten_environments`
from a project list.  The original API record is kept verbatim in
``raw`` so views can reach fields this model does not name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from coolctl.core.services.identifiers import canonical_id

UNNAMED_ENVIRONMENT = "Unnamed Environment"
UNNAMED_PROJECT = "Unnamed Project"


@dataclass(frozen=True)
class ProjectEnvironment:
    """An environment annotated with its owning project.

    Attributes:
        raw: Copy of every field of the API record.
        project_id: Canonical id of the owning project (owning project's
            id/uuid, else the record's own ``project_id``/``project_uuid``).
        project_uuid: Owning project's uuid, verbatim.  Used for URLs.
        project_name: Owning project's display name.
    """

    raw: dict[str, Any] = field(default_factory=dict)
    project_id: str | None = None
    project_uuid: str | None = None
    project_name: str = UNNAMED_PROJECT

    @property
    def id(self) -> Any:
        return self.raw.get("id")

    @property
    def uuid(self) -> str | None:
        value = self.raw.get("uuid")
        return str(value) if value is not None else None

    @property
    def name(self) -> str:
        name = self.raw.get("name")
        return name if name is not None else UNNAMED_ENVIRONMENT

    @property
    def key(self) -> str | None:
        """Canonical environment id (id, then uuid)."""
        return canonical_id(self.raw, "id", "uuid")

    def get(self, name: str, default: Any = None) -> Any:
        """Read a field of the original API record."""
        return self.raw.get(name, default)

    def to_dict(self) -> dict[str, Any]:
        """Raw fields plus project context (JSON-serializable)."""
        data = dict(self.raw)
        data["project"] = {
            "id": self.project_id,
            "uuid": self.project_uuid,
            "name": self.project_name,
        }
        return data
