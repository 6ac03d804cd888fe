"""
Resource model — applications, services and databases in one shape.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import StrEnum


class ResourceType(StrEnum):
    """Kinds of deployable resources."""

    APPLICATION = "application"
    SERVICE = "service"
    DATABASE = "database"


# Grouped-view ordering inside an environment
TYPE_RANK: dict[str, int] = {
    ResourceType.APPLICATION: 1,
    ResourceType.SERVICE: 2,
    ResourceType.DATABASE: 3,
}
UNKNOWN_TYPE_RANK = 99


def type_rank(resource_type: str) -> int:
    return TYPE_RANK.get(resource_type, UNKNOWN_TYPE_RANK)


@dataclass
class ResourceItem:
    """One row of the resources list.

    ``id`` is never empty: it falls back through id → uuid → name → a
    per-type placeholder so list keys stay stable.  ``environment_id`` is
    ``""`` when the record has no environment reference.
    """

    id: str
    type: ResourceType
    name: str
    subtitle: str = ""
    environment_id: str = ""
    uuid: str | None = None
    repo: str | None = None
    kind: str | None = None
    url: str | None = None
    status: str | None = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["type"] = self.type.value
        return data
