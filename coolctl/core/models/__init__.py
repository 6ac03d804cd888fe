"""
Domain models.

    from coolctl.core.models import ProjectEnvironment, ResourceItem, ResourceType, Settings
"""

from coolctl.core.models.environment import ProjectEnvironment
from coolctl.core.models.resource import ResourceItem, ResourceType, type_rank
from coolctl.core.models.settings import Settings

__all__ = [
    "ProjectEnvironment",
    "ResourceItem",
    "ResourceType",
    "Settings",
    "type_rank",
]
