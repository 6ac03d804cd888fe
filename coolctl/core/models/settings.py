"""
Settings model — where the Coolify instance is and how to talk to it.

Loaded from ``coolctl.yml`` (or the user config file) and overlaid with
``COOLIFY_*`` environment variables by :mod:`coolctl.core.config.loader`.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Connection and display settings."""

    api_url: str = ""
    api_token: str = ""
    timeout: float = Field(default=30.0, gt=0)
    cache_ttl: float = Field(default=0.0, ge=0)
    deployments_take: int = Field(default=20, ge=1)
    log_lines: int = Field(default=1000, ge=1)

    @property
    def token(self) -> str:
        return self.api_token.strip()

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    def to_dict(self, reveal_token: bool = False) -> dict:
        data = self.model_dump()
        if not reveal_token:
            data["api_token"] = "***" if self.has_token else ""
        return data
