"""
Mutating and one-shot actions — redeploy, logs, environment variables.

Redeploys do not touch cached list data; lists pick up the new status
on their next fetch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from coolctl.adapters.coolify.client import CoolifyClient, CoolifyError

logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    ok: bool
    message: str = ""
    error: str = ""

    def to_dict(self) -> dict:
        result: dict[str, Any] = {"ok": self.ok}
        if self.message:
            result["message"] = self.message
        if self.error:
            result["error"] = self.error
        return result


def redeploy(client: CoolifyClient, uuid: str, force: bool = False) -> ActionResult:
    """Trigger a redeploy of the resource *uuid*."""
    label = "Force redeploy" if force else "Redeploy"
    try:
        message = client.deploy(uuid, force=force)
    except CoolifyError as e:
        logger.warning("%s of %s failed: %s", label, uuid, e)
        return ActionResult(ok=False, error=f"Failed to {label.lower()}: {e}")
    return ActionResult(ok=True, message=message or f"{label} triggered")


def application_logs(client: CoolifyClient, uuid: str, lines: int = 100) -> str:
    """Last *lines* of an application's logs ("" when none were returned).

    Raises:
        CoolifyError: If the request fails.
    """
    logs = client.application_logs(uuid, lines=lines)
    logger.debug("Fetched %d bytes of logs for %s", len(logs), uuid)
    return logs


def environment_variables(client: CoolifyClient, resource_type: str, uuid: str) -> list[dict[str, Any]]:
    """Environment variables of an application or service."""
    return client.resource_envs(resource_type, uuid)
