"""
Response-shape decoding at the API boundary.

List endpoints answer with one of three shapes depending on the
Coolify version and endpoint:

    [ {...}, ... ]                     bare array
    {"data": [ {...}, ... ]}           wrapped in ``data``
    {"deployments": [ {...}, ... ]}    wrapped in ``deployments``

:func:`decode_list` reduces all of them to a list of dicts so nothing
past this module ever checks the shape again.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

_WRAPPER_KEYS = ("deployments", "data")


def _records(items: list) -> list[dict[str, Any]]:
    return [item for item in items if isinstance(item, dict)]


def decode_list(payload: Any) -> list[dict[str, Any]]:
    """Normalize a list response to ``list[dict]`` (``[]`` if unrecognized)."""
    if isinstance(payload, list):
        return _records(payload)
    if isinstance(payload, dict):
        for key in _WRAPPER_KEYS:
            value = payload.get(key)
            if isinstance(value, list):
                return _records(value)
        logger.debug("Unrecognized list envelope with keys %s", sorted(payload))
        return []
    if payload is not None:
        logger.debug("Unexpected list payload type: %s", type(payload).__name__)
    return []


def decode_logs(payload: Any) -> str:
    """Application logs arrive as plain text or as ``{"logs": "..."}``."""
    if isinstance(payload, str):
        return payload
    if isinstance(payload, dict):
        logs = payload.get("logs")
        return logs if isinstance(logs, str) else ""
    return ""


def decode_message(payload: Any) -> str:
    """Human-readable message from a mutation response (deploy, restart)."""
    if isinstance(payload, dict):
        for key in ("message", "error"):
            if isinstance(payload.get(key), str):
                return payload[key]
        deployments = payload.get("deployments")
        if isinstance(deployments, list) and deployments:
            first = deployments[0]
            if isinstance(first, dict) and isinstance(first.get("message"), str):
                return first["message"]
    if isinstance(payload, str):
        return payload
    return ""
