"""
Configuration loader — reads coolctl.yml into :class:`Settings`.

Lookup order for the file:
    1. explicit ``--config`` path
    2. ``coolctl.yml`` in the current directory or any parent
    3. ``$XDG_CONFIG_HOME/coolctl/config.yml`` (``~/.config/...``)

``COOLIFY_API_URL``, ``COOLIFY_API_TOKEN`` and ``COOLIFY_TIMEOUT``
override whatever the file says.  No file at all is fine: defaults
plus environment.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

import yaml

from coolctl.core.models.settings import Settings

logger = logging.getLogger(__name__)

CONFIG_FILE = "coolctl.yml"
DEFAULT_BASE_URL = "https://app.coolify.io/api/v1"
API_SUFFIX = "/api/v1"

_ENV_OVERRIDES = {
    "COOLIFY_API_URL": "api_url",
    "COOLIFY_API_TOKEN": "api_token",
    "COOLIFY_TIMEOUT": "timeout",
}


class ConfigError(Exception):
    """Raised when the configuration file is invalid or unreadable."""


def user_config_file(env: Mapping[str, str] | None = None) -> Path:
    env = os.environ if env is None else env
    base = env.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "coolctl" / "config.yml"


def find_config_file(
    start_dir: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Path | None:
    """Search for coolctl.yml walking up from *start_dir*, then the user file."""
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    fallback = user_config_file(env)
    return fallback if fallback.is_file() else None


def _read_yaml(path: Path) -> dict:
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading settings from %s", path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The file may wrap everything under a "coolify" key or be flat
    section = data.get("coolify", data)
    if not isinstance(section, dict):
        raise ConfigError(f"'coolify' in {path} must be a mapping")
    return dict(section)


def load_settings(
    path: Path | None = None,
    env: Mapping[str, str] | None = None,
    *,
    search: bool = True,
) -> Settings:
    """Load settings from file + environment.

    Args:
        path: Explicit config path (must exist).
        env: Environment mapping (default: ``os.environ``).
        search: Look for a config file when *path* is None.

    Raises:
        ConfigError: If the file is unreadable or the values are invalid.
    """
    env = os.environ if env is None else env
    data: dict = {}

    if path is None and search:
        path = find_config_file(env=env)
    if path is not None:
        data = _read_yaml(path)

    for var, key in _ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            data[key] = value

    try:
        settings = Settings.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    logger.info("Using Coolify API at %s", normalize_base_url(settings.api_url))
    return settings


def normalize_base_url(text: str | None) -> str:
    """Turn whatever the user typed into the ``.../api/v1`` base URL."""
    trimmed = (text or "").strip().rstrip("/")
    if not trimmed:
        return DEFAULT_BASE_URL
    if trimmed.endswith(API_SUFFIX):
        return trimmed
    return f"{trimmed}{API_SUFFIX}"


def instance_url(base_url: str) -> str:
    """The web UI root for an API base URL."""
    base = base_url.rstrip("/")
    if base.endswith(API_SUFFIX):
        base = base[: -len(API_SUFFIX)]
    return base
