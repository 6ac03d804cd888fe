"""
Deep-links into the Coolify web UI.

All builders take the *instance* URL (the API base without ``/api/v1``)
and return None when a path segment they need is missing, except
:func:`environment_url`, which falls back to the instance root.
"""

from __future__ import annotations

from urllib.parse import urlparse


def _base(instance_url: str) -> str:
    return instance_url.rstrip("/")


def is_http_url(url: str | None) -> bool:
    if not url:
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def normalize_url(url: str | None) -> str | None:
    """Prefix a bare host with ``https://``."""
    if not url:
        return None
    if url.startswith(("http://", "https://")):
        return url
    return f"https://{url}"


def project_url(instance_url: str, project_uuid: str | None) -> str:
    if not project_uuid:
        return instance_url
    return f"{_base(instance_url)}/project/{project_uuid}"


def environment_url(instance_url: str, project_uuid: str | None, env_uuid: str | None) -> str:
    if not project_uuid or not env_uuid:
        return instance_url
    return f"{_base(instance_url)}/project/{project_uuid}/environment/{env_uuid}"


def resource_url(
    instance_url: str,
    project_uuid: str | None,
    env_uuid: str | None,
    resource_type: str,
    resource_uuid: str | None,
) -> str | None:
    if not project_uuid or not env_uuid or not resource_uuid:
        return None
    return (
        f"{_base(instance_url)}/project/{project_uuid}"
        f"/environment/{env_uuid}/{resource_type}/{resource_uuid}"
    )


def console_logs_url(
    instance_url: str,
    project_uuid: str | None,
    env_uuid: str | None,
    application_uuid: str | None,
) -> str | None:
    app = resource_url(instance_url, project_uuid, env_uuid, "application", application_uuid)
    return f"{app}/logs" if app else None


def deployment_url(
    instance_url: str,
    project_uuid: str | None,
    env_uuid: str | None,
    application_uuid: str | None,
    deployment_uuid: str | None,
) -> str | None:
    app = resource_url(instance_url, project_uuid, env_uuid, "application", application_uuid)
    if not app or not deployment_uuid:
        return None
    return f"{app}/deployment/{deployment_uuid}"


def resolve_deploy_url(url: str | None, instance_url: str) -> str | None:
    """Make a deployment-provided URL absolute.

    ``/path`` and ``project/...`` are relative to the instance; anything
    else without a scheme is treated as a host.
    """
    if not url:
        return None
    url = url.strip()
    if not url:
        return None
    if url.startswith(("http://", "https://")):
        return url
    if url.startswith("/"):
        return f"{_base(instance_url)}{url}"
    if url.startswith("project/"):
        return f"{_base(instance_url)}/{url}"
    return normalize_url(url)


def team_url(instance_url: str, team_id: object) -> str | None:
    if team_id in (None, ""):
        return None
    return f"{_base(instance_url)}/team/{team_id}"


def private_key_url(instance_url: str, key_id: object) -> str | None:
    if key_id in (None, ""):
        return None
    return f"{_base(instance_url)}/private-key/{key_id}"
