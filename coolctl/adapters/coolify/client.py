"""
Coolify REST client — thin JSON-over-HTTP wrapper.

Uses ``urllib.request`` with a bearer token.  The network call itself
goes through a *transport* callable so tests can substitute canned
responses:

    transport(request: urllib.request.Request, timeout: float) -> (status, body_bytes)

Every failure (network, non-2xx, bad JSON) surfaces as
:class:`CoolifyError`; 401/403 and a missing token as
:class:`CoolifyAuthError`.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from typing import Any, Callable
from urllib.parse import quote, urlencode

from coolctl import __version__
from coolctl.adapters.coolify.decode import decode_list, decode_logs, decode_message

logger = logging.getLogger(__name__)

Transport = Callable[[urllib.request.Request, float], tuple[int, bytes]]


class CoolifyError(Exception):
    """An API request failed."""

    def __init__(self, message: str, status: int | None = None, path: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.path = path


class CoolifyAuthError(CoolifyError):
    """Missing, invalid or under-privileged API token."""


def urllib_transport(request: urllib.request.Request, timeout: float) -> tuple[int, bytes]:
    """Default transport: perform the request with ``urlopen``.

    Non-2xx responses are returned, not raised, so the client can build
    one error message for every failure mode.
    """
    try:
        with urllib.request.urlopen(request, timeout=timeout) as resp:
            return resp.status, resp.read()
    except urllib.error.HTTPError as e:
        return e.code, e.read() or b""


def _error_detail(body: bytes) -> str:
    try:
        payload = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return body.decode("utf-8", errors="replace").strip()[:200]
    return decode_message(payload)


class CoolifyClient:
    """Client for one Coolify instance.

    Args:
        base_url: Normalized API base (ends with ``/api/v1``).
        token: API token (already trimmed).
        timeout: Per-request timeout in seconds.
        transport: Override the HTTP transport (tests).
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 30.0,
        transport: Transport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._transport = transport or urllib_transport

    # ── Core request ────────────────────────────────────────────

    def request_json(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        method: str = "GET",
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Plain-text bodies (some log endpoints) are returned as ``str``;
        an empty body returns None.
        """
        if not self.token:
            raise CoolifyAuthError("API token is missing. Run 'coolctl setup' for help.", path=path)

        query = {k: v for k, v in (params or {}).items() if v is not None}
        url = f"{self.base_url}/{path.lstrip('/')}"
        if query:
            url = f"{url}?{urlencode(query)}"

        request = urllib.request.Request(
            url,
            method=method,
            headers={
                "Authorization": f"Bearer {self.token}",
                "Accept": "application/json",
                "User-Agent": f"coolctl/{__version__}",
            },
        )
        logger.debug("%s %s", method, url)

        try:
            status, body = self._transport(request, self.timeout)
        except (urllib.error.URLError, OSError) as e:
            reason = getattr(e, "reason", e)
            raise CoolifyError(f"Cannot reach {self.base_url}: {reason}", path=path) from e

        if status in (401, 403):
            raise CoolifyAuthError(
                f"Unauthorized ({status}) for {path}: check the API token and its permissions",
                status=status, path=path,
            )
        if status < 200 or status >= 300:
            detail = _error_detail(body)
            message = f"Request failed ({status}) for {path}"
            raise CoolifyError(f"{message}: {detail}" if detail else message, status=status, path=path)

        if not body:
            return None
        text = body.decode("utf-8", errors="replace")
        try:
            return json.loads(text)
        except ValueError:
            if text.lstrip().startswith(("{", "[")):
                raise CoolifyError(f"Invalid JSON in response for {path}", status=status, path=path)
            return text

    def _list(self, path: str, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        return decode_list(self.request_json(path, params))

    # ── Endpoints ───────────────────────────────────────────────

    def list_projects(self) -> list[dict[str, Any]]:
        return self._list("/projects")

    def project_environments(self, project_uuid: str) -> list[dict[str, Any]]:
        return self._list(f"/projects/{quote(project_uuid)}/environments")

    def list_applications(self) -> list[dict[str, Any]]:
        return self._list("/applications")

    def list_services(self) -> list[dict[str, Any]]:
        return self._list("/services")

    def list_databases(self) -> list[dict[str, Any]]:
        return self._list("/databases")

    def application_deployments(self, application_uuid: str, take: int | None = None) -> list[dict[str, Any]]:
        return self._list(
            f"/deployments/applications/{quote(application_uuid)}",
            {"take": take} if take else None,
        )

    def application_logs(self, application_uuid: str, lines: int = 100) -> str:
        payload = self.request_json(
            f"/applications/{quote(application_uuid)}/logs", {"lines": lines},
        )
        return decode_logs(payload)

    def deploy(self, uuid: str, force: bool = False) -> str:
        """Trigger a (re)deploy of any resource by uuid."""
        params: dict[str, Any] = {"uuid": uuid}
        if force:
            params["force"] = "true"
        logger.info("Triggering %sdeploy for %s", "force " if force else "", uuid)
        return decode_message(self.request_json("/deploy", params))

    def list_teams(self) -> list[dict[str, Any]]:
        return self._list("/teams")

    def team_members(self, team_id: Any) -> list[dict[str, Any]]:
        return self._list(f"/teams/{quote(str(team_id))}/members")

    def list_private_keys(self) -> list[dict[str, Any]]:
        return self._list("/security/keys")

    def resource_envs(self, resource_type: str, uuid: str) -> list[dict[str, Any]]:
        """Environment variables of an application or service."""
        if resource_type not in ("application", "service"):
            raise ValueError(f"Environment variables exist for applications and services, not {resource_type!r}")
        return self._list(f"/{resource_type}s/{quote(uuid)}/envs")
