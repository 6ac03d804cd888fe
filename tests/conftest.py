"""
Shared test fixtures — sample API payloads and a fake HTTP transport.
"""

from __future__ import annotations

import json
from urllib.parse import parse_qs, urlparse

import pytest

from coolctl.adapters.coolify.client import CoolifyClient
from coolctl.core.services.fetch_cache import FetchCache

BASE_URL = "https://coolify.example.com/api/v1"
INSTANCE = "https://coolify.example.com"


class FakeTransport:
    """Canned responses keyed by (method, path).

    A route value is ``(status, payload)``; payload is JSON-encoded
    unless it is ``bytes`` or ``str``.  A route may also be an exception
    instance, which is raised instead.
    """

    def __init__(self, routes: dict | None = None) -> None:
        self.routes: dict = dict(routes or {})
        self.requests: list[dict] = []

    def add(self, path: str, payload, status: int = 200, method: str = "GET") -> None:
        self.routes[(method, path)] = (status, payload)

    def __call__(self, request, timeout):
        parsed = urlparse(request.full_url)
        path = parsed.path[len(urlparse(BASE_URL).path):]
        self.requests.append({
            "method": request.get_method(),
            "path": path,
            "query": {k: v[0] for k, v in parse_qs(parsed.query).items()},
            "headers": dict(request.header_items()),
            "timeout": timeout,
        })
        route = self.routes.get((request.get_method(), path))
        if route is None:
            return 404, b'{"message": "Not found"}'
        if isinstance(route, Exception):
            raise route
        status, payload = route
        if isinstance(payload, bytes):
            body = payload
        elif isinstance(payload, str):
            body = payload.encode()
        else:
            body = json.dumps(payload).encode()
        return status, body

    def paths(self) -> list[str]:
        return [r["path"] for r in self.requests]


# ── Sample payloads ─────────────────────────────────────────────


@pytest.fixture
def projects_payload() -> list[dict]:
    return [
        {
            "id": 1,
            "uuid": "p-shop",
            "name": "Shop",
            "environments": [
                {"id": 10, "uuid": "e-shop-prod", "name": "production"},
                {"id": 11, "uuid": "e-shop-stg", "name": "staging"},
            ],
        },
        {
            "id": 2,
            "uuid": "p-blog",
            "name": "Blog",
            "environments": [
                {"id": 20, "uuid": "e-blog-prod", "name": "production"},
            ],
        },
    ]


@pytest.fixture
def applications_payload() -> list[dict]:
    return [
        {
            "id": 100,
            "uuid": "a-web",
            "name": "web",
            "environment_id": 10,
            "git_branch": "main",
            "git_repository": "acme/shop",
            "fqdn": "shop.example.com,www.shop.example.com",
            "status": "running:healthy",
        },
        {
            "id": 101,
            "uuid": "a-blog",
            "name": "blog",
            "environment_id": "20",
            "fqdn": "https://blog.example.com",
            "status": "exited",
        },
    ]


@pytest.fixture
def services_payload() -> list[dict]:
    return [
        {"id": 200, "uuid": "s-plausible", "name": "plausible", "environment_id": 20, "service_type": "plausible"},
    ]


@pytest.fixture
def databases_payload() -> list[dict]:
    return [
        {"uuid": "d-pg", "name": "postgres", "environment_id": 11, "database_type": "standalone-postgresql"},
    ]


@pytest.fixture
def transport(projects_payload, applications_payload, services_payload, databases_payload) -> FakeTransport:
    fake = FakeTransport()
    fake.add("/projects", projects_payload)
    fake.add("/applications", applications_payload)
    fake.add("/services", {"data": services_payload})
    fake.add("/databases", databases_payload)
    return fake


@pytest.fixture
def client(transport: FakeTransport) -> CoolifyClient:
    return CoolifyClient(BASE_URL, "secret-token", transport=transport)


@pytest.fixture
def cache() -> FetchCache:
    return FetchCache()
