"""
Shared plumbing for CLI commands — client, cache, output helpers.

``ctx.obj`` is a dict populated by the root group.  Tests may pre-seed
``ctx.obj["client"]`` with a client built on a fake transport.
"""

from __future__ import annotations

import json
import sys
from typing import Any, NoReturn

import click

from coolctl.adapters.coolify.client import CoolifyClient
from coolctl.core.config.loader import ConfigError, instance_url, load_settings, normalize_base_url
from coolctl.core.models.settings import Settings
from coolctl.core.services.fetch_cache import FetchCache

JSON_OPTION = click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
FORCE_OPTION = click.option("--refresh", "force", is_flag=True, help="Bypass the fetch cache.")


def get_settings(ctx: click.Context) -> Settings:
    obj = ctx.ensure_object(dict)
    if "settings" not in obj:
        try:
            obj["settings"] = load_settings(obj.get("config_path"))
        except ConfigError as e:
            fail(str(e))
    return obj["settings"]


def get_client(ctx: click.Context) -> CoolifyClient:
    obj = ctx.ensure_object(dict)
    if "client" not in obj:
        settings = get_settings(ctx)
        obj["client"] = CoolifyClient(
            normalize_base_url(settings.api_url),
            settings.token,
            timeout=settings.timeout,
        )
    return obj["client"]


def get_cache(ctx: click.Context) -> FetchCache:
    obj = ctx.ensure_object(dict)
    if "cache" not in obj:
        settings = obj.get("settings")
        obj["cache"] = FetchCache(ttl=settings.cache_ttl if settings else 0.0)
    return obj["cache"]


def get_instance(ctx: click.Context) -> str:
    return instance_url(get_client(ctx).base_url)


def fail(message: str, as_json: bool = False) -> NoReturn:
    """Print an error and exit 1."""
    if as_json:
        click.echo(json.dumps({"error": message}, indent=2))
    else:
        click.secho(f"❌ {message}", fg="red")
    sys.exit(1)


def echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def echo_errors(errors: dict[str, str]) -> None:
    """Warn about partial failures (the list is still shown)."""
    for name, message in errors.items():
        click.secho(f"⚠️  {name}: {message}", fg="yellow", err=True)


def echo_empty(what: str) -> None:
    click.echo(f"   🔍 No {what} found")
    click.echo("   💡 Check API token and permissions.")
