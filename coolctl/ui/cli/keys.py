"""
CLI command: keys — private keys stored in Coolify.
"""

from __future__ import annotations

import click

from coolctl.adapters.coolify.client import CoolifyError
from coolctl.core.services.filters import matches_search
from coolctl.core.services.urls import private_key_url
from coolctl.ui.cli.common import (
    JSON_OPTION,
    echo_empty,
    echo_json,
    fail,
    get_client,
    get_instance,
)


@click.command("keys")
@click.option("--search", "-s", default="", help="Filter by name, description, uuid or id.")
@JSON_OPTION
@click.pass_context
def keys(ctx: click.Context, search: str, as_json: bool) -> None:
    """List private keys (metadata only)."""
    client = get_client(ctx)
    try:
        items = client.list_private_keys()
    except CoolifyError as e:
        fail(str(e), as_json)

    instance = get_instance(ctx)
    items = [
        k for k in items
        if matches_search((k.get("name"), k.get("description"), k.get("uuid"), k.get("id")), search)
    ]
    # Key material never leaves this function
    rows = [
        {
            "id": k.get("id"),
            "uuid": k.get("uuid"),
            "name": k.get("name") or "Unnamed Key",
            "description": k.get("description") or "",
            "fingerprint": k.get("fingerprint"),
            "git_related": bool(k.get("is_git_related")),
            "url": private_key_url(instance, k.get("uuid") or k.get("id")),
        }
        for k in items
    ]

    if as_json:
        echo_json({"keys": rows})
        return

    click.secho(f"🔑 Private keys ({len(rows)}):", fg="cyan", bold=True)
    click.echo()
    if not rows:
        echo_empty("private keys")
        return
    for row in rows:
        click.secho(f"   {row['name']}", fg="white", bold=True, nl=False)
        click.echo("  (git)" if row["git_related"] else "")
        if row["description"]:
            click.echo(f"      {row['description']}")
        if row["fingerprint"]:
            click.echo(f"      fingerprint: {row['fingerprint']}")
        if row["uuid"]:
            click.echo(f"      uuid: {row['uuid']}")
        if row["url"]:
            click.echo(f"      🔗 {row['url']}")
    click.echo()
