"""
CLI commands for teams and their members.
"""

from __future__ import annotations

import click

from coolctl.adapters.coolify.client import CoolifyError
from coolctl.core.services.filters import matches_search
from coolctl.core.services.urls import team_url
from coolctl.ui.cli.common import (
    JSON_OPTION,
    echo_empty,
    echo_json,
    fail,
    get_client,
    get_instance,
)


@click.group("teams", invoke_without_command=True)
@click.option("--search", "-s", default="", help="Filter by name, description or id.")
@JSON_OPTION
@click.pass_context
def teams(ctx: click.Context, search: str, as_json: bool) -> None:
    """List the teams visible to the API token."""
    if ctx.invoked_subcommand is not None:
        return

    client = get_client(ctx)
    try:
        items = client.list_teams()
    except CoolifyError as e:
        fail(str(e), as_json)

    instance = get_instance(ctx)
    items = [
        t for t in items
        if matches_search((t.get("name"), t.get("description"), t.get("id")), search)
    ]
    rows = [
        {
            "id": t.get("id"),
            "name": t.get("name") or "Unnamed Team",
            "description": t.get("description") or "",
            "personal": bool(t.get("personal_team")),
            "url": team_url(instance, t.get("id")),
        }
        for t in items
    ]

    if as_json:
        echo_json({"teams": rows})
        return

    click.secho(f"👥 Teams ({len(rows)}):", fg="cyan", bold=True)
    click.echo()
    if not rows:
        echo_empty("teams")
        return
    for row in rows:
        suffix = " (personal)" if row["personal"] else ""
        click.secho(f"   {row['name']}{suffix}", fg="white", bold=True)
        click.echo(f"      id: {row['id']}")
        if row["description"]:
            click.echo(f"      {row['description']}")
        if row["url"]:
            click.echo(f"      🔗 {row['url']}")
    click.echo()


@teams.command("members")
@click.argument("team_id")
@JSON_OPTION
@click.pass_context
def members(ctx: click.Context, team_id: str, as_json: bool) -> None:
    """List the members of one team."""
    client = get_client(ctx)
    try:
        items = client.team_members(team_id)
    except CoolifyError as e:
        fail(str(e), as_json)

    rows = [
        {
            "id": m.get("id"),
            "name": m.get("name") or "Unnamed Member",
            "email": m.get("email") or "",
        }
        for m in items
    ]

    if as_json:
        echo_json({"team_id": team_id, "members": rows})
        return

    click.secho(f"👤 Members of team {team_id} ({len(rows)}):", fg="cyan", bold=True)
    if not rows:
        echo_empty("members")
        return
    for row in rows:
        email = f"  <{row['email']}>" if row["email"] else ""
        click.echo(f"   • {row['name']}{email}")
