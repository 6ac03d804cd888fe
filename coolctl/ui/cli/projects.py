"""
CLI commands for projects and their environments.
"""

from __future__ import annotations

import click

from coolctl.adapters.coolify.client import CoolifyError
from coolctl.core.services.environments import (
    flatten_environments,
    project_display_name,
    project_key,
)
from coolctl.core.services.filters import matches_search
from coolctl.core.services.urls import environment_url, project_url
from coolctl.core.use_cases.catalog import cached_list, fetch_project_environments, Catalog
from coolctl.ui.cli.common import (
    FORCE_OPTION,
    JSON_OPTION,
    echo_empty,
    echo_errors,
    echo_json,
    fail,
    get_cache,
    get_client,
    get_instance,
)


@click.group("projects", invoke_without_command=True)
@click.option("--search", "-s", default="", help="Filter by name, uuid or id.")
@JSON_OPTION
@FORCE_OPTION
@click.pass_context
def projects(ctx: click.Context, search: str, as_json: bool, force: bool) -> None:
    """List projects with their environment counts."""
    if ctx.invoked_subcommand is not None:
        return

    client = get_client(ctx)
    cache = get_cache(ctx)
    catalog = Catalog()
    items = cached_list(cache, "projects", client.list_projects, name="projects", force=force, catalog=catalog)
    if catalog.errors and not items:
        fail(catalog.errors["projects"], as_json)

    items = [
        p for p in items
        if matches_search((p.get("name"), p.get("uuid"), p.get("id")), search)
    ]
    tree = fetch_project_environments(client, cache, items, force=force, catalog=catalog)
    instance = get_instance(ctx)

    rows = []
    for project in tree:
        envs = flatten_environments([project])
        rows.append({
            "id": project_key(project) or "",
            "uuid": project.get("uuid"),
            "name": project_display_name(project),
            "description": project.get("description") or "",
            "environments": [e.name for e in envs],
            "url": project_url(instance, project.get("uuid")),
        })

    if as_json:
        echo_json({"projects": rows, "errors": catalog.errors})
        return

    echo_errors(catalog.errors)
    click.secho(f"📁 Projects ({len(rows)}):", fg="cyan", bold=True)
    click.echo()
    if not rows:
        echo_empty("projects")
        return
    for row in rows:
        count = len(row["environments"])
        click.secho(f"   {row['name']}", fg="white", bold=True, nl=False)
        click.echo(f"  ({count} environment{'s' if count != 1 else ''})")
        if row["description"]:
            click.echo(f"      {row['description']}")
        if row["uuid"]:
            click.echo(f"      uuid: {row['uuid']}")
        for name in row["environments"]:
            click.echo(f"      • {name}")
    click.echo()


@projects.command("envs")
@click.argument("project_uuid")
@JSON_OPTION
@click.pass_context
def project_envs(ctx: click.Context, project_uuid: str, as_json: bool) -> None:
    """List the environments of one project."""
    client = get_client(ctx)
    instance = get_instance(ctx)
    try:
        envs = client.project_environments(project_uuid)
    except CoolifyError as e:
        fail(str(e), as_json)

    rows = [
        {
            "id": env.get("id"),
            "uuid": env.get("uuid"),
            "name": env.get("name") or "Unnamed Environment",
            "url": environment_url(instance, project_uuid, env.get("uuid")),
        }
        for env in envs
    ]

    if as_json:
        echo_json({"project_uuid": project_uuid, "environments": rows})
        return

    click.secho(f"🌱 Environments of {project_uuid} ({len(rows)}):", fg="cyan", bold=True)
    if not rows:
        echo_empty("environments")
        return
    for row in rows:
        click.echo(f"   • {row['name']}")
        if row["uuid"]:
            click.echo(f"      uuid: {row['uuid']}")
        click.echo(f"      🔗 {row['url']}")
