"""
CLI commands for resources — the grouped applications/services/databases list.

``resources`` shows all three collections; ``apps``, ``services`` and
``databases`` fetch and show just one.
"""

from __future__ import annotations

import click

from coolctl.core.models.resource import ResourceItem, ResourceType
from coolctl.core.services.deployments import status_label
from coolctl.core.use_cases.catalog import (
    COLLECTIONS,
    Catalog,
    load_catalog,
    resource_filter_options,
    resource_view,
)
from coolctl.ui.cli.common import (
    FORCE_OPTION,
    JSON_OPTION,
    echo_empty,
    echo_errors,
    echo_json,
    get_cache,
    get_client,
    get_instance,
)

_TYPE_ICONS = {"application": "📦", "service": "🧩", "database": "🗄️"}
_STATUS_COLORS = {"ready": "green", "queued": "yellow", "failed": "red"}

FILTER_OPTION = click.option(
    "--filter", "-f", "token", default="all", show_default=True,
    help="all, project:<id>, env:<name>, type:<type> or status:<status>.",
)
SEARCH_OPTION = click.option("--search", "-s", default="", help="Case-insensitive text search.")
OPTIONS_OPTION = click.option("--options", "show_options", is_flag=True, help="List available filter tokens and exit.")
LINKS_OPTION = click.option("--links", is_flag=True, help="Show Coolify links under each resource.")


def _echo_item(item: ResourceItem, env_name: str, links: dict[str, str | None] | None) -> None:
    icon = _TYPE_ICONS.get(item.type, "•")
    click.secho(f"   {icon} {item.name}", fg="white", bold=True, nl=False)
    click.echo(f"  [{env_name}]", nl=False)
    status = item.status
    if item.type == ResourceType.APPLICATION:
        status = status_label({"status": item.status})
    if status:
        click.secho(f"  ({status})", fg=_STATUS_COLORS.get(status, "white"), nl=False)
    click.echo()
    if item.subtitle:
        click.echo(f"      {item.subtitle}")
    if item.repo:
        click.echo(f"      repo: {item.repo}")
    if item.kind:
        click.echo(f"      kind: {item.kind}")
    if item.uuid:
        click.echo(f"      uuid: {item.uuid}")
    if links:
        for label, url in links.items():
            if url:
                click.echo(f"      🔗 {label}: {url}")


def _show_resources(
    ctx: click.Context,
    title: str,
    collections: tuple[str, ...],
    token: str,
    search: str,
    as_json: bool,
    force: bool,
    show_options: bool,
    show_links: bool,
) -> None:
    catalog: Catalog = load_catalog(get_client(ctx), get_cache(ctx), collections=collections, force=force)

    if show_options:
        options = resource_filter_options(catalog, include_types=len(collections) > 1)
        if as_json:
            echo_json([{"title": t, "token": v} for t, v in options])
        else:
            for t, v in options:
                click.echo(f"   {v:<40} {t}")
        return

    view = resource_view(catalog, token=token, search=search)
    if as_json:
        echo_json(view.to_dict())
        return

    echo_errors(view.errors)
    click.secho(f"{title} ({view.count}/{view.total}):", fg="cyan", bold=True)
    if token != "all" or search:
        click.echo(f"   filter: {token}" + (f"  search: {search!r}" if search else ""))
    click.echo()
    if not view.groups:
        echo_empty(title.split(" ", 1)[-1].lower())
        return

    instance = get_instance(ctx) if show_links else ""
    for group in view.groups:
        click.secho(f"📁 {group.project_name}", fg="cyan")
        for entry in group.entries:
            links = catalog.resource_links(entry.item, instance) if show_links else None
            _echo_item(entry.item, entry.env_name, links)
        click.echo()


@click.command("resources")
@FILTER_OPTION
@SEARCH_OPTION
@OPTIONS_OPTION
@LINKS_OPTION
@JSON_OPTION
@FORCE_OPTION
@click.pass_context
def resources(ctx, token, search, show_options, links, as_json, force):
    """List applications, services and databases grouped by project."""
    _show_resources(ctx, "🚀 Resources", COLLECTIONS, token, search, as_json, force, show_options, links)


@click.command("apps")
@FILTER_OPTION
@SEARCH_OPTION
@OPTIONS_OPTION
@LINKS_OPTION
@JSON_OPTION
@FORCE_OPTION
@click.pass_context
def apps(ctx, token, search, show_options, links, as_json, force):
    """List applications grouped by project."""
    _show_resources(ctx, "📦 Applications", ("applications",), token, search, as_json, force, show_options, links)


@click.command("services")
@FILTER_OPTION
@SEARCH_OPTION
@OPTIONS_OPTION
@LINKS_OPTION
@JSON_OPTION
@FORCE_OPTION
@click.pass_context
def services(ctx, token, search, show_options, links, as_json, force):
    """List services grouped by project."""
    _show_resources(ctx, "🧩 Services", ("services",), token, search, as_json, force, show_options, links)


@click.command("databases")
@FILTER_OPTION
@SEARCH_OPTION
@OPTIONS_OPTION
@LINKS_OPTION
@JSON_OPTION
@FORCE_OPTION
@click.pass_context
def databases(ctx, token, search, show_options, links, as_json, force):
    """List databases grouped by project."""
    _show_resources(ctx, "🗄️ Databases", ("databases",), token, search, as_json, force, show_options, links)
