"""
CLI command: deployments — recent deployments across all applications.
"""

from __future__ import annotations

import click

from coolctl.core.use_cases.catalog import load_catalog
from coolctl.core.use_cases.deployments import (
    deployment_filter_options,
    deployment_view,
    fetch_deployments,
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
    get_settings,
)

_STATUS_COLORS = {
    "finished": "green",
    "success": "green",
    "running": "yellow",
    "in_progress": "yellow",
    "queued": "yellow",
    "pending": "yellow",
    "failed": "red",
    "error": "red",
    "cancelled": "bright_black",
}


@click.command("deployments")
@click.option(
    "--filter", "-f", "token", default="all", show_default=True,
    help="all, status:active, project:<id> or env:<name>.",
)
@click.option("--search", "-s", default="", help="Search title, status, application, commit or uuid.")
@click.option("--take", type=int, default=None, help="Deployments per application (default from config).")
@click.option("--options", "show_options", is_flag=True, help="List available filter tokens and exit.")
@JSON_OPTION
@FORCE_OPTION
@click.pass_context
def deployments(
    ctx: click.Context,
    token: str,
    search: str,
    take: int | None,
    show_options: bool,
    as_json: bool,
    force: bool,
) -> None:
    """Show recent deployments, newest first."""
    client = get_client(ctx)
    cache = get_cache(ctx)
    catalog = load_catalog(client, cache, collections=("applications",), force=force)

    if show_options:
        options = deployment_filter_options(catalog)
        if as_json:
            echo_json([{"title": t, "token": v} for t, v in options])
        else:
            for t, v in options:
                click.echo(f"   {v:<40} {t}")
        return

    if take is None:
        take = get_settings(ctx).deployments_take
    items = fetch_deployments(client, cache, catalog, take=take, force=force)
    view = deployment_view(items, catalog, get_instance(ctx), token=token, search=search)

    if as_json:
        echo_json(view.to_dict())
        return

    echo_errors(view.errors)
    click.secho(f"🚢 Deployments ({len(view.rows)}/{view.total}):", fg="cyan", bold=True)
    click.echo()
    if not view.rows:
        echo_empty("deployments")
        return
    for row in view.rows:
        click.secho(f"   {row.title}", fg="white", bold=True)
        click.echo("      ", nl=False)
        click.secho(row.status, fg=_STATUS_COLORS.get(row.status.lower(), "white"), nl=False)
        click.echo(f"  {row.application}", nl=False)
        if row.environment:
            click.echo(f"  [{row.project} / {row.environment}]", nl=False)
        click.echo()
        details = [
            f"branch: {row.branch}" if row.branch else "",
            f"commit: {row.commit[:7]}" if row.commit else "",
            row.created_at or "",
            f"server: {row.server}" if row.server else "",
        ]
        details = [d for d in details if d]
        if details:
            click.echo(f"      {' · '.join(details)}")
        if row.coolify_url:
            click.echo(f"      🔗 {row.coolify_url}")
    click.echo()
