"""
CLI commands that act on a single resource — redeploy, logs, open, envs.
"""

from __future__ import annotations

import click

from coolctl.adapters.clipboard import ClipboardError, copy_to_clipboard
from coolctl.adapters.coolify.client import CoolifyError
from coolctl.core.use_cases import actions as action_uc
from coolctl.core.use_cases.catalog import load_catalog
from coolctl.ui.cli.common import (
    JSON_OPTION,
    echo_json,
    fail,
    get_cache,
    get_client,
    get_instance,
    get_settings,
)

_OPEN_TARGETS = {
    "resource": "resource",
    "environment": "environment",
    "app": "application",
    "logs": "console_logs",
}


@click.command("redeploy")
@click.argument("uuid")
@click.option("--force", is_flag=True, help="Force a rebuild without cache.")
@JSON_OPTION
@click.pass_context
def redeploy(ctx: click.Context, uuid: str, force: bool, as_json: bool) -> None:
    """Trigger a redeploy of the resource UUID."""
    result = action_uc.redeploy(get_client(ctx), uuid, force=force)

    if as_json:
        echo_json(result.to_dict())
        if not result.ok:
            ctx.exit(1)
        return

    if not result.ok:
        fail(result.error)
    click.secho(f"🔁 {result.message}", fg="green")


@click.command("logs")
@click.argument("uuid")
@click.option("--lines", "-n", type=int, default=None, help="Number of lines (default from config).")
@click.option("--copy", "copy", is_flag=True, help="Copy the logs to the clipboard.")
@JSON_OPTION
@click.pass_context
def logs(ctx: click.Context, uuid: str, lines: int | None, copy: bool, as_json: bool) -> None:
    """Show the latest logs of application UUID."""
    if lines is None:
        lines = get_settings(ctx).log_lines
    try:
        text = action_uc.application_logs(get_client(ctx), uuid, lines=lines)
    except CoolifyError as e:
        fail(f"Failed to load logs: {e}", as_json)

    copied_with = None
    if copy and text:
        try:
            copied_with = copy_to_clipboard(text)
        except ClipboardError as e:
            fail(str(e), as_json)

    if as_json:
        echo_json({"uuid": uuid, "lines": lines, "logs": text, "copied": copied_with is not None})
        return

    if not text:
        click.echo("   📭 No logs available.")
        return
    click.echo(text)
    if copied_with:
        click.secho(f"📋 Copied logs to the clipboard ({copied_with})", fg="green", err=True)


@click.command("open")
@click.argument("uuid")
@click.option(
    "--target", "-t",
    type=click.Choice(sorted(_OPEN_TARGETS)),
    default="resource", show_default=True,
    help="Which page to open.",
)
@click.option("--print", "print_only", is_flag=True, help="Print the URL instead of opening it.")
@click.pass_context
def open_resource(ctx: click.Context, uuid: str, target: str, print_only: bool) -> None:
    """Open a resource's page in the browser."""
    catalog = load_catalog(get_client(ctx), get_cache(ctx))
    item = catalog.find_resource(uuid)
    if item is None:
        fail(f"No resource with uuid {uuid}")

    links = catalog.resource_links(item, get_instance(ctx))
    url = links.get(_OPEN_TARGETS[target])
    if not url:
        fail(f"No {target} link for {item.name}")

    if print_only:
        click.echo(url)
        return
    click.echo(f"🌐 Opening {url}")
    click.launch(url)


@click.command("envs")
@click.argument("resource_type", type=click.Choice(["application", "service"]))
@click.argument("uuid")
@click.option("--show-values", is_flag=True, help="Print variable values (hidden by default).")
@JSON_OPTION
@click.pass_context
def envs(ctx: click.Context, resource_type: str, uuid: str, show_values: bool, as_json: bool) -> None:
    """List environment variables of an application or service."""
    try:
        variables = action_uc.environment_variables(get_client(ctx), resource_type, uuid)
    except CoolifyError as e:
        fail(str(e), as_json)

    if as_json:
        if not show_values:
            variables = [{k: v for k, v in var.items() if k not in ("value", "real_value")} for var in variables]
        echo_json({"type": resource_type, "uuid": uuid, "variables": variables})
        return

    click.secho(f"🔧 Environment variables ({len(variables)}):", fg="cyan", bold=True)
    if not variables:
        click.echo("   📭 None defined.")
        return
    for var in variables:
        key = var.get("key") or "?"
        value = var.get("value") if show_values else "••••••"
        flags = [f for f, on in (("build", var.get("is_build_time")), ("preview", var.get("is_preview"))) if on]
        suffix = f"  ({', '.join(flags)})" if flags else ""
        click.echo(f"   {key}={value}{suffix}")
