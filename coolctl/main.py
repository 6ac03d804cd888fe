"""
coolctl — CLI entrypoint.

Usage:
    coolctl --help
    coolctl setup
    coolctl resources --filter env:production
    coolctl redeploy <uuid> --force
"""

from __future__ import annotations

import locale
import os
from pathlib import Path

import click

from coolctl import __version__
from coolctl.core.observability.logging_config import resolve_level, setup_logging
from coolctl.ui.cli.actions import envs, logs, open_resource, redeploy
from coolctl.ui.cli.deployments import deployments
from coolctl.ui.cli.keys import keys
from coolctl.ui.cli.projects import projects
from coolctl.ui.cli.resources import apps, databases, resources, services
from coolctl.ui.cli.setup import setup
from coolctl.ui.cli.teams import teams


@click.group()
@click.version_option(version=__version__, prog_name="coolctl")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to coolctl.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """coolctl — browse and operate your Coolify instance."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        pass  # unsupported LANG/LC_*: collation stays at "C"

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug, verbose, quiet, os.environ.get("COOLCTL_LOG_LEVEL")),
        log_file=os.environ.get("COOLCTL_LOG_FILE"),
        log_file_level=os.environ.get("COOLCTL_LOG_FILE_LEVEL"),
        quiet_third_party=not debug,
    )


cli.add_command(setup)
cli.add_command(projects)
cli.add_command(resources)
cli.add_command(apps)
cli.add_command(services)
cli.add_command(databases)
cli.add_command(deployments)
cli.add_command(teams)
cli.add_command(keys)
cli.add_command(redeploy)
cli.add_command(logs)
cli.add_command(open_resource)
cli.add_command(envs)


if __name__ == "__main__":
    cli()
