"""
CLI command: setup — show connection settings and token guidance.
"""

from __future__ import annotations

import click

from coolctl.core.config.loader import DEFAULT_BASE_URL, find_config_file, normalize_base_url
from coolctl.ui.cli.common import JSON_OPTION, echo_json, get_settings

_TOKEN_HELP = """\
   How to create a token:
     1. Open Coolify.
     2. Go to Keys & Tokens → API tokens.
     3. Create a token with the permissions you need.
     4. Put it in coolctl.yml (api_token) or export COOLIFY_API_TOKEN.

   Permissions:
     • read             viewing resources
     • read:sensitive   only if you need sensitive fields (private keys, env values)
     • write / deploy   only if you will trigger deployments
     • root             full administrative access
   Tokens are scoped to the current team."""


@click.command("setup")
@JSON_OPTION
@click.pass_context
def setup(ctx: click.Context, as_json: bool) -> None:
    """Show the active Coolify connection and how to configure it."""
    settings = get_settings(ctx)
    base_url = normalize_base_url(settings.api_url)
    config_file = ctx.obj.get("config_path") or find_config_file()

    if as_json:
        echo_json({
            "base_url": base_url,
            "has_token": settings.has_token,
            "config_file": str(config_file) if config_file else None,
            "settings": settings.to_dict(),
        })
        return

    click.secho("⚙️  Coolify Setup", fg="cyan", bold=True)
    click.echo()
    if settings.has_token:
        click.secho("   ✅ API token is set.", fg="green")
    else:
        click.secho("   ❌ API token is missing.", fg="red")
    click.echo(f"   🌐 Base URL: {base_url}")
    click.echo(f"   📄 Config:   {config_file or '(none, using defaults and environment)'}")
    click.echo()
    click.echo(_TOKEN_HELP)
    click.echo()
    click.echo(f"   Coolify Cloud: {DEFAULT_BASE_URL}")
    click.echo("   Self-hosted:   https://<your-instance> (/api/v1 is appended)")
    click.echo()
