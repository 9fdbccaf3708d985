"""CLI tools command for trackmix."""

import sys

import click

from trackmix.cli import get_service
from trackmix.cli.exit_codes import ExitCode


@click.command("tools")
@click.pass_context
def tools_command(ctx: click.Context) -> None:
    """Show where each external tool was found.

    Exits with TOOL_NOT_AVAILABLE if any tool is missing.
    """
    service = get_service(ctx)
    resolutions = service.locator.describe()

    for resolution in resolutions:
        if resolution.available:
            click.echo(f"{resolution.name}: {resolution.path}")
        else:
            click.echo(f"{resolution.name}: not found")
            click.echo(f"  {resolution.error}")

    if not all(r.available for r in resolutions):
        sys.exit(ExitCode.TOOL_NOT_AVAILABLE)
