"""CLI size command for trackmix."""

import sys
from pathlib import Path

import click

from trackmix.cli import get_service
from trackmix.cli.exit_codes import ExitCode
from trackmix.errors import FilesystemError


@click.command("size")
@click.argument("file", type=click.Path(exists=False))
@click.pass_context
def size_command(ctx: click.Context, file: str) -> None:
    """Print the human-readable size of FILE."""
    file_path = Path(file)
    if not file_path.exists():
        click.echo(f"Error: File not found: {file_path}", err=True)
        sys.exit(ExitCode.TARGET_NOT_FOUND)

    try:
        click.echo(get_service(ctx).file_size(file_path))
    except FilesystemError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.OPERATION_FAILED)
