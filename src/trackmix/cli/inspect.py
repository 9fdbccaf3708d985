"""CLI inspect command for trackmix."""

import logging
import sys
from pathlib import Path

import click

from trackmix.cli import get_service
from trackmix.cli.exit_codes import ExitCode, exit_code_for
from trackmix.domain.models import KIND_ORDER, TrackProbeResult
from trackmix.errors import TrackmixError
from trackmix.introspector import format_human, format_json

logger = logging.getLogger(__name__)


@click.command("inspect")
@click.argument("file", type=click.Path(exists=False))
@click.option(
    "--kind",
    "-k",
    "kinds",
    type=click.Choice(list(KIND_ORDER), case_sensitive=False),
    multiple=True,
    help="Track kind to list; repeatable (default: all kinds)",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
@click.pass_context
def inspect_command(
    ctx: click.Context,
    file: str,
    kinds: tuple[str, ...],
    output_format: str,
) -> None:
    """Inspect a media file and display its tracks.

    FILE is the path to the media file to inspect. Matroska files
    (.mkv, .mka, .mks) are read with mkvmerge, everything else with ffprobe.
    """
    file_path = Path(file)

    if not file_path.exists():
        click.echo(f"Error: File not found: {file_path}", err=True)
        sys.exit(ExitCode.TARGET_NOT_FOUND)

    service = get_service(ctx)
    selected = [kind.lower() for kind in kinds] or list(KIND_ORDER)

    results: list[TrackProbeResult] = []
    try:
        for kind in selected:
            results.append(service.probe_tracks(file_path, kind))
    except TrackmixError as e:
        logger.debug("Inspect failed for %s", file_path, exc_info=True)
        click.echo(f"Error: Could not inspect file: {file_path}", err=True)
        click.echo(f"Reason: {e}", err=True)
        sys.exit(exit_code_for(e))

    if output_format == "json":
        click.echo(format_json(results))
    else:
        click.echo(format_human(results))
