"""CLI mix command for trackmix."""

import logging
import sys
from pathlib import Path

import click

from trackmix.cli import get_service
from trackmix.cli.exit_codes import exit_code_for
from trackmix.domain.models import MixSelection
from trackmix.errors import TrackmixError
from trackmix.mixing import load_selection_file, parse_track_spec

logger = logging.getLogger(__name__)


def _collect_selections(
    select: tuple[tuple[str, str, str], ...],
    from_file: Path | None,
) -> list[MixSelection]:
    selections: list[MixSelection] = []
    if from_file is not None:
        selections.extend(load_selection_file(from_file))
    for kind, path, spec in select:
        track_ids, overrides = parse_track_spec(spec)
        selections.append(
            MixSelection(
                source_path=path,
                kind=kind,
                track_ids=track_ids,
                language_overrides=overrides,
            )
        )
    return selections


@click.command("mix")
@click.option(
    "--output",
    "-o",
    "output",
    type=click.Path(path_type=Path),
    required=True,
    help="Output file; .mkv is appended when it has no extension",
)
@click.option(
    "--select",
    "-s",
    "select",
    type=(str, str, str),
    multiple=True,
    metavar="KIND PATH IDS",
    help=(
        "Select tracks of KIND from PATH. IDS is comma-separated; "
        "append =LANG to override a track's language (e.g. 1=en,2)"
    ),
)
@click.option(
    "--from-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML or JSON file listing selections",
)
@click.pass_context
def mix_command(
    ctx: click.Context,
    output: Path,
    select: tuple[tuple[str, str, str], ...],
    from_file: Path | None,
) -> None:
    """Combine selected tracks from one or more files into one output.

    At least one video track is required. Each track kind may come from
    only one source file. Tracks are marked default, not forced, and get
    their language from the override or the kind default (video and audio
    "ja", subtitles "zh-Hans").

    Example:

        trackmix mix -o out/ep01 -s video ep01.mkv 0 -s audio ep01.mka 1=en
    """
    try:
        selections = _collect_selections(select, from_file)
        service = get_service(ctx)
        final_path = service.mix_tracks(selections, output)
    except TrackmixError as e:
        logger.debug("Mix failed", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(exit_code_for(e))

    click.echo(f"Created {final_path}")
