"""mkvmerge argument construction for the remux pipeline.

Pure functions that build the argument lists for the per-kind extraction
stage and the final combine stage. Nothing here touches the filesystem.
"""

from pathlib import Path

from trackmix.domain.models import KIND_ORDER, ConsolidatedSelection
from trackmix.language import default_language_for_kind

# Intermediate file extension per kind
ARTIFACT_EXTENSIONS: dict[str, str] = {
    "video": "mkv",
    "audio": "mka",
    "subtitle": "mks",
}

# mkvmerge flag that selects (or with "-1" drops) the tracks of each kind
SELECTOR_FLAGS: dict[str, str] = {
    "video": "--video-tracks",
    "audio": "--audio-tracks",
    "subtitle": "--subtitle-tracks",
}


def artifact_path(temp_dir: Path, kind: str) -> Path:
    """Return the intermediate file path for a kind inside a job directory."""
    return temp_dir / f"{kind}.{ARTIFACT_EXTENSIONS.get(kind, 'mkv')}"


def build_selector_args(kind: str, track_ids: list[str]) -> list[str]:
    """Build the track selector flags for one kind.

    The kind's own selector comes first with the comma-joined ids, followed
    by the other two selectors set to "-1" in fixed kind order.

    Example:
        >>> build_selector_args("audio", ["1", "2"])
        ['--audio-tracks', '1,2', '--video-tracks', '-1', '--subtitle-tracks', '-1']
    """
    args = [SELECTOR_FLAGS[kind], ",".join(track_ids)]
    for other in KIND_ORDER:
        if other != kind:
            args.extend([SELECTOR_FLAGS[other], "-1"])
    return args


def build_track_args(
    track_id: str,
    kind: str,
    language_overrides: dict[str, str],
) -> list[str]:
    """Build the per-track metadata flags.

    Clears the track name, marks the track default and not forced, and sets
    its language from the override or the kind's default.
    """
    language = language_overrides.get(track_id) or default_language_for_kind(kind)
    return [
        "--track-name",
        f"{track_id}:",
        "--default-track-flag",
        f"{track_id}:yes",
        "--forced-display-flag",
        f"{track_id}:no",
        "--language",
        f"{track_id}:{language}",
    ]


def build_stage_args(selection: ConsolidatedSelection, output: Path) -> list[str]:
    """Build the arguments for one extraction stage.

    Args:
        selection: Consolidated selection for one built kind.
        output: Intermediate file to write.

    Returns:
        mkvmerge arguments (without the executable).

    Raises:
        KeyError: If the selection's kind has no selector flag.
    """
    args = ["-o", str(output)]
    args.extend(build_selector_args(selection.kind, selection.track_ids))
    for track_id in selection.track_ids:
        args.extend(
            build_track_args(track_id, selection.kind, selection.language_overrides)
        )
    args.append(str(selection.source_path))
    return args


def build_combine_args(output: Path, artifacts: list[Path]) -> list[str]:
    """Build the arguments that combine intermediate files into the output.

    Args:
        output: Final output file.
        artifacts: Intermediate files in video, audio, subtitle order.
    """
    return ["-o", str(output), *(str(path) for path in artifacts)]


def normalize_output_path(output_path: Path | str) -> Path:
    """Give the output a .mkv extension when it has none."""
    output = Path(output_path)
    if not output.suffix:
        output = output.with_suffix(".mkv")
    return output
