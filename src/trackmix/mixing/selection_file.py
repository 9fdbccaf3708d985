"""Loading mix selections from files and command-line specs.

A selection file is a YAML (or JSON) list of entries::

    - path: /media/episode01.mkv
      kind: video
      track_ids: ["0"]
    - path: /media/episode01.jpn.mka
      kind: audio
      track_ids: [1, 2]
      track_langs: {"2": en}

A top-level mapping with a ``selections`` key holding the same list is also
accepted.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from trackmix.domain.models import MixSelection
from trackmix.errors import SelectionFileError

logger = logging.getLogger(__name__)


class SelectionEntryModel(BaseModel):
    """One entry of a selection file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: str
    kind: str
    track_ids: list[str] = Field(default_factory=list)
    track_langs: dict[str, str] = Field(default_factory=dict)

    @field_validator("track_ids", mode="before")
    @classmethod
    def _coerce_track_ids(cls, v: Any) -> Any:
        # YAML turns bare ids into integers
        if isinstance(v, list):
            return [str(item) if isinstance(item, int) else item for item in v]
        return v

    @field_validator("track_langs", mode="before")
    @classmethod
    def _coerce_lang_keys(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return {str(key): value for key, value in v.items()}
        return v

    def to_selection(self) -> MixSelection:
        return MixSelection(
            source_path=self.path,
            kind=self.kind,
            track_ids=list(self.track_ids),
            language_overrides=dict(self.track_langs),
        )


def _format_validation_error(error: ValidationError) -> str:
    errors = error.errors()
    if errors:
        first_error = errors[0]
        loc = ".".join(str(x) for x in first_error.get("loc", []))
        msg = first_error.get("msg", str(error))
        if loc:
            return f"{loc}: {msg}"
        return msg
    return str(error)


def load_selection_data(data: Any) -> list[MixSelection]:
    """Validate parsed selection-file data.

    Args:
        data: A list of entries, or a mapping with a "selections" list.

    Returns:
        Selections in file order.

    Raises:
        SelectionFileError: If the data has the wrong shape.
    """
    if isinstance(data, dict):
        data = data.get("selections")
    if not isinstance(data, list):
        raise SelectionFileError("Selection file must contain a list of selections")

    selections = []
    for index, entry in enumerate(data):
        try:
            model = SelectionEntryModel.model_validate(entry)
        except ValidationError as e:
            raise SelectionFileError(
                f"Invalid selection #{index + 1}: {_format_validation_error(e)}"
            ) from e
        selections.append(model.to_selection())
    return selections


def load_selection_file(path: Path) -> list[MixSelection]:
    """Load selections from a YAML or JSON file.

    Raises:
        SelectionFileError: If the file cannot be read, parsed or validated.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise SelectionFileError(f"Cannot read selection file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise SelectionFileError(f"Invalid selection file syntax: {e}") from e

    if data is None:
        raise SelectionFileError(f"Selection file is empty: {path}")

    selections = load_selection_data(data)
    logger.debug(
        "Loaded selection file",
        extra={"path": str(path), "selection_count": len(selections)},
    )
    return selections


def parse_track_spec(spec: str) -> tuple[list[str], dict[str, str]]:
    """Parse a command-line track spec like ``"1=jpn,2"``.

    Each comma-separated item is a track id, optionally followed by
    ``=<language>`` to override the language written for that track.

    Returns:
        Tuple of (track ids, language overrides).

    Raises:
        SelectionFileError: If an override names no language.
    """
    track_ids: list[str] = []
    overrides: dict[str, str] = {}
    for item in spec.split(","):
        track_id, sep, language = item.partition("=")
        track_id = track_id.strip()
        if not track_id:
            continue
        track_ids.append(track_id)
        if sep:
            language = language.strip()
            if not language:
                raise SelectionFileError(f"Missing language for track {track_id}")
            overrides[track_id] = language
    return track_ids, overrides
