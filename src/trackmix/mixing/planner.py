"""Mix planning: validate and consolidate caller selections.

The planner turns an unordered list of raw selections into a MixPlan with
at most one consolidated selection per kind. It touches the filesystem only
to check that source files exist.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from trackmix.domain.models import (
    KIND_ORDER,
    ConsolidatedSelection,
    MixPlan,
    MixSelection,
    TrackKind,
)
from trackmix.errors import (
    ConflictingSourceError,
    MissingVideoTrackError,
    NoTracksProvidedError,
    SourceMissingError,
)

logger = logging.getLogger(__name__)


@dataclass
class _KindGroup:
    """Accumulator for every selection of one kind."""

    source_path: str
    kind: str
    track_ids: list[str] = field(default_factory=list)
    language_overrides: dict[str, str] = field(default_factory=dict)

    def merge(self, track_ids: list[str], overrides: dict[str, str]) -> None:
        for track_id in track_ids:
            if track_id not in self.track_ids:
                self.track_ids.append(track_id)
        # Later selections win on conflicting overrides
        self.language_overrides.update(overrides)

    def consolidate(self) -> ConsolidatedSelection:
        return ConsolidatedSelection(
            source_path=Path(self.source_path),
            kind=self.kind,
            track_ids=list(self.track_ids),
            language_overrides=dict(self.language_overrides),
        )


def clean_track_ids(track_ids: Iterable[str]) -> list[str]:
    """Trim ids, drop blanks and de-duplicate while preserving order."""
    cleaned: list[str] = []
    for track_id in track_ids:
        track_id = str(track_id).strip()
        if track_id and track_id not in cleaned:
            cleaned.append(track_id)
    return cleaned


def _validate_source(raw_path: str | Path) -> str:
    path = str(raw_path).strip()
    if not path or not Path(path).exists():
        raise SourceMissingError(path)
    return path


def plan_mix(selections: Iterable[MixSelection]) -> MixPlan:
    """Validate selections and consolidate them into one entry per kind.

    Selections are processed in order. A selection whose ids are all blank
    is skipped together with its language overrides. Selections of the same
    kind must come from the same source file; their ids are merged in first
    seen order and their overrides merged with later entries winning.

    Args:
        selections: Raw caller selections.

    Returns:
        MixPlan holding at most one selection per built kind.

    Raises:
        NoTracksProvidedError: If no selections are given.
        SourceMissingError: If a source path is empty or does not exist.
        ConflictingSourceError: If one kind names two different sources.
        MissingVideoTrackError: If no video tracks remain selected.
    """
    selections = list(selections)
    if not selections:
        raise NoTracksProvidedError()

    groups: dict[str, _KindGroup] = {}
    for selection in selections:
        source = _validate_source(selection.source_path)

        track_ids = clean_track_ids(selection.track_ids)
        if not track_ids:
            logger.debug(
                "Skipping selection with no track ids",
                extra={"source": source, "kind": selection.kind},
            )
            continue

        kind = str(selection.kind).lower()
        group = groups.get(kind)
        if group is None:
            group = groups[kind] = _KindGroup(source_path=source, kind=kind)
        elif group.source_path != source:
            raise ConflictingSourceError(kind, group.source_path, source)

        overrides = {
            str(track_id).strip(): lang
            for track_id, lang in selection.language_overrides.items()
        }
        group.merge(track_ids, overrides)

    for kind in groups:
        if kind not in KIND_ORDER:
            logger.warning(
                "Ignoring selection of unsupported track kind: %s",
                kind,
                extra={"kind": kind, "source": groups[kind].source_path},
            )

    if TrackKind.VIDEO.value not in groups:
        raise MissingVideoTrackError()

    plan = MixPlan(
        **{kind: groups[kind].consolidate() for kind in KIND_ORDER if kind in groups}
    )
    logger.debug(
        "Planned mix",
        extra={
            "kinds": plan.kinds,
            "track_count": sum(len(s.track_ids) for s in plan.selections()),
        },
    )
    return plan
