"""Domain models for trackmix.

This package contains the track and mix request models shared by the
introspector, planner and executor layers.
"""

from trackmix.domain.models import (
    KIND_ORDER,
    ConsolidatedSelection,
    MixPlan,
    MixSelection,
    RemuxJob,
    RemuxState,
    Track,
    TrackKind,
    TrackProbeResult,
)

__all__ = [
    "KIND_ORDER",
    "ConsolidatedSelection",
    "MixPlan",
    "MixSelection",
    "RemuxJob",
    "RemuxState",
    "Track",
    "TrackKind",
    "TrackProbeResult",
]
