"""Remux execution for trackmix.

- RemuxExecutor: Runs a MixPlan through staged mkvmerge invocations
- commands: Pure mkvmerge argument builders
"""

from trackmix.executor.commands import (
    ARTIFACT_EXTENSIONS,
    SELECTOR_FLAGS,
    artifact_path,
    build_combine_args,
    build_selector_args,
    build_stage_args,
    build_track_args,
    normalize_output_path,
)
from trackmix.executor.remux import RemuxExecutor, create_job_directory

__all__ = [
    "ARTIFACT_EXTENSIONS",
    "SELECTOR_FLAGS",
    "RemuxExecutor",
    "artifact_path",
    "build_combine_args",
    "build_selector_args",
    "build_stage_args",
    "build_track_args",
    "create_job_directory",
    "normalize_output_path",
]
