"""Mix context for structured logging.

Provides context propagation using contextvars so that every log record
emitted while a remux job runs carries its job id and output path, even
from stage worker threads.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_job_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "job_id", default=None
)
_output_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "output_path", default=None
)


def set_mix_context(job_id: str, output_path: Path | str | None = None) -> None:
    """Set the current mix context."""
    _job_id.set(job_id)
    _output_path.set(str(output_path) if output_path is not None else None)


def get_mix_context() -> tuple[str | None, str | None]:
    """Get current mix context as (job_id, output_path)."""
    return _job_id.get(), _output_path.get()


@contextmanager
def mix_context(
    job_id: str,
    output_path: Path | str | None = None,
) -> Generator[None, None, None]:
    """Context manager for a remux job.

    Sets the mix context on entry and restores the previous one on exit.

    Example:
        with mix_context("1718000000000000000", "/out/movie.mkv"):
            logger.info("Building intermediate files")
    """
    old_job_id, old_output_path = get_mix_context()
    try:
        set_mix_context(job_id, output_path)
        yield
    finally:
        _job_id.set(old_job_id)
        _output_path.set(old_output_path)


class MixContextFilter(logging.Filter):
    """Logging filter that injects mix context into log records.

    Adds job_id and output_path attributes for JSON output, plus a compact
    mix_tag like "[mix:1718000000000000000] " for text output.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        job_id, output_path = get_mix_context()

        record.job_id = job_id
        record.output_path = output_path
        record.mix_tag = f"[mix:{job_id}] " if job_id else ""

        return True  # Never filter out records
