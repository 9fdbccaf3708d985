"""Staged mkvmerge remux executor.

A mix runs in two stages. Stage 1 extracts each selected kind from its
source into an intermediate file inside a per-call temp directory, rewriting
names, flags and languages on the way. Stage 2 combines the intermediate
files into the final output. Intermediate files are removed on success and
left in place on failure for inspection.
"""

from __future__ import annotations

import contextvars
import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from trackmix.core.subprocess_utils import run_tool
from trackmix.domain.models import (
    ConsolidatedSelection,
    MixPlan,
    RemuxJob,
    RemuxState,
)
from trackmix.errors import FilesystemError, MissingVideoTrackError
from trackmix.executor.commands import (
    artifact_path,
    build_combine_args,
    build_stage_args,
    normalize_output_path,
)
from trackmix.logging.context import mix_context
from trackmix.tools.locator import ToolLocator

logger = logging.getLogger(__name__)

TOOL_NAME = "mkvmerge"


def create_job_directory(root: Path) -> tuple[str, Path]:
    """Create a fresh, uniquely named job directory under root.

    The name is a nanosecond timestamp. If a directory of that name already
    exists the timestamp is bumped until creation succeeds, so concurrent
    mixes never share a directory.

    Args:
        root: Temp root, created if missing.

    Returns:
        Tuple of (job_id, directory path).

    Raises:
        FilesystemError: If the directory cannot be created.
    """
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"Cannot create temp root {root}: {e}", root) from e

    stamp = time.time_ns()
    while True:
        candidate = root / str(stamp)
        try:
            candidate.mkdir(exist_ok=False)
        except FileExistsError:
            stamp += 1
            continue
        except OSError as e:
            raise FilesystemError(
                f"Cannot create temp directory {candidate}: {e}", candidate
            ) from e
        return str(stamp), candidate


class RemuxExecutor:
    """Execute a MixPlan with staged mkvmerge runs.

    Example:
        executor = RemuxExecutor(locator, temp_root=get_temp_root(config))
        final = executor.execute(plan, Path("/out/episode01"))
    """

    def __init__(
        self,
        locator: ToolLocator,
        temp_root: Path,
        timeout: float | None = None,
        parallel_stages: bool = False,
    ) -> None:
        """Initialize the executor.

        Args:
            locator: Locator used to resolve mkvmerge.
            temp_root: Directory under which per-call job directories go.
            timeout: Seconds to wait for each mkvmerge run; None or 0
                waits forever.
            parallel_stages: Run the Stage 1 extractions concurrently.
        """
        self._locator = locator
        self._temp_root = temp_root
        self._timeout = timeout
        self._parallel_stages = parallel_stages

    @property
    def temp_root(self) -> Path:
        return self._temp_root

    def execute(self, plan: MixPlan, output_path: Path | str) -> Path:
        """Build the combined output for a plan.

        Args:
            plan: Validated mix plan. Must include a video selection.
            output_path: Requested output; ".mkv" is appended when it has no
                extension and missing parent directories are created.

        Returns:
            The final output path.

        Raises:
            MissingVideoTrackError: If the plan has no video selection.
            ToolNotFoundError: If mkvmerge cannot be found.
            ToolError: If any mkvmerge run fails. No later stage runs.
            FilesystemError: If the output or temp directories cannot be made.
        """
        if plan.video is None:
            raise MissingVideoTrackError()

        output = normalize_output_path(output_path)
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(
                f"Cannot create output directory {output.parent}: {e}", output.parent
            ) from e

        tool_path = self._locator.resolve(TOOL_NAME)
        job_id, temp_dir = create_job_directory(self._temp_root)
        job = RemuxJob(job_id=job_id, temp_dir=temp_dir, output_path=output)

        with mix_context(job_id, output):
            logger.info(
                "Starting mix of %s",
                ", ".join(plan.kinds),
                extra={"temp_dir": str(temp_dir), "output": str(output)},
            )
            start_time = time.monotonic()
            try:
                self._build_artifacts(job, plan, tool_path)

                self._transition(job, RemuxState.COMBINING)
                self._run_mkvmerge(
                    tool_path, build_combine_args(output, job.ordered_artifacts())
                )
            except Exception:
                self._transition(job, RemuxState.FAILED)
                logger.error(
                    "Mix failed; intermediate files kept in %s",
                    temp_dir,
                    extra={"artifacts": [str(p) for p in job.ordered_artifacts()]},
                )
                raise

            self._transition(job, RemuxState.CLEANING_UP)
            self._cleanup(job)
            self._transition(job, RemuxState.DONE)

            logger.info(
                "Mix completed: %s",
                output,
                extra={"elapsed_seconds": round(time.monotonic() - start_time, 3)},
            )
        return output

    def _build_artifacts(self, job: RemuxJob, plan: MixPlan, tool_path: Path) -> None:
        selections = plan.selections()
        if self._parallel_stages and len(selections) > 1:
            self._build_parallel(job, selections, tool_path)
            return

        for selection in selections:
            self._transition(job, RemuxState.building(selection.kind))
            self._build_one(job, selection, tool_path)

    def _build_parallel(
        self,
        job: RemuxJob,
        selections: list[ConsolidatedSelection],
        tool_path: Path,
    ) -> None:
        """Run every extraction concurrently, then report the first failure.

        Artifacts of successful stages are registered even when another
        stage fails. Failures are reported in video, audio, subtitle order.
        """
        futures: dict[str, Future[Path]] = {}
        with ThreadPoolExecutor(
            max_workers=len(selections), thread_name_prefix="trackmix-stage"
        ) as pool:
            for selection in selections:
                self._transition(job, RemuxState.building(selection.kind))
                # Each worker gets a copy of the context so log records keep
                # the job tag
                ctx = contextvars.copy_context()
                futures[selection.kind] = pool.submit(
                    ctx.run, self._extract, job.temp_dir, selection, tool_path
                )

        first_error: BaseException | None = None
        for selection in selections:
            error = futures[selection.kind].exception()
            if error is None:
                job.artifacts[selection.kind] = futures[selection.kind].result()
            elif first_error is None:
                first_error = error
        if first_error is not None:
            raise first_error

    def _build_one(
        self,
        job: RemuxJob,
        selection: ConsolidatedSelection,
        tool_path: Path,
    ) -> None:
        job.artifacts[selection.kind] = self._extract(
            job.temp_dir, selection, tool_path
        )

    def _extract(
        self,
        temp_dir: Path,
        selection: ConsolidatedSelection,
        tool_path: Path,
    ) -> Path:
        target = artifact_path(temp_dir, selection.kind)
        self._run_mkvmerge(tool_path, build_stage_args(selection, target))
        logger.debug(
            "Built %s intermediate",
            selection.kind,
            extra={"artifact": str(target), "track_ids": selection.track_ids},
        )
        return target

    def _run_mkvmerge(self, tool_path: Path, args: list[str]) -> None:
        run_tool(
            TOOL_NAME,
            tool_path,
            args,
            timeout=self._timeout,
            with_command_line=True,
        )

    def _cleanup(self, job: RemuxJob) -> None:
        """Remove intermediate files; failures are logged, never raised."""
        for path in job.ordered_artifacts():
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(
                    "Could not remove intermediate file %s: %s",
                    path,
                    e,
                    extra={"artifact": str(path)},
                )

    @staticmethod
    def _transition(job: RemuxJob, state: RemuxState) -> None:
        logger.debug(
            "Mix state %s -> %s",
            job.state.value,
            state.value,
            extra={"from_state": job.state.value, "to_state": state.value},
        )
        job.state = state
