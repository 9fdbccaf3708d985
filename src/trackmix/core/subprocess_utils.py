"""Running ffprobe and mkvmerge.

run_tool() is the single entry point the probe and remux code use. It
captures output as text, applies the configured timeout and turns every
kind of failure into a ToolError subclass.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - trackmix drives external media tools
import time
from dataclasses import dataclass
from pathlib import Path

from trackmix.errors import ToolExitError, ToolSpawnError, ToolTimeoutError

logger = logging.getLogger(__name__)

_NEEDS_QUOTES = frozenset(' \t"')


@dataclass(frozen=True)
class CommandResult:
    """Output and exit status of a finished process."""

    stdout: str
    stderr: str
    returncode: int


def format_arg(arg: str) -> str:
    """Return arg as it should appear in a displayed command line.

    Arguments with a space, tab or double quote get wrapped in double
    quotes, inner quotes escaped with a backslash. Display only; the
    result is never executed.
    """
    if _NEEDS_QUOTES.isdisjoint(arg):
        return arg
    return '"{}"'.format(arg.replace('"', '\\"'))


def format_command_line(program: str, args: list[str | Path]) -> str:
    """Join program and args into one readable line, e.g. for error output."""
    return " ".join(format_arg(str(part)) for part in (program, *args))


def run_command(
    args: list[str | Path],
    timeout: float | None = None,
) -> CommandResult:
    """Run a command to completion with output captured.

    Args:
        args: Executable followed by its arguments.
        timeout: Seconds before giving up; None or 0 means no limit.

    Raises:
        subprocess.TimeoutExpired: The timeout elapsed.
        OSError: The executable could not be started.
    """
    argv = list(map(str, args))
    program = Path(argv[0]).name if argv else "unknown"
    logger.debug("Running %s", " ".join(argv), extra={"command": program})

    started = time.monotonic()
    proc = subprocess.run(  # nosec B603 - argv[0] is a located tool, no shell
        argv,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        timeout=timeout or None,
    )
    logger.debug(
        "%s exited with %d",
        program,
        proc.returncode,
        extra={
            "command": program,
            "duration_seconds": round(time.monotonic() - started, 3),
        },
    )
    return CommandResult(proc.stdout or "", proc.stderr or "", proc.returncode)


def run_tool(
    tool_name: str,
    tool_path: Path,
    args: list[str | Path],
    timeout: float | None = None,
    with_command_line: bool = False,
) -> CommandResult:
    """Run a located tool and require it to succeed.

    Args:
        tool_name: Name used in messages, such as "mkvmerge".
        tool_path: Executable to run.
        args: Arguments after the executable.
        timeout: Seconds before giving up; None or 0 means no limit.
        with_command_line: Put a readable command line on ToolExitError.

    Raises:
        ToolSpawnError: The tool could not be started.
        ToolTimeoutError: The timeout elapsed.
        ToolExitError: The tool exited with a non-zero code.
    """
    log_extra = {"command": tool_name}
    try:
        result = run_command([tool_path, *args], timeout=timeout)
    except subprocess.TimeoutExpired as e:
        logger.warning("%s killed after %ss", tool_name, e.timeout, extra=log_extra)
        raise ToolTimeoutError(tool_name, e.timeout) from e
    except OSError as e:
        logger.error("Cannot start %s: %s", tool_name, e, extra=log_extra)
        raise ToolSpawnError(tool_name, e) from e

    if result.returncode == 0:
        return result

    logger.error(
        "%s failed with exit code %d", tool_name, result.returncode, extra=log_extra
    )
    raise ToolExitError(
        tool_name,
        result.returncode,
        stdout=result.stdout,
        stderr=result.stderr,
        command_line=format_command_line(tool_name, args)
        if with_command_line
        else None,
    )
