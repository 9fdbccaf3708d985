"""Exception hierarchy for trackmix.

All library errors derive from TrackmixError and carry a human-readable
message that the CLI surfaces verbatim. Nothing in this hierarchy is
retried automatically.
"""

from __future__ import annotations

from pathlib import Path


class TrackmixError(Exception):
    """Base class for all trackmix errors."""


# =============================================================================
# External tool errors
# =============================================================================


class ToolError(TrackmixError):
    """Base class for failures involving an external executable."""

    def __init__(self, tool_name: str, message: str) -> None:
        self.tool_name = tool_name
        super().__init__(message)


class ToolNotFoundError(ToolError):
    """Raised when no candidate location holds the requested tool."""

    def __init__(self, tool_name: str, searched: list[Path] | None = None) -> None:
        self.searched = list(searched or [])
        message = (
            f"Required tool not found: {tool_name}. "
            "Check that the packaged resources include it, or configure "
            f"its path via [tools] {tool_name} in config.toml."
        )
        super().__init__(tool_name, message)


class ToolSpawnError(ToolError):
    """Raised when an external tool cannot be started."""

    def __init__(self, tool_name: str, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(tool_name, f"Failed to run {tool_name}: {cause}")


class ToolTimeoutError(ToolError):
    """Raised when an external tool exceeds its deadline."""

    def __init__(self, tool_name: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(tool_name, f"{tool_name} timed out after {timeout:g}s")


class ToolExitError(ToolError):
    """Raised when an external tool exits with a non-zero status.

    Carries the exit code, captured output and a readable reconstruction
    of the command line. The command line is for diagnostics only.
    """

    def __init__(
        self,
        tool_name: str,
        returncode: int,
        stdout: str = "",
        stderr: str = "",
        command_line: str | None = None,
    ) -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.command_line = command_line

        if command_line is None:
            message = f"{tool_name} failed: {stderr}"
        else:
            output = " ".join(part for part in (stdout.strip(), stderr.strip()) if part)
            message = (
                f"{tool_name} failed (code {returncode}): {output}\n"
                f"Command: {command_line}"
            )
        super().__init__(tool_name, message)


class OutputParseError(TrackmixError):
    """Raised when a tool's structured report cannot be decoded."""

    def __init__(self, tool_name: str, detail: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Failed to parse {tool_name} output: {detail}")


# =============================================================================
# Input validation errors
# =============================================================================


class InputValidationError(TrackmixError):
    """Base class for rejected mix selections."""


class NoTracksProvidedError(InputValidationError):
    """Raised when a mix is requested with no selections at all."""

    def __init__(self) -> None:
        super().__init__("No tracks provided for mixing")


class SourceMissingError(InputValidationError):
    """Raised when a selection's source path is empty or does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        if path:
            message = f"Track source file does not exist: {path}"
        else:
            message = "Track source file path is empty"
        super().__init__(message)


class ConflictingSourceError(InputValidationError):
    """Raised when one kind is selected from two different source files."""

    def __init__(self, kind: str, first: str, second: str) -> None:
        self.kind = kind
        self.first = first
        self.second = second
        super().__init__(
            f"Only one source file is supported per track kind ({kind}): "
            f"{first} vs {second}"
        )


class MissingVideoTrackError(InputValidationError):
    """Raised when no video track is selected."""

    def __init__(self) -> None:
        super().__init__("Select at least one video track before mixing")


class SelectionFileError(InputValidationError):
    """Raised when a selection file or track spec cannot be parsed."""


# =============================================================================
# Filesystem errors
# =============================================================================


class FilesystemError(TrackmixError):
    """Raised when a filesystem operation needed by the pipeline fails."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        self.path = path
        super().__init__(message)
