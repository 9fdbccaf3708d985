"""Process exit codes for the trackmix CLI.

Codes are grouped by decade so scripts can test a range:

    0       success
    1       unexpected failure
    11-12   bad configuration or selections
    20      an input file does not exist
    30      ffprobe or mkvmerge cannot be found
    40      a tool run or a filesystem operation failed
    51      tool output could not be understood
"""

from enum import IntEnum

from trackmix.errors import (
    FilesystemError,
    InputValidationError,
    OutputParseError,
    SourceMissingError,
    ToolError,
    ToolNotFoundError,
    TrackmixError,
)


class ExitCode(IntEnum):
    SUCCESS = 0
    GENERAL_ERROR = 1
    CONFIG_ERROR = 11
    INVALID_SELECTION = 12
    TARGET_NOT_FOUND = 20
    TOOL_NOT_AVAILABLE = 30
    OPERATION_FAILED = 40
    PARSE_ERROR = 51


# Checked in order; the first matching class decides
_ERROR_CODES = (
    (ToolNotFoundError, ExitCode.TOOL_NOT_AVAILABLE),
    (SourceMissingError, ExitCode.TARGET_NOT_FOUND),
    (InputValidationError, ExitCode.INVALID_SELECTION),
    (OutputParseError, ExitCode.PARSE_ERROR),
    ((ToolError, FilesystemError), ExitCode.OPERATION_FAILED),
)


def exit_code_for(error: TrackmixError) -> ExitCode:
    """Return the exit code the CLI reports for error."""
    for error_type, code in _ERROR_CODES:
        if isinstance(error, error_type):
            return code
    return ExitCode.GENERAL_ERROR
