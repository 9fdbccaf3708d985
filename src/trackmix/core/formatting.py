"""Formatting utilities.

This module provides pure functions for formatting data for display.
"""

_SIZE_UNITS: tuple[str, ...] = ("B", "KB", "MB", "GB", "TB")


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    The value is divided by 1024 while it is at least 1024, stopping at TB.
    Byte counts are printed as integers, larger units with two decimals.

    Args:
        size_bytes: File size in bytes.

    Returns:
        Formatted string (e.g., "1023 B", "1.00 KB", "4.20 GB").
    """
    size = float(size_bytes)
    unit_index = 0
    while size >= 1024 and unit_index < len(_SIZE_UNITS) - 1:
        size /= 1024
        unit_index += 1

    if unit_index == 0:
        return f"{size_bytes} {_SIZE_UNITS[0]}"
    return f"{size:.2f} {_SIZE_UNITS[unit_index]}"


def parse_size(value: str | int | None) -> int | None:
    """Parse a byte count reported as a string or integer.

    Args:
        value: Raw size value (ffprobe reports sizes as strings).

    Returns:
        Integer byte count, or None if missing or not a non-negative integer.
    """
    if value is None:
        return None
    try:
        size = int(value)
    except (TypeError, ValueError):
        return None
    return size if size >= 0 else None


def format_optional_size(value: str | int | None) -> str | None:
    """Format a raw reported size, returning None when it cannot be parsed."""
    size = parse_size(value)
    return format_file_size(size) if size is not None else None
