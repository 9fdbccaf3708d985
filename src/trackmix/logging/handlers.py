"""JSON log formatting for trackmix.

One record becomes one JSON object per line, so log files can be fed to
``jq`` or a log shipper without further parsing.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries; anything else came in through extra=
_RECORD_ATTRS: frozenset[str] = frozenset(logging.makeLogRecord({}).__dict__) | {
    "message",
    "asctime",
    "taskName",
}

# Set by MixContextFilter. mix_tag only matters to the text format.
_MIX_FIELDS: tuple[str, ...] = ("job_id", "output_path")
_TEXT_ONLY_FIELDS: frozenset[str] = frozenset({"mix_tag"})


def extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Return the fields a caller attached to a record with ``extra=``."""
    skipped = _RECORD_ATTRS | _TEXT_ONLY_FIELDS | set(_MIX_FIELDS)
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in skipped and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """Format log records as JSON objects.

    Keys written:

    - ``timestamp``: record creation time, ISO-8601 in UTC
    - ``level`` and ``message``
    - ``logger``: omitted for the root logger
    - ``context``: ``extra=`` fields plus the mix job id and output path
    - ``exception``: formatted traceback, when the record carries one
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.name != "root":
            entry["logger"] = record.name

        context = extra_fields(record)
        for name in _MIX_FIELDS:
            value = getattr(record, name, None)
            if value:
                context[name] = value
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
