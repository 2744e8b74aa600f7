"""JSON log formatting for mediashrink.

Tool invocations log their command, exit status and captured output as
``extra`` fields. Captured output is raw bytes, so it is rendered with the
same decoded, truncated preview used in error messages.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import PurePath
from typing import Any

from mediashrink.errors import _preview

# Attributes every LogRecord carries; anything else came in through extra
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


def _render(value: Any) -> Any:
    """JSON fallback for extra values json cannot encode itself."""
    if isinstance(value, (bytes, bytearray)):
        return _preview(bytes(value))
    if isinstance(value, PurePath):
        return str(value)
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    return repr(value)


class JSONFormatter(logging.Formatter):
    """One JSON object per record.

    Keys are ``timestamp`` (ISO-8601, UTC), ``level``, ``message``,
    ``logger`` (omitted for root), ``context`` (the extra fields, if any)
    and ``exception`` (formatted traceback, if any).
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.name != "root":
            entry["logger"] = record.name

        context = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=_render)
