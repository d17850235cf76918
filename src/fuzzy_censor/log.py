"""JSON line logging for the CLI and the HTTP sidecar.

Context goes in through ``extra={"extra_data": {...}}``; the CLI tags
lines with ``command`` and the sidecar with ``route`` and ``status``.
Input values are never logged.
"""

from __future__ import annotations
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

_HANDLER_FLAG = "_fuzzy_censor"


class JsonFormatter(logging.Formatter):
    """One JSON object per line: time, level, logger, message, context."""

    def format(self, record: logging.LogRecord) -> str:
        line: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        context = getattr(record, "extra_data", None)
        if isinstance(context, dict):
            # context never overrides the fixed keys
            line.update((k, v) for k, v in context.items() if k not in line)
        if record.exc_info:
            line["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


def configure_logging(level: str | int = "WARNING", stream: TextIO | None = None) -> None:
    """Attach a JSON handler to the package logger (idempotent)."""
    logger = logging.getLogger("fuzzy_censor")
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if any(getattr(h, _HANDLER_FLAG, False) for h in logger.handlers):
        return
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonFormatter())
    setattr(handler, _HANDLER_FLAG, True)
    logger.addHandler(handler)
