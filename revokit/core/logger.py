"""JSON logging for the ``revokit`` package loggers."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any

PACKAGE_LOGGER = "revokit"

# ``extra=`` keys the revocation services attach to their records
REVOCATION_EXTRAS = ("token_ref", "removed", "namespace")


class JSONFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        for key in REVOCATION_EXTRAS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _resolve_level(level: str | int) -> int | str:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else level.upper()


def configure_logging(level: str | int = "INFO", *, stream: IO[str] | None = None) -> logging.Logger:
    """
    Send ``revokit.*`` records to ``stream`` (stdout by default) as JSON.

    Only the package logger is touched; the host application's root logger
    keeps its own handlers. Calling this again replaces the previous handler.

    :param level: Level name (``"DEBUG"``) or number.
    :param stream: Text stream for the handler.
    :returns: The configured package logger.
    """
    pkg = logging.getLogger(PACKAGE_LOGGER)
    for existing in [h for h in pkg.handlers if isinstance(h.formatter, JSONFormatter)]:
        pkg.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter())
    pkg.addHandler(handler)
    pkg.setLevel(_resolve_level(level))
    pkg.propagate = False
    return pkg


__all__ = ["JSONFormatter", "configure_logging", "PACKAGE_LOGGER"]
