"""Structured Logging — JSON lines describing Store writes and intercepted requests.

Invariants:
    - Every line carries timestamp (when the record was made), level, logger and message
    - Store context (resource, record_id) is top-level; request context
      (method, path, status) is grouped under "request"
    - setup_logging is idempotent: calling it again replaces the handler it installed

Design Decisions:
    - httpx's own per-request INFO line is raised to WARNING: intercepted calls are
      already logged by the Dispatcher with their outcome
"""

import json
import logging
from datetime import datetime, timezone

_STORE_FIELDS = ("resource", "record_id", "error_code")
_REQUEST_FIELDS = ("method", "path", "status")


def _extras(record: logging.LogRecord, names: tuple[str, ...]) -> dict:
    return {
        name: record.__dict__[name]
        for name in names
        if record.__dict__.get(name) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_extras(record, _STORE_FIELDS),
        }
        request = _extras(record, _REQUEST_FIELDS)
        if request:
            log["request"] = request
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class _TodomockHandler(logging.StreamHandler):
    """Marker type so setup_logging can find the handler it installed."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the todomock handler on the root logger."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, _TodomockHandler)]:
        root.removeHandler(existing)

    handler = _TodomockHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return handler
