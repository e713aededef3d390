"""Structured Logging — JSON formatter and setup for stdout logs.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (kind, record_id, client, error_code, path) surfaced when present
    - JSON format by default, human-readable when LOG_FORMAT=text

Design Decisions:
    - setup_logging called once on startup via lifespan
    - Handler replaced, not stacked, so repeated create_app() calls in tests don't duplicate lines
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "kind", "record_id", "client", "error_code", "path", "method", "status_code",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


_handler: logging.Handler | None = None


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure root logging for the application."""
    global _handler
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    if _handler is not None:
        logging.root.removeHandler(_handler)
    _handler = handler
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
