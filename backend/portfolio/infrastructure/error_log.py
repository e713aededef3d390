"""Error Log File — append-only JSON lines for unhandled request failures.

Invariants:
    - One line per entry: timestamp, error, stack, method, url, ip, userAgent
    - Logs directory created on demand
    - A failure to write is reported via the standard logger and never raised,
      so the error handler that calls this cannot recurse
"""

import json
import logging
import traceback
from pathlib import Path

from portfolio.core.records import format_timestamp, now_utc

logger = logging.getLogger(__name__)

ERROR_LOG_FILENAME = "error.log"


def format_stack(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


class ErrorLogWriter:
    def __init__(self, logs_dir: Path | str):
        self.logs_dir = Path(logs_dir)

    @property
    def path(self) -> Path:
        return self.logs_dir / ERROR_LOG_FILENAME

    def write(
        self,
        exc: BaseException,
        method: str,
        url: str,
        ip: str | None,
        user_agent: str | None,
    ) -> bool:
        """Append one entry. Returns False if the log file could not be written."""
        entry = {
            "timestamp": format_timestamp(now_utc()),
            "error": str(exc),
            "stack": format_stack(exc),
            "method": method,
            "url": url,
            "ip": ip,
            "userAgent": user_agent,
        }
        try:
            self.logs_dir.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(json.dumps(entry, ensure_ascii=False) + "\n")
        except OSError as e:
            logger.error(f"Could not write error log {self.path}: {e}")
            return False
        return True
