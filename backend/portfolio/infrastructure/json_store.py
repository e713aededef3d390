"""JSON File Store — one JSON array per backing file under a data directory.

Invariants:
    - Missing backing file reads as [] (not an error)
    - Unreadable/corrupt/non-array content raises StorageError("read")
    - Writes overwrite the whole file; the data directory is created on demand
    - Any write failure raises StorageError("write"); nothing is acknowledged
    - lock(filename) serializes read-modify-write cycles per backing file

Design Decisions:
    - asyncio.to_thread for file IO: keeps the event loop free without an async file library
    - Plain overwrite, no temp-file rename: a crash mid-write is an accepted risk
"""

import asyncio
import json
import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from portfolio.core.errors import ErrorContext, StorageError

logger = logging.getLogger(__name__)


class JsonFileStore:
    """Reads and writes JSON arrays for each resource kind."""

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir)
        self._locks: dict[str, asyncio.Lock] = {}

    def path_for(self, filename: str) -> Path:
        return self.data_dir / filename

    @asynccontextmanager
    async def lock(self, filename: str) -> AsyncIterator[None]:
        """Hold the per-file lock for the duration of a read-modify-write."""
        lock = self._locks.setdefault(filename, asyncio.Lock())
        async with lock:
            yield

    async def read_array(self, filename: str) -> list[dict]:
        return await asyncio.to_thread(self._read_sync, filename)

    async def write_array(self, filename: str, records: list[dict]) -> None:
        await asyncio.to_thread(self._write_sync, filename, records)

    def _read_sync(self, filename: str) -> list[dict]:
        path = self.path_for(filename)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info(f"No data file yet: {filename}")
            return []
        except OSError as e:
            logger.error(f"Failed to read {filename}: {e}")
            raise StorageError(
                "Failed to read data", "read",
                ErrorContext(debug_info={"file": filename}),
            ) from e
        try:
            data = json.loads(raw) if raw.strip() else []
        except json.JSONDecodeError as e:
            logger.error(f"Corrupt data file {filename}: {e}")
            raise StorageError(
                "Failed to read data", "read",
                ErrorContext(debug_info={"file": filename}),
            ) from e
        if not isinstance(data, list):
            raise StorageError(
                "Failed to read data", "read",
                ErrorContext(debug_info={"file": filename, "type": type(data).__name__}),
            )
        return data

    def _write_sync(self, filename: str, records: list[dict]) -> None:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            payload = json.dumps(records, indent=2, ensure_ascii=False)
            self.path_for(filename).write_text(payload, encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error writing data file {filename}: {e}")
            raise StorageError(
                "Failed to save data", "write",
                ErrorContext(debug_info={"file": filename}),
            ) from e

    def is_writable(self) -> bool:
        """Readiness check: data dir exists (or can be created) and is writable."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            return False
        return os.access(self.data_dir, os.W_OK)
