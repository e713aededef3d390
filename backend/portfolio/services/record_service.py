"""Record Service — list/create/update/delete for one resource kind.

Invariants:
    - Every mutation is read → pure transform → full overwrite, under the kind's lock
    - A failed write raises StorageError and nothing is returned to the caller
    - Update/delete on a missing id raise RecordNotFoundError before any write

Design Decisions:
    - Per-kind lock around read-modify-write: concurrent writers in one process
      cannot lose each other's updates
    - Clock injectable for deterministic ids/dates in tests
"""

import logging
from collections.abc import Callable
from datetime import datetime

from portfolio.core.errors import ErrorContext, RecordNotFoundError
from portfolio.core.records import (
    build_record, find_record_index, merge_record, next_record_id, now_utc,
    prepend_record, remove_record, replace_record,
)
from portfolio.core.resource_kinds import ResourceKind
from portfolio.infrastructure.json_store import JsonFileStore

logger = logging.getLogger(__name__)


class RecordService:
    def __init__(
        self,
        kind: ResourceKind,
        store: JsonFileStore,
        clock: Callable[[], datetime] = now_utc,
    ):
        self.kind = kind
        self.store = store
        self._clock = clock

    async def list_all(self) -> list[dict]:
        return await self.store.read_array(self.kind.filename)

    async def create(self, fields: dict) -> dict:
        filename = self.kind.filename
        async with self.store.lock(filename):
            records = await self.store.read_array(filename)
            moment = self._clock()
            record = build_record(
                self.kind, fields, next_record_id(records, moment), moment,
            )
            await self.store.write_array(filename, prepend_record(records, record))
        logger.info(
            f"Created {self.kind.label.lower()}",
            extra={"kind": self.kind.slug, "record_id": str(record["id"])},
        )
        return record

    async def update(self, record_id: str, changes: dict) -> dict:
        filename = self.kind.filename
        async with self.store.lock(filename):
            records = await self.store.read_array(filename)
            index = self._index_or_404(records, record_id)
            merged = merge_record(records[index], changes, self._clock())
            await self.store.write_array(
                filename, replace_record(records, index, merged),
            )
        logger.info(
            f"Updated {self.kind.label.lower()}",
            extra={"kind": self.kind.slug, "record_id": record_id},
        )
        return merged

    async def delete(self, record_id: str) -> None:
        filename = self.kind.filename
        async with self.store.lock(filename):
            records = await self.store.read_array(filename)
            index = self._index_or_404(records, record_id)
            await self.store.write_array(filename, remove_record(records, index))
        logger.info(
            f"Deleted {self.kind.label.lower()}",
            extra={"kind": self.kind.slug, "record_id": record_id},
        )

    def _index_or_404(self, records: list[dict], record_id: str) -> int:
        index = find_record_index(records, record_id)
        if index is None:
            raise RecordNotFoundError(
                self.kind.label, record_id, ErrorContext(kind=self.kind.slug),
            )
        return index
