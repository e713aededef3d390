"""Record Operations — pure build/merge/lookup/sort over one kind's array.

Invariants:
    - Functions never mutate their inputs; callers receive new lists/dicts
    - Record ids compare as strings (path parameters arrive as text)
    - A new id is never <= any id already in the array
    - Stored key order: id, kind fields, tags, date[, updatedAt]

Design Decisions:
    - Clock passed in as datetime: deterministic tests without patching time
"""

from datetime import date, datetime, timedelta, timezone

from portfolio.core.resource_kinds import ResourceKind


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def epoch_millis(moment: datetime) -> int:
    return (moment - _EPOCH) // timedelta(milliseconds=1)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a Z suffix."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def next_record_id(records: list[dict], moment: datetime) -> int:
    """Creation-time id, bumped past the largest existing id on clock ties."""
    candidate = epoch_millis(moment)
    existing = [r["id"] for r in records if isinstance(r.get("id"), int)]
    if existing and candidate <= max(existing):
        return max(existing) + 1
    return candidate


def build_record(
    kind: ResourceKind, fields: dict, record_id: int, moment: datetime,
) -> dict:
    """Assemble a stored record from validated fields."""
    record: dict = {"id": record_id}
    for name in kind.field_names:
        if fields.get(name) is not None:
            record[name] = fields[name]
    record["tags"] = list(fields.get("tags") or [])
    record["date"] = moment.astimezone(timezone.utc).date().isoformat()
    return record


def merge_record(existing: dict, changes: dict, moment: datetime) -> dict:
    """Shallow-merge changes over a record, keeping its id and stamping updatedAt."""
    merged = {**existing, **changes}
    merged["id"] = existing["id"]
    merged["updatedAt"] = format_timestamp(moment)
    return merged


def find_record_index(records: list[dict], record_id: str) -> int | None:
    for index, record in enumerate(records):
        if str(record.get("id")) == record_id:
            return index
    return None


def prepend_record(records: list[dict], record: dict) -> list[dict]:
    return [record, *records]


def replace_record(records: list[dict], index: int, record: dict) -> list[dict]:
    return [*records[:index], record, *records[index + 1:]]


def remove_record(records: list[dict], index: int) -> list[dict]:
    return [*records[:index], *records[index + 1:]]


# ─── Aggregation ────────────────────────────────────────────────

def _record_date(record: dict) -> date:
    value = record.get("date")
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            pass
    return date.min


def select_recent(
    arrays: list[tuple[ResourceKind, list[dict]]], limit: int = 5,
) -> list[dict]:
    """Tag records with their category/type and keep the newest `limit` by date.

    Sorting is stable, so records sharing a date keep their kind order and
    in-array order. Records without a parseable date sort last.
    """
    tagged = [
        {**record, "category": kind.category, "type": kind.slug}
        for kind, records in arrays
        for record in records
    ]
    tagged.sort(key=_record_date, reverse=True)
    return tagged[:limit]
