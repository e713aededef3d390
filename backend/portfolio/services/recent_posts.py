"""Recent Posts — newest records across all four kinds.

Invariants:
    - Never returns more than `limit` records
    - Never raises: any failure is logged and degrades to []
"""

import asyncio
import logging

from portfolio.core.records import select_recent
from portfolio.core.resource_kinds import RESOURCE_KINDS, ResourceKind
from portfolio.infrastructure.json_store import JsonFileStore

logger = logging.getLogger(__name__)


async def fetch_recent_posts(
    store: JsonFileStore,
    limit: int = 5,
    kinds: tuple[ResourceKind, ...] = RESOURCE_KINDS,
) -> list[dict]:
    """Read every kind concurrently and keep the `limit` newest by date."""
    try:
        arrays = await asyncio.gather(
            *(store.read_array(kind.filename) for kind in kinds),
        )
        return select_recent(list(zip(kinds, arrays)), limit)
    except Exception as e:
        logger.warning(f"Error fetching recent posts: {e}", exc_info=True)
        return []
