"""Recent Posts Route — newest records across every kind.

Invariants:
    - Always 200; internal failures degrade to []
"""

from fastapi import APIRouter, Depends

from portfolio.api.dependencies import get_app_settings, get_store
from portfolio.config import Settings
from portfolio.infrastructure.json_store import JsonFileStore
from portfolio.services.recent_posts import fetch_recent_posts

router = APIRouter(prefix="/api/recent-posts", tags=["recent-posts"])


@router.get("")
async def recent_posts(
    store: JsonFileStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    return await fetch_recent_posts(store, limit=settings.recent_posts_limit)
