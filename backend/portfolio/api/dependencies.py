"""Request Dependencies — per-app objects resolved from app.state.

Invariants:
    - Nothing here is a module-level singleton; everything hangs off request.app.state
    - enforce_create_rate_limit is a no-op when rate limiting is disabled
"""

from fastapi import Request

from portfolio.config import Settings
from portfolio.infrastructure.json_store import JsonFileStore
from portfolio.services.record_service import RecordService


def client_address(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> JsonFileStore:
    return request.app.state.store


def record_service_for(slug: str):
    """Build a dependency returning the RecordService registered for `slug`."""
    def get_record_service(request: Request) -> RecordService:
        return request.app.state.record_services[slug]
    return get_record_service


def enforce_create_rate_limit(request: Request) -> None:
    """Charge one creation to the caller; raises RateLimitExceededError when spent."""
    limiter = request.app.state.create_limiter
    if limiter is not None:
        limiter.hit(client_address(request))
