"""API test fixtures — isolated app per test + httpx async client.

Invariants:
    - Every test gets its own data/logs directories under tmp_path
    - Creation rate limit raised in the default fixture; rate-limit tests build their own app
    - error_client does not re-raise app exceptions, so 500 responses can be asserted
"""

import pytest
from httpx import ASGITransport, AsyncClient

from portfolio.config import Settings
from portfolio.main import create_app


def make_settings(tmp_path, **overrides) -> Settings:
    values = {
        "data_dir": tmp_path / "data",
        "logs_dir": tmp_path / "logs",
        "public_dir": tmp_path / "public",
        "environment": "development",
        "create_rate_limit": 1000,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path)


@pytest.fixture
def app_factory(tmp_path):
    """Build extra apps with overridden settings (e.g. real rate limits)."""
    def _factory(**overrides):
        return create_app(make_settings(tmp_path, **overrides))
    return _factory


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def error_client(app):
    """Client that returns 500 responses instead of raising app exceptions."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c


PAPER = {
    "title": "Attention Is All You Need",
    "authors": "Vaswani et al.",
    "summary": "Transformers replace recurrence with attention.",
    "content": "Full review text.",
}


@pytest.fixture
def paper_payload():
    return dict(PAPER)
