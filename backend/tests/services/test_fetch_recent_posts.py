"""Recent Posts service — cap, tagging, and silent degradation."""

import pytest

from portfolio.core.resource_kinds import RESOURCE_KINDS
from portfolio.infrastructure.json_store import JsonFileStore
from portfolio.services.recent_posts import fetch_recent_posts


@pytest.fixture
def store(tmp_path):
    return JsonFileStore(tmp_path / "data")


async def test_no_data_returns_empty_list(store):
    assert await fetch_recent_posts(store) == []


async def test_returns_at_most_limit_across_kinds(store):
    for kind in RESOURCE_KINDS:
        await store.write_array(kind.filename, [
            {"id": i, "title": f"{kind.slug}-{i}", "date": f"2024-0{i}-01"}
            for i in range(1, 4)
        ])

    result = await fetch_recent_posts(store, limit=5)

    assert len(result) == 5
    assert all(r["date"] == "2024-03-01" for r in result[:4])
    assert {r["type"] for r in result[:4]} == {k.slug for k in RESOURCE_KINDS}


async def test_any_read_failure_degrades_to_empty(store):
    await store.write_array("papers.json", [{"id": 1, "date": "2024-01-01"}])
    store.path_for("experiments.json").write_text("{broken")

    assert await fetch_recent_posts(store) == []
