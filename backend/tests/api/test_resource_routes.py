"""Resource Routes — CRUD over HTTP for every kind.

Invariants:
    - POST returns {success, data} and the record lands at index 0
    - Create-then-list returns the input plus server-assigned fields only
    - PUT/DELETE on a missing id → 404 "<Label> not found", array unchanged
    - Validation failures → 400 listing every violated field
"""

import re

import pytest

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

VALID_BODIES = {
    "papers": {"title": "A", "authors": "B", "summary": "C", "content": "D"},
    "experiments": {
        "title": "Ablation", "description": "d", "methodology": "m",
        "results": "r", "conclusion": "c",
    },
    "algorithms": {
        "title": "Two sum", "problem": "p", "solution": "s",
        "complexity": "O(n)", "code": "def f(): ...",
    },
    "course-notes": {
        "title": "Week 1", "course": "CS101", "week": "1",
        "topic": "Intro", "content": "notes",
    },
}


async def test_list_empty_kind_returns_empty_array(client):
    res = await client.get("/api/papers")
    assert res.status_code == 200
    assert res.json() == []


async def test_create_paper_example(client):
    res = await client.post(
        "/api/papers",
        json={"title": "A", "authors": "B", "summary": "C", "content": "D"},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    data = body["data"]
    assert isinstance(data["id"], int)
    assert DATE_RE.match(data["date"])
    assert data == {
        "id": data["id"], "title": "A", "authors": "B", "summary": "C",
        "content": "D", "tags": [], "date": data["date"],
    }


@pytest.mark.parametrize("slug", list(VALID_BODIES))
async def test_create_then_list_round_trip(client, slug):
    payload = {**VALID_BODIES[slug], "tags": ["study"]}
    created = (await client.post(f"/api/{slug}", json=payload)).json()["data"]

    listed = (await client.get(f"/api/{slug}")).json()

    assert listed == [created]
    server_fields = {"id", "date"}
    assert {k: v for k, v in listed[0].items() if k not in server_fields} == payload


async def test_new_records_go_to_index_zero(client, paper_payload):
    for title in ("first", "second", "third"):
        await client.post("/api/papers", json={**paper_payload, "title": title})

    listed = (await client.get("/api/papers")).json()
    assert [r["title"] for r in listed] == ["third", "second", "first"]
    assert len({r["id"] for r in listed}) == 3


async def test_create_stores_stripped_strings(client, paper_payload):
    res = await client.post(
        "/api/papers", json={**paper_payload, "title": "  padded  ", "tags": [" ml "]},
    )
    assert res.json()["data"]["title"] == "padded"
    assert res.json()["data"]["tags"] == ["ml"]


async def test_create_ignores_client_supplied_id_and_unknown_keys(client, paper_payload):
    res = await client.post(
        "/api/papers", json={**paper_payload, "id": 1, "rating": 5},
    )
    data = res.json()["data"]
    assert data["id"] != 1
    assert "rating" not in data


async def test_create_persists_to_backing_file(client, settings, paper_payload):
    await client.post("/api/papers", json=paper_payload)
    assert (settings.data_dir / "papers.json").is_file()


async def test_create_validation_lists_every_field(client):
    res = await client.post("/api/papers", json={"title": "", "tags": "x"})
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    fields = {e["field"] for e in body["errors"]}
    assert {"title", "authors", "summary", "content", "tags"} <= fields


async def test_create_with_non_object_body_is_400(client):
    res = await client.post("/api/papers", json=["not", "an", "object"])
    assert res.status_code == 400
    assert res.json()["success"] is False


async def test_create_with_malformed_json_is_400(client):
    res = await client.post(
        "/api/papers", content=b"{oops", headers={"content-type": "application/json"},
    )
    assert res.status_code == 400


async def test_update_example(client, paper_payload):
    created = (await client.post("/api/papers", json=paper_payload)).json()["data"]

    res = await client.put(
        f"/api/papers/{created['id']}",
        json={"title": "A2", "authors": "B", "summary": "C", "content": "D"},
    )

    assert res.status_code == 200
    data = res.json()["data"]
    assert res.json()["success"] is True
    assert data["id"] == created["id"]
    assert data["title"] == "A2"
    assert data["date"] == created["date"]
    assert data["updatedAt"]
    assert (await client.get("/api/papers")).json() == [data]


async def test_update_accepts_partial_body(client, paper_payload):
    created = (await client.post("/api/papers", json=paper_payload)).json()["data"]
    res = await client.put(f"/api/papers/{created['id']}", json={"summary": "short"})
    data = res.json()["data"]
    assert data["summary"] == "short"
    assert data["title"] == paper_payload["title"]


async def test_update_missing_id_is_404_and_array_unchanged(client, paper_payload):
    await client.post("/api/papers", json=paper_payload)
    before = (await client.get("/api/papers")).json()

    res = await client.put("/api/papers/999", json={"title": "X"})

    assert res.status_code == 404
    assert res.json()["success"] is False
    assert res.json()["message"] == "Paper not found"
    assert (await client.get("/api/papers")).json() == before


async def test_update_invalid_body_is_400(client, paper_payload):
    created = (await client.post("/api/papers", json=paper_payload)).json()["data"]
    res = await client.put(f"/api/papers/{created['id']}", json={"title": "x" * 201})
    assert res.status_code == 400


async def test_delete_removes_only_that_record(client, paper_payload):
    ids = [
        (await client.post("/api/papers", json=paper_payload)).json()["data"]["id"]
        for _ in range(3)
    ]

    res = await client.delete(f"/api/papers/{ids[1]}")

    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "Paper deleted successfully"}
    remaining = [r["id"] for r in (await client.get("/api/papers")).json()]
    assert remaining == [ids[2], ids[0]]


async def test_delete_missing_id_example(client, paper_payload):
    await client.post("/api/papers", json=paper_payload)
    before = (await client.get("/api/papers")).json()

    res = await client.delete("/api/papers/missing-id")

    assert res.status_code == 404
    assert res.json() == {
        "success": False, "message": "Paper not found", "code": "RECORD_NOT_FOUND",
    }
    assert (await client.get("/api/papers")).json() == before


async def test_not_found_label_per_kind(client):
    res = await client.delete("/api/course-notes/1")
    assert res.json()["message"] == "Course note not found"


async def test_kinds_do_not_share_storage(client, paper_payload):
    await client.post("/api/papers", json=paper_payload)
    assert (await client.get("/api/experiments")).json() == []


async def test_list_returns_file_contents_verbatim(client, settings):
    settings.data_dir.mkdir(parents=True)
    legacy = '[{"id": 1, "title": "hand-written", "extra": true}]'
    (settings.data_dir / "algorithms.json").write_text(legacy)

    res = await client.get("/api/algorithms")
    assert res.json() == [{"id": 1, "title": "hand-written", "extra": True}]
