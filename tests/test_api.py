"""
Tests for the FastAPI routes.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.api.main import app


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch):
    """Client with the bundled platform data indexed."""
    monkeypatch.delenv("RAG_PLATFORMS_PATH", raising=False)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def empty_client(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Client whose platform file is missing, so nothing is indexed."""
    monkeypatch.setenv("RAG_PLATFORMS_PATH", str(tmp_path / "missing.json"))
    with TestClient(app) as c:
        yield c


def test_health(client: TestClient):
    """GET /api/health reports the indexed document count."""
    r = client.get("/api/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["documents_loaded"] == 5
    assert data["is_indexed"] is True


def test_stats(client: TestClient):
    r = client.get("/api/stats")
    assert r.status_code == 200
    data = r.json()
    assert data["total_documents"] == 5
    assert data["total_chunks"] >= 5
    assert data["vocabulary_size"] > 0
    assert data["is_indexed"] is True


def test_search_requires_body(client: TestClient):
    """POST /api/search without body returns 422."""
    r = client.post("/api/search", json={})
    assert r.status_code == 422


def test_search_with_query(client: TestClient):
    r = client.post("/api/search", json={"query": "cursor code editor", "max_results": 3})
    assert r.status_code == 200
    data = r.json()
    assert data["query"] == "cursor code editor"
    assert 0 < len(data["results"]) <= 3
    for hit in data["results"]:
        assert hit["match_type"] in ("semantic", "keyword", "hybrid")
        assert hit["source"] == "Platform Database"
    assert data["search_stats"]["total_documents"] == 5
    assert isinstance(data["suggestions"], list)


def test_search_with_platform_filter(client: TestClient):
    r = client.post(
        "/api/search",
        json={"query": "code editor", "filters": {"platform": "cursor"}},
    )
    assert r.status_code == 200
    results = r.json()["results"]
    assert results
    assert all(hit["document_id"] == "platform-Cursor" for hit in results)


def test_blank_search_returns_no_results(client: TestClient):
    r = client.post("/api/search", json={"query": "   "})
    assert r.status_code == 200
    assert r.json()["results"] == []


def test_add_documents_then_search(client: TestClient):
    r = client.post(
        "/api/documents",
        json={
            "documents": [
                {
                    "id": "zanzibar-guide",
                    "title": "Zanzibar guide",
                    "content": "Zanzibar deployment guide. Zanzibar spice islands.",
                }
            ]
        },
    )
    assert r.status_code == 200
    assert r.json()["total_documents"] == 6

    r = client.post("/api/search", json={"query": "zanzibar"})
    results = r.json()["results"]
    assert results
    assert results[0]["document_id"] == "zanzibar-guide"
    assert results[0]["category"] == "user-content"


def test_add_documents_requires_documents(client: TestClient):
    r = client.post("/api/documents", json={"documents": []})
    assert r.status_code == 422


def test_search_unavailable_without_index(empty_client: TestClient):
    """Search answers 503 while nothing is indexed."""
    r = empty_client.post("/api/search", json={"query": "cursor"})
    assert r.status_code == 503
    assert "detail" in r.json()

    health = empty_client.get("/api/health").json()
    assert health["is_indexed"] is False
    assert health["documents_loaded"] == 0


def test_search_with_naive_date_range(client: TestClient):
    """Date-range bounds sent without a timezone are treated as UTC."""
    r = client.post(
        "/api/search",
        json={
            "query": "code editor",
            "filters": {
                "date_range": {"start": "2000-01-01T00:00:00", "end": "2100-01-01T00:00:00"}
            },
        },
    )
    assert r.status_code == 200
    assert r.json()["results"]
