"""
Tests for the RAG system facade, platform record mapping and configuration.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from src.rag import (
    Document,
    DocumentMetadata,
    NotIndexedError,
    RAGConfig,
    RAGSystem,
    SearchConfig,
    SearchFilters,
    load_platform_records,
    platform_to_document,
)
from src.rag.config import DEFAULT_PLATFORMS_PATH


def make_doc(doc_id: str, content: str) -> Document:
    return Document(
        id=doc_id,
        content=content,
        metadata=DocumentMetadata(
            title=doc_id,
            category="notes",
            source="test",
            last_updated=datetime(2024, 1, 1, tzinfo=timezone.utc),
        ),
    )


@pytest.fixture
def platform_records() -> list[dict]:
    return [
        {
            "name": "Cursor",
            "description": "AI code editor",
            "category": "IDE",
            "features": [{"featureName": "React previews"}, "TypeScript support"],
            "integrations": [{"serviceName": "GitHub"}],
            "pricing": [{"planName": "Pro", "price": "$20"}],
        },
        {
            "name": "Replit",
            "description": "Cloud development environment with an AI agent",
            "category": "Cloud IDE",
            "features": [{"name": "Node.js hosting"}],
        },
        {},
    ]


def test_platform_content_section_order(platform_records: list[dict]):
    """Sections are labeled and ordered Platform, Description, Category, Features, Integrations, Pricing."""
    doc = platform_to_document(platform_records[0], 0)

    assert doc.content == (
        "Platform: Cursor\n\n"
        "Description: AI code editor\n\n"
        "Category: IDE\n\n"
        "Features: React previews, TypeScript support\n\n"
        "Integrations: GitHub\n\n"
        "Pricing: Pro: $20"
    )
    assert doc.id == "platform-Cursor"
    assert doc.metadata.title == "Cursor"
    assert doc.metadata.category == "IDE"
    assert doc.metadata.platform == "cursor"
    assert doc.metadata.tech_stack == ["React", "TypeScript"]
    assert doc.metadata.source == "Platform Database"
    assert doc.metadata.word_count == len(doc.content.split())
    assert doc.chunks == []


def test_malformed_records_do_not_raise():
    empty = platform_to_document({}, 3)
    assert empty.id == "platform-3"
    assert empty.metadata.title == "Platform 3"
    assert empty.metadata.category == "Platform"
    assert empty.metadata.platform is None
    assert empty.content == ""

    garbage = platform_to_document("not a record", 0)
    assert garbage.content == ""

    odd = platform_to_document({"name": "Thing", "features": "not a list", "pricing": [None]}, 1)
    assert odd.content == "Platform: Thing\n\nPricing: "
    assert odd.metadata.platform is None


def test_initialize_and_search(platform_records: list[dict]):
    system = RAGSystem()
    system.initialize(platform_records)

    stats = system.get_stats()
    assert stats.total_documents == 3
    assert stats.is_indexed is True

    response = system.search("cloud development agent")
    assert response.results
    assert response.results[0].metadata.document_id == "platform-Replit"
    assert response.results[0].source == "Platform Database"


def test_search_before_initialize_raises():
    with pytest.raises(NotIndexedError):
        RAGSystem().search("anything")


def test_search_options_are_merged(platform_records: list[dict]):
    system = RAGSystem()
    system.initialize(platform_records)

    limited = system.search("editor agent cloud", max_results=1)
    assert len(limited.results) <= 1

    filtered = system.search("editor agent cloud", filters=SearchFilters(platform="cursor"))
    assert all(r.metadata.platform == "cursor" for r in filtered.results)

    no_rerank = system.search("editor", rerank_results=False)
    assert no_rerank.search_stats.reranking_applied is False


def test_add_documents_reindexes_everything():
    """Two additions of 3 and 2 documents leave all 5 indexed with a rebuilt vocabulary."""
    system = RAGSystem()
    system.add_documents(
        [
            make_doc("a", "Alpaca wool sweaters."),
            make_doc("b", "Bicycle repair manual."),
            make_doc("c", "Cheddar cheese recipes."),
        ]
    )
    first_vocab_size = system.get_stats().vocabulary_size

    system.add_documents(
        [
            make_doc("d", "Dolphin migration patterns."),
            make_doc("e", "Elephant memory studies."),
        ]
    )
    stats = system.get_stats()
    index = system.engine.index

    assert stats.total_documents == 5
    assert stats.vocabulary_size > first_vocab_size
    assert {"alpaca", "bicycle", "cheddar", "dolphin", "elephant"} <= set(index.vocabulary)
    for chunk in index.chunks.values():
        assert chunk.embedding.shape == (len(index.vocabulary),)

    response = system.search("alpaca")
    assert [r.metadata.document_id for r in response.results] == ["a"]


def test_search_config_merged_ignores_none():
    base = SearchConfig()
    merged = base.merged(semantic_weight=0.2, max_results=None)

    assert merged.semantic_weight == 0.2
    assert merged.keyword_weight == 0.3
    assert merged.max_results == 10
    assert merged.rerank_results is True


def test_search_config_rejects_negative_max_results():
    with pytest.raises(ValueError):
        SearchConfig(max_results=-1)


def test_config_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("RAG_SEMANTIC_WEIGHT", "0.5")
    monkeypatch.setenv("RAG_KEYWORD_WEIGHT", "0.5")
    monkeypatch.setenv("RAG_MAX_RESULTS", "3")
    monkeypatch.setenv("RAG_RERANK_RESULTS", "false")
    monkeypatch.setenv("RAG_CHUNK_SIZE", "500")
    monkeypatch.setenv("RAG_OVERLAP_SIZE", "50")
    monkeypatch.setenv("RAG_PLATFORMS_PATH", str(tmp_path / "p.json"))

    config = RAGConfig.from_env()

    assert config.search == SearchConfig(
        semantic_weight=0.5, keyword_weight=0.5, max_results=3, rerank_results=False
    )
    assert config.chunking.chunk_size == 500
    assert config.chunking.overlap_size == 50
    assert config.chunking.respect_sentences is True
    assert config.platforms_path == tmp_path / "p.json"


def test_load_platform_records(tmp_path: Path, platform_records: list[dict]):
    path = tmp_path / "platforms.json"
    path.write_text(json.dumps(platform_records), encoding="utf-8")
    assert load_platform_records(path) == platform_records

    wrapped = tmp_path / "wrapped.json"
    wrapped.write_text(json.dumps({"platforms": platform_records[:1]}), encoding="utf-8")
    assert load_platform_records(wrapped) == platform_records[:1]

    with pytest.raises(FileNotFoundError):
        load_platform_records(tmp_path / "missing.json")


def test_bundled_platform_data_indexes():
    records = load_platform_records(DEFAULT_PLATFORMS_PATH)
    system = RAGSystem()
    system.initialize(records)

    assert system.get_stats().total_documents == len(records) == 5
    response = system.search("code editor", filters=SearchFilters(platform="cursor"))
    assert response.results
    assert all(r.metadata.document_id == "platform-Cursor" for r in response.results)


def test_failed_reindex_keeps_previous_documents(monkeypatch: pytest.MonkeyPatch):
    """If indexing raises, the held document set still matches the published index."""
    system = RAGSystem()
    system.add_documents([make_doc("a", "Alpaca wool sweaters.")])

    def boom(documents):
        raise RuntimeError("indexing failed")

    monkeypatch.setattr(system.engine, "index_documents", boom)
    with pytest.raises(RuntimeError):
        system.add_documents([make_doc("b", "Bicycle repair manual.")])

    assert [d.id for d in system.documents] == ["a"]
    assert system.get_stats().total_documents == 1
