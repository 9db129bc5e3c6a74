"""
Hybrid search engine combining semantic and keyword retrieval with weighted fusion.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Iterable, List, Optional

from .config import ChunkingOptions, SearchConfig
from .exceptions import NotIndexedError
from .filters import passes_filters
from .fusion import weighted_merge
from .index import IndexSnapshot, build_index
from .keyword import keyword_search
from .models import (
    Document,
    IndexStats,
    SearchFilters,
    SearchQuery,
    SearchResponse,
    SearchResult,
    SearchStats,
)
from .reranker import rerank
from .semantic import semantic_search
from .text_processor import generate_tfidf_embedding

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5


class HybridSearchEngine:
    """
    Hybrid searcher over an in-memory index.

    ``index_documents`` builds a complete new index and then swaps it in, so
    concurrent ``search`` calls always see one consistent generation. Indexing
    calls are serialised by a lock.
    """

    def __init__(
        self,
        chunking: Optional[ChunkingOptions] = None,
        search_config: Optional[SearchConfig] = None,
    ):
        self.chunking = chunking or ChunkingOptions()
        self.search_config = search_config or SearchConfig()
        self._index = IndexSnapshot.empty()
        self._is_indexed = False
        self._write_lock = threading.Lock()

    @property
    def is_indexed(self) -> bool:
        return self._is_indexed

    @property
    def index(self) -> IndexSnapshot:
        return self._index

    def index_documents(self, documents: Iterable[Document]) -> None:
        """Replace the index with one built from ``documents``."""
        docs = list(documents)
        logger.info("Indexing %d documents", len(docs))
        with self._write_lock:
            snapshot = build_index(docs, self.chunking)
            self._index = snapshot
            self._is_indexed = True

    def search(self, query: SearchQuery) -> SearchResponse:
        """
        Run the hybrid pipeline for one query.

        Raises:
            NotIndexedError: if no document set has been indexed yet.
        """
        if not self._is_indexed:
            raise NotIndexedError()

        index = self._index
        start = time.perf_counter()
        config = query.search_config or self.search_config
        filters = query.filters
        text = query.query

        if not text or not text.strip():
            return SearchResponse(
                query=text,
                results=[],
                search_stats=SearchStats(
                    total_documents=len(index.documents),
                    search_time=_elapsed_ms(start),
                    semantic_results_count=0,
                    keyword_results_count=0,
                    reranking_applied=config.rerank_results,
                ),
                suggestions=[],
            )

        query_embedding = generate_tfidf_embedding(text, index.vocabulary)
        semantic_results = semantic_search(index, query_embedding, filters)
        keyword_results = keyword_search(index, text, filters)

        results = weighted_merge(
            semantic_results,
            keyword_results,
            semantic_weight=config.semantic_weight,
            keyword_weight=config.keyword_weight,
        )
        if config.rerank_results:
            results = rerank(text, results)

        results = self._filter_and_limit(index, results, filters, config.max_results)
        elapsed = _elapsed_ms(start)
        logger.debug(
            "Search %r: %d semantic, %d keyword, %d returned in %.2f ms",
            text,
            len(semantic_results),
            len(keyword_results),
            len(results),
            elapsed,
        )

        return SearchResponse(
            query=text,
            results=results,
            search_stats=SearchStats(
                total_documents=len(index.documents),
                search_time=elapsed,
                semantic_results_count=len(semantic_results),
                keyword_results_count=len(keyword_results),
                reranking_applied=config.rerank_results,
            ),
            suggestions=self.generate_query_suggestions(text, index),
        )

    @staticmethod
    def _filter_and_limit(
        index: IndexSnapshot,
        results: List[SearchResult],
        filters: Optional[SearchFilters],
        max_results: int,
    ) -> List[SearchResult]:
        if filters is not None and not filters.is_empty():
            kept: List[SearchResult] = []
            for r in results:
                doc = index.documents.get(r.metadata.document_id)
                if doc is not None and passes_filters(doc, filters):
                    kept.append(r)
            results = kept
        return results[:max_results]

    def generate_query_suggestions(
        self, query: str, index: Optional[IndexSnapshot] = None
    ) -> List[str]:
        """Append related vocabulary terms to the query (best effort)."""
        if index is None:
            index = self._index
        words = [w for w in query.lower().split() if w]
        if not words:
            return []

        suggestions: List[str] = []
        for term in index.vocabulary:
            if any(term in w or w in term for w in words):
                suggestions.append(f"{query} {term}")
                if len(suggestions) >= MAX_SUGGESTIONS:
                    break
        return suggestions

    def get_index_stats(self) -> IndexStats:
        index = self._index
        return IndexStats(
            total_documents=len(index.documents),
            total_chunks=len(index.chunks),
            vocabulary_size=len(index.vocabulary),
            is_indexed=self._is_indexed,
        )


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0
