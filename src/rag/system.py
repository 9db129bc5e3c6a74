"""
RAG system: the public entry point over the hybrid search engine.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Iterable, List, Optional, Sequence

from .config import RAGConfig
from .hybrid import HybridSearchEngine
from .models import Document, IndexStats, SearchFilters, SearchQuery, SearchResponse
from .platforms import platforms_to_documents

logger = logging.getLogger(__name__)


class RAGSystem:
    """Holds the document set and keeps the engine's index in sync with it."""

    def __init__(self, config: Optional[RAGConfig] = None):
        self.config = config or RAGConfig()
        self.engine = HybridSearchEngine(
            chunking=self.config.chunking,
            search_config=self.config.search,
        )
        self._documents: List[Document] = []
        self._lock = threading.Lock()

    @property
    def documents(self) -> List[Document]:
        return list(self._documents)

    def initialize(self, source_records: Sequence[Any]) -> None:
        """Map platform records to documents and index them, replacing any previous set."""
        documents = platforms_to_documents(source_records)
        with self._lock:
            self.engine.index_documents(documents)
            self._documents = documents
        logger.info("RAG system initialized with %d documents", len(documents))

    def search(
        self,
        query: str,
        *,
        filters: Optional[SearchFilters] = None,
        context: Optional[str] = None,
        semantic_weight: Optional[float] = None,
        keyword_weight: Optional[float] = None,
        max_results: Optional[int] = None,
        rerank_results: Optional[bool] = None,
    ) -> SearchResponse:
        """Search with any given options laid over the configured defaults."""
        search_config = self.config.search.merged(
            semantic_weight=semantic_weight,
            keyword_weight=keyword_weight,
            max_results=max_results,
            rerank_results=rerank_results,
        )
        return self.engine.search(
            SearchQuery(
                query=query,
                context=context,
                filters=filters,
                search_config=search_config,
            )
        )

    def add_documents(self, documents: Iterable[Document]) -> None:
        """Append documents and rebuild the whole index."""
        new_docs = list(documents)
        with self._lock:
            combined = self._documents + new_docs
            self.engine.index_documents(combined)
            self._documents = combined
        logger.info(
            "Added %d documents; %d documents now indexed", len(new_docs), len(self._documents)
        )

    def get_stats(self) -> IndexStats:
        return self.engine.get_index_stats()
