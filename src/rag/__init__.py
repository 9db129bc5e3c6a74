"""
RAG (Retrieval-Augmented Generation) module.

Provides retrieval components for hybrid search over platform documents:
- Sentence-aware chunking, keywords and summaries
- Term-frequency vector (semantic) retrieval
- Keyword retrieval
- Weighted fusion and heuristic re-ranking
"""

from .config import ChunkingOptions, RAGConfig, SearchConfig
from .exceptions import NotIndexedError, RAGError
from .hybrid import HybridSearchEngine
from .index import IndexSnapshot, build_index
from .models import (
    Chunk,
    ChunkMetadata,
    DateRange,
    Document,
    DocumentMetadata,
    IndexStats,
    ResultMetadata,
    SearchFilters,
    SearchQuery,
    SearchResponse,
    SearchResult,
    SearchStats,
)
from .platforms import load_platform_records, platform_to_document
from .semantic import cosine_similarity
from .system import RAGSystem
from .text_processor import (
    chunk_document,
    extract_keywords,
    generate_summary,
    generate_tfidf_embedding,
)

__all__ = [
    "Chunk",
    "ChunkMetadata",
    "ChunkingOptions",
    "DateRange",
    "Document",
    "DocumentMetadata",
    "HybridSearchEngine",
    "IndexSnapshot",
    "IndexStats",
    "NotIndexedError",
    "RAGConfig",
    "RAGError",
    "RAGSystem",
    "ResultMetadata",
    "SearchConfig",
    "SearchFilters",
    "SearchQuery",
    "SearchResponse",
    "SearchResult",
    "SearchStats",
    "build_index",
    "chunk_document",
    "cosine_similarity",
    "extract_keywords",
    "generate_summary",
    "generate_tfidf_embedding",
    "load_platform_records",
    "platform_to_document",
]
