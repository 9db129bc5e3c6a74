"""
Core data types for documents, chunks, queries and search results.
"""

from __future__ import annotations

import dataclasses
from datetime import datetime, timezone
from typing import List, Literal, Optional

import numpy as np

from .config import SearchConfig

MatchType = Literal["semantic", "keyword", "hybrid"]


@dataclasses.dataclass
class DocumentMetadata:
    """Descriptive fields attached to a document."""

    title: str
    category: str
    source: str
    last_updated: datetime
    word_count: int = 0
    platform: Optional[str] = None
    tech_stack: List[str] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class ChunkMetadata:
    chunk_index: int
    overlap_previous: bool
    overlap_next: bool
    keywords: List[str] = dataclasses.field(default_factory=list)
    summary: str = ""


@dataclasses.dataclass
class Chunk:
    """A bounded passage of a document; the unit scored during search."""

    id: str
    document_id: str
    content: str
    start_index: int
    end_index: int
    metadata: ChunkMetadata
    embedding: Optional[np.ndarray] = None


@dataclasses.dataclass
class Document:
    """A unit of content. ``chunks`` stays empty until the document is indexed."""

    id: str
    content: str
    metadata: DocumentMetadata
    chunks: List[Chunk] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class DateRange:
    """Inclusive time window. Datetimes without a timezone are taken as UTC."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        self.start = _as_utc(self.start)
        self.end = _as_utc(self.end)

    def contains(self, moment: datetime) -> bool:
        return self.start <= _as_utc(moment) <= self.end


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclasses.dataclass
class SearchFilters:
    """Document-level filters. Every active filter must pass."""

    platform: Optional[str] = None
    category: Optional[str] = None
    tech_stack: List[str] = dataclasses.field(default_factory=list)
    date_range: Optional[DateRange] = None

    def is_empty(self) -> bool:
        return (
            not self.platform
            and not self.category
            and not self.tech_stack
            and self.date_range is None
        )


@dataclasses.dataclass
class SearchQuery:
    query: str
    context: Optional[str] = None
    filters: Optional[SearchFilters] = None
    search_config: Optional[SearchConfig] = None


@dataclasses.dataclass
class ResultMetadata:
    document_id: str
    chunk_id: str
    category: str
    match_type: MatchType
    platform: Optional[str] = None


@dataclasses.dataclass
class SearchResult:
    """
    One ranked chunk.

    ``score`` is the fused (and possibly re-ranked) score used for ordering;
    ``relevance_score`` is the raw score from the stage that first found the chunk.
    """

    id: str
    content: str
    score: float
    relevance_score: float
    source: str
    metadata: ResultMetadata


@dataclasses.dataclass
class SearchStats:
    total_documents: int
    search_time: float
    semantic_results_count: int
    keyword_results_count: int
    reranking_applied: bool


@dataclasses.dataclass
class SearchResponse:
    query: str
    results: List[SearchResult]
    search_stats: SearchStats
    suggestions: List[str] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class IndexStats:
    total_documents: int
    total_chunks: int
    vocabulary_size: int
    is_indexed: bool
