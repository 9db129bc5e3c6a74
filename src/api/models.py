"""
Request and response models for the RAG API.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class DateRangeIn(BaseModel):
    start: datetime
    end: datetime


class FiltersIn(BaseModel):
    """Optional document filters; all given filters must match."""

    platform: Optional[str] = None
    category: Optional[str] = None
    tech_stack: List[str] = Field(default_factory=list)
    date_range: Optional[DateRangeIn] = None


class SearchRequest(BaseModel):
    """Request body for POST /api/search."""

    query: str = Field(..., description="User query; blank queries return no results")
    context: Optional[str] = None
    filters: Optional[FiltersIn] = None
    semantic_weight: Optional[float] = Field(None, ge=0)
    keyword_weight: Optional[float] = Field(None, ge=0)
    max_results: Optional[int] = Field(None, ge=1, le=100)
    rerank_results: Optional[bool] = None


class SearchHit(BaseModel):
    """Single search result."""

    chunk_id: str
    document_id: str
    content: str
    score: float
    relevance_score: float
    source: str
    category: str
    platform: Optional[str] = None
    match_type: str


class SearchStatsOut(BaseModel):
    total_documents: int
    search_time: float
    semantic_results_count: int
    keyword_results_count: int
    reranking_applied: bool


class SearchResponse(BaseModel):
    """Response for POST /api/search."""

    query: str
    results: List[SearchHit] = Field(default_factory=list)
    search_stats: SearchStatsOut
    suggestions: List[str] = Field(default_factory=list)


class DocumentIn(BaseModel):
    """A plain-text document to add to the index."""

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    content: str
    category: str = "user-content"
    platform: Optional[str] = None
    tech_stack: List[str] = Field(default_factory=list)
    source: str = "User Upload"


class AddDocumentsRequest(BaseModel):
    """Request body for POST /api/documents."""

    documents: List[DocumentIn] = Field(..., min_length=1)


class StatsResponse(BaseModel):
    """Response for GET /api/stats and POST /api/documents."""

    total_documents: int = 0
    total_chunks: int = 0
    vocabulary_size: int = 0
    is_indexed: bool = False


class HealthResponse(BaseModel):
    """Response for GET /api/health."""

    status: str = "ok"
    documents_loaded: int = 0
    is_indexed: bool = False
