"""
API routes: search, documents, health, stats.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from src.rag import (
    DateRange,
    Document,
    DocumentMetadata,
    NotIndexedError,
    RAGSystem,
    SearchFilters,
)

from .models import (
    AddDocumentsRequest,
    DocumentIn,
    FiltersIn,
    HealthResponse,
    SearchHit,
    SearchRequest,
    SearchResponse,
    SearchStatsOut,
    StatsResponse,
)

router = APIRouter(prefix="/api", tags=["api"])


def _get_system(request: Request) -> Optional[RAGSystem]:
    return getattr(request.app.state, "rag_system", None)


def _unavailable(detail: str) -> JSONResponse:
    return JSONResponse(status_code=503, content={"detail": detail})


def _to_filters(filters: Optional[FiltersIn]) -> Optional[SearchFilters]:
    if filters is None:
        return None
    date_range = None
    if filters.date_range is not None:
        date_range = DateRange(start=filters.date_range.start, end=filters.date_range.end)
    return SearchFilters(
        platform=filters.platform,
        category=filters.category,
        tech_stack=list(filters.tech_stack),
        date_range=date_range,
    )


def _to_document(doc: DocumentIn) -> Document:
    return Document(
        id=doc.id,
        content=doc.content,
        metadata=DocumentMetadata(
            title=doc.title,
            category=doc.category,
            platform=doc.platform,
            tech_stack=list(doc.tech_stack),
            source=doc.source,
            last_updated=datetime.now(timezone.utc),
            word_count=len(doc.content.split()),
        ),
    )


def _stats(system: RAGSystem) -> StatsResponse:
    stats = system.get_stats()
    return StatsResponse(
        total_documents=stats.total_documents,
        total_chunks=stats.total_chunks,
        vocabulary_size=stats.vocabulary_size,
        is_indexed=stats.is_indexed,
    )


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    """Health check."""
    system = _get_system(request)
    if system is None:
        return HealthResponse(status="ok", documents_loaded=0, is_indexed=False)
    stats = system.get_stats()
    return HealthResponse(
        status="ok",
        documents_loaded=stats.total_documents,
        is_indexed=stats.is_indexed,
    )


@router.get("/stats", response_model=StatsResponse)
async def stats(request: Request) -> StatsResponse:
    """Index statistics."""
    system = _get_system(request)
    if system is None:
        return StatsResponse()
    return _stats(system)


@router.post("/search", response_model=SearchResponse)
async def search_endpoint(request: Request, body: SearchRequest) -> SearchResponse | JSONResponse:
    """Hybrid search over the indexed documents."""
    system = _get_system(request)
    if system is None:
        return _unavailable("Service unavailable: RAG system not initialized.")
    try:
        response = await asyncio.to_thread(
            system.search,
            body.query,
            filters=_to_filters(body.filters),
            context=body.context,
            semantic_weight=body.semantic_weight,
            keyword_weight=body.keyword_weight,
            max_results=body.max_results,
            rerank_results=body.rerank_results,
        )
    except NotIndexedError as e:
        return _unavailable(f"Service unavailable: {e}")

    hits = [
        SearchHit(
            chunk_id=r.metadata.chunk_id,
            document_id=r.metadata.document_id,
            content=r.content,
            score=round(r.score, 6),
            relevance_score=round(r.relevance_score, 6),
            source=r.source,
            category=r.metadata.category,
            platform=r.metadata.platform,
            match_type=r.metadata.match_type,
        )
        for r in response.results
    ]
    s = response.search_stats
    return SearchResponse(
        query=response.query,
        results=hits,
        search_stats=SearchStatsOut(
            total_documents=s.total_documents,
            search_time=s.search_time,
            semantic_results_count=s.semantic_results_count,
            keyword_results_count=s.keyword_results_count,
            reranking_applied=s.reranking_applied,
        ),
        suggestions=response.suggestions,
    )


@router.post("/documents", response_model=StatsResponse)
async def add_documents(request: Request, body: AddDocumentsRequest) -> StatsResponse | JSONResponse:
    """Add plain-text documents and re-index the full document set."""
    system = _get_system(request)
    if system is None:
        return _unavailable("Service unavailable: RAG system not initialized.")
    documents = [_to_document(d) for d in body.documents]
    await asyncio.to_thread(system.add_documents, documents)
    return _stats(system)
