"""
Shared result construction for the retrieval stages.
"""

from __future__ import annotations

from typing import Optional

from .index import IndexSnapshot
from .models import Chunk, MatchType, ResultMetadata, SearchResult


def make_result(
    index: IndexSnapshot,
    chunk: Chunk,
    score: float,
    match_type: MatchType,
) -> Optional[SearchResult]:
    """Build a SearchResult for a chunk, or None if its document is unknown."""
    document = index.document_for(chunk)
    if document is None:
        return None
    return SearchResult(
        id=chunk.id,
        content=chunk.content,
        score=score,
        relevance_score=score,
        source=document.metadata.source,
        metadata=ResultMetadata(
            document_id=document.id,
            chunk_id=chunk.id,
            category=document.metadata.category,
            match_type=match_type,
            platform=document.metadata.platform,
        ),
    )
