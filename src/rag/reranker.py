"""
Heuristic second-stage re-ranking of fused results.
"""

from __future__ import annotations

import dataclasses
from typing import Iterable, List

from .models import SearchResult
from .utils import split_sentences

STRUCTURE_BOOST = 1.1
PREFIX_BOOST = 1.2
CONTAINS_BOOST = 1.1
MIN_SENTENCES = 2
MAX_SENTENCES = 6


def rerank_score(query: str, content: str, score: float) -> float:
    """Apply the structure boost, then the query-position boost."""
    sentence_count = len(split_sentences(content))
    if MIN_SENTENCES <= sentence_count <= MAX_SENTENCES:
        score *= STRUCTURE_BOOST

    lower_content = content.lower()
    lower_query = query.lower()
    if lower_content.startswith(lower_query):
        score *= PREFIX_BOOST
    elif lower_query in lower_content:
        score *= CONTAINS_BOOST
    return score


def rerank(query: str, results: Iterable[SearchResult]) -> List[SearchResult]:
    """
    Re-rank results by passage structure and where the query occurs.

    Args:
        query: User query
        results: Fused results to re-rank

    Returns:
        New list sorted by adjusted score.
    """
    reranked = [
        dataclasses.replace(r, score=rerank_score(query, r.content, r.score))
        for r in results
    ]
    reranked.sort(key=lambda r: r.score, reverse=True)
    return reranked
