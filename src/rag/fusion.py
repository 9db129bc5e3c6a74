"""
Weighted score fusion for combining semantic and keyword results.
"""

from __future__ import annotations

import dataclasses
from typing import Dict, List, Sequence

from .models import SearchResult


def weighted_merge(
    semantic: Sequence[SearchResult],
    keyword: Sequence[SearchResult],
    semantic_weight: float = 0.7,
    keyword_weight: float = 0.3,
) -> List[SearchResult]:
    """
    Merge two scored lists by chunk id.

    Args:
        semantic: Semantic results, raw similarity in ``score``.
        keyword: Keyword results, raw keyword score in ``score``.
        semantic_weight: Multiplier for semantic scores.
        keyword_weight: Multiplier for keyword scores.

    Returns:
        Results sorted by fused score. A chunk found by both lists scores
        ``semantic * semantic_weight + keyword * keyword_weight`` and is tagged
        ``hybrid``; a chunk found by one list keeps its weighted score and tag.
        Entries whose fused score is not positive are dropped.
    """
    merged: Dict[str, SearchResult] = {}

    for result in semantic:
        merged[result.id] = dataclasses.replace(result, score=result.score * semantic_weight)

    for result in keyword:
        weighted = result.score * keyword_weight
        existing = merged.get(result.id)
        if existing is None:
            merged[result.id] = dataclasses.replace(result, score=weighted)
            continue
        merged[result.id] = dataclasses.replace(
            existing,
            score=existing.score + weighted,
            metadata=dataclasses.replace(existing.metadata, match_type="hybrid"),
        )

    fused = [r for r in merged.values() if r.score > 0]
    fused.sort(key=lambda r: r.score, reverse=True)
    return fused
