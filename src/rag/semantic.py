"""
Vector retrieval over term-frequency chunk embeddings.
"""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from .filters import passes_filters
from .index import IndexSnapshot
from .models import SearchFilters, SearchResult
from .retriever import make_result

MIN_SIMILARITY = 0.1


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine of the angle between two vectors; 0.0 if either has zero norm."""
    if a.shape != b.shape:
        return 0.0
    norm_a = float(np.linalg.norm(a))
    norm_b = float(np.linalg.norm(b))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return float(np.clip(np.dot(a, b) / (norm_a * norm_b), -1.0, 1.0))


def semantic_search(
    index: IndexSnapshot,
    query_embedding: np.ndarray,
    filters: Optional[SearchFilters] = None,
) -> List[SearchResult]:
    """Chunks whose cosine similarity to the query exceeds MIN_SIMILARITY."""
    results: List[SearchResult] = []
    for chunk in index.chunks.values():
        if chunk.embedding is None:
            continue
        document = index.document_for(chunk)
        if document is None or not passes_filters(document, filters):
            continue

        similarity = cosine_similarity(query_embedding, chunk.embedding)
        if similarity <= MIN_SIMILARITY:
            continue
        result = make_result(index, chunk, similarity, "semantic")
        if result is not None:
            results.append(result)

    results.sort(key=lambda r: r.score, reverse=True)
    return results
