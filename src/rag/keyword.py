"""
Keyword retriever over chunk text.
"""

from __future__ import annotations

from typing import List, Optional

from .filters import passes_filters
from .index import IndexSnapshot
from .models import SearchFilters, SearchResult
from .retriever import make_result
from .utils import normalize_words

MIN_KEYWORD_SCORE = 0.05
MIN_QUERY_TOKEN_LENGTH = 3
EXACT_TOKEN_BONUS = 0.5
PHRASE_BONUS = 2.0
PHRASE_MIN_QUERY_LENGTH = 5


def query_tokens(query: str) -> List[str]:
    """Query words longer than two characters."""
    return [w for w in normalize_words(query) if len(w) >= MIN_QUERY_TOKEN_LENGTH]


def keyword_score(query: str, tokens: List[str], content: str) -> float:
    """
    Score one passage against the query.

    ``matches / passage_words + bonus / query_tokens`` where matches counts
    passage words containing a query token, and the bonus adds 0.5 per query
    token present as a whole word plus 2 when the full query appears verbatim.
    """
    words = normalize_words(content)
    if not tokens or not words:
        return 0.0

    word_set = set(words)
    match_count = 0
    bonus = 0.0
    for tok in tokens:
        match_count += sum(1 for w in words if tok in w)
        if tok in word_set:
            bonus += EXACT_TOKEN_BONUS

    if len(query) > PHRASE_MIN_QUERY_LENGTH and query.lower() in content.lower():
        bonus += PHRASE_BONUS

    return match_count / len(words) + bonus / len(tokens)


def keyword_search(
    index: IndexSnapshot,
    query: str,
    filters: Optional[SearchFilters] = None,
) -> List[SearchResult]:
    """Chunks whose keyword score exceeds MIN_KEYWORD_SCORE."""
    tokens = query_tokens(query)
    if not tokens:
        return []

    results: List[SearchResult] = []
    for chunk in index.chunks.values():
        document = index.document_for(chunk)
        if document is None or not passes_filters(document, filters):
            continue

        score = keyword_score(query, tokens, chunk.content)
        if score <= MIN_KEYWORD_SCORE:
            continue
        result = make_result(index, chunk, score, "keyword")
        if result is not None:
            results.append(result)

    results.sort(key=lambda r: r.score, reverse=True)
    return results
