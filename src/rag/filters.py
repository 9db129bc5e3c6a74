"""
Document-level search filters.
"""

from __future__ import annotations

from typing import Optional

from .models import Document, SearchFilters


def passes_filters(document: Document, filters: Optional[SearchFilters]) -> bool:
    """True if the document satisfies every active filter."""
    if filters is None:
        return True
    meta = document.metadata

    if filters.platform and meta.platform != filters.platform:
        return False

    if filters.category and meta.category != filters.category:
        return False

    if filters.tech_stack:
        doc_stack = set(meta.tech_stack or [])
        if not any(tech in doc_stack for tech in filters.tech_stack):
            return False

    if filters.date_range is not None and not filters.date_range.contains(meta.last_updated):
        return False

    return True
