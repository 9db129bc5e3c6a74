"""
Errors raised by the retrieval engine.
"""

from __future__ import annotations


class RAGError(Exception):
    """Base class for retrieval errors."""


class NotIndexedError(RAGError):
    """Search was called before any document set was indexed."""

    def __init__(self, message: str = "Search index not built. Call index_documents() first."):
        super().__init__(message)
