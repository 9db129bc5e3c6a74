"""
In-memory index: documents, their chunks and the corpus vocabulary.

An ``IndexSnapshot`` is built in full and never modified afterwards, so a
published snapshot can be read from any number of threads.
"""

from __future__ import annotations

import dataclasses
import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from .config import ChunkingOptions
from .models import Chunk, Document
from .text_processor import chunk_document, generate_tfidf_embedding
from .utils import iter_terms

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class IndexSnapshot:
    """One generation of the search index."""

    documents: Mapping[str, Document]
    chunks: Mapping[str, Chunk]
    vocabulary: Mapping[str, int]

    @classmethod
    def empty(cls) -> "IndexSnapshot":
        return cls(
            documents=MappingProxyType({}),
            chunks=MappingProxyType({}),
            vocabulary=MappingProxyType({}),
        )

    def document_for(self, chunk: Chunk) -> Optional[Document]:
        return self.documents.get(chunk.document_id)


def build_index(
    documents: Iterable[Document],
    options: Optional[ChunkingOptions] = None,
) -> IndexSnapshot:
    """
    Chunk every document and embed every chunk.

    Embeddings are computed in a second pass, once every chunk's terms are in
    the vocabulary, so all vectors share the same dimensions.
    """
    doc_map: Dict[str, Document] = {}
    raw_chunks: Dict[str, Chunk] = {}
    vocabulary: Dict[str, int] = {}

    for doc in documents:
        previous = doc_map.get(doc.id)
        if previous is not None:
            # later duplicates replace earlier ones
            for stale in previous.chunks:
                raw_chunks.pop(stale.id, None)
        chunks = chunk_document(doc, options)
        for chunk in chunks:
            for term in iter_terms(chunk.content):
                if term not in vocabulary:
                    vocabulary[term] = len(vocabulary)
            raw_chunks[chunk.id] = chunk
        doc_map[doc.id] = dataclasses.replace(doc, chunks=chunks)

    chunk_map: Dict[str, Chunk] = {
        cid: dataclasses.replace(
            chunk, embedding=generate_tfidf_embedding(chunk.content, vocabulary)
        )
        for cid, chunk in raw_chunks.items()
    }
    for doc_id, doc in doc_map.items():
        embedded: List[Chunk] = [chunk_map[c.id] for c in doc.chunks if c.id in chunk_map]
        doc_map[doc_id] = dataclasses.replace(doc, chunks=embedded)

    logger.info(
        "Indexed %d documents into %d chunks (vocabulary size %d)",
        len(doc_map),
        len(chunk_map),
        len(vocabulary),
    )
    return IndexSnapshot(
        documents=MappingProxyType(doc_map),
        chunks=MappingProxyType(chunk_map),
        vocabulary=MappingProxyType(vocabulary),
    )
