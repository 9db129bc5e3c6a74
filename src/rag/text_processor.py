"""
Text processing for indexing: chunking, keyword extraction, summaries and
term-frequency embeddings.

Everything here is a pure function of its inputs.
"""

from __future__ import annotations

from collections import Counter
from typing import List, Mapping, Optional, Tuple

import numpy as np

from .config import ChunkingOptions
from .models import Chunk, ChunkMetadata, Document
from .utils import iter_terms, normalize_words, sentence_spans, split_sentences

SUMMARY_FIRST_SENTENCE_RATIO = 0.7


def chunk_document(document: Document, options: Optional[ChunkingOptions] = None) -> List[Chunk]:
    """
    Split a document into overlapping chunks.

    With ``respect_sentences`` whole sentences are packed greedily up to
    ``chunk_size`` characters; each new chunk is seeded with the trailing
    ``overlap_size`` characters of the previous one. A single sentence longer
    than ``chunk_size`` is kept whole. Without it, a fixed character window
    slides with stride ``chunk_size - overlap_size``.
    """
    if options is None:
        options = ChunkingOptions()
    content = document.content or ""

    if options.respect_sentences:
        bounds = _sentence_bounds(content, options)
    else:
        bounds = _window_bounds(content, options)

    content_end = len(content.rstrip())
    chunks: List[Chunk] = []
    for start, end in bounds:
        raw = content[start:end]
        text = raw.strip()
        if not text:
            continue
        start_index = start + (len(raw) - len(raw.lstrip()))
        end_index = start_index + len(text)
        chunk_index = len(chunks)
        chunks.append(
            Chunk(
                id=f"{document.id}-chunk-{chunk_index}",
                document_id=document.id,
                content=text,
                start_index=start_index,
                end_index=end_index,
                metadata=ChunkMetadata(
                    chunk_index=chunk_index,
                    overlap_previous=chunk_index > 0,
                    overlap_next=end_index < content_end,
                    keywords=extract_keywords(text),
                    summary=generate_summary(text),
                ),
            )
        )
    return chunks


def _sentence_bounds(content: str, options: ChunkingOptions) -> List[Tuple[int, int]]:
    bounds: List[Tuple[int, int]] = []
    start: Optional[int] = None
    end = 0
    for sent_start, sent_end in sentence_spans(content):
        if start is None:
            start, end = sent_start, sent_end
            continue
        if sent_end - start <= options.chunk_size:
            end = sent_end
            continue
        bounds.append((start, end))
        start = max(start, end - options.overlap_size)
        end = sent_end
    if start is not None:
        bounds.append((start, end))
    return bounds


def _window_bounds(content: str, options: ChunkingOptions) -> List[Tuple[int, int]]:
    bounds: List[Tuple[int, int]] = []
    stride = options.chunk_size - options.overlap_size
    pos = 0
    while pos < len(content):
        end = min(pos + options.chunk_size, len(content))
        bounds.append((pos, end))
        if end >= len(content):
            break
        pos += stride
    return bounds


def extract_keywords(text: str, max_keywords: int = 10) -> List[str]:
    """
    Most frequent terms in ``text``.

    Ties keep first-seen order; that ordering is an implementation detail.
    """
    counts = Counter(iter_terms(text))
    return [term for term, _ in counts.most_common(max_keywords)]


def generate_summary(text: str, max_length: int = 150) -> str:
    """Short extractive summary built from the leading sentences."""
    sentences = split_sentences(text)
    if not sentences:
        return ""

    first = sentences[0].strip()
    if len(first) >= max_length * SUMMARY_FIRST_SENTENCE_RATIO:
        return first[:max_length] + ("..." if len(first) > max_length else "")

    summary = ""
    for sentence in sentences:
        candidate = summary + (". " if summary else "") + sentence.strip()
        if len(candidate) > max_length:
            break
        summary = candidate

    return summary or first[:max_length]


def generate_tfidf_embedding(text: str, vocabulary: Mapping[str, int]) -> np.ndarray:
    """
    Bag-of-words vector over ``vocabulary`` (term -> dimension).

    Despite the name this is term frequency only: each entry is the count of
    the term divided by the number of the text's tokens that are in the
    vocabulary. No inverse document frequency is applied. Text without any
    vocabulary token gives the zero vector.
    """
    embedding = np.zeros(len(vocabulary), dtype=np.float64)
    tokens = [tok for tok in normalize_words(text) if tok in vocabulary]
    if not tokens:
        return embedding
    for tok in tokens:
        embedding[vocabulary[tok]] += 1.0
    embedding /= len(tokens)
    return embedding
