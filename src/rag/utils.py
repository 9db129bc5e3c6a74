"""
Utility functions for RAG module.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Tuple

PUNCT_RE = re.compile(r"[^\w\s]")
SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
SENTENCE_SPAN_RE = re.compile(r"[^.!?]+(?:[.!?]+|$)")

STOP_WORDS = frozenset({
    "the", "be", "to", "of", "and", "a", "in", "that", "have",
    "i", "it", "for", "not", "on", "with", "he", "as", "you",
    "do", "at", "this", "but", "his", "by", "from", "they",
    "we", "say", "her", "she", "or", "an", "will", "my",
    "one", "all", "would", "there", "their", "what", "so",
    "up", "out", "if", "about", "who", "get", "which", "go", "me",
})

MIN_TERM_LENGTH = 4


def normalize_words(text: str) -> List[str]:
    """Lower-case, strip punctuation and split on whitespace."""
    return PUNCT_RE.sub("", text.lower()).split()


def iter_terms(text: str) -> Iterable[str]:
    """Extract vocabulary-eligible terms (longer than 3 chars, not stop-words)."""
    for tok in normalize_words(text):
        if len(tok) < MIN_TERM_LENGTH:
            continue
        if tok in STOP_WORDS:
            continue
        yield tok


def split_sentences(text: str) -> List[str]:
    """Split on runs of sentence punctuation, dropping blank pieces."""
    return [s for s in SENTENCE_SPLIT_RE.split(text) if s.strip()]


def sentence_spans(text: str) -> List[Tuple[int, int]]:
    """
    Character spans of the sentences in ``text``.

    Each span starts at the first non-blank character of the sentence and ends
    after its terminating punctuation (or at the end of the text).
    """
    spans: List[Tuple[int, int]] = []
    for match in SENTENCE_SPAN_RE.finditer(text):
        body = match.group(0)
        stripped = body.lstrip()
        if not SENTENCE_SPLIT_RE.sub("", stripped).strip():
            continue
        start = match.start() + (len(body) - len(stripped))
        spans.append((start, match.end()))
    return spans
