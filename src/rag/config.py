"""
Configuration for RAG retrieval pipeline.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[2]
DEFAULT_PLATFORMS_PATH = ROOT / "data" / "platforms.json"


@dataclass(frozen=True)
class SearchConfig:
    """
    Per-query search settings.

    Weights are applied as given; they are not required to sum to 1.
    """

    semantic_weight: float = 0.7
    keyword_weight: float = 0.3
    max_results: int = 10
    rerank_results: bool = True

    def __post_init__(self) -> None:
        if self.max_results < 0:
            raise ValueError(f"max_results must be >= 0, got {self.max_results}")

    def merged(
        self,
        *,
        semantic_weight: Optional[float] = None,
        keyword_weight: Optional[float] = None,
        max_results: Optional[int] = None,
        rerank_results: Optional[bool] = None,
    ) -> "SearchConfig":
        """Return a copy with every non-None override applied."""
        overrides = {
            "semantic_weight": semantic_weight,
            "keyword_weight": keyword_weight,
            "max_results": max_results,
            "rerank_results": rerank_results,
        }
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


@dataclass(frozen=True)
class ChunkingOptions:
    """Settings for splitting documents into chunks."""

    chunk_size: int = 1000
    overlap_size: int = 200
    respect_sentences: bool = True

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
        if self.overlap_size < 0 or self.overlap_size >= self.chunk_size:
            raise ValueError(
                f"overlap_size must be in [0, chunk_size), got {self.overlap_size}"
            )


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw else default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw else default


@dataclass
class RAGConfig:
    """Configuration for RAG retrieval."""

    search: SearchConfig = field(default_factory=SearchConfig)
    chunking: ChunkingOptions = field(default_factory=ChunkingOptions)
    platforms_path: Path = DEFAULT_PLATFORMS_PATH

    @classmethod
    def from_env(cls) -> "RAGConfig":
        """Build configuration from RAG_* environment variables (and a project .env)."""
        env_file = ROOT / ".env"
        if env_file.exists():
            load_dotenv(env_file)

        search = SearchConfig(
            semantic_weight=_env_float("RAG_SEMANTIC_WEIGHT", 0.7),
            keyword_weight=_env_float("RAG_KEYWORD_WEIGHT", 0.3),
            max_results=_env_int("RAG_MAX_RESULTS", 10),
            rerank_results=_env_bool("RAG_RERANK_RESULTS", True),
        )
        chunking = ChunkingOptions(
            chunk_size=_env_int("RAG_CHUNK_SIZE", 1000),
            overlap_size=_env_int("RAG_OVERLAP_SIZE", 200),
            respect_sentences=_env_bool("RAG_RESPECT_SENTENCES", True),
        )
        platforms_path = os.getenv("RAG_PLATFORMS_PATH")
        return cls(
            search=search,
            chunking=chunking,
            platforms_path=Path(platforms_path) if platforms_path else DEFAULT_PLATFORMS_PATH,
        )
