"""
Simple CLI to run hybrid keyword + vector search over platform records.

Recommended usage (run as a module so package imports work):

    python -m scripts.search_cli "cloud ide with ai agent"
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from src.rag import RAGConfig, RAGSystem, load_platform_records


def _demo(query: str, platforms_path: Path | None, top_k: int, rerank: bool) -> None:
    config = RAGConfig.from_env()
    path = platforms_path or config.platforms_path
    system = RAGSystem(config)
    system.initialize(load_platform_records(path))

    stats = system.get_stats()
    print(
        f"Indexed {stats.total_documents} documents / {stats.total_chunks} chunks "
        f"(vocabulary {stats.vocabulary_size})"
    )
    response = system.search(query, max_results=top_k, rerank_results=rerank)
    print(f"Top {len(response.results)} hybrid results for: {query!r}")
    for r in response.results:
        print("\n====", r.id, "====")
        print(f"Score: {r.score:.4f} ({r.metadata.match_type})")
        print("Category:", r.metadata.category)
        print(r.content[:400].replace("\n", " "), "...")

    s = response.search_stats
    print(
        f"\n{s.semantic_results_count} semantic / {s.keyword_results_count} keyword matches "
        f"in {s.search_time:.2f} ms"
    )
    if response.suggestions:
        print("Try also:", "; ".join(response.suggestions))


def main() -> None:
    parser = argparse.ArgumentParser(description="Hybrid search over platform records")
    parser.add_argument("query", nargs="+", help="Search query")
    parser.add_argument("--platforms", type=Path, default=None, help="Path to platforms JSON")
    parser.add_argument("--top-k", type=int, default=5)
    parser.add_argument("--no-rerank", action="store_true", help="Disable heuristic re-ranking")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    _demo(" ".join(args.query), args.platforms, args.top_k, not args.no_rerank)


if __name__ == "__main__":
    main()
