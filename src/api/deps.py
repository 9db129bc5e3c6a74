"""
Build the RAG system for the API (used in lifespan).
"""

from __future__ import annotations

import logging

from src.rag import RAGConfig, RAGSystem, load_platform_records

logger = logging.getLogger(__name__)


def build_rag_system(config: RAGConfig | None = None) -> RAGSystem:
    """
    Create a RAGSystem and index the configured platform records.

    If the records file is missing the system is returned unindexed, so search
    routes answer 503 until documents are added.
    """
    if config is None:
        config = RAGConfig.from_env()
    system = RAGSystem(config)
    try:
        records = load_platform_records(config.platforms_path)
    except FileNotFoundError as e:
        logger.warning("Starting without platform data: %s", e)
        return system
    system.initialize(records)
    return system
