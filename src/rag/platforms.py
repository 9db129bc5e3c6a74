"""
Mapping of platform records into indexable documents.

A platform record is a loose mapping with the platform's name, description and
category plus optional lists of features, integrations and pricing tiers.
Records are taken as they come: missing or oddly typed fields produce a
document with less content rather than an error.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .models import Document, DocumentMetadata

logger = logging.getLogger(__name__)

PLATFORM_SOURCE = "Platform Database"
DEFAULT_CATEGORY = "Platform"

PLATFORM_NAMES: Dict[str, str] = {
    "bolt": "bolt",
    "bolt.new": "bolt",
    "cursor": "cursor",
    "lovable": "lovable",
    "replit": "replit",
    "windsurf": "windsurf",
}

TECH_MARKERS = (
    ("react", "React"),
    ("node", "Node.js"),
    ("typescript", "TypeScript"),
)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _pick(item: Any, *keys: str) -> str:
    """First non-empty field of a mapping, or the item itself when it is a plain value."""
    if isinstance(item, Mapping):
        for key in keys:
            value = _text(item.get(key))
            if value:
                return value
        return ""
    return _text(item)


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _feature_names(record: Mapping[str, Any]) -> List[str]:
    names = (_pick(f, "featureName", "feature_name", "name") for f in _as_list(record.get("features")))
    return [n for n in names if n]


def _integration_names(record: Mapping[str, Any]) -> List[str]:
    names = (
        _pick(i, "serviceName", "service_name", "name")
        for i in _as_list(record.get("integrations"))
    )
    return [n for n in names if n]


def _pricing_lines(record: Mapping[str, Any]) -> List[str]:
    lines: List[str] = []
    for tier in _as_list(record.get("pricing")):
        if isinstance(tier, Mapping):
            plan = _pick(tier, "planName", "plan_name", "tierName", "tier_name")
            price = _pick(tier, "price", "pricePerMonth", "price_per_month")
            lines.append(f"{plan}: {price}")
        elif _text(tier):
            lines.append(_text(tier))
    return lines


def extract_platform_content(record: Mapping[str, Any]) -> str:
    """
    Labeled text for a platform.

    Sections appear in a fixed order (Platform, Description, Category,
    Features, Integrations, Pricing) separated by blank lines.
    """
    parts: List[str] = []
    name = _text(record.get("name"))
    description = _text(record.get("description"))
    category = _text(record.get("category"))
    if name:
        parts.append(f"Platform: {name}")
    if description:
        parts.append(f"Description: {description}")
    if category:
        parts.append(f"Category: {category}")

    if isinstance(record.get("features"), (list, tuple)):
        parts.append(f"Features: {', '.join(_feature_names(record))}")
    if isinstance(record.get("integrations"), (list, tuple)):
        parts.append(f"Integrations: {', '.join(_integration_names(record))}")
    if isinstance(record.get("pricing"), (list, tuple)):
        parts.append(f"Pricing: {', '.join(_pricing_lines(record))}")

    return "\n\n".join(parts)


def map_platform_name(name: Optional[str]) -> Optional[str]:
    if not name:
        return None
    return PLATFORM_NAMES.get(name.strip().lower())


def extract_tech_stack(record: Mapping[str, Any]) -> List[str]:
    """Tech-stack tags inferred from feature names."""
    stack: List[str] = []
    for feature in _feature_names(record):
        lower = feature.lower()
        for marker, tag in TECH_MARKERS:
            if marker in lower and tag not in stack:
                stack.append(tag)
    return stack


def platform_to_document(
    record: Any,
    index: int,
    now: Optional[datetime] = None,
) -> Document:
    """Convert one platform record into a Document (never raises on bad data)."""
    if not isinstance(record, Mapping):
        logger.warning("Platform record %d is not a mapping; indexing it empty", index)
        record = {}
    if now is None:
        now = datetime.now(timezone.utc)

    name = _text(record.get("name"))
    content = extract_platform_content(record)
    return Document(
        id=f"platform-{name or index}",
        content=content,
        metadata=DocumentMetadata(
            title=name or f"Platform {index}",
            category=_text(record.get("category")) or DEFAULT_CATEGORY,
            platform=map_platform_name(name),
            tech_stack=extract_tech_stack(record),
            source=PLATFORM_SOURCE,
            last_updated=now,
            word_count=len(content.split()),
        ),
    )


def platforms_to_documents(records: Sequence[Any]) -> List[Document]:
    now = datetime.now(timezone.utc)
    return [platform_to_document(r, i, now=now) for i, r in enumerate(records)]


def load_platform_records(path: Path) -> List[Dict[str, Any]]:
    """Load a JSON array of platform records."""
    if not path.exists():
        raise FileNotFoundError(f"platform records not found at {path}")
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, Mapping):
        data = data.get("platforms", [])
    if not isinstance(data, list):
        logger.warning("Expected a list of platform records in %s, got %s", path, type(data).__name__)
        return []
    return data
