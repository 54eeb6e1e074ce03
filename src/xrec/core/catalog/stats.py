"""Aggregate views over the raw catalog (stats and category listing)."""

from __future__ import annotations

from collections import Counter
from typing import Any, Iterable

from xrec.core.catalog.models import CatalogItem


def catalog_stats(
    items: Iterable[CatalogItem],
    *,
    version: str = "",
    last_updated: str = "",
) -> dict[str, Any]:
    """Count items by type, by source, and how many are official."""
    by_type: Counter[str] = Counter()
    by_source: Counter[str] = Counter()
    official_count = 0
    total = 0

    for item in items:
        total += 1
        by_type[item.type.value] += 1
        by_source[item.metrics.source.value] += 1
        if item.metrics.is_official:
            official_count += 1

    return {
        "version": version,
        "last_updated": last_updated,
        "total_items": total,
        "by_type": dict(by_type),
        "by_source": dict(by_source),
        "official_count": official_count,
    }


def list_categories(items: Iterable[CatalogItem]) -> dict[str, Any]:
    """List categories with item counts and the item types they contain.

    Categories are sorted by count, descending; ties keep first-seen order.
    """
    counts: dict[str, int] = {}
    types: dict[str, list[str]] = {}
    total = 0

    for item in items:
        total += 1
        counts[item.category] = counts.get(item.category, 0) + 1
        seen = types.setdefault(item.category, [])
        if item.type.value not in seen:
            seen.append(item.type.value)

    categories = sorted(
        ({"name": name, "count": count, "types": types[name]} for name, count in counts.items()),
        key=lambda c: c["count"],
        reverse=True,
    )
    return {"categories": categories, "total_items": total}
