"""Intrinsic quality scoring for catalog items.

Quality depends on provenance metadata only, never on the project. Four
additive components, each capped at its own ceiling:

    official    0-40   official items get the full 40
    popularity  0-30   log10(stars + 1) * 10
    freshness   0-20   by days since the last update (unknown -> neutral 10)
    provenance  0-10   official > curated list > community

Total: 0-100.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone

from xrec.core.catalog.models import CatalogItem, SourceType

OFFICIAL_POINTS = 40.0
POPULARITY_CEILING = 30.0
FRESHNESS_NEUTRAL = 10.0

# (max days exclusive, points), checked in order
FRESHNESS_STEPS: tuple[tuple[int, float], ...] = (
    (30, 20.0),
    (90, 15.0),
    (180, 10.0),
    (365, 5.0),
)

SOURCE_POINTS: dict[SourceType, float] = {
    SourceType.OFFICIAL: 10.0,
    SourceType.CURATED: 7.0,
    SourceType.COMMUNITY: 5.0,
}


@dataclass(frozen=True)
class QualityBreakdown:
    official: float
    popularity: float
    freshness: float
    provenance: float


@dataclass(frozen=True)
class QualityScore:
    total: float
    breakdown: QualityBreakdown


def quality_score(item: CatalogItem, *, now: datetime | None = None) -> QualityScore:
    """Calculate the 0-100 quality score of an item."""
    breakdown = QualityBreakdown(
        official=official_points(item),
        popularity=popularity_points(item.metrics.stars),
        freshness=freshness_points(item.metrics.last_updated, now=now),
        provenance=SOURCE_POINTS.get(item.metrics.source, 5.0),
    )
    total = breakdown.official + breakdown.popularity + breakdown.freshness + breakdown.provenance
    return QualityScore(total=total, breakdown=breakdown)


def official_points(item: CatalogItem) -> float:
    return OFFICIAL_POINTS if item.metrics.is_official else 0.0


def popularity_points(stars: int | None) -> float:
    """Logarithmic popularity: ~10 at 10 stars, ~20 at 100, 30 from ~1000."""
    if not stars or stars <= 0:
        return 0.0
    return min(POPULARITY_CEILING, math.log10(stars + 1) * 10)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp. Returns None when absent or unparseable.

    A trailing ``Z`` and fractional seconds of any precision are accepted
    (Python 3.11 ``fromisoformat``). Naive timestamps are taken as UTC.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def freshness_points(last_updated: str | None, *, now: datetime | None = None) -> float:
    """Score recency of the last update in whole days."""
    updated = parse_timestamp(last_updated)
    if updated is None:
        return FRESHNESS_NEUTRAL

    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    days = math.floor((now - updated).total_seconds() / 86400)

    for max_days, points in FRESHNESS_STEPS:
        if days < max_days:
            return points
    return 0.0


def sort_by_quality(
    items: list[CatalogItem], *, now: datetime | None = None
) -> list[CatalogItem]:
    """Return a new list sorted by quality, best first (stable)."""
    return sorted(items, key=lambda i: quality_score(i, now=now).total, reverse=True)


def quality_tier(total: float) -> str:
    if total >= 80:
        return "excellent"
    if total >= 60:
        return "good"
    if total >= 40:
        return "fair"
    return "low"


def quality_badge(total: float) -> str:
    if total >= 80:
        return "⭐⭐⭐"
    if total >= 60:
        return "⭐⭐"
    if total >= 40:
        return "⭐"
    return ""
