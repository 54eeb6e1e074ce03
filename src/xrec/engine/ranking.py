"""Ranking engine: recommend (profile-driven) and search (query-only) modes.

Both modes filter by type, score each item, drop items below ``min_score``,
sort by score descending and truncate. Sorting is stable, so ties keep
catalog order. The catalog is never mutated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from xrec.core.catalog.models import CatalogItem, ItemType
from xrec.core.config.scoring import DEFAULT_SCORING_CONFIG, ScoringConfig
from xrec.core.profile.models import ProjectProfile
from xrec.engine.models import ScoredResult
from xrec.engine.quality import quality_score
from xrec.engine.scorer import score_item
from xrec.engine.similarity import SimilarityMatrix

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 20
DEFAULT_MIN_SCORE = 1.0


@dataclass(frozen=True)
class RecommendOptions:
    max_results: int = DEFAULT_MAX_RESULTS
    min_score: float = DEFAULT_MIN_SCORE
    types: tuple[ItemType, ...] | None = None
    blend_quality: bool = False  # final = match + quality * config.quality_weight


@dataclass(frozen=True)
class SearchOptions:
    max_results: int = DEFAULT_MAX_RESULTS
    min_score: float = DEFAULT_MIN_SCORE
    types: tuple[ItemType, ...] | None = None


def _allowed(item: CatalogItem, types: tuple[ItemType, ...] | None) -> bool:
    return types is None or item.type in types


def _rank(results: list[ScoredResult], max_results: int) -> list[ScoredResult]:
    if max_results <= 0:
        return []
    return sorted(results, key=lambda r: r.score, reverse=True)[:max_results]


def recommend(
    items: Iterable[CatalogItem],
    project: ProjectProfile,
    query: str | None = None,
    options: RecommendOptions = RecommendOptions(),
    *,
    matrix: SimilarityMatrix | None = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    now: datetime | None = None,
) -> list[ScoredResult]:
    """Rank catalog items for a project profile."""
    results: list[ScoredResult] = []

    for item in items:
        if not _allowed(item, options.types):
            continue

        match = score_item(item, project, query, matrix=matrix, config=config)
        final = match.score
        if options.blend_quality:
            quality = quality_score(item, now=now).total
            final = match.score + quality * config.quality_weight
            match.breakdown.quality_score = quality
            match.breakdown.final_score = final

        if final >= options.min_score:
            results.append(
                ScoredResult(item=item, score=final, reasons=match.reasons, breakdown=match.breakdown)
            )

    ranked = _rank(results, options.max_results)
    logger.debug("recommend: %d candidates, %d returned", len(results), len(ranked))
    return ranked


def search(
    items: Iterable[CatalogItem],
    query: str,
    options: SearchOptions = SearchOptions(),
    *,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> list[ScoredResult]:
    """Rank catalog items by substring match of ``query`` against their text fields."""
    query_lower = query.strip().lower()
    if not query_lower:
        return []

    weights = config.search
    results: list[ScoredResult] = []

    for item in items:
        if not _allowed(item, options.types):
            continue

        score = 0.0
        reasons: list[str] = []

        if query_lower in item.name.lower():
            score += weights.name
            reasons.append("Name match")

        if query_lower in item.description.lower():
            score += weights.description
            reasons.append("Description match")

        if query_lower in item.category.lower():
            score += weights.category
            reasons.append("Category match")

        tag_match = next((t for t in item.tags if query_lower in t.lower()), None)
        if tag_match is not None:
            score += weights.tag
            reasons.append(f"Tag: {tag_match}")

        if item.metrics.is_official:
            score *= weights.official_multiplier

        if score > 0 and score >= options.min_score:
            results.append(ScoredResult(item=item, score=score, reasons=reasons))

    ranked = _rank(results, options.max_results)
    logger.debug("search %r: %d matches, %d returned", query, len(results), len(ranked))
    return ranked
