"""Context scoring: alignment between item tags and project metadata."""

from __future__ import annotations

from typing import Iterable

from xrec.core.catalog.models import CatalogItem
from xrec.core.config.scoring import DEFAULT_SCORING_CONFIG, ScoringConfig
from xrec.core.profile.models import ProjectMetadata
from xrec.engine.models import PartialScore


def _has_exact(tags: Iterable[str], keywords: frozenset[str]) -> bool:
    return any(tag.lower() in keywords for tag in tags)


def _has_substring(tags: Iterable[str], keywords: frozenset[str]) -> bool:
    return any(kw in tag.lower() for tag in tags for kw in keywords)


def context_score(
    item: CatalogItem,
    metadata: ProjectMetadata,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> PartialScore:
    """Monorepo, project-size and team-size bonuses, each applied at most once."""
    weights = config.context_weights
    keywords = config.context_keywords
    result = PartialScore()

    if metadata.kind == "monorepo" and _has_exact(item.tags, keywords.monorepo):
        result.score += weights.monorepo_bonus
        result.reasons.append("Monorepo-aligned")

    if size_matches(item, metadata, config):
        result.score += weights.size_match
        result.reasons.append(f"Suited to {metadata.size} projects")

    if metadata.estimated_team_size > weights.team_size_threshold and _has_substring(
        item.tags, keywords.collaboration
    ):
        result.score += weights.team_size_match
        result.reasons.append("Team-scale-aligned")

    return result


def size_matches(
    item: CatalogItem,
    metadata: ProjectMetadata,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> bool:
    """Large projects favour enterprise tooling, small ones lightweight tooling."""
    keywords = config.context_keywords
    if metadata.size in ("large", "enterprise"):
        return _has_substring(item.tags, keywords.enterprise)
    if metadata.size == "small":
        return _has_substring(item.tags, keywords.lightweight)
    return False
