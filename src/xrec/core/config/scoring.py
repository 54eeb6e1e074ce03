"""Immutable scoring configuration.

Every weight, multiplier, threshold and keyword set used by the engine lives
here. Scorers receive a ``ScoringConfig`` explicitly; nothing reads a
module-level table at call time.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from xrec.core.config.settings import Settings


@dataclass(frozen=True)
class MatchWeights:
    """Points per matched detection rule."""

    language: float = 5.0
    framework: float = 4.0
    dependency: float = 3.0
    file: float = 2.0
    keyword: float = 1.0
    # Name-in-query bonus is ``keyword * name_bonus_factor``
    name_bonus_factor: float = 2.0


@dataclass(frozen=True)
class Multipliers:
    """Provenance and security multipliers applied to the base match score."""

    official: float = 1.3
    high_security: float = 1.1
    low_security: float = 0.7


@dataclass(frozen=True)
class MatchThresholds:
    high_security: float = 80.0  # at or above -> boost
    low_security: float = 50.0  # strictly below -> penalty
    max_raw_score: float = 50.0  # raw score that maps to 100

    def __post_init__(self) -> None:
        if self.max_raw_score <= 0:
            raise ValueError(f"max_raw_score must be positive, got {self.max_raw_score!r}")


@dataclass(frozen=True)
class ContextWeights:
    """Bonuses for project-metadata alignment."""

    size_match: float = 2.0
    monorepo_bonus: float = 3.0
    team_size_match: float = 1.5
    team_size_threshold: int = 5  # bonus applies when team size is greater


@dataclass(frozen=True)
class ContextKeywords:
    # Exact tag membership
    monorepo: frozenset[str] = frozenset(
        {"monorepo", "workspace", "nx", "turborepo", "lerna", "pnpm"}
    )
    # Substring membership (a tag such as "ci/cd-pipeline" matches "ci/cd")
    enterprise: frozenset[str] = frozenset({"ci/cd", "monitoring", "testing", "documentation"})
    lightweight: frozenset[str] = frozenset({"quick-start", "beginner", "simple", "lightweight"})
    collaboration: frozenset[str] = frozenset({"collaboration", "team", "review", "workflow"})


@dataclass(frozen=True)
class SimilarityThresholds:
    min_cooccurrence: int = 3
    min_jaccard_similarity: float = 0.3
    max_similarity_bonus: float = 5.0
    project_dependency_limit: int = 10


@dataclass(frozen=True)
class SearchWeights:
    """Substring-match weights for query-only search."""

    name: float = 10.0
    description: float = 5.0
    category: float = 3.0
    tag: float = 2.0
    official_multiplier: float = 1.2


@dataclass(frozen=True)
class ScoringConfig:
    """Complete engine configuration. Use ``dataclasses.replace`` to vary it."""

    weights: MatchWeights = field(default_factory=MatchWeights)
    multipliers: Multipliers = field(default_factory=Multipliers)
    thresholds: MatchThresholds = field(default_factory=MatchThresholds)
    context_weights: ContextWeights = field(default_factory=ContextWeights)
    context_keywords: ContextKeywords = field(default_factory=ContextKeywords)
    similarity: SimilarityThresholds = field(default_factory=SimilarityThresholds)
    search: SearchWeights = field(default_factory=SearchWeights)
    quality_weight: float = 0.2
    enable_context_scoring: bool = True
    enable_similarity_scoring: bool = True


DEFAULT_SCORING_CONFIG = ScoringConfig()


def scoring_config_from_settings(settings: Settings) -> ScoringConfig:
    """Apply the feature flags from environment settings to the defaults."""
    return replace(
        DEFAULT_SCORING_CONFIG,
        enable_context_scoring=settings.enable_context_scoring,
        enable_similarity_scoring=settings.enable_similarity_scoring,
    )
