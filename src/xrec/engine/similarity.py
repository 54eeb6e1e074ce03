"""Tag co-occurrence similarity.

The matrix counts, over one catalog snapshot, how many items carry each tag
and each pair of tags. Two tags are similar when the sets of items carrying
them overlap (Jaccard index). Project tags are compared against item tags
to give a capped bonus for semantically related, non-identical tags.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import combinations
from typing import Iterable

from xrec.core.catalog.models import CatalogItem
from xrec.core.config.scoring import DEFAULT_SCORING_CONFIG, ScoringConfig
from xrec.core.profile.models import ProjectProfile
from xrec.engine.models import PartialScore

logger = logging.getLogger(__name__)


@dataclass
class SimilarityMatrix:
    """Co-occurrence counts for one catalog snapshot. Read-only once built."""

    cooccurrence: dict[str, dict[str, int]] = field(default_factory=dict)
    tag_counts: dict[str, int] = field(default_factory=dict)

    def count(self, tag: str) -> int:
        return self.tag_counts.get(tag, 0)

    def cooccur(self, a: str, b: str) -> int:
        return self.cooccurrence.get(a, {}).get(b, 0)


def normalize_tags(tags: Iterable[str]) -> list[str]:
    """Lowercase and de-duplicate, keeping first-seen order."""
    return list(dict.fromkeys(t.lower() for t in tags))


def build_similarity_matrix(items: Iterable[CatalogItem]) -> SimilarityMatrix:
    """Count tag occurrences and tag-pair co-occurrences across the catalog."""
    cooccurrence: dict[str, dict[str, int]] = {}
    tag_counts: dict[str, int] = {}

    for item in items:
        tags = normalize_tags(item.tags)
        for tag in tags:
            tag_counts[tag] = tag_counts.get(tag, 0) + 1
        for a, b in combinations(tags, 2):
            row_a = cooccurrence.setdefault(a, {})
            row_b = cooccurrence.setdefault(b, {})
            row_a[b] = row_a.get(b, 0) + 1
            row_b[a] = row_b.get(a, 0) + 1

    return SimilarityMatrix(cooccurrence=cooccurrence, tag_counts=tag_counts)


def jaccard_similarity(
    a: str,
    b: str,
    matrix: SimilarityMatrix,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> float:
    """Jaccard index of the item sets tagged ``a`` and ``b``, in [0, 1].

    Identical tags are always 1.0. Pairs seen together fewer than
    ``min_cooccurrence`` times are treated as unrelated.
    """
    if a == b:
        return 1.0

    together = matrix.cooccur(a, b)
    if together < config.similarity.min_cooccurrence:
        return 0.0

    union = matrix.count(a) + matrix.count(b) - together
    return together / union if union > 0 else 0.0


def extract_project_tags(
    project: ProjectProfile,
    limit: int = DEFAULT_SCORING_CONFIG.similarity.project_dependency_limit,
) -> list[str]:
    """Languages, frameworks and the first ``limit`` dependencies, normalized."""
    return normalize_tags(
        [*project.languages, *project.frameworks, *project.dependencies[:limit]]
    )


def similarity_score(
    item: CatalogItem,
    project_tags: list[str],
    matrix: SimilarityMatrix,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> PartialScore:
    """Sum pairwise tag similarities above the threshold, capped."""
    thresholds = config.similarity
    total = 0.0
    reasons: list[str] = []

    item_tags = normalize_tags(item.tags)
    for project_tag in project_tags:
        for item_tag in item_tags:
            sim = jaccard_similarity(project_tag, item_tag, matrix, config)
            if sim >= thresholds.min_jaccard_similarity:
                total += sim
                reasons.append(f"Similar tag: {project_tag} ~ {item_tag}")

    return PartialScore(score=min(total, thresholds.max_similarity_bonus), reasons=reasons)
