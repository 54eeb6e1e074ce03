"""Match scorer: multi-signal relevance of one catalog item to one project."""

from __future__ import annotations

import logging

from xrec.core.catalog.models import CatalogItem
from xrec.core.config.scoring import DEFAULT_SCORING_CONFIG, ScoringConfig
from xrec.core.profile.models import ProjectProfile
from xrec.engine.context import context_score
from xrec.engine.glob_matcher import matches_any
from xrec.engine.models import MatchScore, ScoreBreakdown
from xrec.engine.similarity import SimilarityMatrix, extract_project_tags, similarity_score

logger = logging.getLogger(__name__)


def _lowered(values: list[str]) -> set[str]:
    return {v.lower() for v in values}


def score_item(
    item: CatalogItem,
    project: ProjectProfile,
    query: str | None = None,
    *,
    matrix: SimilarityMatrix | None = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> MatchScore:
    """Score an item against a project profile and optional free-text query.

    Steps run in a fixed order and reasons are reported in that order:

    1. languages, 2. frameworks, 3. dependencies, 4. file globs,
    5. query keywords and item name,
    6. official / security multipliers,
    7. context and similarity bonuses (not multiplied),
    8. normalization onto 1-100.
    """
    weights = config.weights
    detection = item.detection
    score = 0.0
    reasons: list[str] = []

    # 1. Language match
    project_languages = _lowered(project.languages)
    languages = [lang for lang in detection.languages if lang.lower() in project_languages]
    if languages:
        score += len(languages) * weights.language
        reasons.append(f"Languages: {', '.join(languages)}")

    # 2. Framework match
    project_frameworks = _lowered(project.frameworks)
    frameworks = [fw for fw in detection.frameworks if fw.lower() in project_frameworks]
    if frameworks:
        score += len(frameworks) * weights.framework
        reasons.append(f"Frameworks: {', '.join(frameworks)}")

    # 3. Dependency match
    project_dependencies = _lowered(project.dependencies)
    dependencies = [dep for dep in detection.dependencies if dep.lower() in project_dependencies]
    if dependencies:
        score += len(dependencies) * weights.dependency
        reasons.append(f"Dependencies: {', '.join(dependencies)}")

    # 4. File pattern match
    if project.files:
        patterns = [p for p in detection.files if matches_any(project.files, p)]
        if patterns:
            score += len(patterns) * weights.file
            reasons.append(f"Files: {', '.join(patterns)}")

    # 5. Keyword match (from user query)
    if query:
        query_lower = query.lower()
        keyword_hits = [
            kw for kw in (*detection.keywords, *item.tags) if kw and kw.lower() in query_lower
        ]
        if keyword_hits:
            score += len(keyword_hits) * weights.keyword
            reasons.append(f"Keywords: {', '.join(dict.fromkeys(keyword_hits))}")

        if item.name and item.name.lower() in query_lower:
            score += weights.keyword * weights.name_bonus_factor
            reasons.append(f"Name match: {item.name}")

    # 6. Multipliers
    metrics = item.metrics
    if metrics.is_official and score > 0:
        score *= config.multipliers.official
        if reasons:
            reasons.append("Official")

    if metrics.security_score is not None:
        if metrics.security_score >= config.thresholds.high_security:
            score *= config.multipliers.high_security
        elif metrics.security_score < config.thresholds.low_security:
            score *= config.multipliers.low_security

    base_score = score

    # 7. Context and similarity bonuses
    context_total = 0.0
    if config.enable_context_scoring and project.metadata is not None:
        context = context_score(item, project.metadata, config)
        context_total = context.score
        reasons.extend(context.reasons)

    similarity_total = 0.0
    if config.enable_similarity_scoring and matrix is not None:
        project_tags = extract_project_tags(project, config.similarity.project_dependency_limit)
        similarity = similarity_score(item, project_tags, matrix, config)
        similarity_total = similarity.score
        reasons.extend(similarity.reasons)

    # 8. Normalization
    final = normalize_score(base_score + context_total + similarity_total, config)
    logger.debug(
        "Scored %s: base=%.2f context=%.2f similarity=%.2f final=%.2f",
        item.id,
        base_score,
        context_total,
        similarity_total,
        final,
    )

    return MatchScore(
        score=final,
        reasons=reasons,
        breakdown=ScoreBreakdown(
            base_score=base_score,
            context_score=context_total,
            similarity_score=similarity_total,
            final_score=final,
        ),
    )


def normalize_score(raw: float, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> float:
    """Map a raw score onto [1, 100]. No match (raw <= 0) maps to 1, never 0."""
    if raw <= 0:
        return 1.0
    normalized = raw / config.thresholds.max_raw_score * 100
    return min(100.0, max(1.0, normalized))


def score_indicator(score: float) -> str:
    """Short fit label for display."""
    if score >= 80:
        return "High fit"
    if score >= 50:
        return "Good fit"
    if score >= 20:
        return "Reference"
    return ""
