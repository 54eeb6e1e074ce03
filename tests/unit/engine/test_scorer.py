"""Tests for the multi-signal match scorer."""

from __future__ import annotations

from dataclasses import replace

import pytest
from conftest import make_item, make_profile

from xrec.core.catalog.models import CatalogItem
from xrec.core.config.scoring import DEFAULT_SCORING_CONFIG, MatchThresholds
from xrec.core.profile.models import ProjectMetadata, ProjectProfile
from xrec.engine.scorer import normalize_score, score_indicator, score_item
from xrec.engine.similarity import SimilarityMatrix


# ---------------------------------------------------------------------------
# End-to-end scenario
# ---------------------------------------------------------------------------

class TestEndToEnd:
    def test_react_project_with_official_item(
        self, react_plugin: CatalogItem, react_project: ProjectProfile
    ):
        result = score_item(react_plugin, react_project)
        # (2 * 5 + 1 * 4 + 1 * 3) * 1.3 = 22.1 -> 22.1 / 50 * 100
        assert result.score == pytest.approx(44.2)
        assert result.reasons == [
            "Languages: TypeScript, JavaScript",
            "Frameworks: React",
            "Dependencies: react",
            "Official",
        ]

    def test_breakdown(self, react_plugin: CatalogItem, react_project: ProjectProfile):
        breakdown = score_item(react_plugin, react_project).breakdown
        assert breakdown.base_score == pytest.approx(22.1)
        assert breakdown.context_score == 0
        assert breakdown.similarity_score == 0
        assert breakdown.quality_score == 0
        assert breakdown.final_score == pytest.approx(44.2)


# ---------------------------------------------------------------------------
# Structural matching
# ---------------------------------------------------------------------------

class TestStructuralMatching:
    def test_languages_are_case_insensitive(self, react_project: ProjectProfile):
        item = make_item(languages=["TYPESCRIPT", "javascript"])
        result = score_item(item, react_project)
        assert result.reasons == ["Languages: TYPESCRIPT, javascript"]
        assert result.breakdown.base_score == 10

    def test_project_side_case_is_ignored(self):
        project = make_profile(dependencies=["REACT", "ZOD"])
        result = score_item(make_item(dependencies=["react"]), project)
        assert result.reasons == ["Dependencies: react"]
        assert result.breakdown.base_score == 3

    def test_scoped_dependency_names(self):
        project = make_profile(dependencies=["@types/react", "@modelcontextprotocol/sdk"])
        result = score_item(make_item(dependencies=["@types/react"]), project)
        assert result.reasons == ["Dependencies: @types/react"]

    def test_framework_weight(self):
        project = make_profile(frameworks=["react", "vue", "angular"])
        result = score_item(make_item(frameworks=["React", "Vue", "Svelte"]), project)
        assert result.breakdown.base_score == 8
        assert result.reasons == ["Frameworks: React, Vue"]

    def test_file_patterns_count_once_each(self):
        project = make_profile(files=["src/components/Button.tsx", "src/app/page.tsx"])
        item = make_item(files=["**/*.tsx", "*.rs", "src/app/*.tsx"])
        result = score_item(item, project)
        assert result.breakdown.base_score == 4
        assert result.reasons == ["Files: **/*.tsx, src/app/*.tsx"]

    def test_missing_detection_rules_contribute_nothing(self, react_project: ProjectProfile):
        result = score_item(make_item(), react_project, "anything at all")
        assert result.score == 1
        assert result.reasons == []


# ---------------------------------------------------------------------------
# Query keywords
# ---------------------------------------------------------------------------

class TestQueryKeywords:
    def test_keywords_and_tags_match_query(self):
        item = make_item(keywords=["typescript"], tags=["typescript", "testing"])
        result = score_item(item, make_profile(), "Need TypeScript testing help")
        # typescript counts once as a keyword and once as a tag, then testing (tag)
        assert result.breakdown.base_score == 3
        assert result.reasons == ["Keywords: typescript, testing"]

    def test_entry_that_is_keyword_and_tag_scores_per_occurrence(self):
        item = make_item(keywords=["react"], tags=["react"])
        result = score_item(item, make_profile(), "react")
        assert result.breakdown.base_score == 2
        assert result.reasons == ["Keywords: react"]

    def test_name_in_query(self):
        item = make_item(name="React Toolkit")
        result = score_item(item, make_profile(), "install react toolkit please")
        assert result.breakdown.base_score == 2
        assert result.reasons == ["Name match: React Toolkit"]

    def test_no_query_skips_keywords(self):
        item = make_item(keywords=["typescript"], tags=["typescript"])
        assert score_item(item, make_profile()).reasons == []
        assert score_item(item, make_profile(), "").reasons == []


# ---------------------------------------------------------------------------
# Multipliers
# ---------------------------------------------------------------------------

class TestMultipliers:
    def test_no_match_floor(self, react_project: ProjectProfile):
        item = make_item(languages=["Rust"], frameworks=["Actix"], dependencies=["tokio"])
        result = score_item(item, react_project)
        assert result.breakdown.base_score == 0
        assert result.score == 1
        assert result.reasons == []

    def test_official_without_matches_gets_no_boost(self, react_project: ProjectProfile):
        official = make_item(id="o", languages=["Rust"], is_official=True)
        community = make_item(id="c", languages=["Rust"])
        official_result = score_item(official, react_project)
        assert official_result.score == score_item(community, react_project).score == 1
        assert "Official" not in official_result.reasons

    def test_official_boost(self, react_project: ProjectProfile):
        official = score_item(make_item(languages=["TypeScript"], is_official=True), react_project)
        community = score_item(make_item(languages=["TypeScript"]), react_project)
        assert official.breakdown.base_score == pytest.approx(community.breakdown.base_score * 1.3)
        assert official.reasons[-1] == "Official"

    @pytest.mark.parametrize(
        ("security", "relation"),
        [(49, "lower"), (50, "equal"), (79, "equal"), (80, "higher"), (100, "higher"), (0, "lower")],
    )
    def test_security_thresholds(
        self, react_project: ProjectProfile, security: float, relation: str
    ):
        baseline = score_item(
            make_item(languages=["TypeScript"], security_score=70), react_project
        ).score
        score = score_item(
            make_item(languages=["TypeScript"], security_score=security), react_project
        ).score
        if relation == "lower":
            assert score < baseline
        elif relation == "higher":
            assert score > baseline
        else:
            assert score == baseline

    def test_unscanned_item_is_unmodified(self, react_project: ProjectProfile):
        unscanned = score_item(make_item(languages=["TypeScript"]), react_project)
        assert unscanned.breakdown.base_score == 5


# ---------------------------------------------------------------------------
# Context and similarity terms
# ---------------------------------------------------------------------------

class TestAdditiveTerms:
    def test_context_is_added_after_multipliers(self):
        metadata = ProjectMetadata(size="large", kind="application", estimated_team_size=1)
        project = make_profile(languages=["python"], metadata=metadata)
        item = make_item(languages=["Python"], tags=["testing"], is_official=True)
        result = score_item(item, project)
        assert result.breakdown.base_score == pytest.approx(6.5)
        assert result.breakdown.context_score == 2.0
        assert result.score == pytest.approx((6.5 + 2.0) / 50 * 100)
        assert result.reasons == ["Languages: Python", "Official", "Suited to large projects"]

    def test_context_disabled_by_config(self):
        config = replace(DEFAULT_SCORING_CONFIG, enable_context_scoring=False)
        metadata = ProjectMetadata(size="large")
        project = make_profile(metadata=metadata)
        result = score_item(make_item(tags=["testing"]), project, config=config)
        assert result.breakdown.context_score == 0
        assert result.reasons == []

    def test_similarity_requires_a_matrix(self):
        project = make_profile(languages=["typescript"])
        item = make_item(tags=["typescript"])
        assert score_item(item, project).breakdown.similarity_score == 0

        result = score_item(item, project, matrix=SimilarityMatrix())
        assert result.breakdown.similarity_score == 1.0
        assert result.score == pytest.approx(2.0)
        assert result.reasons == ["Similar tag: typescript ~ typescript"]

    def test_similarity_alone_does_not_trigger_official(self):
        project = make_profile(languages=["typescript"])
        item = make_item(tags=["typescript"], is_official=True)
        result = score_item(item, project, matrix=SimilarityMatrix())
        assert "Official" not in result.reasons
        assert result.breakdown.base_score == 0


# ---------------------------------------------------------------------------
# Monotonicity and normalization
# ---------------------------------------------------------------------------

def test_adding_a_matching_language_never_decreases_score():
    item = make_item(languages=["TypeScript", "Python", "Go"], security_score=30)
    languages: list[str] = []
    previous = score_item(item, make_profile(languages=languages)).score
    for lang in ["typescript", "python", "go", "rust"]:
        languages = [*languages, lang]
        current = score_item(item, make_profile(languages=languages)).score
        assert current >= previous
        previous = current


class TestNormalization:
    @pytest.mark.parametrize("raw", [0, -5])
    def test_non_positive_maps_to_one(self, raw: float):
        assert normalize_score(raw) == 1

    def test_linear_in_between(self):
        assert normalize_score(25) == pytest.approx(50)

    def test_clamped_to_100(self):
        assert normalize_score(500) == 100

    def test_tiny_raw_is_floored_at_one(self):
        assert normalize_score(0.1) == 1

    def test_alternate_max_raw_score(self):
        config = replace(DEFAULT_SCORING_CONFIG, thresholds=MatchThresholds(max_raw_score=10))
        assert normalize_score(5, config) == pytest.approx(50)

    @pytest.mark.parametrize("max_raw_score", [0, -10])
    def test_non_positive_max_raw_score_is_rejected_at_construction(self, max_raw_score: float):
        with pytest.raises(ValueError, match="max_raw_score"):
            MatchThresholds(max_raw_score=max_raw_score)


def test_score_indicator():
    assert score_indicator(80) == "High fit"
    assert score_indicator(50) == "Good fit"
    assert score_indicator(20) == "Reference"
    assert score_indicator(19.9) == ""
