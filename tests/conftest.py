"""Shared test fixtures for the extension recommender tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CATALOG_DIR", "")
    monkeypatch.setenv("ENABLE_CONTEXT_SCORING", "true")
    monkeypatch.setenv("ENABLE_SIMILARITY_SCORING", "true")
    monkeypatch.setenv("BLEND_QUALITY", "true")

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from xrec.core.catalog.models import (  # noqa: E402
    CatalogItem,
    DetectionRules,
    ItemType,
    Metrics,
    SourceType,
)
from xrec.core.catalog.registry import CatalogRegistry  # noqa: E402
from xrec.core.profile.models import ProjectMetadata, ProjectProfile  # noqa: E402


def make_item(
    id: str = "test_item",
    *,
    name: str | None = None,
    type: ItemType = ItemType.PLUGIN,
    description: str = "",
    category: str = "Development",
    tags: list[str] | None = None,
    languages: list[str] | None = None,
    frameworks: list[str] | None = None,
    dependencies: list[str] | None = None,
    files: list[str] | None = None,
    keywords: list[str] | None = None,
    source: SourceType = SourceType.COMMUNITY,
    is_official: bool = False,
    stars: int | None = None,
    last_updated: str | None = None,
    security_score: float | None = None,
) -> CatalogItem:
    """Create a test catalog item with empty detection rules by default."""
    return CatalogItem(
        id=id,
        name=name if name is not None else f"Test {id}",
        type=type,
        description=description or f"Test item {id}",
        category=category,
        tags=tuple(tags or ()),
        detection=DetectionRules(
            languages=tuple(languages or ()),
            frameworks=tuple(frameworks or ()),
            dependencies=tuple(dependencies or ()),
            files=tuple(files or ()),
            keywords=tuple(keywords or ()),
        ),
        metrics=Metrics(
            source=source,
            is_official=is_official,
            stars=stars,
            last_updated=last_updated,
            security_score=security_score,
        ),
        url=f"https://example.com/{id}",
    )


def make_profile(
    *,
    languages: list[str] | None = None,
    frameworks: list[str] | None = None,
    dependencies: list[str] | None = None,
    files: list[str] | None = None,
    metadata: ProjectMetadata | None = None,
) -> ProjectProfile:
    return ProjectProfile(
        languages=languages or [],
        frameworks=frameworks or [],
        dependencies=dependencies or [],
        files=files or [],
        metadata=metadata,
        path="/test/project",
    )


@pytest.fixture
def react_project() -> ProjectProfile:
    """A TypeScript/React project profile."""
    return make_profile(
        languages=["typescript", "javascript"],
        frameworks=["react"],
        dependencies=["react", "zod"],
        files=["src/app/page.tsx", "package.json", "tsconfig.json"],
    )


@pytest.fixture
def react_plugin() -> CatalogItem:
    """An official item whose rules match the React project on every axis."""
    return make_item(
        id="react-plugin",
        name="React Toolkit",
        tags=["typescript", "react", "testing"],
        languages=["TypeScript", "JavaScript"],
        frameworks=["React"],
        dependencies=["react"],
        source=SourceType.OFFICIAL,
        is_official=True,
    )


@pytest.fixture
def sample_items() -> list[CatalogItem]:
    """A small mixed catalog."""
    return [
        make_item(
            id="ts-plugin",
            name="TypeScript Plugin",
            type=ItemType.PLUGIN,
            tags=["typescript", "javascript"],
            languages=["TypeScript"],
            category="Development",
        ),
        make_item(
            id="react-agent",
            name="React Agent",
            type=ItemType.AGENT,
            tags=["react", "frontend"],
            languages=["TypeScript"],
            frameworks=["React"],
            category="Frontend",
        ),
        make_item(
            id="pg-mcp",
            name="Postgres MCP",
            type=ItemType.MCP,
            description="Query PostgreSQL databases",
            tags=["database", "postgres"],
            dependencies=["pg"],
            category="Database",
            source=SourceType.OFFICIAL,
            is_official=True,
        ),
        make_item(
            id="py-skill",
            name="Python Skill",
            type=ItemType.SKILL,
            tags=["python", "testing"],
            languages=["Python"],
            category="Testing",
            source=SourceType.CURATED,
        ),
    ]


@pytest.fixture
def registry(sample_items: list[CatalogItem]) -> CatalogRegistry:
    """Create a registry holding the sample items."""
    reg = CatalogRegistry()
    for item in sample_items:
        reg.register(item)
    reg.set_version("1.0.0", "2026-10-01T00:00:00Z")
    return reg
