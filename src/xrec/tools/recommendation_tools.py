"""MCP tools for project recommendations and keyword search."""

from __future__ import annotations

import json
import logging
import time
from typing import TYPE_CHECKING, Literal

from fastmcp import FastMCP

from xrec.core.catalog.models import ItemType
from xrec.core.profile.models import ProjectMetadata, ProjectProfile
from xrec.engine.formatters import format_recommendations
from xrec.engine.ranking import RecommendOptions, SearchOptions, recommend, search

if TYPE_CHECKING:
    from xrec.core.catalog.registry import CatalogRegistry
    from xrec.core.config.scoring import ScoringConfig

logger = logging.getLogger(__name__)

MAX_RESULTS_LIMIT = 50


def _clamp_results(max_results: int) -> int:
    return max(1, min(MAX_RESULTS_LIMIT, max_results))


def register_recommendation_tools(
    mcp: FastMCP,
    registry: CatalogRegistry,
    config: ScoringConfig,
    *,
    default_max_results: int = 20,
    blend_quality_default: bool = True,
) -> None:
    """Register the recommend and search tools on the MCP server."""

    @mcp.tool
    def recommend_extensions(
        languages: list[str] | None = None,
        frameworks: list[str] | None = None,
        dependencies: list[str] | None = None,
        files: list[str] | None = None,
        description: str | None = None,
        size: Literal["small", "medium", "large", "enterprise"] | None = None,
        kind: Literal["monorepo", "library", "application", "unknown"] | None = None,
        team_size: int | None = None,
        workspace_count: int | None = None,
        project_path: str = "",
        types: list[ItemType] | None = None,
        max_results: int = default_max_results,
        min_score: float = 1.0,
        blend_quality: bool = blend_quality_default,
    ) -> str:
        """Recommend extensions for a project from its analyzed profile.

        Returns all item types by default. Only pass ``types`` when the user
        explicitly asks for specific kinds (e.g. "just skills").

        Args:
            languages: Detected languages (e.g. ["typescript", "python"]).
            frameworks: Detected frameworks (e.g. ["react"]).
            dependencies: Dependency names from the project manifests.
            files: Relative file paths in the project, for glob rules.
            description: What the user wants to build or is looking for.
            size: Project size class, if known.
            kind: Project structure, if known.
            team_size: Estimated number of contributors, if known.
            workspace_count: Number of workspaces in a monorepo.
            project_path: Path of the analyzed project (echoed back only).
            types: Restrict results to these item types.
            max_results: Maximum number of results (1-50).
            min_score: Minimum score to include.
            blend_quality: Add a weighted intrinsic quality bonus to each score.
        """
        start_time = time.monotonic()

        metadata = None
        if size or kind or team_size is not None or workspace_count is not None:
            metadata = ProjectMetadata(
                size=size or "medium",
                kind=kind or "unknown",
                estimated_team_size=team_size or 1,
                workspace_count=workspace_count,
                file_count=len(files or []),
                language_count=len(languages or []),
            )

        profile = ProjectProfile(
            languages=languages or [],
            frameworks=frameworks or [],
            dependencies=dependencies or [],
            files=files or [],
            metadata=metadata,
            path=project_path,
        )

        items = registry.all()
        # Rank every candidate once; the tail feeds the "popular and trending" section
        candidates = recommend(
            items,
            profile,
            description,
            RecommendOptions(
                max_results=len(items),
                min_score=min_score,
                types=tuple(types) if types else None,
                blend_quality=blend_quality,
            ),
            matrix=registry.similarity_matrix(),
            config=config,
        )
        results = candidates[: _clamp_results(max_results)]

        elapsed_ms = (time.monotonic() - start_time) * 1000
        logger.info("recommend_extensions: %d results in %.1f ms", len(results), elapsed_ms)

        return json.dumps(
            {
                "status": "ok",
                "project": {
                    "path": profile.path,
                    "languages": profile.languages,
                    "frameworks": profile.frameworks,
                    "dependency_count": len(profile.dependencies),
                },
                "recommendations": [r.to_dict() for r in results],
                "formatted": format_recommendations(results, candidates),
                "total_found": len(results),
            },
            indent=2,
        )

    @mcp.tool
    def search_extensions(
        query: str,
        types: list[ItemType] | None = None,
        max_results: int = default_max_results,
    ) -> str:
        """Search every item type by keyword.

        Only pass ``types`` when the user asks for specific kinds.

        Args:
            query: Keyword to look for in names, descriptions, categories and tags.
            types: Restrict results to these item types.
            max_results: Maximum number of results (1-50).
        """
        results = search(
            registry.all(),
            query,
            SearchOptions(
                max_results=_clamp_results(max_results),
                types=tuple(types) if types else None,
            ),
            config=config,
        )
        logger.info("search_extensions %r: %d results", query, len(results))

        return json.dumps(
            {
                "status": "ok",
                "query": query,
                "results": [r.to_dict() for r in results],
                "total_found": len(results),
            },
            indent=2,
        )
