"""Extension recommender MCP server: application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastmcp import FastMCP

from xrec.core.catalog.loader import load_catalog_directory
from xrec.core.catalog.registry import CatalogRegistry
from xrec.core.config.scoring import ScoringConfig, scoring_config_from_settings
from xrec.core.config.settings import get_settings
from xrec.prompts.recommend_prompts import register_recommend_prompts
from xrec.resources.catalog import register_catalog_resources
from xrec.tools.catalog_tools import register_catalog_tools
from xrec.tools.recommendation_tools import register_recommendation_tools

logger = logging.getLogger(__name__)

# Sample catalog shipped with the package: src/xrec/data/catalog/
_BUNDLED_CATALOG_DIR = Path(__file__).resolve().parent.parent.parent / "data" / "catalog"


def create_app(
    *,
    registry_override: CatalogRegistry | None = None,
    scoring_config_override: ScoringConfig | None = None,
) -> FastMCP:
    """Create and configure the extension recommender MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Loads the catalog snapshot into the registry
    3. Builds the tag similarity matrix for that snapshot
    4. Registers all tools, resources, and prompts
    """
    settings = get_settings()

    # --- Server instance ---
    server = FastMCP(
        "Extension Recommender",
        instructions=(
            "Recommends plugins, MCP servers, skills, workflows, hooks, commands "
            "and agents for a software project. Pass the project's detected "
            "languages, frameworks, dependencies and files to recommend_extensions, "
            "or use search_extensions for keyword lookups."
        ),
    )

    # --- Load catalog ---
    if registry_override is not None:
        registry = registry_override
        logger.info("Using provided catalog registry (%d items)", len(registry))
    else:
        catalog_dir = (
            Path(settings.catalog_dir).expanduser()
            if settings.catalog_dir
            else _BUNDLED_CATALOG_DIR
        )
        registry = CatalogRegistry()
        item_count = load_catalog_directory(catalog_dir, registry)
        logger.info("Loaded %d catalog items from %s", item_count, catalog_dir)
        if item_count == 0:
            logger.warning("Catalog is empty; recommendations will return no results")

    config = scoring_config_override or scoring_config_from_settings(settings)

    # Build once per snapshot; every ranking call reuses it.
    registry.similarity_matrix()

    # --- Register tools ---
    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": "Extension Recommender",
            "version": "0.1.0",
            "catalog_version": registry.version,
            "items_loaded": len(registry),
            "context_scoring": config.enable_context_scoring,
            "similarity_scoring": config.enable_similarity_scoring,
        }

    register_recommendation_tools(
        server,
        registry,
        config,
        default_max_results=settings.default_max_results,
        blend_quality_default=settings.blend_quality,
    )
    register_catalog_tools(server, registry)
    logger.info("Recommendation and catalog tools registered")

    # --- Register resources ---
    register_catalog_resources(server, registry)

    # --- Register prompts ---
    register_recommend_prompts(server)

    return server


# Module-level instance for FastMCP discovery ("...app.py:mcp").
# Lazy: only created when this module is loaded directly (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
