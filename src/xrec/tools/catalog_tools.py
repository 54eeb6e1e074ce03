"""MCP tools for browsing the catalog: item details, categories and stats."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import TYPE_CHECKING

from fastmcp import FastMCP

from xrec.core.catalog.stats import catalog_stats, list_categories
from xrec.engine.quality import quality_score, quality_tier

if TYPE_CHECKING:
    from xrec.core.catalog.registry import CatalogRegistry


def register_catalog_tools(mcp: FastMCP, registry: CatalogRegistry) -> None:
    """Register catalog browsing tools on the MCP server."""

    @mcp.tool
    def get_extension_details(name: str) -> str:
        """Get full details of one plugin, MCP server, skill, workflow, hook, command or agent.

        Args:
            name: Item name or id (case-insensitive).
        """
        item = registry.find(name)
        if item is None:
            return json.dumps({"status": "not_found", "name": name})

        quality = quality_score(item)
        details = asdict(item)
        details["type"] = item.type.value
        details["metrics"]["source"] = item.metrics.source.value
        details["install"]["method"] = item.install.method.value
        details["quality"] = {
            "total": round(quality.total, 2),
            "tier": quality_tier(quality.total),
            "breakdown": {k: round(v, 2) for k, v in asdict(quality.breakdown).items()},
        }
        return json.dumps({"status": "ok", "item": details}, indent=2)

    @mcp.tool
    def list_extension_categories() -> str:
        """List available categories with item counts."""
        return json.dumps(list_categories(registry.all()), indent=2)

    @mcp.tool
    def get_catalog_stats() -> str:
        """Get catalog statistics: counts by type and source, and official items."""
        return json.dumps(
            catalog_stats(
                registry.all(),
                version=registry.version,
                last_updated=registry.last_updated,
            ),
            indent=2,
        )
