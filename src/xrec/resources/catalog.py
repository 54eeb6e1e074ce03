"""MCP resources for catalog discovery."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from fastmcp import FastMCP

if TYPE_CHECKING:
    from xrec.core.catalog.registry import CatalogRegistry


def register_catalog_resources(mcp: FastMCP, registry: CatalogRegistry) -> None:
    """Register catalog discovery resources on the MCP server."""

    @mcp.resource("catalog://extensions/index")
    def catalog_index_resource() -> str:
        """Discover every recommendable item in the loaded catalog."""
        items = registry.all()
        return json.dumps(
            {
                "version": registry.version,
                "last_updated": registry.last_updated,
                "item_count": len(items),
                "items": [
                    {
                        "id": item.id,
                        "name": item.name,
                        "type": item.type.value,
                        "category": item.category,
                        "tags": list(item.tags),
                        "is_official": item.metrics.is_official,
                        "source": item.metrics.source.value,
                    }
                    for item in items
                ],
            },
            indent=2,
        )
