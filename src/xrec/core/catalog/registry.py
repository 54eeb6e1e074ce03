"""Catalog registry: in-memory index over the loaded catalog snapshot."""

from __future__ import annotations

import logging

from xrec.core.catalog.models import Catalog, CatalogItem, ItemType
from xrec.engine.similarity import SimilarityMatrix, build_similarity_matrix

logger = logging.getLogger(__name__)


class CatalogRegistry:
    """In-memory registry of all loaded catalog items.

    Insertion order is preserved and is the catalog order used to break
    ranking ties. The similarity matrix is built lazily on first use and
    dropped whenever the item set changes.
    """

    def __init__(self) -> None:
        self._items: dict[str, CatalogItem] = {}
        self._by_type: dict[ItemType, list[str]] = {}
        self._by_tag: dict[str, list[str]] = {}
        self._matrix: SimilarityMatrix | None = None
        self.version = ""
        self.last_updated = ""

    def register(self, item: CatalogItem) -> None:
        """Add an item to all indexes."""
        if item.id in self._items:
            raise ValueError(f"Duplicate catalog item id registered: {item.id!r}")
        self._items[item.id] = item
        self._by_type.setdefault(item.type, []).append(item.id)

        for tag in dict.fromkeys(t.lower() for t in item.tags):
            self._by_tag.setdefault(tag, []).append(item.id)

        self._matrix = None

    def set_version(self, version: str, last_updated: str) -> None:
        """Record snapshot metadata. Empty values keep the current ones."""
        if version:
            self.version = version
        if last_updated:
            self.last_updated = last_updated

    def clear(self) -> None:
        """Drop every item, e.g. before reloading the catalog."""
        self._items.clear()
        self._by_type.clear()
        self._by_tag.clear()
        self._matrix = None
        self.version = ""
        self.last_updated = ""

    def get(self, item_id: str) -> CatalogItem | None:
        """Look up an item by exact ID."""
        return self._items.get(item_id)

    def find(self, name: str) -> CatalogItem | None:
        """Look up an item by exact ID, then case-insensitive name or ID."""
        item = self._items.get(name)
        if item:
            return item
        needle = name.lower()
        for item in self._items.values():
            if item.name.lower() == needle or item.id.lower() == needle:
                return item
        return None

    def find_by_type(self, item_type: ItemType) -> list[CatalogItem]:
        ids = self._by_type.get(item_type, [])
        return [self._items[iid] for iid in ids]

    def find_by_tag(self, tag: str) -> list[CatalogItem]:
        ids = self._by_tag.get(tag.lower(), [])
        return [self._items[iid] for iid in ids]

    def all(self) -> list[CatalogItem]:
        """Return all registered items in catalog order."""
        return list(self._items.values())

    def snapshot(self) -> Catalog:
        return Catalog(
            version=self.version,
            last_updated=self.last_updated,
            items=tuple(self._items.values()),
        )

    def similarity_matrix(self) -> SimilarityMatrix:
        """Return the tag co-occurrence matrix for the current snapshot."""
        if self._matrix is None:
            self._matrix = build_similarity_matrix(self._items.values())
            logger.info(
                "Built similarity matrix: %d items, %d tags",
                len(self._items),
                len(self._matrix.tag_counts),
            )
        return self._matrix

    def __len__(self) -> int:
        return len(self._items)
