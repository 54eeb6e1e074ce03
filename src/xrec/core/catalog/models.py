"""Data models for catalog items.

Items are frozen once loaded. Sequence fields are tuples so that a loaded
catalog snapshot cannot be mutated by the scorers that read it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ItemType(str, Enum):
    """Kind of recommendable extension."""

    PLUGIN = "plugin"
    MCP = "mcp"
    SKILL = "skill"
    WORKFLOW = "workflow"
    HOOK = "hook"
    COMMAND = "command"
    AGENT = "agent"


class SourceType(str, Enum):
    """Provenance of a catalog item."""

    OFFICIAL = "official"
    CURATED = "awesome-list"
    COMMUNITY = "community"


class InstallMethod(str, Enum):
    PLUGIN = "plugin"
    MCP_ADD = "mcp-add"
    MANUAL = "manual"


@dataclass(frozen=True)
class Author:
    name: str
    url: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class DetectionRules:
    """Conditions under which an item is relevant to a project."""

    languages: tuple[str, ...] = ()
    frameworks: tuple[str, ...] = ()
    dependencies: tuple[str, ...] = ()
    files: tuple[str, ...] = ()  # glob patterns
    keywords: tuple[str, ...] = ()


@dataclass(frozen=True)
class Metrics:
    """Provenance and quality indicators."""

    source: SourceType = SourceType.COMMUNITY
    is_official: bool = False
    stars: int | None = None
    last_updated: str | None = None  # ISO 8601
    security_score: float | None = None  # 0-100, None = not scanned


@dataclass(frozen=True)
class InstallInfo:
    method: InstallMethod = InstallMethod.MANUAL
    command: str | None = None
    marketplace: str | None = None


@dataclass(frozen=True)
class CatalogItem:
    """A single recommendable extension."""

    id: str
    name: str
    type: ItemType
    description: str
    category: str
    tags: tuple[str, ...] = ()
    detection: DetectionRules = field(default_factory=DetectionRules)
    metrics: Metrics = field(default_factory=Metrics)
    url: str = ""
    author: Author = field(default_factory=lambda: Author(name=""))
    install: InstallInfo = field(default_factory=InstallInfo)


@dataclass(frozen=True)
class Catalog:
    """A catalog snapshot. Item order is the tie-breaking order for ranking."""

    version: str
    last_updated: str
    items: tuple[CatalogItem, ...] = ()
