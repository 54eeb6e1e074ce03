"""Project profile models.

A profile is produced by an external project analyzer and consumed
read-only by the scoring engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

ProjectSize = Literal["small", "medium", "large", "enterprise"]
ProjectKind = Literal["monorepo", "library", "application", "unknown"]


@dataclass
class ProjectMetadata:
    """Size, structure and team-scale hints about a project."""

    size: ProjectSize = "medium"
    kind: ProjectKind = "unknown"
    estimated_team_size: int = 1  # 1: solo, 2-5: small, 6-20: medium, 21+: large
    workspace_count: int | None = None  # monorepos only
    file_count: int = 0
    language_count: int = 0


@dataclass
class ProjectProfile:
    """Detected technical profile of a project."""

    languages: list[str] = field(default_factory=list)
    frameworks: list[str] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)  # relative paths
    metadata: ProjectMetadata | None = None
    path: str = ""
