"""Result types produced by the scoring engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from xrec.core.catalog.models import CatalogItem


@dataclass
class PartialScore:
    """An additive score term with the reasons that produced it."""

    score: float = 0.0
    reasons: list[str] = field(default_factory=list)


@dataclass
class ScoreBreakdown:
    """Component sub-scores, for diagnostics."""

    base_score: float = 0.0  # structural match after multipliers
    context_score: float = 0.0
    similarity_score: float = 0.0
    quality_score: float = 0.0  # filled in by the ranking engine
    final_score: float = 0.0

    def as_dict(self) -> dict[str, float]:
        return {k: round(v, 4) for k, v in asdict(self).items()}


@dataclass
class MatchScore:
    score: float
    reasons: list[str]
    breakdown: ScoreBreakdown


@dataclass
class ScoredResult:
    """A ranked catalog item with its score and match reasons."""

    item: CatalogItem
    score: float
    reasons: list[str] = field(default_factory=list)
    breakdown: ScoreBreakdown | None = None

    def to_dict(self) -> dict[str, Any]:
        """Flatten into the shape returned by the MCP tools."""
        item = self.item
        data: dict[str, Any] = {
            "id": item.id,
            "name": item.name,
            "type": item.type.value,
            "description": item.description,
            "category": item.category,
            "score": round(self.score, 2),
            "reasons": list(self.reasons),
            "url": item.url,
            "install": {
                "method": item.install.method.value,
                "command": item.install.command,
                "marketplace": item.install.marketplace,
            },
            "is_official": item.metrics.is_official,
            "source": item.metrics.source.value,
            "security_score": item.metrics.security_score,
        }
        if self.breakdown is not None:
            data["breakdown"] = self.breakdown.as_dict()
        return data
