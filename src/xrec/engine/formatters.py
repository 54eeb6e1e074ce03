"""Plain-text rendering of ranked results for display to a user."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from xrec.core.catalog.models import CatalogItem, ItemType
from xrec.engine.models import ScoredResult
from xrec.engine.quality import parse_timestamp
from xrec.engine.scorer import score_indicator

MAX_PER_TYPE = 5
DESCRIPTION_WIDTH = 60
RECENT_DAYS = 182

TYPE_LABELS: dict[ItemType, str] = {
    ItemType.PLUGIN: "Plugins (editor extensions)",
    ItemType.MCP: "MCP servers (external service connectors)",
    ItemType.SKILL: "Skills (reusable instruction sets)",
    ItemType.WORKFLOW: "Workflows (multi-step automation)",
    ItemType.HOOK: "Hooks (event-driven handlers)",
    ItemType.COMMAND: "Commands (custom slash commands)",
    ItemType.AGENT: "Agents (specialised task runners)",
}

# Where manually installed item kinds are placed in a project
INSTALL_PATHS: dict[ItemType, str] = {
    ItemType.SKILL: ".claude/skills/",
    ItemType.WORKFLOW: ".claude/workflows/",
    ItemType.HOOK: ".claude/hooks/",
    ItemType.COMMAND: ".claude/commands/",
    ItemType.AGENT: ".claude/agents/",
}


def security_badge(score: float) -> str:
    if score >= 90:
        return "Excellent"
    if score >= 70:
        return "Good"
    if score >= 50:
        return "Fair"
    return "Poor"


def score_explanation(score: float) -> str:
    if score >= 80:
        return "strongly recommended for this project"
    if score >= 50:
        return "fits this project"
    if score >= 20:
        return "useful as a reference"
    return "weak fit"


def _shorten(text: str, width: int = DESCRIPTION_WIDTH) -> str:
    return text if len(text) <= width else text[:width] + "..."


def _is_recent(item: CatalogItem, now: datetime) -> bool:
    updated = parse_timestamp(item.metrics.last_updated)
    return updated is not None and updated > now - timedelta(days=RECENT_DAYS)


def install_instructions(item: CatalogItem) -> list[str]:
    """Installation lines for one item."""
    command = item.install.command
    if item.type == ItemType.PLUGIN:
        return [f"   └─ Install: {command}" if command else f"   └─ URL: {item.url}"]

    if item.type == ItemType.MCP:
        if command:
            return [
                f"   ├─ Install: {command}",
                "   └─ Then add the server to your MCP client configuration",
            ]
        return [f"   └─ URL: {item.url}"]

    target = INSTALL_PATHS.get(item.type, ".claude/")
    return [
        "   ├─ Install:",
        f"   │  1. Download the files from {item.url}",
        f"   │  2. Place them under {target} in your project",
        f"   └─ Details: {item.url}",
    ]


def group_by_type(results: list[ScoredResult]) -> dict[ItemType, list[ScoredResult]]:
    groups: dict[ItemType, list[ScoredResult]] = {}
    for result in results:
        groups.setdefault(result.item.type, []).append(result)
    return groups


def select_bonus(
    candidates: list[ScoredResult],
    displayed_ids: set[str],
    *,
    now: datetime,
    limit: int = 2,
) -> list[ScoredResult]:
    """Pick popular or trending items not already shown."""

    def bonus_worthiness(result: ScoredResult) -> float:
        metrics = result.item.metrics
        points = 0.0
        if metrics.is_official:
            points += 100
        if metrics.stars:
            points += min(metrics.stars / 10, 50)
        if metrics.security_score is not None and metrics.security_score >= 80:
            points += 30
        if _is_recent(result.item, now):
            points += 20
        return points

    remaining = [r for r in candidates if r.item.id not in displayed_ids]
    return sorted(remaining, key=bonus_worthiness, reverse=True)[:limit]


def bonus_label(item: CatalogItem, now: datetime) -> str:
    metrics = item.metrics
    if metrics.is_official:
        return "official pick"
    if metrics.stars and metrics.stars >= 100:
        return "popular"
    if metrics.security_score is not None and metrics.security_score >= 80:
        return "high quality"
    if _is_recent(item, now):
        return "trending"
    return "worth a look"


def format_recommendations(
    results: list[ScoredResult],
    all_results: list[ScoredResult] | None = None,
    *,
    now: datetime | None = None,
) -> str:
    """Render ranked results grouped by item type, with an optional bonus section."""
    if not results:
        return "No suitable recommendations were found for this project."

    now = now or datetime.now(timezone.utc)
    grouped = group_by_type(results)
    displayed: set[str] = set()
    lines: list[str] = []

    for item_type in ItemType:
        group = grouped.get(item_type)
        if not group:
            continue

        shown = group[:MAX_PER_TYPE]
        lines.append(f"\n{TYPE_LABELS[item_type]} ({len(shown)} recommended)")
        lines.append("━" * 40)

        for index, result in enumerate(shown, start=1):
            item = result.item
            displayed.add(item.id)
            official = " (official)" if item.metrics.is_official else ""
            indicator = score_indicator(result.score)
            indicator = f" [{indicator}]" if indicator else ""

            lines.append(f"\n{index}. {item.name}{official}")
            lines.append(f"   ├─ Purpose: {_shorten(item.description)}")
            lines.append(
                f"   ├─ Score: {round(result.score)}{indicator} - {score_explanation(result.score)}"
            )
            if item.metrics.security_score is not None:
                lines.append(
                    f"   ├─ Security: {security_badge(item.metrics.security_score)} "
                    f"({item.metrics.security_score:g}/100)"
                )
            if result.reasons:
                lines.append(f"   ├─ Matched: {', '.join(result.reasons)}")
            lines.extend(install_instructions(item))

        if len(group) > MAX_PER_TYPE:
            lines.append(f"\n   {len(group) - MAX_PER_TYPE} more candidates not shown")
        lines.append("")

    if all_results:
        bonus = select_bonus(all_results, displayed, now=now)
        if bonus:
            lines.append("\nPopular and trending")
            lines.append("━" * 40)
            for index, result in enumerate(bonus, start=1):
                item = result.item
                lines.append(f"\n{index}. {item.name} ({bonus_label(item, now)})")
                lines.append(f"   ├─ Purpose: {_shorten(item.description)}")
                if item.metrics.stars:
                    lines.append(f"   ├─ Stars: {item.metrics.stars}")
                lines.extend(install_instructions(item))

    return "\n".join(lines)
