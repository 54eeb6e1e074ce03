"""Catalog loader: reads JSON and YAML catalog files from disk."""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from xrec.core.catalog.models import (
    Author,
    CatalogItem,
    DetectionRules,
    InstallInfo,
    InstallMethod,
    ItemType,
    Metrics,
    SourceType,
)
from xrec.core.catalog.registry import CatalogRegistry

logger = logging.getLogger(__name__)

CATALOG_SUFFIXES = {".json", ".yaml", ".yml"}


class CatalogFormatError(ValueError):
    """Raised when a catalog file or item cannot be parsed."""


def load_catalog_directory(directory: str | Path, registry: CatalogRegistry) -> int:
    """Load all catalog files from a directory (recursively).

    Returns the number of items loaded.
    Skips files starting with underscore (like _schema.yaml).
    """
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning("Catalog directory does not exist: %s", directory)
        return 0

    count = 0
    for path in sorted(directory.rglob("*")):
        if path.suffix not in CATALOG_SUFFIXES or path.name.startswith("_"):
            continue
        try:
            version, last_updated, items = load_catalog_file(path)
        except Exception:
            logger.exception("Failed to load catalog from %s", path)
            continue

        loaded = 0
        for item in items:
            try:
                registry.register(item)
                loaded += 1
            except ValueError:
                logger.warning("Skipping duplicate item id %r in %s", item.id, path.name)
        registry.set_version(version, last_updated)
        count += loaded
        logger.info("Loaded %d items from %s (v%s)", loaded, path.name, version or "?")
    return count


def load_catalog_file(path: Path) -> tuple[str, str, list[CatalogItem]]:
    """Parse a catalog file into (version, last_updated, items).

    The file holds either ``{version, lastUpdated, items: [...]}`` or a bare
    list of items.
    """
    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix == ".json":
                data: Any = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise CatalogFormatError(f"{path}: {exc}") from exc

    if isinstance(data, list):
        version, last_updated, raw_items = "", "", data
    elif isinstance(data, dict):
        version = str(data.get("version", ""))
        last_updated = str(data.get("lastUpdated", data.get("last_updated", "")))
        raw_items = data.get("items") or []
    else:
        raise CatalogFormatError(f"{path}: expected a mapping or a list of items")

    return version, last_updated, [parse_item(raw) for raw in raw_items]


def _strings(values: Any) -> tuple[str, ...]:
    if not values:
        return ()
    return tuple(str(v) for v in values)


def _get(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present key. Accepts camelCase and snake_case spellings."""
    for key in keys:
        if key in data:
            return data[key]
    return default


def parse_item(data: dict[str, Any]) -> CatalogItem:
    """Build a CatalogItem from a raw mapping."""
    try:
        item_type = ItemType(data["type"])
    except KeyError as exc:
        raise CatalogFormatError(f"Item is missing required field {exc}") from exc
    except ValueError as exc:
        raise CatalogFormatError(f"Item {data.get('id')!r}: {exc}") from exc

    detection_data = data.get("detection") or {}
    metrics_data = data.get("metrics") or {}
    install_data = data.get("install") or {}
    author_data = data.get("author") or {}

    try:
        source = SourceType(metrics_data.get("source", SourceType.COMMUNITY.value))
        method = InstallMethod(install_data.get("method", InstallMethod.MANUAL.value))
    except ValueError as exc:
        raise CatalogFormatError(f"Item {data.get('id')!r}: {exc}") from exc

    security_score = _get(metrics_data, "securityScore", "security_score")
    # YAML turns unquoted timestamps into datetime objects
    last_updated = _get(metrics_data, "lastUpdated", "last_updated")
    if isinstance(last_updated, date):
        last_updated = last_updated.isoformat()
    elif last_updated is not None:
        last_updated = str(last_updated)

    try:
        return CatalogItem(
            id=data["id"],
            name=data["name"],
            type=item_type,
            description=str(data.get("description", "")).strip(),
            category=data.get("category", ""),
            tags=tuple(t.lower() for t in _strings(data.get("tags"))),
            detection=DetectionRules(
                languages=_strings(detection_data.get("languages")),
                frameworks=_strings(detection_data.get("frameworks")),
                dependencies=_strings(detection_data.get("dependencies")),
                files=_strings(detection_data.get("files")),
                keywords=_strings(detection_data.get("keywords")),
            ),
            metrics=Metrics(
                source=source,
                is_official=bool(_get(metrics_data, "isOfficial", "is_official", default=False)),
                stars=metrics_data.get("stars"),
                last_updated=last_updated,
                security_score=float(security_score) if security_score is not None else None,
            ),
            url=data.get("url", ""),
            author=Author(
                name=author_data.get("name", ""),
                url=author_data.get("url"),
                email=author_data.get("email"),
            ),
            install=InstallInfo(
                method=method,
                command=install_data.get("command"),
                marketplace=install_data.get("marketplace"),
            ),
        )
    except KeyError as exc:
        raise CatalogFormatError(
            f"Item {data.get('id')!r} is missing required field {exc}"
        ) from exc
