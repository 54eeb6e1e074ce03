"""Glob pattern matching for project file paths.

Supported wildcards:

* ``*``  any characters except ``/``
* ``**`` any characters including ``/``
* ``?``  any single character

Matching is case-insensitive and anchored to the whole path::

    matches("src/index.ts", "src/*.ts")              # True
    matches("src/utils/helper.ts", "src/**/*.ts")    # True
    matches("test.js", "*.ts")                       # False
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache

logger = logging.getLogger(__name__)

_GLOBSTAR = "\x00GLOBSTAR\x00"


def translate(pattern: str) -> str:
    """Translate a glob pattern into regular expression source."""
    return (
        pattern.replace(".", r"\.")
        .replace("**", _GLOBSTAR)
        .replace("*", "[^/]*")
        .replace(_GLOBSTAR, ".*")
        .replace("?", ".")
    )


@lru_cache(maxsize=1024)
def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(translate(pattern), re.IGNORECASE)
    except re.error:
        logger.debug("Glob %r is not a valid expression; matching literally", pattern)
        return re.compile(re.escape(pattern), re.IGNORECASE)


def matches(path: str, pattern: str) -> bool:
    """Return True if ``path`` matches the glob ``pattern``."""
    return _compile(pattern).fullmatch(path) is not None


def matches_any(paths: list[str], pattern: str) -> bool:
    """Return True if at least one path matches ``pattern``."""
    regex = _compile(pattern)
    return any(regex.fullmatch(p) is not None for p in paths)
