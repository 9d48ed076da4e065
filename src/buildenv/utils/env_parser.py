"""Parse .env files into dictionaries."""

from __future__ import annotations

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

QUOTES = ('"', "'")


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in QUOTES:
        return value[1:-1]
    return value


def parse_env(content: str) -> dict[str, str]:
    """Parse .env content into key=value pairs.

    Comments and blank lines are skipped, as are lines with no key before
    the first ``=``. A later duplicate key overwrites an earlier one.
    """
    result: dict[str, str] = {}
    for line in _LINE_BREAK.split(content):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        idx = line.find("=")
        if idx <= 0:
            continue
        key = line[:idx].strip()
        value = _unquote(line[idx + 1:].strip())
        if not key:
            continue
        result[key] = value
    return result


def load_env_file(path: str | Path) -> dict[str, str]:
    """Load a .env file, returning an empty dict if it doesn't exist.

    Read errors on an existing file are not caught.
    """
    path = Path(path)
    if not path.is_file():
        logger.debug("No env file at %s", path)
        return {}
    entries = parse_env(path.read_text(encoding="utf-8", errors="replace"))
    logger.debug("Loaded %d entries from %s", len(entries), path)
    return entries
