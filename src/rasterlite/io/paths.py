"""Wildcard path enumeration.

Patterns are split on ``/`` (``\\`` is accepted as a separator too). Each
segment may use ``*`` (any run of characters) and ``?`` (one character);
character classes are not supported. A ``**`` segment matches zero or more
nested directories when ``recursive`` is set and is an ordinary directory name
otherwise.
"""

import os
import re
from functools import lru_cache
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

RECURSIVE_SEGMENT = "**"


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    parts = []
    for ch in pattern:
        if ch == "*":
            parts.append(".*")
        elif ch == "?":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return re.compile("".join(parts), re.DOTALL)


def match_wildcard(name: str, pattern: str) -> bool:
    """Match a single name against a ``*``/``?`` pattern.

    >>> match_wildcard("photo.png", "*.png")
    True
    >>> match_wildcard("a1.jpg", "a?.png")
    False
    """
    return _compile(pattern).fullmatch(name) is not None


def has_wildcards(segment: str) -> bool:
    return "*" in segment or "?" in segment


def split_pattern(pattern: str) -> tuple[Path, list[str]]:
    """Split a pattern into its literal base directory and remaining segments.

    ``a/b/**/c*.png`` -> (``a/b``, ``["**", "c*.png"]``)
    """
    normalized = pattern.replace("\\", "/")
    base = Path("/") if normalized.startswith("/") else Path(".")
    parts = [p for p in normalized.split("/") if p]

    index = 0
    while index < len(parts):
        segment = parts[index]
        if segment == RECURSIVE_SEGMENT or has_wildcards(segment):
            break
        base = base / segment
        index += 1
    return base, parts[index:]


def _walk_directories(root: Path) -> list[Path]:
    """All directories strictly below ``root``; unreadable ones are skipped."""
    found = []
    for dirpath, dirnames, _ in os.walk(root):
        found.extend(Path(dirpath) / d for d in dirnames)
    return found


def _expand(directory: Path, segments: list[str], index: int, recursive: bool, out: list[str]) -> None:
    if index >= len(segments):
        if directory.exists():
            out.append(str(directory))
        return

    segment = segments[index]

    if segment == RECURSIVE_SEGMENT:
        if not recursive:
            _expand(directory / segment, segments, index + 1, recursive, out)
            return
        _expand(directory, segments, index + 1, recursive, out)
        if directory.is_dir():
            for sub in _walk_directories(directory):
                _expand(sub, segments, index + 1, recursive, out)
        return

    if not directory.is_dir():
        return

    try:
        children = list(directory.iterdir())
    except PermissionError:
        logger.debug("Skipping unreadable directory", path=str(directory))
        return

    for child in children:
        if match_wildcard(child.name, segment):
            _expand(child, segments, index + 1, recursive, out)


def glob_paths(pattern: str, recursive: bool = False) -> list[str]:
    """Enumerate existing files and directories matching ``pattern``.

    Args:
        pattern: Slash-separated pattern, e.g. ``images/**/*.png``
        recursive: Let ``**`` match zero or more directory levels

    Returns:
        Sorted, de-duplicated list of matching paths
    """
    base, segments = split_pattern(pattern)
    results: list[str] = []
    _expand(base, segments, 0, recursive, results)
    return sorted(set(results))
