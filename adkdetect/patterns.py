"""Exclusion pattern matching over relative path segments.

Pattern forms:
    ``name/**``   — any path with a segment matching ``name`` (and everything below it)
    ``*.ext``     — any path whose segment matches the glob (no ``/`` in the pattern)
    ``a/b*``      — glob against the whole relative path, or any trailing sub-path
"""

from __future__ import annotations

import fnmatch
from pathlib import PurePath


def path_segments(relative_path: str | PurePath) -> tuple[str, ...]:
    """Split *relative_path* into non-empty segments, accepting either separator."""
    text = str(relative_path).replace("\\", "/")
    return tuple(part for part in text.split("/") if part and part != ".")


def matches_pattern(relative_path: str | PurePath, pattern: str) -> bool:
    """Return True when *relative_path* falls under *pattern*."""
    segments = path_segments(relative_path)
    if not segments:
        return False

    pattern = pattern.replace("\\", "/").strip()
    if pattern.endswith("/**"):
        prefix = path_segments(pattern[:-3])
        if not prefix:
            return True
        width = len(prefix)
        return any(
            all(fnmatch.fnmatchcase(seg, pat) for seg, pat in zip(segments[i : i + width], prefix))
            for i in range(len(segments) - width + 1)
        )

    if "/" not in pattern:
        return any(fnmatch.fnmatchcase(seg, pattern) for seg in segments)

    joined = "/".join(segments)
    anchored = pattern.lstrip("/")
    if fnmatch.fnmatchcase(joined, anchored):
        return True
    return any(
        fnmatch.fnmatchcase("/".join(segments[i:]), anchored) for i in range(1, len(segments))
    )


def is_excluded(relative_path: str | PurePath, patterns: tuple[str, ...] | list[str]) -> bool:
    """Return True when *relative_path* matches any of *patterns*."""
    return any(matches_pattern(relative_path, pattern) for pattern in patterns)
