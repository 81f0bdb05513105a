"""Structure scanner — depth-limited, exclusion-pruned directory walk."""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath

import structlog

from adkdetect.exceptions import ProjectNotFoundError, ScanIOError
from adkdetect.patterns import is_excluded

log = structlog.get_logger("adkdetect.structure")


def scan(
    root: Path | str,
    max_depth: int,
    excludes: tuple[str, ...] | list[str] = (),
    follow_symlinks: bool = False,
) -> set[str]:
    """Collect relative POSIX paths of files and directories under *root*.

    A path at depth ``d`` has ``d`` segments; nothing deeper than *max_depth*
    is recorded and directories at *max_depth* are not descended. Paths that
    match *excludes* are pruned together with their subtree. Directory
    identities are tracked so symlink cycles terminate.

    Raises:
        ProjectNotFoundError: *root* does not exist.
        ScanIOError: *root* exists but cannot be listed.
    """
    root = Path(root)
    if not root.exists():
        raise ProjectNotFoundError(f"Scan root not found: {root}")
    if not root.is_dir():
        raise ScanIOError(str(root), "not a directory")

    try:
        root_stat = root.stat()
        entries = _list_dir(root)
    except OSError as exc:
        raise ScanIOError(str(root), exc.strerror or str(exc)) from exc

    seen: set[str] = set()
    visited: set[tuple[int, int]] = {(root_stat.st_dev, root_stat.st_ino)}
    # Stack of (directory, relative prefix, depth of its children, pre-listed entries)
    stack: list[tuple[Path, PurePosixPath, int, list[os.DirEntry] | None]] = [
        (root, PurePosixPath(), 1, entries)
    ]

    while stack:
        directory, prefix, depth, listed = stack.pop()
        if depth > max_depth:
            continue
        if listed is None:
            try:
                listed = _list_dir(directory)
            except OSError as exc:
                log.debug("structure.dir_skipped", path=str(directory), error=str(exc))
                continue

        subdirs: list[tuple[Path, PurePosixPath]] = []
        for entry in listed:
            rel = prefix / entry.name
            rel_text = rel.as_posix()
            if excludes and is_excluded(rel_text, excludes):
                continue

            try:
                is_dir = entry.is_dir(follow_symlinks=follow_symlinks)
            except OSError:
                continue
            seen.add(rel_text)

            if not is_dir or depth >= max_depth:
                continue
            try:
                st = entry.stat(follow_symlinks=follow_symlinks)
            except OSError:
                continue
            identity = (st.st_dev, st.st_ino)
            if identity in visited:
                continue
            visited.add(identity)
            subdirs.append((Path(entry.path), rel))

        # Reverse so the sorted order is popped first.
        for sub_path, sub_rel in reversed(subdirs):
            stack.append((sub_path, sub_rel, depth + 1, None))

    return seen


def extensions(paths: set[str] | list[str]) -> frozenset[str]:
    """Lower-cased suffixes (``".rs"``, ``".py"``) present in *paths*."""
    return frozenset(
        suffix for suffix in (PurePosixPath(p).suffix.lower() for p in paths) if suffix
    )


def _list_dir(directory: Path) -> list[os.DirEntry]:
    with os.scandir(directory) as it:
        return sorted(it, key=lambda e: e.name)
