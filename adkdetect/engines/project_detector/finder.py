"""Project finder — lazily enumerate ADK project roots across a workspace."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path

from adkdetect.engines.project_detector.models import ProjectInfo, ProjectType
from adkdetect.exceptions import DetectionError, ProjectNotFoundError, ScanIOError
from adkdetect.patterns import is_excluded


def find_projects(
    workspace_root: Path | str,
    detect: Callable[[Path], ProjectInfo],
    max_depth: int,
    excludes: tuple[str, ...] | list[str] = (),
    follow_symlinks: bool = False,
) -> Iterator[ProjectInfo]:
    """Yield a :class:`ProjectInfo` for every ADK root under *workspace_root*.

    Directories are evaluated depth-first in name order down to *max_depth*
    levels. A confirmed root is not descended into. Symlinked directories
    are candidates only when *follow_symlinks* is set, and each directory
    identity is visited once. Subdirectories that cannot be read are
    skipped silently; errors on the workspace root itself are raised.

    Raises:
        ProjectNotFoundError: *workspace_root* does not exist.
        ScanIOError: *workspace_root* is not a directory.
    """
    root = Path(workspace_root)
    if not root.exists():
        raise ProjectNotFoundError(f"Workspace root not found: {root}")
    if not root.is_dir():
        raise ScanIOError(str(root), "not a directory")

    root_stat = root.stat()
    visited: set[tuple[int, int]] = {(root_stat.st_dev, root_stat.st_ino)}
    stack: list[tuple[Path, int]] = [(root, 0)]
    while stack:
        directory, depth = stack.pop()
        if depth >= max_depth:
            continue

        try:
            info = detect(directory)
        except (DetectionError, OSError):
            if directory == root:
                raise
            info = None
        if info is not None and info.project_type is not ProjectType.NONE:
            yield info
            continue

        try:
            children = _child_dirs(directory, follow_symlinks)
        except OSError:
            continue

        accepted: list[Path] = []
        for entry in children:
            rel = Path(entry.path).relative_to(root).as_posix()
            if excludes and is_excluded(rel, excludes):
                continue
            try:
                st = entry.stat(follow_symlinks=follow_symlinks)
            except OSError:
                continue
            identity = (st.st_dev, st.st_ino)
            if identity in visited:
                continue
            visited.add(identity)
            accepted.append(Path(entry.path))
        # Reverse so the sorted order is popped first.
        stack.extend((path, depth + 1) for path in reversed(accepted))


def _child_dirs(directory: Path, follow_symlinks: bool) -> list[os.DirEntry]:
    with os.scandir(directory) as it:
        children = []
        for entry in it:
            try:
                if entry.is_dir(follow_symlinks=follow_symlinks):
                    children.append(entry)
            except OSError:
                continue
    return sorted(children, key=lambda e: e.name)
