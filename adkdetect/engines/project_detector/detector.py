"""AdkProjectDetector — single-root detection and workspace-wide discovery."""

from __future__ import annotations

import os
import stat
from collections.abc import Iterator
from pathlib import Path

import structlog

from adkdetect.core.config import ValidationConfig
from adkdetect.engines.project_detector.classifier import classify
from adkdetect.engines.project_detector.evidence import gather
from adkdetect.engines.project_detector.finder import find_projects
from adkdetect.engines.project_detector.models import ProjectInfo, ProjectType
from adkdetect.exceptions import ScanIOError

log = structlog.get_logger("adkdetect.detector")

# Extensions and file names worth handing to downstream analysis.
_PROCESSABLE_EXTENSIONS = frozenset({"rs", "py", "toml", "json", "yaml", "yml", "md"})
_PROCESSABLE_NAMES = frozenset(
    {"Cargo.toml", "requirements.txt", "setup.py", ".env", ".env.template"}
)


class AdkProjectDetector:
    """Classify directories as ADK projects.

    Each call is a fresh, stateless walk; the detector only holds its
    (immutable) configuration.
    """

    def __init__(
        self,
        config: ValidationConfig | None = None,
        max_depth: int | None = None,
        excludes: tuple[str, ...] | list[str] | None = None,
    ) -> None:
        self.config = (config or ValidationConfig.default()).with_overrides(
            max_depth=max_depth, excludes=excludes
        )

    @classmethod
    def default(cls) -> AdkProjectDetector:
        return cls()

    def detect_adk_project(self, path: Path | str) -> ProjectInfo:
        """Detect the project type of *path*.

        Raises:
            ProjectNotFoundError: *path* does not exist.
            ScanIOError: *path* cannot be read.
        """
        root = Path(path)
        evidence, paths = gather(
            root,
            self.config.max_depth,
            self.config.effective_excludes,
            follow_symlinks=self.config.follow_symlinks,
        )
        project_type = classify(evidence)

        info = ProjectInfo(
            root_path=root,
            project_type=project_type,
            adk_version=evidence.adk_version,
            has_cargo_toml=evidence.has_rust_manifest,
            has_requirements_txt=evidence.has_python_requirements,
            has_adk_dependencies=evidence.rust_adk_dependency or evidence.python_adk_dependency,
            has_adk_config=evidence.has_adk_markers,
            estimated_size=_estimate_size(root, paths),
        )
        if project_type is not ProjectType.NONE:
            log.info(
                "detector.project_detected",
                root=str(root),
                project_type=project_type.value,
                adk_version=info.adk_version,
            )
        return info

    def find_projects(self, workspace_root: Path | str) -> Iterator[ProjectInfo]:
        """Lazily yield every ADK project root beneath *workspace_root*."""
        return find_projects(
            workspace_root,
            self.detect_adk_project,
            self.config.max_depth,
            self.config.effective_excludes,
            follow_symlinks=self.config.follow_symlinks,
        )

    def find_adk_projects(self, workspace_root: Path | str) -> list[ProjectInfo]:
        """Eager variant of :meth:`find_projects`."""
        return list(self.find_projects(workspace_root))

    def should_process_file(self, file_path: Path | str) -> bool:
        """Return True if *file_path* is small enough and of a relevant type."""
        path = Path(file_path)
        if not path.exists():
            return False

        try:
            size = path.stat().st_size
        except OSError as exc:
            raise ScanIOError(str(path), f"failed to get metadata: {exc}") from exc
        if size > self.config.max_file_size:
            return False

        if path.name in _PROCESSABLE_NAMES:
            return True
        return path.suffix.lower().lstrip(".") in _PROCESSABLE_EXTENSIONS


def _estimate_size(root: Path, paths: set[str]) -> int:
    """Total bytes of regular files among the scanned *paths*."""
    total = 0
    for rel in paths:
        try:
            st = os.stat(root / rel, follow_symlinks=False)
        except OSError:
            continue
        if stat.S_ISREG(st.st_mode):
            total += st.st_size
    return total
