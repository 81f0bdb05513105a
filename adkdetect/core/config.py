"""Detection and validation configuration.

A :class:`ValidationConfig` is supplied when a detector or validator is
constructed and is never mutated afterwards.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace

MIB = 1024 * 1024

DEFAULT_ALLOWED_EXTENSIONS: tuple[str, ...] = (
    "rs",
    "py",
    "pyi",
    "toml",
    "json",
    "yaml",
    "yml",
    "md",
    "rst",
    "txt",
)

# Build outputs; dropped from the effective set when include_build_artifacts is on.
BUILD_ARTIFACT_PATTERNS: tuple[str, ...] = (
    "target/**",
    "build/**",
    "dist/**",
)

DEFAULT_EXCLUDED_PATTERNS: tuple[str, ...] = BUILD_ARTIFACT_PATTERNS + (
    "node_modules/**",
    ".venv/**",
    "__pycache__/**",
    ".git/**",
    ".svn/**",
    ".vscode/**",
    ".idea/**",
    "*.tmp",
    "*.temp",
    "*.log",
    "*.bak",
)

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ValidationConfig:
    """Size, type, exclusion and depth limits shared by scanner and validator."""

    max_file_size: int = 50 * MIB
    min_file_size: int = 1
    allowed_extensions: tuple[str, ...] = DEFAULT_ALLOWED_EXTENSIONS
    excluded_path_patterns: tuple[str, ...] = DEFAULT_EXCLUDED_PATTERNS
    max_depth: int = 3
    follow_symlinks: bool = False
    include_build_artifacts: bool = False
    extra_excludes: tuple[str, ...] = field(default=())

    @classmethod
    def default(cls) -> ValidationConfig:
        return cls()

    @classmethod
    def for_code_review(cls) -> ValidationConfig:
        """Smaller size ceiling, source files only."""
        return cls(
            max_file_size=1 * MIB,
            min_file_size=10,
            allowed_extensions=("rs", "py"),
            max_depth=5,
        )

    @classmethod
    def for_project_analysis(cls) -> ValidationConfig:
        return cls(
            max_file_size=10 * MIB,
            max_depth=10,
            follow_symlinks=True,
            include_build_artifacts=True,
        )

    @classmethod
    def for_config_files(cls) -> ValidationConfig:
        return cls(
            max_file_size=10 * 1024,
            allowed_extensions=("toml", "json", "yaml", "yml"),
        )

    @classmethod
    def from_env(cls, base: ValidationConfig | None = None) -> ValidationConfig:
        """Overlay ADKDETECT_* environment variables on *base* (default preset).

        Reads:
            ADKDETECT_MAX_FILE_SIZE   — bytes
            ADKDETECT_MAX_DEPTH       — directory levels
            ADKDETECT_FOLLOW_SYMLINKS — 1/true/yes/on
        """
        config = base or cls()
        overrides: dict[str, object] = {}

        max_file_size = os.environ.get("ADKDETECT_MAX_FILE_SIZE")
        if max_file_size:
            overrides["max_file_size"] = _parse_int("ADKDETECT_MAX_FILE_SIZE", max_file_size)

        max_depth = os.environ.get("ADKDETECT_MAX_DEPTH")
        if max_depth:
            overrides["max_depth"] = _parse_int("ADKDETECT_MAX_DEPTH", max_depth)

        follow = os.environ.get("ADKDETECT_FOLLOW_SYMLINKS")
        if follow:
            overrides["follow_symlinks"] = follow.strip().lower() in _TRUTHY

        return replace(config, **overrides) if overrides else config

    def with_overrides(
        self,
        max_depth: int | None = None,
        excludes: tuple[str, ...] | list[str] | None = None,
    ) -> ValidationConfig:
        """Return a copy with depth and/or extra exclusion patterns overridden."""
        overrides: dict[str, object] = {}
        if max_depth is not None:
            overrides["max_depth"] = max_depth
        if excludes is not None:
            overrides["extra_excludes"] = tuple(excludes)
        return replace(self, **overrides) if overrides else self

    @property
    def effective_excludes(self) -> tuple[str, ...]:
        """Exclusion patterns actually applied during scans."""
        patterns = self.excluded_path_patterns
        if self.include_build_artifacts:
            patterns = tuple(p for p in patterns if p not in BUILD_ARTIFACT_PATTERNS)
        return patterns + self.extra_excludes


def _parse_int(name: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value
