"""Data models for the file validator engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class FileType(Enum):
    RUST = "rust"
    PYTHON = "python"
    CONFIG = "config"
    DOCUMENTATION = "documentation"
    ENVIRONMENT = "environment"
    BUILD = "build"
    UNKNOWN = "unknown"


@dataclass
class ValidationResult:
    """Outcome of validating one file; ``reason`` is set when invalid."""

    path: Path
    is_valid: bool
    file_size: int
    file_type: FileType
    reason: str | None = None


@dataclass
class FileStatistics:
    """Aggregate counters over a batch of validation results."""

    total_files: int = 0
    valid_files: int = 0
    invalid_files: int = 0
    total_size: int = 0
    valid_size: int = 0
    rust_files: int = 0
    python_files: int = 0
    config_files: int = 0
    doc_files: int = 0
    env_files: int = 0
    build_files: int = 0
    unknown_files: int = 0

    @property
    def valid_percentage(self) -> float:
        if self.total_files == 0:
            return 0.0
        return self.valid_files / self.total_files * 100.0

    @property
    def average_file_size(self) -> int:
        if self.total_files == 0:
            return 0
        return self.total_size // self.total_files
