"""FileValidator — decide whether a file is fit for further analysis."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog

from adkdetect.core.config import ValidationConfig
from adkdetect.engines.file_validator.models import FileStatistics, FileType, ValidationResult
from adkdetect.patterns import is_excluded

log = structlog.get_logger("adkdetect.validator")

# Per-file ceiling applied by is_suitable_for_review on top of max_file_size.
REVIEW_SIZE_LIMIT = 100 * 1024

_BUILD_NAMES = frozenset(
    {"Cargo.toml", "Cargo.lock", "requirements.txt", "setup.py", "pyproject.toml"}
)
_ENV_NAMES = frozenset({".env", ".env.template", ".env.local", ".env.production"})
_DOC_NAMES = frozenset({"README.md", "CHANGELOG.md", "LICENSE", "CONTRIBUTING.md"})

# Always allowed, whatever the extension list says.
_ALWAYS_ALLOWED_NAMES = frozenset(
    {"Cargo.toml", "requirements.txt", "setup.py", ".env", ".env.template"}
)

_EXTENSION_TYPES: dict[str, FileType] = {
    "rs": FileType.RUST,
    "py": FileType.PYTHON,
    "pyi": FileType.PYTHON,
    "toml": FileType.CONFIG,
    "json": FileType.CONFIG,
    "yaml": FileType.CONFIG,
    "yml": FileType.CONFIG,
    "md": FileType.DOCUMENTATION,
    "rst": FileType.DOCUMENTATION,
    "txt": FileType.DOCUMENTATION,
}

_STAT_FIELDS: dict[FileType, str] = {
    FileType.RUST: "rust_files",
    FileType.PYTHON: "python_files",
    FileType.CONFIG: "config_files",
    FileType.DOCUMENTATION: "doc_files",
    FileType.ENVIRONMENT: "env_files",
    FileType.BUILD: "build_files",
    FileType.UNKNOWN: "unknown_files",
}

_SIZE_UNITS = ("B", "KB", "MB", "GB")


class FileValidator:
    """Validate files against size, type and exclusion constraints."""

    def __init__(self, config: ValidationConfig | None = None) -> None:
        self.config = config or ValidationConfig.default()

    @classmethod
    def default(cls) -> FileValidator:
        return cls()

    @classmethod
    def for_code_review(cls) -> FileValidator:
        return cls(ValidationConfig.for_code_review())

    @classmethod
    def for_config_files(cls) -> FileValidator:
        return cls(ValidationConfig.for_config_files())

    def validate(self, file_path: Path | str, root: Path | str | None = None) -> ValidationResult:
        """Validate one file.

        Exclusion patterns are matched against the path relative to *root*
        when given, otherwise against *file_path* as passed.

        Checks run in order: existence, regular file, exclusion, minimum
        size, maximum size, allowed type. The first failure sets ``reason``.
        """
        path = Path(file_path)

        if not path.exists():
            return ValidationResult(path, False, 0, FileType.UNKNOWN, "File does not exist")
        if not path.is_file():
            return ValidationResult(path, False, 0, FileType.UNKNOWN, "Path is not a file")

        file_size = path.stat().st_size
        file_type = determine_file_type(path)

        match_path = path.relative_to(root) if root is not None else path
        if is_excluded(match_path, self.config.effective_excludes):
            return ValidationResult(
                path, False, file_size, file_type, "File matches excluded pattern"
            )

        if file_size < self.config.min_file_size:
            return ValidationResult(
                path, False, file_size, file_type, f"File too small: {file_size} bytes"
            )

        if file_size > self.config.max_file_size:
            return ValidationResult(
                path,
                False,
                file_size,
                file_type,
                f"File too large: {file_size} bytes (max: {self.config.max_file_size})",
            )

        if not self._is_allowed_file_type(path):
            return ValidationResult(path, False, file_size, file_type, "File type not allowed")

        return ValidationResult(path, True, file_size, file_type)

    def validate_files(self, file_paths: Iterable[Path | str]) -> list[ValidationResult]:
        """Validate each path; an OS error on one file becomes an invalid result."""
        results: list[ValidationResult] = []
        for file_path in file_paths:
            try:
                results.append(self.validate(file_path))
            except OSError as exc:
                log.warning("validator.file_failed", path=str(file_path), error=str(exc))
                results.append(
                    ValidationResult(
                        Path(file_path),
                        False,
                        0,
                        FileType.UNKNOWN,
                        f"Validation error: {exc}",
                    )
                )
        return results

    def is_suitable_for_review(self, file_path: Path | str) -> bool:
        """Valid Rust/Python source no larger than the review ceiling."""
        result = self.validate(file_path)
        if not result.is_valid:
            return False
        if result.file_type not in (FileType.RUST, FileType.PYTHON):
            return False
        return result.file_size <= REVIEW_SIZE_LIMIT

    def _is_allowed_file_type(self, path: Path) -> bool:
        if path.name in _ALWAYS_ALLOWED_NAMES:
            return True
        suffix = path.suffix.lower().lstrip(".")
        return bool(suffix) and suffix in self.config.allowed_extensions


def determine_file_type(file_path: Path | str) -> FileType:
    """Classify a file by well-known name first, then by extension."""
    path = Path(file_path)
    if path.name in _BUILD_NAMES:
        return FileType.BUILD
    if path.name in _ENV_NAMES:
        return FileType.ENVIRONMENT
    if path.name in _DOC_NAMES:
        return FileType.DOCUMENTATION
    return _EXTENSION_TYPES.get(path.suffix.lower().lstrip("."), FileType.UNKNOWN)


def valid_files(results: Iterable[ValidationResult]) -> list[ValidationResult]:
    return [r for r in results if r.is_valid]


def invalid_files(results: Iterable[ValidationResult]) -> list[ValidationResult]:
    return [r for r in results if not r.is_valid]


def file_statistics(results: Iterable[ValidationResult]) -> FileStatistics:
    stats = FileStatistics()
    for result in results:
        stats.total_files += 1
        stats.total_size += result.file_size
        if result.is_valid:
            stats.valid_files += 1
            stats.valid_size += result.file_size
        else:
            stats.invalid_files += 1
        field_name = _STAT_FIELDS[result.file_type]
        setattr(stats, field_name, getattr(stats, field_name) + 1)
    return stats


def format_file_size(size: int) -> str:
    """Human-readable size: ``512 B``, ``1.5 KB``, ``2.0 MB``."""
    value = float(size)
    unit = 0
    while value >= 1024.0 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024.0
        unit += 1
    if unit == 0:
        return f"{size} {_SIZE_UNITS[0]}"
    return f"{value:.1f} {_SIZE_UNITS[unit]}"
