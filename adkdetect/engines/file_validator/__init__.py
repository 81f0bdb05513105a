"""File validator engine — size, type and exclusion checks for candidate files."""

from adkdetect.engines.file_validator.models import FileStatistics, FileType, ValidationResult
from adkdetect.engines.file_validator.validator import (
    FileValidator,
    determine_file_type,
    file_statistics,
    format_file_size,
    invalid_files,
    valid_files,
)

__all__ = [
    "FileStatistics",
    "FileType",
    "FileValidator",
    "ValidationResult",
    "determine_file_type",
    "file_statistics",
    "format_file_size",
    "invalid_files",
    "valid_files",
]
