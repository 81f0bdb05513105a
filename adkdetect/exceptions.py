"""Custom exceptions for ADK project detection."""

from __future__ import annotations


class DetectionError(Exception):
    """Base exception for all detection errors."""


class ScanIOError(DetectionError):
    """Raised when a scan root exists but cannot be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read scan root '{path}': {reason}")


class ManifestParseError(DetectionError):
    """Raised when a manifest is present but its dependency keys cannot be extracted."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed manifest '{path}': {reason}")


class ProjectNotFoundError(DetectionError, FileNotFoundError):
    """Raised when a candidate project path does not exist."""
