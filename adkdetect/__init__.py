"""adk-detect: classify ADK projects on disk and extract their configuration signals."""

__version__ = "0.1.0"

from adkdetect.core.config import ValidationConfig
from adkdetect.engines.config_detector import (
    AdkConfigDetector,
    ConfigFileInfo,
    ConfigInfo,
    ConfigType,
    enrich,
)
from adkdetect.engines.file_validator import (
    FileStatistics,
    FileType,
    FileValidator,
    ValidationResult,
)
from adkdetect.engines.project_detector import (
    AdkProjectDetector,
    EvidenceRecord,
    ProjectInfo,
    ProjectType,
    aggregate,
    classify,
    scan,
)
from adkdetect.exceptions import (
    DetectionError,
    ManifestParseError,
    ProjectNotFoundError,
    ScanIOError,
)

__all__ = [
    "AdkConfigDetector",
    "AdkProjectDetector",
    "ConfigFileInfo",
    "ConfigInfo",
    "ConfigType",
    "DetectionError",
    "EvidenceRecord",
    "FileStatistics",
    "FileType",
    "FileValidator",
    "ManifestParseError",
    "ProjectInfo",
    "ProjectNotFoundError",
    "ProjectType",
    "ScanIOError",
    "ValidationConfig",
    "ValidationResult",
    "aggregate",
    "classify",
    "enrich",
    "get_default_detection_config",
    "is_compatible_adk_version",
    "scan",
]


def is_compatible_adk_version(adk_version: str) -> bool:
    """Every non-empty ADK version is currently supported."""
    return bool(adk_version)


def get_default_detection_config() -> ValidationConfig:
    return ValidationConfig.default()
