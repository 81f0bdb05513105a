"""Project detector engine — classify directories as ADK projects."""

from adkdetect.engines.project_detector.classifier import classify
from adkdetect.engines.project_detector.detector import AdkProjectDetector
from adkdetect.engines.project_detector.evidence import aggregate
from adkdetect.engines.project_detector.models import (
    EvidenceRecord,
    ManifestDependency,
    ManifestReadResult,
    ProjectInfo,
    ProjectType,
)
from adkdetect.engines.project_detector.structure import scan

__all__ = [
    "AdkProjectDetector",
    "EvidenceRecord",
    "ManifestDependency",
    "ManifestReadResult",
    "ProjectInfo",
    "ProjectType",
    "aggregate",
    "classify",
    "scan",
]
