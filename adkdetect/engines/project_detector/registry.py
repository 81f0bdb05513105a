"""Parser registry — match root-level manifest files to parsers."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from adkdetect.engines.project_detector.models import ManifestDependency


@runtime_checkable
class ManifestParser(Protocol):
    """Interface that every manifest parser must satisfy."""

    detection_method: str
    ecosystem: str  # "rust" | "python"
    file_names: list[str]

    def parse(self, file_path: Path, content: str) -> list[ManifestDependency]: ...


PARSER_REGISTRY: dict[str, ManifestParser] = {}


def register_parser(parser: ManifestParser) -> None:
    """Register a parser instance by its detection_method."""
    PARSER_REGISTRY[parser.detection_method] = parser


def manifest_candidates(ecosystem: str) -> list[tuple[ManifestParser, str]]:
    """Return (parser, file_name) pairs for *ecosystem* in priority order."""
    candidates: list[tuple[ManifestParser, str]] = []
    for parser in PARSER_REGISTRY.values():
        if parser.ecosystem != ecosystem:
            continue
        for name in parser.file_names:
            candidates.append((parser, name))
    return candidates


def discover_manifest(root: Path, ecosystem: str) -> tuple[ManifestParser, Path] | None:
    """Find the first manifest for *ecosystem* at *root* (no recursion)."""
    for parser, name in manifest_candidates(ecosystem):
        hit = root / name
        if hit.is_file():
            return parser, hit
    return None
