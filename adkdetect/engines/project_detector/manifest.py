"""Manifest reader — open a root-level manifest and extract its dependencies."""

from __future__ import annotations

from pathlib import Path

import structlog

# Ensure parsers are registered before any read runs.
import adkdetect.engines.project_detector.parsers  # noqa: F401
from adkdetect.engines.project_detector.models import ManifestReadResult
from adkdetect.engines.project_detector.registry import discover_manifest
from adkdetect.exceptions import ManifestParseError

log = structlog.get_logger("adkdetect.manifest")


def read_manifest(root: Path, ecosystem: str) -> ManifestReadResult | None:
    """Read the first manifest for *ecosystem* found directly under *root*.

    Returns ``None`` when the root has no such manifest. An unreadable or
    malformed manifest yields a result with ``parsed=False`` and no
    dependencies; it is never raised to the caller.
    """
    match = discover_manifest(root, ecosystem)
    if match is None:
        return None
    parser, path = match

    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        log.warning("manifest.read_failed", path=str(path), error=str(exc))
        return ManifestReadResult(path=path, parsed=False, error=str(exc))

    try:
        dependencies = parser.parse(path, content)
    except ManifestParseError as exc:
        log.warning("manifest.parse_failed", path=str(path), error=exc.reason)
        return ManifestReadResult(path=path, parsed=False, error=exc.reason)

    log.debug(
        "manifest.parsed",
        path=str(path),
        detection_method=parser.detection_method,
        dependencies=len(dependencies),
    )
    return ManifestReadResult(path=path, dependencies=dependencies)
