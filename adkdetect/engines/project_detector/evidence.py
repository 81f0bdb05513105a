"""Evidence aggregator — combine manifest and structure signals for one root."""

from __future__ import annotations

import re
from pathlib import Path

import structlog

from adkdetect.engines.project_detector.manifest import read_manifest
from adkdetect.engines.project_detector.models import (
    EvidenceRecord,
    ManifestDependency,
    ManifestReadResult,
)
from adkdetect.engines.project_detector.structure import extensions, scan

log = structlog.get_logger("adkdetect.evidence")

RUST_ADK_DEPENDENCIES = frozenset(
    {
        "google-adk",
        "google-cloud-adk",
        "adk-core",
        "adk-runtime",
        "google-genai",
        "vertexai",
        "rmcp",
    }
)

PYTHON_ADK_DEPENDENCIES = frozenset(
    {
        "google-adk",
        "google-cloud-adk",
        "google-genai",
        "vertexai",
        "google-cloud-aiplatform",
        "adk-agents",
    }
)

RUST_MCP_DEPENDENCIES = frozenset({"rmcp"})
PYTHON_MCP_DEPENDENCIES = frozenset({"mcp", "fastmcp"})

# Dependencies whose pinned version is reported as the ADK version.
_VERSION_SOURCES = ("google-adk", "adk-core")

MCP_CONFIG_FILES = ("mcp.json", ".mcp.json", ".kiro/settings/mcp.json")

ADK_DIRECTORIES = ("multi_tool_agent", "adk_agents", "src/expert", "src/review")

ADK_CONFIG_FILES = (
    ".env",
    ".env.template",
    "adk.toml",
    "adk-config.json",
    "vertex-config.json",
    "google-cloud-config.json",
)

_ADK_CONFIG_MARKERS = ("GOOGLE_API_KEY", "VERTEXAI", "ADK", "google-genai")

_VERSION_LIKE_RE = re.compile(r"^[=^~<>!\s]*(\d[\w.+-]*)")


def normalize_name(name: str) -> str:
    """Fold ``_``/``.`` to ``-`` and lower-case, so PyPI/crates spellings compare equal."""
    return re.sub(r"[-_.]+", "-", name).lower()


def aggregate(
    root: Path | str,
    max_depth: int,
    excludes: tuple[str, ...] | list[str] = (),
    follow_symlinks: bool = False,
) -> EvidenceRecord:
    """Build the evidence record for *root*.

    Only an unreadable or missing root raises; a missing manifest is
    evidence, not an error.
    """
    evidence, _ = gather(root, max_depth, excludes, follow_symlinks=follow_symlinks)
    return evidence


def gather(
    root: Path | str,
    max_depth: int,
    excludes: tuple[str, ...] | list[str] = (),
    follow_symlinks: bool = False,
) -> tuple[EvidenceRecord, set[str]]:
    """Like :func:`aggregate`, also returning the scanned relative paths."""
    root = Path(root)
    paths = scan(root, max_depth, excludes, follow_symlinks=follow_symlinks)

    rust = read_manifest(root, "rust")
    python = read_manifest(root, "python")

    rust_names = _dependency_names(rust)
    python_names = _dependency_names(python)

    evidence = EvidenceRecord(
        has_rust_manifest=rust is not None,
        rust_adk_dependency=bool(rust_names & RUST_ADK_DEPENDENCIES),
        has_python_requirements=python is not None,
        python_adk_dependency=bool(python_names & PYTHON_ADK_DEPENDENCIES),
        has_mcp_server_marker=(
            _has_mcp_config(root)
            or bool(rust_names & RUST_MCP_DEPENDENCIES)
            or bool(python_names & PYTHON_MCP_DEPENDENCIES)
        ),
        extensions_seen=extensions(paths),
        manifest_parsed=any(m is not None and m.parsed for m in (rust, python)),
        has_adk_markers=has_adk_markers(root),
        adk_version=_adk_version(rust) or _adk_version(python),
    )
    log.debug("evidence.aggregated", root=str(root), evidence=evidence)
    return evidence, paths


def has_adk_markers(root: Path) -> bool:
    """ADK-shaped directories, or a root config file mentioning ADK settings."""
    for name in ADK_DIRECTORIES:
        if (root / name).is_dir():
            return True

    for name in ADK_CONFIG_FILES:
        path = root / name
        if not path.is_file():
            continue
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            continue
        if any(marker in content for marker in _ADK_CONFIG_MARKERS):
            return True
    return False


def _has_mcp_config(root: Path) -> bool:
    return any((root / name).is_file() for name in MCP_CONFIG_FILES)


def _dependency_names(result: ManifestReadResult | None) -> set[str]:
    if result is None:
        return set()
    return {normalize_name(dep.name) for dep in result.dependencies}


def _adk_version(result: ManifestReadResult | None) -> str | None:
    if result is None:
        return None
    return adk_version_of(result.dependencies)


def adk_version_of(dependencies: list[ManifestDependency]) -> str | None:
    """Version pinned on the first ADK dependency that carries one."""
    for dep in dependencies:
        if normalize_name(dep.name) in _VERSION_SOURCES:
            version = _dependency_version(dep)
            if version:
                return version
    return None


def _dependency_version(dep: ManifestDependency) -> str | None:
    if dep.resolved_version:
        return dep.resolved_version
    # Cargo specs are bare requirements ("1.0", "^0.5")
    if dep.detection_method == "cargo-toml" and dep.constraint_expr:
        m = _VERSION_LIKE_RE.match(dep.constraint_expr)
        if m:
            return m.group(1)
    return None
