"""Data models for the project detector engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class ProjectType(Enum):
    """Verdict for one candidate project root."""

    RUST_ADK = "rust_adk"
    PYTHON_ADK = "python_adk"
    MCP_ADK_SERVER = "mcp_adk_server"
    MIXED = "mixed"
    NONE = "none"


@dataclass
class ManifestDependency:
    """A single dependency declared in a manifest file."""

    name: str
    constraint_expr: str | None
    resolved_version: str | None
    source_file: str
    detection_method: str


@dataclass
class ManifestReadResult:
    """Outcome of reading one manifest at a candidate root."""

    path: Path
    dependencies: list[ManifestDependency] = field(default_factory=list)
    parsed: bool = True
    error: str | None = None


@dataclass
class EvidenceRecord:
    """All signals gathered for one candidate root.

    ``manifest_parsed`` and ``has_adk_markers`` only matter when no manifest
    could be parsed; the classifier then falls back to extension heuristics.
    """

    has_rust_manifest: bool = False
    rust_adk_dependency: bool = False
    has_python_requirements: bool = False
    python_adk_dependency: bool = False
    has_mcp_server_marker: bool = False
    extensions_seen: frozenset[str] = frozenset()
    manifest_parsed: bool = False
    has_adk_markers: bool = False
    adk_version: str | None = None


@dataclass(frozen=True)
class ProjectInfo:
    """Detection result for one project root."""

    root_path: Path
    project_type: ProjectType
    adk_version: str | None = None
    has_cargo_toml: bool = False
    has_requirements_txt: bool = False
    has_adk_dependencies: bool = False
    has_adk_config: bool = False
    estimated_size: int = 0
