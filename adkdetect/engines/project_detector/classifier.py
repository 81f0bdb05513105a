"""Classifier — resolve one evidence record into a project-type verdict."""

from __future__ import annotations

from adkdetect.engines.project_detector.models import EvidenceRecord, ProjectType

_PYTHON_EXTENSIONS = frozenset({".py", ".pyi"})


def ecosystem_signals(evidence: EvidenceRecord) -> tuple[bool, bool]:
    """Return the (rust_adk, python_adk) booleans the decision ladder runs on.

    These are the dependency flags. When no manifest was parsed, ADK markers
    plus source extensions stand in for a missing flag.
    """
    rust = evidence.rust_adk_dependency
    python = evidence.python_adk_dependency
    if evidence.manifest_parsed or not evidence.has_adk_markers:
        return rust, python

    rust = rust or ".rs" in evidence.extensions_seen
    python = python or bool(_PYTHON_EXTENSIONS & evidence.extensions_seen)
    return rust, python


def classify(evidence: EvidenceRecord) -> ProjectType:
    """Apply the fixed decision ladder; the first matching rule wins."""
    rust, python = ecosystem_signals(evidence)

    # Rule 1: both ecosystems qualify independently.
    if rust and python:
        return ProjectType.MIXED

    # Rule 2: an MCP-serving project is classified by its serving role.
    if evidence.has_mcp_server_marker and (rust or python):
        return ProjectType.MCP_ADK_SERVER

    # Rules 3-4: single ecosystem.
    if rust:
        return ProjectType.RUST_ADK
    if python:
        return ProjectType.PYTHON_ADK

    # Rule 5: no evidence.
    return ProjectType.NONE
