"""Data models for the config detector engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class ConfigType(Enum):
    ENVIRONMENT = "environment"
    CARGO_TOML = "cargo_toml"
    REQUIREMENTS = "requirements"
    PYTHON_BUILD = "python_build"
    JSON = "json"
    YAML = "yaml"
    TOML = "toml"
    MCP_CONFIG = "mcp_config"
    UNKNOWN = "unknown"


@dataclass
class ConfigFileInfo:
    """One configuration file and the ADK settings found in it."""

    path: Path
    config_type: ConfigType
    contains_adk_settings: bool
    detected_settings: list[str] = field(default_factory=list)  # e.g. ["env:GOOGLE_API_KEY"]


@dataclass
class ConfigInfo:
    """ADK configuration signals for a project root."""

    config_files: list[ConfigFileInfo] = field(default_factory=list)
    has_adk_config: bool = False
    adk_version: str | None = None
    google_api_configured: bool = False
    vertex_ai_configured: bool = False
    mcp_server_configured: bool = False
    environment_variables: dict[str, str] = field(default_factory=dict)
