"""AdkConfigDetector — extract ADK configuration signals from a project root."""

from __future__ import annotations

import io
import re
from dataclasses import replace
from pathlib import Path

import structlog
from dotenv import dotenv_values

from adkdetect.engines.config_detector.models import ConfigFileInfo, ConfigInfo, ConfigType
from adkdetect.engines.project_detector.evidence import adk_version_of
from adkdetect.engines.project_detector.models import ProjectInfo
from adkdetect.engines.project_detector.registry import PARSER_REGISTRY
from adkdetect.exceptions import ManifestParseError, ProjectNotFoundError, ScanIOError

log = structlog.get_logger("adkdetect.config")

ADK_ENV_VARS = (
    "GOOGLE_API_KEY",
    "GOOGLE_APPLICATION_CREDENTIALS",
    "GOOGLE_GENAI_USE_VERTEXAI",
    "VERTEXAI_PROJECT",
    "VERTEXAI_LOCATION",
    "ADK_VERSION",
    "ADK_DOCS_VERSION",
    "RUST_LOG",
)

ADK_CONFIG_KEYS = (
    "google-adk",
    "google-genai",
    "vertexai",
    "adk-core",
    "adk-runtime",
    "rmcp",
    "arkaft-mcp-google-adk",
)

GOOGLE_API_PATTERNS = (
    "GOOGLE_API_KEY",
    "google_api_key",
    "googleApiKey",
    "GOOGLE_APPLICATION_CREDENTIALS",
    "google-cloud",
)

VERTEX_AI_PATTERNS = (
    "VERTEXAI",
    "vertex_ai",
    "vertexAi",
    "GOOGLE_GENAI_USE_VERTEXAI",
    "vertex-ai",
)

MCP_SERVER_PATTERNS = ("rmcp", "arkaft-mcp-google-adk", "mcpServers")

# Checked directly under the project root, in this order.
ROOT_CONFIG_FILES = (
    ".env",
    ".env.template",
    ".env.local",
    ".env.production",
    ".env.development",
    "Cargo.toml",
    "requirements.txt",
    "setup.py",
    "pyproject.toml",
    "config.json",
    "config.yaml",
    "config.yml",
    "config.toml",
    "adk.toml",
    "adk-config.json",
    "vertex-config.json",
    "google-cloud-config.json",
    "mcp.json",
    ".kiro/settings/mcp.json",
)

# Subdirectories whose config-looking files are also inspected (one level).
CONFIG_SUBDIRS = ("src", "config", ".kiro/settings")

_CONFIG_EXTENSIONS = frozenset({"json", "yaml", "yml", "toml", "env"})
_CONFIG_NAME_HINTS = ("config", "settings", "adk", "vertex", "google")

_NAMED_TYPES: dict[str, ConfigType] = {
    "Cargo.toml": ConfigType.CARGO_TOML,
    "requirements.txt": ConfigType.REQUIREMENTS,
    "setup.py": ConfigType.PYTHON_BUILD,
    "pyproject.toml": ConfigType.PYTHON_BUILD,
    "mcp.json": ConfigType.MCP_CONFIG,
}

_EXTENSION_TYPES: dict[str, ConfigType] = {
    "json": ConfigType.JSON,
    "yaml": ConfigType.YAML,
    "yml": ConfigType.YAML,
    "toml": ConfigType.TOML,
}

# `google-adk ... version ... "1.2.3"` on a single line
_INLINE_VERSION_RE = re.compile(r'"(\d[^"]*)"')


class AdkConfigDetector:
    """Find configuration files under a project root and summarise ADK settings."""

    def detect_config(self, project_path: Path | str) -> ConfigInfo:
        """Scan *project_path* for ADK configuration.

        Raises:
            ProjectNotFoundError: *project_path* does not exist.
            ScanIOError: a discovered config file cannot be read.
        """
        root = Path(project_path)
        if not root.is_dir():
            raise ProjectNotFoundError(f"Project path not found: {root}")

        info = ConfigInfo()
        for config_path in self.find_config_files(root):
            content = _read(config_path)
            file_info = self.analyze_config_file(config_path, content)
            if file_info.contains_adk_settings:
                info.has_adk_config = True
                self._extract_details(file_info, content, info)
            info.config_files.append(file_info)

        log.debug(
            "config.detected",
            root=str(root),
            files=len(info.config_files),
            has_adk_config=info.has_adk_config,
        )
        return info

    def find_config_files(self, root: Path) -> list[Path]:
        """Known config files at *root*, then config-looking files in CONFIG_SUBDIRS."""
        found: list[Path] = []
        seen: set[Path] = set()

        def add(path: Path) -> None:
            key = path.resolve()
            if key not in seen:
                seen.add(key)
                found.append(path)

        for name in ROOT_CONFIG_FILES:
            path = root / name
            if path.is_file():
                add(path)

        for subdir in CONFIG_SUBDIRS:
            directory = root / subdir
            if not directory.is_dir():
                continue
            try:
                entries = sorted(directory.iterdir())
            except OSError as exc:
                log.debug("config.subdir_skipped", path=str(directory), error=str(exc))
                continue
            for path in entries:
                if path.is_file() and is_config_file(path.name):
                    add(path)

        return found

    def analyze_config_file(self, config_path: Path, content: str) -> ConfigFileInfo:
        detected: list[str] = []
        for prefix, patterns in (
            ("env", ADK_ENV_VARS),
            ("key", ADK_CONFIG_KEYS),
            ("google", GOOGLE_API_PATTERNS),
            ("vertex", VERTEX_AI_PATTERNS),
        ):
            detected.extend(f"{prefix}:{p}" for p in patterns if p in content)

        return ConfigFileInfo(
            path=config_path,
            config_type=determine_config_type(config_path),
            contains_adk_settings=bool(detected),
            detected_settings=detected,
        )

    def _extract_details(self, file_info: ConfigFileInfo, content: str, info: ConfigInfo) -> None:
        if file_info.config_type is ConfigType.ENVIRONMENT:
            info.environment_variables.update(extract_env_variables(content))

        if info.adk_version is None:
            info.adk_version = self._extract_adk_version(file_info, content)
        if info.adk_version is None:
            info.adk_version = info.environment_variables.get("ADK_VERSION") or None

        if any(p in content for p in GOOGLE_API_PATTERNS):
            info.google_api_configured = True
        if any(p in content for p in VERTEX_AI_PATTERNS):
            info.vertex_ai_configured = True
        if any(p in content for p in MCP_SERVER_PATTERNS):
            info.mcp_server_configured = True

    def _extract_adk_version(self, file_info: ConfigFileInfo, content: str) -> str | None:
        """Prefer the manifest parser for the file; fall back to a line scan."""
        parser = next(
            (p for p in PARSER_REGISTRY.values() if file_info.path.name in p.file_names),
            None,
        )
        if parser is not None:
            try:
                version = adk_version_of(parser.parse(file_info.path, content))
            except ManifestParseError as exc:
                log.warning("config.manifest_unparseable", path=str(file_info.path), error=exc.reason)
            else:
                if version:
                    return version

        for line in content.splitlines():
            if "google-adk" in line and "version" in line:
                m = _INLINE_VERSION_RE.search(line)
                if m:
                    return m.group(1)
        return None

    def validate_config(self, info: ConfigInfo) -> list[str]:
        """Human-readable problems with the detected configuration."""
        if not info.has_adk_config:
            return ["No ADK configuration detected"]

        issues: list[str] = []
        if not info.google_api_configured and not info.vertex_ai_configured:
            issues.append("Neither Google API nor Vertex AI is configured")

        if not any(f.config_type is ConfigType.ENVIRONMENT for f in info.config_files):
            issues.append("No .env file found for environment configuration")

        if info.google_api_configured and "GOOGLE_API_KEY" not in info.environment_variables:
            issues.append("GOOGLE_API_KEY not found in environment variables")

        return issues

    def get_config_recommendations(self, info: ConfigInfo) -> list[str]:
        """Advisory suggestions for improving the ADK setup."""
        if not info.has_adk_config:
            return [
                "Add ADK dependencies to your project configuration",
                "Create a .env file for API key configuration",
            ]

        recommendations: list[str] = []
        if not info.mcp_server_configured:
            recommendations.append(
                "Consider setting up arkaft-mcp-google-adk MCP server for enhanced ADK support"
            )
        if info.google_api_configured and not info.vertex_ai_configured:
            recommendations.append("Consider using Vertex AI for production deployments")
        if info.adk_version is None:
            recommendations.append("Pin ADK dependency versions for reproducible builds")
        return recommendations


def enrich(project: ProjectInfo, config: ConfigInfo) -> ProjectInfo:
    """Return *project* with config-derived version and ADK-config flag folded in."""
    return replace(
        project,
        adk_version=project.adk_version or config.adk_version,
        has_adk_config=project.has_adk_config or config.has_adk_config,
    )


def is_config_file(filename: str) -> bool:
    ext = filename.rsplit(".", 1)[-1] if "." in filename else ""
    if ext in _CONFIG_EXTENSIONS:
        return True
    lowered = filename.lower()
    return any(hint in lowered for hint in _CONFIG_NAME_HINTS)


def determine_config_type(config_path: Path) -> ConfigType:
    name = config_path.name
    if name in _NAMED_TYPES:
        return _NAMED_TYPES[name]
    if name.startswith(".env"):
        return ConfigType.ENVIRONMENT
    return _EXTENSION_TYPES.get(config_path.suffix.lower().lstrip("."), ConfigType.UNKNOWN)


def extract_env_variables(content: str) -> dict[str, str]:
    """ADK-relevant ``KEY=value`` pairs from dotenv-formatted *content*."""
    values = dotenv_values(stream=io.StringIO(content), interpolate=False)
    return {
        key: value
        for key, value in values.items()
        if key in ADK_ENV_VARS and value is not None
    }


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise ScanIOError(str(path), f"failed to read config file: {exc}") from exc
