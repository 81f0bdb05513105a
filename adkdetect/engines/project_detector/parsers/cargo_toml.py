"""Parser for Rust Cargo.toml files."""

from __future__ import annotations

import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from adkdetect.engines.project_detector.models import ManifestDependency
from adkdetect.engines.project_detector.registry import register_parser
from adkdetect.exceptions import ManifestParseError

_DEP_SECTIONS = ("dependencies", "dev-dependencies", "build-dependencies")


def _parse_version(spec: str | dict) -> str | None:
    """Extract version constraint from a dependency spec."""
    if isinstance(spec, str):
        return spec
    if isinstance(spec, dict):
        version = spec.get("version")
        return version if isinstance(version, str) else None
    return None


def _dependency_tables(data: dict) -> list[dict]:
    tables = [data.get(section, {}) for section in _DEP_SECTIONS]
    workspace = data.get("workspace", {})
    if isinstance(workspace, dict):
        tables.append(workspace.get("dependencies", {}))
    # [target.'cfg(...)'.dependencies]
    targets = data.get("target", {})
    if isinstance(targets, dict):
        for target in targets.values():
            if isinstance(target, dict):
                tables.extend(target.get(section, {}) for section in _DEP_SECTIONS)
    return [t for t in tables if isinstance(t, dict)]


class CargoTomlParser:
    detection_method = "cargo-toml"
    ecosystem = "rust"
    file_names = ["Cargo.toml"]

    def parse(self, file_path: Path, content: str) -> list[ManifestDependency]:
        try:
            data = tomllib.loads(content)
        except tomllib.TOMLDecodeError as exc:
            raise ManifestParseError(str(file_path), str(exc)) from exc

        deps: list[ManifestDependency] = []

        for dep_table in _dependency_tables(data):
            for name, spec in dep_table.items():
                # `alias = { package = "real-name" }` renames the crate locally
                if isinstance(spec, dict) and isinstance(spec.get("package"), str):
                    name = spec["package"]
                version = _parse_version(spec)

                deps.append(
                    ManifestDependency(
                        name=name,
                        constraint_expr=version,
                        resolved_version=None,
                        source_file=file_path.name,
                        detection_method=self.detection_method,
                    )
                )

        return deps


register_parser(CargoTomlParser())
