"""Manifest parsers — auto-registered on import.

Import order is lookup priority within an ecosystem.
"""

from adkdetect.engines.project_detector.parsers import (
    cargo_toml,  # noqa: F401
    pip_requirements,  # noqa: F401
    pyproject_toml,  # noqa: F401
)
