"""Shared pytest fixtures for adk-detect tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def make_tree():
    """Create files under a root from a ``{relative_path: content}`` mapping."""

    def _make(root: Path, files: dict[str, str]) -> Path:
        for rel, content in files.items():
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
        return root

    return _make


@pytest.fixture
def rust_adk_cargo() -> str:
    return (
        "[package]\n"
        'name = "test-adk"\n'
        'version = "0.1.0"\n'
        "\n"
        "[dependencies]\n"
        'google-adk = { version = "1.0.0" }\n'
        'tokio = "1.0"\n'
    )


@pytest.fixture
def plain_cargo() -> str:
    return (
        "[package]\n"
        'name = "regular-rust"\n'
        'version = "0.1.0"\n'
        "\n"
        "[dependencies]\n"
        'serde = "1.0"\n'
        'tokio = "1.0"\n'
    )
