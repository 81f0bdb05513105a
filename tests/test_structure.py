"""Tests for the structure scanner."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from adkdetect.core.config import DEFAULT_EXCLUDED_PATTERNS
from adkdetect.engines.project_detector.structure import extensions, scan
from adkdetect.exceptions import ProjectNotFoundError, ScanIOError


def _symlink(target: Path, link: Path) -> None:
    try:
        os.symlink(target, link, target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported on this platform")


class TestScan:
    def test_empty_directory(self, tmp_path):
        assert scan(tmp_path, max_depth=3) == set()

    def test_collects_files_and_directories(self, tmp_path, make_tree):
        make_tree(tmp_path, {"Cargo.toml": "", "src/main.rs": "", "src/lib/mod.rs": ""})
        result = scan(tmp_path, max_depth=3)
        assert result == {"Cargo.toml", "src", "src/main.rs", "src/lib", "src/lib/mod.rs"}

    def test_respects_max_depth(self, tmp_path, make_tree):
        make_tree(tmp_path, {"a/b/c/d/deep.py": "", "a/top.py": ""})
        result = scan(tmp_path, max_depth=2)
        assert result == {"a", "a/b", "a/top.py"}
        assert all(len(p.split("/")) <= 2 for p in result)

    def test_zero_depth_records_nothing(self, tmp_path, make_tree):
        make_tree(tmp_path, {"main.rs": ""})
        assert scan(tmp_path, max_depth=0) == set()

    def test_prunes_excluded_subtrees(self, tmp_path, make_tree):
        make_tree(
            tmp_path,
            {
                "node_modules/pkg/index.js": "",
                "target/debug/app": "",
                "src/main.rs": "",
                "debug.log": "",
            },
        )
        result = scan(tmp_path, max_depth=5, excludes=DEFAULT_EXCLUDED_PATTERNS)
        assert result == {"src", "src/main.rs"}

    def test_excluded_directory_is_never_listed(self, tmp_path, make_tree, monkeypatch):
        make_tree(tmp_path, {"vendor/big/lib.py": "", "app.py": ""})
        listed: list[str] = []
        real_scandir = os.scandir

        def tracking_scandir(path):
            listed.append(Path(path).name)
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", tracking_scandir)
        scan(tmp_path, max_depth=5, excludes=["vendor/**"])
        assert "vendor" not in listed
        assert "big" not in listed

    def test_deterministic(self, tmp_path, make_tree):
        make_tree(tmp_path, {f"d{i}/f{j}.py": "" for i in range(4) for j in range(3)})
        assert scan(tmp_path, max_depth=3) == scan(tmp_path, max_depth=3)

    def test_missing_root(self, tmp_path):
        with pytest.raises(ProjectNotFoundError):
            scan(tmp_path / "nope", max_depth=3)

    def test_root_is_a_file(self, tmp_path):
        (tmp_path / "file.txt").write_text("x")
        with pytest.raises(ScanIOError):
            scan(tmp_path / "file.txt", max_depth=3)

    def test_unreadable_root(self, tmp_path, monkeypatch):
        real_scandir = os.scandir

        def denied(path):
            if Path(path) == tmp_path:
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", denied)
        with pytest.raises(ScanIOError):
            scan(tmp_path, max_depth=3)

    def test_unreadable_subdirectory_is_skipped(self, tmp_path, make_tree, monkeypatch):
        make_tree(tmp_path, {"locked/secret.rs": "", "open/main.rs": ""})
        locked = tmp_path / "locked"
        real_scandir = os.scandir

        def denied(path):
            if Path(path) == locked:
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", denied)
        result = scan(tmp_path, max_depth=3)
        assert "locked" in result
        assert "locked/secret.rs" not in result
        assert "open/main.rs" in result


class TestSymlinks:
    def test_cycle_terminates_when_following(self, tmp_path, make_tree):
        make_tree(tmp_path, {"a/main.rs": ""})
        _symlink(tmp_path, tmp_path / "a" / "loop")
        result = scan(tmp_path, max_depth=50, follow_symlinks=True)
        assert "a/loop" in result
        assert "a/loop/a" not in result

    def test_mutual_cycle_terminates(self, tmp_path):
        (tmp_path / "x").mkdir()
        (tmp_path / "y").mkdir()
        _symlink(tmp_path / "y", tmp_path / "x" / "to_y")
        _symlink(tmp_path / "x", tmp_path / "y" / "to_x")
        result = scan(tmp_path, max_depth=50, follow_symlinks=True)
        assert {"x", "y", "x/to_y", "y/to_x"} <= result
        assert all(len(p.split("/")) <= 3 for p in result)

    def test_symlinked_directories_not_followed_by_default(self, tmp_path, make_tree):
        make_tree(tmp_path, {"real/lib.rs": ""})
        _symlink(tmp_path / "real", tmp_path / "alias")
        result = scan(tmp_path, max_depth=5)
        assert "alias" in result
        assert "alias/lib.rs" not in result


class TestExtensions:
    def test_lower_cased_suffixes(self):
        assert extensions({"src/Main.RS", "app.py", "Cargo.toml", ".env", "src"}) == {
            ".rs",
            ".py",
            ".toml",
        }

    def test_empty(self):
        assert extensions(set()) == frozenset()
