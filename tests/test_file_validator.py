"""Tests for FileValidator."""

from __future__ import annotations

from pathlib import Path

import pytest

from adkdetect.core.config import ValidationConfig
from adkdetect.engines.file_validator import (
    FileType,
    FileValidator,
    ValidationResult,
    determine_file_type,
    file_statistics,
    format_file_size,
    invalid_files,
    valid_files,
)


class TestValidate:
    def test_valid_rust_file(self, tmp_path):
        rust_file = tmp_path / "main.rs"
        rust_file.write_text('fn main() { println!("Hello, world!"); }')
        result = FileValidator.default().validate(rust_file)
        assert result.is_valid
        assert result.file_type is FileType.RUST
        assert result.file_size > 0
        assert result.reason is None

    def test_missing_file(self, tmp_path):
        result = FileValidator().validate(tmp_path / "ghost.rs")
        assert not result.is_valid
        assert result.reason == "File does not exist"
        assert result.file_size == 0

    def test_directory(self, tmp_path):
        result = FileValidator().validate(tmp_path)
        assert not result.is_valid
        assert result.reason == "Path is not a file"

    def test_excluded_file(self, tmp_path):
        excluded = tmp_path / "target" / "debug" / "main"
        excluded.parent.mkdir(parents=True)
        excluded.write_text("binary content")
        result = FileValidator().validate(excluded)
        assert not result.is_valid
        assert "excluded pattern" in result.reason

    def test_exclusion_relative_to_root(self, tmp_path):
        log = tmp_path / "run.log"
        log.write_text("started")
        result = FileValidator().validate(log, root=tmp_path)
        assert result.reason == "File matches excluded pattern"

    def test_too_small(self, tmp_path):
        tiny = tmp_path / "tiny.py"
        tiny.write_text("x=1")
        result = FileValidator.for_code_review().validate(tiny)
        assert not result.is_valid
        assert result.reason == "File too small: 3 bytes"

    def test_too_large(self, tmp_path):
        large = tmp_path / "large.rs"
        large.write_text("x" * 2048)
        result = FileValidator(ValidationConfig(max_file_size=1024)).validate(large)
        assert not result.is_valid
        assert result.reason == "File too large: 2048 bytes (max: 1024)"

    def test_type_not_allowed(self, tmp_path):
        image = tmp_path / "logo.png"
        image.write_bytes(b"\x89PNG....")
        result = FileValidator().validate(image)
        assert not result.is_valid
        assert result.reason == "File type not allowed"
        assert result.file_type is FileType.UNKNOWN

    def test_well_known_names_always_allowed(self, tmp_path):
        cargo = tmp_path / "Cargo.toml"
        cargo.write_text("[package]\nname = 'x'\n")
        result = FileValidator.for_code_review().validate(cargo)
        assert result.is_valid
        assert result.file_type is FileType.BUILD

    def test_config_file_preset_rejects_source(self, tmp_path):
        source = tmp_path / "agent.py"
        source.write_text("print('hi')")
        assert not FileValidator.for_config_files().validate(source).is_valid


class TestValidateFiles:
    def test_mixed_batch(self, tmp_path):
        good = tmp_path / "lib.rs"
        good.write_text("pub fn f() {}")
        results = FileValidator().validate_files([good, tmp_path / "missing.py"])
        assert [r.is_valid for r in results] == [True, False]
        assert valid_files(results) == [results[0]]
        assert invalid_files(results) == [results[1]]

    def test_os_error_becomes_invalid_result(self, tmp_path, monkeypatch):
        target = tmp_path / "flaky.py"
        target.write_text("x = 1")
        validator = FileValidator()

        def boom(self, file_path, root=None):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(FileValidator, "validate", boom)
        results = validator.validate_files([target])
        assert not results[0].is_valid
        assert results[0].reason.startswith("Validation error:")
        assert results[0].path == target


class TestSuitableForReview:
    def test_code_review_limits(self, tmp_path):
        small = tmp_path / "small.rs"
        large = tmp_path / "large.rs"
        small.write_text("fn main() {}")
        large.write_text("x" * (2 * 1024 * 1024))
        validator = FileValidator.for_code_review()
        assert validator.is_suitable_for_review(small)
        assert not validator.is_suitable_for_review(large)

    def test_review_ceiling_below_max_size(self, tmp_path):
        medium = tmp_path / "medium.py"
        medium.write_text("x" * (200 * 1024))
        assert FileValidator().validate(medium).is_valid
        assert not FileValidator().is_suitable_for_review(medium)

    def test_only_source_files(self, tmp_path):
        readme = tmp_path / "README.md"
        readme.write_text("# ADK agent")
        assert not FileValidator().is_suitable_for_review(readme)


class TestFileType:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("main.rs", FileType.RUST),
            ("script.py", FileType.PYTHON),
            ("stubs.pyi", FileType.PYTHON),
            ("config.toml", FileType.CONFIG),
            ("README.md", FileType.DOCUMENTATION),
            ("LICENSE", FileType.DOCUMENTATION),
            ("Cargo.toml", FileType.BUILD),
            ("pyproject.toml", FileType.BUILD),
            (".env", FileType.ENVIRONMENT),
            (".env.local", FileType.ENVIRONMENT),
            ("photo.JPG", FileType.UNKNOWN),
        ],
    )
    def test_determine_file_type(self, name, expected):
        assert determine_file_type(Path(name)) is expected


class TestStatistics:
    def test_counts(self):
        results = [
            ValidationResult(Path("a.rs"), True, 100, FileType.RUST),
            ValidationResult(Path("b.py"), True, 300, FileType.PYTHON),
            ValidationResult(Path("c.png"), False, 200, FileType.UNKNOWN, "File type not allowed"),
        ]
        stats = file_statistics(results)
        assert stats.total_files == 3
        assert stats.valid_files == 2
        assert stats.invalid_files == 1
        assert stats.total_size == 600
        assert stats.valid_size == 400
        assert stats.rust_files == 1
        assert stats.python_files == 1
        assert stats.unknown_files == 1
        assert stats.average_file_size == 200
        assert stats.valid_percentage == pytest.approx(66.666, rel=1e-3)

    def test_empty(self):
        stats = file_statistics([])
        assert stats.valid_percentage == 0.0
        assert stats.average_file_size == 0


class TestFormatFileSize:
    @pytest.mark.parametrize(
        "size, expected",
        [
            (0, "0 B"),
            (512, "512 B"),
            (1536, "1.5 KB"),
            (1024 * 1024, "1.0 MB"),
            (5 * 1024**4, "5120.0 GB"),
        ],
    )
    def test_format(self, size, expected):
        assert format_file_size(size) == expected
