"""Tests for CLI validate command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from har_archive.cli.main import app

runner = CliRunner()


# =============================================================================
# Test Fixtures
# =============================================================================


@pytest.fixture
def clean_har(temp_har_file) -> Path:
    """A HAR file with no credentials."""
    return temp_har_file(name="clean.har")


@pytest.fixture
def har_with_secrets(tmp_path: Path, example_har_path: Path) -> Path:
    """A HAR file with live credentials."""
    path = tmp_path / "dirty.har"
    path.write_bytes(example_har_path.read_bytes())
    return path


@pytest.fixture
def har_with_cookie_warnings(temp_har_file, sample_har_entry) -> Path:
    """A HAR file whose only findings are parsed cookies."""
    entry = sample_har_entry()
    entry["request"]["cookies"] = [{"name": "theme", "value": "dark"}]
    return temp_har_file([entry], name="warnings.har")


# =============================================================================
# Test Classes
# =============================================================================


class TestValidateCommand:
    """Tests for the validate command."""

    def test_clean_file(self, clean_har: Path) -> None:
        result = runner.invoke(app, ["validate", str(clean_har)])
        assert result.exit_code == 0
        assert "Clean" in result.stdout

    def test_file_with_secrets(self, har_with_secrets: Path) -> None:
        result = runner.invoke(app, ["validate", str(har_with_secrets)])
        assert result.exit_code == 1
        assert "[ERROR]" in result.stdout
        assert "Authorization" in result.stdout
        assert "Summary: 3 errors, 3 warnings" in result.stdout

    def test_warnings_pass_unless_strict(self, har_with_cookie_warnings: Path) -> None:
        result = runner.invoke(app, ["validate", str(har_with_cookie_warnings)])
        assert result.exit_code == 0
        assert "[WARN]" in result.stdout

        strict = runner.invoke(app, ["validate", str(har_with_cookie_warnings), "--strict"])
        assert strict.exit_code == 1

    def test_invalid_document(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.har"
        bad.write_text(json.dumps({"log": {"entries": []}}))

        result = runner.invoke(app, ["validate", str(bad)])
        assert result.exit_code == 1
        assert "Invalid HAR document" in result.stdout

    def test_scrubbed_file_is_clean(self, har_with_secrets: Path) -> None:
        assert runner.invoke(app, ["scrub", str(har_with_secrets)]).exit_code == 0

        result = runner.invoke(app, ["validate", str(har_with_secrets.with_name("dirty.scrubbed.har"))])
        assert result.exit_code == 0, result.output


class TestValidateDirectory:
    """Tests for directory scanning."""

    def test_directory(self, tmp_path: Path, clean_har: Path, har_with_secrets: Path) -> None:
        result = runner.invoke(app, ["validate", "--dir", str(tmp_path)])
        assert result.exit_code == 1
        assert "clean.har" in result.stdout
        assert "dirty.har" in result.stdout

    def test_recursive(self, tmp_path: Path, example_har_path: Path) -> None:
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        (nested / "deep.har").write_bytes(example_har_path.read_bytes())

        flat = runner.invoke(app, ["validate", "--dir", str(tmp_path)])
        assert "No HAR files found" in flat.stdout

        deep = runner.invoke(app, ["validate", "--dir", str(tmp_path), "--recursive"])
        assert "deep.har" in deep.stdout

    def test_missing_directory(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["validate", "--dir", str(tmp_path / "nope")])
        assert result.exit_code == 1
        assert "Directory not found" in result.output


class TestValidateErrors:
    """Tests for argument errors."""

    def test_file_not_found(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["validate", str(tmp_path / "missing.har")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_no_arguments(self) -> None:
        result = runner.invoke(app, ["validate"])
        assert result.exit_code == 1
        assert "Provide either a HAR file or --dir" in result.output
