"""Tests for CLI show command."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from har_archive.cli.main import app

runner = CliRunner()


class TestShowCommand:
    """Tests for the show command."""

    def test_lists_entries(self, example_har_path: Path) -> None:
        result = runner.invoke(app, ["show", str(example_har_path)])

        assert result.exit_code == 0, result.output
        assert "2 entries, created by WebKit Web Inspector/15.0" in result.stdout
        assert "[0] GET http://example.com/?q=a+b -> 200 OK (85ms)" in result.stdout
        assert "[1] GET http://example.com/favicon.ico" in result.stdout

    def test_single_entry_with_curl(self, example_har_path: Path) -> None:
        result = runner.invoke(app, ["show", str(example_har_path), "--entry", "0", "--curl"])

        assert result.exit_code == 0, result.output
        assert "favicon" not in result.stdout
        assert "curl 'http://example.com/?q=a+b'" in result.stdout
        assert "--cookie 'session=abc123'" in result.stdout

    def test_timings(self, example_har_path: Path) -> None:
        result = runner.invoke(app, ["show", str(example_har_path), "-e", "0", "--timings"])
        assert "Wait: 38ms" in result.stdout

    def test_entry_out_of_range(self, example_har_path: Path) -> None:
        result = runner.invoke(app, ["show", str(example_har_path), "--entry", "5"])
        assert result.exit_code == 1
        assert "out of range" in result.output

    def test_invalid_file(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.har"
        bad.write_text("nope")

        result = runner.invoke(app, ["show", str(bad)])
        assert result.exit_code == 1
        assert "malformed JSON" in result.output

    def test_file_not_found(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["show", str(tmp_path / "missing.har")])
        assert result.exit_code == 1
        assert "File not found" in result.output
