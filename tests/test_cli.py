"""Tests for the command line interface."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from wp_readme_checker import __version__
from wp_readme_checker.cli import app
from wp_readme_checker.core import parse_readme, validate_readme

runner = CliRunner()


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_check_clean_file(readme_file: Path) -> None:
    result = runner.invoke(app, ["check", str(readme_file)])

    assert result.exit_code == 0
    assert "No issues found." in result.output


def test_check_fails_on_errors(tmp_path: Path, readme_without_contributors: str) -> None:
    path = _write(tmp_path / "readme.txt", readme_without_contributors)

    result = runner.invoke(app, ["check", str(path)])

    assert result.exit_code == 1
    assert "Contributors is required" in result.output


def test_check_json_for_single_file(readme_file: Path) -> None:
    result = runner.invoke(app, ["check", str(readme_file), "--format", "json"])

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["score"] == 100
    assert data["summary"]["passed"] is True


def test_check_json_for_directory(tmp_path: Path, valid_readme: str) -> None:
    _write(tmp_path / "one" / "readme.txt", valid_readme)
    _write(tmp_path / "two" / "readme.txt", valid_readme)

    result = runner.invoke(app, ["check", str(tmp_path), "-f", "json"])

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert isinstance(data, list)
    assert len(data) == 2


def test_check_directory_without_readme(tmp_path: Path) -> None:
    result = runner.invoke(app, ["check", str(tmp_path)])

    assert result.exit_code == 0
    assert "No readme.txt found" in result.output


def test_fail_on_warning(tmp_path: Path, valid_readme: str) -> None:
    path = _write(tmp_path / "readme.txt", valid_readme + "\nThe best plugin.\n")

    assert runner.invoke(app, ["check", str(path)]).exit_code == 0
    assert runner.invoke(app, ["check", str(path), "--fail-on", "warning"]).exit_code == 1
    assert runner.invoke(
        app, ["check", str(path), "--fail-on", "warning", "--ignore", "PROMOTIONAL_LANGUAGE"]
    ).exit_code == 0


def test_min_score(tmp_path: Path) -> None:
    path = _write(tmp_path / "readme.txt", "=== Plugin ===\n== Description ==\nShort.\n")

    result = runner.invoke(app, ["check", str(path), "--ignore", "MISSING_FIELD", "--min-score", "95"])

    assert result.exit_code == 1


def test_config_file_is_applied(tmp_path: Path, valid_readme: str) -> None:
    _write(tmp_path / "readme.txt", valid_readme + "\nThe best plugin.\n")
    _write(tmp_path / ".wp-readme.toml", 'fail-on = "warning"\n')

    result = runner.invoke(app, ["check", str(tmp_path / "readme.txt")])

    assert result.exit_code == 1


def test_invalid_config_reports_error(tmp_path: Path, valid_readme: str) -> None:
    _write(tmp_path / "readme.txt", valid_readme)
    _write(tmp_path / ".wp-readme.toml", 'theme = "dark"\n')

    result = runner.invoke(app, ["check", str(tmp_path / "readme.txt")])

    assert result.exit_code == 1
    assert "Invalid value for 'theme'" in result.output


def test_invalid_format_option(readme_file: Path) -> None:
    result = runner.invoke(app, ["check", str(readme_file), "--format", "xml"])

    assert result.exit_code == 1
    assert "--format must be one of rich, json" in result.output


def test_missing_path(tmp_path: Path) -> None:
    result = runner.invoke(app, ["check", str(tmp_path / "missing.txt")])

    assert result.exit_code == 1


def test_preview_to_stdout(readme_file: Path) -> None:
    result = runner.invoke(app, ["preview", str(readme_file)])

    assert result.exit_code == 0
    assert "<!DOCTYPE html>" in result.output
    assert "Sample Contact Forms - Readme Preview" in result.output


def test_preview_to_file(readme_file: Path, tmp_path: Path) -> None:
    output = tmp_path / "preview.html"

    result = runner.invoke(app, ["preview", str(readme_file), "-o", str(output), "--theme", "wordpress-org"])

    assert result.exit_code == 0
    html = output.read_text(encoding="utf-8")
    assert 'role="tablist"' in html


def test_fix_dry_run_does_not_write(tmp_path: Path) -> None:
    path = _write(tmp_path / "readme.txt", "# Title\nText\n")

    result = runner.invoke(app, ["fix", str(path), "--diff"])

    assert result.exit_code == 0
    assert "Converted hash heading (level 1) to readme heading at line 1" in result.output
    assert "+== Title ==" in result.output
    assert "Run with --write to apply these changes." in result.output
    assert path.read_text(encoding="utf-8") == "# Title\nText\n"


def test_fix_write(tmp_path: Path) -> None:
    path = _write(tmp_path / "readme.txt", "# Title\n```\ncode();\n```\n")

    result = runner.invoke(app, ["fix", str(path), "--write"])

    assert result.exit_code == 0
    assert path.read_text(encoding="utf-8") == "== Title ==\n`code();`\n"


def test_fix_fenced_style(tmp_path: Path) -> None:
    path = _write(tmp_path / "readme.txt", "```\n\tone();\n    two();\n```\n")

    result = runner.invoke(app, ["fix", str(path), "--style", "fenced", "-w"])

    assert result.exit_code == 0
    assert path.read_text(encoding="utf-8") == "```\n    one();\n    two();\n```\n"


def test_fix_without_changes(readme_file: Path) -> None:
    result = runner.invoke(app, ["fix", str(readme_file)])

    assert result.exit_code == 0
    assert "No changes needed." in result.output


def test_init_creates_valid_readme(tmp_path: Path) -> None:
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(app, ["init", ".", "--name", "Shiny Widgets"])

        assert result.exit_code == 0
        text = Path("readme.txt").read_text(encoding="utf-8")
        assert text.startswith("=== Shiny Widgets ===\n")
        assert validate_readme(parse_readme(text)).issues == []

        again = runner.invoke(app, ["init", "."])
        assert again.exit_code == 1
        assert "already exists" in again.output

        forced = runner.invoke(app, ["init", ".", "--force"])
        assert forced.exit_code == 0
        assert Path("readme.txt").read_text(encoding="utf-8").startswith("=== WordPress Plugin Name ===")


def test_version() -> None:
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert f"wp-readme-checker v{__version__}" in result.output


def test_preview_allow_html_from_config(tmp_path: Path) -> None:
    path = _write(tmp_path / "readme.txt", "=== Plugin ===\n== Description ==\nPress <kbd>Ctrl</kbd>.\n")

    escaped = runner.invoke(app, ["preview", str(path)])
    _write(tmp_path / ".wp-readme.toml", "allow-html = true\n")
    raw = runner.invoke(app, ["preview", str(path)])

    assert escaped.exit_code == 0
    assert "&lt;kbd&gt;" in escaped.output
    assert raw.exit_code == 0
    assert "<kbd>Ctrl</kbd>" in raw.output
