"""Tests for the Rich and JSON reporters."""

from __future__ import annotations

import io
import json
from pathlib import Path

from rich.console import Console

from wp_readme_checker.core import Issue, ValidationResult, parse_readme, validate_readme
from wp_readme_checker.reporters import JsonReporter, Reporter, RichReporter


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=120, color_system=None), buffer


def test_rich_report_for_clean_readme(valid_readme: str) -> None:
    console, buffer = _console()

    RichReporter(console).report(validate_readme(parse_readme(valid_readme)), "readme.txt")

    output = buffer.getvalue()
    assert "WordPress readme.txt report" in output
    assert "Score: 100" in output
    assert "Directory ready" in output
    assert "Header fields" in output
    assert "No issues found." in output


def test_rich_report_lists_issues(readme_without_contributors: str) -> None:
    console, buffer = _console()

    RichReporter(console).report(validate_readme(parse_readme(readme_without_contributors)), "readme.txt")

    output = buffer.getvalue()
    assert "Contributors is required" in output
    assert "(MISSING_FIELD)" in output
    assert "→ Contributors: your-wordpress-username" in output
    assert "Found 1 errors and 0 warnings" in output


def test_rich_report_escapes_markup() -> None:
    console, buffer = _console()
    issue = Issue(
        severity="warning",
        code="UNCLOSED_BRACKET",
        message="Unclosed [bold] bracket",
        line_number=3,
        column=9,
        suggestion="[link](url)",
    )
    result = ValidationResult(issues=[issue], score=95, stats={"errors": 0, "warnings": 1})

    RichReporter(console).report(result, "readme.txt")

    output = buffer.getvalue()
    assert "Unclosed [bold] bracket" in output
    assert "→ [link](url)" in output
    assert "line 3, column 9" in output


def test_rich_report_truncates_long_issue_lists() -> None:
    console, buffer = _console()
    issues = [
        Issue(severity="warning", code="PROMOTIONAL_LANGUAGE", message=f"Issue {n}", line_number=n)
        for n in range(1, 13)
    ]
    result = ValidationResult(issues=issues, score=40, stats={"errors": 0, "warnings": 12})

    RichReporter(console).report(result, "readme.txt")

    output = buffer.getvalue()
    assert "Issue 10" in output
    assert "Issue 11" not in output
    assert "2 more issues not shown" in output


def test_json_report(readme_without_contributors: str) -> None:
    buffer = io.StringIO()
    result = validate_readme(parse_readme(readme_without_contributors))

    JsonReporter(buffer).report(result, "plugin/readme.txt")

    data = json.loads(buffer.getvalue())
    assert data["target"] == "plugin/readme.txt"
    assert data["score"] == result.score
    assert data["summary"] == {"total_issues": 1, "errors": 1, "warnings": 0, "passed": False}
    assert data["issues"][0]["code"] == "MISSING_FIELD"
    assert data["issues"][0]["field"] == "contributors"
    assert data["stats"]["total_sections"] == 5


def test_json_build_for_clean_readme(valid_readme: str) -> None:
    data = JsonReporter().build(validate_readme(parse_readme(valid_readme)), "readme.txt")

    assert data["rating"] == "Directory ready"
    assert data["issues"] == []
    assert data["summary"]["passed"] is True


def test_json_report_many_writes_a_list(valid_readme: str, readme_without_contributors: str) -> None:
    buffer = io.StringIO()
    results = [
        (Path("a/readme.txt"), validate_readme(parse_readme(valid_readme))),
        (Path("b/readme.txt"), validate_readme(parse_readme(readme_without_contributors))),
    ]

    JsonReporter(buffer).report_many(results)

    data = json.loads(buffer.getvalue())
    assert [entry["target"] for entry in data] == [str(Path("a/readme.txt")), str(Path("b/readme.txt"))]
    assert [entry["summary"]["passed"] for entry in data] == [True, False]


def test_reporters_satisfy_protocol() -> None:
    assert isinstance(RichReporter(Console(file=io.StringIO())), Reporter)
    assert isinstance(JsonReporter(io.StringIO()), Reporter)
