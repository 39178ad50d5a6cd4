"""Tests for per-issue quick fixes."""

from __future__ import annotations

from wp_readme_checker.autofix import apply_quick_fix, available_fixes
from wp_readme_checker.core import Issue, parse_readme, validate_readme


def _first(text: str, code: str) -> Issue:
    result = validate_readme(parse_readme(text))
    return next(issue for issue in result.issues if issue.code == code)


def test_malformed_heading_fix(valid_readme: str) -> None:
    text = valid_readme.replace("== Installation ==", "== Installation =")
    issue = _first(text, "MALFORMED_HEADING")

    assert available_fixes(issue) == ["Fix malformed heading"]
    assert apply_quick_fix(text, issue) == valid_readme


def test_hash_heading_fix() -> None:
    text = "Intro\n# Features\nList"
    issue = _first(text, "HASH_HEADING")

    assert available_fixes(issue) == ["Convert to == heading =="]
    assert apply_quick_fix(text, issue) == "Intro\n== Features ==\nList"


def test_heading_fix_without_suggestion_is_not_offered() -> None:
    issue = Issue(severity="error", code="MALFORMED_HEADING", message="m", line_number=1)

    assert available_fixes(issue) == []
    assert apply_quick_fix("=====", issue) is None


def test_close_fence_at_first_blank_line() -> None:
    text = "Intro\n```\ncode\nmore\n\nAfter"
    issue = _first(text, "UNCLOSED_FENCE")

    assert apply_quick_fix(text, issue) == "Intro\n```\ncode\nmore\n```\n\nAfter"


def test_close_fence_at_end_of_document() -> None:
    text = "```\ncode"
    issue = _first(text, "UNCLOSED_FENCE")

    assert apply_quick_fix(text, issue) == "```\ncode\n```"


def test_close_fence_skipped_when_a_later_fence_exists() -> None:
    issue = Issue(severity="warning", code="UNCLOSED_FENCE", message="m", line_number=1)

    assert apply_quick_fix("```\ncode\n```", issue) is None


def test_bold_and_italic_fixes() -> None:
    bold_text = "Intro\nThis is **bold"
    italic_text = "Intro\nAn *emphasis"

    assert apply_quick_fix(bold_text, _first(bold_text, "UNBALANCED_BOLD")) == "Intro\nThis is **bold**"
    assert apply_quick_fix(italic_text, _first(italic_text, "UNBALANCED_ITALIC")) == "Intro\nAn *emphasis*"


def test_balanced_line_is_not_touched() -> None:
    issue = Issue(severity="warning", code="UNBALANCED_BOLD", message="m", line_number=1)

    assert apply_quick_fix("**fine**\n**broken", issue) is None


def test_close_link() -> None:
    text = "See [docs](https://example.com"
    issue = _first(text, "UNCLOSED_LINK")

    assert available_fixes(issue) == ["Add closing )"]
    assert apply_quick_fix(text, issue) == "See [docs](https://example.com)"


def test_insert_missing_field_next_to_header(valid_readme: str) -> None:
    text = valid_readme.replace("Tags: forms, contact\n", "")
    issue = _first(text, "MISSING_FIELD")

    fixed = apply_quick_fix(text, issue)

    assert fixed is not None
    assert "License URI: https://www.gnu.org/licenses/gpl-2.0.html\nTags: tag1, tag2\n" in fixed
    assert validate_readme(parse_readme(fixed)).issues == []


def test_insert_missing_plugin_name(valid_readme: str) -> None:
    text = valid_readme.replace("=== Sample Contact Forms ===\n", "")
    issue = _first(text, "MISSING_FIELD")

    fixed = apply_quick_fix(text, issue)

    assert fixed is not None
    assert fixed.startswith("=== Plugin Name ===\nContributors:")


def test_insert_missing_short_description(valid_readme: str) -> None:
    text = valid_readme.replace(
        "Collect contact form submissions and review them in the dashboard.\n\n", ""
    )
    issue = _first(text, "MISSING_FIELD")

    fixed = apply_quick_fix(text, issue)

    assert fixed is not None
    assert parse_readme(fixed).header.short_description == "A short description of what the plugin does."


def test_unknown_code_and_stale_line() -> None:
    email = Issue(severity="warning", code="EMAIL_ADDRESS", message="m", line_number=1)
    stale = Issue(severity="warning", code="UNCLOSED_LINK", message="m", line_number=99)

    assert available_fixes(email) == []
    assert apply_quick_fix("a@b.co", email) is None
    assert apply_quick_fix("[x](y", stale) is None


def test_crlf_is_preserved() -> None:
    text = "Intro\r\n# Features\r\n"
    issue = _first(text, "HASH_HEADING")

    assert apply_quick_fix(text, issue) == "Intro\r\n== Features ==\r\n"


def test_italic_fix_counts_bullet_markers() -> None:
    issue = Issue(severity="warning", code="UNBALANCED_ITALIC", message="m", line_number=1)

    assert apply_quick_fix("* item with *emphasis", issue) is None
    assert apply_quick_fix("* one *two* three", issue) == "* one *two* three*"
