"""Tests for quality scoring."""

from __future__ import annotations

from wp_readme_checker.core import Issue, calculate_bonus, calculate_score, get_rating, parse_readme


def _issue(severity: str) -> Issue:
    return Issue(severity=severity, code="TEST", message="test issue")  # type: ignore[arg-type]


def test_no_issues_and_no_bonus_scores_full() -> None:
    assert calculate_score([], parse_readme("")) == 100


def test_errors_and_warnings_are_deducted() -> None:
    issues = [_issue("error"), _issue("error"), _issue("warning")]

    assert calculate_score(issues, parse_readme("")) == 65


def test_info_counts_like_a_warning() -> None:
    assert calculate_score([_issue("info")], parse_readme("")) == 95


def test_score_is_clamped_at_zero() -> None:
    assert calculate_score([_issue("error")] * 10, parse_readme("")) == 0


def test_score_is_clamped_at_hundred(valid_readme: str) -> None:
    assert calculate_score([_issue("warning")], parse_readme(valid_readme)) == 100


def test_bonus_for_complete_readme(valid_readme: str) -> None:
    bonus = calculate_bonus(parse_readme(valid_readme))

    assert bonus == {
        "long_description": 5,
        "installation": 3,
        "changelog": 5,
        "requires_php": 2,
        "license_uri": 2,
    }


def test_faq_bonus_requires_faq_in_title() -> None:
    parsed = parse_readme("=== P ===\n== FAQ ==\n= Q =\nA.\n")

    assert calculate_bonus(parsed) == {"faq": 3}


def test_bonus_offsets_deductions() -> None:
    parsed = parse_readme("=== P ===\nRequires PHP: 8.0\n== Changelog ==\n= 1.0 =\n")

    assert calculate_score([_issue("error")] * 2, parsed) == 100 - 30 + 5 + 2


def test_rating_bands() -> None:
    assert get_rating(100).title == "Directory ready"
    assert get_rating(90).title == "Directory ready"
    assert get_rating(85).title == "Good"
    assert get_rating(65).title == "Needs work"
    assert get_rating(45).color == "yellow"
    assert get_rating(0).title == "Broken"
