"""Quality scoring for validated readmes.

Score starts at 100, loses 15 points per error and 5 per warning, earns
small bonuses for recommended content and is clamped to 0-100.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wp_readme_checker.core.parser import ParsedReadme
    from wp_readme_checker.core.validator import Issue


BASE_SCORE = 100

# Deduction per issue, by severity
SEVERITY_PENALTIES: dict[str, int] = {
    "error": 15,
    "warning": 5,
    "info": 5,
}

# Bonus points for good practices
BONUS_POINTS: dict[str, int] = {
    "long_description": 5,
    "installation": 3,
    "faq": 3,
    "changelog": 5,
    "requires_php": 2,
    "license_uri": 2,
}

LONG_DESCRIPTION_THRESHOLD = 200


@dataclass(frozen=True)
class Rating:
    """Score band shown by reporters."""
    threshold: int
    title: str
    description: str
    color: str


RATINGS: list[Rating] = [
    Rating(90, "Directory ready", "Looks great on WordPress.org.", "green"),
    Rating(80, "Good", "A few small things left to polish.", "green"),
    Rating(60, "Needs work", "Fix the warnings before submitting.", "yellow"),
    Rating(40, "Poor", "Several problems will show up on the plugin page.", "yellow"),
    Rating(0, "Broken", "The directory will not parse this readme correctly.", "red"),
]


def calculate_bonus(parsed: "ParsedReadme") -> dict[str, int]:
    """Return the bonus points earned, keyed by reason."""
    bonus: dict[str, int] = {}
    titles = [section.title.lower() for section in parsed.sections]

    description = parsed.find_section("description")
    if description and len(description.content) > LONG_DESCRIPTION_THRESHOLD:
        bonus["long_description"] = BONUS_POINTS["long_description"]
    if "installation" in titles:
        bonus["installation"] = BONUS_POINTS["installation"]
    if any("faq" in title for title in titles):
        bonus["faq"] = BONUS_POINTS["faq"]
    if "changelog" in titles:
        bonus["changelog"] = BONUS_POINTS["changelog"]
    if parsed.header.requires_php:
        bonus["requires_php"] = BONUS_POINTS["requires_php"]
    if parsed.header.license_uri:
        bonus["license_uri"] = BONUS_POINTS["license_uri"]

    return bonus


def calculate_score(issues: list["Issue"], parsed: "ParsedReadme") -> int:
    """
    Calculate the quality score.

    Args:
        issues: Every diagnostic produced by the validator
        parsed: The parsed readme the issues belong to

    Returns:
        Integer score in [0, 100]
    """
    score = BASE_SCORE
    for issue in issues:
        score -= SEVERITY_PENALTIES.get(issue.severity, 0)
    score += sum(calculate_bonus(parsed).values())
    return max(0, min(100, score))


def get_rating(score: float) -> Rating:
    """Map a score to its rating band."""
    for rating in RATINGS:
        if score >= rating.threshold:
            return rating
    return RATINGS[-1]
