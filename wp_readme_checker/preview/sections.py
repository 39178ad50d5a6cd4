"""Canonical section ids used by the preview themes."""

import re

# Tabs shown by the wordpress-org theme, in display order
CANONICAL_TABS: tuple[str, ...] = ("description", "installation", "faq", "changelog")

SECTION_ID_ALIASES: dict[str, str] = {
    "frequently-asked-questions": "faq",
}


def section_slug(title: str) -> str:
    """Lowercase the title and collapse non-alphanumeric runs into hyphens."""
    return re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")


def canonical_section_id(title: str) -> str:
    """
    Map a section title to its canonical id.

    >>> canonical_section_id("Frequently Asked Questions")
    'faq'
    >>> canonical_section_id("Upgrade Notice")
    'upgrade-notice'
    """
    slug = section_slug(title)
    return SECTION_ID_ALIASES.get(slug, slug)


def is_canonical_tab(section_id: str) -> bool:
    return section_id in CANONICAL_TABS
