"""Shared readme fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

VALID_README = """=== Sample Contact Forms ===
Contributors: alice, bob_dev
Tags: forms, contact
Requires at least: 6.0
Tested up to: 6.6
Requires PHP: 7.4
Stable tag: 1.2.0
License: GPLv2 or later
License URI: https://www.gnu.org/licenses/gpl-2.0.html

Collect contact form submissions and review them in the dashboard.

== Description ==

Sample Contact Forms adds a simple contact form block to the editor. Submissions are
stored in the database and listed on a dashboard screen where site owners can search,
export and delete them without leaving WordPress.

== Installation ==

1. Upload the plugin folder to the `/wp-content/plugins/` directory.
2. Activate the plugin through the 'Plugins' screen in WordPress.

== Frequently Asked Questions ==

= Where are submissions stored? =

In a custom database table created on activation.

== Screenshots ==

1. The submissions list on the dashboard.

== Changelog ==

= 1.2.0 =
* Added CSV export.

= 1.1.0 =
* First public release.
"""


@pytest.fixture
def valid_readme() -> str:
    """A complete readme that passes every check."""
    return VALID_README


@pytest.fixture
def readme_without_contributors() -> str:
    return VALID_README.replace("Contributors: alice, bob_dev\n", "")


@pytest.fixture
def readme_file(tmp_path: Path) -> Path:
    """The valid readme written to disk."""
    path = tmp_path / "readme.txt"
    path.write_text(VALID_README, encoding="utf-8")
    return path
