"""Readme discovery for wp-readme-checker.

This module provides pathspec-based gitignore filtering using
the mature pathspec library.
"""

from wp_readme_checker.filters.pathspec_filter import (
    PathspecFilter,
    DEFAULT_IGNORE_PATTERNS,
    find_readmes,
)

__all__ = [
    "PathspecFilter",
    "DEFAULT_IGNORE_PATTERNS",
    "find_readmes",
]
