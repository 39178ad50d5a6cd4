"""Pathspec-based readme discovery.

This module uses the pathspec library for proper gitignore handling,
supporting negation patterns, double-star globs, and nested gitignore files,
so that readme.txt files inside ignored or vendored directories are skipped.
"""

import logging
import os
from pathlib import Path
from typing import Iterable

import pathspec

logger = logging.getLogger(__name__)

README_FILENAME = "readme.txt"

# Always skipped, on top of any .gitignore rules
DEFAULT_IGNORE_PATTERNS: list[str] = [
    ".git/",
    ".svn/",
    "node_modules/",
    "vendor/",
    "bower_components/",
    ".idea/",
    ".vscode/",
    "__pycache__/",
    ".venv/",
    "venv/",
]


def _read_spec(gitignore_path: Path) -> "pathspec.GitIgnoreSpec | None":
    try:
        lines = gitignore_path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Skipping unreadable {gitignore_path}: {e}")
        return None
    return pathspec.GitIgnoreSpec.from_lines(lines)


class PathspecFilter:
    """File filter based on pathspec library with nested gitignore support."""

    def __init__(
        self,
        root: Path,
        extra_patterns: Iterable[str] = (),
        include_nested: bool = True,
    ):
        """
        Initialize the filter.

        Args:
            root: Directory being searched
            extra_patterns: Additional gitignore-style patterns to skip
            include_nested: Whether to honour .gitignore files in subdirectories
        """
        self.root = root
        self._default_spec = pathspec.GitIgnoreSpec.from_lines(
            [*DEFAULT_IGNORE_PATTERNS, *extra_patterns]
        )
        self._root_spec: "pathspec.GitIgnoreSpec | None" = None
        self._nested_specs: dict[Path, pathspec.GitIgnoreSpec] = {}
        self._include_nested = include_nested

        root_gitignore = root / ".gitignore"
        if root_gitignore.is_file():
            self._root_spec = _read_spec(root_gitignore)

    def load_nested(self, directory: Path) -> None:
        """Pick up the .gitignore of a subdirectory reached during the walk."""
        if not self._include_nested or directory == self.root:
            return
        gitignore_path = directory / ".gitignore"
        if gitignore_path.is_file():
            spec = _read_spec(gitignore_path)
            if spec is not None:
                self._nested_specs[directory] = spec

    def should_ignore(self, path: Path, is_dir: bool = False) -> bool:
        """
        Check if a path should be ignored.

        Applies rules with the following precedence:
        1. Default and extra patterns apply to every path
        2. Root .gitignore applies to every path
        3. Nested .gitignore files apply to paths in their directory and below
        """
        try:
            relative = path.relative_to(self.root) if path.is_absolute() else path
        except ValueError:
            return False

        relative_str = relative.as_posix() + ("/" if is_dir else "")

        if self._default_spec.match_file(relative_str):
            return True
        if self._root_spec is not None and self._root_spec.match_file(relative_str):
            return True

        for directory, spec in self._nested_specs.items():
            try:
                nested = (self.root / relative).relative_to(directory)
            except ValueError:
                continue
            if spec.match_file(nested.as_posix() + ("/" if is_dir else "")):
                return True

        return False


def find_readmes(root: Path, extra_patterns: Iterable[str] = ()) -> list[Path]:
    """
    Find every readme.txt under a directory.

    File names are matched case-insensitively. Ignored directories are
    pruned during the walk, so their contents are never visited.

    Args:
        root: Directory to search
        extra_patterns: Additional gitignore-style patterns to skip

    Returns:
        Sorted list of readme paths
    """
    root = root.resolve()
    path_filter = PathspecFilter(root, extra_patterns)
    found: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(root):
        directory = Path(dirpath)
        path_filter.load_nested(directory)

        dirnames[:] = [
            name for name in dirnames
            if not path_filter.should_ignore(directory / name, is_dir=True)
        ]
        for name in filenames:
            if name.lower() != README_FILENAME:
                continue
            path = directory / name
            if not path_filter.should_ignore(path):
                found.append(path)

    logger.debug(f"Found {len(found)} readme files under {root}")
    return sorted(found)
