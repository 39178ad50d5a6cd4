"""Tests for readme discovery."""

from __future__ import annotations

from pathlib import Path

from wp_readme_checker.filters import PathspecFilter, find_readmes


def _touch(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("=== Plugin ===\n", encoding="utf-8")


def _relative(paths: list[Path], root: Path) -> list[str]:
    return [path.relative_to(root.resolve()).as_posix() for path in paths]


def test_find_readmes_skips_ignored_directories(tmp_path: Path) -> None:
    _touch(tmp_path / "readme.txt")
    _touch(tmp_path / "plugins" / "alpha" / "README.txt")
    _touch(tmp_path / "plugins" / "beta" / "readme.txt")
    _touch(tmp_path / "node_modules" / "pkg" / "readme.txt")
    _touch(tmp_path / "vendor" / "lib" / "readme.txt")
    _touch(tmp_path / "build" / "readme.txt")
    _touch(tmp_path / "plugins" / "alpha" / "notes.txt")
    (tmp_path / ".gitignore").write_text("build/\n", encoding="utf-8")
    (tmp_path / "plugins" / ".gitignore").write_text("beta/\n", encoding="utf-8")

    found = find_readmes(tmp_path)

    assert _relative(found, tmp_path) == ["plugins/alpha/README.txt", "readme.txt"]


def test_find_readmes_extra_patterns(tmp_path: Path) -> None:
    _touch(tmp_path / "readme.txt")
    _touch(tmp_path / "drafts" / "readme.txt")

    found = find_readmes(tmp_path, ["drafts/"])

    assert _relative(found, tmp_path) == ["readme.txt"]


def test_negation_in_gitignore(tmp_path: Path) -> None:
    _touch(tmp_path / "plugins" / "keep" / "readme.txt")
    _touch(tmp_path / "plugins" / "drop" / "readme.txt")
    (tmp_path / ".gitignore").write_text("plugins/*/readme.txt\n!plugins/keep/readme.txt\n", encoding="utf-8")

    found = find_readmes(tmp_path)

    assert _relative(found, tmp_path) == ["plugins/keep/readme.txt"]


def test_find_readmes_empty_directory(tmp_path: Path) -> None:
    assert find_readmes(tmp_path) == []


def test_should_ignore(tmp_path: Path) -> None:
    path_filter = PathspecFilter(tmp_path, extra_patterns=["*.bak"])

    assert path_filter.should_ignore(Path("node_modules"), is_dir=True)
    assert path_filter.should_ignore(tmp_path / "readme.txt.bak")
    assert not path_filter.should_ignore(tmp_path / "src" / "readme.txt")
    assert not path_filter.should_ignore(Path("/elsewhere/readme.txt"))
