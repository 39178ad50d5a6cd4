"""Tests for Markdown-to-readme auto-fix."""

from __future__ import annotations

import pytest

from wp_readme_checker.autofix import AutoFixOptions, auto_fix


def test_hash_headings_are_converted() -> None:
    result = auto_fix("# Title\n\n### Sub item")

    assert result.updated_text == "== Title ==\n\n= Sub item ="
    assert result.change_log == [
        "Converted hash heading (level 1) to readme heading at line 1",
        "Converted hash heading (level 3) to readme heading at line 3",
    ]
    assert result.changed


@pytest.mark.parametrize("line", ["##Title", "#   Title   ", "# Title #"])
def test_hash_heading_variants(line: str) -> None:
    assert auto_fix(line).updated_text == "== Title =="


def test_malformed_eq_headings_are_normalized() -> None:
    result = auto_fix("== Description =\n==Installation==\n=Question=")

    assert result.updated_text == "== Description ==\n== Installation ==\n= Question ="
    assert result.change_log[0] == "Normalized malformed heading at line 1"
    assert len(result.change_log) == 3


def test_missing_trailing_equals_is_added() -> None:
    result = auto_fix("== Changelog\n= 1.0")

    assert result.updated_text == "== Changelog ==\n= 1.0 ="
    assert result.change_log == [
        "Added missing trailing equals to heading at line 1",
        "Added missing trailing equals to heading at line 2",
    ]


def test_plugin_name_line_is_left_alone() -> None:
    result = auto_fix("=== My Plugin ===\n== Description ==\n= Question =")

    assert not result.changed
    assert result.change_log == []


def test_indented_code_is_not_treated_as_heading() -> None:
    text = "Example:\n\n    == not a heading =\n\t# not a heading either"

    result = auto_fix(text)

    assert "    == not a heading =" in result.updated_text


def test_single_line_fence_becomes_inline_code() -> None:
    result = auto_fix("```\ncode();\n```")

    assert result.updated_text == "`code();`"
    assert result.change_log == ["Converted single-line fenced block at line 1 to inline code"]


def test_empty_fence_is_removed() -> None:
    result = auto_fix("Before\n```\n```\nAfter")

    assert result.updated_text == "Before\nAfter"
    assert result.change_log == ["Removed empty fenced block at line 2"]


def test_multi_line_fence_becomes_indented_block() -> None:
    result = auto_fix("```php\none();\n# not a heading\n```")

    assert "```" not in result.updated_text
    assert result.updated_text == "    one();\n    # not a heading"
    assert result.change_log == [
        "Removed language hint (php) from fenced block at line 1",
        "Converted multi-line fenced block (2 lines) starting at line 1 to indented code block",
    ]


def test_fenced_style_keeps_a_single_fence_pair() -> None:
    text = "```js\n\tone();\n    two();\n```"

    result = auto_fix(text, AutoFixOptions(multi_line_style="fenced"))

    assert result.updated_text.count("```") == 2
    assert result.updated_text == "```js\n    one();\n    two();\n```"
    assert result.change_log == [
        "Normalized mixed indentation in code block starting line 1",
        "Normalized multi-line fenced block (2 lines) at line 1",
    ]


def test_fenced_style_leaves_clean_block_alone() -> None:
    text = "```\none();\ntwo();\n```"

    result = auto_fix(text, AutoFixOptions(multi_line_style="fenced"))

    assert not result.changed
    assert result.change_log == []


def test_unclosed_fence_is_closed_in_fenced_style() -> None:
    result = auto_fix("```\none();\ntwo();", AutoFixOptions(multi_line_style="fenced"))

    assert result.updated_text == "```\none();\ntwo();\n```"


def test_blank_lines_are_collapsed() -> None:
    result = auto_fix("One\n\n\n\n\nTwo\n\n\n\nThree")

    assert result.updated_text == "One\n\n\nTwo\n\n\nThree"
    assert result.change_log == ["Collapsed excessive blank lines"]


def test_crlf_is_preserved() -> None:
    result = auto_fix("# Title\r\nText\r\n")

    assert result.updated_text == "== Title ==\r\nText\r\n"


@pytest.mark.parametrize("style", ["indented", "fenced"])
def test_auto_fix_is_idempotent(style: str) -> None:
    text = (
        "=== Plugin ===\n"
        "# Description\n"
        "== Installation =\n"
        "```bash\n\tnpm install\n  npm run build\n```\n\n\n\n\n"
        "```\nsingle();\n```\n"
        "## FAQ\n"
        "= Question\n"
    )
    options = AutoFixOptions(multi_line_style=style)  # type: ignore[arg-type]

    first = auto_fix(text, options)
    second = auto_fix(first.updated_text, options)

    assert first.change_log
    assert second.change_log == []
    assert second.updated_text == first.updated_text


def test_valid_readme_needs_no_changes(valid_readme: str) -> None:
    result = auto_fix(valid_readme)

    assert result.change_log == []
    assert result.updated_text == valid_readme


def test_invalid_arguments() -> None:
    with pytest.raises(TypeError):
        auto_fix(None)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        auto_fix("text", AutoFixOptions(multi_line_style="tabs"))  # type: ignore[arg-type]
