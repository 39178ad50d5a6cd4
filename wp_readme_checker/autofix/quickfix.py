"""Per-diagnostic quick fixes.

Each fix targets a single Issue produced by the validator and returns the
corrected document text, or None when the fix no longer applies (the line
changed, the marker is already balanced, a closing fence already follows).
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional

from wp_readme_checker.core.constants import SECTION_HEADER_PATTERN, split_lines
from wp_readme_checker.core.parser import is_header_field
from wp_readme_checker.core.validator import Issue

logger = logging.getLogger(__name__)

FENCE_LINE_PATTERN = re.compile(r"^```")

LineFix = Callable[[list[str], Issue], Optional[list[str]]]


@dataclass(frozen=True)
class QuickFix:
    """A fix that can be offered for an issue code."""
    title: str
    apply: LineFix


# ============================================================
# Fixers
# ============================================================

def _target_index(lines: list[str], issue: Issue) -> Optional[int]:
    if issue.line_number is None or not 1 <= issue.line_number <= len(lines):
        return None
    return issue.line_number - 1


def _replace_with_suggestion(lines: list[str], issue: Issue) -> Optional[list[str]]:
    index = _target_index(lines, issue)
    if index is None or not issue.suggestion or lines[index] == issue.suggestion:
        return None
    return lines[:index] + [issue.suggestion] + lines[index + 1:]


def _close_fence(lines: list[str], issue: Issue) -> Optional[list[str]]:
    index = _target_index(lines, issue)
    if index is None or not FENCE_LINE_PATTERN.match(lines[index].strip()):
        return None
    if any(FENCE_LINE_PATTERN.match(line.strip()) for line in lines[index + 1:]):
        return None

    # The block runs until the first blank line after the opening fence
    end = index + 1
    while end < len(lines) and lines[end].strip():
        end += 1
    return lines[:end] + ["```"] + lines[end:]


def _append_bold(lines: list[str], issue: Issue) -> Optional[list[str]]:
    index = _target_index(lines, issue)
    if index is None or lines[index].count("**") % 2 == 0:
        return None
    return lines[:index] + [lines[index].rstrip() + "**"] + lines[index + 1:]


def _append_italic(lines: list[str], issue: Issue) -> Optional[list[str]]:
    index = _target_index(lines, issue)
    if index is None:
        return None
    markers = lines[index].replace("**", "").count("*")
    if markers % 2 == 0:
        return None
    return lines[:index] + [lines[index].rstrip() + "*"] + lines[index + 1:]


def _close_link(lines: list[str], issue: Issue) -> Optional[list[str]]:
    index = _target_index(lines, issue)
    if index is None or lines[index].rstrip().endswith(")"):
        return None
    return lines[:index] + [lines[index].rstrip() + ")"] + lines[index + 1:]


def _insert_header_field(lines: list[str], issue: Issue) -> Optional[list[str]]:
    if not issue.suggestion:
        return None
    if issue.field == "plugin_name":
        return [issue.suggestion] + lines

    header_end = next(
        (index for index, line in enumerate(lines) if SECTION_HEADER_PATTERN.match(line.strip())),
        len(lines),
    )
    if issue.field == "short_description":
        return lines[:header_end] + [issue.suggestion, ""] + lines[header_end:]

    # Keep the new field next to the existing ones
    field_lines = [index for index in range(header_end) if is_header_field(lines[index].strip())]
    insert_at = field_lines[-1] + 1 if field_lines else header_end
    return lines[:insert_at] + [issue.suggestion] + lines[insert_at:]


QUICK_FIXES: dict[str, QuickFix] = {
    "MALFORMED_HEADING": QuickFix("Fix malformed heading", _replace_with_suggestion),
    "HASH_HEADING": QuickFix("Convert to == heading ==", _replace_with_suggestion),
    "UNCLOSED_FENCE": QuickFix("Close code fence", _close_fence),
    "UNBALANCED_BOLD": QuickFix("Add closing **", _append_bold),
    "UNBALANCED_ITALIC": QuickFix("Add closing *", _append_italic),
    "UNCLOSED_LINK": QuickFix("Add closing )", _close_link),
    "MISSING_FIELD": QuickFix("Insert missing header field", _insert_header_field),
}


# ============================================================
# Public API
# ============================================================

def available_fixes(issue: Issue) -> list[str]:
    """
    List the titles of the quick fixes offered for an issue.

    Heading fixes are only offered when the issue carries a suggestion.
    """
    quick_fix = QUICK_FIXES.get(issue.code)
    if quick_fix is None:
        return []
    if issue.code in ("MALFORMED_HEADING", "HASH_HEADING", "MISSING_FIELD") and not issue.suggestion:
        return []
    return [quick_fix.title]


def apply_quick_fix(text: str, issue: Issue) -> Optional[str]:
    """
    Apply the quick fix for an issue to the document text.

    Args:
        text: Full readme text the issue was reported against
        issue: Issue from validate_readme()

    Returns:
        The corrected text, or None when no fix applies
    """
    quick_fix = QUICK_FIXES.get(issue.code)
    if quick_fix is None:
        return None

    fixed = quick_fix.apply(split_lines(text), issue)
    if fixed is None:
        logger.debug(f"Quick fix for {issue.code} at line {issue.line_number} does not apply")
        return None

    newline = "\r\n" if "\r\n" in text else "\n"
    return newline.join(fixed)
