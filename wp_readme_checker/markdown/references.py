"""Reference-style link definitions.

Definitions such as ``[docs]: https://example.com "Docs"`` are collected
with markdown-it-py, which records them in the parse environment, so the
renderer can resolve ``[text][docs]`` links and drop the definition lines.
"""

from dataclasses import dataclass
from typing import Optional

from markdown_it import MarkdownIt
from markdown_it.common.utils import normalizeReference

from wp_readme_checker.core.constants import split_lines


@dataclass(frozen=True)
class Reference:
    """A single link reference definition."""
    label: str
    href: str
    title: Optional[str]
    line_start: int  # 0-based, inclusive
    line_end: int    # 0-based, exclusive


_md = MarkdownIt("commonmark")


def normalize_label(label: str) -> str:
    """Normalize a reference label the way definitions are keyed."""
    return normalizeReference(label)


def collect_references(text: str) -> dict[str, Reference]:
    """
    Collect reference definitions from text.

    Args:
        text: Markdown source

    Returns:
        Mapping of normalized label to Reference
    """
    env: dict = {}
    _md.parse(text, env)

    references: dict[str, Reference] = {}
    for label, data in env.get("references", {}).items():
        line_map = data.get("map") or [0, 0]
        references[label] = Reference(
            label=label,
            href=data.get("href", ""),
            title=data.get("title") or None,
            line_start=line_map[0],
            line_end=line_map[1],
        )
    return references


def strip_definitions(text: str, references: dict[str, Reference]) -> str:
    """Remove the source lines occupied by the given definitions."""
    lines = split_lines(text)
    dropped: set[int] = set()
    for reference in references.values():
        dropped.update(range(reference.line_start, reference.line_end))
    return "\n".join(line for index, line in enumerate(lines) if index not in dropped)
