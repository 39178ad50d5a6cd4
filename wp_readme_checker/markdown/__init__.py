"""
Markdown Layer - WordPress Markdown 渲染层

包含 Markdown 子集渲染器和引用式链接解析。
"""

from wp_readme_checker.markdown.renderer import (
    render_markdown,
    wrap_paragraphs,
    escape_html,
    escape_raw_html,
    video_embed,
    MarkdownOptions,
)
from wp_readme_checker.markdown.references import (
    collect_references,
    strip_definitions,
    Reference,
)

__all__ = [
    "render_markdown",
    "wrap_paragraphs",
    "escape_html",
    "escape_raw_html",
    "video_embed",
    "MarkdownOptions",
    "collect_references",
    "strip_definitions",
    "Reference",
]
