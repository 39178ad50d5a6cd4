"""
Preview Layer - HTML 预览层

包含 HTML 页面组装、章节 id 映射和模板渲染。
"""

from wp_readme_checker.preview.html import (
    generate_html,
    render_section_content,
    HtmlOptions,
    THEMES,
)
from wp_readme_checker.preview.sections import (
    canonical_section_id,
    is_canonical_tab,
    CANONICAL_TABS,
)
from wp_readme_checker.preview.templates import (
    readme_template,
    render_template,
)

__all__ = [
    "generate_html",
    "render_section_content",
    "HtmlOptions",
    "THEMES",
    "canonical_section_id",
    "is_canonical_tab",
    "CANONICAL_TABS",
    "readme_template",
    "render_template",
]
