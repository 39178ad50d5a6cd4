"""
HTML 预览生成模块 - 将解析结果和验证结果组装为完整的 HTML 页面

页面由三部分组成：
1. 验证摘要：状态、错误/警告数量、分数和可折叠的详情
2. 插件头部：名称、贡献者主页链接、捐赠链接、标签、版本和许可证
3. 章节：default 主题顺序排列，wordpress-org 主题按标签页排列

输出是确定性的，同样的输入总是得到同样的 HTML。
"""

import logging
import re
from dataclasses import dataclass
from typing import Literal, Optional

from wp_readme_checker.core.parser import ParsedReadme, ReadmeSection
from wp_readme_checker.core.validator import ValidationResult
from wp_readme_checker.markdown.renderer import MarkdownOptions, render_markdown, wrap_paragraphs
from wp_readme_checker.preview.sections import CANONICAL_TABS, canonical_section_id, is_canonical_tab
from wp_readme_checker.preview.templates import render_template

logger = logging.getLogger(__name__)

Theme = Literal["default", "wordpress-org"]
THEMES: tuple[str, ...] = ("default", "wordpress-org")

SUB_HEADING_PATTERN = re.compile(r"^[ \t]*=[ \t]*(.+?)[ \t]*=[ \t]*$", re.MULTILINE)


@dataclass
class HtmlOptions:
    """
    HTML 生成选项

    Attributes:
        theme: 页面主题（default 或 wordpress-org）
        allow_videos: 是否嵌入视频
        allow_html: 是否保留章节正文中的原始 HTML
        base_url: 相对链接的基准地址
    """
    theme: Theme = "default"
    allow_videos: bool = True
    allow_html: bool = False
    base_url: Optional[str] = None


@dataclass
class RenderedSection:
    """已渲染的章节"""
    id: str
    title: str
    html: str


def generate_html(
    parsed: ParsedReadme,
    validation: ValidationResult,
    options: Optional[HtmlOptions] = None,
) -> str:
    """
    生成完整的 HTML 预览页面

    Args:
        parsed: parse_readme() 的返回值
        validation: validate_readme() 的返回值
        options: 生成选项

    Returns:
        HTML 文档

    Raises:
        ValueError: 未知的主题
    """
    options = options or HtmlOptions()
    if options.theme not in THEMES:
        raise ValueError(f"Unknown theme {options.theme!r}, expected one of {', '.join(THEMES)}")

    markdown_options = MarkdownOptions(
        allow_videos=options.allow_videos,
        allow_html=options.allow_html,
        base_url=options.base_url,
    )
    sections = _render_sections(parsed.sections, markdown_options)
    if options.theme == "wordpress-org":
        sections = _order_tabs(sections)

    status_class, status_text = _status(validation)
    html = render_template(
        "page.html.j2",
        theme=options.theme,
        header=parsed.header,
        validation=validation,
        status_class=status_class,
        status_text=status_text,
        has_field_errors=any(issue.field for issue in validation.errors),
        sections=sections,
    )

    logger.debug(f"Generated {options.theme} preview with {len(sections)} sections")
    return html


def render_section_content(content: str, options: Optional[MarkdownOptions] = None) -> str:
    """
    渲染单个章节的正文

    子标题 = Question = 先转换为 ### 形式，由 Markdown 渲染器输出为 <h3>。
    """
    content = SUB_HEADING_PATTERN.sub(r"### \1", content)
    return wrap_paragraphs(render_markdown(content, options))


def _render_sections(
    sections: list[ReadmeSection],
    options: MarkdownOptions,
) -> list[RenderedSection]:
    rendered: list[RenderedSection] = []
    seen: dict[str, int] = {}

    for section in sections:
        section_id = canonical_section_id(section.title) or "section"
        # 重复的 id 追加序号
        seen[section_id] = seen.get(section_id, 0) + 1
        if seen[section_id] > 1:
            section_id = f"{section_id}-{seen[section_id]}"
        rendered.append(RenderedSection(
            id=section_id,
            title=section.title,
            html=render_section_content(section.content, options),
        ))

    return rendered


def _order_tabs(sections: list[RenderedSection]) -> list[RenderedSection]:
    """标准标签页按固定顺序排在前面，其余章节保持原有顺序"""
    tabs = [
        section
        for tab_id in CANONICAL_TABS
        for section in sections
        if section.id == tab_id
    ]
    others = [section for section in sections if not is_canonical_tab(section.id)]
    return tabs + others


def _status(validation: ValidationResult) -> tuple[str, str]:
    error_count = len(validation.errors)
    warning_count = len(validation.warnings)

    if error_count:
        return "error", f"{error_count} Error{'s' if error_count != 1 else ''}"
    if warning_count:
        return "warning", f"{warning_count} Warning{'s' if warning_count != 1 else ''}"
    return "success", "Valid"
