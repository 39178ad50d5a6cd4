"""
WordPress Markdown 渲染器模块 - 将 readme 支持的 Markdown 子集转换为 HTML

只实现 WordPress.org 支持的小子集，各处理步骤的顺序固定，
后面的步骤依赖前面步骤的输出形态：

1. 逐行处理：去除首尾空白，整行为视频链接时替换为嵌入代码
2. 标题：#### ~ ###### 与 ###（# 和 ## 由章节层级负责，不在此转换）
3. 引用块：连续的 "> " 行
4. 列表：连续的 "1. " 行或 "* " / "- " 行
5. 围栏代码块
6. 链接：[text](url "title") 以及引用式链接
7. 强调：行内代码、粗体、斜体

段落包装（wrap_paragraphs）是单独的操作，由 HTML 组装层调用。
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urljoin

from wp_readme_checker.core.constants import split_lines
from wp_readme_checker.markdown.references import (
    Reference,
    collect_references,
    normalize_label,
    strip_definitions,
)

logger = logging.getLogger(__name__)


# ============================================================
# 配置常量
# ============================================================

HTML_ESCAPES: dict[str, str] = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}

VIDEO_PATTERNS: dict[str, re.Pattern] = {
    "youtube": re.compile(
        r"^https?://(?:www\.)?(?:youtube\.com/watch\?v=|youtu\.be/)([a-zA-Z0-9_-]+)\S*$"
    ),
    "vimeo": re.compile(r"^https?://(?:www\.)?vimeo\.com/(\d+)/?$"),
    "videopress": re.compile(r"^\[wpvideo\s+([^\]]+)\]$"),
}

LINK_PATTERN = re.compile(r'\[([^\]]+)\]\(([^)\s]+)(?:\s+"([^"]*)")?\)')
REFERENCE_LINK_PATTERN = re.compile(r"\[([^\]]+)\]\[([^\]]*)\]")
CODE_BLOCK_PATTERN = re.compile(r"```([^`]*)```", re.DOTALL)
CODE_LANGUAGE_PATTERN = re.compile(r"^([A-Za-z0-9_+-]+)[ \t]*\n")
INLINE_CODE_PATTERN = re.compile(r"`([^`]+)`")
BOLD_PATTERN = re.compile(r"\*\*([^*]+)\*\*")
ITALIC_PATTERN = re.compile(r"\*([^*]+)\*")
ORDERED_ITEM_PATTERN = re.compile(r"^(\d+)\.\s+(.+)$")
UNORDERED_ITEM_PATTERN = re.compile(r"^[*-]\s+(.+)$")
SCHEME_PATTERN = re.compile(r"^(?:[a-z][a-z0-9+.-]*:|#|//)", re.IGNORECASE)
RAW_HTML_TAG_PATTERN = re.compile(r"</?[A-Za-z][A-Za-z0-9-]*(?:\s[^<>]*)?/?>")
INLINE_CODE_SPLIT_PATTERN = re.compile(r"(`[^`]*`)")

# 不需要 <p> 包装的块级元素前缀
BLOCK_LEVEL_PREFIXES: tuple[str, ...] = ("<div", "<blockquote", "<ul", "<ol", "<pre", "<h")


@dataclass
class MarkdownOptions:
    """
    渲染选项

    Attributes:
        allow_videos: 是否把独占一行的视频链接转换为嵌入代码
        allow_html: 为 False 时代码之外的原始 HTML 标签按文本转义显示
        base_url: 相对链接的基准地址
        resolve_references: 是否解析引用式链接 [text][ref]
    """
    allow_videos: bool = True
    allow_html: bool = False
    base_url: Optional[str] = None
    resolve_references: bool = True


# ============================================================
# 渲染函数
# ============================================================

def escape_html(text: str) -> str:
    """使用固定的五个实体转义 HTML"""
    return re.sub(r"[&<>\"']", lambda match: HTML_ESCAPES[match.group(0)], text)


def escape_raw_html(text: str) -> str:
    """
    转义代码之外的原始 HTML 标签

    围栏代码块和行内代码保持原样，它们由后面的步骤统一转义。
    """
    result: list[str] = []
    in_fence = False

    for line in split_lines(text):
        if line.strip().startswith("```"):
            in_fence = not in_fence
            result.append(line)
            continue
        if in_fence:
            result.append(line)
            continue
        parts = INLINE_CODE_SPLIT_PATTERN.split(line)
        # 奇数下标是行内代码
        result.append("".join(
            part if index % 2 else RAW_HTML_TAG_PATTERN.sub(lambda match: escape_html(match.group(0)), part)
            for index, part in enumerate(parts)
        ))

    return "\n".join(result)


def render_markdown(text: str, options: Optional[MarkdownOptions] = None) -> str:
    """
    将 WordPress Markdown 子集渲染为 HTML 片段

    Args:
        text: Markdown 文本
        options: 渲染选项

    Returns:
        HTML 片段（未包装段落）

    Raises:
        TypeError: text 不是字符串
    """
    if not isinstance(text, str):
        raise TypeError(f"render_markdown() expects str, got {type(text).__name__}")
    options = options or MarkdownOptions()

    references: dict[str, Reference] = {}
    if options.resolve_references:
        references = collect_references(text)
        if references:
            text = strip_definitions(text, references)
    if not options.allow_html:
        text = escape_raw_html(text)

    lines = [_process_line(line.strip(), options) for line in split_lines(text)]
    html = "\n".join(lines)

    html = _process_headings(html)
    html = _process_blockquotes(html)
    html = _process_lists(html)
    html = _process_code_blocks(html)
    html = _process_links(html, options, references)
    html = _process_emphasis(html)

    return html


def wrap_paragraphs(html: str) -> str:
    """
    以空行切分块，非块级元素包装为 <p>，块内换行转换为 <br>

    Args:
        html: render_markdown() 的输出

    Returns:
        包装后的 HTML
    """
    if not isinstance(html, str):
        raise TypeError(f"wrap_paragraphs() expects str, got {type(html).__name__}")

    blocks: list[str] = []
    for paragraph in re.split(r"\n\s*\n", html):
        trimmed = paragraph.strip()
        if not trimmed:
            continue
        if trimmed.startswith(BLOCK_LEVEL_PREFIXES):
            blocks.append(trimmed)
        else:
            blocks.append("<p>" + trimmed.replace("\n", "<br>") + "</p>")
    return "\n\n".join(blocks)


# ============================================================
# 各处理步骤
# ============================================================

def _process_line(line: str, options: MarkdownOptions) -> str:
    if not line:
        return ""
    if options.allow_videos:
        embed = video_embed(line)
        if embed is not None:
            return embed
    return line


def video_embed(line: str) -> Optional[str]:
    """
    整行为视频链接时返回嵌入代码，否则返回 None

    支持 YouTube (watch / youtu.be)、Vimeo 和 [wpvideo ID] 短代码。
    """
    match = VIDEO_PATTERNS["youtube"].match(line)
    if match:
        return (
            '<div class="video-embed youtube-embed">'
            f'<iframe width="560" height="315" src="https://www.youtube.com/embed/{match.group(1)}" '
            'frameborder="0" allow="accelerometer; autoplay; clipboard-write; encrypted-media; '
            'gyroscope; picture-in-picture" allowfullscreen></iframe></div>'
        )

    match = VIDEO_PATTERNS["vimeo"].match(line)
    if match:
        return (
            '<div class="video-embed vimeo-embed">'
            f'<iframe width="560" height="315" src="https://player.vimeo.com/video/{match.group(1)}" '
            'frameborder="0" allow="autoplay; fullscreen; picture-in-picture" '
            "allowfullscreen></iframe></div>"
        )

    match = VIDEO_PATTERNS["videopress"].match(line)
    if match:
        video_id = escape_html(match.group(1).strip())
        return (
            '<div class="video-embed videopress-embed">'
            f"<p><em>VideoPress video: {video_id}</em></p></div>"
        )

    return None


def _process_headings(html: str) -> str:
    # 先匹配较长的前缀
    for level in (6, 5, 4, 3):
        marks = "#" * level
        html = re.sub(rf"^{marks} (.+)$", rf"<h{level}>\1</h{level}>", html, flags=re.MULTILINE)
    return html


def _process_blockquotes(html: str) -> str:
    result: list[str] = []
    quote: list[str] = []

    for line in html.split("\n"):
        if line.startswith("> "):
            quote.append(line[2:])
            continue
        if quote:
            result.append("<blockquote>" + "<br>".join(quote) + "</blockquote>")
            quote = []
        result.append(line)

    if quote:
        result.append("<blockquote>" + "<br>".join(quote) + "</blockquote>")

    return "\n".join(result)


def _process_lists(html: str) -> str:
    result: list[str] = []
    list_tag: Optional[str] = None
    items: list[str] = []

    def close() -> None:
        nonlocal list_tag, items
        if list_tag:
            body = "".join(f"<li>{item}</li>" for item in items)
            result.append(f"<{list_tag}>{body}</{list_tag}>")
        list_tag = None
        items = []

    for line in html.split("\n"):
        ordered = ORDERED_ITEM_PATTERN.match(line)
        unordered = UNORDERED_ITEM_PATTERN.match(line)

        if ordered:
            if list_tag != "ol":
                close()
                list_tag = "ol"
            items.append(ordered.group(2))
        elif unordered:
            if list_tag != "ul":
                close()
                list_tag = "ul"
            items.append(unordered.group(1))
        else:
            close()
            result.append(line)

    close()
    return "\n".join(result)


def _process_code_blocks(html: str) -> str:
    def replace(match: re.Match) -> str:
        code = match.group(1)
        language = CODE_LANGUAGE_PATTERN.match(code)
        if language:
            code = code[language.end():]
            return (
                f'<pre><code class="language-{escape_html(language.group(1))}">'
                f"{escape_html(code.strip())}</code></pre>"
            )
        return f"<pre><code>{escape_html(code.strip())}</code></pre>"

    return CODE_BLOCK_PATTERN.sub(replace, html)


def _link_html(text: str, url: str, title: Optional[str], options: MarkdownOptions) -> str:
    if options.base_url and not SCHEME_PATTERN.match(url):
        url = urljoin(options.base_url, url)
    title_attr = f' title="{escape_html(title)}"' if title else ""
    return f'<a href="{escape_html(url)}"{title_attr}>{escape_html(text)}</a>'


def _process_links(html: str, options: MarkdownOptions, references: dict[str, Reference]) -> str:
    html = LINK_PATTERN.sub(
        lambda match: _link_html(match.group(1), match.group(2), match.group(3), options),
        html,
    )

    if not references:
        return html

    def replace_reference(match: re.Match) -> str:
        text = match.group(1)
        label = normalize_label(match.group(2) or text)
        reference = references.get(label)
        if reference is None:
            return match.group(0)
        return _link_html(text, reference.href, reference.title, options)

    return REFERENCE_LINK_PATTERN.sub(replace_reference, html)


def _process_emphasis(html: str) -> str:
    # 行内代码最先处理，其内容需要转义
    html = INLINE_CODE_PATTERN.sub(lambda match: f"<code>{escape_html(match.group(1))}</code>", html)
    # ** 必须先于 *
    html = BOLD_PATTERN.sub(r"<strong>\1</strong>", html)
    html = ITALIC_PATTERN.sub(r"<em>\1</em>", html)
    return html
