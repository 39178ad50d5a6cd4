"""
readme.txt 结构解析器模块 - 解析 WordPress 插件 readme 并提取结构化信息

解析分为两个独立的扫描：
1. 头部扫描：插件名（=== Name ===）、元数据字段和简短描述
2. 章节扫描：以 == Title == 分隔的章节及其行范围

解析时还会执行一组基础结构检查（必填字段、版本格式等），
结果以字符串形式放入 ParsedReadme.errors / warnings。
完整的诊断由 validator 模块独立重新计算。
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from wp_readme_checker.core.constants import (
    HEADER_FIELD_PATTERNS,
    PLUGIN_NAME_PATTERN,
    SECTION_HEADER_PATTERN,
    SHORT_DESCRIPTION_MAX_LENGTH,
    TAGS_MAX_COUNT,
    VERSION_PATTERN,
    split_lines,
)

logger = logging.getLogger(__name__)


# ============================================================
# 数据模型
# ============================================================

@dataclass(frozen=True)
class ReadmeHeader:
    """
    插件头部元数据

    未设置的字段一律为空字符串或空列表，下游无需判空。

    Attributes:
        plugin_name: 插件名称（=== Name === 行）
        contributors: 贡献者用户名列表
        donate_link: 捐赠链接
        tags: 标签列表（保持原始顺序）
        requires_at_least: 最低 WordPress 版本
        tested_up_to: 已测试的最高 WordPress 版本
        stable_tag: 稳定版本标签
        requires_php: 最低 PHP 版本
        license: 许可证
        license_uri: 许可证链接
        short_description: 简短描述
    """
    plugin_name: str = ""
    contributors: list[str] = field(default_factory=list)
    donate_link: str = ""
    tags: list[str] = field(default_factory=list)
    requires_at_least: str = ""
    tested_up_to: str = ""
    stable_tag: str = ""
    requires_php: str = ""
    license: str = ""
    license_uri: str = ""
    short_description: str = ""


@dataclass(frozen=True)
class ReadmeSection:
    """
    章节数据模型

    Attributes:
        title: 章节标题（已去除首尾空白）
        content: 标题与下一个标题之间的原始文本（已去除首尾空白）
        level: 章节层级，恒为 2
        line_start: 标题行的行号（从 0 开始）
        line_end: 章节最后一行的行号（从 0 开始）
    """
    title: str
    content: str
    line_start: int
    line_end: int
    level: int = 2


@dataclass
class ParsedReadme:
    """
    解析后的 readme 数据模型

    Attributes:
        header: 头部元数据
        sections: 按文档顺序排列的章节
        raw_content: 原始文本
        errors: 解析阶段发现的结构错误
        warnings: 解析阶段发现的结构警告
    """
    header: ReadmeHeader
    sections: list[ReadmeSection] = field(default_factory=list)
    raw_content: str = ""
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def find_section(self, title: str) -> Optional[ReadmeSection]:
        """按标题（不区分大小写）查找第一个匹配的章节"""
        wanted = title.lower()
        for section in self.sections:
            if section.title.lower() == wanted:
                return section
        return None


# ============================================================
# 解析函数
# ============================================================

def parse_readme(text: str) -> ParsedReadme:
    """
    解析 readme.txt 内容

    Args:
        text: readme 原始文本

    Returns:
        ParsedReadme 对象

    Raises:
        TypeError: text 不是字符串
    """
    if not isinstance(text, str):
        raise TypeError(f"parse_readme() expects str, got {type(text).__name__}")

    lines = split_lines(text)
    result = ParsedReadme(
        header=_parse_header(lines),
        sections=_parse_sections(lines),
        raw_content=text,
    )
    _check_structure(result)

    logger.debug(
        f"Parsed readme: {len(result.sections)} sections, "
        f"{len(result.errors)} errors, {len(result.warnings)} warnings"
    )
    return result


def is_header_field(line: str) -> bool:
    """判断一行（已去除首尾空白）是否匹配十种头部字段之一"""
    if PLUGIN_NAME_PATTERN.match(line):
        return True
    return any(pattern.match(line) for _, pattern in HEADER_FIELD_PATTERNS)


def _split_list(value: str) -> list[str]:
    """逗号分隔的列表，去除空白和空项"""
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_header(lines: list[str]) -> ReadmeHeader:
    """
    解析头部区域

    头部区域为第一个章节标题之前的所有行。插件名只取第一个匹配行；
    简短描述从插件名行之后第一个既非空也非字段的行开始，
    遇到字段行、空行或头部结束时停止，各行以单个空格拼接。
    """
    values: dict[str, object] = {}
    plugin_line = -1

    # 插件名：第一行匹配 === Name === 的行
    for index, raw in enumerate(lines):
        match = PLUGIN_NAME_PATTERN.match(raw.strip())
        if match:
            values["plugin_name"] = match.group(1).strip()
            plugin_line = index
            break

    # 头部边界：第一个章节标题
    header_end = len(lines)
    for index, raw in enumerate(lines):
        if SECTION_HEADER_PATTERN.match(raw.strip()):
            header_end = index
            break

    description_start = -1
    for index in range(header_end):
        line = lines[index].strip()

        matched = False
        for name, pattern in HEADER_FIELD_PATTERNS:
            match = pattern.match(line)
            if not match:
                continue
            matched = True
            value = match.group(1).strip()
            if name == "contributors":
                # 跳过 "(this should be a list...)" 之类的示例占位文本
                if value and not value.startswith("("):
                    values[name] = _split_list(value)
            elif name == "tags":
                if value:
                    values[name] = _split_list(value)
            else:
                values[name] = value
            break

        if matched:
            continue

        if (
            line
            and description_start == -1
            and plugin_line != -1
            and index > plugin_line
            and not is_header_field(line)
        ):
            description_start = index

    if description_start != -1:
        description_lines: list[str] = []
        for index in range(description_start, header_end):
            line = lines[index].strip()
            if line and not is_header_field(line):
                description_lines.append(line)
            elif description_lines:
                break
        values["short_description"] = " ".join(description_lines)

    return ReadmeHeader(**values)  # type: ignore[arg-type]


def _parse_sections(lines: list[str]) -> list[ReadmeSection]:
    """
    解析章节

    只有恰好两个 = 且内部带空格的行才会开启新章节；格式错误的标题
    作为普通文本并入上一个章节（若尚无章节则丢弃）。
    """
    sections: list[ReadmeSection] = []
    title: Optional[str] = None
    start = -1
    buffer: list[str] = []

    for index, line in enumerate(lines):
        match = SECTION_HEADER_PATTERN.match(line)
        if match:
            if title is not None:
                sections.append(ReadmeSection(
                    title=title,
                    content="\n".join(buffer).strip(),
                    line_start=start,
                    line_end=index - 1,
                ))
            title = match.group(1).strip()
            start = index
            buffer = []
        elif title is not None:
            buffer.append(line)

    if title is not None:
        sections.append(ReadmeSection(
            title=title,
            content="\n".join(buffer).strip(),
            line_start=start,
            line_end=len(lines) - 1,
        ))

    return sections


def _check_structure(result: ParsedReadme) -> None:
    """解析阶段的基础结构检查"""
    header = result.header

    if not header.plugin_name:
        result.errors.append("Plugin name is required (=== Plugin Name ===)")

    if not header.contributors:
        result.errors.append("Contributors field is required")

    if not header.tags:
        result.errors.append("Tags field is required")
    elif len(header.tags) > TAGS_MAX_COUNT:
        result.warnings.append(f"Maximum {TAGS_MAX_COUNT} tags recommended")

    if not header.requires_at_least:
        result.errors.append("Requires at least field is required")

    if not header.tested_up_to:
        result.errors.append("Tested up to field is required")

    if not header.stable_tag:
        result.errors.append("Stable tag field is required")

    if not header.license:
        result.errors.append("License field is required")

    if not header.short_description:
        result.errors.append("Short description is required")
    elif len(header.short_description) > SHORT_DESCRIPTION_MAX_LENGTH:
        result.warnings.append(
            f"Short description should be {SHORT_DESCRIPTION_MAX_LENGTH} characters or less"
        )

    # 版本格式
    for value, label in (
        (header.requires_at_least, "Requires at least"),
        (header.tested_up_to, "Tested up to"),
        (header.stable_tag, "Stable tag"),
        (header.requires_php, "Requires PHP"),
    ):
        if value and not VERSION_PATTERN.match(value):
            result.warnings.append(f"{label} should be in format X.Y or X.Y.Z")
