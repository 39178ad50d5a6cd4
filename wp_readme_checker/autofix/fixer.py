"""
自动修复模块 - 将通用 Markdown 写法转换为 WordPress readme 风格

单次逐行扫描（不复用结构解析器）：
1. 规范化格式错误的 = 标题（== Title = / = Title / ==Title== 等）
2. 围栏代码块：空块删除，单行块转为行内代码，多行块按样式
   转为缩进代码块或保留为规范化后的围栏块
3. # 标题转换为 == Title == / = Title =
4. 连续 3 个以上空行压缩为 2 个

任何模式不完全匹配时都保留原行，重复运行不会产生新的修改。
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Literal, Optional

from wp_readme_checker.core.constants import split_lines
from wp_readme_checker.core.validator import convert_hash_heading

logger = logging.getLogger(__name__)

MultiLineStyle = Literal["indented", "fenced"]
MULTI_LINE_STYLES: tuple[str, ...] = ("indented", "fenced")

EQ_HEADING_PATTERN = re.compile(r"^(=+)(.+?)(=+)$")
EQ_OPEN_ONLY_PATTERN = re.compile(r"^(=+)\s+(.+)$")
EQ_CLOSED_PATTERN = re.compile(r"^=+\s+.+\s+=+$")
FENCE_OPEN_PATTERN = re.compile(r"^```(\w+)?\s*$")
FENCE_CLOSE_PATTERN = re.compile(r"^```\s*$")
HASH_HEADING_PATTERN = re.compile(r"^(#{1,6})(.*)$")
INDENTED_LINE_PATTERN = re.compile(r"^(?: {4}|\t)")


# ============================================================
# 数据模型
# ============================================================

@dataclass
class AutoFixOptions:
    """
    自动修复选项

    Attributes:
        multi_line_style: 多行围栏代码块的输出样式（indented 或 fenced）
    """
    multi_line_style: MultiLineStyle = "indented"


@dataclass
class AutoFixResult:
    """
    自动修复结果

    Attributes:
        updated_text: 修复后的完整文本
        change_log: 每项修改的可读描述（按应用顺序）
        original_text: 修复前的文本
    """
    updated_text: str
    change_log: list[str] = field(default_factory=list)
    original_text: str = ""

    @property
    def changed(self) -> bool:
        return self.updated_text != self.original_text


# ============================================================
# 修复函数
# ============================================================

def auto_fix(text: str, options: Optional[AutoFixOptions] = None) -> AutoFixResult:
    """
    自动修复 readme 文本

    Args:
        text: 原始文本
        options: 修复选项

    Returns:
        AutoFixResult 对象

    Raises:
        TypeError: text 不是字符串
        ValueError: multi_line_style 不是 indented / fenced
    """
    if not isinstance(text, str):
        raise TypeError(f"auto_fix() expects str, got {type(text).__name__}")
    options = options or AutoFixOptions()
    if options.multi_line_style not in MULTI_LINE_STYLES:
        raise ValueError(
            f"Unknown multi_line_style {options.multi_line_style!r}, "
            f"expected one of {', '.join(MULTI_LINE_STYLES)}"
        )

    changes: list[str] = []
    lines = split_lines(text)
    output: list[str] = []

    i = 0
    while i < len(lines):
        line = lines[i]

        heading = _normalize_eq_heading(line)
        if heading is not None:
            normalized, description = heading
            output.append(normalized)
            changes.append(f"{description} at line {i + 1}")
            i += 1
            continue

        fence = FENCE_OPEN_PATTERN.match(line)
        if fence:
            i = _fix_fenced_block(lines, i, fence.group(1), options, output, changes)
            continue

        converted = convert_hash_heading(line) if HASH_HEADING_PATTERN.match(line) else None
        if converted is not None and converted != line:
            level = len(line) - len(line.lstrip("#"))
            output.append(converted)
            changes.append(f"Converted hash heading (level {level}) to readme heading at line {i + 1}")
            i += 1
            continue

        output.append(line)
        i += 1

    newline = "\r\n" if "\r\n" in text else "\n"
    updated = newline.join(_collapse_blank_lines(output, changes))

    logger.debug(f"Auto-fix applied {len(changes)} changes")
    return AutoFixResult(updated_text=updated, change_log=changes, original_text=text)


def _normalize_eq_heading(line: str) -> Optional[tuple[str, str]]:
    """
    规范化 = 标题

    两端各恰好 3 个 = 的行视为插件名，保持不变；其余情况任一端有
    2 个以上 = 时输出 == inner ==，否则输出 = inner =。缺少结尾 = 的
    标题按开头 = 的数量补全。

    Returns:
        (规范化后的行, 修改说明)，无需修改时返回 None
    """
    if INDENTED_LINE_PATTERN.match(line):
        return None  # 缩进代码块中的内容
    trimmed = line.strip()
    if not trimmed.startswith("="):
        return None

    match = EQ_HEADING_PATTERN.match(trimmed)
    if match:
        leading, inner, trailing = match.group(1), match.group(2).strip(), match.group(3)
        if not inner or (len(leading) == 3 and len(trailing) == 3):
            return None
        is_section = len(leading) >= 2 or len(trailing) >= 2
        normalized = f"== {inner} ==" if is_section else f"= {inner} ="
        if normalized == line:
            return None
        return normalized, "Normalized malformed heading"

    match = EQ_OPEN_ONLY_PATTERN.match(trimmed)
    if match and not EQ_CLOSED_PATTERN.match(trimmed):
        inner = match.group(2).strip()
        normalized = f"== {inner} ==" if len(match.group(1)) >= 2 else f"= {inner} ="
        return normalized, "Added missing trailing equals to heading"

    return None


def _fix_fenced_block(
    lines: list[str],
    start: int,
    language: Optional[str],
    options: AutoFixOptions,
    output: list[str],
    changes: list[str],
) -> int:
    """
    处理从 start 行开始的围栏代码块

    Returns:
        块之后的下一行索引
    """
    i = start + 1
    block: list[str] = []
    while i < len(lines) and not FENCE_CLOSE_PATTERN.match(lines[i]):
        block.append(lines[i])
        i += 1
    closed = i < len(lines)
    if closed:
        i += 1  # 跳过结尾围栏

    line_number = start + 1

    if not block:
        changes.append(f"Removed empty fenced block at line {line_number}")
        return i

    if len(block) == 1:
        content = block[0].strip().replace("`", "\\`")
        output.append(f"`{content}`")
        changes.append(f"Converted single-line fenced block at line {line_number} to inline code")
        return i

    normalized = _normalize_block_indent(block, changes, line_number)

    if options.multi_line_style == "fenced":
        # 保留原有的语言标记
        output.append("```" + (language or ""))
        output.extend(normalized)
        output.append("```")
        if normalized != block or not closed:
            changes.append(
                f"Normalized multi-line fenced block ({len(block)} lines) at line {line_number}"
            )
        return i

    if language:
        changes.append(f"Removed language hint ({language}) from fenced block at line {line_number}")
    output.extend("    " + code_line.lstrip() for code_line in normalized)
    changes.append(
        f"Converted multi-line fenced block ({len(block)} lines) starting at line {line_number} "
        "to indented code block"
    )
    return i


def _normalize_block_indent(block: list[str], changes: list[str], line_number: int) -> list[str]:
    """检测 tab 与空格混用，并将行首 tab 统一为 4 个空格"""
    has_tab = any(code_line.startswith("\t") for code_line in block)
    has_space = any(code_line.startswith(" ") for code_line in block)
    if has_tab and has_space:
        changes.append(f"Normalized mixed indentation in code block starting line {line_number}")
    return [
        re.sub(r"^\t+", lambda match: "    " * len(match.group(0)), code_line)
        for code_line in block
    ]


def _collapse_blank_lines(lines: list[str], changes: list[str]) -> list[str]:
    """连续空行最多保留 2 个，只记录一条修改说明"""
    result: list[str] = []
    blank_run = 0
    collapsed = False

    for line in lines:
        if line.strip():
            blank_run = 0
            result.append(line)
            continue
        blank_run += 1
        if blank_run <= 2:
            result.append("")
        else:
            collapsed = True

    if collapsed:
        changes.append("Collapsed excessive blank lines")
    return result
