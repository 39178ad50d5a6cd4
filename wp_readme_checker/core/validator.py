"""
核心验证器模块 - 检查 readme.txt 是否符合 WordPress.org 插件目录规范

执行以下验证（按顺序，互不短路）：
1. 头部字段：必填字段、插件名长度、贡献者用户名、标签、版本格式、
   简短描述、许可证、URL
2. 章节：推荐章节、章节顺序、各章节的专项检查
3. 标题结构：以 = 开头但不符合三种标准形态的行
4. 推广用语：best / ultimate / pro version 等
5. Markdown 完整性：未闭合代码块、# 标题、粗体/斜体配对、链接闭合、
   代码块内混用缩进
6. 邮箱地址与文件大小

验证器从不信任解析器的 errors/warnings，而是独立重新计算全部诊断。
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Literal, Optional

from wp_readme_checker.core.constants import (
    CANONICAL_HEADING_PATTERNS,
    DESCRIPTION_MAX_LENGTH,
    DESCRIPTION_MIN_LENGTH,
    EMAIL_PATTERN,
    FAQ_QUESTION_PATTERN,
    FIELD_DISPLAY_NAMES,
    FIELD_TEMPLATES,
    FILE_SIZE_MAX_BYTES,
    GPL_COMPATIBLE_LICENSES,
    HEADER_FIELD_PATTERNS,
    INSTALLATION_STEPS_THRESHOLD,
    PLUGIN_NAME_MAX_LENGTH,
    PLUGIN_NAME_MIN_LENGTH,
    PLUGIN_NAME_PATTERN,
    PROMOTIONAL_WORDS,
    RECOMMENDED_SECTIONS,
    REQUIRED_FIELDS,
    SECTION_HEADER_PATTERN,
    SHORT_DESCRIPTION_MAX_LENGTH,
    SHORT_DESCRIPTION_MIN_LENGTH,
    TAG_MAX_LENGTH,
    TAGS_MAX_COUNT,
    UPGRADE_NOTICE_MAX_LENGTH,
    URL_PATTERN,
    VERSION_HEADER_PATTERN,
    VERSION_PATTERN,
    WORDPRESS_USERNAME_PATTERN,
    split_lines,
)
from wp_readme_checker.core.parser import ParsedReadme, ReadmeHeader, ReadmeSection
from wp_readme_checker.core.scoring import calculate_score

logger = logging.getLogger(__name__)

Severity = Literal["error", "warning", "info"]

# 推广用语中的 "pro" 只在特定短语或独立出现时才报警
PRO_PATTERN = re.compile(r"\b(pro\s+version|pro\s+edition|go\s+pro|pro(?!\w))", re.IGNORECASE)
PROMOTIONAL_PATTERNS: list[tuple[str, re.Pattern]] = [
    (word, re.compile(rf"\b{word}\b", re.IGNORECASE)) for word in PROMOTIONAL_WORDS
] + [("pro", PRO_PATTERN)]

FENCE_PATTERN = re.compile(r"^```")
HASH_HEADING_PATTERN = re.compile(r"^\s*#+\s+")
HASH_IMAGE_PATTERN = re.compile(r"^\s*#\s*\[?!")
UNCLOSED_LINK_PATTERN = re.compile(r"\[[^\]]*\]\([^)]*$")
UNCLOSED_BRACKET_PATTERN = re.compile(r"\[[^\]]*$")
INDENTED_CODE_PATTERN = re.compile(r"^(?: {4}|\t)\s*\S")
NUMBERED_STEP_PATTERN = re.compile(r"^\d+\.", re.MULTILINE)


# ============================================================
# 数据模型
# ============================================================

@dataclass
class Issue:
    """
    诊断记录

    Attributes:
        severity: 严重程度 (error, warning, info)
        code: 问题代码 (如 MISSING_FIELD, MALFORMED_HEADING)
        message: 问题描述
        field: 相关的头部字段名
        line_number: 行号（从 1 开始）
        column: 起始列（从 1 开始）
        end_column: 结束列（含），line[column - 1:end_column] 即问题片段
        suggestion: 可直接替换插入的文本片段
        hint: 修复建议说明
    """
    severity: Severity
    code: str
    message: str
    field: Optional[str] = None
    line_number: Optional[int] = None
    column: Optional[int] = None
    end_column: Optional[int] = None
    suggestion: Optional[str] = None
    hint: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "severity": self.severity,
            "code": self.code,
            "message": self.message,
            "field": self.field,
            "line_number": self.line_number,
            "column": self.column,
            "end_column": self.end_column,
            "suggestion": self.suggestion,
            "hint": self.hint,
        }


@dataclass
class ValidationResult:
    """
    验证结果

    Attributes:
        issues: 全部诊断（按检查顺序，同一检查内按行号升序）
        score: 质量分数 (0-100)
        stats: 统计信息
    """
    issues: list[Issue] = field(default_factory=list)
    score: int = 100
    stats: dict[str, int] = field(default_factory=dict)

    @property
    def errors(self) -> list[Issue]:
        return [issue for issue in self.issues if issue.severity == "error"]

    @property
    def warnings(self) -> list[Issue]:
        """所有非 error 级别的诊断"""
        return [issue for issue in self.issues if issue.severity != "error"]

    @property
    def is_valid(self) -> bool:
        return not self.errors


# ============================================================
# 验证器
# ============================================================

class ReadmeValidator:
    """readme.txt 验证器"""

    def __init__(self, ignore: Iterable[str] = ()):
        """
        初始化验证器

        Args:
            ignore: 需要忽略的问题代码（在计分之前过滤）
        """
        self.ignore = frozenset(code.upper() for code in ignore)

    def validate(self, parsed: ParsedReadme) -> ValidationResult:
        """
        执行所有验证

        Args:
            parsed: 解析后的 readme

        Returns:
            验证结果
        """
        lines = split_lines(parsed.raw_content)
        field_lines = _locate_header_fields(lines)

        issues: list[Issue] = []
        issues.extend(self.validate_header(parsed.header, field_lines, lines))
        issues.extend(self.validate_sections(parsed.sections))
        issues.extend(self.validate_headings(lines))
        issues.extend(self.detect_promotional_language(lines))
        issues.extend(self.validate_markup(lines, parsed.raw_content))
        issues.extend(self.detect_email_addresses(lines))
        issues.extend(self.validate_file_size(parsed.raw_content))

        if self.ignore:
            issues = [issue for issue in issues if issue.code not in self.ignore]

        result = ValidationResult(issues=issues, score=calculate_score(issues, parsed))
        result.stats["total_sections"] = len(parsed.sections)
        result.stats["total_lines"] = len(lines)
        result.stats["total_issues"] = len(issues)
        result.stats["errors"] = len(result.errors)
        result.stats["warnings"] = len(result.warnings)

        logger.debug(
            f"Validation finished: {result.stats['errors']} errors, "
            f"{result.stats['warnings']} warnings, score {result.score}"
        )
        return result

    # --------------------------------------------------------
    # 头部
    # --------------------------------------------------------

    def validate_header(
        self,
        header: ReadmeHeader,
        field_lines: dict[str, int],
        lines: list[str],
    ) -> list[Issue]:
        """
        验证头部字段

        Args:
            header: 头部元数据
            field_lines: 字段名到行号（从 1 开始）的映射
            lines: 原始行列表

        Returns:
            问题列表
        """
        issues: list[Issue] = []

        # 1. 必填字段
        for name in REQUIRED_FIELDS:
            if not getattr(header, name):
                display = FIELD_DISPLAY_NAMES[name]
                issues.append(Issue(
                    severity="error",
                    code="MISSING_FIELD",
                    field=name,
                    message=f"{display} is required",
                    suggestion=FIELD_TEMPLATES[name],
                    hint=f"Add the {display} field to your readme header",
                ))

        # 2. 插件名长度
        name_length = len(header.plugin_name)
        if header.plugin_name and name_length < PLUGIN_NAME_MIN_LENGTH:
            issues.append(Issue(
                severity="warning",
                code="PLUGIN_NAME_LENGTH",
                field="plugin_name",
                message=f"Plugin name should be at least {PLUGIN_NAME_MIN_LENGTH} characters long",
                line_number=field_lines.get("plugin_name"),
            ))
        elif name_length > PLUGIN_NAME_MAX_LENGTH:
            issues.append(Issue(
                severity="warning",
                code="PLUGIN_NAME_LENGTH",
                field="plugin_name",
                message=(
                    f"Plugin name should be {PLUGIN_NAME_MAX_LENGTH} characters or less "
                    "for better display"
                ),
                line_number=field_lines.get("plugin_name"),
            ))

        # 3. 贡献者用户名
        for contributor in header.contributors:
            if not WORDPRESS_USERNAME_PATTERN.match(contributor):
                issues.append(self._field_issue(
                    code="INVALID_CONTRIBUTOR",
                    name="contributors",
                    message=f"Contributor \"{contributor}\" doesn't appear to be a valid WordPress.org username",
                    needle=contributor,
                    field_lines=field_lines,
                    lines=lines,
                    hint="Use only WordPress.org usernames for proper profile linking",
                ))

        # 4. 标签
        if len(header.tags) > TAGS_MAX_COUNT:
            issues.append(Issue(
                severity="warning",
                code="TOO_MANY_TAGS",
                field="tags",
                message=f"Maximum {TAGS_MAX_COUNT} tags recommended, you have {len(header.tags)}",
                line_number=field_lines.get("tags"),
                suggestion="Tags: " + ", ".join(header.tags[:TAGS_MAX_COUNT]),
                hint="Consider using fewer, more focused tags",
            ))
        for tag in header.tags:
            if len(tag) > TAG_MAX_LENGTH:
                issues.append(self._field_issue(
                    code="LONG_TAG",
                    name="tags",
                    message=f"Tag \"{tag}\" is very long and may not display properly",
                    needle=tag,
                    field_lines=field_lines,
                    lines=lines,
                ))

        # 5. 版本格式
        for name in ("requires_at_least", "tested_up_to", "stable_tag", "requires_php"):
            value = getattr(header, name)
            if value and not VERSION_PATTERN.match(value):
                display = FIELD_DISPLAY_NAMES[name]
                issues.append(self._field_issue(
                    code="INVALID_VERSION",
                    name=name,
                    message=f"{display} should be in format X.Y or X.Y.Z (got \"{value}\")",
                    needle=value,
                    field_lines=field_lines,
                    lines=lines,
                    hint="Use semantic versioning format",
                ))

        # 6. 简短描述（三项检查互相独立）
        description = header.short_description
        if description:
            line_number = field_lines.get("short_description")
            if len(description) > SHORT_DESCRIPTION_MAX_LENGTH:
                issues.append(Issue(
                    severity="warning",
                    code="SHORT_DESCRIPTION_TOO_LONG",
                    field="short_description",
                    message=(
                        f"Short description is {len(description)} characters "
                        f"(max {SHORT_DESCRIPTION_MAX_LENGTH})"
                    ),
                    line_number=line_number,
                    hint="Shorten the description for better display on WordPress.org",
                ))
            if "<" in description or ">" in description:
                issues.append(Issue(
                    severity="warning",
                    code="SHORT_DESCRIPTION_MARKUP",
                    field="short_description",
                    message="Short description should not contain HTML markup",
                    line_number=line_number,
                    suggestion=re.sub(r"<[^>]*>|[<>]", "", description).strip(),
                    hint="Remove HTML tags from the short description",
                ))
            if len(description) < SHORT_DESCRIPTION_MIN_LENGTH:
                issues.append(Issue(
                    severity="warning",
                    code="SHORT_DESCRIPTION_TOO_SHORT",
                    field="short_description",
                    message="Short description is very brief, consider adding more detail",
                    line_number=line_number,
                ))

        # 7. 许可证
        if header.license and not _is_gpl_compatible(header.license):
            issues.append(Issue(
                severity="warning",
                code="LICENSE_NOT_GPL",
                field="license",
                message="License may not be GPL-compatible",
                line_number=field_lines.get("license"),
                hint="WordPress.org requires GPL-compatible licenses",
            ))

        # 8. URL
        for name, label in (("donate_link", "Donate link"), ("license_uri", "License URI")):
            value = getattr(header, name)
            if value and not URL_PATTERN.match(value):
                issues.append(self._field_issue(
                    code="INVALID_URL",
                    name=name,
                    message=f"{label} appears to be invalid",
                    needle=value,
                    field_lines=field_lines,
                    lines=lines,
                ))

        return issues

    def _field_issue(
        self,
        code: str,
        name: str,
        message: str,
        needle: str,
        field_lines: dict[str, int],
        lines: list[str],
        hint: Optional[str] = None,
    ) -> Issue:
        """构造定位到头部字段值的警告"""
        line_number = field_lines.get(name)
        column = end_column = None
        if line_number is not None and needle:
            start = lines[line_number - 1].find(needle)
            if start != -1:
                column = start + 1
                end_column = start + len(needle)
        return Issue(
            severity="warning",
            code=code,
            field=name,
            message=message,
            line_number=line_number,
            column=column,
            end_column=end_column,
            hint=hint,
        )

    # --------------------------------------------------------
    # 章节
    # --------------------------------------------------------

    def validate_sections(self, sections: list[ReadmeSection]) -> list[Issue]:
        """
        验证章节

        Args:
            sections: 章节列表

        Returns:
            问题列表
        """
        issues: list[Issue] = []
        titles = {section.title.lower() for section in sections}

        # 9. 推荐章节
        for recommended in RECOMMENDED_SECTIONS:
            if recommended.lower() not in titles:
                issues.append(Issue(
                    severity="warning",
                    code="MISSING_SECTION",
                    message=f"Consider adding a \"{recommended}\" section",
                    suggestion=f"== {recommended} ==",
                    hint=f"The {recommended} section helps users understand and use your plugin",
                ))

        # 10. 章节顺序
        if sections and sections[0].title.lower() != "description":
            issues.append(Issue(
                severity="warning",
                code="SECTION_ORDER",
                message="Description section should typically be the first section",
                line_number=sections[0].line_start + 1,
            ))

        # 11. 各章节专项检查
        for section in sections:
            issues.extend(self._validate_section(section))

        return issues

    def _validate_section(self, section: ReadmeSection) -> list[Issue]:
        """单个章节的专项检查"""
        line_number = section.line_start + 1

        if not section.content.strip():
            return [Issue(
                severity="warning",
                code="EMPTY_SECTION",
                message=f"Section \"{section.title}\" is empty",
                line_number=line_number,
                hint="Add content to this section or remove it",
            )]

        issues: list[Issue] = []
        content = section.content
        title = section.title.lower()

        def warn(code: str, message: str) -> None:
            issues.append(Issue(
                severity="warning",
                code=code,
                message=message,
                line_number=line_number,
            ))

        if title == "description":
            if len(content) < DESCRIPTION_MIN_LENGTH:
                warn("DESCRIPTION_TOO_SHORT", "Description section is quite short, consider adding more detail")
            if len(content) > DESCRIPTION_MAX_LENGTH:
                warn(
                    "DESCRIPTION_TOO_LONG",
                    "Description section is very long, consider moving some content to other sections",
                )
        elif title == "installation":
            if not NUMBERED_STEP_PATTERN.search(content) and len(content) > INSTALLATION_STEPS_THRESHOLD:
                warn("INSTALLATION_STEPS", "Consider using numbered steps in the Installation section")
        elif title in ("frequently asked questions", "faq"):
            if not FAQ_QUESTION_PATTERN.search(content):
                warn("FAQ_FORMAT", "FAQ section should contain questions in the format \"= Question =\"")
        elif title == "screenshots":
            if not NUMBERED_STEP_PATTERN.search(content):
                warn("SCREENSHOTS_FORMAT", "Screenshots section should contain numbered items (1. Description)")
        elif title == "changelog":
            if not VERSION_HEADER_PATTERN.search(content):
                warn(
                    "CHANGELOG_FORMAT",
                    "Changelog section should contain version entries in the format \"= 1.0 =\"",
                )
        elif title == "upgrade notice":
            chunks = VERSION_HEADER_PATTERN.split(content)
            for chunk in chunks[1:]:
                if len(chunk.strip()) > UPGRADE_NOTICE_MAX_LENGTH:
                    warn(
                        "UPGRADE_NOTICE_TOO_LONG",
                        f"Upgrade notice for version should be {UPGRADE_NOTICE_MAX_LENGTH} characters or less",
                    )

        return issues

    # --------------------------------------------------------
    # 标题结构
    # --------------------------------------------------------

    def validate_headings(self, lines: list[str]) -> list[Issue]:
        """
        检测格式错误的 = 标题

        任何去除空白后以 = 开头、但不符合 === X === / == X == / = X =
        三种形态之一的行都会报错，即使解析器已将其当作正文吸收。

        Args:
            lines: 原始行列表

        Returns:
            问题列表
        """
        issues: list[Issue] = []

        for index, line in enumerate(lines):
            trimmed = line.strip()
            if not trimmed.startswith("="):
                continue
            if any(pattern.match(trimmed) for pattern in CANONICAL_HEADING_PATTERNS):
                continue

            suggestion = suggest_heading(trimmed)
            issues.append(Issue(
                severity="error",
                code="MALFORMED_HEADING",
                message="Malformed readme heading syntax",
                line_number=index + 1,
                column=1,
                end_column=len(line),
                suggestion=suggestion,
                hint=f"Use proper heading format, e.g. \"{suggestion}\"" if suggestion else None,
            ))

        return issues

    # --------------------------------------------------------
    # 推广用语
    # --------------------------------------------------------

    def detect_promotional_language(self, lines: list[str]) -> list[Issue]:
        """
        检测推广用语

        固定词表按单词边界匹配；"pro" 只在 pro version / pro edition /
        go pro 或独立单词时匹配，避免 provided、project 之类的误报。
        """
        issues: list[Issue] = []

        for index, line in enumerate(lines):
            hits: list[tuple[int, int, str]] = []
            for word, pattern in PROMOTIONAL_PATTERNS:
                for match in pattern.finditer(line):
                    hits.append((match.start(), match.end(), word))

            for start, end, word in sorted(hits):
                issues.append(Issue(
                    severity="warning",
                    code="PROMOTIONAL_LANGUAGE",
                    message=f"Consider avoiding promotional language like \"{word}\"",
                    line_number=index + 1,
                    column=start + 1,
                    end_column=end,
                    hint="Focus on functionality rather than marketing terms",
                ))

        return issues

    # --------------------------------------------------------
    # Markdown 完整性
    # --------------------------------------------------------

    def validate_markup(self, lines: list[str], raw_content: str) -> list[Issue]:
        """
        Markdown 完整性启发式检查

        Args:
            lines: 原始行列表
            raw_content: 原始文本

        Returns:
            问题列表
        """
        issues: list[Issue] = []
        issues.extend(self._check_fences(lines))
        issues.extend(self._check_hash_headings(lines))
        issues.extend(self._check_emphasis(lines, raw_content))
        issues.extend(self._check_links(lines))
        issues.extend(self._check_code_indentation(lines))
        return issues

    def _check_fences(self, lines: list[str]) -> list[Issue]:
        """代码围栏数量为奇数时，报告最后一个起始围栏"""
        fences = [index for index, line in enumerate(lines) if FENCE_PATTERN.match(line.strip())]
        if len(fences) % 2 == 0:
            return []
        return [Issue(
            severity="warning",
            code="UNCLOSED_FENCE",
            message="Unclosed fenced code block (```)",
            line_number=fences[-1] + 1,
            hint="Close the fenced block or convert to indented / inline code for WordPress",
        )]

    def _check_hash_headings(self, lines: list[str]) -> list[Issue]:
        """# 风格标题，逐行检查（包括围栏代码块内部的行）"""
        issues: list[Issue] = []

        for index, line in enumerate(lines):
            if HASH_HEADING_PATTERN.match(line) and not HASH_IMAGE_PATTERN.match(line):
                issues.append(Issue(
                    severity="warning",
                    code="HASH_HEADING",
                    message="Hash (#) style headings are not standard in WordPress plugin readme",
                    line_number=index + 1,
                    suggestion=convert_hash_heading(line),
                    hint="Use == Section == or = Sub Item = syntax instead",
                ))

        return issues

    def _check_emphasis(self, lines: list[str], raw_content: str) -> list[Issue]:
        """粗体 ** 与斜体 * 的数量是否成对"""
        issues: list[Issue] = []

        if raw_content.count("**") % 2 == 1:
            issues.append(Issue(
                severity="warning",
                code="UNBALANCED_BOLD",
                message="Unbalanced bold markers (**)",
                line_number=_last_line_containing(lines, lambda line: "**" in line),
                hint="Ensure bold sections use pairs of ** markers",
            ))

        def italic_markers(text: str) -> int:
            # 去掉 ** 后剩余的单个 *，列表项的 * 也计入
            return text.replace("**", "").count("*")

        if italic_markers(raw_content) % 2 == 1:
            issues.append(Issue(
                severity="warning",
                code="UNBALANCED_ITALIC",
                message="Unbalanced italic markers (*)",
                line_number=_last_line_containing(lines, lambda line: italic_markers(line) > 0),
                hint="Ensure italic sections use pairs of * markers",
            ))

        return issues

    def _check_links(self, lines: list[str]) -> list[Issue]:
        """未闭合的 [text](url 与孤立的 ["""
        issues: list[Issue] = []

        for index, line in enumerate(lines):
            match = UNCLOSED_LINK_PATTERN.search(line)
            if match:
                issues.append(Issue(
                    severity="warning",
                    code="UNCLOSED_LINK",
                    message="Possible unclosed markdown link",
                    line_number=index + 1,
                    column=match.start() + 1,
                    end_column=len(line),
                    suggestion=line.rstrip() + ")",
                    hint="Close the ) or ensure WordPress compatible formatting",
                ))
            match = UNCLOSED_BRACKET_PATTERN.search(line)
            if match:
                issues.append(Issue(
                    severity="warning",
                    code="UNCLOSED_BRACKET",
                    message="Unclosed [ bracket - malformed link or formatting",
                    line_number=index + 1,
                    column=match.start() + 1,
                    end_column=len(line),
                ))

        return issues

    def _check_code_indentation(self, lines: list[str]) -> list[Issue]:
        """围栏代码块和缩进代码块内部混用 tab 与空格"""
        issues: list[Issue] = []
        in_fence = False
        block: list[tuple[int, str]] = []

        def flush(message: str) -> None:
            has_tab = any(text.startswith("\t") for _, text in block)
            has_space = any(text.startswith(" ") for _, text in block)
            if has_tab and has_space:
                issues.append(Issue(
                    severity="warning",
                    code="MIXED_INDENTATION",
                    message=f"{message} (block starting at line {block[0][0]})",
                    line_number=block[0][0],
                    hint="Use spaces consistently for indentation",
                ))

        for index, line in enumerate(lines):
            if FENCE_PATTERN.match(line.strip()):
                if in_fence and block:
                    flush("Mixed tabs and spaces inside fenced code block")
                elif not in_fence and block:
                    flush("Mixed indentation inside indented code block")
                in_fence = not in_fence
                block = []
                continue

            if in_fence:
                block.append((index + 1, line))
            elif INDENTED_CODE_PATTERN.match(line):
                block.append((index + 1, line))
            elif block:
                flush("Mixed indentation inside indented code block")
                block = []

        if block:
            # 文件结束时仍未闭合的围栏也要检查
            flush(
                "Mixed tabs and spaces inside fenced code block"
                if in_fence
                else "Mixed indentation inside indented code block"
            )

        return issues

    # --------------------------------------------------------
    # 邮箱与文件大小
    # --------------------------------------------------------

    def detect_email_addresses(self, lines: list[str]) -> list[Issue]:
        """检测真实的邮箱地址（而非 email 这个单词）"""
        issues: list[Issue] = []

        for index, line in enumerate(lines):
            for match in EMAIL_PATTERN.finditer(line):
                issues.append(Issue(
                    severity="warning",
                    code="EMAIL_ADDRESS",
                    message=(
                        "Avoid including email addresses in readme, "
                        "use WordPress.org support forums instead"
                    ),
                    line_number=index + 1,
                    column=match.start() + 1,
                    end_column=match.end(),
                ))

        return issues

    def validate_file_size(self, raw_content: str) -> list[Issue]:
        """以字符数近似字节数，超过 10KB 时警告"""
        size = len(raw_content)
        if size <= FILE_SIZE_MAX_BYTES:
            return []
        return [Issue(
            severity="warning",
            code="FILE_TOO_LARGE",
            message=(
                f"Readme file is {round(size / 1024)}KB "
                f"(recommended max: {FILE_SIZE_MAX_BYTES // 1024}KB)"
            ),
            hint="Consider moving detailed documentation to your website",
        )]


# ============================================================
# 辅助函数
# ============================================================

def validate_readme(parsed: ParsedReadme, ignore: Iterable[str] = ()) -> ValidationResult:
    """
    验证解析后的 readme

    Args:
        parsed: parse_readme() 的返回值
        ignore: 需要忽略的问题代码

    Returns:
        验证结果
    """
    return ReadmeValidator(ignore=ignore).validate(parsed)


def suggest_heading(trimmed: str) -> Optional[str]:
    """
    为格式错误的 = 标题生成规范写法

    去掉两端的 = 后重新包裹；= 的数量取两端中较多的一侧，最多 3 个。
    """
    leading = len(trimmed) - len(trimmed.lstrip("="))
    trailing = len(trimmed) - len(trimmed.rstrip("="))
    core = re.sub(r"^=+\s*", "", trimmed)
    core = re.sub(r"\s*=+$", "", core).strip()
    if not core:
        return None
    marks = "=" * min(3, max(leading, trailing))
    return f"{marks} {core} {marks}"


def convert_hash_heading(line: str) -> Optional[str]:
    """
    将 # 标题转换为 readme 标题

    1-2 级转换为 == Title ==，3 级及以下转换为 = Title =；
    去掉 # 后为空时返回 None。
    """
    match = re.match(r"^(#{1,6})(.*)$", line.strip())
    if not match:
        return None
    level = len(match.group(1))
    title = match.group(2).lstrip()
    # 只去掉前面有空格的尾随 #，避免吃掉 C# 之类的词
    title = re.sub(r"\s+#{1,6}\s*$", "", title).strip()
    title = re.sub(r"\s{2,}", " ", title)
    if not title:
        return None
    return f"== {title} ==" if level <= 2 else f"= {title} ="


def _is_gpl_compatible(license_text: str) -> bool:
    lowered = license_text.lower()
    return any(candidate in lowered for candidate in GPL_COMPATIBLE_LICENSES)


def _last_line_containing(lines: list[str], predicate) -> Optional[int]:
    """返回最后一个满足条件的行号（从 1 开始）"""
    for index in range(len(lines) - 1, -1, -1):
        if predicate(lines[index]):
            return index + 1
    return None


def _locate_header_fields(lines: list[str]) -> dict[str, int]:
    """
    定位头部字段所在的行

    与解析器相同的规则：扫描到第一个章节标题为止，后出现的字段覆盖先出现的。

    Returns:
        字段名到行号（从 1 开始）的映射
    """
    located: dict[str, int] = {}
    plugin_line = -1

    for index, raw in enumerate(lines):
        line = raw.strip()
        if SECTION_HEADER_PATTERN.match(line):
            break
        if plugin_line == -1 and PLUGIN_NAME_PATTERN.match(line):
            plugin_line = index
            located["plugin_name"] = index + 1
            continue
        for name, pattern in HEADER_FIELD_PATTERNS:
            if pattern.match(line):
                located[name] = index + 1
                break
        else:
            if (
                line
                and plugin_line != -1
                and index > plugin_line
                and "short_description" not in located
            ):
                located["short_description"] = index + 1

    return located
