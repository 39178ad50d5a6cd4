"""
WordPress readme.txt 常量模块

集中定义解析器、验证器和自动修复共用的字段表、章节表、
许可证白名单、校验阈值以及正则表达式。
"""

import re


# ============================================================
# 字段与章节
# ============================================================

# 头部字段的展示名称（键为 ReadmeHeader 属性名）
FIELD_DISPLAY_NAMES: dict[str, str] = {
    "plugin_name": "Plugin Name",
    "contributors": "Contributors",
    "donate_link": "Donate Link",
    "tags": "Tags",
    "requires_at_least": "Requires at least",
    "tested_up_to": "Tested up to",
    "stable_tag": "Stable tag",
    "requires_php": "Requires PHP",
    "license": "License",
    "license_uri": "License URI",
    "short_description": "Short Description",
}

# 必填字段（按检查顺序）
REQUIRED_FIELDS: list[str] = [
    "plugin_name",
    "contributors",
    "tags",
    "requires_at_least",
    "tested_up_to",
    "stable_tag",
    "license",
    "short_description",
]

# 缺失必填字段时给出的可直接插入的示例行
FIELD_TEMPLATES: dict[str, str] = {
    "plugin_name": "=== Plugin Name ===",
    "contributors": "Contributors: your-wordpress-username",
    "tags": "Tags: tag1, tag2",
    "requires_at_least": "Requires at least: 6.0",
    "tested_up_to": "Tested up to: 6.6",
    "stable_tag": "Stable tag: 1.0.0",
    "license": "License: GPLv2 or later",
    "short_description": "A short description of what the plugin does.",
}

STANDARD_SECTIONS: list[str] = [
    "Description",
    "Installation",
    "Frequently Asked Questions",
    "Screenshots",
    "Changelog",
    "Upgrade Notice",
]

RECOMMENDED_SECTIONS: list[str] = STANDARD_SECTIONS[:5]

# 许可证白名单（小写，子串匹配）
GPL_COMPATIBLE_LICENSES: list[str] = [
    "gpl", "gplv2", "gpl v2", "gpl-2.0", "gpl2",
    "gplv3", "gpl v3", "gpl-3.0", "gpl3",
    "mit", "apache", "bsd",
]

PROMOTIONAL_WORDS: list[str] = ["best", "ultimate", "premium", "advanced", "professional"]


# ============================================================
# 校验阈值
# ============================================================

SHORT_DESCRIPTION_MAX_LENGTH = 150
SHORT_DESCRIPTION_MIN_LENGTH = 20
TAGS_MAX_COUNT = 5
TAG_MAX_LENGTH = 50
UPGRADE_NOTICE_MAX_LENGTH = 300
FILE_SIZE_MAX_BYTES = 10 * 1024
PLUGIN_NAME_MIN_LENGTH = 3
PLUGIN_NAME_MAX_LENGTH = 60
DESCRIPTION_MIN_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 2000
INSTALLATION_STEPS_THRESHOLD = 50


# ============================================================
# 正则表达式
# ============================================================

VERSION_PATTERN = re.compile(r"^\d+\.\d+(\.\d+)?$")
URL_PATTERN = re.compile(r"^https?://.+\..+$", re.IGNORECASE)
WORDPRESS_USERNAME_PATTERN = re.compile(r"^[a-z0-9_-]{3,60}$", re.IGNORECASE)
EMAIL_PATTERN = re.compile(r"\b[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\b")

# 恰好三个 = 的插件名行
PLUGIN_NAME_PATTERN = re.compile(r"^===(?!=)\s*(.+?)\s*(?<!=)===$")
# 恰好两个 = 且内部有空格的章节标题
SECTION_HEADER_PATTERN = re.compile(r"^==\s+(.+?)\s+==$")
FAQ_QUESTION_PATTERN = re.compile(r"^=\s*.+\s*=$", re.MULTILINE)
VERSION_HEADER_PATTERN = re.compile(r"^=\s*[\d.]+\s*=$", re.MULTILINE)

# 三种合法的 = 标题形态
CANONICAL_HEADING_PATTERNS: list[re.Pattern] = [
    re.compile(r"^===\s+.+?\s+===$"),
    re.compile(r"^==\s+.+?\s+==$"),
    re.compile(r"^=\s+.+?\s+=$"),
]

# 按固定优先级匹配的头部字段
HEADER_FIELD_PATTERNS: list[tuple[str, re.Pattern]] = [
    ("contributors", re.compile(r"^Contributors:\s*(.+)$", re.IGNORECASE)),
    ("donate_link", re.compile(r"^Donate link:\s*(.+)$", re.IGNORECASE)),
    ("tags", re.compile(r"^Tags:\s*(.+)$", re.IGNORECASE)),
    ("requires_at_least", re.compile(r"^Requires at least:\s*(.+)$", re.IGNORECASE)),
    ("tested_up_to", re.compile(r"^Tested up to:\s*(.+)$", re.IGNORECASE)),
    ("stable_tag", re.compile(r"^Stable tag:\s*(.+)$", re.IGNORECASE)),
    ("requires_php", re.compile(r"^Requires PHP:\s*(.+)$", re.IGNORECASE)),
    ("license", re.compile(r"^License:\s*(.+)$", re.IGNORECASE)),
    ("license_uri", re.compile(r"^License URI:\s*(.+)$", re.IGNORECASE)),
]

# 行分隔符（兼容 CRLF）
LINE_SPLIT_PATTERN = re.compile(r"\r?\n")


def split_lines(text: str) -> list[str]:
    """按 LF 或 CRLF 拆分文本为行列表"""
    return LINE_SPLIT_PATTERN.split(text)
