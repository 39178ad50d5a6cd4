"""
wp-readme-checker - WordPress 插件 readme.txt 检查工具

解析、验证、预览并自动修复 readme.txt。
"""

__version__ = "0.1.0"

from wp_readme_checker.core import parse_readme, validate_readme
from wp_readme_checker.markdown import render_markdown, wrap_paragraphs
from wp_readme_checker.autofix import auto_fix
from wp_readme_checker.preview import generate_html

__all__ = [
    "__version__",
    "parse_readme",
    "validate_readme",
    "render_markdown",
    "wrap_paragraphs",
    "auto_fix",
    "generate_html",
]
