"""
Auto-Fix Layer - 自动修复层

包含整篇文本的自动修复和针对单个诊断的快速修复。
"""

from wp_readme_checker.autofix.fixer import (
    auto_fix,
    AutoFixOptions,
    AutoFixResult,
    MULTI_LINE_STYLES,
)
from wp_readme_checker.autofix.quickfix import (
    available_fixes,
    apply_quick_fix,
    QuickFix,
    QUICK_FIXES,
)

__all__ = [
    "auto_fix",
    "AutoFixOptions",
    "AutoFixResult",
    "MULTI_LINE_STYLES",
    "available_fixes",
    "apply_quick_fix",
    "QuickFix",
    "QUICK_FIXES",
]
