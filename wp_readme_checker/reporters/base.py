"""
报告器接口 - check 命令对每个 readme 调用一次 report
"""

from typing import Protocol, runtime_checkable

from wp_readme_checker.core.validator import ValidationResult


@runtime_checkable
class Reporter(Protocol):
    """把一个 readme 的 ValidationResult 输出到终端或流；target 为显示用的路径"""

    def report(self, result: ValidationResult, target: str) -> None: ...
