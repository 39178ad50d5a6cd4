"""
JSON 报告器 - 输出机器可读的检查结果

单个文件输出一个对象，目录检查输出对象列表
"""

import json
import sys
from pathlib import Path
from typing import Any, TextIO

from wp_readme_checker.core.scoring import get_rating
from wp_readme_checker.core.validator import ValidationResult


class JsonReporter:
    """JSON 报告器"""

    def __init__(self, output: TextIO | None = None, indent: int = 2):
        self.output = output or sys.stdout
        self.indent = indent

    def build(self, result: ValidationResult, target: str) -> dict[str, Any]:
        """单个 readme 的报告数据，issues 使用 Issue.to_dict 的全部字段"""
        summary = {
            "total_issues": len(result.issues),
            "errors": len(result.errors),
            "warnings": len(result.warnings),
            "passed": result.is_valid,
        }
        return {
            "target": target,
            "score": result.score,
            "rating": get_rating(result.score).title,
            "summary": summary,
            "issues": [issue.to_dict() for issue in result.issues],
            "stats": result.stats,
        }

    def report(self, result: ValidationResult, target: str) -> None:
        self._write(self.build(result, target))

    def report_many(self, results: list[tuple[Path, ValidationResult]]) -> None:
        """目录检查：每个文件一项"""
        self._write([self.build(result, str(path)) for path, result in results])

    def _write(self, payload: Any) -> None:
        self.output.write(json.dumps(payload, indent=self.indent, ensure_ascii=False))
        self.output.write("\n")
