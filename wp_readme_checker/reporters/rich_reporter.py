"""
Rich 终端报告器 - 按检查类别汇总 readme 诊断

输出依次为：分数面板、分类统计表、问题列表（错误优先）、结论
"""

from collections import Counter

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from wp_readme_checker.core.scoring import SEVERITY_PENALTIES, Rating, get_rating
from wp_readme_checker.core.validator import Issue, ValidationResult


# 检查类别：(显示名称, 问题代码)
CATEGORIES: dict[str, tuple[str, tuple[str, ...]]] = {
    "header": ("Header fields", (
        "MISSING_FIELD", "PLUGIN_NAME_LENGTH", "INVALID_CONTRIBUTOR", "TOO_MANY_TAGS",
        "LONG_TAG", "INVALID_VERSION", "SHORT_DESCRIPTION_TOO_LONG",
        "SHORT_DESCRIPTION_MARKUP", "SHORT_DESCRIPTION_TOO_SHORT", "LICENSE_NOT_GPL",
        "INVALID_URL",
    )),
    "sections": ("Sections", (
        "MISSING_SECTION", "SECTION_ORDER", "EMPTY_SECTION", "DESCRIPTION_TOO_SHORT",
        "DESCRIPTION_TOO_LONG", "INSTALLATION_STEPS", "FAQ_FORMAT", "SCREENSHOTS_FORMAT",
        "CHANGELOG_FORMAT", "UPGRADE_NOTICE_TOO_LONG",
    )),
    "markup": ("Markup", (
        "MALFORMED_HEADING", "HASH_HEADING", "UNCLOSED_FENCE", "UNBALANCED_BOLD",
        "UNBALANCED_ITALIC", "UNCLOSED_LINK", "UNCLOSED_BRACKET", "MIXED_INDENTATION",
    )),
    "content": ("Content", (
        "PROMOTIONAL_LANGUAGE", "EMAIL_ADDRESS", "FILE_TOO_LARGE",
    )),
}

MAX_LISTED_ISSUES = 10


def score_bar(score: int, width: int) -> str:
    """█/░ 进度条，score 取 0-100"""
    filled = int(score / 100 * width)
    return "█" * filled + "░" * (width - filled)


def score_color(score: int) -> str:
    if score >= 80:
        return "green"
    if score >= 60:
        return "cyan"
    if score >= 40:
        return "yellow"
    return "red"


class RichReporter:
    """Rich 终端报告器"""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def report(self, result: ValidationResult, target: str) -> None:
        """打印一个 readme 的完整报告"""
        rating = get_rating(result.score)

        self.console.print()
        self.console.rule("[bold cyan]WordPress readme.txt report[/bold cyan]", style="dim")

        self._print_summary(result.score, rating, target)
        self._print_categories(result.issues)
        if result.issues:
            self._print_issues(result.issues)
        self._print_conclusion(rating, result)

    def _print_summary(self, score: int, rating: Rating, target: str) -> None:
        """分数、评级与目标文件"""
        content = Text()
        content.append("Score: ", style="bold")
        content.append(str(score), style=f"bold {rating.color}")
        content.append(" / 100\n", style="dim")
        content.append(score_bar(score, 30) + "\n\n", style=rating.color)
        content.append("Rating: ", style="bold")
        content.append(rating.title + "\n", style=f"bold {rating.color}")
        content.append(rating.description + "\n\n", style="dim")
        content.append(f"Target: {target}", style="dim")

        self.console.print(Panel(content, title="[bold]Readme quality[/bold]", border_style=rating.color))

    def _print_categories(self, issues: list[Issue]) -> None:
        """每个检查类别的错误数、警告数和类别分数"""
        self.console.print()
        table = Table(title="Checks", title_justify="left", header_style="bold cyan", box=None)
        table.add_column("Check", style="cyan", min_width=14)
        table.add_column("Errors", justify="right")
        table.add_column("Warnings", justify="right")
        table.add_column("Score", justify="right")
        table.add_column("", min_width=22)

        for label, codes in CATEGORIES.values():
            counts = Counter(
                "error" if issue.severity == "error" else "warning"
                for issue in issues
                if issue.code in codes
            )
            # 与总分相同的扣分规则，但不加奖励分
            score = max(0, 100 - sum(SEVERITY_PENALTIES[kind] * n for kind, n in counts.items()))
            color = score_color(score)
            table.add_row(
                label,
                str(counts["error"]) if counts["error"] else "[dim]-[/dim]",
                str(counts["warning"]) if counts["warning"] else "[dim]-[/dim]",
                f"[bold]{score}[/bold]",
                f"[{color}]{score_bar(score, 20)}[/{color}]",
            )

        self.console.print(table)

    def _print_issues(self, issues: list[Issue]) -> None:
        """最多列出 MAX_LISTED_ISSUES 条，错误在前，同级按行号"""
        self.console.print()
        self.console.print("[bold]Issues[/bold]")

        ordered = sorted(issues, key=lambda issue: (issue.severity != "error", issue.line_number or 0))
        for number, issue in enumerate(ordered[:MAX_LISTED_ISSUES], 1):
            style = "red" if issue.severity == "error" else "yellow"
            location = f"line {issue.line_number}" if issue.line_number else "file"
            if issue.column:
                location += f", column {issue.column}"

            self.console.print(
                f"  {number}. [{style}]{escape(issue.message)}[/{style}] [dim]({issue.code})[/dim]",
                highlight=False,
            )
            self.console.print(f"     [dim]{location}[/dim]")
            advice = f"→ {issue.suggestion}" if issue.suggestion else issue.hint
            if advice:
                self.console.print(f"     [dim]{escape(advice)}[/dim]", highlight=False)

        hidden = len(issues) - MAX_LISTED_ISSUES
        if hidden > 0:
            self.console.print(f"  [dim]... {hidden} more issues not shown[/dim]")

    def _print_conclusion(self, rating: Rating, result: ValidationResult) -> None:
        errors = len(result.errors)
        warnings = len(result.warnings)

        if errors or warnings:
            body = (
                f"[bold {rating.color}]{rating.title}[/bold {rating.color}]\n"
                f"Found [red]{errors}[/red] errors and [yellow]{warnings}[/yellow] warnings"
            )
        else:
            body = f"[bold green]{rating.title}[/bold green]\n[green]No issues found.[/green]"

        self.console.print()
        self.console.print(Panel(body, border_style=rating.color if errors or warnings else "green"))
