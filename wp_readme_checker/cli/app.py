"""
CLI 入口模块 - 使用 Typer 构建命令行界面

命令：
1. check   - 解析并验证 readme.txt（单个文件或目录），输出报告
2. preview - 生成 HTML 预览页面
3. fix     - 自动修复常见的 Markdown 写法
4. init    - 生成 readme.txt 模板
5. version - 显示版本
"""

import difflib
import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console

from wp_readme_checker.autofix import AutoFixOptions, MULTI_LINE_STYLES, auto_fix
from wp_readme_checker.config import (
    FAIL_ON_LEVELS,
    OUTPUT_FORMATS,
    CheckerConfig,
    ConfigError,
    load_config,
)
from wp_readme_checker.core import ValidationResult, parse_readme, validate_readme
from wp_readme_checker.filters import find_readmes
from wp_readme_checker.logging_setup import configure_logging
from wp_readme_checker.preview import THEMES, HtmlOptions, generate_html, readme_template
from wp_readme_checker.reporters import JsonReporter, RichReporter

logger = logging.getLogger(__name__)

# 创建 Typer 应用实例
app = typer.Typer(
    name="wp-readme-checker",
    help="Validate, preview and fix WordPress plugin readme.txt files.",
    add_completion=False,
)

# Rich Console 用于输出
console = Console()

README_FILENAME = "readme.txt"


# ============================================================
# 辅助函数
# ============================================================

def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error:[/red] {message}", highlight=False)
    raise typer.Exit(1)


def _check_choice(value: Optional[str], choices: tuple[str, ...], option: str) -> None:
    if value is not None and value not in choices:
        _fail(f"{option} must be one of {', '.join(choices)} (got {value!r})")


def _load_config(config_path: Optional[Path], target: Path) -> CheckerConfig:
    """加载配置文件，出错时退出"""
    search = config_path or (target if target.is_dir() else target.parent)
    if config_path is not None and not config_path.exists():
        _fail(f"Config file does not exist: {config_path}")
    try:
        return load_config(search)
    except ConfigError as e:
        _fail(str(e))


def _read_text(path: Path) -> str:
    """读取文件，保留原有换行符"""
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Failed to read {path}: {e}")


def _write_text(path: Path, text: str) -> None:
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as e:
        _fail(f"Failed to write {path}: {e}")


def _require_file(file: Path) -> None:
    if not file.exists():
        _fail(f"Path does not exist: {file}")
    if not file.is_file():
        _fail(f"Path is not a file: {file}")


def _should_fail(result: ValidationResult, config: CheckerConfig) -> bool:
    if result.errors:
        return True
    if config.fail_on == "warning" and result.warnings:
        return True
    return result.score < config.min_score


# ============================================================
# 命令
# ============================================================

@app.command()
def check(
    target: Path = typer.Argument(
        Path("."),
        help="readme.txt file, or a directory to search for readme.txt files",
    ),
    format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: rich (default) or json",
    ),
    min_score: Optional[int] = typer.Option(
        None,
        "--min-score",
        min=0,
        max=100,
        help="Fail when a readme scores below this value",
    ),
    fail_on: Optional[str] = typer.Option(
        None,
        "--fail-on",
        help="Fail on: error (default) or warning",
    ),
    ignore: Optional[list[str]] = typer.Option(
        None,
        "--ignore",
        help="Issue code to suppress (repeatable)",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Config file (.wp-readme.toml or pyproject.toml)",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Show detailed output (-vv for debug logging)",
    ),
) -> None:
    """
    Check WordPress readme.txt files against the plugin directory rules.

    Examples:
        wp-readme-checker check
        wp-readme-checker check ./my-plugin/readme.txt
        wp-readme-checker check ./plugins --format json
        wp-readme-checker check --fail-on warning --min-score 80
    """
    configure_logging(verbose)
    _check_choice(format, OUTPUT_FORMATS, "--format")
    _check_choice(fail_on, FAIL_ON_LEVELS, "--fail-on")

    if not target.exists():
        _fail(f"Path does not exist: {target}")

    config = _load_config(config_path, target).merged(
        output_format=format,
        min_score=min_score,
        fail_on=fail_on,
    )
    if ignore:
        config.ignore = sorted({*config.ignore, *(code.upper() for code in ignore)})

    # 1. 查找 readme
    if target.is_dir():
        files = find_readmes(target, config.exclude)
        if not files:
            console.print(f"[yellow]Warning:[/yellow] No {README_FILENAME} found under {target}")
            raise typer.Exit(0)
    else:
        files = [target]

    if verbose:
        console.print(f"[dim]Checking {len(files)} file(s)[/dim]")
        if config.source:
            console.print(f"[dim]Using config: {config.source}[/dim]")

    # 2. 解析并验证
    results: list[tuple[Path, ValidationResult]] = []
    for path in files:
        text = _read_text(path)
        parsed = parse_readme(text)
        if verbose:
            console.print(f"[dim]  {path}: {len(parsed.sections)} sections[/dim]")
        results.append((path, validate_readme(parsed, ignore=config.ignore)))

    # 3. 生成报告
    if config.output_format == "json":
        json_reporter = JsonReporter()
        if target.is_dir():
            json_reporter.report_many(results)
        else:
            path, result = results[0]
            json_reporter.report(result, str(path))
    else:
        rich_reporter = RichReporter(console)
        for path, result in results:
            rich_reporter.report(result, str(path))

    # 4. 设置退出码
    failed = [path for path, result in results if _should_fail(result, config)]
    logger.info(f"{len(failed)} of {len(results)} file(s) failed")
    if failed:
        raise typer.Exit(1)
    raise typer.Exit(0)


@app.command()
def preview(
    file: Path = typer.Argument(..., help="readme.txt file to preview"),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the HTML to this file instead of stdout",
    ),
    theme: Optional[str] = typer.Option(
        None,
        "--theme",
        help="Preview theme: default or wordpress-org",
    ),
    no_videos: bool = typer.Option(
        False,
        "--no-videos",
        help="Keep video links as text instead of embedding players",
    ),
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        help="Base URL for relative links",
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Config file"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Show detailed output"),
) -> None:
    """Render a readme.txt as an HTML preview page."""
    configure_logging(verbose)
    _check_choice(theme, THEMES, "--theme")
    _require_file(file)

    config = _load_config(config_path, file).merged(theme=theme, base_url=base_url)
    if no_videos:
        config.allow_videos = False

    parsed = parse_readme(_read_text(file))
    validation = validate_readme(parsed, ignore=config.ignore)
    html = generate_html(parsed, validation, HtmlOptions(
        theme=config.theme,
        allow_videos=config.allow_videos,
        allow_html=config.allow_html,
        base_url=config.base_url,
    ))

    if output is None:
        typer.echo(html)
        return

    _write_text(output, html)
    console.print(f"[green]Wrote[/green] {output}", highlight=False)


@app.command()
def fix(
    file: Path = typer.Argument(..., help="readme.txt file to fix"),
    style: Optional[str] = typer.Option(
        None,
        "--style",
        help="Multi-line fenced code output: indented (default) or fenced",
    ),
    diff: bool = typer.Option(False, "--diff", help="Show a unified diff of the changes"),
    write: bool = typer.Option(False, "--write", "-w", help="Write the fixed text back to the file"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Config file"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Show detailed output"),
) -> None:
    """Convert generic Markdown into WordPress readme syntax."""
    configure_logging(verbose)
    _check_choice(style, MULTI_LINE_STYLES, "--style")
    _require_file(file)

    config = _load_config(config_path, file).merged(multi_line_style=style)
    original = _read_text(file)
    result = auto_fix(original, AutoFixOptions(multi_line_style=config.multi_line_style))

    if not result.change_log:
        console.print("[green]No changes needed.[/green]")
        return

    for entry in result.change_log:
        console.print(f"  • {entry}", highlight=False)

    if diff:
        typer.echo("".join(difflib.unified_diff(
            original.splitlines(keepends=True),
            result.updated_text.splitlines(keepends=True),
            fromfile=f"a/{file.name}",
            tofile=f"b/{file.name}",
        )))

    if write and result.changed:
        _write_text(file, result.updated_text)
        console.print(f"[green]Updated[/green] {file}", highlight=False)
    elif not write:
        console.print("[dim]Run with --write to apply these changes.[/dim]")


@app.command()
def init(
    directory: Path = typer.Argument(Path("."), help="Directory to create readme.txt in"),
    name: str = typer.Option("WordPress Plugin Name", "--name", "-n", help="Plugin name"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing readme.txt"),
) -> None:
    """Create a readme.txt template."""
    if not directory.is_dir():
        _fail(f"Path is not a directory: {directory}")

    path = directory / README_FILENAME
    if path.exists() and not force:
        _fail(f"{path} already exists (use --force to overwrite)")

    _write_text(path, readme_template(name))
    console.print(f"[green]Created[/green] {path}", highlight=False)


@app.command()
def version() -> None:
    """Show the version of wp-readme-checker."""
    from wp_readme_checker import __version__
    console.print(f"[bold]wp-readme-checker[/bold] v{__version__}")


if __name__ == "__main__":
    app()
