"""
CLI Layer - 命令行接口层

提供命令行入口。
"""

from wp_readme_checker.cli.app import app, check, preview, fix, init, version

__all__ = [
    "app",
    "check",
    "preview",
    "fix",
    "init",
    "version",
]
