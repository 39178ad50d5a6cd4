"""
Rich logging configuration for the wp-readme-checker CLI.

Library modules only create loggers; the CLI calls configure_logging() once
per command. Diagnostics about readme content are never logged, they are
reported as issues.
"""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

# -v count -> root level
VERBOSITY_LEVELS: dict[int, int] = {
    0: logging.WARNING,
    1: logging.INFO,
}

# Third-party loggers that stay at INFO even with -vv
QUIET_LIBRARIES: tuple[str, ...] = ("markdown_it",)


def level_for(verbose: int) -> int:
    return VERBOSITY_LEVELS.get(verbose, logging.DEBUG)


def configure_logging(verbose: int = 0) -> None:
    """
    Route all log records through one RichHandler on stderr.

    stdout is left alone so `check --format json` and `preview` output
    can be piped.
    """
    level = level_for(verbose)
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.setLevel(level)

    handler = RichHandler(
        console=Console(file=sys.stderr),
        level=level,
        show_time=False,
        show_path=verbose > 1,
        rich_tracebacks=True,
        markup=False,
    )
    root.addHandler(handler)

    for name in QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(max(level, logging.INFO))
