"""Configuration loading.

Settings are read from ``[tool.wp-readme-checker]`` in ``pyproject.toml`` or
from the top-level table of a ``.wp-readme.toml`` file. The dedicated file
wins when both exist. Command line options override whatever is loaded here.
"""

import logging
import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

# Handle tomllib/tomli for different Python versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from wp_readme_checker.autofix.fixer import MULTI_LINE_STYLES
from wp_readme_checker.preview.html import THEMES

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".wp-readme.toml"
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TABLE = "wp-readme-checker"

OUTPUT_FORMATS: tuple[str, ...] = ("rich", "json")
FAIL_ON_LEVELS: tuple[str, ...] = ("error", "warning")


class ConfigError(ValueError):
    """Raised when a configuration file holds an invalid value."""

    def __init__(self, key: str, message: str, source: Optional[Path] = None):
        self.key = key
        self.source = source
        location = f" in {source}" if source else ""
        super().__init__(f"Invalid value for '{key}'{location}: {message}")


@dataclass
class CheckerConfig:
    """Effective settings for a run."""
    multi_line_style: str = "indented"
    allow_videos: bool = True
    allow_html: bool = False
    base_url: Optional[str] = None
    theme: str = "default"
    output_format: str = "rich"
    fail_on: str = "error"
    min_score: int = 0
    ignore: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    source: Optional[Path] = field(default=None, compare=False)

    def merged(self, **overrides: Any) -> "CheckerConfig":
        """Return a copy with every non-None override applied."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update({key: value for key, value in overrides.items() if value is not None})
        return CheckerConfig(**values)


def find_config_file(directory: Path) -> Optional[Path]:
    """Return the config file that applies to a directory, if any."""
    dedicated = directory / CONFIG_FILENAME
    if dedicated.is_file():
        return dedicated
    pyproject = directory / PYPROJECT_FILENAME
    if pyproject.is_file():
        return pyproject
    return None


def load_config(path: Optional[Path] = None) -> CheckerConfig:
    """
    Load configuration.

    Args:
        path: A directory to search, or an explicit config file.
            Defaults to the current working directory.

    Returns:
        CheckerConfig, with defaults for anything not set

    Raises:
        ConfigError: The file is not valid TOML or holds an invalid value
    """
    path = path or Path.cwd()
    config_path = find_config_file(path) if path.is_dir() else path
    if config_path is None or not config_path.is_file():
        logger.debug(f"No configuration found for {path}, using defaults")
        return CheckerConfig()

    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError("<file>", str(e), config_path) from e

    if config_path.name == PYPROJECT_FILENAME:
        data = data.get("tool", {}).get(PYPROJECT_TABLE, {})

    config = _from_mapping(data, config_path)
    logger.debug(f"Loaded configuration from {config_path}")
    return config


def _from_mapping(data: dict[str, Any], source: Path) -> CheckerConfig:
    """Validate raw TOML values. Keys may use hyphens or underscores."""
    known = {f.name for f in fields(CheckerConfig)} - {"source"}
    values: dict[str, Any] = {}

    for raw_key, value in data.items():
        key = raw_key.replace("-", "_")
        if key not in known:
            raise ConfigError(raw_key, "unknown option", source)
        values[key] = value

    _check_choice(values, "multi_line_style", MULTI_LINE_STYLES, source)
    _check_choice(values, "theme", THEMES, source)
    _check_choice(values, "output_format", OUTPUT_FORMATS, source)
    _check_choice(values, "fail_on", FAIL_ON_LEVELS, source)

    for key in ("allow_videos", "allow_html"):
        if key in values and not isinstance(values[key], bool):
            raise ConfigError(key, "expected true or false", source)

    if "base_url" in values and not isinstance(values["base_url"], str):
        raise ConfigError("base_url", "expected a string", source)

    if "min_score" in values:
        score = values["min_score"]
        if isinstance(score, bool) or not isinstance(score, int) or not 0 <= score <= 100:
            raise ConfigError("min_score", "expected an integer between 0 and 100", source)

    for key in ("ignore", "exclude"):
        if key in values:
            items = values[key]
            if not isinstance(items, list) or not all(isinstance(item, str) for item in items):
                raise ConfigError(key, "expected a list of strings", source)

    if "ignore" in values:
        values["ignore"] = [code.upper() for code in values["ignore"]]

    return CheckerConfig(source=source, **values)


def _check_choice(values: dict[str, Any], key: str, choices: tuple[str, ...], source: Path) -> None:
    if key in values and values[key] not in choices:
        raise ConfigError(key, f"expected one of {', '.join(choices)}", source)
