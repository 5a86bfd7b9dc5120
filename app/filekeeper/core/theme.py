"""Colour theme for console output.

Built-in colours can be overridden key by key in
``$XDG_CONFIG_HOME/filekeeper/theme.toml``::

    [colors]
    deleted = "#ff5555"
    would_delete = "#f1fa8c"

An unreadable or invalid theme file is reported and ignored as a whole.
"""

import logging
import re
import sys
import tomllib
from functools import cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from rich.theme import Theme

from filekeeper.core.paths import APP_NAME, get_config_home

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


class ThemeColors(BaseModel):
    """Named colours, each a ``#RGB`` or ``#RRGGBB`` hex code."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"
    deleted: str = "#f53263"
    would_delete: str = "#faf870"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, value: object, info: ValidationInfo) -> str:
        if not isinstance(value, str):
            msg = f"{info.field_name}: color must be a string"
            raise ValueError(msg)
        color = value.strip()
        if not _HEX_COLOR.fullmatch(color):
            msg = f"{info.field_name}: expected #RGB or #RRGGBB, got '{color}'"
            raise ValueError(msg)
        return color

    def styles(self) -> dict[str, str]:
        """Rich style definitions keyed by style name."""
        styles = self.model_dump()
        styles["error"] = f"bold {self.error}"
        styles["bold_header"] = f"bold {self.header}"
        return styles


def get_user_theme_path() -> Path:
    """Get the optional user theme file.

    Returns:
        Path to ~/.config/filekeeper/theme.toml
    """
    return get_config_home() / APP_NAME / "theme.toml"


def read_overrides(path: Path) -> dict[str, object]:
    """Read the ``[colors]`` table of a theme file.

    Args:
        path: Theme file to read.

    Returns:
        Raw colour overrides; empty if the file does not exist.

    Raises:
        ValueError: If the file is not valid TOML or ``colors`` is not a table.
        OSError: If the file exists but cannot be read.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        raise ValueError("'colors' must be a table")
    return colors


def load_theme(path: Path | None = None) -> ThemeColors:
    """Load the built-in colours merged with the user's overrides.

    Args:
        path: Theme file. If None, uses the user theme path.

    Returns:
        ThemeColors; the defaults if the file is missing or invalid.
    """
    theme_path = path or get_user_theme_path()
    try:
        return ThemeColors.model_validate(read_overrides(theme_path))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring theme file %s: %s", theme_path, e)
        print(f"Warning: ignoring theme file {theme_path}: {e}", file=sys.stderr)
        return ThemeColors()


@cache
def get_theme() -> Theme:
    """Rich theme shared by the CLI consoles, built once per process."""
    return Theme(load_theme().styles())
