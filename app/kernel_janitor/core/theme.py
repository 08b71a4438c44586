"""Color theme for the kernel table and status messages.

The bundled ``data/theme.toml`` defines every color. A user theme at
``~/.config/kernel-janitor/theme.toml`` may override any subset of them.
"""

import functools
import logging
import tomllib
from importlib import resources
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError
from rich.theme import Theme

from kernel_janitor.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)


def _parse_hex_color(value: object) -> str:
    """Accept ``#RGB`` or ``#RRGGBB`` strings."""
    if not isinstance(value, str):
        raise ValueError("color must be a string")
    color = value.strip()
    if not color.startswith("#"):
        raise ValueError("color must start with '#'")
    digits = color[1:]
    if len(digits) not in (3, 6):
        raise ValueError("color must be #RGB or #RRGGBB format")
    try:
        int(digits, 16)
    except ValueError:
        raise ValueError(f"invalid hex color '{color}'") from None
    return color


HexColor = Annotated[str, BeforeValidator(_parse_hex_color)]

# Styles rendered bold on top of their color
_BOLD_STYLES = frozenset({"error", "kernel_newest", "kernel_running"})


class ThemeColors(BaseModel):
    """Colors used by the CLI, one per style name."""

    model_config = ConfigDict(extra="forbid")

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    kernel_newest: HexColor = "#c1ff62"
    kernel_running: HexColor = "#0e8ac8"
    kernel_legacy: HexColor = "#d44ebc"
    kernel_incomplete: HexColor = "#faf870"


def get_bundled_theme_path() -> Path:
    """Get the path of the theme shipped with the package."""
    return Path(str(resources.files("kernel_janitor.data").joinpath("theme.toml")))


def read_theme_colors(path: Path) -> dict[str, str]:
    """Read the ``[colors]`` table of a theme file.

    A missing or unreadable file yields no colors. Non-string values
    are dropped.

    Args:
        path: Theme file to read.

    Returns:
        Mapping of style name to color.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", path)
        return {}
    return {name: value for name, value in colors.items() if isinstance(value, str)}


def load_theme(user_path: Path | None = None) -> ThemeColors:
    """Load the bundled theme with user overrides applied.

    Args:
        user_path: User theme file. Defaults to the XDG config location.

    Returns:
        Validated colors. Invalid overrides fall back to the defaults.
    """
    colors = read_theme_colors(get_bundled_theme_path())
    if not colors:
        logger.error("Bundled theme is missing or empty, installation may be corrupted")

    overrides = read_theme_colors(user_path or get_user_theme_path())
    if overrides:
        logger.debug("Applying %d user theme colors", len(overrides))
    colors.update(overrides)

    try:
        return ThemeColors.model_validate(colors)
    except ValidationError as e:
        logger.warning("Invalid theme, using default colors: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build a Rich theme from colors.

    Besides one style per color, ``bold_header`` and ``dim`` are defined
    for table headers and secondary text.
    """
    if colors is None:
        colors = load_theme()

    styles = {
        name: f"bold {color}" if name in _BOLD_STYLES else color
        for name, color in colors.model_dump().items()
    }
    styles["bold_header"] = f"bold {colors.header}"
    styles["dim"] = colors.muted
    return Theme(styles)


@functools.cache
def get_theme() -> Theme:
    """Get the Rich theme, loaded once per process."""
    return get_rich_theme()
