"""Theme management for the debris CLI.

Provides color theming with an optional user override in
~/.config/debris/theme.toml (a ``[colors]`` table with hex values).
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from debris.core.paths import get_theme_path

logger = logging.getLogger(__name__)


class ThemeColors(BaseModel):
    """Color configuration for the debris CLI.

    All colors must be valid hex codes (#RRGGBB or #RGB).
    """

    model_config = ConfigDict(extra="forbid")

    # Base colors
    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    # Semantic colors
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Safety tiers
    safety_high: str = "#03b971"
    safety_medium: str = "#faf870"
    safety_low: str = "#d44ebc"

    # Sizes
    size: str = "#0e8ac8"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        """Validate that all color values are valid hex codes."""
        if not isinstance(v, str):
            msg = f"{info.field_name}: color must be a string"
            raise ValueError(msg)
        color = v.strip()
        if not color.startswith("#"):
            msg = f"{info.field_name}: color must start with '#'"
            raise ValueError(msg)
        color_part = color[1:]
        if len(color_part) not in (3, 6):
            msg = f"{info.field_name}: color must be #RGB or #RRGGBB format"
            raise ValueError(msg)
        try:
            int(color_part, 16)
        except ValueError:
            msg = f"{info.field_name}: invalid hex color '{color}'"
            raise ValueError(msg) from None
        return color


def _load_user_colors(path: Path) -> dict[str, str]:
    """Load the ``[colors]`` table of a user theme file.

    Returns an empty dict if the file is missing or unusable.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except tomllib.TOMLDecodeError as e:
        logger.warning("Failed to parse theme file %s: %s", path, e)
        return {}
    except OSError as e:
        logger.warning("Failed to read theme file %s: %s", path, e)
        return {}

    colors_raw: object = data.get("colors", {})
    if not isinstance(colors_raw, dict):
        logger.warning("Invalid 'colors' section in %s", path)
        return {}
    return {
        key: value
        for key, value in cast(dict[str, object], colors_raw).items()
        if isinstance(value, str)
    }


def load_colors(path: Path | None = None) -> ThemeColors:
    """Load theme colors, applying a user override on top of the defaults.

    Invalid overrides are logged and ignored as a whole.
    """
    overrides = _load_user_colors(path or get_theme_path())
    if not overrides:
        return ThemeColors()
    try:
        return ThemeColors(**overrides)
    except ValidationError as e:
        logger.warning("Ignoring invalid theme override: %s", e)
        return ThemeColors()


def get_theme(path: Path | None = None) -> Theme:
    """Build the Rich theme used by the shared consoles."""
    colors = load_colors(path)
    return Theme(
        {
            "text": colors.text,
            "muted": colors.muted,
            "header": colors.header,
            "bold_header": f"bold {colors.header}",
            "border": colors.border,
            "success": colors.success,
            "warning": colors.warning,
            "error": colors.error,
            "info": colors.info,
            "safety_high": f"bold {colors.safety_high}",
            "safety_medium": colors.safety_medium,
            "safety_low": colors.safety_low,
            "size": colors.size,
        }
    )
