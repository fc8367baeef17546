"""Configuration loading and validation."""

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from PIL import ImageColor
from pydantic import BaseModel, Field, ValidationError, field_validator

from textvertical.errors import ConfigurationError
from textvertical.types import RGBColor

DEFAULT_FONT_FAMILY = (
    "-apple-system, BlinkMacSystemFont, 'Segoe UI', 'PingFang SC', 'Hiragino Sans GB', "
    "'Microsoft YaHei', 'Helvetica Neue', Helvetica, Arial, sans-serif, "
    "'Apple Color Emoji', 'Segoe UI Emoji', 'Segoe UI Symbol'"
)


class TextVerticalOptions(BaseModel):
    """
    Options for one vertical text rendering.

    Only width and height are required. Override the rest as needed:

        options = TextVerticalOptions(width=40, height=200)
        bold = options.model_copy(update={"font_weight": 700})
    """

    fill_style: str = "#000"
    """Text color. Anything PIL.ImageColor understands ("#000", "red", "rgb(0,0,0)")."""

    font_family: str = Field(default=DEFAULT_FONT_FAMILY, min_length=1)
    """CSS-style font family list. The first family that resolves is used."""

    font_size: float = Field(default=12, gt=0)
    """Font size in pixels."""

    font_weight: int = Field(default=400, ge=100, le=900)
    """Font weight (100-900). Weights of 600 and above prefer bold font files."""

    line_height: float = Field(default=14, gt=0)
    """Line height in pixels. Divided by font_size to scale the gap after each glyph."""

    width: int | None = Field(default=None, gt=0)
    """Box width in pixels. Required."""

    height: int | None = Field(default=None, gt=0)
    """Box height in pixels. Required."""

    ellipsis: str = Field(default="...", min_length=1)
    """Marker drawn in place of clipped characters."""

    google_fonts: bool = False
    """Download the font family from Google Fonts when it is not installed locally."""

    @field_validator("fill_style")
    @classmethod
    def _check_fill_style(cls, value: str) -> str:
        ImageColor.getrgb(value)  # raises ValueError for unknown colors
        return value

    @property
    def line_height_coefficient(self) -> float:
        """Multiplier applied to a glyph's extent to get the advance after it."""
        return self.line_height / self.font_size

    @property
    def font_description(self) -> str:
        """CSS shorthand for the active font, e.g. '400 12px Helvetica'."""
        return f"{self.font_weight} {self.font_size:g}px {self.font_family}"

    @property
    def fill_rgb(self) -> RGBColor:
        """Fill color as an (r, g, b) tuple in 0-255 range."""
        return ImageColor.getrgb(self.fill_style)[:3]

    @property
    def center_x(self) -> float:
        """Horizontal center of the box."""
        return (self.width or 0) / 2


def build_options(
    options: TextVerticalOptions | Mapping[str, Any] | None = None, **overrides: Any
) -> TextVerticalOptions:
    """
    Build validated options from a model, a mapping, or keyword overrides.

    Args:
        options: Existing options or a mapping of option values.
        **overrides: Values that replace those in options.

    Returns:
        Validated TextVerticalOptions with width and height set.

    Raises:
        ConfigurationError: If a value is invalid or width/height is missing.
    """
    if isinstance(options, TextVerticalOptions):
        values = options.model_dump()
    else:
        values = dict(options or {})
    values.update({k: v for k, v in overrides.items() if v is not None})

    if values.get("width") is None:
        raise ConfigurationError("The width of TextVertical is required.")
    if values.get("height") is None:
        raise ConfigurationError("The height of TextVertical is required.")

    try:
        return TextVerticalOptions(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid TextVertical options: {e}") from e


def load_options(config_path: Path) -> dict[str, Any]:
    """
    Load option values from a TOML file.

    Values may sit at the top level or under a [text] table.

    Args:
        config_path: Path to the TOML file.

    Returns:
        Mapping of option values, not yet validated (see build_options).

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigurationError: If the file is not valid TOML.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            config_dict = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {config_path}: {e}") from e

    return dict(config_dict.get("text", config_dict))
