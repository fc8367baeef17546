"""Type aliases used across the textvertical package."""

from typing import Literal, Tuple

# RGB color in 0-255 range
RGBColor = Tuple[int, int, int]

# Output formats
OutputFormat = Literal["png", "pdf"]
