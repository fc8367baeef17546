"""Drawing surfaces that consume layout plans."""

from abc import ABC, abstractmethod

from textvertical.measure import GlyphMeasurer
from textvertical.types import RGBColor


class Surface(ABC):
    """
    A fixed-size drawing target.

    Text is drawn horizontally centered on x with its top edge at y, where y
    grows downwards from the top of the surface.
    """

    mime_type: str = "application/octet-stream"

    def __init__(self, width: int, height: int, fill: RGBColor) -> None:
        """
        Initialize surface.

        Args:
            width: Surface width.
            height: Surface height.
            fill: Text color as (r, g, b) in 0-255 range.
        """
        self.width = width
        self.height = height
        self.fill = fill

    @property
    @abstractmethod
    def measurer(self) -> GlyphMeasurer:
        """Measurer that uses the same font metrics this surface draws with."""

    @abstractmethod
    def draw(self, content: str, x: float, y: float) -> None:
        """
        Draw text centered on x with its top at y.

        Args:
            content: Character or ellipsis marker.
            x: Horizontal center.
            y: Top edge, measured down from the top of the surface.
        """

    @abstractmethod
    def export(self) -> bytes:
        """Encode everything drawn so far."""
