"""Glyph measurement backends."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Mapping

import uharfbuzz as hb
from PIL import ImageFont
from reportlab.pdfbase import pdfmetrics

logger = logging.getLogger(__name__)


class GlyphMeasurer(ABC):
    """Measures the rendered width of text under one font description."""

    @abstractmethod
    def measure(self, text: str) -> float:
        """
        Measure the advance width of text.

        Args:
            text: A single character or the ellipsis marker.

        Returns:
            Non-negative width in pixels (points for PDF output).
        """

    def measure_all(self, characters: Iterable[str]) -> list[float]:
        return [self.measure(character) for character in characters]


class PillowMeasurer(GlyphMeasurer):
    """Measures with a Pillow font, the same font the image surface draws with."""

    def __init__(self, font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> None:
        self.font = font

    def measure(self, text: str) -> float:
        return float(self.font.getlength(text))


class ReportLabMeasurer(GlyphMeasurer):
    """Measures with ReportLab font metrics, for PDF output."""

    def __init__(self, font_name: str, point_size: float) -> None:
        self.font_name = font_name
        self.point_size = point_size

    def measure(self, text: str) -> float:
        return pdfmetrics.stringWidth(text, self.font_name, self.point_size)


class HarfBuzzMeasurer(GlyphMeasurer):
    """
    Measures shaped advances with HarfBuzz.

    Each call shapes the text on its own with kerning and ligatures off, so
    the result is the plain advance of the glyphs in the font file.
    """

    FEATURES = {"kern": False, "liga": False}

    def __init__(self, font_path: Path, size: float) -> None:
        self.font_path = font_path
        self.size = size

        with open(font_path, "rb") as f:
            fontdata = f.read()

        self._face = hb.Face(fontdata)
        self._font = hb.Font(self._face)
        # Default scale is upem, so advances come back in font units
        self._units_to_pixels = size / self._face.upem

    def measure(self, text: str) -> float:
        buf = hb.Buffer()
        buf.add_str(text)
        buf.guess_segment_properties()
        hb.shape(self._font, buf, self.FEATURES)

        advance = sum(pos.x_advance for pos in buf.glyph_positions)
        return advance * self._units_to_pixels


class FixedMeasurer(GlyphMeasurer):
    """
    Table-driven measurer for callers that already know their extents.

    Args:
        widths: Width per text (a character or the ellipsis marker).
        default: Width for anything not in the table.
    """

    def __init__(self, widths: Mapping[str, float] | None = None, default: float = 0.0) -> None:
        self.widths = dict(widths or {})
        self.default = default

    def measure(self, text: str) -> float:
        return self.widths.get(text, self.default)
