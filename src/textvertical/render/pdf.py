"""PDF surface using ReportLab."""

from io import BytesIO

from reportlab.lib.colors import Color
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from textvertical.measure import GlyphMeasurer, ReportLabMeasurer
from textvertical.render.base import Surface
from textvertical.types import RGBColor


class PDFSurface(Surface):
    """
    Single-page PDF sized to the text box, one point per pixel.

    PDF y grows upwards from the bottom and text is placed by its baseline,
    so draw() flips y and moves down by the font ascent.
    """

    mime_type = "application/pdf"

    def __init__(self, width: int, height: int, fill: RGBColor, font_name: str, point_size: float) -> None:
        """
        Initialize PDF surface.

        Args:
            width: Page width in points.
            height: Page height in points.
            fill: Text color as (r, g, b) in 0-255 range.
            font_name: Font name registered with ReportLab.
            point_size: Font size in points.
        """
        super().__init__(width, height, fill)
        self.font_name = font_name
        self.point_size = point_size
        self._buffer = BytesIO()
        self._canvas = canvas.Canvas(self._buffer, pagesize=(width, height))
        self._canvas.setFont(font_name, point_size)
        self._canvas.setFillColor(Color(*(channel / 255 for channel in fill)))
        self._ascent = pdfmetrics.getAscent(font_name, point_size)
        self._measurer = ReportLabMeasurer(font_name, point_size)

    @property
    def measurer(self) -> GlyphMeasurer:
        return self._measurer

    def draw(self, content: str, x: float, y: float) -> None:
        baseline = self.height - y - self._ascent
        self._canvas.drawCentredString(x, baseline, content)

    def export(self) -> bytes:
        self._canvas.showPage()
        self._canvas.save()
        return self._buffer.getvalue()
