"""Image surface using Pillow."""

from io import BytesIO

from PIL import Image, ImageDraw, ImageFont

from textvertical.measure import GlyphMeasurer, PillowMeasurer
from textvertical.render.base import Surface
from textvertical.types import RGBColor


class ImageSurface(Surface):
    """Transparent RGBA image that text is drawn onto."""

    mime_type = "image/png"

    def __init__(
        self,
        width: int,
        height: int,
        fill: RGBColor,
        font: ImageFont.FreeTypeFont,
    ) -> None:
        """
        Initialize image surface.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.
            fill: Text color as (r, g, b) in 0-255 range.
            font: Pillow font to draw (and measure) with.
        """
        super().__init__(width, height, fill)
        self.font = font
        self.image = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        self._draw = ImageDraw.Draw(self.image)
        self._measurer = PillowMeasurer(font)

    @property
    def measurer(self) -> GlyphMeasurer:
        return self._measurer

    def draw(self, content: str, x: float, y: float) -> None:
        # "mt": middle of the advance horizontally, ascender line vertically
        self._draw.text((x, y), content, font=self.font, fill=self.fill, anchor="mt")

    def export(self) -> bytes:
        return save_image_to_bytes(self.image, format="PNG")


def save_image_to_bytes(img: Image.Image, format: str = "PNG") -> bytes:
    """
    Save PIL Image to bytes.

    Args:
        img: PIL Image object.
        format: Image format (PNG, WEBP, etc.).

    Returns:
        Image as bytes.
    """
    buffer = BytesIO()
    img.save(buffer, format=format)
    return buffer.getvalue()
