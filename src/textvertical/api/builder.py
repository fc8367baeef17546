"""High-level API: measure, lay out, draw and export in one call."""

import logging
from collections.abc import Mapping
from typing import Any, Literal

from textvertical.api.models import RenderedText
from textvertical.config import TextVerticalOptions, build_options
from textvertical.errors import ConfigurationError
from textvertical.fonts import ResolvedFont, load_pillow_font, register_pdf_font, resolve_font
from textvertical.layout import LayoutPlan, layout
from textvertical.measure import GlyphMeasurer, HarfBuzzMeasurer
from textvertical.render import ImageSurface, PDFSurface, Surface
from textvertical.types import OutputFormat

logger = logging.getLogger(__name__)

Measurement = Literal["surface", "harfbuzz"]


def plan_vertical_text(text: str, measurer: GlyphMeasurer, options: TextVerticalOptions) -> LayoutPlan:
    """
    Measure text and lay it out vertically without drawing anything.

    Args:
        text: Text to lay out, one character per row.
        measurer: Measurer for the active font.
        options: Validated options (width and height set).

    Returns:
        LayoutPlan for the text.
    """
    glyphs = list(text)
    extents = measurer.measure_all(glyphs)
    ellipsis_extent = measurer.measure(options.ellipsis)

    return layout(
        glyphs,
        extents,
        ellipsis_extent,
        options.height,
        options.line_height_coefficient,
        center_x=options.center_x,
        ellipsis=options.ellipsis,
    )


def draw_plan(plan: LayoutPlan, surface: Surface) -> None:
    """Issue one draw call per placed element, in plan order."""
    for element in plan.elements:
        surface.draw(element.content, element.x, element.y)


def create_surface(options: TextVerticalOptions, output: OutputFormat, font: ResolvedFont) -> Surface:
    """
    Create the drawing surface for an output format.

    Args:
        options: Validated options.
        output: "png" or "pdf".
        font: Resolved font to draw with.

    Returns:
        Surface sized to the options' box.

    Raises:
        ConfigurationError: If the output format is unknown.
    """
    if output == "png":
        return ImageSurface(
            options.width, options.height, options.fill_rgb,
            font=load_pillow_font(font, options.font_size),
        )
    if output == "pdf":
        return PDFSurface(
            options.width, options.height, options.fill_rgb,
            font_name=register_pdf_font(font),
            point_size=options.font_size,
        )
    raise ConfigurationError(f"Unsupported output format '{output}'. Supported: png, pdf")


def create_measurer(measurement: Measurement, surface: Surface, font: ResolvedFont, size: float) -> GlyphMeasurer:
    """
    Pick the measurer for a render.

    "surface" measures with the surface's own font metrics. "harfbuzz" shapes
    the resolved font file, which needs a real file (not a built-in font) and
    must be the font the surface actually draws with.
    """
    if measurement == "surface":
        return surface.measurer
    if measurement == "harfbuzz":
        if font.is_builtin:
            raise ConfigurationError(
                f"HarfBuzz measurement needs a font file, but '{font.name}' is built in"
            )
        if isinstance(surface, PDFSurface) and surface.font_name != font.name:
            raise ConfigurationError(
                f"HarfBuzz measurement would measure {font.path.name} while the PDF "
                f"draws with '{surface.font_name}'"
            )
        return HarfBuzzMeasurer(font.path, size)
    raise ConfigurationError(f"Unsupported measurement '{measurement}'. Supported: surface, harfbuzz")


def render_vertical_text(
    text: str,
    options: TextVerticalOptions | Mapping[str, Any] | None = None,
    *,
    output: OutputFormat = "png",
    measurement: Measurement = "surface",
    measurer: GlyphMeasurer | None = None,
    **overrides: Any,
) -> RenderedText:
    """
    Render text top-to-bottom into a fixed-size box.

    Characters are vertically centered. If they do not fit, trailing
    characters are replaced by an ellipsis.

    Args:
        text: Text to render.
        options: Options model or mapping. width and height are required.
        output: "png" or "pdf".
        measurement: "surface" or "harfbuzz" (ignored if measurer is given).
        measurer: Custom measurer for glyph extents.
        **overrides: Option values that replace those in options.

    Returns:
        RenderedText with the encoded output and the layout plan.

    Raises:
        ConfigurationError: If options are missing or invalid.

    Example:
        ```python
        from textvertical import render_vertical_text

        result = render_vertical_text("竖排文字", width=40, height=120, font_size=16)
        html = f'<img src="{result.to_data_uri()}">'
        ```
    """
    opts = build_options(options, **overrides)

    font = resolve_font(opts.font_family, opts.font_weight, allow_google=opts.google_fonts)
    surface = create_surface(opts, output, font)
    measurer = measurer or create_measurer(measurement, surface, font, opts.font_size)

    plan = plan_vertical_text(text, measurer, opts)
    draw_plan(plan, surface)

    logger.debug(
        f"Rendered {len(plan.elements)} element(s) with {opts.font_description} "
        f"into {opts.width}x{opts.height} {output}"
    )
    return RenderedText(
        data=surface.export(),
        mime_type=surface.mime_type,
        plan=plan,
        width=opts.width,
        height=opts.height,
    )
