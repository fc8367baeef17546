"""Vertical text layout with ellipsis truncation."""

__version__ = "0.1.0"

# High-level Python API
from textvertical.api import RenderedText, plan_vertical_text, render_vertical_text
from textvertical.config import TextVerticalOptions, build_options, load_options
from textvertical.errors import ConfigurationError, LayoutInvariantError, TextVerticalError
from textvertical.layout import ElementKind, LayoutPlan, PlacedElement, layout

__all__ = [
    "ConfigurationError",
    "ElementKind",
    "LayoutInvariantError",
    "LayoutPlan",
    "PlacedElement",
    "RenderedText",
    "TextVerticalError",
    "TextVerticalOptions",
    "build_options",
    "layout",
    "load_options",
    "plan_vertical_text",
    "render_vertical_text",
]
