"""High-level Python API."""

from textvertical.api.builder import (
    create_measurer,
    create_surface,
    draw_plan,
    plan_vertical_text,
    render_vertical_text,
)
from textvertical.api.models import RenderedText

__all__ = [
    "RenderedText",
    "create_measurer",
    "create_surface",
    "draw_plan",
    "plan_vertical_text",
    "render_vertical_text",
]
