"""Vertical layout: place glyphs top-to-bottom and truncate with an ellipsis."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from itertools import accumulate
from typing import Sequence

from textvertical.errors import LayoutInvariantError

logger = logging.getLogger(__name__)


class ElementKind(str, Enum):
    """What a placed element draws."""

    CHARACTER = "character"
    ELLIPSIS = "ellipsis"


@dataclass(frozen=True)
class PlacedElement:
    """
    One draw call of a layout plan.

    Attributes:
        kind: Character or ellipsis.
        content: Text to draw (a single character, or the ellipsis marker).
        x: Horizontal center of the glyph.
        y: Top edge of the glyph, measured downwards from the top of the box.
    """
    kind: ElementKind
    content: str
    x: float
    y: float


@dataclass(frozen=True)
class LayoutPlan:
    """
    Result of laying out a string vertically inside a box.

    Attributes:
        elements: Elements in draw order. Zero or more characters, then at most one ellipsis.
        content_height: Total vertical extent of what is drawn.
        truncated: True if an ellipsis replaced trailing characters.
        start_y: Top of the first element (the centering offset).
        end_index: Number of source characters that are drawn.
    """
    elements: tuple[PlacedElement, ...]
    content_height: float
    truncated: bool
    start_y: float
    end_index: int

    @property
    def characters(self) -> str:
        """Drawn characters, without the ellipsis."""
        return "".join(
            element.content for element in self.elements
            if element.kind is ElementKind.CHARACTER
        )

    def to_dict(self) -> dict:
        """Plain-data form of the plan (used by the CLI for JSON output)."""
        return {
            "content_height": self.content_height,
            "truncated": self.truncated,
            "start_y": self.start_y,
            "end_index": self.end_index,
            "elements": [
                {"kind": e.kind.value, "content": e.content, "x": e.x, "y": e.y}
                for e in self.elements
            ],
        }


def accumulate_height(extents: Sequence[float], coefficient: float) -> float:
    """
    Calculate the total height of a glyph column without truncation.

    Every glyph but the last advances by its extent scaled by the line-height
    coefficient. The last glyph contributes only its own extent.

    Formula: Σ(extent[i] × coefficient for i < last) + extent[last]

    Args:
        extents: Measured glyph extents, in order.
        coefficient: line_height / font_size.

    Returns:
        Total height. 0.0 for an empty sequence.
    """
    if not extents:
        return 0.0

    total = 0.0
    for extent in extents[:-1]:
        total += extent * coefficient
    return total + extents[-1]


def running_offsets(extents: Sequence[float], coefficient: float, start: float = 0.0) -> list[float]:
    """
    Cursor positions before each glyph, starting from ``start``.

    ``offsets[i]`` is how far the cursor has advanced before glyph ``i`` is
    considered. The result has ``len(extents) + 1`` items; the last one is the
    position after the final scaled advance.
    """
    return list(accumulate((extent * coefficient for extent in extents), initial=start))


def find_truncation_boundary(
    extents: Sequence[float],
    coefficient: float,
    ellipsis_extent: float,
    box_height: float,
) -> int | None:
    """
    Find the first glyph that can no longer be drawn before the ellipsis.

    The boundary is the first index ``k`` where the cursor before ``k`` plus
    glyph ``k`` plus the ellipsis, rounded up, exceeds the box height.

    Args:
        extents: Measured glyph extents.
        coefficient: line_height / font_size.
        ellipsis_extent: Measured extent of the ellipsis marker.
        box_height: Available height.

    Returns:
        The boundary index, or None if every glyph fits alongside the ellipsis.
    """
    offsets = running_offsets(extents, coefficient)
    return next(
        (
            index for index, (before, extent) in enumerate(zip(offsets, extents))
            if math.ceil(before + extent + ellipsis_extent) > box_height
        ),
        None,
    )


def _place_full(
    glyphs: Sequence[str],
    extents: Sequence[float],
    box_height: float,
    coefficient: float,
    center_x: float,
) -> LayoutPlan:
    height_total = accumulate_height(extents, coefficient)
    start_y = (box_height - height_total) / 2
    offsets = running_offsets(extents, coefficient, start=start_y)

    elements = tuple(
        PlacedElement(ElementKind.CHARACTER, glyph, center_x, y)
        for glyph, y in zip(glyphs, offsets)
    )
    return LayoutPlan(
        elements=elements,
        content_height=height_total,
        truncated=False,
        start_y=start_y,
        end_index=len(glyphs),
    )


def _place_truncated(
    glyphs: Sequence[str],
    extents: Sequence[float],
    ellipsis: str,
    ellipsis_extent: float,
    box_height: float,
    coefficient: float,
    center_x: float,
) -> LayoutPlan:
    end_index = find_truncation_boundary(extents, coefficient, ellipsis_extent, box_height)
    if end_index is None:
        # The last glyph plus a non-negative ellipsis always overflows once the
        # untruncated column does, so this only happens on bad input.
        raise LayoutInvariantError(
            "Text overflows the box but no truncation boundary was found"
        )

    if end_index == 0:
        draw_height_total = math.ceil(ellipsis_extent)
    else:
        before = running_offsets(extents[:end_index], coefficient)[-1]
        # The ellipsis abuts the last drawn character, so the scaled gap baked
        # into the running total is removed.
        space = extents[end_index] * coefficient - extents[end_index]
        draw_height_total = math.ceil(before + ellipsis_extent - space)

    start_y = (box_height - draw_height_total) / 2

    elements: list[PlacedElement] = []
    ellipsis_y = start_y
    if end_index > 0:
        # No trailing advance after the last drawn character
        offsets = running_offsets(extents[:end_index - 1], coefficient, start=start_y)
        elements.extend(
            PlacedElement(ElementKind.CHARACTER, glyph, center_x, y)
            for glyph, y in zip(glyphs[:end_index], offsets)
        )
        ellipsis_y = offsets[-1] + extents[end_index - 1]

    elements.append(PlacedElement(ElementKind.ELLIPSIS, ellipsis, center_x, ellipsis_y))

    return LayoutPlan(
        elements=tuple(elements),
        content_height=draw_height_total,
        truncated=True,
        start_y=start_y,
        end_index=end_index,
    )


def layout(
    glyphs: Sequence[str],
    extents: Sequence[float],
    ellipsis_extent: float,
    box_height: float,
    line_height_coefficient: float,
    *,
    center_x: float = 0.0,
    ellipsis: str = "...",
) -> LayoutPlan:
    """
    Lay out glyphs top-to-bottom, vertically centered in a box.

    If the full column fits, every glyph is placed. Otherwise the column is
    cut at the first glyph that no longer fits alongside the ellipsis, and the
    ellipsis is drawn directly below the last kept glyph.

    Args:
        glyphs: Characters in source order.
        extents: Measured extent of each glyph (same length as glyphs).
        ellipsis_extent: Measured extent of the ellipsis marker.
        box_height: Available height.
        line_height_coefficient: line_height / font_size, applied to the gap after each glyph.
        center_x: Horizontal center shared by every element.
        ellipsis: Ellipsis marker text.

    Returns:
        LayoutPlan with the placed elements.

    Raises:
        LayoutInvariantError: If lengths differ or a dimension is not positive.
    """
    if len(glyphs) != len(extents):
        raise LayoutInvariantError(
            f"Got {len(glyphs)} glyphs but {len(extents)} extents"
        )
    if box_height <= 0:
        raise LayoutInvariantError(f"box_height must be positive, got {box_height}")
    if line_height_coefficient <= 0:
        raise LayoutInvariantError(
            f"line_height_coefficient must be positive, got {line_height_coefficient}"
        )
    if ellipsis_extent < 0 or any(extent < 0 for extent in extents):
        raise LayoutInvariantError("Glyph extents must be non-negative")

    height_total = accumulate_height(extents, line_height_coefficient)

    if height_total <= box_height:
        plan = _place_full(glyphs, extents, box_height, line_height_coefficient, center_x)
    else:
        plan = _place_truncated(
            glyphs, extents, ellipsis, ellipsis_extent,
            box_height, line_height_coefficient, center_x,
        )

    logger.debug(
        f"Laid out {len(glyphs)} glyph(s) in {box_height}: "
        f"drew {plan.end_index}, truncated={plan.truncated}, height={plan.content_height}"
    )
    return plan
