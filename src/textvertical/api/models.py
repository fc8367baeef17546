"""Result models for rendered vertical text."""

import base64
from dataclasses import dataclass
from pathlib import Path

from textvertical.layout import LayoutPlan


@dataclass(frozen=True)
class RenderedText:
    """
    Encoded output of one render, plus the plan it was drawn from.

    Attributes:
        data: Encoded image or document bytes.
        mime_type: MIME type of data (e.g., "image/png").
        plan: Layout plan that was drawn.
        width: Surface width.
        height: Surface height.
    """
    data: bytes
    mime_type: str
    plan: LayoutPlan
    width: int
    height: int

    @property
    def truncated(self) -> bool:
        return self.plan.truncated

    def to_data_uri(self) -> str:
        """Encode as a base64 data URI, ready for an <img src=...>."""
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"

    def save(self, output_path: Path) -> Path:
        """
        Write data to a file.

        Args:
            output_path: Destination path. Parent directories are created.

        Returns:
            The path written.
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(self.data)
        return output_path
