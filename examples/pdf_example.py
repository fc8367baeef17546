#!/usr/bin/env python3
"""
PDF Example: Spine Label with a Google Font

Downloads the font on first use (cached afterwards) and renders a bold
spine label to a one-page PDF.
"""

from pathlib import Path

from textvertical import render_vertical_text

result = render_vertical_text(
    "SIDE A",
    width=36,
    height=100,
    font_family="Orbitron",
    font_weight=700,
    font_size=14,
    line_height=16,
    google_fonts=True,
    output="pdf",
)

result.save(Path("spine.pdf"))
print("✓ Spine label saved to: spine.pdf")
