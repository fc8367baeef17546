#!/usr/bin/env python3
"""
Simple Example: Vertical Labels

Renders a short label that fits and a long one that gets an ellipsis,
then writes both as PNG files.
"""

from pathlib import Path

from textvertical import TextVerticalOptions, render_vertical_text

options = TextVerticalOptions(
    width=32,
    height=140,
    font_family="'Noto Sans SC', 'DejaVu Sans', sans-serif",
    font_size=16,
    line_height=18,
    fill_style="#333",
)

for name, text in [("short", "竖排文字"), ("long", "这是一段放不下的很长的竖排文字")]:
    result = render_vertical_text(text, options)
    output = result.save(Path(f"{name}.png"))
    state = "truncated" if result.truncated else "fits"
    print(f"✓ {text!r} ({state}, {result.plan.end_index} characters drawn) saved to: {output}")
