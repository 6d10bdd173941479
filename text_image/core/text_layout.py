# -*- coding: utf-8 -*-
"""Caption lines drawn top to bottom.

Each line is drawn with its baseline at ``offset.top``; the offset then
moves down by ``line_height``. In strip mode only the first line is drawn.
Line breaking is left to the caller.
"""
from __future__ import annotations
from typing import List, Sequence

from PIL import ImageDraw

from .canvas import Canvas
from .color import allocate
from .fonts import load_font
from .models import Color, TextOffset


def line_positions(start_offset: TextOffset, line_height: int, count: int, strip: bool) -> List[TextOffset]:
    """Draw positions for ``count`` lines."""
    if count <= 0:
        return []
    if strip:
        return [TextOffset(*start_offset)]
    return [TextOffset(start_offset.left, start_offset.top + i * line_height) for i in range(count)]


def draw_lines(
    canvas: Canvas,
    lines: Sequence[str],
    font_path: str,
    font_size: float,
    text_color: Color,
    start_offset: TextOffset,
    line_height: int,
    strip: bool = False,
) -> Canvas:
    if not lines:
        return canvas
    fill = allocate(canvas, text_color)
    font = load_font(font_path, font_size)
    layer = canvas.new_layer()
    d = ImageDraw.Draw(layer)
    for line, offset in zip(lines, line_positions(start_offset, line_height, len(lines), strip)):
        d.text((offset.left, offset.top), line, font=font, fill=fill, anchor="ls")
    canvas.composite(layer)
    return canvas
