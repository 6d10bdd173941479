# -*- coding: utf-8 -*-
"""Image and text watermarks.

- Image watermark: decoded by extension, centered with
  ``|W - w| // 2, |H - h| // 2`` (not clamped), alpha-over composited
- Text watermark: drawn three times on one row (center, left, right) so a
  single text spreads across the canvas width
"""
from __future__ import annotations
import logging
from typing import List, Tuple

from PIL import Image, ImageDraw

from .canvas import Canvas, open_image
from .color import RGBA, MAX_ALPHA, allocate, opacity_to_alpha
from .errors import AllocationError
from .fonts import Font, load_font
from .models import Color

logger = logging.getLogger(__name__)


def image_watermark_offset(canvas_size: Tuple[int, int], watermark_size: Tuple[int, int]) -> Tuple[int, int]:
    W, H = canvas_size
    w, h = watermark_size
    return abs(W - w) // 2, abs(H - h) // 2


def _fade(img: Image.Image, opacity_alpha: int) -> Image.Image:
    factor = (MAX_ALPHA - opacity_alpha) / MAX_ALPHA
    r, g, b, a = img.split()
    a = a.point(lambda v: int(v * factor))
    return Image.merge("RGBA", (r, g, b, a))


def apply_image_watermark(canvas: Canvas, path: str, opacity_alpha: int = 0) -> Canvas:
    """Composite the image at ``path`` onto the center of ``canvas``.

    ``opacity_alpha`` (alpha units) additionally fades the watermark; its
    own alpha channel still governs per-pixel blending.
    """
    if not 0 <= opacity_alpha <= MAX_ALPHA:
        raise AllocationError(f"opacity_alpha must be within 0..{MAX_ALPHA}, got {opacity_alpha}")
    wm = open_image(path)
    try:
        if opacity_alpha:
            faded = _fade(wm, opacity_alpha)
            wm.close()
            wm = faded
        dx, dy = image_watermark_offset(canvas.size, wm.size)
        logger.debug("image watermark %s %dx%d at (%d, %d)", path, wm.width, wm.height, dx, dy)
        layer = canvas.new_layer()
        layer.paste(wm, (dx, dy))
        canvas.composite(layer)
    finally:
        wm.close()
    return canvas


def render_text(font: Font, text: str, fill: RGBA, angle: float = 0.0) -> Image.Image:
    """Text on a tight transparent image, rotated counter-clockwise by ``angle`` degrees."""
    left, top, right, bottom = font.getbbox(text)
    w, h = max(1, right - left), max(1, bottom - top)
    img = Image.new("RGBA", (w, h), (0, 0, 0, 0))
    ImageDraw.Draw(img).text((-left, -top), text, font=font, fill=fill)
    if angle % 360:
        rotated = img.rotate(angle, resample=Image.BICUBIC, expand=True)
        img.close()
        img = rotated
    return img


def measure_text(font: Font, text: str, angle: float = 0.0) -> Tuple[int, int]:
    """Width and height of the bounding box of ``text`` drawn at ``angle``."""
    with render_text(font, text, (0, 0, 0, 255), angle) as img:
        return img.size


def text_watermark_positions(canvas_size: Tuple[int, int], text_size: Tuple[int, int]) -> List[Tuple[int, int]]:
    """Top-left corners for the center, left and right copies."""
    W, H = canvas_size
    tw, th = text_size
    y = (H - th) // 2
    return [(abs(W - tw) // 2, y), (0, y), (abs(W - tw), y)]


def apply_text_watermark(
    canvas: Canvas,
    text: str,
    font_path: str,
    font_size: float,
    angle: float,
    text_color: Color,
    opacity: float,
) -> Canvas:
    alpha = opacity_to_alpha(opacity)
    fill = allocate(canvas, text_color, alpha)
    font = load_font(font_path, font_size)
    text_img = render_text(font, text, fill, angle)
    try:
        positions = text_watermark_positions(canvas.size, text_img.size)
        logger.debug("text watermark %r %s alpha=%d size=%s at %s", text, text_color.to_hex(), alpha, text_img.size, positions)
        for pos in positions:
            layer = canvas.new_layer()
            layer.paste(text_img, pos)
            canvas.composite(layer)
    finally:
        text_img.close()
    return canvas
