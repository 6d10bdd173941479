# -*- coding: utf-8 -*-
"""Render a ``RenderSpec`` into an encoded image file.

Order: background -> caption lines -> image watermark -> text watermark
-> encode. Any failure releases the canvas and propagates unchanged.
"""
from __future__ import annotations
import logging
from typing import Optional

from .canvas import Canvas, create_empty, create_from_file
from .encoder import encode
from .models import EncoderSettings, RenderedImage, RenderSpec
from .text_layout import draw_lines
from .watermark import apply_image_watermark, apply_text_watermark

logger = logging.getLogger(__name__)


def create_canvas(spec: RenderSpec) -> Canvas:
    if spec.has_background_image:
        return create_from_file(spec.background_image_path)
    return create_empty(
        spec.full_width,
        spec.full_height,
        spec.border,
        spec.background_color,
        spec.border_color,
        spec.transparent_background,
    )


def render(spec: RenderSpec, settings: Optional[EncoderSettings] = None) -> RenderedImage:
    canvas = create_canvas(spec)
    with canvas:
        draw_lines(
            canvas,
            spec.lines,
            spec.font_path,
            spec.font_size,
            spec.text_color,
            spec.text_offset,
            spec.line_height,
            spec.strip_text,
        )
        if spec.has_watermark_image:
            apply_image_watermark(canvas, spec.watermark_image_path)
        if spec.has_watermark_text:
            apply_text_watermark(
                canvas,
                spec.watermark_text,
                spec.font_path,
                spec.font_size,
                spec.watermark_text_angle,
                spec.text_color,
                spec.watermark_text_opacity,
            )
        result = encode(canvas, spec.format, settings)
    logger.info("rendered %s (%s)", result.file_path, result.format.value)
    return result
