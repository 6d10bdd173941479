# -*- coding: utf-8 -*-
"""Compose labeled images: background, caption lines, watermarks."""
import logging

from .core.errors import AllocationError, DecodeError, EncodeError, RenameError, RenderError
from .core.models import (
    Border,
    Color,
    EncoderSettings,
    ImageFormat,
    RenderedImage,
    RenderSpec,
    TextOffset,
)
from .core.renderer import render

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AllocationError",
    "Border",
    "Color",
    "DecodeError",
    "EncodeError",
    "EncoderSettings",
    "ImageFormat",
    "RenameError",
    "RenderError",
    "RenderSpec",
    "RenderedImage",
    "TextOffset",
    "render",
]
