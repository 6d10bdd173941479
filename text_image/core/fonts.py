# -*- coding: utf-8 -*-
"""Font lookup with an in-memory cache keyed by (path, size)."""
from __future__ import annotations
import logging
import threading
from typing import Dict, Tuple, Union

from PIL import ImageFont

logger = logging.getLogger(__name__)

Font = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]

MIN_FONT_SIZE = 1

_font_cache: Dict[Tuple[str, int], Font] = {}
_lock = threading.Lock()


def load_font(path: str, size: float) -> Font:
    """Open the TrueType/OpenType font at ``path``.

    An unusable path falls back to Pillow's bundled font at the same size.
    """
    px = max(MIN_FONT_SIZE, int(round(size)))
    key = (path or "", px)
    with _lock:
        cached = _font_cache.get(key)
    if cached is not None:
        return cached
    try:
        font = ImageFont.truetype(path, px)
    except (OSError, ValueError) as exc:
        logger.warning("font %r unusable (%s), falling back to default font", path, exc)
        font = ImageFont.load_default(size=px)
    with _lock:
        _font_cache[key] = font
    return font
