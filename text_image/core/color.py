# -*- coding: utf-8 -*-
"""Color allocation against a canvas.

Alpha is expressed in alpha units: 0 is opaque, 127 fully transparent.
Pillow works with 0..255 where 255 is opaque, so the conversion happens
here and nowhere else.
"""
from __future__ import annotations
import math
from typing import TYPE_CHECKING, Tuple

from .errors import AllocationError
from .models import Color

if TYPE_CHECKING:
    from .canvas import Canvas

RGBA = Tuple[int, int, int, int]

MAX_ALPHA = 127


def opacity_to_alpha(opacity: float) -> int:
    """Map opacity in [0, 1] (1 = opaque) to alpha units (0 = opaque).

    Halves round towards transparency: 0.5 -> 64.
    """
    opacity = max(0.0, min(1.0, float(opacity)))
    return int(math.floor((1.0 - opacity) * MAX_ALPHA + 0.5))


def alpha_to_pil(alpha: int) -> int:
    if not 0 <= alpha <= MAX_ALPHA:
        raise AllocationError(f"alpha must be within 0..{MAX_ALPHA}, got {alpha}")
    return int(round(255 * (MAX_ALPHA - alpha) / MAX_ALPHA))


def allocate(canvas: "Canvas", color: Color, opacity: int = 0) -> RGBA:
    """Resolve ``color`` with ``opacity`` alpha units into a fill value for ``canvas``."""
    if canvas.released:
        raise AllocationError("cannot allocate a color on a released canvas")
    for channel in color.rgb:
        if not 0 <= channel <= 255:
            raise AllocationError(f"color channel out of range: {color}")
    return color.red, color.green, color.blue, alpha_to_pil(opacity)
