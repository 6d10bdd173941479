# -*- coding: utf-8 -*-
"""Canvas ownership and creation.

- Canvas: an RGBA Pillow image owned by one render call, with the
  blending / alpha-saving flags the drawing steps respect
- open_image: decode a file by extension (``.png`` -> PNG, otherwise JPEG)
- create_from_file / create_empty: the two background strategies
"""
from __future__ import annotations
import logging
import os
from typing import Optional, Tuple

from PIL import Image, ImageDraw

from .color import RGBA, allocate
from .errors import AllocationError, DecodeError
from .models import Border, Color

logger = logging.getLogger(__name__)

TRANSPARENT_ALPHA = 127

# Pillow raises these for missing, truncated or mis-typed files
_DECODE_ERRORS = (OSError, ValueError, SyntaxError, Image.DecompressionBombError)


class Canvas:
    """Mutable RGBA surface.

    ``alpha_blending`` decides whether draws are alpha-composited over the
    existing pixels or written verbatim; ``save_alpha`` decides whether the
    encoder keeps the alpha channel.
    """

    def __init__(self, image: Image.Image, *, alpha_blending: bool = True, save_alpha: bool = False):
        if image.mode != "RGBA":
            converted = image.convert("RGBA")
            image.close()
            image = converted
        self._image: Optional[Image.Image] = image
        self.alpha_blending = alpha_blending
        self.save_alpha = save_alpha

    @property
    def image(self) -> Image.Image:
        if self._image is None:
            raise AllocationError("canvas has been released")
        return self._image

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def released(self) -> bool:
        return self._image is None

    def new_layer(self) -> Image.Image:
        """Fully transparent layer the size of the canvas."""
        return Image.new("RGBA", self.size, (0, 0, 0, 0))

    def composite(self, layer: Image.Image) -> None:
        """Merge a canvas-sized RGBA layer onto the canvas."""
        if layer.size != self.size:
            raise ValueError(f"layer size {layer.size} != canvas size {self.size}")
        if self.alpha_blending:
            merged = Image.alpha_composite(self.image, layer)
            self._image.close()
            self._image = merged
        else:
            # every touched pixel takes the layer value, alpha included
            mask = layer.getchannel("A").point(lambda v: 255 if v else 0)
            self.image.paste(layer, (0, 0), mask)

    def fill_rectangle(self, box: Tuple[int, int, int, int], color: RGBA) -> None:
        """Fill the inclusive box ``(x0, y0, x1, y1)``; spans <= 0 draw nothing."""
        x0, y0, x1, y1 = box
        if x1 <= x0 or y1 <= y0:
            return
        if self.alpha_blending and color[3] < 255:
            layer = self.new_layer()
            ImageDraw.Draw(layer).rectangle(box, fill=color)
            self.composite(layer)
        else:
            ImageDraw.Draw(self.image).rectangle(box, fill=color)

    def release(self) -> None:
        if self._image is not None:
            self._image.close()
            self._image = None

    def __enter__(self) -> "Canvas":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        if self._image is None:
            return "<Canvas released>"
        return f"<Canvas {self.width}x{self.height} blending={self.alpha_blending} save_alpha={self.save_alpha}>"


def codec_for_path(path: str) -> str:
    """Pillow format name chosen from the extension only."""
    return "PNG" if os.path.splitext(path)[1].lower() == ".png" else "JPEG"


def _decode(path: str) -> Tuple[Image.Image, bool]:
    codec = codec_for_path(path)
    try:
        with Image.open(path, formats=[codec]) as img:
            img.load()
            has_alpha = "A" in img.getbands() or "transparency" in img.info
            if img.mode.startswith("I"):
                # 16-bit gray: keep the high byte
                with img.convert("I") as wide:
                    with wide.point(lambda v: v * (1 / 256)) as scaled:
                        return scaled.convert("L").convert("RGBA"), has_alpha
            return img.convert("RGBA"), has_alpha
    except _DECODE_ERRORS as exc:
        raise DecodeError(f"cannot decode {path!r} as {codec}: {exc}") from exc


def open_image(path: str) -> Image.Image:
    """Decode ``path`` into a detached RGBA image; the file is closed on return."""
    return _decode(path)[0]


def create_from_file(path: str) -> Canvas:
    img, has_alpha = _decode(path)
    logger.debug("loaded background %s (%dx%d)", path, img.width, img.height)
    # the source's own alpha survives encoding
    return Canvas(img, alpha_blending=True, save_alpha=has_alpha)


def _new_image(width: int, height: int) -> Image.Image:
    if width <= 0 or height <= 0:
        raise AllocationError(f"canvas size must be positive, got {width}x{height}")
    try:
        return Image.new("RGBA", (int(width), int(height)), (0, 0, 0, 255))
    except (MemoryError, ValueError) as exc:
        raise AllocationError(f"cannot allocate {width}x{height} canvas: {exc}") from exc


def create_empty(
    width: int,
    height: int,
    border: Border,
    background_color: Color,
    border_color: Color,
    transparent: bool,
) -> Canvas:
    canvas = Canvas(_new_image(width, height))
    try:
        if transparent:
            canvas.alpha_blending = False
            clear = allocate(canvas, Color(0, 0, 0), TRANSPARENT_ALPHA)
            canvas.fill_rectangle((0, 0, width, height), clear)
            canvas.save_alpha = True
        else:
            back = allocate(canvas, background_color)
            bord = allocate(canvas, border_color)
            canvas.fill_rectangle((0, 0, width, height), bord)
            canvas.fill_rectangle(
                (border.left, border.top, width - border.right, height - border.bottom),
                back,
            )
    except BaseException:
        canvas.release()
        raise
    logger.debug("created %s canvas %dx%d", "transparent" if transparent else "filled", width, height)
    return canvas
