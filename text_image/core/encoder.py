# -*- coding: utf-8 -*-
"""Encode a canvas into a temp file named ``<tmp>.<format>``.

- PNG / GIF keep alpha when the canvas saves alpha, otherwise flatten to RGB
- JPEG is always written as RGB with ``EncoderSettings.jpeg_quality``
- the canvas is released whatever happens
"""
from __future__ import annotations
import logging
import os
import tempfile
from typing import Optional, Union

from PIL import Image

from .canvas import Canvas
from .errors import EncodeError, RenameError
from .models import EncoderSettings, ImageFormat, RenderedImage

logger = logging.getLogger(__name__)


def _prepare(canvas: Canvas, fmt: ImageFormat) -> Image.Image:
    if fmt is ImageFormat.JPG or not canvas.save_alpha:
        return canvas.image.convert("RGB")
    return canvas.image


def _save_options(fmt: ImageFormat, settings: EncoderSettings) -> dict:
    opts = dict(settings.extra_save_options)
    if fmt is ImageFormat.JPG:
        opts.setdefault("quality", int(max(1, min(95, settings.jpeg_quality))))
    return opts


def _discard(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass


def encode(
    canvas: Canvas,
    format: Union[ImageFormat, str, None],
    settings: Optional[EncoderSettings] = None,
) -> RenderedImage:
    settings = settings or EncoderSettings()
    fmt = ImageFormat.parse(format)
    try:
        out = _prepare(canvas, fmt)
        try:
            fd, tmp_path = tempfile.mkstemp(dir=settings.temp_dir)
        except OSError as exc:
            raise EncodeError(f"cannot create temp file: {exc}") from exc
        try:
            with os.fdopen(fd, "wb") as fh:
                out.save(fh, format=fmt.pil_format, **_save_options(fmt, settings))
        except Exception as exc:
            _discard(tmp_path)
            raise EncodeError(f"cannot encode canvas as {fmt.value}: {exc}") from exc
        finally:
            if out is not canvas.image:
                out.close()
    finally:
        canvas.release()

    target = f"{tmp_path}.{fmt.value}"
    try:
        os.rename(tmp_path, target)
    except OSError as exc:
        if settings.strict_rename:
            _discard(tmp_path)
            raise RenameError(f"cannot rename {tmp_path} to {target}: {exc}") from exc
        logger.warning("keeping %s without .%s suffix: %s", tmp_path, fmt.value, exc)
        return RenderedImage(tmp_path, fmt, renamed=False)
    logger.debug("encoded %s", target)
    return RenderedImage(target, fmt)
