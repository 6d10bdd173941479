# -*- coding: utf-8 -*-
"""Shared fixtures for the test modules."""
import os

from PIL import Image

FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/Library/Fonts/Arial.ttf",
    "/System/Library/Fonts/Supplemental/Arial.ttf",
    "C:/Windows/Fonts/arial.ttf",
]


def find_font() -> str:
    """A system font when one exists; an empty path makes the renderer use Pillow's default."""
    for p in FONT_CANDIDATES:
        if os.path.isfile(p):
            return p
    return ""


def write_image(path, size, color, fmt=None, mode="RGBA"):
    img = Image.new(mode, size, color)
    img.save(path, format=fmt)
    img.close()
    return path


def count_pixels_not(img, color):
    """Number of pixels differing from ``color``."""
    total = img.width * img.height
    matching = sum(n for n, c in img.getcolors(total) if c == color)
    return total - matching
