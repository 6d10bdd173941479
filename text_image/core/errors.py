# -*- coding: utf-8 -*-
"""Exceptions raised while rendering a text image."""
from __future__ import annotations


class RenderError(Exception):
    """Base class for every render failure."""


class DecodeError(RenderError):
    """A background or watermark file is missing, unreadable or not of the expected codec."""


class AllocationError(RenderError):
    """A canvas or color could not be allocated."""


class EncodeError(RenderError):
    """The output codec failed to write the canvas."""


class RenameError(RenderError):
    """The encoded file could not be renamed to carry its format suffix."""
