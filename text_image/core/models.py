# -*- coding: utf-8 -*-
"""Value objects describing a text image and its rendered output.

- Color / Border / TextOffset: small immutable building blocks
- ImageFormat: output codec tag, unknown values fall back to PNG
- RenderSpec: the declarative description consumed by ``render``
- RenderedImage: handle to the encoded file on disk
- EncoderSettings: encoder configuration
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class Color:
    red: int
    green: int
    blue: int

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse ``#RRGGBB`` (leading ``#`` optional)."""
        s = value.strip().lstrip("#")
        if len(s) != 6:
            raise ValueError(f"not a #RRGGBB color: {value!r}")
        return cls(int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))

    def to_hex(self) -> str:
        return f"#{self.red:02X}{self.green:02X}{self.blue:02X}"

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return self.red, self.green, self.blue


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)


class Border(NamedTuple):
    left: int = 0
    top: int = 0
    right: int = 0
    bottom: int = 0


class TextOffset(NamedTuple):
    left: int = 0
    top: int = 0

    def advanced(self, dy: int) -> "TextOffset":
        return TextOffset(self.left, self.top + dy)


class ImageFormat(str, Enum):
    PNG = "png"
    JPG = "jpg"
    GIF = "gif"

    @classmethod
    def parse(cls, value: Union["ImageFormat", str, None]) -> "ImageFormat":
        if isinstance(value, ImageFormat):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.PNG

    @property
    def pil_format(self) -> str:
        return {"png": "PNG", "jpg": "JPEG", "gif": "GIF"}[self.value]


@dataclass(frozen=True)
class RenderSpec:
    full_width: int = 200
    full_height: int = 100
    background_image_path: Optional[str] = None
    border: Border = Border()
    background_color: Color = WHITE
    border_color: Color = BLACK
    transparent_background: bool = False
    lines: Sequence[str] = ()
    strip_text: bool = False
    text_offset: TextOffset = TextOffset(10, 20)
    line_height: int = 20
    font_path: str = ""
    font_size: float = 12
    text_color: Color = BLACK
    watermark_image_path: Optional[str] = None
    watermark_text: Optional[str] = None
    watermark_text_angle: float = 0.0
    watermark_text_opacity: float = 1.0
    format: ImageFormat = ImageFormat.PNG

    def __post_init__(self):
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "lines", tuple(self.lines))
        object.__setattr__(self, "border", Border(*self.border))
        object.__setattr__(self, "text_offset", TextOffset(*self.text_offset))
        object.__setattr__(self, "format", ImageFormat.parse(self.format))
        for name in ("background_color", "border_color", "text_color"):
            value = getattr(self, name)
            if isinstance(value, str):
                object.__setattr__(self, name, Color.from_hex(value))

    @property
    def has_background_image(self) -> bool:
        return bool(self.background_image_path)

    @property
    def has_watermark_image(self) -> bool:
        return bool(self.watermark_image_path)

    @property
    def has_watermark_text(self) -> bool:
        return bool(self.watermark_text)


@dataclass(frozen=True)
class RenderedImage:
    file_path: str
    format: ImageFormat
    # False only when a lenient rename failed and file_path lacks the suffix
    renamed: bool = True


@dataclass
class EncoderSettings:
    jpeg_quality: int = 75  # 1-95
    temp_dir: Optional[str] = None  # None -> platform temp dir
    strict_rename: bool = True
    extra_save_options: dict = field(default_factory=dict)
