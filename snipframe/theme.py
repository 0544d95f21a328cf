"""Colours and the application theme."""

from __future__ import annotations

import string
from dataclasses import dataclass, replace
from typing import Tuple


class HexColorParseError(ValueError):
    """A hex colour string could not be parsed."""


class MissingHexError(HexColorParseError):
    def __init__(self) -> None:
        super().__init__("Hex color must start with a `#`")


class InvalidLengthError(HexColorParseError):
    def __init__(self) -> None:
        super().__init__("Hex color must be 7 characters long")


class InvalidFormatError(HexColorParseError):
    def __init__(self) -> None:
        super().__init__("Invalid hex color format")


def _to_byte(component: float) -> int:
    return max(0, min(255, round(component * 255.0)))


@dataclass(frozen=True)
class Color:
    """An RGBA colour with components in 0.0..=1.0."""

    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def from_rgb8(cls, r: int, g: int, b: int, a: float = 1.0) -> Color:
        """Build a colour from 8-bit channels and a float alpha."""
        return cls(r / 255.0, g / 255.0, b / 255.0, a)

    @classmethod
    def from_hex(cls, text: str) -> Color:
        """Parse ``#rrggbb``."""
        if not text.startswith("#"):
            raise MissingHexError()
        if len(text.encode("utf-8")) != 7:
            raise InvalidLengthError()
        digits = text[1:]
        if len(digits) != 6 or any(c not in string.hexdigits for c in digits):
            raise InvalidFormatError()
        r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
        return cls.from_rgb8(r, g, b)

    def scale_alpha(self, factor: float) -> Color:
        """Return a copy with alpha multiplied by ``factor``."""
        return replace(self, a=self.a * factor)

    def to_rgba8(self) -> Tuple[int, int, int, int]:
        """The colour as four 8-bit channels."""
        return (_to_byte(self.r), _to_byte(self.g), _to_byte(self.b), _to_byte(self.a))

    def __str__(self) -> str:
        r, g, b, _ = self.to_rgba8()
        return f"#{r:x}{g:x}{b:x}"


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)


def foreground_for(color: Color) -> Color:
    """Black or white, whichever reads better on ``color``."""

    def luma(x: float) -> float:
        return x / 12.92 if x <= 0.04045 else ((x + 0.055) / 1.055) ** 2.4

    luminance = 0.2126 * luma(color.r) + 0.7152 * luma(color.g) + 0.0722 * luma(color.b)
    return BLACK if luminance > 0.179 else WHITE


ACCENT_COLOR = Color.from_rgb8(0xAB, 0x61, 0x37)


@dataclass(frozen=True)
class Theme:
    """Colours used throughout the interface."""

    transparent: Color = Color.from_rgb8(0x00, 0x00, 0x00, 0.0)
    drop_shadow: Color = Color.from_rgb8(0x00, 0x00, 0x00, 0.5)
    non_selected_region: Color = Color.from_rgb8(0x00, 0x00, 0x00, 0.5)
    bg: Color = Color.from_rgb8(0x00, 0x00, 0x00)
    error_bg: Color = Color.from_rgb8(0xFF, 0x00, 0x00, 0.6)
    fg: Color = Color.from_rgb8(0xFF, 0xFF, 0xFF)
    size_indicator_fg: Color = Color.from_rgb8(0xFF, 0xFF, 0xFF)
    size_indicator_bg: Color = Color.from_rgb8(0x00, 0x00, 0x00, 0.5)
    accent: Color = ACCENT_COLOR
    fg_on_accent_bg: Color = foreground_for(ACCENT_COLOR)
    text_selection_bg: Color = ACCENT_COLOR.scale_alpha(0.3)


THEME = Theme()