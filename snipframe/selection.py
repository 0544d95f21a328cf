"""The selected area of the screenshot and what it is currently doing."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Callable, Union

from PIL import Image

from .geometry import Corners, Point, Rect, SideOrCorner, Size

#: Thickness of the lines of the selection frame.
FRAME_WIDTH = 2.0

#: Size of an icon button, including the space around the icon itself.
ICON_BUTTON_SIZE = 37.0

_REGULAR_FACTOR = 1.0
_SLOW_FACTOR = 0.1


@dataclass(frozen=True)
class Speed:
    """How fast the selection follows the cursor while moving or resizing.

    ``has_speed_changed`` marks that the speed was different just before,
    so the starting point of the drag has to be re-synchronised.
    """

    slow: bool = False
    has_speed_changed: bool = False

    def factor(self) -> float:
        """Pixels of selection change per pixel of cursor movement."""
        return _SLOW_FACTOR if self.slow else _REGULAR_FACTOR


@dataclass(frozen=True)
class Resize:
    """The selection is being resized from one of its sides or corners."""

    initial_rect: Rect
    initial_cursor_pos: Point
    resize_side: SideOrCorner


@dataclass(frozen=True)
class Move:
    """The whole selection is being dragged."""

    initial_rect_pos: Point
    initial_cursor_pos: Point


@dataclass(frozen=True)
class Create:
    """The selection is being drawn for the first time."""


@dataclass(frozen=True)
class Idle:
    """The selection is not changing."""


SelectionStatus = Union[Resize, Move, Create, Idle]


def _to_u32(value: float) -> int:
    """Saturating float to unsigned integer conversion."""
    if math.isnan(value) or value <= 0:
        return 0
    if math.isinf(value):
        return 2**32 - 1
    return min(int(value), 2**32 - 1)


@dataclass(frozen=True)
class Selection:
    """An area of the screenshot together with its interaction status."""

    rect: Rect = Rect()
    status: SelectionStatus = field(default_factory=Idle)

    @classmethod
    def at(cls, point: Point) -> Selection:
        """A zero-sized idle selection at ``point``."""
        return cls(Rect(point.x, point.y, 0.0, 0.0), Idle())

    def _with_rect(self, rect: Rect) -> Selection:
        return replace(self, rect=rect)

    def norm(self) -> Selection:
        """The same selection with a non-negative width and height."""
        return self._with_rect(self.rect.norm())

    def pos(self) -> Point:
        return self.rect.pos()

    def size(self) -> Size:
        return self.rect.size()

    def corners(self) -> Corners:
        return self.rect.corners()

    def contains(self, point: Point) -> bool:
        return self.rect.contains(point)

    def with_size(self, f: Callable[[Size], Size]) -> Selection:
        return self._with_rect(self.rect.with_size(f))

    def with_pos(self, f: Callable[[Point], Point]) -> Selection:
        return self._with_rect(self.rect.with_pos(f))

    def with_x(self, f: Callable[[float], float]) -> Selection:
        return self._with_rect(self.rect.with_x(f))

    def with_y(self, f: Callable[[float], float]) -> Selection:
        return self._with_rect(self.rect.with_y(f))

    def with_width(self, f: Callable[[float], float]) -> Selection:
        return self._with_rect(self.rect.with_width(f))

    def with_height(self, f: Callable[[float], float]) -> Selection:
        return self._with_rect(self.rect.with_height(f))

    def is_move(self) -> bool:
        return isinstance(self.status, Move)

    def is_idle(self) -> bool:
        return isinstance(self.status, Idle)

    def is_resize(self) -> bool:
        return isinstance(self.status, Resize)

    def is_create(self) -> bool:
        return isinstance(self.status, Create)

    def crop(self, width: int, height: int, pixels: bytes) -> Image.Image:
        """Cut this selection out of an RGBA image given as raw pixels.

        The crop is clamped to the image bounds.
        """
        required = width * height * 4
        if width < 0 or height < 0 or len(pixels) < required:
            raise ValueError(
                f"pixel buffer of {len(pixels)} bytes does not hold a {width}x{height} RGBA image"
            )
        image = Image.frombytes("RGBA", (width, height), bytes(pixels[:required]))
        x = min(_to_u32(self.rect.x), width)
        y = min(_to_u32(self.rect.y), height)
        crop_width = min(_to_u32(self.rect.width), width - x)
        crop_height = min(_to_u32(self.rect.height), height - y)
        return image.crop((x, y, x + crop_width, y + crop_height))