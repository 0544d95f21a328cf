"""Points, sizes and rectangles, plus the corners and sides of a selection frame."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Tuple, Union

#: Thickness of the band around each side of the frame that can be grabbed to resize it.
FRAME_INTERACTION_AREA = 35.0


@dataclass(frozen=True)
class Point:
    """A point on the screen, in pixels."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Point:
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def distance(self, other: Point) -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def with_x(self, f: Callable[[float], float]) -> Point:
        """Return a copy with the x coordinate transformed by ``f``."""
        return replace(self, x=f(self.x))

    def with_y(self, f: Callable[[float], float]) -> Point:
        """Return a copy with the y coordinate transformed by ``f``."""
        return replace(self, y=f(self.y))


@dataclass(frozen=True)
class Size:
    """Width and height, in pixels."""

    width: float = 0.0
    height: float = 0.0


def _is_sign_negative(value: float) -> bool:
    return math.copysign(1.0, value) < 0


@dataclass(frozen=True)
class Rect:
    """A rectangle given by its top-left corner and a (possibly negative) size."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def _from(cls, pos: Point, size: Size) -> Rect:
        return cls(pos.x, pos.y, size.width, size.height)

    def norm(self) -> Rect:
        """Return an equivalent rectangle whose width and height are not negative."""
        x, y, width, height = self.x, self.y, self.width, self.height
        if _is_sign_negative(width):
            x += width
            width = abs(width)
        if _is_sign_negative(height):
            y += height
            height = abs(height)
        return Rect(x, y, width, height)

    def corners(self) -> Corners:
        """The four vertices of the normalised rectangle."""
        rect = self.norm()
        top_left = rect.pos()
        return Corners(
            top_left=top_left,
            top_right=Point(top_left.x + rect.width, top_left.y),
            bottom_left=Point(top_left.x, top_left.y + rect.height),
            bottom_right=Point(top_left.x + rect.width, top_left.y + rect.height),
        )

    def pos(self) -> Point:
        """Position of the top-left corner."""
        return Point(self.x, self.y)

    def size(self) -> Size:
        """Width and height of the rectangle."""
        return Size(self.width, self.height)

    def top_left(self) -> Point:
        return self.pos()

    def top_right(self) -> Point:
        return self.top_left().with_x(lambda x: x + self.width)

    def bottom_right(self) -> Point:
        return (
            self.top_left()
            .with_x(lambda x: x + self.width)
            .with_y(lambda y: y + self.height)
        )

    def bottom_left(self) -> Point:
        return self.top_left().with_y(lambda y: y + self.height)

    def with_size(self, f: Callable[[Size], Size]) -> Rect:
        """Return a copy whose size is transformed by ``f``."""
        return Rect._from(self.pos(), f(self.size()))

    def with_pos(self, f: Callable[[Point], Point]) -> Rect:
        """Return a copy whose top-left corner is transformed by ``f``."""
        return Rect._from(f(self.pos()), self.size())

    def with_x(self, f: Callable[[float], float]) -> Rect:
        return replace(self, x=f(self.x))

    def with_y(self, f: Callable[[float], float]) -> Rect:
        return replace(self, y=f(self.y))

    def with_width(self, f: Callable[[float], float]) -> Rect:
        return replace(self, width=f(self.width))

    def with_height(self, f: Callable[[float], float]) -> Rect:
        return replace(self, height=f(self.height))

    def contains(self, point: Point) -> bool:
        """Whether the point lies inside; the right and bottom edges are excluded."""
        return (
            self.x <= point.x < self.x + self.width
            and self.y <= point.y < self.y + self.height
        )


class Interaction(Enum):
    """Mouse cursor shapes the frame can ask for."""

    CROSSHAIR = "crosshair"
    GRAB = "grab"
    GRABBING = "grabbing"
    RESIZING_VERTICALLY = "resizing-vertically"
    RESIZING_HORIZONTALLY = "resizing-horizontally"
    RESIZING_DIAGONALLY_DOWN = "resizing-diagonally-down"
    RESIZING_DIAGONALLY_UP = "resizing-diagonally-up"


class Side(Enum):
    """A side of a rectangle."""

    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"


class Corner(Enum):
    """A corner of a rectangle."""

    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"

    def resize_rect(self, initial_rect: Rect, dy: float, dx: float) -> Rect:
        """Move this corner by (dx, dy); the opposite corner stays in place."""
        if self is Corner.TOP_LEFT:
            return (
                initial_rect.with_y(lambda y: y + dy)
                .with_x(lambda x: x + dx)
                .with_width(lambda w: w - dx)
                .with_height(lambda h: h - dy)
            )
        if self is Corner.TOP_RIGHT:
            return (
                initial_rect.with_y(lambda y: y + dy)
                .with_width(lambda w: w + dx)
                .with_height(lambda h: h - dy)
            )
        if self is Corner.BOTTOM_LEFT:
            return (
                initial_rect.with_x(lambda x: x + dx)
                .with_width(lambda w: w - dx)
                .with_height(lambda h: h + dy)
            )
        return initial_rect.with_width(lambda w: w + dx).with_height(lambda h: h + dy)


SideOrCorner = Union[Side, Corner]


def mouse_icon(side_or_corner: SideOrCorner) -> Interaction:
    """The cursor shape for resizing from the given side or corner."""
    if side_or_corner in (Side.TOP, Side.BOTTOM):
        return Interaction.RESIZING_VERTICALLY
    if side_or_corner in (Side.RIGHT, Side.LEFT):
        return Interaction.RESIZING_HORIZONTALLY
    if side_or_corner in (Corner.TOP_LEFT, Corner.BOTTOM_RIGHT):
        return Interaction.RESIZING_DIAGONALLY_DOWN
    if side_or_corner in (Corner.TOP_RIGHT, Corner.BOTTOM_LEFT):
        return Interaction.RESIZING_DIAGONALLY_UP
    raise ValueError(f"not a side or corner: {side_or_corner!r}")


@dataclass(frozen=True)
class Corners:
    """The four vertices of a rectangle."""

    top_left: Point = Point()
    top_right: Point = Point()
    bottom_left: Point = Point()
    bottom_right: Point = Point()

    def nearest_corner(self, point: Point) -> Tuple[Point, Corner]:
        """The corner closest to ``point``; on a tie the first in order wins."""
        candidates = [
            (self.top_left, Corner.TOP_LEFT),
            (self.top_right, Corner.TOP_RIGHT),
            (self.bottom_left, Corner.BOTTOM_LEFT),
            (self.bottom_right, Corner.BOTTOM_RIGHT),
        ]
        return min(candidates, key=lambda item: point.distance(item[0]))

    def side_at(self, point: Point) -> Optional[SideOrCorner]:
        """The side or corner whose grab area contains ``point``, if any."""
        half = FRAME_INTERACTION_AREA / 2.0
        area = FRAME_INTERACTION_AREA

        def square(center: Point) -> Rect:
            return Rect(center.x - half, center.y - half, area, area)

        regions = [
            # corners first, since they overlap with the sides
            (square(self.top_left), Corner.TOP_LEFT),
            (square(self.top_right), Corner.TOP_RIGHT),
            (square(self.bottom_left), Corner.BOTTOM_LEFT),
            (square(self.bottom_right), Corner.BOTTOM_RIGHT),
            (
                Rect(self.top_left.x, self.top_left.y - half,
                     self.top_right.x - self.top_left.x, area),
                Side.TOP,
            ),
            (
                Rect(self.top_right.x - half, self.top_right.y,
                     area, self.bottom_right.y - self.top_right.y),
                Side.RIGHT,
            ),
            (
                Rect(self.top_left.x - half, self.top_left.y,
                     area, self.bottom_left.y - self.top_left.y),
                Side.LEFT,
            ),
            (
                Rect(self.bottom_left.x, self.bottom_left.y - half,
                     self.bottom_right.x - self.bottom_left.x, area),
                Side.BOTTOM,
            ),
        ]
        return next((side for rect, side in regions if rect.contains(point)), None)