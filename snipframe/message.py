"""Events that change the application state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .geometry import Point, Rect, SideOrCorner
from .selection import Selection, Speed


@dataclass(frozen=True)
class NoOp:
    """Do nothing."""


@dataclass(frozen=True)
class Exit:
    """Close the application."""


@dataclass(frozen=True)
class LeftMouseDown:
    """The left mouse button was pressed; ``cursor`` is None if unavailable."""

    cursor: Optional[Point]


@dataclass(frozen=True)
class EnterIdle:
    """Stop any ongoing interaction with the selection."""


@dataclass(frozen=True)
class CopyToClipboard:
    """Copy the selected area to the clipboard."""


@dataclass(frozen=True)
class SaveScreenshot:
    """Save the selected area to a file."""


@dataclass(frozen=True)
class ResizeSelection:
    """The selection is being resized by dragging a side or corner."""

    current_cursor_pos: Point
    initial_cursor_pos: Point
    resize_side: SideOrCorner
    initial_rect: Rect
    speed: Speed = Speed()


def _check_dimension(name: str, value: int) -> None:
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")


@dataclass(frozen=True)
class ResizeVertically:
    """Set the selection's height; the bottom edge stays in place."""

    new_height: int

    def __post_init__(self) -> None:
        _check_dimension("new_height", self.new_height)


@dataclass(frozen=True)
class ResizeHorizontally:
    """Set the selection's width; the right edge stays in place."""

    new_width: int

    def __post_init__(self) -> None:
        _check_dimension("new_width", self.new_width)


@dataclass(frozen=True)
class ExtendNewSelection:
    """The selection being created is dragged out to ``point``."""

    point: Point


@dataclass(frozen=True)
class MoveSelection:
    """The whole selection is being dragged."""

    current_cursor_pos: Point
    initial_cursor_pos: Point
    current_selection: Selection
    initial_rect_pos: Point
    speed: Speed = Speed()


@dataclass(frozen=True)
class ResizeToCursor:
    """Snap the corner nearest to the cursor onto the cursor."""

    cursor_pos: Point
    selection: Selection


@dataclass(frozen=True)
class SelectFullScreen:
    """Select the entire screenshot."""


Message = Union[
    NoOp,
    Exit,
    LeftMouseDown,
    EnterIdle,
    CopyToClipboard,
    SaveScreenshot,
    ResizeSelection,
    ResizeVertically,
    ResizeHorizontally,
    ExtendNewSelection,
    MoveSelection,
    ResizeToCursor,
    SelectFullScreen,
]