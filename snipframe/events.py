"""Turning raw mouse and keyboard events into application messages."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .app import App
from .geometry import Interaction, Point, mouse_icon
from .message import (
    CopyToClipboard,
    EnterIdle,
    Exit,
    ExtendNewSelection,
    LeftMouseDown,
    Message,
    MoveSelection,
    NoOp,
    ResizeSelection,
    ResizeToCursor,
    SaveScreenshot,
    SelectFullScreen,
)
from .selection import Move, Resize, Speed

log = logging.getLogger(__name__)

_SLOW_AFTER_CHANGE = Speed(slow=True, has_speed_changed=True)
_SLOW = Speed(slow=True, has_speed_changed=False)
_REGULAR = Speed()


class MouseButton(Enum):
    """A mouse button."""

    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"


class Key(Enum):
    """Named keys that the frame reacts to; printable keys are plain strings."""

    ENTER = "enter"
    ESCAPE = "escape"
    SHIFT = "shift"
    F11 = "f11"


@dataclass
class MouseState:
    """Which buttons and modifier keys are currently held down."""

    is_left_down: bool = False
    is_right_down: bool = False
    is_shift_down: bool = False


@dataclass(frozen=True)
class ButtonPressed:
    """A mouse button went down."""

    button: MouseButton


@dataclass(frozen=True)
class ButtonReleased:
    """A mouse button went up."""

    button: MouseButton


@dataclass(frozen=True)
class CursorMoved:
    """The mouse cursor moved to ``position``."""

    position: Point


@dataclass(frozen=True)
class KeyPressed:
    """A key went down, with the modifiers held at the time."""

    key: Union[Key, str]
    ctrl: bool = False
    shift: bool = False
    alt: bool = False
    logo: bool = False

    def only_ctrl(self) -> bool:
        """Whether Ctrl is the one and only modifier held."""
        return self.ctrl and not (self.shift or self.alt or self.logo)


@dataclass(frozen=True)
class KeyReleased:
    """A key went up."""

    key: Union[Key, str]


Event = Union[ButtonPressed, ButtonReleased, CursorMoved, KeyPressed, KeyReleased]


def _speed(state: MouseState) -> Speed:
    return _SLOW if state.is_shift_down else _REGULAR


def _on_shift_pressed(app: App, cursor: Optional[Point]) -> Message:
    """Restart an ongoing resize or move from here, so slowing down does not jump."""
    selection = app.selection
    if selection is None or cursor is None:
        return NoOp()
    status = selection.status
    if isinstance(status, Resize):
        return ResizeSelection(
            current_cursor_pos=cursor,
            initial_cursor_pos=cursor,
            resize_side=status.resize_side,
            initial_rect=selection.rect,
            speed=_SLOW_AFTER_CHANGE,
        )
    if isinstance(status, Move):
        return MoveSelection(
            current_cursor_pos=cursor,
            initial_cursor_pos=cursor,
            current_selection=selection,
            initial_rect_pos=selection.pos(),
            speed=_SLOW_AFTER_CHANGE,
        )
    return NoOp()


def _on_cursor_moved(app: App, state: MouseState, position: Point) -> Optional[Message]:
    selection = app.selection
    if selection is None:
        return None
    status = selection.status
    if isinstance(status, Resize):
        return ResizeSelection(
            current_cursor_pos=position,
            initial_cursor_pos=status.initial_cursor_pos,
            resize_side=status.resize_side,
            initial_rect=status.initial_rect,
            speed=_speed(state),
        )
    if isinstance(status, Move):
        current = selection.norm()
        return MoveSelection(
            current_cursor_pos=position,
            initial_cursor_pos=status.initial_cursor_pos,
            current_selection=current,
            initial_rect_pos=status.initial_rect_pos,
            speed=_speed(state),
        )
    if selection.is_create():
        return ExtendNewSelection(position)
    return None


def _dispatch(
    app: App, state: MouseState, event: Event, cursor: Optional[Point]
) -> Optional[Message]:
    match event:
        case ButtonPressed(button=MouseButton.LEFT):
            state.is_left_down = True
            return LeftMouseDown(cursor)
        case ButtonPressed(button=MouseButton.RIGHT):
            state.is_right_down = True
            if cursor is None or app.selection is None:
                return None
            return ResizeToCursor(cursor_pos=cursor, selection=app.selection.norm())
        case ButtonReleased(button=MouseButton.RIGHT):
            state.is_right_down = False
            return EnterIdle()
        case ButtonReleased(button=MouseButton.LEFT):
            state.is_left_down = False
            # with --instant, the very first selection is copied right away
            if app.config.instant and app.selections_created == 1:
                return CopyToClipboard()
            return EnterIdle()
        case KeyReleased(key=Key.SHIFT):
            state.is_shift_down = False
            return NoOp()
        case KeyPressed(key=Key.ESCAPE):
            return Exit()
        case KeyPressed(key="c") if event.only_ctrl():
            return CopyToClipboard()
        case KeyPressed(key=Key.ENTER):
            return CopyToClipboard()
        case KeyPressed(key="s") if event.only_ctrl():
            return SaveScreenshot()
        case KeyPressed(key=Key.F11) | ButtonPressed(button=MouseButton.MIDDLE):
            return SelectFullScreen()
        case KeyPressed(key=Key.SHIFT):
            state.is_shift_down = True
            return _on_shift_pressed(app, cursor)
        case CursorMoved(position=position):
            return _on_cursor_moved(app, state, position)
    return None


def handle_event(
    app: App, state: MouseState, event: Event, cursor: Optional[Point]
) -> Optional[Message]:
    """Update ``state`` for ``event`` and return the message to send, if any.

    ``cursor`` is the current cursor position, or None when it is unknown.
    """
    message = _dispatch(app, state, event, cursor)
    if message is not None:
        log.info("Received message: %r", message)
    return message


def mouse_interaction(app: App, cursor: Optional[Point]) -> Interaction:
    """The cursor shape to show at ``cursor``."""
    selection = app.selection
    if selection is not None:
        # an ongoing resize or move keeps its cursor even when the pointer
        # slips outside the grabbed area
        status = selection.status
        if isinstance(status, Resize):
            return mouse_icon(status.resize_side)
        if isinstance(status, Move):
            return Interaction.GRABBING
        if cursor is not None:
            side = selection.corners().side_at(cursor)
            if side is not None:
                return mouse_icon(side)
    if app.cursor_in_selection(cursor) is not None:
        return Interaction.GRAB
    return Interaction.CROSSHAIR