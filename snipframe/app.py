"""Application state and how messages change it."""

from __future__ import annotations

import logging
import math
import shutil
import subprocess
import sys
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from itertools import takewhile
from pathlib import Path
from typing import List, Optional, Tuple

from PIL import Image

from . import clipboard
from .config import Config
from .geometry import Corner, Point, Rect, Side, SideOrCorner, Size
from .message import (
    CopyToClipboard,
    EnterIdle,
    Exit,
    ExtendNewSelection,
    LeftMouseDown,
    Message,
    MoveSelection,
    NoOp,
    ResizeHorizontally,
    ResizeSelection,
    ResizeToCursor,
    ResizeVertically,
    SaveScreenshot,
    SelectFullScreen,
)
from .screenshot import Screenshot
from .selection import Create, Idle, Move, Resize, Selection, Speed

log = logging.getLogger(__name__)

#: How long an error stays visible, in seconds.
ERROR_TIMEOUT = 5.0

_SLOW_AFTER_CHANGE = Speed(slow=True, has_speed_changed=True)


def _to_u32(value: float) -> int:
    if math.isnan(value) or value <= 0:
        return 0
    if math.isinf(value):
        return 2**32 - 1
    return min(int(value), 2**32 - 1)


class Command(Enum):
    """What the window should do after a message was handled."""

    NONE = "none"
    EXIT = "exit"


@dataclass(frozen=True)
class ErrorMessage:
    """An error shown to the user, with the monotonic time it happened."""

    message: str
    timestamp: float = field(default_factory=time.monotonic)


def _resize_by_side(side: SideOrCorner, rect: Rect, dy: float, dx: float) -> Rect:
    if isinstance(side, Corner):
        return side.resize_rect(rect, dy, dx)
    if side is Side.TOP:
        return rect.with_height(lambda h: h - dy).with_y(lambda y: y + dy)
    if side is Side.RIGHT:
        return rect.with_width(lambda w: w + dx)
    if side is Side.BOTTOM:
        return rect.with_height(lambda h: h + dy)
    return rect.with_width(lambda w: w - dx).with_x(lambda x: x + dx)


def _notify(summary: str, image_path: Path) -> None:
    """Show a desktop notification if possible; failure is not an error."""
    try:
        if sys.platform.startswith("linux"):
            if shutil.which("notify-send"):
                subprocess.Popen(
                    ["notify-send", "--icon", str(image_path), summary],
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                )
        elif sys.platform == "darwin":
            quoted = summary.replace("\\", "\\\\").replace('"', '\\"')
            subprocess.Popen(
                ["osascript", "-e", f'display notification "{quoted}"'],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
    except OSError as err:
        log.debug("could not show notification: %s", err)


@dataclass
class App:
    """State of the screenshot window."""

    screenshot: Screenshot
    config: Config = field(default_factory=Config)
    selection: Optional[Selection] = None
    selections_created: int = 0
    errors: List[ErrorMessage] = field(default_factory=list)
    #: The cropped image the user asked to save, set just before exiting.
    saved_image: Optional[Image.Image] = None

    def update(self, message: Message) -> Command:
        """Apply ``message`` to the state."""
        width, height = self.screenshot.width, self.screenshot.height
        sel = self.selection

        match message:
            case NoOp():
                pass
            case Exit():
                return Command.EXIT
            case ResizeVertically(new_height=new_height):
                if sel is not None:
                    rect = sel.norm().rect
                    new_height = min(new_height, _to_u32(rect.y + rect.height))
                    dy = new_height - rect.height
                    self.selection = (
                        sel.norm()
                        .with_height(lambda _: float(new_height))
                        .with_y(lambda y: y - dy)
                    )
            case ResizeHorizontally(new_width=new_width):
                if sel is not None:
                    rect = sel.norm().rect
                    new_width = min(new_width, _to_u32(rect.x + rect.width))
                    dx = new_width - rect.width
                    self.selection = (
                        sel.norm()
                        .with_width(lambda _: float(new_width))
                        .with_x(lambda x: x - dx)
                    )
            case LeftMouseDown(cursor=cursor):
                self._left_mouse_down(cursor)
            case EnterIdle():
                if sel is not None:
                    self.selection = replace(sel, status=Idle())
            case MoveSelection():
                self._move_selection(message)
            case ExtendNewSelection(point=point):
                self.update_selection(point)
            case CopyToClipboard():
                return self._copy_to_clipboard()
            case SaveScreenshot():
                if sel is None:
                    self.error("Selection does not exist. There is nothing to copy!")
                    return Command.NONE
                self.saved_image = sel.norm().crop(width, height, self.screenshot.pixels)
                return Command.EXIT
            case ResizeSelection():
                self._resize(message)
            case ResizeToCursor(cursor_pos=cursor_pos, selection=selection):
                if sel is not None:
                    corner_point, corner = selection.corners().nearest_corner(cursor_pos)
                    rect = corner.resize_rect(
                        selection.rect,
                        cursor_pos.y - corner_point.y,
                        cursor_pos.x - corner_point.x,
                    )
                    self.selection = Selection(
                        rect, Resize(rect, cursor_pos, corner)
                    )
            case SelectFullScreen():
                self.selection = Selection.at(Point(0.0, 0.0)).with_size(
                    lambda _: Size(float(width), float(height))
                )
        return Command.NONE

    def _left_mouse_down(self, cursor: Optional[Point]) -> None:
        if cursor is None:
            return
        sel = self.selection
        if sel is not None:
            side = sel.corners().side_at(cursor)
            if side is not None:
                self.selection = replace(
                    sel, status=Resize(sel.norm().rect, cursor, side)
                )
                return
            if sel.norm().contains(cursor):
                self.selection = replace(sel, status=Move(sel.norm().pos(), cursor))
                return
        self.create_selection_at(cursor)

    def _move_selection(self, message: MoveSelection) -> None:
        width, height = self.screenshot.width, self.screenshot.height
        current = message.current_selection
        offset = (message.current_cursor_pos - message.initial_cursor_pos) * message.speed.factor()
        moved = current.with_pos(lambda _: message.initial_rect_pos + offset)

        old_x, old_y = _to_u32(moved.rect.x), _to_u32(moved.rect.y)
        new_x = max(min(moved.rect.x, width - moved.rect.width), 0.0)
        new_y = max(min(moved.rect.y, height - moved.rect.height), 0.0)
        moved = moved.with_x(lambda _: new_x).with_y(lambda _: new_y)

        if _to_u32(new_y) != old_y or _to_u32(new_x) != old_x:
            moved = replace(moved, status=Move(moved.pos(), message.current_cursor_pos))
        if message.speed == _SLOW_AFTER_CHANGE:
            moved = replace(moved, status=Move(current.pos(), message.current_cursor_pos))
        self.selection = moved

    def _resize(self, message: ResizeSelection) -> None:
        sel = self.selection
        if sel is None:
            return
        factor = message.speed.factor()
        dy = (message.current_cursor_pos.y - message.initial_cursor_pos.y) * factor
        dx = (message.current_cursor_pos.x - message.initial_cursor_pos.x) * factor
        rect = _resize_by_side(message.resize_side, message.initial_rect, dy, dx)
        status = sel.status
        if message.speed == _SLOW_AFTER_CHANGE:
            status = Resize(rect, message.current_cursor_pos, message.resize_side)
        self.selection = Selection(rect, status)

    def _copy_to_clipboard(self) -> Command:
        if self.selection is None:
            self.error("There is no selection to copy")
            return Command.NONE
        cropped = self.selection.norm().crop(
            self.screenshot.width, self.screenshot.height, self.screenshot.pixels
        )
        try:
            path = clipboard.set_image(cropped.width, cropped.height, cropped.tobytes())
        except (OSError, ValueError, clipboard.ClipboardError) as err:
            self.error(f"Could not copy the image: {err}")
            return Command.NONE
        _notify(f"Copied image to clipboard {cropped.width}px * {cropped.height}px", path)
        return Command.EXIT

    def cursor_in_selection(self, cursor: Optional[Point]) -> Optional[Tuple[Point, Selection]]:
        """The cursor and the selection, if the cursor lies inside the selection."""
        if self.selection is None or cursor is None:
            return None
        if self.selection.contains(cursor):
            return cursor, self.selection
        return None

    def create_selection_at(self, point: Point) -> None:
        """Start a new, empty selection at ``point``."""
        self.selection = replace(Selection.at(point), status=Create())
        self.selections_created += 1

    def update_selection(self, other: Point) -> None:
        """Stretch the selection so its far corner is at ``other``."""
        sel = self.selection
        if sel is None:
            return
        width = other.x - sel.rect.x
        height = other.y - sel.rect.y
        self.selection = sel.with_size(lambda _: Size(width, height))

    def error(self, text: str) -> None:
        """Record an error to show to the user."""
        log.error("Status Error: %s", text)
        self.errors.append(ErrorMessage(text))

    def active_errors(self, now: Optional[float] = None) -> List[str]:
        """Most recent errors first, stopping at the first one that has expired."""
        if now is None:
            now = time.monotonic()
        recent = takewhile(lambda err: now - err.timestamp <= ERROR_TIMEOUT, reversed(self.errors))
        return [err.message for err in recent]