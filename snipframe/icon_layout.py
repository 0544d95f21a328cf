"""Placement of the action icons around a selection, and the size indicator."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple

from .geometry import Point, Rect
from .message import CopyToClipboard, Exit, Message, SaveScreenshot, SelectFullScreen
from .selection import FRAME_WIDTH, ICON_BUTTON_SIZE, Selection

#: Gap between two neighbouring icon buttons.
SPACE_BETWEEN_ICONS = 2.0
#: Room one icon takes up along a line, gap included.
PX_PER_ICON = SPACE_BETWEEN_ICONS + ICON_BUTTON_SIZE
#: A row above or below the selection is filled up to this many icons.
MIN_TOP_BOTTOM_ICONS = 3
#: A column beside the selection is filled up to this many icons.
MIN_SIDE_ICONS = 1
#: Width and height of the picture inside an icon button.
ICON_SIZE = 32.0

#: Distance between the selection's bottom-right corner and the size indicator.
SIZE_INDICATOR_SPACING = 12.0
ESTIMATED_INDICATOR_WIDTH = 120
ESTIMATED_INDICATOR_HEIGHT = 26

_U32_MAX = 2**32 - 1
_DIMENSION = re.compile(r"\+?[0-9]+")


class Icon(Enum):
    """Icons that can be shown on buttons; each has an ``icons/<Name>.svg`` file."""

    SAVE = "Save"
    CIRCLE = "Circle"
    CLIPBOARD = "Clipboard"
    CLOSE = "Close"
    CURSOR = "Cursor"
    FULLSCREEN = "Fullscreen"
    PEN = "Pen"
    SQUARE = "Square"
    TEXT = "Text"

    @property
    def filename(self) -> str:
        """Name of the SVG file holding this icon."""
        return f"{self.value}.svg"


class TooltipPosition(Enum):
    """Where a tooltip is shown relative to its icon, i.e. which side of the selection."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class IconAction:
    """A button: its icon, the message it sends and its tooltip."""

    icon: Icon
    message: Message
    tooltip: str


def default_actions() -> Tuple[IconAction, ...]:
    """The buttons shown around an idle selection, in placement order."""
    return (
        IconAction(Icon.FULLSCREEN, SelectFullScreen(), "Select entire monitor (F11)"),
        IconAction(Icon.CLIPBOARD, CopyToClipboard(), "Copy to Clipboard (Enter)"),
        IconAction(Icon.SAVE, SaveScreenshot(), "Save Screenshot (Ctrl + S)"),
        IconAction(Icon.CLOSE, Exit(), "Exit (Esc)"),
    )


@dataclass(frozen=True)
class IconLine:
    """A row or column of icons on one side of the selection.

    ``padding`` is the space before the first icon, measured along the line
    from the selection's edge.
    """

    position: TooltipPosition
    actions: Tuple[IconAction, ...]
    padding: float


@dataclass(frozen=True)
class IconLayout:
    """Where every icon goes around a selection.

    ``top_rows`` are ordered from the top of the screen down and
    ``bottom_rows`` from the selection downwards; empty rows are dropped.
    ``left`` and ``right`` are present whenever there is room on that side,
    even if no icon landed there.
    """

    top_rows: Tuple[IconLine, ...]
    bottom_rows: Tuple[IconLine, ...]
    left: Optional[IconLine]
    right: Optional[IconLine]
    #: Horizontal offset at which the rows start (the selection's left edge).
    row_offset: float
    #: Vertical whitespace above the first top row.
    top_spacing: float
    #: Height of the band holding the left and right columns.
    side_height: float
    #: Space above the left and right columns within that band.
    side_padding: float

    def placed(self) -> Tuple[IconAction, ...]:
        """Every placed action, top to bottom, left column before right."""
        lines: List[IconLine] = list(self.top_rows)
        lines.extend(line for line in (self.left, self.right) if line is not None)
        lines.extend(self.bottom_rows)
        return tuple(action for line in lines for action in line.actions)


def _to_count(value: float) -> int:
    """Saturating float to unsigned integer conversion."""
    if value != value or value <= 0:
        return 0
    if value == float("inf"):
        return _U32_MAX
    return int(value)


class _Placer:
    """Hands out actions in order to the lines being filled."""

    def __init__(self, actions: Sequence[IconAction]) -> None:
        self._total = len(actions)
        self._iter: Iterator[IconAction] = iter(actions)
        self._positioned = 0

    def line(self, space_available: float, position: TooltipPosition) -> IconLine:
        """Place as many icons as fit in ``space_available``, centred."""
        left_to_position = self._total - self._positioned
        here = min(_to_count(space_available / PX_PER_ICON), left_to_position)
        taken = tuple(action for _, action in zip(range(here), self._iter))
        self._positioned += len(taken)
        space_used = max(len(taken) * PX_PER_ICON - SPACE_BETWEEN_ICONS, 0.0)
        return IconLine(position, taken, (space_available - space_used) / 2.0)

    def fill(self, line: IconLine, minimum: int) -> IconLine:
        """Add icons to ``line`` until it holds ``minimum`` or none are left."""
        actions = list(line.actions)
        padding = line.padding
        while len(actions) < minimum:
            action = next(self._iter, None)
            if action is None:
                break
            actions.append(action)
            self._positioned += 1
            padding -= PX_PER_ICON / 2.0
        return IconLine(line.position, tuple(actions), padding)


def layout_icons(
    selection: Selection,
    image_width: float,
    image_height: float,
    actions: Optional[Sequence[IconAction]] = None,
) -> IconLayout:
    """Distribute ``actions`` around the selection.

    Sides are tried bottom, right, top, left; when they are too short, lines
    are topped up to a minimum and extra rows are added above and below.
    A selection with no room on any side gets no icons.
    """
    if actions is None:
        actions = default_actions()
    sel = selection.norm().rect

    room_bottom = image_height - (sel.y + sel.height) > ICON_BUTTON_SIZE
    room_right = image_width - (sel.x + sel.width) > ICON_BUTTON_SIZE
    room_top = sel.y > ICON_BUTTON_SIZE
    room_left = sel.x > ICON_BUTTON_SIZE

    placer = _Placer(actions)
    top_pos, bottom_pos = TooltipPosition.TOP, TooltipPosition.BOTTOM
    left_pos, right_pos = TooltipPosition.LEFT, TooltipPosition.RIGHT

    bottom = placer.line(sel.width, bottom_pos) if room_bottom else None
    right = placer.line(sel.height, right_pos) if room_right else None
    top = placer.line(sel.width, top_pos) if room_top else None
    left = placer.line(sel.height, left_pos) if room_left else None

    if bottom is not None:
        bottom = placer.fill(bottom, MIN_TOP_BOTTOM_ICONS)
    if top is not None:
        top = placer.fill(top, MIN_TOP_BOTTOM_ICONS)
    if left is not None:
        left = placer.fill(left, MIN_SIDE_ICONS)
    if right is not None:
        right = placer.fill(right, MIN_SIDE_ICONS)

    extra_top = placer.line(sel.width, top_pos) if room_top else None
    extra_bottom = placer.line(sel.width, bottom_pos) if room_bottom else None
    if extra_bottom is not None:
        extra_bottom = placer.fill(extra_bottom, MIN_TOP_BOTTOM_ICONS)
    if extra_top is not None:
        extra_top = placer.fill(extra_top, MIN_TOP_BOTTOM_ICONS)

    extra_extra_top = placer.line(sel.width, top_pos) if room_top else None
    extra_extra_bottom = placer.line(sel.width, bottom_pos) if room_bottom else None
    if extra_extra_top is not None:
        extra_extra_top = placer.fill(extra_extra_top, MIN_TOP_BOTTOM_ICONS)
    if extra_extra_bottom is not None:
        extra_extra_bottom = placer.fill(extra_extra_bottom, MIN_TOP_BOTTOM_ICONS)

    top_rows = tuple(
        line
        for line in (extra_extra_top, extra_top, top)
        if line is not None and line.actions
    )
    bottom_rows = tuple(
        line
        for line in (bottom, extra_bottom, extra_extra_bottom)
        if line is not None and line.actions
    )

    # include the frame so the icons do not touch it
    selection_height = FRAME_WIDTH * 2.0 + sel.height
    # the side columns must always be tall enough for one icon
    height_added = max(PX_PER_ICON - selection_height, 0.0)

    return IconLayout(
        top_rows=top_rows,
        bottom_rows=bottom_rows,
        left=left,
        right=right,
        row_offset=sel.x,
        top_spacing=sel.y - height_added / 2.0 - len(top_rows) * PX_PER_ICON,
        side_height=selection_height + height_added,
        side_padding=height_added / 2.0,
    )


def size_indicator_position(rect: Rect, image_width: int, image_height: int) -> Point:
    """Top-left corner of the width/height indicator for a normalised ``rect``.

    It sits just past the bottom-right corner, kept inside the image.
    """
    if image_width < ESTIMATED_INDICATOR_WIDTH or image_height < ESTIMATED_INDICATOR_HEIGHT:
        raise ValueError(
            f"image of {image_width}x{image_height} is too small for the size indicator"
        )
    corner = rect.bottom_right()
    return Point(
        min(corner.x + SIZE_INDICATOR_SPACING, float(image_width - ESTIMATED_INDICATOR_WIDTH)),
        min(corner.y + SIZE_INDICATOR_SPACING, float(image_height - ESTIMATED_INDICATOR_HEIGHT)),
    )


def parse_dimension(text: str) -> Optional[int]:
    """Parse a dimension typed into the size indicator.

    An empty field means 0; anything that is not an unsigned 32-bit
    integer gives None, meaning the edit is ignored.
    """
    if text == "":
        return 0
    if not _DIMENSION.fullmatch(text):
        return None
    value = int(text)
    return value if value <= _U32_MAX else None