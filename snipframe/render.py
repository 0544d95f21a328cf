"""Drawing the screenshot window and running its event loop."""

from __future__ import annotations

import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from functools import lru_cache  # noqa: E402
from typing import List, Optional, Tuple  # noqa: E402

import pygame  # noqa: E402

from .app import App, Command  # noqa: E402
from .events import (  # noqa: E402
    ButtonPressed,
    ButtonReleased,
    CursorMoved,
    Key,
    KeyPressed,
    KeyReleased,
    MouseButton,
    MouseState,
    handle_event,
    mouse_interaction,
)
from .geometry import Interaction, Point, Rect  # noqa: E402
from .icon_layout import (  # noqa: E402
    PX_PER_ICON,
    Icon,
    IconAction,
    IconLine,
    TooltipPosition,
    layout_icons,
    size_indicator_position,
)
from .message import Exit, Message  # noqa: E402
from .selection import FRAME_WIDTH, ICON_BUTTON_SIZE, Selection  # noqa: E402
from .theme import THEME, WHITE, Color  # noqa: E402

#: Radius of the circles drawn on the four corners of the selection.
FRAME_CIRCLE_RADIUS = 6
WELCOME_WIDTH = 380
WELCOME_HEIGHT = 160
ERROR_WIDTH = 300
ERROR_HEIGHT = 80
ERROR_SPACING = 30
MAX_ERRORS_SHOWN = 3
TOOLTIP_GAP = 10
FONT_SIZE = 16

IconTarget = Tuple[pygame.Rect, IconAction, TooltipPosition]

_GLYPHS = {
    Icon.FULLSCREEN: "[ ]",
    Icon.CLIPBOARD: "C",
    Icon.SAVE: "S",
    Icon.CLOSE: "X",
}

_BUTTONS = {1: MouseButton.LEFT, 2: MouseButton.MIDDLE, 3: MouseButton.RIGHT}

_CURSORS = {
    Interaction.CROSSHAIR: pygame.SYSTEM_CURSOR_CROSSHAIR,
    Interaction.GRAB: pygame.SYSTEM_CURSOR_HAND,
    Interaction.GRABBING: pygame.SYSTEM_CURSOR_SIZEALL,
    Interaction.RESIZING_VERTICALLY: pygame.SYSTEM_CURSOR_SIZENS,
    Interaction.RESIZING_HORIZONTALLY: pygame.SYSTEM_CURSOR_SIZEWE,
    Interaction.RESIZING_DIAGONALLY_DOWN: pygame.SYSTEM_CURSOR_SIZENWSE,
    Interaction.RESIZING_DIAGONALLY_UP: pygame.SYSTEM_CURSOR_SIZENESW,
}


def shade_rects(selection: Optional[Selection], width: int, height: int) -> List[Rect]:
    """Non-overlapping rectangles covering the image outside the selection."""
    if selection is None:
        return [Rect(0.0, 0.0, float(width), float(height))]
    sel = selection.norm().rect

    def clamp(value: float, upper: int) -> float:
        return max(0.0, min(value, float(upper)))

    x0, x1 = clamp(sel.x, width), clamp(sel.x + sel.width, width)
    y0, y1 = clamp(sel.y, height), clamp(sel.y + sel.height, height)
    candidates = [
        Rect(0.0, 0.0, float(width), y0),
        Rect(0.0, y1, float(width), height - y1),
        Rect(0.0, y0, x0, y1 - y0),
        Rect(x1, y0, width - x1, y1 - y0),
    ]
    return [rect for rect in candidates if rect.width > 0 and rect.height > 0]


def welcome_lines() -> Tuple[Tuple[str, str], ...]:
    """Key bindings shown before anything is selected, as (keys, action) pairs."""
    return (
        ("Mouse", "Select screenshot area"),
        ("Ctrl + S", "Save screenshot to a file"),
        ("Enter", "Copy screenshot to clipboard"),
        ("Right Click", "Snap closest corner to mouse"),
        ("Shift + Mouse", "Slowly resize / move area"),
        ("Esc", "Exit"),
    )


@lru_cache(maxsize=None)
def _font(size: int, bold: bool = False) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    font = pygame.font.Font(None, size)
    font.set_bold(bold)
    return font


def _to_pg(rect: Rect) -> pygame.Rect:
    return pygame.Rect(round(rect.x), round(rect.y), round(rect.width), round(rect.height))


def _fill(surface: pygame.Surface, rect: pygame.Rect, color: Color, radius: int = 0) -> None:
    r, g, b, a = color.to_rgba8()
    if a == 255:
        pygame.draw.rect(surface, (r, g, b), rect, border_radius=radius)
        return
    overlay = pygame.Surface(rect.size, pygame.SRCALPHA)
    pygame.draw.rect(overlay, (r, g, b, a), overlay.get_rect(), border_radius=radius)
    surface.blit(overlay, rect.topleft)


def _outline(surface: pygame.Surface, rect: pygame.Rect, color: Color, width: int,
             radius: int = 0) -> None:
    r, g, b, a = color.to_rgba8()
    overlay = pygame.Surface(rect.size, pygame.SRCALPHA)
    pygame.draw.rect(overlay, (r, g, b, a), overlay.get_rect(), width=width,
                     border_radius=radius)
    surface.blit(overlay, rect.topleft)


def _stroke(surface: pygame.Surface, rect: Rect, color: Color, width: float) -> None:
    """A rectangle outline centred on the edges of ``rect``."""
    half = width / 2.0
    outer = pygame.Rect(
        round(rect.x - half), round(rect.y - half),
        round(rect.width + width), round(rect.height + width),
    )
    _outline(surface, outer, color, max(1, round(width)))


def _draw_selection(surface: pygame.Surface, selection: Selection) -> None:
    sel = selection.norm()
    _stroke(surface, sel.rect, THEME.drop_shadow, FRAME_WIDTH * 2.0)
    _stroke(surface, sel.rect, THEME.accent, FRAME_WIDTH)
    corners = sel.corners()
    accent = THEME.accent.to_rgba8()[:3]
    for point in (corners.top_left, corners.top_right,
                  corners.bottom_left, corners.bottom_right):
        pygame.draw.circle(surface, accent, (round(point.x), round(point.y)),
                           FRAME_CIRCLE_RADIUS)


def _draw_welcome(surface: pygame.Surface, width: int, height: int) -> None:
    box = pygame.Rect(
        max(0, width // 2 - WELCOME_WIDTH // 2),
        max(0, height // 2 - WELCOME_HEIGHT // 2),
        WELCOME_WIDTH,
        WELCOME_HEIGHT,
    )
    _fill(surface, box, THEME.accent.scale_alpha(0.95), radius=6)
    _outline(surface, box, WHITE, 2, radius=6)
    bold, regular = _font(FONT_SIZE, True), _font(FONT_SIZE)
    fg = THEME.fg_on_accent_bg.to_rgba8()[:3]
    y = box.y + 10
    for keys, action in welcome_lines():
        keys_text = bold.render(keys, True, fg)
        surface.blit(keys_text, (box.x + 10 + 100 - keys_text.get_width(), y))
        surface.blit(regular.render(action, True, fg), (box.x + 10 + 120, y))
        y += regular.get_linesize() + 8


def _wrap(font: pygame.font.Font, text: str, width: int) -> List[str]:
    lines: List[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if current and font.size(candidate)[0] > width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def _draw_errors(surface: pygame.Surface, app: App, width: int) -> None:
    font = _font(FONT_SIZE)
    fg = THEME.fg.to_rgba8()[:3]
    y = 0
    for message in app.active_errors()[:MAX_ERRORS_SHOWN]:
        box = pygame.Rect(width - ERROR_WIDTH, y, ERROR_WIDTH, ERROR_HEIGHT)
        _fill(surface, box, THEME.error_bg, radius=2)
        _outline(surface, box, THEME.drop_shadow, 4, radius=2)
        text_y = box.y + 10
        for line in _wrap(font, f"Error: {message}", ERROR_WIDTH - 20):
            if text_y + font.get_linesize() > box.bottom:
                break
            surface.blit(font.render(line, True, fg), (box.x + 10, text_y))
            text_y += font.get_linesize()
        y += ERROR_HEIGHT + ERROR_SPACING


def _button_rect(x: float, y: float) -> pygame.Rect:
    size = round(ICON_BUTTON_SIZE)
    return pygame.Rect(round(x), round(y), size, size)


def _icon_targets(app: App) -> List[IconTarget]:
    selection = app.selection
    if selection is None or not selection.is_idle():
        return []
    layout = layout_icons(selection, app.screenshot.width, app.screenshot.height)
    rect = selection.norm().rect
    targets: List[IconTarget] = []

    def row(line: IconLine, y: float) -> None:
        x = layout.row_offset + line.padding
        for action in line.actions:
            targets.append((_button_rect(x, y), action, line.position))
            x += PX_PER_ICON

    def column(line: IconLine, x: float, top: float) -> None:
        y = top + line.padding
        for action in line.actions:
            targets.append((_button_rect(x, y), action, line.position))
            y += PX_PER_ICON

    y = layout.top_spacing
    for line in layout.top_rows:
        row(line, y)
        y += PX_PER_ICON
    band_top = y + layout.side_padding
    x = rect.x - PX_PER_ICON
    if layout.left is not None:
        column(layout.left, x, band_top)
        x += PX_PER_ICON
    x += FRAME_WIDTH * 2.0 + rect.width
    if layout.right is not None:
        column(layout.right, x, band_top)
    y += layout.side_height
    for line in layout.bottom_rows:
        row(line, y)
        y += PX_PER_ICON
    return targets


def _draw_button(surface: pygame.Surface, rect: pygame.Rect, icon: Icon) -> None:
    radius = rect.width // 2
    shadow = pygame.Surface((rect.width + 6, rect.height + 6), pygame.SRCALPHA)
    pygame.draw.circle(shadow, THEME.drop_shadow.to_rgba8(),
                       shadow.get_rect().center, radius + 3)
    surface.blit(shadow, (rect.x - 3, rect.y - 3))
    pygame.draw.circle(surface, THEME.accent.to_rgba8()[:3], rect.center, radius)
    glyph = _font(FONT_SIZE + 4, True).render(
        _GLYPHS.get(icon, icon.value[0]), True, THEME.fg_on_accent_bg.to_rgba8()[:3]
    )
    surface.blit(glyph, glyph.get_rect(center=rect.center))


def _draw_size_indicator(surface: pygame.Surface, app: App, selection: Selection) -> None:
    rect = selection.norm().rect
    pos = size_indicator_position(rect, app.screenshot.width, app.screenshot.height)
    text = f" {max(0, int(rect.width))} x {max(0, int(rect.height))}"
    rendered = _font(FONT_SIZE).render(text, True, THEME.size_indicator_fg.to_rgba8()[:3])
    box = rendered.get_rect(topleft=(round(pos.x), round(pos.y))).inflate(4, 4)
    _fill(surface, box, THEME.size_indicator_bg)
    surface.blit(rendered, (box.x + 2, box.y + 2))


def _draw_tooltip(surface: pygame.Surface, target: IconTarget) -> None:
    rect, action, position = target
    text = _font(FONT_SIZE).render(action.tooltip, True, THEME.fg.to_rgba8()[:3])
    box = text.get_rect().inflate(8, 6)
    if position is TooltipPosition.TOP:
        box.midbottom = (rect.centerx, rect.top - TOOLTIP_GAP)
    elif position is TooltipPosition.BOTTOM:
        box.midtop = (rect.centerx, rect.bottom + TOOLTIP_GAP)
    elif position is TooltipPosition.LEFT:
        box.midright = (rect.left - TOOLTIP_GAP, rect.centery)
    else:
        box.midleft = (rect.right + TOOLTIP_GAP, rect.centery)
    box.clamp_ip(surface.get_rect())
    _fill(surface, box, THEME.bg)
    surface.blit(text, (box.x + 4, box.y + 3))


def draw_frame(surface: pygame.Surface, app: App,
               background: pygame.Surface) -> List[IconTarget]:
    """Draw one frame of the window.

    Returns the icon buttons drawn, as (area, action, tooltip position).
    """
    width, height = app.screenshot.width, app.screenshot.height
    surface.blit(background, (0, 0))
    for rect in shade_rects(app.selection, width, height):
        _fill(surface, _to_pg(rect), THEME.non_selected_region)
    if app.selection is not None:
        _draw_selection(surface, app.selection)
    else:
        _draw_welcome(surface, width, height)
    _draw_errors(surface, app, width)
    targets = _icon_targets(app)
    for rect, action, _ in targets:
        _draw_button(surface, rect, action.icon)
    if app.selection is not None:
        _draw_size_indicator(surface, app, app.selection)
    return targets


def _cursor_position() -> Optional[Point]:
    if not pygame.mouse.get_focused():
        return None
    x, y = pygame.mouse.get_pos()
    return Point(float(x), float(y))


def _hovered(targets: List[IconTarget], cursor: Optional[Point]) -> Optional[IconTarget]:
    if cursor is None:
        return None
    return next(
        (target for target in targets if target[0].collidepoint(cursor.x, cursor.y)), None
    )


def _key(code: int):
    named = {
        pygame.K_RETURN: Key.ENTER,
        pygame.K_KP_ENTER: Key.ENTER,
        pygame.K_ESCAPE: Key.ESCAPE,
        pygame.K_LSHIFT: Key.SHIFT,
        pygame.K_RSHIFT: Key.SHIFT,
        pygame.K_F11: Key.F11,
    }
    return named.get(code) or pygame.key.name(code)


def _translate(raw: pygame.event.Event, app: App, state: MouseState,
               targets: List[IconTarget]) -> Optional[Message]:
    if raw.type == pygame.QUIT:
        return Exit()
    if raw.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
        button = _BUTTONS.get(raw.button)
        if button is None:
            return None
        cursor = Point(float(raw.pos[0]), float(raw.pos[1]))
        if raw.type == pygame.MOUSEBUTTONDOWN:
            hovered = _hovered(targets, cursor)
            if button is MouseButton.LEFT and hovered is not None:
                return hovered[1].message
            return handle_event(app, state, ButtonPressed(button), cursor)
        return handle_event(app, state, ButtonReleased(button), cursor)
    if raw.type == pygame.MOUSEMOTION:
        cursor = Point(float(raw.pos[0]), float(raw.pos[1]))
        return handle_event(app, state, CursorMoved(cursor), cursor)
    if raw.type == pygame.KEYDOWN:
        mods = raw.mod
        event = KeyPressed(
            _key(raw.key),
            ctrl=bool(mods & pygame.KMOD_CTRL),
            shift=bool(mods & pygame.KMOD_SHIFT),
            alt=bool(mods & pygame.KMOD_ALT),
            logo=bool(mods & pygame.KMOD_GUI),
        )
        return handle_event(app, state, event, _cursor_position())
    if raw.type == pygame.KEYUP:
        return handle_event(app, state, KeyReleased(_key(raw.key)), _cursor_position())
    return None


def _set_cursor(interaction: Interaction) -> None:
    try:
        pygame.mouse.set_cursor(_CURSORS[interaction])
    except pygame.error:
        pass


def _process_events(app: App, state: MouseState, targets: List[IconTarget]) -> bool:
    """Handle pending events; False once the window should close."""
    for raw in pygame.event.get():
        message = _translate(raw, app, state, targets)
        if message is not None and app.update(message) is Command.EXIT:
            return False
    return True


def run(app: App) -> None:
    """Show the screenshot full screen and let the user select an area."""
    pygame.init()
    try:
        width, height = app.screenshot.width, app.screenshot.height
        screen = pygame.display.set_mode((width, height), pygame.FULLSCREEN)
        pygame.display.set_caption("snipframe")
        background = pygame.image.frombuffer(
            app.screenshot.pixels, (width, height), "RGBA"
        ).convert()
        state = MouseState()
        clock = pygame.time.Clock()
        shown_cursor: Optional[Interaction] = None
        running = True
        while running:
            targets = draw_frame(screen, app, background)
            cursor = _cursor_position()
            hovered = _hovered(targets, cursor)
            if hovered is not None:
                _draw_tooltip(screen, hovered)
            pygame.display.flip()
            interaction = mouse_interaction(app, cursor)
            if interaction is not shown_cursor:
                _set_cursor(interaction)
                shown_cursor = interaction
            running = _process_events(app, state, targets)
            clock.tick(60)
    finally:
        _font.cache_clear()
        pygame.quit()