import sys
from unittest import mock

import pytest

from snipframe.app import App, Command, ErrorMessage
from snipframe.clipboard import CLIPBOARD_DAEMON_ID
from snipframe.geometry import Corner, Point, Rect, Side
from snipframe.message import (
    CopyToClipboard,
    EnterIdle,
    Exit,
    ExtendNewSelection,
    LeftMouseDown,
    MoveSelection,
    NoOp,
    ResizeHorizontally,
    ResizeSelection,
    ResizeToCursor,
    ResizeVertically,
    SaveScreenshot,
    SelectFullScreen,
)
from snipframe.screenshot import Screenshot
from snipframe.selection import Create, Idle, Move, Resize, Selection, Speed

W, H = 100, 80


@pytest.fixture
def app():
    pixels = bytes(i % 251 for i in range(W * H * 4))
    return App(Screenshot(W, H, pixels))


def test_exit_and_noop(app):
    assert app.update(Exit()) is Command.EXIT
    assert app.update(NoOp()) is Command.NONE


def test_create_selection_counts(app):
    app.create_selection_at(Point(5, 6))
    app.create_selection_at(Point(7, 8))
    assert app.selections_created == 2
    assert app.selection.rect == Rect(7, 8, 0, 0)
    assert app.selection.status == Create()


def test_extend_new_selection(app):
    app.create_selection_at(Point(10, 10))
    app.update(ExtendNewSelection(Point(4, 30)))
    assert app.selection.rect.bottom_right() == Point(4, 30)
    assert app.selection.rect.pos() == Point(10, 10)


def test_left_mouse_down_without_selection_creates_one(app):
    app.update(LeftMouseDown(Point(3, 4)))
    assert app.selection.rect.pos() == Point(3, 4)
    assert app.selection.is_create()


def test_left_mouse_down_without_cursor_does_nothing(app):
    app.update(LeftMouseDown(None))
    assert app.selection is None
    assert app.selections_created == 0


def test_left_mouse_down_on_corner_starts_resize(app):
    rect = Rect(20, 20, 60, 60)
    app.selection = Selection(rect)
    app.update(LeftMouseDown(Point(20, 20)))
    assert app.selection.status == Resize(rect, Point(20, 20), Corner.TOP_LEFT)


def test_left_mouse_down_inside_starts_move(app):
    rect = Rect(20, 20, 60, 60)
    app.selection = Selection(rect)
    app.update(LeftMouseDown(Point(50, 50)))
    assert app.selection.status == Move(rect.pos(), Point(50, 50))
    assert app.selections_created == 0


def test_enter_idle(app):
    app.selection = Selection(Rect(1, 1, 5, 5), Create())
    app.update(EnterIdle())
    assert app.selection.is_idle()


def test_select_full_screen(app):
    app.update(SelectFullScreen())
    assert app.selection.rect == Rect(0, 0, W, H)
    assert app.selection.status == Idle()


def test_move_selection_follows_cursor(app):
    sel = Selection(Rect(10, 10, 20, 20), Move(Point(10, 10), Point(0, 0)))
    app.selection = sel
    msg = MoveSelection(Point(5, 7), Point(0, 0), sel, Point(10, 10))
    app.update(msg)
    assert app.selection.pos() == Point(10, 10) + (Point(5, 7) - Point(0, 0))
    assert app.selection.status == sel.status


def test_move_selection_is_clamped_to_image(app):
    sel = Selection(Rect(0, 0, 10, 10), Move(Point(0, 0), Point(0, 0)))
    app.selection = sel
    app.update(MoveSelection(Point(500, 500), Point(0, 0), sel, Point(0, 0)))
    rect = app.selection.rect
    assert rect.x + rect.width == W
    assert rect.y + rect.height == H
    assert app.selection.status == Move(rect.pos(), Point(500, 500))


def test_move_selection_slow_after_change_resyncs(app):
    sel = Selection(Rect(10, 10, 20, 20), Move(Point(10, 10), Point(0, 0)))
    app.selection = sel
    speed = Speed(slow=True, has_speed_changed=True)
    app.update(MoveSelection(Point(3, 3), Point(3, 3), sel, Point(10, 10), speed))
    assert app.selection.status == Move(sel.pos(), Point(3, 3))


def test_resize_right_side_follows_cursor(app):
    initial = Rect(10, 10, 20, 20)
    app.selection = Selection(initial, Resize(initial, Point(30, 15), Side.RIGHT))
    app.update(ResizeSelection(Point(45, 15), Point(30, 15), Side.RIGHT, initial))
    rect = app.selection.rect
    assert rect.x + rect.width == 45
    assert rect.pos() == initial.pos()


def test_resize_top_keeps_bottom(app):
    initial = Rect(10, 20, 20, 30)
    app.selection = Selection(initial, Resize(initial, Point(15, 20), Side.TOP))
    app.update(ResizeSelection(Point(15, 12), Point(15, 20), Side.TOP, initial))
    rect = app.selection.rect
    assert rect.y == 12
    assert rect.y + rect.height == initial.y + initial.height


def test_slow_resize_moves_less(app):
    initial = Rect(10, 10, 20, 20)
    app.selection = Selection(initial, Resize(initial, Point(30, 15), Side.RIGHT))
    app.update(
        ResizeSelection(Point(45, 15), Point(30, 15), Side.RIGHT, initial, Speed(slow=True))
    )
    assert initial.width < app.selection.rect.width < initial.width + 15
    assert app.selection.status == Resize(initial, Point(30, 15), Side.RIGHT)


def test_resize_to_cursor_snaps_nearest_corner(app):
    sel = Selection(Rect(10, 10, 20, 20))
    app.selection = sel
    app.update(ResizeToCursor(Point(5, 6), sel))
    rect = app.selection.rect
    assert rect.pos() == Point(5, 6)
    assert rect.bottom_right() == sel.rect.bottom_right()
    assert app.selection.status == Resize(rect, Point(5, 6), Corner.TOP_LEFT)


def test_resize_vertically_keeps_bottom(app):
    sel = Selection(Rect(10, 20, 30, 40))
    app.selection = sel
    app.update(ResizeVertically(10))
    rect = app.selection.rect
    assert rect.height == 10
    assert rect.y + rect.height == sel.rect.bottom_right().y


def test_resize_vertically_is_clamped(app):
    sel = Selection(Rect(10, 20, 30, 40))
    app.selection = sel
    app.update(ResizeVertically(1000))
    rect = app.selection.rect
    assert rect.y == 0
    assert rect.y + rect.height == sel.rect.bottom_right().y


def test_resize_horizontally_keeps_right(app):
    sel = Selection(Rect(10, 20, 30, 40))
    app.selection = sel
    app.update(ResizeHorizontally(5))
    rect = app.selection.rect
    assert rect.width == 5
    assert rect.x + rect.width == sel.rect.bottom_right().x


def test_copy_without_selection_reports_error(app):
    assert app.update(CopyToClipboard()) is Command.NONE
    assert app.active_errors() == ["There is no selection to copy"]


def test_save_without_selection_reports_error(app):
    assert app.update(SaveScreenshot()) is Command.NONE
    assert app.active_errors() == ["Selection does not exist. There is nothing to copy!"]
    assert app.saved_image is None


def test_save_crops_the_selection(app):
    app.selection = Selection(Rect(30, 25, -20, -15))
    assert app.update(SaveScreenshot()) is Command.EXIT
    expected = app.screenshot.to_image().crop((10, 10, 30, 25))
    assert app.saved_image.size == expected.size
    assert app.saved_image.tobytes() == expected.tobytes()


def test_copy_spawns_clipboard_daemon(app, monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    app.selection = Selection(Rect(1, 2, 4, 3))
    with mock.patch("subprocess.Popen") as popen, mock.patch("shutil.which", return_value=None):
        assert app.update(CopyToClipboard()) is Command.EXIT
    args = popen.call_args.args[0]
    path = args[-1]
    try:
        assert args[-5:-1] == [CLIPBOARD_DAEMON_ID, "image", "4", "3"]
        expected = app.screenshot.to_image().crop((1, 2, 5, 5)).tobytes()
        with open(path, "rb") as handle:
            assert handle.read() == expected
    finally:
        import os

        os.unlink(path)


def test_copy_failure_is_reported(app, monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    app.selection = Selection(Rect(1, 2, 4, 3))
    with mock.patch("subprocess.Popen", side_effect=OSError("boom")):
        assert app.update(CopyToClipboard()) is Command.NONE
    errors = app.active_errors()
    assert len(errors) == 1
    assert errors[0].startswith("Could not copy the image")


def test_cursor_in_selection(app):
    sel = Selection(Rect(10, 10, 20, 20))
    app.selection = sel
    assert app.cursor_in_selection(Point(15, 15)) == (Point(15, 15), sel)
    assert app.cursor_in_selection(Point(50, 50)) is None
    assert app.cursor_in_selection(None) is None


def test_active_errors_expire(app):
    app.errors = [ErrorMessage("old", 0.0), ErrorMessage("new", 10.0)]
    assert app.active_errors(now=12.0) == ["new"]
    assert app.active_errors(now=4.0) == ["new", "old"]


def test_active_errors_stop_at_first_expired(app):
    app.errors = [ErrorMessage("a", 10.0), ErrorMessage("b", 0.0), ErrorMessage("c", 10.0)]
    assert app.active_errors(now=12.0) == ["c"]


def test_error_is_recorded(app):
    app.error("something broke")
    assert app.active_errors() == ["something broke"]