import pytest

from snipframe.geometry import (
    FRAME_INTERACTION_AREA,
    Corner,
    Corners,
    Interaction,
    Point,
    Rect,
    Side,
    Size,
    mouse_icon,
)


def test_point_distance():
    assert Point(0, 0).distance(Point(3, 4)) == 5


def test_point_with_x_and_y():
    p = Point(1, 2).with_x(lambda x: x + 10).with_y(lambda y: y * 3)
    assert p == Point(1 + 10, 2 * 3)


def test_point_arithmetic():
    a, b = Point(5, 7), Point(2, 3)
    assert (a - b) + b == a
    assert (a * 0.5).x == a.x * 0.5


def test_norm_negative_size():
    r = Rect(10, 20, -4, -6)
    n = r.norm()
    assert n.x == r.x + r.width
    assert n.y == r.y + r.height
    assert n.width == abs(r.width)
    assert n.height == abs(r.height)


def test_norm_positive_is_identity():
    r = Rect(1, 2, 3, 4)
    assert r.norm() == r


def test_norm_negative_zero():
    r = Rect(5, 5, -0.0, 3)
    n = r.norm()
    assert n.width == 0.0
    assert n.x == r.x


def test_norm_keeps_covered_area():
    r = Rect(50, 50, -20, 30)
    assert r.norm().corners() == r.corners()
    assert r.norm().norm() == r.norm()


def test_corners_of_rect():
    r = Rect(10, 20, 30, 40)
    c = r.corners()
    assert c.top_left == r.top_left()
    assert c.top_right == r.top_right()
    assert c.bottom_left == r.bottom_left()
    assert c.bottom_right == r.bottom_right()
    assert c.bottom_right == Point(r.x + r.width, r.y + r.height)


def test_pos_and_size():
    r = Rect(1, 2, 3, 4)
    assert r.pos() == Point(r.x, r.y)
    assert r.size() == Size(r.width, r.height)


def test_with_helpers():
    r = Rect(1, 2, 3, 4)
    assert r.with_x(lambda x: x + 1).x == r.x + 1
    assert r.with_y(lambda y: y + 1).y == r.y + 1
    assert r.with_width(lambda w: w * 2).width == r.width * 2
    assert r.with_height(lambda h: h * 2).height == r.height * 2
    assert r.with_size(lambda _: Size(7, 8)) == Rect(r.x, r.y, 7, 8)
    assert r.with_pos(lambda _: Point(9, 9)) == Rect(9, 9, r.width, r.height)


def test_contains_is_half_open():
    r = Rect(0, 0, 10, 10)
    assert r.contains(Point(0, 0))
    assert r.contains(Point(9.5, 9.5))
    assert not r.contains(Point(10, 5))
    assert not r.contains(Point(5, 10))
    assert not r.contains(Point(-1, 5))


@pytest.mark.parametrize("corner, fixed", [
    (Corner.TOP_LEFT, "bottom_right"),
    (Corner.TOP_RIGHT, "bottom_left"),
    (Corner.BOTTOM_LEFT, "top_right"),
    (Corner.BOTTOM_RIGHT, "top_left"),
])
def test_resize_rect_keeps_opposite_corner(corner, fixed):
    initial = Rect(100, 100, 50, 40)
    resized = corner.resize_rect(initial, 7, -3)
    assert getattr(resized, fixed)() == getattr(initial, fixed)()


def test_resize_rect_moves_own_corner():
    initial = Rect(100, 100, 50, 40)
    resized = Corner.BOTTOM_RIGHT.resize_rect(initial, 7, 3)
    assert resized.bottom_right() == initial.bottom_right() + Point(3, 7)


@pytest.mark.parametrize("side, icon", [
    (Side.TOP, Interaction.RESIZING_VERTICALLY),
    (Side.BOTTOM, Interaction.RESIZING_VERTICALLY),
    (Side.LEFT, Interaction.RESIZING_HORIZONTALLY),
    (Side.RIGHT, Interaction.RESIZING_HORIZONTALLY),
    (Corner.TOP_LEFT, Interaction.RESIZING_DIAGONALLY_DOWN),
    (Corner.BOTTOM_RIGHT, Interaction.RESIZING_DIAGONALLY_DOWN),
    (Corner.TOP_RIGHT, Interaction.RESIZING_DIAGONALLY_UP),
    (Corner.BOTTOM_LEFT, Interaction.RESIZING_DIAGONALLY_UP),
])
def test_mouse_icon(side, icon):
    assert mouse_icon(side) is icon


def test_mouse_icon_rejects_other_values():
    with pytest.raises(ValueError):
        mouse_icon("top")


def test_nearest_corner():
    corners = Rect(0, 0, 100, 100).corners()
    assert corners.nearest_corner(Point(90, 95)) == (corners.bottom_right, Corner.BOTTOM_RIGHT)
    assert corners.nearest_corner(Point(1, 99)) == (corners.bottom_left, Corner.BOTTOM_LEFT)


def test_nearest_corner_tie_prefers_first():
    corners = Rect(0, 0, 100, 100).corners()
    assert corners.nearest_corner(Point(50, 50))[1] is Corner.TOP_LEFT


def test_side_at_corner_wins_over_side():
    corners = Rect(100, 100, 200, 100).corners()
    assert corners.side_at(corners.top_left) is Corner.TOP_LEFT
    assert corners.side_at(corners.bottom_right) is Corner.BOTTOM_RIGHT


def test_side_at_sides():
    r = Rect(100, 100, 200, 100)
    corners = r.corners()
    mid_x = r.x + r.width / 2
    mid_y = r.y + r.height / 2
    assert corners.side_at(Point(mid_x, r.y)) is Side.TOP
    assert corners.side_at(Point(mid_x, r.y + r.height)) is Side.BOTTOM
    assert corners.side_at(Point(r.x, mid_y)) is Side.LEFT
    assert corners.side_at(Point(r.x + r.width, mid_y)) is Side.RIGHT


def test_side_at_outside_band_is_none():
    r = Rect(100, 100, 200, 100)
    corners = r.corners()
    assert corners.side_at(Point(r.x + r.width / 2, r.y + r.height / 2)) is None
    assert corners.side_at(Point(r.x + r.width / 2, r.y - FRAME_INTERACTION_AREA)) is None


def test_default_corners_at_origin():
    assert Corners().side_at(Point()) is Corner.TOP_LEFT