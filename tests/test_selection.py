import pytest
from PIL import Image

from snipframe.geometry import Corner, Point, Rect, Size
from snipframe.selection import (
    Create,
    Idle,
    Move,
    Resize,
    Selection,
    Speed,
)


def _gradient(width, height):
    return bytes(
        value
        for y in range(height)
        for x in range(width)
        for value in (x, y, (x + y) % 256, 255)
    )


def test_speed_factors():
    assert Speed().factor() == 1.0
    assert Speed(slow=True).factor() == 0.1
    assert Speed(slow=True, has_speed_changed=True).factor() == 0.1


def test_speed_equality_depends_on_change_flag():
    assert Speed(slow=True, has_speed_changed=True) == Speed(slow=True, has_speed_changed=True)
    assert not (Speed(slow=True) == Speed(slow=True, has_speed_changed=True))


def test_at_creates_empty_idle_selection():
    sel = Selection.at(Point(5.0, 7.0))
    assert sel.pos() == Point(5.0, 7.0)
    assert sel.size() == Size(0.0, 0.0)
    assert sel.is_idle()


def test_default_status_is_idle():
    assert Selection().is_idle()
    assert not Selection().is_move()


def test_status_predicates():
    rect = Rect(0, 0, 1, 1)
    resize = Selection(rect, Resize(rect, Point(), Corner.TOP_LEFT))
    move = Selection(rect, Move(Point(), Point()))
    create = Selection(rect, Create())
    assert resize.is_resize() and not resize.is_move()
    assert move.is_move() and not move.is_create()
    assert create.is_create() and not create.is_idle()


def test_norm_makes_size_non_negative_and_keeps_status():
    sel = Selection(Rect(10, 10, -4, -6), Create())
    normed = sel.norm()
    assert normed.size().width >= 0 and normed.size().height >= 0
    assert normed.corners() == sel.corners()
    assert normed.is_create()


def test_norm_is_idempotent():
    sel = Selection(Rect(3, 4, -2, 5))
    assert sel.norm().norm() == sel.norm()


def test_with_methods_keep_status():
    status = Move(Point(1, 1), Point(2, 2))
    sel = Selection(Rect(1, 2, 3, 4), status)
    changed = (
        sel.with_x(lambda x: x + 1)
        .with_y(lambda y: y + 1)
        .with_width(lambda w: w * 2)
        .with_height(lambda h: h * 2)
    )
    assert changed.status == status
    assert changed.rect == Rect(2, 3, 6, 8)


def test_with_size_and_pos():
    sel = Selection.at(Point(0, 0)).with_size(lambda _: Size(10, 20))
    assert sel.size() == Size(10, 20)
    moved = sel.with_pos(lambda p: p + Point(5, 5))
    assert moved.pos() == Point(5, 5)
    assert moved.size() == sel.size()


def test_contains_delegates_to_rect():
    sel = Selection(Rect(0, 0, 10, 10))
    assert sel.contains(Point(5, 5))
    assert not sel.contains(Point(15, 5))


def test_selection_is_immutable():
    sel = Selection()
    with pytest.raises(AttributeError):
        sel.rect = Rect(1, 1, 1, 1)


def test_crop_takes_pixels_from_selection():
    width, height = 8, 6
    pixels = _gradient(width, height)
    source = Image.frombytes("RGBA", (width, height), pixels)
    cropped = Selection(Rect(2, 1, 3, 4)).crop(width, height, pixels)
    assert cropped.size == (3, 4)
    for cx in range(3):
        for cy in range(4):
            assert cropped.getpixel((cx, cy)) == source.getpixel((2 + cx, 1 + cy))


def test_crop_is_clamped_to_image():
    width, height = 8, 6
    cropped = Selection(Rect(6, 4, 50, 50)).crop(width, height, _gradient(width, height))
    assert cropped.size == (width - 6, height - 4)


def test_crop_negative_position_saturates_to_zero():
    width, height = 4, 4
    pixels = _gradient(width, height)
    cropped = Selection(Rect(-3, -3, 2, 2)).crop(width, height, pixels)
    source = Image.frombytes("RGBA", (width, height), pixels)
    assert cropped.getpixel((0, 0)) == source.getpixel((0, 0))


def test_full_crop_round_trips_pixels():
    width, height = 5, 3
    pixels = _gradient(width, height)
    cropped = Selection(Rect(0, 0, width, height)).crop(width, height, pixels)
    assert cropped.tobytes() == pixels


def test_crop_rejects_short_buffer():
    with pytest.raises(ValueError):
        Selection(Rect(0, 0, 1, 1)).crop(4, 4, bytes(10))