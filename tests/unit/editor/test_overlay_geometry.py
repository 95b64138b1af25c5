# tests/unit/editor/test_overlay_geometry.py
# Unit tests for pure drag/resize geometry & handle hit areas

import pytest

from vellum.editor.geometry import (
    MIN_HEIGHT,
    MIN_WIDTH,
    Geometry,
    Handle,
    Point,
    drag_geometry,
    handle_at,
    handle_boxes,
    resize_geometry,
)

BOX = Geometry(100, 100, 200, 100)


class TestDrag:

    # * Verify drag applies the exact pointer delta w/ no clamping
    @pytest.mark.parametrize("dx,dy", [(37, -20), (-500, -500), (0.5, 1000)])
    def test_exact_delta(self, dx, dy):
        moved = drag_geometry(BOX, dx, dy)
        assert (moved.x, moved.y) == (BOX.x + dx, BOX.y + dy)
        assert (moved.width, moved.height) == (BOX.width, BOX.height)


class TestResize:

    def test_right_handle_grows_width_only(self):
        assert resize_geometry(BOX, Handle.RIGHT, 30, 0) == Geometry(100, 100, 230, 100)

    def test_right_handle_ignores_vertical_delta(self):
        assert resize_geometry(BOX, Handle.RIGHT, 30, 75) == Geometry(100, 100, 230, 100)

    # * Verify top-left resize keeps the bottom-right corner fixed
    def test_top_left_moves_origin(self):
        out = resize_geometry(BOX, Handle.TOP_LEFT, 20, 10)
        assert out == Geometry(120, 110, 180, 90)
        assert out.x + out.width == BOX.x + BOX.width
        assert out.y + out.height == BOX.y + BOX.height

    def test_bottom_handle(self):
        assert resize_geometry(BOX, Handle.BOTTOM, 99, 25) == Geometry(100, 100, 200, 125)

    @pytest.mark.parametrize("handle", list(Handle))
    def test_floor_holds_for_every_handle(self, handle):
        out = resize_geometry(BOX, handle, 10_000 * -handle.dx_sign, 10_000 * -handle.dy_sign)
        assert out.width >= MIN_WIDTH
        assert out.height >= MIN_HEIGHT

    def test_left_floor_keeps_right_edge(self):
        out = resize_geometry(BOX, Handle.LEFT, 1_000, 0)
        assert out.width == MIN_WIDTH
        assert out.x == BOX.x + BOX.width - MIN_WIDTH

    # * Verify a chain of resizes never drops below the floor
    def test_repeated_resizes(self):
        box = BOX
        for handle, dx, dy in [
            (Handle.BOTTOM_RIGHT, -180, -90),
            (Handle.TOP_LEFT, 40, 40),
            (Handle.RIGHT, -5, 0),
            (Handle.BOTTOM, 0, -1),
        ]:
            box = resize_geometry(box, handle, dx, dy)
            assert box.width >= 50 and box.height >= 50


class TestHandles:

    def test_eight_handles(self):
        boxes = handle_boxes(BOX)
        assert set(boxes) == set(Handle)
        assert len(boxes) == 8

    def test_handle_centers(self):
        boxes = handle_boxes(BOX, size=8)
        right = boxes[Handle.RIGHT]
        assert (right.x + 4, right.y + 4) == (300, 150)
        top_left = boxes[Handle.TOP_LEFT]
        assert (top_left.x + 4, top_left.y + 4) == (100, 100)

    def test_handle_at(self):
        assert handle_at(BOX, Point(301, 149)) is Handle.RIGHT
        assert handle_at(BOX, Point(100, 100)) is Handle.TOP_LEFT
        assert handle_at(BOX, Point(200, 150)) is None

    def test_contains_is_inclusive(self):
        assert BOX.contains(Point(100, 100))
        assert BOX.contains(Point(300, 200))
        assert not BOX.contains(Point(301, 200))
