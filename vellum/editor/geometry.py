# vellum/editor/geometry.py
# Pure geometry for floating-node gestures: drag offsets, 8-handle resize w/ minimum size floor, hit testing

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

# floor applied to every resize
MIN_WIDTH = 50
MIN_HEIGHT = 50

# side length of a rendered resize handle, in px
HANDLE_SIZE = 8


@dataclass(frozen=True, slots=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Geometry:
    x: float
    y: float
    width: float
    height: float

    def contains(self, point: Point) -> bool:
        return (
            self.x <= point.x <= self.x + self.width
            and self.y <= point.y <= self.y + self.height
        )

    def as_attributes(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


# * Resize handles around a selected node; value is the name used by renderers & the CLI
class Handle(Enum):
    TOP = "top"
    TOP_RIGHT = "top-right"
    RIGHT = "right"
    BOTTOM_RIGHT = "bottom-right"
    BOTTOM = "bottom"
    BOTTOM_LEFT = "bottom-left"
    LEFT = "left"
    TOP_LEFT = "top-left"

    # horizontal edge moved by this handle: -1 left, +1 right, 0 none
    @property
    def dx_sign(self) -> int:
        if self in (Handle.LEFT, Handle.TOP_LEFT, Handle.BOTTOM_LEFT):
            return -1
        if self in (Handle.RIGHT, Handle.TOP_RIGHT, Handle.BOTTOM_RIGHT):
            return 1
        return 0

    # vertical edge moved by this handle: -1 top, +1 bottom, 0 none
    @property
    def dy_sign(self) -> int:
        if self in (Handle.TOP, Handle.TOP_LEFT, Handle.TOP_RIGHT):
            return -1
        if self in (Handle.BOTTOM, Handle.BOTTOM_LEFT, Handle.BOTTOM_RIGHT):
            return 1
        return 0


# * Move by the pointer delta, no smoothing & no clamping to any boundary
def drag_geometry(origin: Geometry, dx: float, dy: float) -> Geometry:
    return replace(origin, x=origin.x + dx, y=origin.y + dy)


# * Resize along the handle's axes; left/top handles keep the opposite edge fixed
def resize_geometry(
    origin: Geometry,
    handle: Handle,
    dx: float,
    dy: float,
    min_width: float = MIN_WIDTH,
    min_height: float = MIN_HEIGHT,
) -> Geometry:
    x, y, width, height = origin.x, origin.y, origin.width, origin.height

    if handle.dx_sign > 0:
        width = max(min_width, origin.width + dx)
    elif handle.dx_sign < 0:
        width = max(min_width, origin.width - dx)
        x = origin.x + origin.width - width

    if handle.dy_sign > 0:
        height = max(min_height, origin.height + dy)
    elif handle.dy_sign < 0:
        height = max(min_height, origin.height - dy)
        y = origin.y + origin.height - height

    return Geometry(x=x, y=y, width=width, height=height)


# * Square hit areas for the 8 handles, centered on corners & edge midpoints
def handle_boxes(box: Geometry, size: float = HANDLE_SIZE) -> dict[Handle, Geometry]:
    half = size / 2
    xs = {-1: box.x, 0: box.x + box.width / 2, 1: box.x + box.width}
    ys = {-1: box.y, 0: box.y + box.height / 2, 1: box.y + box.height}
    return {
        h: Geometry(xs[h.dx_sign] - half, ys[h.dy_sign] - half, size, size)
        for h in Handle
    }


# * Handle under the pointer, if any
def handle_at(box: Geometry, point: Point, size: float = HANDLE_SIZE) -> Handle | None:
    for handle, area in handle_boxes(box, size).items():
        if area.contains(point):
            return handle
    return None
