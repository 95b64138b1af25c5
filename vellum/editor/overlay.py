# vellum/editor/overlay.py
# Interactive overlay controller: select/drag/resize/edit state machine for floating nodes

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from ..core.debug import debug_print
from ..core.exceptions import DocumentError, InteractionError
from ..core.verbose import vlog_gesture
from .geometry import (
    Geometry,
    Handle,
    MIN_HEIGHT,
    MIN_WIDTH,
    Point,
    drag_geometry,
    handle_at,
    handle_boxes,
    resize_geometry,
)
from .nodes import ABSOLUTE, DocumentNode, NodeKind
from .selection import SelectionState
from .tree import DocumentTree

# reports the laid-out box of a node in local px (None when not rendered)
LayoutProvider = Callable[[str], "Geometry | None"]


class OverlayMode(Enum):
    IDLE = "idle"
    SELECTED = "selected"
    DRAGGING = "dragging"
    RESIZING = "resizing"
    EDITING = "editing"


# * One pointer gesture; origin values are captured at pointer-down & never change
@dataclass(frozen=True, slots=True)
class InteractionSession:
    mode: OverlayMode  # DRAGGING or RESIZING
    target_id: str
    origin_pointer: Point
    origin_geometry: Geometry
    handle: Handle | None = None


@dataclass
class OverlayState:
    mode: OverlayMode = OverlayMode.IDLE
    selected_id: str | None = None
    session: InteractionSession | None = None
    edit_buffer: str = ""

    @property
    def is_gesture_active(self) -> bool:
        return self.session is not None


class OverlayController:

    def __init__(
        self,
        tree: DocumentTree,
        selection: SelectionState,
        layout: LayoutProvider | None = None,
    ):
        self.tree = tree
        self.selection = selection
        self.layout = layout
        self.state = OverlayState()

    @property
    def mode(self) -> OverlayMode:
        return self.state.mode

    @property
    def is_gesture_active(self) -> bool:
        return self.state.is_gesture_active

    # ===== GEOMETRY =====

    # * Current box of a floating node; flow nodes fall back to their laid-out box
    def geometry_of(self, node_id: str) -> Geometry:
        node = self._floating(node_id)
        box = self._box(node)
        if box is not None:
            return box
        attrs = node.attributes
        return Geometry(
            x=0,
            y=0,
            width=attrs.get("width") or MIN_WIDTH,
            height=attrs.get("height") or MIN_HEIGHT,
        )

    # rendered handle rectangles for the selected node (empty when nothing is selected)
    def handles(self) -> dict[Handle, Geometry]:
        selected = self.state.selected_id
        if selected is None or selected not in self.tree:
            return {}
        return handle_boxes(self.geometry_of(selected))

    # * Topmost floating node (or selected node's handle) under the pointer
    def hit_test(self, point: Point) -> tuple[str, Handle | None] | None:
        selected = self.state.selected_id
        if selected is not None and selected in self.tree:
            handle = handle_at(self.geometry_of(selected), point)
            if handle is not None:
                return selected, handle

        for node in reversed(self.tree.floating_nodes()):
            box = self._box(node)
            if box is not None and box.contains(point):
                return node.id, None
        return None

    # ===== SELECTION =====

    def select(self, node_id: str) -> None:
        if self.is_gesture_active:
            raise InteractionError("Cannot change selection during a drag or resize")
        self._floating(node_id)
        if self.state.selected_id == node_id and self.state.mode is not OverlayMode.IDLE:
            return
        if self.state.selected_id is not None:
            self.deselect()

        self.state.selected_id = node_id
        self.state.mode = OverlayMode.SELECTED
        self.selection.select_node(node_id)
        vlog_gesture("select", node_id)

    def deselect(self) -> None:
        if self.is_gesture_active:
            raise InteractionError("Cannot deselect during a drag or resize")
        if self.state.mode is OverlayMode.EDITING:
            self.blur()
        previous = self.state.selected_id
        self.state.selected_id = None
        self.state.mode = OverlayMode.IDLE
        if self.selection.node_id is not None:
            self.selection.clear()
        if previous is not None:
            vlog_gesture("deselect", previous)

    # * Click: select the hit node, keep selection on its handles, otherwise go idle
    def click(self, point: Point) -> None:
        if self.is_gesture_active:
            return
        if self._inside_edited_node(point):
            return

        hit = self.hit_test(point)
        if hit is None:
            self.deselect()
            return

        node_id, handle = hit
        if handle is not None and node_id == self.state.selected_id:
            if self.state.mode is OverlayMode.EDITING:
                self.blur()
            return
        self.select(node_id)

    # ===== GESTURES =====

    def pointer_down(self, point: Point) -> None:
        if self.is_gesture_active:
            debug_print("Ignoring pointer-down during active gesture", "GESTURE")
            return
        if self._inside_edited_node(point):
            return
        if self.state.mode is OverlayMode.EDITING:
            self.blur()

        hit = self.hit_test(point)
        if hit is None:
            self.deselect()
            return

        node_id, handle = hit
        if handle is None:
            self.select(node_id)

        mode = OverlayMode.RESIZING if handle is not None else OverlayMode.DRAGGING
        self.state.session = InteractionSession(
            mode=mode,
            target_id=node_id,
            origin_pointer=point,
            origin_geometry=self.geometry_of(node_id),
            handle=handle,
        )
        self.state.mode = mode
        vlog_gesture(
            f"{mode.value} start",
            node_id,
            f"handle={handle.value}" if handle is not None else None,
        )

    # * Apply the pointer delta to the target; every move is written to the tree immediately
    def pointer_move(self, point: Point) -> None:
        session = self.state.session
        if session is None:
            return
        if session.target_id not in self.tree:
            self._abandon_gesture()
            return

        dx = point.x - session.origin_pointer.x
        dy = point.y - session.origin_pointer.y
        origin = session.origin_geometry

        if session.mode is OverlayMode.DRAGGING:
            geometry = drag_geometry(origin, dx, dy)
            attrs: dict[str, object] = {
                "x": geometry.x,
                "y": geometry.y,
                "positioning": ABSOLUTE,
            }
        else:
            assert session.handle is not None
            geometry = resize_geometry(origin, session.handle, dx, dy)
            attrs = {"width": geometry.width, "height": geometry.height}
            node = self.tree.get(session.target_id)
            moved = (geometry.x, geometry.y) != (origin.x, origin.y)
            if moved or node.attributes.get("positioning") == ABSOLUTE:
                attrs.update({"x": geometry.x, "y": geometry.y, "positioning": ABSOLUTE})

        self.tree.set_attributes(session.target_id, attrs)

    def pointer_up(self, point: Point) -> None:
        session = self.state.session
        if session is None:
            return
        self.pointer_move(point)
        if self.state.session is None:
            return

        self.state.session = None
        self.state.mode = OverlayMode.SELECTED
        node = self.tree.get(session.target_id)
        vlog_gesture(
            f"{session.mode.value} end",
            session.target_id,
            ", ".join(
                f"{k}={node.attributes.get(k)}" for k in ("x", "y", "width", "height")
            ),
        )

    # ===== TEXT BOX EDITING =====

    # * Double-click: text boxes enter editing, other floating nodes are just selected
    def double_click(self, point: Point) -> None:
        if self.is_gesture_active:
            raise InteractionError("Cannot start editing during a drag or resize")
        if self._inside_edited_node(point):
            return
        hit = self.hit_test(point)
        if hit is None:
            return
        node_id, _ = hit
        if self.tree.get(node_id).kind is NodeKind.TEXT_BOX:
            self.begin_edit(node_id)
        else:
            self.select(node_id)

    def begin_edit(self, node_id: str) -> None:
        if self.is_gesture_active:
            raise InteractionError("Cannot start editing during a drag or resize")
        node = self._floating(node_id)
        if node.kind is not NodeKind.TEXT_BOX:
            raise InteractionError(f"{node.kind.value} {node_id} has no editable text")
        self.select(node_id)
        self.state.mode = OverlayMode.EDITING
        self.state.edit_buffer = node.attributes.get("textContent", "")
        vlog_gesture("edit start", node_id)

    def edit_text(self, value: str) -> None:
        if self.state.mode is not OverlayMode.EDITING:
            raise InteractionError("No text box is being edited")
        self.state.edit_buffer = value

    # * Losing focus commits the buffer into the text box
    def blur(self) -> None:
        if self.state.mode is not OverlayMode.EDITING:
            return
        node_id = self.state.selected_id
        buffer = self.state.edit_buffer
        self.state.edit_buffer = ""
        if node_id is None or node_id not in self.tree:
            self.state.selected_id = None
            self.state.mode = OverlayMode.IDLE
            return
        self.tree.set_attributes(node_id, {"textContent": buffer})
        self.state.mode = OverlayMode.SELECTED
        vlog_gesture("edit commit", node_id, f"{len(buffer)} chars")

    # * Drop all overlay state (tree replaced or node removed)
    def reset(self) -> None:
        self.state = OverlayState()
        if self.selection.node_id is not None:
            self.selection.clear()

    # ===== HELPERS =====

    def _floating(self, node_id: str) -> DocumentNode:
        node = self.tree.get(node_id)
        if not node.is_floating:
            raise DocumentError(f"{node.kind.value} {node_id} is not a floating node")
        return node

    # explicit box for absolute nodes, layout box for flow nodes, None if unknown
    def _box(self, node: DocumentNode) -> Geometry | None:
        attrs = node.attributes
        laid_out = self.layout(node.id) if self.layout is not None else None
        width = attrs.get("width")
        height = attrs.get("height")

        if attrs.get("positioning") == ABSOLUTE and attrs.get("x") is not None:
            if width is None:
                width = laid_out.width if laid_out else MIN_WIDTH
            if height is None:
                height = laid_out.height if laid_out else MIN_HEIGHT
            return Geometry(x=attrs["x"], y=attrs.get("y") or 0, width=width, height=height)
        if laid_out is None:
            return None
        return Geometry(
            x=laid_out.x,
            y=laid_out.y,
            width=width if width is not None else laid_out.width,
            height=height if height is not None else laid_out.height,
        )

    def _inside_edited_node(self, point: Point) -> bool:
        if self.state.mode is not OverlayMode.EDITING:
            return False
        node_id = self.state.selected_id
        if node_id is None or node_id not in self.tree:
            return False
        return self.geometry_of(node_id).contains(point)

    def _abandon_gesture(self) -> None:
        session = self.state.session
        self.state = OverlayState()
        if self.selection.node_id is not None:
            self.selection.clear()
        if session is not None:
            vlog_gesture("gesture abandoned", session.target_id, "target removed")
