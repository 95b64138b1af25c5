# vellum/editor/formatting.py
# Toolbar formatting commands applied to the current text selection

from __future__ import annotations

from typing import Any

from ..core.debug import debug_print
from .nodes import (
    ALIGNMENTS,
    DocumentNode,
    NodeKind,
    merge_runs,
    split_run,
)
from .overlay import OverlayController
from .selection import SelectionState
from .tree import DocumentTree

# (block, start offset, end offset) for each block touched by the selection
BlockRange = tuple[DocumentNode, int, int]


class FormattingCommands:
    # Every command returns True when the tree changed & False for a no-op.
    # Commands are no-ops w/out a text selection or while a floating node is mid-gesture.

    def __init__(
        self,
        tree: DocumentTree,
        selection: SelectionState,
        overlay: OverlayController,
    ):
        self.tree = tree
        self.selection = selection
        self.overlay = overlay

    # ===== INLINE MARKS =====

    def toggle_bold(self) -> bool:
        return self._toggle_mark("bold")

    def toggle_italic(self) -> bool:
        return self._toggle_mark("italic")

    def toggle_underline(self) -> bool:
        return self._toggle_mark("underline")

    # set (or clear w/ None) the text color of the selected characters
    def set_color(self, color: str | None) -> bool:
        ranges = self._non_empty_ranges()
        if not ranges:
            return False
        for block, start, end in ranges:
            self._apply_mark(block, start, end, "color", color)
        return True

    # ===== BLOCK COMMANDS =====

    # * Paragraph -> heading(level); same-level heading reverts to paragraph
    def set_heading(self, level: int) -> bool:
        if not 1 <= level <= 6:
            raise ValueError(f"heading level must be 1-6, got {level}")
        ranges = self._ranges()
        if ranges is None:
            return False

        changed = False
        for block, _, _ in ranges:
            align = block.attributes.get("textAlign", "left")
            if block.kind is NodeKind.PARAGRAPH:
                self.tree.retype(
                    block.id, NodeKind.HEADING, {"level": level, "textAlign": align}
                )
                changed = True
            elif block.kind is NodeKind.HEADING:
                if block.attributes.get("level") == level:
                    self.tree.retype(block.id, NodeKind.PARAGRAPH, {"textAlign": align})
                else:
                    self.tree.set_attributes(block.id, {"level": level})
                changed = True
        return changed

    def set_text_align(self, direction: str) -> bool:
        if direction not in ALIGNMENTS:
            raise ValueError(
                f"text alignment must be one of {', '.join(ALIGNMENTS)}, got '{direction}'"
            )
        ranges = self._ranges()
        if ranges is None:
            return False
        for block, _, _ in ranges:
            self.tree.set_attributes(block.id, {"textAlign": direction})
        return bool(ranges)

    # * Wrap selected paragraphs/headings in bullet lists in place, or lift selected list items out
    def toggle_bullet_list(self) -> bool:
        ranges = self._ranges()
        if ranges is None:
            return False
        blocks = [block for block, _, _ in ranges]

        if all(b.kind is NodeKind.LIST_ITEM for b in blocks):
            for block in blocks:
                self._lift_list_item(block.id)
            return True

        root = self.tree.root
        wrap_ids = {
            b.id
            for b in blocks
            if b.kind in (NodeKind.PARAGRAPH, NodeKind.HEADING)
            and self.tree.parent_of(b.id) is root
        }
        if not wrap_ids:
            return False

        # adjacent wrapped blocks share a list; any other block in between starts a new one
        items: DocumentNode | None = None
        children: list[DocumentNode] = []
        for child in root.children:
            if child.id not in wrap_ids:
                items = None
                children.append(child)
                continue
            if items is None:
                items = DocumentNode(NodeKind.BULLET_LIST)
                children.append(items)
            items.children.append(
                DocumentNode(
                    NodeKind.LIST_ITEM,
                    {"textAlign": child.attributes.get("textAlign", "left")},
                    child.children,
                    id=child.id,
                )
            )
        self.tree.replace_children(root.id, children)
        return True

    # ===== SELECTION RESOLUTION =====

    # selected blocks in document order w/ clamped offsets; None when commands must not run
    def _ranges(self) -> list[BlockRange] | None:
        if self.overlay.is_gesture_active:
            debug_print("Formatting ignored during active gesture", "FORMAT")
            return None
        sel = self.selection.text
        if sel is None:
            return None

        blocks = self.tree.text_blocks()
        order = {b.id: i for i, b in enumerate(blocks)}
        if sel.anchor.block_id not in order or sel.head.block_id not in order:
            debug_print("Selection refers to a block no longer in the tree", "FORMAT")
            return None

        start, end = sorted(
            (sel.anchor, sel.head), key=lambda p: (order[p.block_id], p.offset)
        )
        ranges: list[BlockRange] = []
        for block in blocks[order[start.block_id] : order[end.block_id] + 1]:
            length = len(block.text)
            lo = start.offset if block.id == start.block_id else 0
            hi = end.offset if block.id == end.block_id else length
            ranges.append((block, max(0, min(lo, length)), max(0, min(hi, length))))
        return ranges

    def _non_empty_ranges(self) -> list[BlockRange]:
        ranges = self._ranges() or []
        return [(b, lo, hi) for b, lo, hi in ranges if hi > lo]

    # ===== MARK HELPERS =====

    def _toggle_mark(self, mark: str) -> bool:
        ranges = self._non_empty_ranges()
        if not ranges:
            return False
        active = all(self._has_mark(b, lo, hi, mark) for b, lo, hi in ranges)
        for block, lo, hi in ranges:
            self._apply_mark(block, lo, hi, mark, not active)
        return True

    # true if every character in [start, end) carries the mark
    def _has_mark(self, block: DocumentNode, start: int, end: int, mark: str) -> bool:
        pos = 0
        for run in block.children:
            run_end = pos + len(run.text)
            if run_end > start and pos < end and not run.attributes.get(mark):
                return False
            pos = run_end
        return True

    # * Set a mark on [start, end) by splitting runs at the boundaries, then re-merge
    def _apply_mark(
        self, block: DocumentNode, start: int, end: int, mark: str, value: Any
    ) -> None:
        runs: list[DocumentNode] = []
        pos = 0
        for run in block.children:
            value_text = run.text
            run_start, run_end = pos, pos + len(value_text)
            pos = run_end
            if run_end <= start or run_start >= end:
                runs.append(run)
                continue

            cut_lo = max(start, run_start) - run_start
            cut_hi = min(end, run_end) - run_start
            if cut_lo > 0:
                runs.append(split_run(run, value_text[:cut_lo]))
            middle = split_run(run, value_text[cut_lo:cut_hi])
            middle.attributes[mark] = value
            runs.append(middle)
            if cut_hi < len(value_text):
                runs.append(split_run(run, value_text[cut_hi:]))

        self.tree.replace_children(block.id, merge_runs(runs))

    # ===== LIST HELPERS =====

    # replace a list item w/ a paragraph, splitting its list around it
    def _lift_list_item(self, item_id: str) -> None:
        item = self.tree.get(item_id)
        list_node = self.tree.parent_of(item_id)
        assert list_node is not None
        root = self.tree.root
        idx = self.tree.index_in_parent(item_id)
        before = list_node.children[:idx]
        after = list_node.children[idx + 1 :]

        replacement: list[DocumentNode] = []
        if before:
            replacement.append(DocumentNode(NodeKind.BULLET_LIST, {}, before, id=list_node.id))
        replacement.append(
            DocumentNode(
                NodeKind.PARAGRAPH,
                {"textAlign": item.attributes.get("textAlign", "left")},
                item.children,
                id=item.id,
            )
        )
        if after:
            after_list = DocumentNode(NodeKind.BULLET_LIST, {}, after)
            if not before:
                after_list.id = list_node.id
            replacement.append(after_list)

        children: list[DocumentNode] = []
        for child in root.children:
            if child.id == list_node.id:
                children.extend(replacement)
            else:
                children.append(child)
        self.tree.replace_children(root.id, children)
