# vellum/editor/surface.py
# Editor surface: owns one document tree w/ its selection, overlay controller & formatting commands

from __future__ import annotations

from ..ai.types import GenerateResult
from ..core.exceptions import InteractionError
from ..core.verbose import vlog
from .formatting import FormattingCommands
from .nodes import TEXT_BOX_DEFAULTS, DocumentNode, doc, image, paragraph, text_box
from .normalizer import NormalizationDegradation, NormalizeResult, normalize_with_report
from .overlay import LayoutProvider, OverlayController
from .selection import SelectionState, TextPoint, TextSelection
from .tree import DocumentTree


class EditorSurface:

    def __init__(
        self, root: DocumentNode | None = None, layout: LayoutProvider | None = None
    ):
        self.tree = DocumentTree(root)
        self.selection = SelectionState()
        self.overlay = OverlayController(self.tree, self.selection, layout)
        self.commands = FormattingCommands(self.tree, self.selection, self.overlay)
        # blocks degraded by the most recent markdown load
        self.degradations: list[NormalizationDegradation] = []

    @property
    def root(self) -> DocumentNode:
        return self.tree.root

    # * Replace the whole document; overlay state & selection never outlive the old tree
    def set_content(self, root: DocumentNode) -> None:
        self.overlay.reset()
        self.selection.clear()
        self.degradations = []
        self.tree.set_content(root)

    def load_markdown(self, markdown_text: str) -> NormalizeResult:
        result = normalize_with_report(markdown_text)
        self.set_content(result.root)
        self.degradations = result.degradations
        vlog(
            "EDITOR",
            f"Loaded {len(result.root.children)} blocks",
            f"{len(result.degradations)} degraded" if result.degradations else None,
        )
        return result

    # * Apply a finished generation in one step; failures replace the document w/ readable text
    def apply_generation(self, result: GenerateResult) -> bool:
        if result.success:
            self.load_markdown(result.text)
            return True
        message = result.error or "unknown"
        if not message.startswith(("Error:", "Request failed:")):
            message = f"Error: {message}"
        self.set_content(doc(paragraph(message)))
        vlog("EDITOR", "Generation failed", message)
        return False

    # ===== SELECTION =====

    def select_text(
        self, block_id: str, start: int = 0, end: int | None = None
    ) -> TextSelection:
        length = len(self.tree.block_text(block_id))
        end = length if end is None else end
        selection = TextSelection.within(block_id, start, end)
        self.select_range(selection)
        return selection

    # select across blocks; clears any floating-node selection
    def select_range(self, selection: TextSelection) -> None:
        self.tree.block_text(selection.anchor.block_id)
        self.tree.block_text(selection.head.block_id)
        if self.overlay.is_gesture_active:
            raise InteractionError("Cannot select text during a drag or resize")
        if self.overlay.state.selected_id is not None:
            self.overlay.deselect()
        self.selection.select_text(selection)

    # select the text of every block in the document
    def select_all(self) -> TextSelection | None:
        blocks = self.tree.text_blocks()
        if not blocks:
            return None
        first, last = blocks[0], blocks[-1]
        selection = TextSelection(
            TextPoint(first.id, 0), TextPoint(last.id, len(last.text))
        )
        self.select_range(selection)
        return selection

    # ===== FLOATING NODES =====

    def insert_text_box(
        self,
        x: int = TEXT_BOX_DEFAULTS["x"],
        y: int = TEXT_BOX_DEFAULTS["y"],
        width: int = TEXT_BOX_DEFAULTS["width"],
        height: int = TEXT_BOX_DEFAULTS["height"],
        content: str = TEXT_BOX_DEFAULTS["textContent"],
    ) -> str:
        node = text_box(x=x, y=y, width=width, height=height, content=content)
        self.tree.insert(self.root.id, self._insertion_index(), node)
        return node.id

    def insert_image(
        self,
        src: str,
        alt: str = "",
        width: int | None = None,
        height: int | None = None,
        x: int | None = None,
        y: int | None = None,
    ) -> str:
        node = image(src, alt, width, height, x=x, y=y)
        self.tree.insert(self.root.id, self._insertion_index(), node)
        return node.id

    def remove(self, node_id: str) -> None:
        if node_id == self.overlay.state.selected_id:
            self.overlay.reset()
        self.tree.remove(node_id)

    # after the top-level block holding the caret, else at the end
    def _insertion_index(self) -> int:
        sel = self.selection.text
        if sel is None or sel.head.block_id not in self.tree:
            return len(self.root.children)
        node_id = sel.head.block_id
        parent = self.tree.parent_of(node_id)
        while parent is not None and parent is not self.root:
            node_id = parent.id
            parent = self.tree.parent_of(node_id)
        return self.tree.index_in_parent(node_id) + 1
