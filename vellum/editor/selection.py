# vellum/editor/selection.py
# Editor selection: nothing, a text range, or one floating node (entering one clears the other)

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TextPoint:
    block_id: str  # paragraph, heading or list item
    offset: int  # character offset into the block's concatenated text


@dataclass(frozen=True, slots=True)
class TextSelection:
    anchor: TextPoint
    head: TextPoint

    @property
    def is_collapsed(self) -> bool:
        return self.anchor == self.head

    # select a whole block or a range inside it
    @classmethod
    def within(cls, block_id: str, start: int, end: int) -> "TextSelection":
        return cls(TextPoint(block_id, start), TextPoint(block_id, end))


class SelectionState:
    # Shared by the overlay controller & formatting commands of one editor surface

    def __init__(self) -> None:
        self._text: TextSelection | None = None
        self._node_id: str | None = None

    @property
    def text(self) -> TextSelection | None:
        return self._text

    @property
    def node_id(self) -> str | None:
        return self._node_id

    @property
    def is_empty(self) -> bool:
        return self._text is None and self._node_id is None

    def select_text(self, selection: TextSelection) -> None:
        self._text = selection
        self._node_id = None

    def select_node(self, node_id: str) -> None:
        self._node_id = node_id
        self._text = None

    def clear(self) -> None:
        self._text = None
        self._node_id = None
