# vellum/editor/nodes.py
# Document node variant (shared id/kind/attributes/children shape), kind schema & node constructors

from __future__ import annotations

import re
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, TypeVar

from ..core.exceptions import SchemaError


# * Node kinds; every kind-keyed table in the editor must cover all of these
class NodeKind(Enum):
    DOC = "doc"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    BULLET_LIST = "bulletList"
    LIST_ITEM = "listItem"
    TEXT = "text"
    IMAGE = "image"
    TEXT_BOX = "draggableTextBox"


# text alignment directions accepted on text-bearing blocks
ALIGNMENTS = ("left", "center", "right", "justify")

# positioning modes for floating nodes
FLOW = "flow"
ABSOLUTE = "absolute"

# defaults for a new draggable text box
TEXT_BOX_DEFAULTS: dict[str, Any] = {
    "x": 0,
    "y": 0,
    "width": 200,
    "height": 100,
    "textContent": "Double-click to edit",
}

# inline mark attributes carried by text runs
MARKS = ("bold", "italic", "underline", "color")

TEXT_BEARING = frozenset({NodeKind.PARAGRAPH, NodeKind.HEADING, NodeKind.LIST_ITEM})
FLOATING = frozenset({NodeKind.IMAGE, NodeKind.TEXT_BOX})
ATOMIC = frozenset({NodeKind.TEXT, NodeKind.IMAGE, NodeKind.TEXT_BOX})

# * Allowed child kinds per parent kind
ALLOWED_CHILDREN: dict[NodeKind, frozenset[NodeKind]] = {
    NodeKind.DOC: frozenset(
        {
            NodeKind.PARAGRAPH,
            NodeKind.HEADING,
            NodeKind.BULLET_LIST,
            NodeKind.IMAGE,
            NodeKind.TEXT_BOX,
        }
    ),
    NodeKind.PARAGRAPH: frozenset({NodeKind.TEXT}),
    NodeKind.HEADING: frozenset({NodeKind.TEXT}),
    NodeKind.BULLET_LIST: frozenset({NodeKind.LIST_ITEM}),
    NodeKind.LIST_ITEM: frozenset({NodeKind.TEXT}),
    NodeKind.TEXT: frozenset(),
    NodeKind.IMAGE: frozenset(),
    NodeKind.TEXT_BOX: frozenset(),
}

V = TypeVar("V")


# * Ensure a kind-keyed dispatch table handles every node kind
def check_exhaustive(table: dict[NodeKind, V], name: str) -> dict[NodeKind, V]:
    missing = set(NodeKind) - set(table)
    if missing:
        names = ", ".join(sorted(k.value for k in missing))
        raise TypeError(f"{name} does not handle node kinds: {names}")
    return table


class _IdAllocator:
    def __init__(self) -> None:
        self._next = 1
        self._lock = threading.Lock()

    def allocate(self) -> str:
        with self._lock:
            value = self._next
            self._next += 1
        return f"n{value}"

    # ! ids loaded from disk must never be handed out again in this process
    def reserve(self, node_id: str) -> None:
        match = _ID_PATTERN.fullmatch(node_id)
        if not match:
            return
        with self._lock:
            self._next = max(self._next, int(match.group(1)) + 1)


_ID_PATTERN = re.compile(r"n(\d+)")
_ids = _IdAllocator()


# allocate a process-unique node id
def new_id() -> str:
    return _ids.allocate()


def reserve_id(node_id: str) -> None:
    _ids.reserve(node_id)


@dataclass
class DocumentNode:
    kind: NodeKind
    attributes: dict[str, Any] = field(default_factory=dict)
    children: list["DocumentNode"] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    @property
    def is_floating(self) -> bool:
        return self.kind in FLOATING

    @property
    def is_text_bearing(self) -> bool:
        return self.kind in TEXT_BEARING

    @property
    def is_atomic(self) -> bool:
        return self.kind in ATOMIC

    # concatenated text of a text-bearing block (or a text run's own text)
    @property
    def text(self) -> str:
        if self.kind is NodeKind.TEXT:
            return self.attributes.get("text", "")
        return "".join(c.text for c in self.children if c.kind is NodeKind.TEXT)

    def walk(self) -> Iterator["DocumentNode"]:
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "kind": self.kind.value}
        if self.attributes:
            data["attributes"] = dict(self.attributes)
        if self.children:
            data["children"] = [c.to_dict() for c in self.children]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DocumentNode":
        try:
            kind = NodeKind(data["kind"])
        except (KeyError, ValueError) as e:
            raise SchemaError(f"Invalid node kind in {data!r}") from e

        children = [cls.from_dict(c) for c in data.get("children", [])]
        node_id = data.get("id")
        if node_id:
            reserve_id(node_id)
        node = cls(
            kind=kind,
            attributes=dict(data.get("attributes", {})),
            children=children,
            id=node_id or new_id(),
        )
        validate_children(node)
        return node


# * Raise SchemaError if any child kind is not allowed under node
def validate_children(node: DocumentNode) -> None:
    allowed = ALLOWED_CHILDREN[node.kind]
    for child in node.children:
        if child.kind not in allowed:
            raise SchemaError(
                f"{child.kind.value} is not allowed inside {node.kind.value}"
            )


# ===== CONSTRUCTORS =====


def text(
    value: str,
    *,
    bold: bool = False,
    italic: bool = False,
    underline: bool = False,
    color: str | None = None,
) -> DocumentNode:
    return DocumentNode(
        NodeKind.TEXT,
        {
            "text": value,
            "bold": bold,
            "italic": italic,
            "underline": underline,
            "color": color,
        },
    )


# accept plain strings as unstyled runs
def _runs(items: tuple[DocumentNode | str, ...]) -> list[DocumentNode]:
    return [text(i) if isinstance(i, str) else i for i in items]


def paragraph(*runs: DocumentNode | str, align: str = "left") -> DocumentNode:
    return DocumentNode(NodeKind.PARAGRAPH, {"textAlign": align}, _runs(runs))


def heading(level: int, *runs: DocumentNode | str, align: str = "left") -> DocumentNode:
    if not 1 <= level <= 6:
        raise ValueError(f"heading level must be 1-6, got {level}")
    return DocumentNode(
        NodeKind.HEADING, {"level": level, "textAlign": align}, _runs(runs)
    )


def list_item(*runs: DocumentNode | str, align: str = "left") -> DocumentNode:
    return DocumentNode(NodeKind.LIST_ITEM, {"textAlign": align}, _runs(runs))


def bullet_list(*items: DocumentNode) -> DocumentNode:
    node = DocumentNode(NodeKind.BULLET_LIST, {}, list(items))
    validate_children(node)
    return node


def image(
    src: str,
    alt: str = "",
    width: int | None = None,
    height: int | None = None,
    *,
    x: int | None = None,
    y: int | None = None,
) -> DocumentNode:
    positioned = x is not None and y is not None
    return DocumentNode(
        NodeKind.IMAGE,
        {
            "src": src,
            "alt": alt,
            "width": width,
            "height": height,
            "positioning": ABSOLUTE if positioned else FLOW,
            "x": x if positioned else None,
            "y": y if positioned else None,
        },
    )


def text_box(
    x: int = TEXT_BOX_DEFAULTS["x"],
    y: int = TEXT_BOX_DEFAULTS["y"],
    width: int = TEXT_BOX_DEFAULTS["width"],
    height: int = TEXT_BOX_DEFAULTS["height"],
    content: str = TEXT_BOX_DEFAULTS["textContent"],
) -> DocumentNode:
    return DocumentNode(
        NodeKind.TEXT_BOX,
        {
            "x": x,
            "y": y,
            "width": width,
            "height": height,
            "textContent": content,
            "positioning": ABSOLUTE,
        },
    )


def doc(*blocks: DocumentNode) -> DocumentNode:
    node = DocumentNode(NodeKind.DOC, {}, list(blocks))
    validate_children(node)
    return node


# * Marks of a text run as a comparable tuple
def marks_of(run: DocumentNode) -> tuple[Any, ...]:
    return tuple(run.attributes.get(m) or None for m in MARKS)


# * Merge adjacent text runs w/ identical marks & drop empty runs (keeps the first run's id)
def merge_runs(runs: list[DocumentNode]) -> list[DocumentNode]:
    merged: list[DocumentNode] = []
    for run in runs:
        if not run.attributes.get("text"):
            continue
        if merged and marks_of(merged[-1]) == marks_of(run):
            prev = merged[-1]
            prev.attributes["text"] = prev.attributes["text"] + run.attributes["text"]
            continue
        merged.append(run)
    return merged


# build a text run from an existing one w/ a new text value
def split_run(run: DocumentNode, value: str) -> DocumentNode:
    attrs = dict(run.attributes)
    attrs["text"] = value
    return DocumentNode(NodeKind.TEXT, attrs)


