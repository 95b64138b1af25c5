# vellum/editor/tree.py
# Document tree w/ id lookup, parent lookup, schema-checked insert/remove & the never-empty root invariant

from __future__ import annotations

from typing import Any, Iterator

from ..core.exceptions import DocumentError, NodeNotFoundError, SchemaError
from .nodes import (
    ALLOWED_CHILDREN,
    DocumentNode,
    NodeKind,
    TEXT_BEARING,
    doc,
    paragraph,
)


class DocumentTree:
    # In-memory resume document rooted at a single doc node.
    # All mutations go through this class so the id index & revision stay coherent.

    def __init__(self, root: DocumentNode | None = None):
        self._root = doc(paragraph())
        self._index: dict[str, DocumentNode] = {}
        self._parents: dict[str, DocumentNode] = {}
        self.revision = 0
        self.set_content(root if root is not None else self._root)

    @property
    def root(self) -> DocumentNode:
        return self._root

    # ===== QUERIES =====

    def find(self, node_id: str) -> DocumentNode | None:
        return self._index.get(node_id)

    def get(self, node_id: str) -> DocumentNode:
        node = self._index.get(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return node

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def parent_of(self, node_id: str) -> DocumentNode | None:
        self.get(node_id)
        return self._parents.get(node_id)

    def index_in_parent(self, node_id: str) -> int:
        parent = self.parent_of(node_id)
        if parent is None:
            return 0
        return next(i for i, c in enumerate(parent.children) if c.id == node_id)

    def walk(self) -> Iterator[DocumentNode]:
        return self._root.walk()

    # paragraphs, headings & list items in document order
    def text_blocks(self) -> list[DocumentNode]:
        return [n for n in self.walk() if n.kind in TEXT_BEARING]

    def floating_nodes(self) -> list[DocumentNode]:
        return [n for n in self.walk() if n.is_floating]

    def block_text(self, block_id: str) -> str:
        block = self.get(block_id)
        if block.kind not in TEXT_BEARING:
            raise DocumentError(f"{block.kind.value} {block_id} does not hold text")
        return block.text

    # position of a node in pre-order traversal (used to order selection endpoints)
    def document_order(self, node_id: str) -> int:
        self.get(node_id)
        for i, node in enumerate(self.walk()):
            if node.id == node_id:
                return i
        raise NodeNotFoundError(node_id)

    # ===== MUTATIONS =====

    # * Merge partial attributes into a node; unknown id leaves the tree untouched
    def set_attributes(self, node_id: str, partial: dict[str, Any]) -> None:
        node = self.get(node_id)
        node.attributes.update(partial)
        self.revision += 1

    def insert(self, parent_id: str, index: int, node: DocumentNode) -> None:
        parent = self.get(parent_id)
        _check_schema(parent.kind, [node])
        self._check_ids([node])

        index = max(0, min(index, len(parent.children)))
        parent.children.insert(index, node)
        self._register(node, parent)
        self.revision += 1

    # append after the last child of parent
    def append(self, parent_id: str, node: DocumentNode) -> None:
        self.insert(parent_id, len(self.get(parent_id).children), node)

    # * Remove a node; empty lists go w/ their last item & an empty root gets a placeholder paragraph
    def remove(self, node_id: str) -> DocumentNode:
        node = self.get(node_id)
        parent = self._parents.get(node_id)
        if parent is None:
            raise DocumentError("The document root cannot be removed")

        parent.children = [c for c in parent.children if c.id != node_id]
        self._unregister(node)
        self.revision += 1

        if parent.kind is NodeKind.BULLET_LIST and not parent.children:
            self.remove(parent.id)
        elif parent is self._root and not parent.children:
            self.append(self._root.id, paragraph())
        return node

    # * Change a node's kind in place, keeping its id & children
    def retype(
        self, node_id: str, kind: NodeKind, attributes: dict[str, Any] | None = None
    ) -> None:
        node = self.get(node_id)
        parent = self._parents.get(node_id)
        if parent is not None and kind not in ALLOWED_CHILDREN[parent.kind]:
            raise SchemaError(f"{kind.value} is not allowed inside {parent.kind.value}")
        _check_schema(kind, node.children)
        node.kind = kind
        if attributes is not None:
            node.attributes = dict(attributes)
        self.revision += 1

    # * Replace all children of a node (schema & id checked, re-indexed)
    def replace_children(self, node_id: str, children: list[DocumentNode]) -> None:
        node = self.get(node_id)
        _check_schema(node.kind, children)
        # ids under the outgoing children may be reused by the new ones
        self._check_ids(children, replacing={n.id for c in node.children for n in c.walk()})
        for child in node.children:
            self._unregister(child)
        node.children = list(children)
        for child in node.children:
            self._register(child, node)
        self.revision += 1

        if node is self._root and not node.children:
            self.append(node.id, paragraph())

    # * Replace the whole tree in one step (used when a generation result arrives)
    def set_content(self, root: DocumentNode) -> None:
        if root.kind is not NodeKind.DOC:
            raise SchemaError(f"Document root must be doc, got {root.kind.value}")
        _check_schema(NodeKind.DOC, root.children)
        self._check_ids([root], replacing=set(self._index))
        if not root.children:
            root.children.append(paragraph())

        self._root = root
        self._index = {}
        self._parents = {}
        self._register(root, None)
        self.revision += 1

    def to_dict(self) -> dict[str, Any]:
        return self._root.to_dict()

    # ===== INDEX MAINTENANCE =====

    def _register(self, node: DocumentNode, parent: DocumentNode | None) -> None:
        self._index[node.id] = node
        if parent is not None:
            self._parents[node.id] = parent
        for child in node.children:
            self._register(child, node)

    def _unregister(self, node: DocumentNode) -> None:
        for n in node.walk():
            self._index.pop(n.id, None)
            self._parents.pop(n.id, None)

    # new subtrees must not repeat an id, among themselves or against the tree
    def _check_ids(
        self, nodes: list[DocumentNode], replacing: set[str] | frozenset[str] = frozenset()
    ) -> None:
        seen: set[str] = set()
        for node in nodes:
            for n in node.walk():
                if n.id in seen:
                    raise DocumentError(f"Duplicate node id in document: {n.id}")
                if n.id in self._index and n.id not in replacing:
                    raise DocumentError(f"Node id already in tree: {n.id}")
                seen.add(n.id)


# * Every node at every depth must be an allowed child of its parent's kind
def _check_schema(parent_kind: NodeKind, nodes: list[DocumentNode]) -> None:
    for node in nodes:
        if node.kind not in ALLOWED_CHILDREN[parent_kind]:
            raise SchemaError(
                f"{node.kind.value} is not allowed inside {parent_kind.value}"
            )
        _check_schema(node.kind, node.children)
