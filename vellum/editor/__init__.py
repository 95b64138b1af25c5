# vellum/editor/__init__.py
# Rich-text document model: nodes, tree, normalizer, overlay controller & formatting commands

from .nodes import DocumentNode, NodeKind
from .normalizer import normalize, normalize_with_report
from .surface import EditorSurface
from .tree import DocumentTree

__all__ = [
    "DocumentNode",
    "NodeKind",
    "DocumentTree",
    "EditorSurface",
    "normalize",
    "normalize_with_report",
]
