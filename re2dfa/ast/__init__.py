# re2dfa/ast/__init__.py

from .nodes import (
    NodeKind, ExpressionNode, SymbolLeaf, EmptyNode, OrNode, ConcatNode, StarNode,
    visualize_tree
)

__all__ = [
    'NodeKind',
    'ExpressionNode',
    'SymbolLeaf',
    'EmptyNode',
    'OrNode',
    'ConcatNode',
    'StarNode',
    'visualize_tree'
]
