# re2dfa/ast/nodes.py

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, FrozenSet, Tuple

class NodeKind(Enum):
    SYMBOL = "symbol"
    OR = "or"
    CONCAT = "concat"
    STAR = "star"
    EMPTY = "empty"

@dataclass(frozen=True, repr=False)
class ExpressionNode:
    """
    Base of the expression tree variants.

    Every node carries its annotation: whether it can match the empty string
    and which leaf positions can come first and last in a match. Nodes are
    immutable once built; children are owned by exactly one parent.

    Concatenation chains make trees as deep as the expression is long, so
    nothing here recurses over children: repr only describes the node itself.
    """
    kind: ClassVar[NodeKind]
    nullable: bool
    firstpos: FrozenSet[int]
    lastpos: FrozenSet[int]

    @property
    def children(self) -> Tuple["ExpressionNode", ...]:
        return ()

    def describe(self) -> str:
        """One-line summary: kind, leaf details and the position sets."""
        label = self.kind.value
        if self.kind is NodeKind.SYMBOL:
            label += f": {self.character} @{self.leaf_id}"
        return (f"{label} [nullable: {self.nullable}, firstpos: {_format_positions(self.firstpos)}, "
                f"lastpos: {_format_positions(self.lastpos)}]")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.describe()}>"

@dataclass(frozen=True, repr=False)
class SymbolLeaf(ExpressionNode):
    """One position of a symbol (or of the end marker) in the expression."""
    kind: ClassVar[NodeKind] = NodeKind.SYMBOL
    character: str
    leaf_id: int

@dataclass(frozen=True, repr=False)
class EmptyNode(ExpressionNode):
    kind: ClassVar[NodeKind] = NodeKind.EMPTY

@dataclass(frozen=True, repr=False)
class OrNode(ExpressionNode):
    kind: ClassVar[NodeKind] = NodeKind.OR
    left: ExpressionNode
    right: ExpressionNode

    @property
    def children(self) -> Tuple[ExpressionNode, ...]:
        return (self.left, self.right)

@dataclass(frozen=True, repr=False)
class ConcatNode(ExpressionNode):
    kind: ClassVar[NodeKind] = NodeKind.CONCAT
    left: ExpressionNode
    right: ExpressionNode

    @property
    def children(self) -> Tuple[ExpressionNode, ...]:
        return (self.left, self.right)

@dataclass(frozen=True, repr=False)
class StarNode(ExpressionNode):
    kind: ClassVar[NodeKind] = NodeKind.STAR
    child: ExpressionNode

    @property
    def children(self) -> Tuple[ExpressionNode, ...]:
        return (self.child,)

def _format_positions(positions: FrozenSet[int]) -> str:
    return "{" + ",".join(str(p) for p in sorted(positions)) + "}"

def visualize_tree(node: ExpressionNode, indent=0) -> str:
    lines = []
    stack = [(node, indent)]
    while stack:
        current, depth = stack.pop()
        lines.append(" " * depth + current.describe())
        for child in reversed(current.children):
            stack.append((child, depth + 2))
    return "\n".join(lines)
