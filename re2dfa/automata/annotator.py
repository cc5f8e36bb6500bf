"""
Position annotation for expression trees.

The annotator is the node factory used by the parser: every node is built
strictly after its children and receives its nullable, firstpos and lastpos
attributes at construction time. Concatenation and star nodes additionally
write followpos entries for the leaf positions of their children into the
conversion context.

Rules:
- symbol / end marker: not nullable, firstpos = lastpos = {self}
- empty: nullable, no positions
- or: nullable if either side is, positions are the unions
- concat: nullable if both sides are; the right side's firstpos joins only
  when the left is nullable, the left side's lastpos joins only when the
  right is nullable; every p in lastpos(left) is followed by firstpos(right)
- star: nullable; positions of the child; every p in lastpos(child) is
  followed by firstpos(child)
"""

from typing import Dict, Any

from re2dfa.ast.nodes import (
    ExpressionNode, SymbolLeaf, EmptyNode, OrNode, ConcatNode, StarNode, NodeKind
)
from re2dfa.parser.context import ConversionContext
from re2dfa.utils.logging_config import get_logger

logger = get_logger(__name__)

EMPTY_POSITIONS = frozenset()

class PositionAnnotator:
    """
    Builds annotated expression nodes on top of a conversion context.

    Attributes:
        context: Conversion context receiving leaf ids and followpos writes
        stats: Count of nodes built per kind
    """

    def __init__(self, context: ConversionContext):
        self.context = context
        self.stats: Dict[str, Any] = {kind.value: 0 for kind in NodeKind}

    def symbol(self, character: str) -> SymbolLeaf:
        """Create a new leaf position carrying character."""
        leaf_id = self.context.new_leaf(character)
        self.stats[NodeKind.SYMBOL.value] += 1
        positions = frozenset((leaf_id,))
        return SymbolLeaf(nullable=False, firstpos=positions, lastpos=positions,
                          character=character, leaf_id=leaf_id)

    def end_marker(self, character: str) -> SymbolLeaf:
        """Create the end marker leaf; its id identifies accepting states."""
        if self.context.end_leaf_id is not None:
            raise ValueError("End marker already created for this conversion")
        leaf = self.symbol(character)
        self.context.end_leaf_id = leaf.leaf_id
        logger.debug(f"End marker {character!r} assigned leaf id {leaf.leaf_id}")
        return leaf

    def empty(self) -> EmptyNode:
        self.stats[NodeKind.EMPTY.value] += 1
        return EmptyNode(nullable=True, firstpos=EMPTY_POSITIONS, lastpos=EMPTY_POSITIONS)

    def union(self, left: ExpressionNode, right: ExpressionNode) -> OrNode:
        self.stats[NodeKind.OR.value] += 1
        return OrNode(
            nullable=left.nullable or right.nullable,
            firstpos=left.firstpos | right.firstpos,
            lastpos=left.lastpos | right.lastpos,
            left=left,
            right=right,
        )

    def concat(self, left: ExpressionNode, right: ExpressionNode) -> ConcatNode:
        self.stats[NodeKind.CONCAT.value] += 1
        self.context.add_followpos(left.lastpos, right.firstpos)

        firstpos = left.firstpos | right.firstpos if left.nullable else left.firstpos
        lastpos = right.lastpos | left.lastpos if right.nullable else right.lastpos
        return ConcatNode(
            nullable=left.nullable and right.nullable,
            firstpos=firstpos,
            lastpos=lastpos,
            left=left,
            right=right,
        )

    def star(self, child: ExpressionNode) -> StarNode:
        self.stats[NodeKind.STAR.value] += 1
        self.context.add_followpos(child.lastpos, child.firstpos)
        return StarNode(
            nullable=True,
            firstpos=child.firstpos,
            lastpos=child.lastpos,
            child=child,
        )

    def annotate(self, node: ExpressionNode) -> ExpressionNode:
        """
        Rebuild a subtree bottom-up through this annotator.

        Leaves get fresh ids in this annotator's context, in left-to-right
        order, so a tree built by hand (or by another context) can be
        re-annotated in isolation. The end marker is not recognised here; call
        end_marker explicitly. The walk uses an explicit stack, so arbitrarily
        long concatenation chains are fine.

        Args:
            node: Root of the subtree to rebuild

        Returns:
            ExpressionNode: An equivalent, freshly annotated subtree
        """
        built = []
        stack = [(node, False)]
        while stack:
            current, expanded = stack.pop()
            if current.kind is NodeKind.SYMBOL:
                built.append(self.symbol(current.character))
            elif current.kind is NodeKind.EMPTY:
                built.append(self.empty())
            elif not expanded:
                stack.append((current, True))
                stack.extend((child, False) for child in reversed(current.children))
            else:
                arity = len(current.children)
                operands = built[-arity:]
                del built[-arity:]
                built.append(self._combine(current.kind, operands))
        return built.pop()

    def _combine(self, kind: NodeKind, operands) -> ExpressionNode:
        if kind is NodeKind.OR:
            return self.union(*operands)
        if kind is NodeKind.CONCAT:
            return self.concat(*operands)
        if kind is NodeKind.STAR:
            return self.star(*operands)
        raise ValueError(f"Unknown node kind: {kind}")
