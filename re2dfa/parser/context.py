# re2dfa/parser/context.py

from dataclasses import dataclass, field
from typing import Dict, Set, Optional, Iterable
from .error_handler import ErrorHandler, RegexSyntaxError

@dataclass
class ConversionContext:
    """
    State owned by a single conversion.

    Holds the leaf arena (leaf id -> character), the followpos table, the
    symbol-to-positions index and the nesting counter. A fresh context is
    created for every conversion so leaf ids always start at 1.
    """

    error_handler: ErrorHandler = field(default_factory=ErrorHandler)
    expression: str = ""
    max_nesting: int = 100
    nesting_level: int = 0
    leaves: Dict[int, str] = field(default_factory=dict)
    followpos: Dict[int, Set[int]] = field(default_factory=dict)
    symbol_positions: Dict[str, Set[int]] = field(default_factory=dict)
    end_leaf_id: Optional[int] = None
    _next_leaf_id: int = field(default=1, init=False, repr=False)

    def new_leaf(self, character: str) -> int:
        """Allocate the next leaf id for a leaf carrying character."""
        leaf_id = self._next_leaf_id
        self._next_leaf_id += 1
        self.leaves[leaf_id] = character
        self.followpos[leaf_id] = set()
        self.symbol_positions.setdefault(character, set()).add(leaf_id)
        return leaf_id

    def add_followpos(self, positions: Iterable[int], targets: Iterable[int]) -> None:
        targets = frozenset(targets)
        for p in positions:
            self.followpos[p].update(targets)

    def positions_for(self, character: str) -> Set[int]:
        return self.symbol_positions.get(character, set())

    @property
    def leaf_count(self) -> int:
        return len(self.leaves)

    def enter_scope(self, position: int = 0):
        """Enter a new nesting level"""
        self.nesting_level += 1
        if self.nesting_level > self.max_nesting:
            raise RegexSyntaxError(
                f"Maximum nesting level ({self.max_nesting}) exceeded",
                position, self.expression
            )

    def exit_scope(self):
        """Exit current nesting level"""
        self.nesting_level -= 1
