"""
Direct DFA synthesis from an annotated expression tree.

Each DFA state is a set of leaf positions. Exploration starts from
firstpos(root); for every state R and symbol c the successor is the union of
followpos(p) over the positions p in R that carry c. Sets are deduplicated by
content through a dictionary keyed by frozenset, and every state containing
the end marker's position is accepting.

Features:
- Deterministic discovery order (breadth-first, alphabet order per state)
- Canonical state names derived from the sorted leaf ids
- Per-symbol scans limited to the positions carrying that symbol
- Build statistics and construction logging
"""

from typing import List, Dict, FrozenSet, Set, Any
from collections import deque
import time

from re2dfa.ast.nodes import ExpressionNode
from re2dfa.automata.dfa import DFA
from re2dfa.parser.context import ConversionContext
from re2dfa.utils.logging_config import get_logger

logger = get_logger(__name__)

PositionSet = FrozenSet[int]

def state_name(positions: PositionSet) -> str:
    """Canonical name of a position set, e.g. {1,2,3}."""
    return "{" + ",".join(str(p) for p in sorted(positions)) + "}"

class DFASynthesizer:
    """
    Writes the states and transitions reachable through followpos into a DFA.

    Attributes:
        context: Conversion context holding the followpos and symbol tables
        dfa: Target DFA container
        build_stats: States and transitions created, build time
    """

    def __init__(self, context: ConversionContext, dfa: DFA):
        self.context = context
        self.dfa = dfa
        self.state_names: Dict[PositionSet, str] = {}
        self.discovered: List[PositionSet] = []
        self.build_stats: Dict[str, Any] = {
            'states_created': 0,
            'transitions_created': 0,
            'build_time': 0.0
        }

    def synthesize(self, root: ExpressionNode) -> Dict[PositionSet, str]:
        """
        Explore the position sets reachable from firstpos(root).

        Args:
            root: Annotated, end-marker augmented expression tree

        Returns:
            Dict[FrozenSet[int], str]: Each discovered position set and its
                state name, in discovery order
        """
        start_time = time.time()

        initial = frozenset(root.firstpos)
        self._register(initial, is_initial=True)
        self.dfa.set_initial(self.state_names[initial])

        # Discovery order doubles as the processing order
        unmarked = deque([initial])
        while unmarked:
            current = unmarked.popleft()
            for symbol in self.dfa.alphabet:
                target = self._successor(current, symbol)
                if not target:
                    continue
                if target not in self.state_names:
                    self._register(target)
                    unmarked.append(target)
                self.dfa.set_trans(self.state_names[current], symbol, self.state_names[target])
                self.build_stats['transitions_created'] += 1

        self._mark_final_states()

        self.build_stats['build_time'] = time.time() - start_time
        logger.info(f"[SYNTH] Built DFA with {self.build_stats['states_created']} states and "
                    f"{self.build_stats['transitions_created']} transitions "
                    f"from {self.context.leaf_count} leaf positions")
        return dict(self.state_names)

    def _register(self, positions: PositionSet, is_initial: bool = False) -> None:
        name = state_name(positions)
        self.dfa.create_state(name, is_initial)
        self.state_names[positions] = name
        self.discovered.append(positions)
        self.build_stats['states_created'] += 1
        logger.debug(f"[SYNTH] New state {name}")

    def _successor(self, positions: PositionSet, symbol: str) -> PositionSet:
        """Union of followpos over the positions in the set that carry symbol."""
        result: Set[int] = set()
        for p in positions & self.context.positions_for(symbol):
            assert p in self.context.followpos, f"Leaf position {p} missing from followpos table"
            result |= self.context.followpos[p]
        return frozenset(result)

    def _mark_final_states(self) -> None:
        end_id = self.context.end_leaf_id
        assert end_id is not None, "Expression tree has no end marker"
        for positions in self.discovered:
            if end_id in positions:
                self.dfa.make_final(self.state_names[positions])

    def get_build_statistics(self) -> Dict[str, Any]:
        return dict(self.build_stats, leaf_positions=self.context.leaf_count)
