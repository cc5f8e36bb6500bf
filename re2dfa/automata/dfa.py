"""
DFA container and alphabet used as the target of DFA synthesis.

The synthesizer only talks to this module through create_state, set_initial,
set_trans and make_final. Everything else here is the read side: lookups,
validation, reachability and tabular exports for inspection.

Features:
- Named states with initial / final flags
- Deterministic transition table with conflict detection
- Structural validation and reachability analysis
- Export to a pandas DataFrame and to a numpy index matrix
"""

from typing import List, Dict, Set, Optional, Any, Iterator
from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from re2dfa.parser.tokens import is_symbol_char
from re2dfa.utils.logging_config import get_logger

logger = get_logger(__name__)

# Marker for "no transition" in the index matrix
FAIL_STATE = -1

class Alphabet:
    """
    Distinct symbol characters of an expression, in sorted order.

    Operators and unsupported characters are not part of the alphabet.
    """

    def __init__(self, expression: str):
        self.symbols: List[str] = sorted({ch for ch in expression if is_symbol_char(ch)})

    def __iter__(self) -> Iterator[str]:
        return iter(self.symbols)

    def __len__(self) -> int:
        return len(self.symbols)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.symbols

    def __repr__(self) -> str:
        return f"Alphabet({''.join(self.symbols)!r})"

@dataclass
class DFAState:
    """
    A named DFA state.

    Attributes:
        name: Unique state name
        is_initial: Whether this is the initial state
        is_final: Whether this is an accepting state
        transitions: Symbol -> target state name
    """
    name: str
    is_initial: bool = False
    is_final: bool = False
    transitions: Dict[str, str] = field(default_factory=dict)

    def __repr__(self):
        flags = ("(initial)" if self.is_initial else "") + ("(final)" if self.is_final else "")
        return f"{self.name}{flags}"

class DFA:
    """
    Deterministic finite automaton over a fixed alphabet.

    States are kept in creation order. A missing transition means the
    automaton rejects on that symbol; there is no explicit dead state.

    Thread Safety:
        Single writer assumed. Reads are safe once construction is finished.
    """

    def __init__(self, alphabet: Alphabet):
        self.alphabet = alphabet
        self._states: Dict[str, DFAState] = {}
        self._initial: Optional[str] = None

    # ========= Construction ==========
    def create_state(self, name: str, is_initial: bool = False) -> DFAState:
        """
        Create a new named state.

        Raises:
            ValueError: If a state with this name already exists
        """
        if name in self._states:
            raise ValueError(f"State {name!r} already exists")
        state = DFAState(name=name)
        self._states[name] = state
        if is_initial:
            self.set_initial(name)
        logger.debug(f"Created state {name}")
        return state

    def set_initial(self, name: str) -> None:
        state = self._get(name)
        if self._initial is not None and self._initial != name:
            self._states[self._initial].is_initial = False
        state.is_initial = True
        self._initial = name

    def set_trans(self, from_name: str, symbol: str, to_name: str) -> None:
        """
        Record the transition from_name --symbol--> to_name.

        Raises:
            ValueError: If a state is unknown, the symbol is outside the
                alphabet, or a different target is already recorded
        """
        source = self._get(from_name)
        self._get(to_name)
        if symbol not in self.alphabet:
            raise ValueError(f"Symbol {symbol!r} is not in the alphabet {self.alphabet.symbols}")
        existing = source.transitions.get(symbol)
        if existing is not None and existing != to_name:
            raise ValueError(
                f"Non-deterministic transition from {from_name} on {symbol!r}: {existing} vs {to_name}"
            )
        source.transitions[symbol] = to_name

    def make_final(self, name: str) -> None:
        self._get(name).is_final = True

    def _get(self, name: str) -> DFAState:
        try:
            return self._states[name]
        except KeyError:
            raise ValueError(f"Unknown state {name!r}") from None

    # ========= Queries ==========
    @property
    def initial_state(self) -> Optional[str]:
        return self._initial

    @property
    def states(self) -> List[str]:
        return list(self._states)

    @property
    def final_states(self) -> List[str]:
        return [name for name, state in self._states.items() if state.is_final]

    @property
    def state_count(self) -> int:
        return len(self._states)

    @property
    def transition_count(self) -> int:
        return sum(len(state.transitions) for state in self._states.values())

    def get_state(self, name: str) -> DFAState:
        return self._get(name)

    def get_trans(self, name: str, symbol: str) -> Optional[str]:
        return self._get(name).transitions.get(symbol)

    def is_final(self, name: str) -> bool:
        return self._get(name).is_final

    def get_reachable_states(self, from_state: Optional[str] = None) -> Set[str]:
        """All states reachable from from_state (the initial state by default)."""
        start = from_state if from_state is not None else self._initial
        if start is None:
            return set()
        reachable = {start}
        stack = [start]
        while stack:
            for target in self._get(stack.pop()).transitions.values():
                if target not in reachable:
                    reachable.add(target)
                    stack.append(target)
        return reachable

    def validate(self) -> bool:
        """
        Check structural consistency.

        Returns:
            bool: True if there is exactly one initial state and every
                transition uses an alphabet symbol and targets a known state
        """
        initials = [name for name, state in self._states.items() if state.is_initial]
        if len(initials) != 1 or initials[0] != self._initial:
            logger.warning(f"Expected exactly one initial state, found {initials}")
            return False
        for name, state in self._states.items():
            for symbol, target in state.transitions.items():
                if symbol not in self.alphabet or target not in self._states:
                    logger.warning(f"Invalid transition {name} --{symbol}--> {target}")
                    return False
        return True

    # ========= Export ==========
    def to_dataframe(self) -> pd.DataFrame:
        """
        Transition table as a DataFrame.

        Rows are states in creation order, one column per alphabet symbol
        holding the target state name (None when there is no transition),
        followed by boolean 'initial' and 'final' columns.
        """
        rows = []
        for state in self._states.values():
            row: Dict[str, Any] = {symbol: state.transitions.get(symbol) for symbol in self.alphabet}
            row['initial'] = state.is_initial
            row['final'] = state.is_final
            rows.append(row)
        columns = list(self.alphabet) + ['initial', 'final']
        df = pd.DataFrame(rows, index=pd.Index(self.states, name='state'), columns=columns)
        return df.astype({symbol: object for symbol in self.alphabet})

    def transition_matrix(self) -> np.ndarray:
        """
        Transition table as an integer matrix of state indices.

        Shape is (state_count, len(alphabet)); entry [i, j] is the index of
        the target of state i on the j-th symbol, or FAIL_STATE.
        """
        index = {name: i for i, name in enumerate(self._states)}
        matrix = np.full((len(self._states), len(self.alphabet)), FAIL_STATE, dtype=np.int64)
        for i, state in enumerate(self._states.values()):
            for j, symbol in enumerate(self.alphabet):
                target = state.transitions.get(symbol)
                if target is not None:
                    matrix[i, j] = index[target]
        return matrix

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            'alphabet': list(self.alphabet),
            'state_count': self.state_count,
            'transition_count': self.transition_count,
            'initial_state': self._initial,
            'final_states': self.final_states,
            'states': {name: dict(state.transitions) for name, state in self._states.items()},
        }

    def __repr__(self):
        return f"DFA(states={self.state_count}, initial={self._initial}, final={self.final_states})"
