# re2dfa/automata/__init__.py

from .annotator import PositionAnnotator
from .dfa import Alphabet, DFA, DFAState, FAIL_STATE
from .synthesizer import DFASynthesizer, state_name

__all__ = [
    'PositionAnnotator',
    'Alphabet',
    'DFA',
    'DFAState',
    'FAIL_STATE',
    'DFASynthesizer',
    'state_name'
]
