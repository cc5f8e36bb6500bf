"""
Pytest fixtures for the re2dfa tests.
"""

import itertools
import pytest

from re2dfa import ConverterConfig, RegexToDFAConverter


def _run(dfa, word: str) -> bool:
    """Walk the DFA over word; a missing transition rejects."""
    state = dfa.initial_state
    for ch in word:
        state = dfa.get_trans(state, ch)
        if state is None:
            return False
    return dfa.is_final(state)


def _words(symbols: str, max_length: int):
    for length in range(max_length + 1):
        for letters in itertools.product(symbols, repeat=length):
            yield "".join(letters)


@pytest.fixture(scope="session")
def accepts():
    """Function (dfa, word) -> bool running a word through a DFA."""
    return _run


@pytest.fixture(scope="session")
def words():
    """Function (symbols, max_length) -> every word up to max_length."""
    return _words


@pytest.fixture
def converter():
    return RegexToDFAConverter()


@pytest.fixture
def permissive_converter():
    return RegexToDFAConverter(ConverterConfig(strict_parentheses=False))


@pytest.fixture
def textbook_expression():
    """Classic (a|b)*abb example from the compilers literature."""
    return "(a|b)*abb"
