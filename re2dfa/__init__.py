# re2dfa/__init__.py

from .parser import (
    ConverterConfig, ErrorHandler, RegexError, RegexSyntaxError, UnsupportedSymbolError,
    Token, TokenKind, ConversionContext, Preprocessor, RegexParser
)
from .ast import visualize_tree
from .automata import Alphabet, DFA, PositionAnnotator, DFASynthesizer
from .converter import RegexToDFAConverter, ConversionResult, re2dfa
from .utils import setup_logging, get_logger

__version__ = "0.1.0"

__all__ = [
    're2dfa',
    'RegexToDFAConverter',
    'ConversionResult',
    'ConverterConfig',
    'ErrorHandler',
    'RegexError',
    'RegexSyntaxError',
    'UnsupportedSymbolError',
    'Token',
    'TokenKind',
    'ConversionContext',
    'Preprocessor',
    'RegexParser',
    'PositionAnnotator',
    'DFASynthesizer',
    'Alphabet',
    'DFA',
    'visualize_tree',
    'setup_logging',
    'get_logger'
]
