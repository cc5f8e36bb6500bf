# re2dfa/parser/__init__.py

from .config import ConverterConfig
from .error_handler import ErrorHandler, RegexError, RegexSyntaxError, UnsupportedSymbolError
from .tokens import Token, TokenKind
from .context import ConversionContext
from .preprocessor import Preprocessor

# Import the parser after the basic components; it depends on the annotator
from .regex_parser import RegexParser

__all__ = [
    'ConverterConfig',
    'ErrorHandler',
    'RegexError',
    'RegexSyntaxError',
    'UnsupportedSymbolError',
    'Token',
    'TokenKind',
    'ConversionContext',
    'Preprocessor',
    'RegexParser'
]
