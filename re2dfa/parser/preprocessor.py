# re2dfa/parser/preprocessor.py

from typing import List, Optional

from .config import ConverterConfig
from .error_handler import ErrorHandler, UnsupportedSymbolError
from .tokens import Token, TokenKind, OPERATORS, CAN_END, CAN_START, is_symbol_char
from re2dfa.utils.logging_config import get_logger

logger = get_logger(__name__)

class Preprocessor:
    """
    Turns a raw expression into the token sequence the parser consumes.

    Implicit concatenation becomes an explicit CONCAT token and a single
    END_MARKER token is appended. Characters outside the supported set are
    dropped (and recorded as warnings) unless the configuration asks for them
    to be rejected.

    Example:
        "(a|b)*abb" -> ( a | b ) * . a . b . b #
    """

    def __init__(self, expression: str, config: Optional[ConverterConfig] = None,
                 error_handler: Optional[ErrorHandler] = None):
        if expression is None:
            raise ValueError("expression == None")
        self.expression = expression
        self.config = config or ConverterConfig()
        self.error_handler = error_handler or ErrorHandler()

    def preprocess(self) -> List[Token]:
        """
        Tokenize the expression.

        Returns:
            List[Token]: Tokens ending with exactly one END_MARKER

        Raises:
            UnsupportedSymbolError: If the configuration rejects unsupported
                characters and one is found
        """
        result: List[Token] = []
        for token in self._scan():
            if result and result[-1].kind in CAN_END and token.kind in CAN_START:
                result.append(Token(TokenKind.CONCAT, ".", token.index))
            result.append(token)

        result.append(Token(TokenKind.END_MARKER, self.config.end_marker, len(self.expression)))

        logger.debug(f"Token stream for {self.expression!r}: {' '.join(str(t) for t in result)}")
        return result

    def _scan(self):
        """Yield one token per supported character, dropping everything else."""
        for i, ch in enumerate(self.expression):
            if is_symbol_char(ch):
                yield Token(TokenKind.SYMBOL, ch, i)
            elif ch in OPERATORS:
                yield Token(OPERATORS[ch], ch, i)
            elif self.config.reject_unsupported_symbols:
                raise UnsupportedSymbolError(ch, i)
            else:
                self.error_handler.add_warning(f"Ignored unsupported character {ch!r}", i)
                logger.debug(f"Dropping unsupported character {ch!r} at position {i}")
