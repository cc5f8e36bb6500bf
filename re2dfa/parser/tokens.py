from enum import Enum
from dataclasses import dataclass

class TokenKind(Enum):
    """
    Enum representing the kinds of expression tokens.

    EMPTY is reserved: the preprocessor never emits it. A missing operand is
    recognised by the parser from the token that follows, which then yields
    an EmptyNode without consuming anything.
    """
    SYMBOL = "SYMBOL"
    END_MARKER = "END_MARKER"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    CONCAT = "CONCAT"
    OR = "OR"
    STAR = "STAR"
    EMPTY = "EMPTY"

@dataclass(frozen=True)
class Token:
    """
    One token of a preprocessed expression.

    Attributes:
        kind: Token kind
        character: Source character (the sentinel for the end marker, '.' for
                   inserted concatenations)
        index: Offset of the token in the raw expression
    """
    kind: TokenKind
    character: str
    index: int

    def __str__(self) -> str:
        return self.character

OPERATORS = {"(": TokenKind.LPAREN, ")": TokenKind.RPAREN, "|": TokenKind.OR, "*": TokenKind.STAR}

# Token kinds that end an operand and kinds that start one; an inserted
# concatenation goes between the two.
CAN_END = (TokenKind.SYMBOL, TokenKind.RPAREN, TokenKind.STAR)
CAN_START = (TokenKind.SYMBOL, TokenKind.LPAREN)

def is_symbol_char(ch: str) -> bool:
    """True for A-Z, a-z and 0-9."""
    return ch.isascii() and ch.isalnum()
