# re2dfa/parser/regex_parser.py

from typing import List, Optional

from .config import ConverterConfig
from .error_handler import RegexSyntaxError
from .tokens import Token, TokenKind
from re2dfa.ast.nodes import ExpressionNode
from re2dfa.automata.annotator import PositionAnnotator
from re2dfa.utils.logging_config import get_logger

logger = get_logger(__name__)

class RegexParser:
    """
    Recursive-descent parser producing the annotated, end-marker augmented tree.

    Grammar (loosest binding first):
        or      := concat ( '|' concat )*
        concat  := repeat ( '.' repeat )*
        repeat  := primary ( '*' )*
        primary := '(' or ')' | SYMBOL | <empty>

    The returned root is concat(expression, END_MARKER), so the end marker's
    leaf id lands in lastpos of the whole expression.
    """

    def __init__(self, tokens: List[Token], annotator: PositionAnnotator,
                 config: Optional[ConverterConfig] = None):
        if not tokens or tokens[-1].kind != TokenKind.END_MARKER:
            raise ValueError("Token stream must end with an END_MARKER token")
        self.tokens = tokens
        self.annotator = annotator
        self.context = annotator.context
        self.config = config or ConverterConfig()
        self.pos = 0

    # ========= PUBLIC ==============
    def parse(self) -> ExpressionNode:
        """
        Parse the whole token stream.

        Returns:
            ExpressionNode: Root of the augmented expression tree

        Raises:
            RegexSyntaxError: On unmatched parentheses (strict mode) or when
                the nesting limit is exceeded
        """
        expr = self.parse_or()

        t = self.peek()
        if t.kind != TokenKind.END_MARKER:
            message = "Unmatched ')'" if t.kind == TokenKind.RPAREN else f"Unexpected token {t.character!r}"
            if self.config.strict_parentheses:
                raise self.error(message, t.index)
            self.context.error_handler.add_warning(f"{message}; ignoring the rest of the expression", t.index)
            logger.debug(f"{message} at {t.index}, discarding {len(self.tokens) - 1 - self.pos} token(s)")

        end = self.tokens[-1]
        root = self.annotator.concat(expr, self.annotator.end_marker(end.character))
        logger.debug(f"Parsed {self.context.leaf_count} leaf position(s)")
        return root

    # ========= Grammar ==========
    def parse_or(self) -> ExpressionNode:
        left = self.parse_concat()
        while self.match(TokenKind.OR):
            left = self.annotator.union(left, self.parse_concat())
        return left

    def parse_concat(self) -> ExpressionNode:
        left = self.parse_repeat()
        while self.match(TokenKind.CONCAT):
            left = self.annotator.concat(left, self.parse_repeat())
        return left

    def parse_repeat(self) -> ExpressionNode:
        base = self.parse_primary()
        while self.match(TokenKind.STAR):
            base = self.annotator.star(base)
        return base

    def parse_primary(self) -> ExpressionNode:
        t = self.peek()
        if t.kind == TokenKind.LPAREN:
            self.next()
            self.context.enter_scope(t.index)
            inside = self.parse_or()
            if not self.match(TokenKind.RPAREN):
                if self.config.strict_parentheses:
                    raise self.error("Unmatched '('", t.index)
                self.context.error_handler.add_warning("Missing ')' for '('", t.index)
            self.context.exit_scope()
            return inside
        if t.kind == TokenKind.SYMBOL:
            self.next()
            return self.annotator.symbol(t.character)
        # Nothing that can start an operand: empty sub-expression, token left in place
        return self.annotator.empty()

    # ========= Helpers ==========
    def peek(self) -> Token:
        return self.tokens[self.pos]

    def next(self) -> Token:
        t = self.tokens[self.pos]
        self.pos = min(self.pos + 1, len(self.tokens) - 1)
        return t

    def match(self, kind: TokenKind) -> bool:
        if self.peek().kind == kind:
            self.next()
            return True
        return False

    def error(self, message: str, index: int) -> RegexSyntaxError:
        return RegexSyntaxError(message, index, self.context.expression)
