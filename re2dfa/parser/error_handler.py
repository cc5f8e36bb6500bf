# re2dfa/parser/error_handler.py

from typing import List, Tuple

class RegexError(Exception):
    """Base class for every error raised while converting an expression."""
    pass

class RegexSyntaxError(RegexError, SyntaxError):
    """Structural error in an expression, with context visualization."""
    def __init__(self, message: str, position: int, expression: str = ""):
        self.message = message
        self.position = position
        self.expression = expression
        self.context = self._get_error_context()
        super().__init__(f"{message} at position {position}:\n{self.context}")

    def _get_error_context(self) -> str:
        """Get error context with pointer to error position."""
        start = max(0, self.position - 20)
        end = min(len(self.expression), self.position + 20)
        context = self.expression[start:end]
        pointer = " " * (self.position - start) + "^"
        return f"{context}\n{pointer}"

class UnsupportedSymbolError(RegexError, ValueError):
    """A character that is neither an alphanumeric symbol nor an operator."""
    def __init__(self, symbol: str, position: int):
        self.symbol = symbol
        self.position = position
        super().__init__(f"Unsupported symbol {symbol!r} at position {position}")

class ErrorHandler:
    """
    Collects warnings for input the converter coerces instead of rejecting.

    Dropped characters and tolerated parenthesis mismatches end up here so
    callers can inspect what was ignored after a permissive conversion.
    """
    def __init__(self):
        self.warnings = []

    def add_warning(self, message: str, position: int = 0) -> None:
        """Add a warning with position information"""
        self.warnings.append((message, position))

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def get_warnings(self) -> List[Tuple[str, int]]:
        return self.warnings

    def get_formatted_warnings(self) -> List[str]:
        return [f"Warning at position {pos}: {msg}" for msg, pos in self.warnings]

    def clear(self) -> None:
        self.warnings = []
