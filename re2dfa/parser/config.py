import os
from dataclasses import dataclass, field
from typing import Dict, Any

# Each parenthesis level costs the recursive-descent parser four stack frames,
# so the nesting check must fire well before the interpreter recursion limit.
MAX_NESTING_LIMIT = 150

def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")

@dataclass
class ConverterConfig:
    """Configuration for preprocessing and parsing behavior"""
    strict_parentheses: bool = True
    reject_unsupported_symbols: bool = False
    max_nesting_level: int = 100
    end_marker: str = "#"
    custom_settings: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if len(self.end_marker) != 1 or self.end_marker.isalnum():
            raise ValueError(
                f"End marker must be a single non-alphanumeric character, got {self.end_marker!r}"
            )
        if not 1 <= self.max_nesting_level <= MAX_NESTING_LIMIT:
            raise ValueError(
                f"max_nesting_level must be between 1 and {MAX_NESTING_LIMIT}, got {self.max_nesting_level}"
            )

    def get_setting(self, key: str, default=None):
        return self.custom_settings.get(key, default)

    @classmethod
    def from_env(cls) -> "ConverterConfig":
        """Build a configuration from RE2DFA_* environment variables."""
        return cls(
            strict_parentheses=_env_flag("RE2DFA_STRICT_PARENTHESES", True),
            reject_unsupported_symbols=_env_flag("RE2DFA_REJECT_UNSUPPORTED", False),
            max_nesting_level=int(os.getenv("RE2DFA_MAX_NESTING", "100")),
        )
