"""
Regular expression to DFA conversion pipeline.

preprocess -> parse (annotating as nodes are built) -> synthesize. Every
conversion runs on its own ConversionContext, so leaf ids and state names
never leak between conversions. Parse errors are raised before the DFA
container receives any state.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, Any

from re2dfa.parser.config import ConverterConfig
from re2dfa.parser.context import ConversionContext
from re2dfa.parser.error_handler import ErrorHandler
from re2dfa.parser.preprocessor import Preprocessor
from re2dfa.parser.regex_parser import RegexParser
from re2dfa.ast.nodes import ExpressionNode
from re2dfa.automata.annotator import PositionAnnotator
from re2dfa.automata.dfa import Alphabet, DFA
from re2dfa.automata.synthesizer import DFASynthesizer
from re2dfa.utils.logging_config import get_logger, PerformanceTimer

logger = get_logger(__name__)

TIMER_LABEL_LENGTH = 40

def _timer_label(expression: str) -> str:
    if len(expression) <= TIMER_LABEL_LENGTH:
        return f"re2dfa({expression!r})"
    return f"re2dfa({expression[:TIMER_LABEL_LENGTH]!r}...)"

@dataclass
class ConversionResult:
    """Everything produced by one conversion."""
    dfa: DFA
    root: ExpressionNode
    context: ConversionContext
    state_sets: Dict[FrozenSet[int], str]
    stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def warnings(self):
        return self.context.error_handler.get_formatted_warnings()

class RegexToDFAConverter:
    """
    Converts expressions to DFAs with a fixed configuration.

    Example:
        >>> result = RegexToDFAConverter().convert("(a|b)*abb")
        >>> result.dfa.state_count
        4
    """

    def __init__(self, config: Optional[ConverterConfig] = None):
        self.config = config or ConverterConfig()

    def convert(self, expression: str) -> ConversionResult:
        """
        Convert one expression.

        Args:
            expression: Regular expression over A-Z, a-z, 0-9 with ( ) | *

        Returns:
            ConversionResult: The DFA plus the annotated tree and tables

        Raises:
            RegexSyntaxError: On malformed parenthesization (strict mode)
            UnsupportedSymbolError: On unsupported characters when rejected
        """
        with PerformanceTimer(_timer_label(expression)):
            context = ConversionContext(
                error_handler=ErrorHandler(),
                expression=expression,
                max_nesting=self.config.max_nesting_level,
            )

            tokens = Preprocessor(expression, self.config, context.error_handler).preprocess()
            annotator = PositionAnnotator(context)
            root = RegexParser(tokens, annotator, self.config).parse()

            for message in context.error_handler.get_formatted_warnings():
                logger.warning(message)

            dfa = DFA(Alphabet(expression))
            synthesizer = DFASynthesizer(context, dfa)
            state_sets = synthesizer.synthesize(root)

        stats = synthesizer.get_build_statistics()
        stats['nodes'] = dict(annotator.stats)
        return ConversionResult(dfa=dfa, root=root, context=context, state_sets=state_sets, stats=stats)

def re2dfa(expression: str, config: Optional[ConverterConfig] = None) -> DFA:
    """Convert a regular expression directly into a DFA."""
    return RegexToDFAConverter(config).convert(expression).dfa
