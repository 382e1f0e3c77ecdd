"""
Regex delimiter chunking strategy.

Splits text wherever a user supplied pattern matches. Matched delimiters
(including captured groups) are not part of the output.
"""

import re
from typing import List, Optional

from chunklab.core.base import BaseChunker
from chunklab.core.exceptions import PatternError
from chunklab.core.registry import ComplexityLevel, StrategyType, register_chunker
from chunklab.core.spans import TextSpan, drop_blank, pattern_ranges, span_of

DEFAULT_PATTERN = "\n\n"


def compile_pattern(pattern: str, flags: int = 0) -> "re.Pattern[str]":
    """
    Compile a user pattern.

    Raises:
        PatternError: If the pattern is not a valid regular expression
    """
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise PatternError(pattern, str(e)) from e


@register_chunker(
    StrategyType.REGEX,
    name="Regex Chunking",
    description="Splits text based on a user-defined Regular Expression pattern.",
    best_for=("Custom formats", "Log files", "Specific delimiters"),
    worst_for=("General prose", "Variable structure"),
    complexity=ComplexityLevel.MEDIUM,
)
class RegexChunker(BaseChunker):
    """
    Split on every match of ``pattern``.

    The pattern is compiled once. An invalid pattern does not raise: ``split``
    returns the whole text as a single span and records a warning.

    Examples:
        ```python
        chunker = RegexChunker(pattern=r"^-{3,}$", flags=re.MULTILINE)
        spans = chunker.split(log_text)
        ```
    """

    def __init__(self, pattern: Optional[str] = None, flags: int = 0, **kwargs):
        kwargs.setdefault("name", StrategyType.REGEX.value)
        super().__init__(**kwargs)
        self.pattern = pattern or DEFAULT_PATTERN
        self.pattern_error: Optional[PatternError] = None
        try:
            self.compiled: Optional["re.Pattern[str]"] = compile_pattern(self.pattern, flags)
        except PatternError as e:
            self.compiled = None
            self.pattern_error = e

    def split(self, text: str) -> List[TextSpan]:
        if self.compiled is None:
            self.warn(f"{self.pattern_error}; returning the text as a single chunk")
            return drop_blank([span_of(text, 0, len(text))])
        return drop_blank(
            span_of(text, start, end) for start, end in pattern_ranges(text, self.compiled)
        )
