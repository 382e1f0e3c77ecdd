"""Paragraph-based chunking: split on blank lines and keep each paragraph whole."""

import re
from typing import List

from chunklab.core.base import BaseChunker
from chunklab.core.registry import ComplexityLevel, StrategyType, register_chunker
from chunklab.core.spans import TextSpan, pattern_ranges, span_of, strip_all

PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


def paragraph_spans(text: str) -> List[TextSpan]:
    """Trimmed, non-empty paragraphs of ``text``."""
    return strip_all(span_of(text, start, end) for start, end in pattern_ranges(text, PARAGRAPH_BREAK))


@register_chunker(
    StrategyType.PARAGRAPH,
    name="Paragraph-Based Chunking",
    description="Preserves paragraph integrity, splitting only when absolutely necessary.",
    best_for=("Essays", "Narratives", "Blogs"),
    worst_for=("Code blocks", "Irregular formatting"),
    complexity=ComplexityLevel.LOW,
)
class ParagraphChunker(BaseChunker):
    """
    One span per paragraph.

    Example:
        >>> ParagraphChunker().split("para1\\n\\npara2")
        [TextSpan(text='para1', start=0, end=5), TextSpan(text='para2', start=7, end=12)]
    """

    def __init__(self, **kwargs):
        kwargs.setdefault("name", StrategyType.PARAGRAPH.value)
        super().__init__(**kwargs)

    def split(self, text: str) -> List[TextSpan]:
        return paragraph_spans(text)
