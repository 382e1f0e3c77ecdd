"""
Document structure chunking strategy.

Splits markdown-style documents before every header line (``#`` to
``######``), so each section starts with its own heading.
"""

import re
from typing import List

from chunklab.core.base import BaseChunker
from chunklab.core.registry import ComplexityLevel, StrategyType, register_chunker
from chunklab.core.spans import TextSpan, pattern_ranges, span_of, strip_all

HEADER_BOUNDARY = re.compile(r"(?=^#{1,6}\s)", re.MULTILINE)


@register_chunker(
    StrategyType.DOCUMENT,
    name="Document Structure Chunking",
    description="Splits based on document structure like headers, sections, or pages.",
    best_for=("Markdown", "Books", "Technical Docs"),
    worst_for=("Unstructured text", "Tweets/Emails"),
    complexity=ComplexityLevel.MEDIUM,
)
class DocumentChunker(BaseChunker):
    """
    One span per header section.

    Text before the first header forms its own section.
    """

    def __init__(self, **kwargs):
        kwargs.setdefault("name", StrategyType.DOCUMENT.value)
        super().__init__(**kwargs)

    def split(self, text: str) -> List[TextSpan]:
        return strip_all(
            span_of(text, start, end) for start, end in pattern_ranges(text, HEADER_BOUNDARY)
        )
