"""
Content-aware chunking strategy.

Separates fenced code blocks from the surrounding prose. Fenced blocks are
emitted whole, never subdivided.
"""

import re
from typing import List

from chunklab.core.base import BaseChunker
from chunklab.core.registry import ComplexityLevel, StrategyType, register_chunker
from chunklab.core.spans import TextSpan, span_of, strip_all

FENCED_BLOCK = re.compile(r"```[\s\S]*?```")


@register_chunker(
    StrategyType.CONTENT_AWARE,
    name="Content-Aware Chunking",
    description="Detects content type (code, tables, prose) and switches strategies accordingly.",
    best_for=("Mixed-format docs", "Technical papers"),
    worst_for=("Pure prose",),
    complexity=ComplexityLevel.HIGH,
    strategy_id="content",
)
class ContentAwareChunker(BaseChunker):
    """Alternate prose runs and fenced code blocks, in document order."""

    def __init__(self, **kwargs):
        kwargs.setdefault("name", StrategyType.CONTENT_AWARE.value)
        super().__init__(**kwargs)

    def split(self, text: str) -> List[TextSpan]:
        spans = []
        cursor = 0
        for match in FENCED_BLOCK.finditer(text):
            spans.append(span_of(text, cursor, match.start()))
            spans.append(span_of(text, match.start(), match.end()))
            cursor = match.end()
        spans.append(span_of(text, cursor, len(text)))
        return strip_all(spans)
