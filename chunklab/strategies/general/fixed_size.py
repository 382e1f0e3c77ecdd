"""
Fixed size chunking strategy.

Divides text into windows of a fixed number of characters with optional
overlap, regardless of content structure. This is the baseline strategy.
"""

from typing import List

from chunklab.core.base import BaseChunker
from chunklab.core.registry import ComplexityLevel, StrategyType, register_chunker
from chunklab.core.spans import TextSpan, drop_blank, span_of, window_ranges
from chunklab.core.tokens import SizeUnit


@register_chunker(
    StrategyType.FIXED_SIZE,
    name="Fixed-Size Chunking",
    description=(
        "Splits text into chunks of a predetermined character count, "
        "regardless of content structure."
    ),
    best_for=("Simple implementations", "Uniform processing", "Memory-constrained systems"),
    worst_for=("Semantic coherence", "Complex document structures"),
    complexity=ComplexityLevel.LOW,
    strategy_id="fixed",
)
class FixedSizeChunker(BaseChunker):
    """
    Sliding character windows.

    In token mode ``max_size`` and ``overlap`` are token budgets, converted to
    characters with the estimator's characters-per-token ratio.

    Examples:
        ```python
        chunker = FixedSizeChunker(max_size=512, overlap=64)
        spans = chunker.split("Long document content...")
        ```
    """

    def __init__(self, max_size: int = 1000, overlap: int = 0, **kwargs):
        kwargs.setdefault("name", StrategyType.FIXED_SIZE.value)
        super().__init__(max_size=max_size, overlap=overlap, **kwargs)

    def window_size(self) -> int:
        if self.size_unit == SizeUnit.TOKENS:
            return self.estimator.chars_for_tokens(self.max_size)
        return self.max_size

    def window_overlap(self) -> int:
        if self.size_unit == SizeUnit.TOKENS:
            return self.overlap * self.estimator.chars_per_token
        return self.overlap

    def split(self, text: str) -> List[TextSpan]:
        size = self.window_size()
        step = size - self.window_overlap()
        return drop_blank(
            span_of(text, start, end) for start, end in window_ranges(0, len(text), size, step)
        )
