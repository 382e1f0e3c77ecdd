"""
Sliding window chunking strategy.

Overlapping windows of whole words. Window size and step come from the size
budget through the estimator's characters-per-word (or tokens-per-word)
ratio.
"""

from typing import List

from chunklab.core.base import BaseChunker
from chunklab.core.registry import ComplexityLevel, StrategyType, register_chunker
from chunklab.core.spans import TextSpan, span_of, window_ranges
from chunklab.core.tokens import WORD_PATTERN


@register_chunker(
    StrategyType.SLIDING_WINDOW,
    name="Sliding Window Chunking",
    description="Creates overlapping chunks by moving a window across text.",
    best_for=("Context continuity", "Search/Retrieval"),
    worst_for=("Storage efficiency",),
    complexity=ComplexityLevel.LOW,
    strategy_id="sliding",
)
class SlidingWindowChunker(BaseChunker):
    """
    Word windows advancing by ``window - overlap`` words.

    Examples:
        ```python
        # 100 characters ~ 20 words per window, 25 characters ~ 5 words shared
        chunker = SlidingWindowChunker(max_size=100, overlap=25)
        spans = chunker.split(text)
        ```
    """

    def __init__(self, max_size: int = 1000, overlap: int = 0, **kwargs):
        kwargs.setdefault("name", StrategyType.SLIDING_WINDOW.value)
        super().__init__(max_size=max_size, overlap=overlap, **kwargs)

    @property
    def window_words(self) -> int:
        return self.estimator.words_for_budget(self.max_size, self.size_unit)

    @property
    def step_words(self) -> int:
        if self.overlap <= 0:
            return self.window_words
        overlap_words = self.estimator.words_for_budget(self.overlap, self.size_unit)
        return max(1, self.window_words - overlap_words)

    def split(self, text: str) -> List[TextSpan]:
        words = [match.span() for match in WORD_PATTERN.finditer(text)]
        return [
            span_of(text, words[first][0], words[last - 1][1])
            for first, last in window_ranges(0, len(words), self.window_words, self.step_words)
        ]
