"""Token-budget chunking: fixed windows sized from an estimated token count."""

from chunklab.core.registry import ComplexityLevel, StrategyType, register_chunker
from chunklab.strategies.general.fixed_size import FixedSizeChunker


@register_chunker(
    StrategyType.TOKEN,
    name="Token-Based Chunking",
    description="Splits based on token count to strictly fit LLM context windows.",
    best_for=("LLM Training", "Cost optimization"),
    worst_for=("Human readability",),
    complexity=ComplexityLevel.MEDIUM,
)
class TokenChunker(FixedSizeChunker):
    """
    Fixed windows whose size is always read as a token budget.

    ``max_size`` tokens become ``max_size * chars_per_token`` characters
    whatever the configured size unit.
    """

    def __init__(self, max_size: int = 250, overlap: int = 0, **kwargs):
        kwargs.setdefault("name", StrategyType.TOKEN.value)
        super().__init__(max_size=max_size, overlap=overlap, **kwargs)

    def window_size(self) -> int:
        return self.estimator.chars_for_tokens(self.max_size)

    def window_overlap(self) -> int:
        return self.overlap * self.estimator.chars_per_token
