"""General-purpose strategies that ignore text structure."""

from chunklab.strategies.general.fixed_size import FixedSizeChunker
from chunklab.strategies.general.token_based import TokenChunker
from chunklab.strategies.general.regex_chunker import RegexChunker

__all__ = ["FixedSizeChunker", "TokenChunker", "RegexChunker"]
