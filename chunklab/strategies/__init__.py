"""
Chunking strategies organized by category.

Importing this package registers every deterministic chunker and the catalog
entries of the AI strategies.

Categories:
- text: recursive, sentence, paragraph, sliding window and hybrid strategies
- general: fixed-size, token-budget and regex strategies
- document: header, content-aware and metadata-driven strategies
- code: definition-aware source code splitting
- ai: strategies served by an external AI splitter

Usage:
    from chunklab.strategies import StrategyRouter
    from chunklab.core.registry import create_chunker

    chunker = create_chunker("paragraph")
    spans = chunker.split(text)
"""

from chunklab.strategies.text import (
    HybridChunker,
    ParagraphChunker,
    RecursiveChunker,
    SentenceChunker,
    SlidingWindowChunker,
)
from chunklab.strategies.general import FixedSizeChunker, RegexChunker, TokenChunker
from chunklab.strategies.document import ContentAwareChunker, DocumentChunker, MetadataChunker
from chunklab.strategies.code import CodeChunker
from chunklab.strategies.ai import AISplitter, ExternalChunker
from chunklab.strategies.router import RouteResult, StrategyRouter

__all__ = [
    "RecursiveChunker",
    "SentenceChunker",
    "ParagraphChunker",
    "SlidingWindowChunker",
    "HybridChunker",
    "FixedSizeChunker",
    "TokenChunker",
    "RegexChunker",
    "DocumentChunker",
    "ContentAwareChunker",
    "MetadataChunker",
    "CodeChunker",
    "ExternalChunker",
    "AISplitter",
    "StrategyRouter",
    "RouteResult",
]
