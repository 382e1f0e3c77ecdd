"""
Text-specific chunking strategies.

Strategies included:
- Recursive separator-hierarchy chunking
- Sentence-based chunking
- Paragraph-based chunking
- Sliding word windows
- Hybrid paragraph/sentence chunking
"""

from chunklab.strategies.text.recursive import RecursiveChunker, SeparatorSplitter
from chunklab.strategies.text.sentence_based import SentenceChunker
from chunklab.strategies.text.paragraph_based import ParagraphChunker
from chunklab.strategies.text.sliding_window import SlidingWindowChunker
from chunklab.strategies.text.hybrid import HybridChunker

__all__ = [
    "RecursiveChunker",
    "SeparatorSplitter",
    "SentenceChunker",
    "ParagraphChunker",
    "SlidingWindowChunker",
    "HybridChunker",
]
