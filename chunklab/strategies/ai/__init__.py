"""Strategies served by an external AI splitter."""

from chunklab.strategies.ai.external import AISplitter, ExternalChunker

__all__ = ["AISplitter", "ExternalChunker"]
