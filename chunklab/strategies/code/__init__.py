"""Source code chunking."""

from chunklab.strategies.code.code_chunker import CodeChunker

__all__ = ["CodeChunker"]
