"""Document structure strategies (headers, fenced blocks, metadata markers)."""

from chunklab.strategies.document.document_chunker import DocumentChunker
from chunklab.strategies.document.content_aware import ContentAwareChunker
from chunklab.strategies.document.metadata_chunker import MetadataChunker

__all__ = ["DocumentChunker", "ContentAwareChunker", "MetadataChunker"]
