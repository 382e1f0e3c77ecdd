"""Utility functions for chunk validation."""

from chunklab.utils.validation import ChunkValidator, ValidationError, validate_chunks

__all__ = ["ChunkValidator", "ValidationError", "validate_chunks"]
