"""
Exception hierarchy for the chunklab library.

Most of these errors are recovered from locally (clamped options, single-span
fallbacks, unannotated chunks). Only MissingConfigurationError is meant to
reach the caller.
"""

from typing import Optional


class ChunkLabError(Exception):
    """Base class for all chunklab errors."""
    pass


class ConfigurationError(ChunkLabError):
    """Invalid chunking configuration (size/overlap combination, unknown strategy)."""
    pass


class MissingConfigurationError(ChunkLabError):
    """Required configuration is absent and no safe default exists."""
    pass


class PatternError(ChunkLabError):
    """A user supplied regular expression could not be compiled."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid regex pattern {pattern!r}: {reason}")


class ExternalServiceError(ChunkLabError):
    """An external collaborator (AI splitter, embedder, enricher) failed."""

    def __init__(self, message: str, service: Optional[str] = None):
        self.service = service
        super().__init__(message)
