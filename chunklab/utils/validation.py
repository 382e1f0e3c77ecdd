"""
Validation utilities for chunk collections.

Checks the invariants every chunking run must uphold: unique identifiers,
non-empty content, derived counts in sync with content, resolvable parent
links and anchors that point at the chunk's own text.
"""

from typing import List, Optional, Sequence, Set

from chunklab.core.base import Chunk, ChunkingResult, ChunkKind
from chunklab.core.exceptions import ChunkLabError
from chunklab.logging_config import get_logger

logger = get_logger(__name__)


class ValidationError(ChunkLabError):
    """Raised by ``ChunkValidator.ensure_valid`` when a collection is inconsistent."""
    pass


class ChunkValidator:
    """
    Validator for chunks and chunk collections.

    Every check returns a list of issue strings; an empty list means valid.

    Args:
        source: Text the chunks were cut from; enables anchor checks
    """

    def __init__(self, source: Optional[str] = None):
        self.source = source

    def validate_chunk(self, chunk: Chunk) -> List[str]:
        issues = []

        if not chunk.id:
            issues.append("Chunk missing ID")
        if not chunk.content or not chunk.content.strip():
            issues.append(f"Chunk {chunk.id} has empty content")
        if chunk.char_count != len(chunk.content):
            issues.append(
                f"Chunk {chunk.id} char_count mismatch: declared={chunk.char_count}, actual={len(chunk.content)}"
            )
        expected_tokens = chunk.estimator.estimate(chunk.content)
        if chunk.token_count != expected_tokens:
            issues.append(
                f"Chunk {chunk.id} token_count mismatch: declared={chunk.token_count}, actual={expected_tokens}"
            )
        if chunk.kind == ChunkKind.CHILD and not chunk.parent_id:
            issues.append(f"Child chunk {chunk.id} has no parent_id")

        if self.source is not None and chunk.start is not None and chunk.end is not None:
            if self.source[chunk.start:chunk.end] != chunk.content:
                issues.append(f"Chunk {chunk.id} anchors [{chunk.start}, {chunk.end}) do not match its content")

        return issues

    def validate_chunks(self, chunks: Sequence[Chunk]) -> List[str]:
        """
        Validate a whole collection.

        Args:
            chunks: Chunks of one run

        Returns:
            List of validation issues (empty if valid)
        """
        issues: List[str] = []
        seen_ids: Set[str] = set()
        parent_ids = {chunk.id for chunk in chunks if chunk.kind == ChunkKind.PARENT}

        for chunk in chunks:
            issues.extend(self.validate_chunk(chunk))

            if chunk.id in seen_ids:
                issues.append(f"Duplicate chunk ID: {chunk.id}")
            seen_ids.add(chunk.id)

            if chunk.kind == ChunkKind.CHILD and chunk.parent_id not in parent_ids:
                issues.append(f"Child chunk {chunk.id} references missing parent {chunk.parent_id}")

        if issues:
            logger.debug(f"Validation found {len(issues)} issues in {len(chunks)} chunks")
        return issues

    def validate_result(self, result: ChunkingResult) -> List[str]:
        issues = self.validate_chunks(result.chunks)
        if result.total_chunks != len(result.chunks):
            issues.append(f"total_chunks {result.total_chunks} does not match {len(result.chunks)} chunks")
        retrievable = len(result.retrievable_chunks)
        if result.stats is not None and result.stats.total_chunks != retrievable:
            issues.append(
                f"Statistics count {result.stats.total_chunks} chunks, expected {retrievable} retrievable"
            )
        return issues

    def ensure_valid(self, chunks: Sequence[Chunk]) -> None:
        """
        Raises:
            ValidationError: If the collection has any issue
        """
        issues = self.validate_chunks(chunks)
        if issues:
            raise ValidationError("; ".join(issues))


def validate_chunks(chunks: Sequence[Chunk], source: Optional[str] = None) -> List[str]:
    """Validate a chunk collection."""
    return ChunkValidator(source).validate_chunks(chunks)
