"""
Base classes and chunk schema for the chunklab library.

This module defines the immutable chunk record produced by every pipeline run,
the result container returned by the orchestrator, and the interface all
deterministic chunking strategies implement.
"""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from chunklab.core.spans import TextSpan
from chunklab.core.tokens import DEFAULT_ESTIMATOR, SizeUnit, TokenEstimator
from chunklab.logging_config import get_logger

logger = get_logger(__name__)

SIZE_BUCKET = 100


class ChunkKind(Enum):
    """Position of a chunk in the (optional) parent/child hierarchy."""

    STANDALONE = "standalone"
    PARENT = "parent"
    CHILD = "child"


@dataclass(frozen=True)
class QAPair:
    """Question/answer pair attached by an enrichment call."""

    question: str
    answer: str


@dataclass(frozen=True)
class ChunkEnrichment:
    """
    Annotations produced by an external enrichment function.

    ``standalone_score`` runs from 0 to 10, where 10 means the chunk can be
    understood without any surrounding context.
    """

    summary: Optional[str] = None
    labels: Tuple[str, ...] = ()
    qa_pairs: Tuple[QAPair, ...] = ()
    standalone_score: Optional[float] = None
    standalone_reason: Optional[str] = None


@dataclass(frozen=True)
class RetrievalInfo:
    """Retrieval data owned by the ranking pipeline, never needed for chunking."""

    embedding: Optional[Tuple[float, ...]] = None
    vector_score: Optional[float] = None
    keyword_score: Optional[float] = None
    hybrid_score: Optional[float] = None
    rank: Optional[int] = None


@dataclass(frozen=True)
class Chunk:
    """
    Immutable chunk record.

    ``char_count`` and ``token_count`` are derived from ``content`` on
    creation, so ``dataclasses.replace(chunk, content=...)`` keeps them in
    sync.

    Examples:
        Standalone chunk:
        ```python
        chunk = Chunk(id="chunk-0", content="Some paragraph of text.")
        chunk.token_count  # 5
        ```

        Child chunk:
        ```python
        child = Chunk(
            id="child-0-0",
            content="Some",
            kind=ChunkKind.CHILD,
            parent_id="parent-0",
        )
        ```
    """

    id: str
    content: str
    kind: ChunkKind = ChunkKind.STANDALONE
    parent_id: Optional[str] = None
    keywords: Tuple[str, ...] = ()
    start: Optional[int] = None  # offset in the text the chunk was cut from
    end: Optional[int] = None
    retrieval: Optional[RetrievalInfo] = None
    enrichment: Optional[ChunkEnrichment] = None
    metadata: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False)
    estimator: TokenEstimator = field(default=DEFAULT_ESTIMATOR, repr=False, compare=False)
    char_count: int = field(init=False)
    token_count: int = field(init=False)

    def __post_init__(self):
        """Validate the record and compute derived counts."""
        if not self.id:
            object.__setattr__(self, "id", str(uuid.uuid4()))
        if not isinstance(self.content, str) or not self.content.strip():
            raise ValueError("Chunk content cannot be empty")
        if self.kind == ChunkKind.CHILD and not self.parent_id:
            raise ValueError("Child chunks require a parent_id")
        if self.kind != ChunkKind.CHILD and self.parent_id is not None:
            raise ValueError("Only child chunks may reference a parent")

        object.__setattr__(self, "char_count", len(self.content))
        object.__setattr__(self, "token_count", self.estimator.estimate(self.content))

    @property
    def is_retrievable(self) -> bool:
        """Parents exist for context expansion only and are never ranked."""
        return self.kind != ChunkKind.PARENT

    def size(self, unit: SizeUnit = SizeUnit.CHARACTERS) -> int:
        return self.token_count if unit == SizeUnit.TOKENS else self.char_count

    def with_retrieval(self, **changes) -> "Chunk":
        """Copy of this chunk with updated retrieval fields."""
        base = self.retrieval or RetrievalInfo()
        return replace(self, retrieval=replace(base, **changes))

    @classmethod
    def from_span(
        cls,
        chunk_id: str,
        span: TextSpan,
        kind: ChunkKind = ChunkKind.STANDALONE,
        parent_id: Optional[str] = None,
        keywords: Sequence[str] = (),
        estimator: TokenEstimator = DEFAULT_ESTIMATOR,
        offset: int = 0,
        metadata: Optional[Dict[str, Any]] = None
    ) -> "Chunk":
        """Build a chunk from a span; ``offset`` shifts anchors into an outer text."""
        start = span.start + offset if span.anchored else None
        end = span.end + offset if span.anchored else None
        return cls(
            id=chunk_id,
            content=span.text,
            kind=kind,
            parent_id=parent_id,
            keywords=tuple(keywords),
            start=start,
            end=end,
            metadata=metadata or {},
            estimator=estimator,
        )


@dataclass
class ChunkingStats:
    """Statistics over the retrievable chunks of a run (parents excluded)."""

    total_chunks: int = 0
    avg_size: float = 0.0
    min_size: int = 0
    max_size: int = 0
    total_tokens: int = 0
    processing_time_ms: float = 0.0
    size_distribution: List[Tuple[str, int]] = field(default_factory=list)

    @classmethod
    def from_chunks(cls, chunks: Sequence[Chunk], processing_time_ms: float = 0.0) -> "ChunkingStats":
        retrievable = [chunk for chunk in chunks if chunk.is_retrievable]
        if not retrievable:
            return cls(processing_time_ms=processing_time_ms)

        sizes = [chunk.char_count for chunk in retrievable]
        buckets: Dict[int, int] = {}
        for size in sizes:
            bucket = (size // SIZE_BUCKET) * SIZE_BUCKET
            buckets[bucket] = buckets.get(bucket, 0) + 1

        distribution = [
            (f"{bucket}-{bucket + SIZE_BUCKET}", count)
            for bucket, count in sorted(buckets.items())
        ]

        return cls(
            total_chunks=len(retrievable),
            avg_size=sum(sizes) / len(sizes),
            min_size=min(sizes),
            max_size=max(sizes),
            total_tokens=sum(chunk.token_count for chunk in retrievable),
            processing_time_ms=processing_time_ms,
            size_distribution=distribution,
        )


@dataclass
class ChunkingResult:
    """
    Complete result from a chunking run.

    Contains the chunk collection along with statistics and any non-fatal
    warnings (clamped options, regex fallbacks, external failures).
    """

    chunks: List[Chunk]
    total_chunks: int = field(init=False)
    stats: Optional[ChunkingStats] = None
    strategy_used: Optional[str] = None
    processing_time: Optional[float] = None  # seconds
    run_id: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Compute derived fields after initialization."""
        self.total_chunks = len(self.chunks)
        if self.stats is None:
            elapsed = (self.processing_time or 0.0) * 1000
            self.stats = ChunkingStats.from_chunks(self.chunks, elapsed)

    @property
    def parents(self) -> List[Chunk]:
        return [chunk for chunk in self.chunks if chunk.kind == ChunkKind.PARENT]

    @property
    def retrievable_chunks(self) -> List[Chunk]:
        return [chunk for chunk in self.chunks if chunk.is_retrievable]

    def children_of(self, parent_id: str) -> List[Chunk]:
        return [chunk for chunk in self.chunks if chunk.parent_id == parent_id]

    def get_summary_stats(self) -> Dict[str, Any]:
        """Get summary statistics about the chunking result."""
        return {
            "total_chunks": self.total_chunks,
            "retrievable_chunks": self.stats.total_chunks,
            "parent_chunks": len(self.parents),
            "avg_chunk_size": self.stats.avg_size,
            "min_chunk_size": self.stats.min_size,
            "max_chunk_size": self.stats.max_size,
            "total_tokens": self.stats.total_tokens,
            "processing_time": self.processing_time,
            "strategy_used": self.strategy_used,
            "warnings": len(self.warnings),
        }


class BaseChunker(ABC):
    """
    Abstract base class for deterministic chunking strategies.

    A chunker turns text into a list of spans anchored in that text. Sizes,
    overlaps and budgets are all expressed in ``size_unit``.

    Attributes:
        name: Registered strategy name
        max_size: Target maximum span size, clamped to at least 1
        overlap: Overlap between consecutive windows where the strategy uses one
        warnings: Non-fatal problems recorded during the last ``split`` call
    """

    def __init__(
        self,
        name: str,
        max_size: int = 1000,
        overlap: int = 0,
        size_unit: SizeUnit = SizeUnit.CHARACTERS,
        estimator: Optional[TokenEstimator] = None,
        **kwargs
    ):
        self.name = name
        self.max_size = max(1, int(max_size))
        self.overlap = max(0, int(overlap))
        self.size_unit = size_unit
        self.estimator = estimator or DEFAULT_ESTIMATOR
        self.config = kwargs
        self.warnings: List[str] = []
        self.logger = get_logger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    @abstractmethod
    def split(self, text: str) -> List[TextSpan]:
        """
        Split text into spans.

        Args:
            text: Text to split

        Returns:
            Spans in document order; never blank
        """
        raise NotImplementedError("Subclasses must implement the split() method")

    def measure(self, text: str) -> int:
        """Size of ``text`` in this chunker's unit."""
        return self.estimator.measure(text, self.size_unit)

    def warn(self, message: str) -> None:
        self.warnings.append(message)
        self.logger.warning(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', max_size={self.max_size})"
