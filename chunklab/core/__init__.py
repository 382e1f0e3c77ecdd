"""
Core chunking components.

Leaf modules only: the hierarchy and enrichment modules depend on the
strategies package and are imported from their own modules.
"""

from chunklab.core.base import (
    BaseChunker,
    Chunk,
    ChunkEnrichment,
    ChunkingResult,
    ChunkingStats,
    ChunkKind,
    QAPair,
    RetrievalInfo,
)
from chunklab.core.config import ChunkingOptions, EnrichmentOptions, load_options
from chunklab.core.exceptions import (
    ChunkLabError,
    ConfigurationError,
    ExternalServiceError,
    MissingConfigurationError,
    PatternError,
)
from chunklab.core.keywords import extract_keywords
from chunklab.core.merger import SmallChunkMerger, merge_small_spans
from chunklab.core.registry import (
    StrategyDefinition,
    StrategyType,
    create_chunker,
    get_registry,
    list_strategies,
    register_chunker,
)
from chunklab.core.spans import TextSpan
from chunklab.core.tokens import DEFAULT_ESTIMATOR, SizeUnit, TokenEstimator

__all__ = [
    "BaseChunker",
    "Chunk",
    "ChunkEnrichment",
    "ChunkingResult",
    "ChunkingStats",
    "ChunkKind",
    "QAPair",
    "RetrievalInfo",
    "ChunkingOptions",
    "EnrichmentOptions",
    "load_options",
    "ChunkLabError",
    "ConfigurationError",
    "ExternalServiceError",
    "MissingConfigurationError",
    "PatternError",
    "extract_keywords",
    "SmallChunkMerger",
    "merge_small_spans",
    "StrategyDefinition",
    "StrategyType",
    "create_chunker",
    "get_registry",
    "list_strategies",
    "register_chunker",
    "TextSpan",
    "DEFAULT_ESTIMATOR",
    "SizeUnit",
    "TokenEstimator",
]
