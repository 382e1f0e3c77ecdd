"""
chunklab

Text chunking for retrieval pipelines: a family of interchangeable chunking
strategies, parent/child hierarchies, small chunk merging, and hybrid
vector/keyword ranking of the resulting chunks.

Public API Examples:

Chunking:
    from chunklab import chunk
    chunks = chunk(text, {"strategy": "recursive", "chunk_size": 500})

Full result with statistics and warnings:
    from chunklab import ChunkingOrchestrator, ChunkingOptions
    result = ChunkingOrchestrator().chunk(text, ChunkingOptions(strategy="paragraph"))

Ranking:
    from chunklab import embed_chunks, rank_for_query
    chunks = embed_chunks(chunks, my_embedder)
    ranked = rank_for_query(chunks, my_embedder([query])[0], query, alpha=0.7)
"""

__version__ = "0.1.0"

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
from chunklab.core.registry import (
    StrategyDefinition,
    StrategyType,
    create_chunker,
    get_strategy_definition,
    list_strategies,
)
from chunklab.core.tokens import SizeUnit, TokenEstimator
from chunklab.core.enrichment import Enricher
from chunklab.strategies import AISplitter, StrategyRouter
from chunklab.orchestrator import ChunkingOrchestrator, chunk
from chunklab.retrieval import (
    ContextMatch,
    Embedder,
    RetrievalScorer,
    cosine_similarity,
    embed_chunks,
    expand_context,
    keyword_score,
    rank_for_query,
)
from chunklab.logging_config import LogLevel, configure_logging, get_logger

__all__ = [
    "__version__",
    "chunk",
    "rank_for_query",
    "embed_chunks",
    "expand_context",
    "ChunkingOrchestrator",
    "ChunkingOptions",
    "EnrichmentOptions",
    "load_options",
    "BaseChunker",
    "Chunk",
    "ChunkEnrichment",
    "ChunkingResult",
    "ChunkingStats",
    "ChunkKind",
    "QAPair",
    "RetrievalInfo",
    "ChunkLabError",
    "ConfigurationError",
    "ExternalServiceError",
    "MissingConfigurationError",
    "PatternError",
    "StrategyDefinition",
    "StrategyType",
    "create_chunker",
    "get_strategy_definition",
    "list_strategies",
    "SizeUnit",
    "TokenEstimator",
    "AISplitter",
    "Enricher",
    "Embedder",
    "StrategyRouter",
    "RetrievalScorer",
    "ContextMatch",
    "cosine_similarity",
    "keyword_score",
    "LogLevel",
    "configure_logging",
    "get_logger",
]
