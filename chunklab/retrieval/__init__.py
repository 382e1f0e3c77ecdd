"""Retrieval ranking: similarity, keyword scoring, hybrid ranking and context expansion."""

from chunklab.retrieval.context import ContextMatch, expand_context, unique_contexts
from chunklab.retrieval.embeddings import Embedder, embed_chunks
from chunklab.retrieval.keyword import keyword_score, query_terms
from chunklab.retrieval.scorer import RetrievalScorer, rank_for_query
from chunklab.retrieval.similarity import cosine_similarity

__all__ = [
    "ContextMatch",
    "expand_context",
    "unique_contexts",
    "Embedder",
    "embed_chunks",
    "keyword_score",
    "query_terms",
    "RetrievalScorer",
    "rank_for_query",
    "cosine_similarity",
]
