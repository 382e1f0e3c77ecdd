"""
Hybrid retrieval scoring and ranking.

Blends cosine similarity of embeddings with a keyword overlap score,
optionally applies a heuristic rerank adjustment and assigns 1-based ranks.
"""

from typing import List, Optional, Sequence

from chunklab.core.base import Chunk
from chunklab.logging_config import get_logger
from chunklab.retrieval.keyword import keyword_score
from chunklab.retrieval.similarity import cosine_similarity

logger = get_logger(__name__)

DEFAULT_ALPHA = 0.7
RERANK_BONUS = 0.1
RERANK_PENALTY = 0.05
SHORT_CONTENT_THRESHOLD = 50


class RetrievalScorer:
    """
    Rank chunks against a query.

    ``alpha`` weights the vector score: 1 is pure vector search, 0 pure
    keyword search. With ``rerank`` enabled, chunks containing the whole
    query gain ``bonus`` and chunks shorter than ``short_threshold``
    characters lose ``penalty``, approximating a cross-encoder pass.

    Examples:
        ```python
        scorer = RetrievalScorer()
        ranked = scorer.rank(chunks, query_embedding, "parent child chunking", alpha=0.5)
        ranked[0].retrieval.rank  # 1
        ```
    """

    def __init__(
        self,
        bonus: float = RERANK_BONUS,
        penalty: float = RERANK_PENALTY,
        short_threshold: int = SHORT_CONTENT_THRESHOLD
    ):
        self.bonus = bonus
        self.penalty = penalty
        self.short_threshold = short_threshold
        self.warnings: List[str] = []

    def _clamp_alpha(self, alpha: float) -> float:
        if 0.0 <= alpha <= 1.0:
            return alpha
        clamped = min(max(alpha, 0.0), 1.0)
        message = f"alpha {alpha} is outside [0, 1], using {clamped}"
        logger.warning(message)
        self.warnings.append(message)
        return clamped

    def rerank_adjustment(self, content: str, query_text: str) -> float:
        adjustment = 0.0
        if query_text and query_text.lower() in content.lower():
            adjustment += self.bonus
        if len(content) < self.short_threshold:
            adjustment -= self.penalty
        return adjustment

    def score(
        self,
        chunk: Chunk,
        query_embedding: Optional[Sequence[float]],
        query_text: str,
        alpha: float,
        rerank: bool = False
    ) -> Chunk:
        """Copy of ``chunk`` with vector, keyword and hybrid scores set."""
        embedding = chunk.retrieval.embedding if chunk.retrieval else None
        vector = cosine_similarity(query_embedding, embedding)
        keyword = keyword_score(query_text, chunk.content)
        hybrid = alpha * vector + (1 - alpha) * keyword
        if rerank:
            hybrid += self.rerank_adjustment(chunk.content, query_text)
        return chunk.with_retrieval(vector_score=vector, keyword_score=keyword, hybrid_score=hybrid)

    def rank(
        self,
        chunks: Sequence[Chunk],
        query_embedding: Optional[Sequence[float]],
        query_text: str,
        alpha: float = DEFAULT_ALPHA,
        rerank: bool = False
    ) -> List[Chunk]:
        """
        Score and order ``chunks``.

        The sort is stable, so equal scores keep their input order. Chunk
        kinds are not inspected here.

        Returns:
            New chunk records, best first, with ``retrieval.rank`` starting at 1
        """
        self.warnings = []
        alpha = self._clamp_alpha(alpha)
        scored = [self.score(chunk, query_embedding, query_text, alpha, rerank) for chunk in chunks]
        scored.sort(key=lambda chunk: chunk.retrieval.hybrid_score, reverse=True)
        return [chunk.with_retrieval(rank=position) for position, chunk in enumerate(scored, start=1)]


def rank_for_query(
    chunks: Sequence[Chunk],
    query_embedding: Optional[Sequence[float]],
    query_text: str,
    alpha: float = DEFAULT_ALPHA,
    rerank: bool = False
) -> List[Chunk]:
    """Rank the retrievable chunks of a collection; parents are left out."""
    retrievable = [chunk for chunk in chunks if chunk.is_retrievable]
    return RetrievalScorer().rank(retrievable, query_embedding, query_text, alpha, rerank)
