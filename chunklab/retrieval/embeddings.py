"""Attach externally computed embeddings to chunks."""

from typing import Callable, List, Sequence

from chunklab.core.base import Chunk
from chunklab.core.exceptions import ExternalServiceError
from chunklab.logging_config import get_logger, user_warning

logger = get_logger(__name__)

Embedder = Callable[[List[str]], Sequence[Sequence[float]]]


def _call_embedder(embed: Embedder, texts: List[str]) -> List[Sequence[float]]:
    """
    Raises:
        ExternalServiceError: If the embedder fails or returns the wrong number of vectors
    """
    try:
        vectors = list(embed(texts))
    except ExternalServiceError:
        raise
    except Exception as e:
        raise ExternalServiceError(f"Embedder failed: {e}", service="embedder") from e
    if len(vectors) != len(texts):
        raise ExternalServiceError(
            f"Embedder returned {len(vectors)} vectors for {len(texts)} texts",
            service="embedder",
        )
    return vectors


def embed_chunks(chunks: Sequence[Chunk], embed: Embedder) -> List[Chunk]:
    """
    Embed every retrievable chunk in one batch call.

    Parents are skipped. When the embedder fails the collection is returned
    unchanged and the failure is logged.
    """
    targets = [chunk for chunk in chunks if chunk.is_retrievable]
    if not targets:
        return list(chunks)

    try:
        vectors = _call_embedder(embed, [chunk.content for chunk in targets])
    except ExternalServiceError as e:
        user_warning(f"Embedding failed, chunks left without embeddings: {e}")
        return list(chunks)

    by_id = {
        chunk.id: tuple(float(value) for value in vector)
        for chunk, vector in zip(targets, vectors)
    }
    logger.debug(f"Embedded {len(by_id)} chunks")
    return [
        chunk.with_retrieval(embedding=by_id[chunk.id]) if chunk.id in by_id else chunk
        for chunk in chunks
    ]
