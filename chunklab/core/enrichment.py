"""
Concurrent chunk enrichment.

Fans an external ``Enricher`` out over the first ``enrichment_limit``
retrievable chunks using a bounded thread pool. Each call is isolated: a
failing call leaves its chunk unannotated and does not affect the others.
"""

import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from chunklab.core.base import Chunk, ChunkEnrichment
from chunklab.core.config import EnrichmentOptions
from chunklab.core.exceptions import ExternalServiceError
from chunklab.logging_config import get_logger, performance_log

logger = get_logger(__name__)

# enricher(chunk, model, options) returns the annotated chunk or just its annotations
Enricher = Callable[[Chunk, Optional[str], EnrichmentOptions], Union[Chunk, ChunkEnrichment]]


class EnrichmentRunner:
    """
    Bounded fan-out of enrichment calls.

    Args:
        enricher: Callable annotating one chunk, called as (chunk, model, options)
        options: Which annotations to request
        model: Model identifier forwarded to the enricher
        limit: Maximum number of chunks to enrich
        max_workers: Thread pool size
    """

    def __init__(
        self,
        enricher: Enricher,
        options: EnrichmentOptions,
        model: Optional[str] = None,
        limit: int = 10,
        max_workers: int = 4
    ):
        self.enricher = enricher
        self.options = options
        self.model = model
        self.limit = max(0, limit)
        self.max_workers = max(1, max_workers)

    def _enrich_one(self, chunk: Chunk) -> ChunkEnrichment:
        """
        Raises:
            ExternalServiceError: If the enricher fails or returns the wrong type
        """
        try:
            result = self.enricher(chunk, self.model, self.options)
        except ExternalServiceError:
            raise
        except Exception as e:
            raise ExternalServiceError(f"Enricher failed: {e}", service="enricher") from e
        enrichment = result.enrichment if isinstance(result, Chunk) else result
        if not isinstance(enrichment, ChunkEnrichment):
            raise ExternalServiceError(
                f"Enricher returned {type(result).__name__} without a ChunkEnrichment",
                service="enricher",
            )
        return enrichment

    def run(self, chunks: Sequence[Chunk]) -> Tuple[List[Chunk], List[str]]:
        """
        Enrich eligible chunks.

        Parents are never enriched. Chunks beyond the limit are returned
        untouched and no call is made for them.

        Returns:
            Tuple of (chunks in input order, warnings for failed calls)
        """
        if not self.options.enabled or self.limit == 0:
            return list(chunks), []

        targets = [chunk for chunk in chunks if chunk.is_retrievable][:self.limit]
        if not targets:
            return list(chunks), []

        start_time = time.time()
        annotations: Dict[str, ChunkEnrichment] = {}
        warnings: List[str] = []

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(targets))) as executor:
            future_to_chunk = {
                executor.submit(self._enrich_one, chunk): chunk
                for chunk in targets
            }
            for future in as_completed(future_to_chunk):
                chunk = future_to_chunk[future]
                try:
                    annotations[chunk.id] = future.result()
                except ExternalServiceError as e:
                    message = f"Enrichment failed for chunk {chunk.id}: {e}"
                    logger.warning(message)
                    warnings.append(message)

        performance_log("enrichment", time.time() - start_time, chunks=len(targets))
        logger.debug(f"Enriched {len(annotations)}/{len(targets)} chunks")

        enriched = [
            replace(chunk, enrichment=annotations[chunk.id]) if chunk.id in annotations else chunk
            for chunk in chunks
        ]
        return enriched, warnings


def enrich_chunks(
    chunks: Sequence[Chunk],
    enricher: Enricher,
    options: EnrichmentOptions,
    model: Optional[str] = None,
    limit: int = 10,
    max_workers: int = 4
) -> Tuple[List[Chunk], List[str]]:
    """Functional shortcut for ``EnrichmentRunner(...).run(chunks)``."""
    return EnrichmentRunner(enricher, options, model, limit, max_workers).run(chunks)
