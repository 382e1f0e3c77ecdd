"""
Chunking pipeline orchestrator.

This module provides the main entry point tying the pieces together: option
validation, strategy routing, small chunk merging, chunk record creation,
optional parent/child hierarchy, optional enrichment and statistics.
"""

import time
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from chunklab.core.base import Chunk, ChunkingResult
from chunklab.core.config import ChunkingOptions, load_options
from chunklab.core.enrichment import Enricher, EnrichmentRunner
from chunklab.core.hierarchy import HierarchicalChunker, run_pass
from chunklab.core.keywords import extract_keywords
from chunklab.core.tokens import TokenEstimator
from chunklab.logging_config import debug_operation, get_logger, performance_log
from chunklab.strategies.ai.external import AISplitter
from chunklab.strategies.router import StrategyRouter
from chunklab.strategies.text.sentence_based import Segmenter

logger = get_logger(__name__)

OptionsLike = Union[ChunkingOptions, Dict[str, Any], None]


def new_run_id() -> str:
    return uuid.uuid4().hex[:8]


class ChunkingOrchestrator:
    """
    Main orchestrator for chunking runs.

    Every call takes a complete options value; the orchestrator itself only
    holds the external collaborators and, optionally, default options loaded
    from a YAML file.

    Examples:
        Basic usage:
        ```python
        orchestrator = ChunkingOrchestrator()
        result = orchestrator.chunk(text, ChunkingOptions(strategy="paragraph"))
        ```

        With configuration file and AI splitter:
        ```python
        orchestrator = ChunkingOrchestrator(
            ai_splitter=my_splitter,
            config_path="chunking.yaml",
        )
        result = orchestrator.chunk(text)
        ```
    """

    def __init__(
        self,
        ai_splitter: Optional[AISplitter] = None,
        enricher: Optional[Enricher] = None,
        segmenter: Optional[Segmenter] = None,
        estimator: Optional[TokenEstimator] = None,
        config_path: Optional[Union[str, Path]] = None
    ):
        """
        Initialize the orchestrator.

        Args:
            ai_splitter: Callable serving the AI strategies
            enricher: Callable annotating chunks (summaries, labels, Q&A)
            segmenter: Sentence segmenter replacing the regex approximation
            estimator: Token estimator shared by the whole pipeline
            config_path: YAML file providing default options

        Raises:
            ConfigurationError: If the config file cannot be loaded
        """
        self.router = StrategyRouter(ai_splitter=ai_splitter, segmenter=segmenter, estimator=estimator)
        self.enricher = enricher
        self.default_options = load_options(config_path) if config_path else ChunkingOptions()

        logger.debug(f"ChunkingOrchestrator initialized (default strategy: {self.default_options.strategy.value})")

    def _resolve_options(self, options: OptionsLike) -> ChunkingOptions:
        if options is None:
            return self.default_options
        if isinstance(options, ChunkingOptions):
            return options
        return ChunkingOptions.from_dict(options)

    def chunk(self, text: str, options: OptionsLike = None) -> ChunkingResult:
        """
        Run the full chunking pipeline.

        Args:
            text: Text to chunk
            options: Options value, mapping, or None for the defaults

        Returns:
            ChunkingResult with chunks, statistics and warnings

        Raises:
            MissingConfigurationError: If an AI strategy is selected without a splitter
            ConfigurationError: If the options cannot be interpreted
        """
        start_time = time.time()
        run_id = new_run_id()
        options, warnings = self._resolve_options(options).validate()

        debug_operation("chunk", {
            "run_id": run_id,
            "text_length": len(text),
            "options": options.to_dict(),
        })

        if options.enable_parent_child:
            hierarchy = HierarchicalChunker(self.router, run_id).split_hierarchical(text, options)
            chunks = hierarchy.ordered()
            warnings.extend(hierarchy.warnings)
        else:
            routed = run_pass(self.router, text, options)
            warnings.extend(routed.warnings)
            chunks = [
                Chunk.from_span(
                    f"chunk-{i}-{run_id}",
                    span,
                    keywords=extract_keywords(span.text),
                    estimator=self.router.estimator,
                )
                for i, span in enumerate(routed.spans)
            ]

        chunks, enrichment_warnings = self._enrich(chunks, options)
        warnings.extend(enrichment_warnings)

        processing_time = time.time() - start_time
        performance_log("chunk", processing_time, strategy=options.strategy.value, chunks=len(chunks))

        return ChunkingResult(
            chunks=chunks,
            strategy_used=options.strategy.value,
            processing_time=processing_time,
            run_id=run_id,
            warnings=warnings,
        )

    def _enrich(self, chunks: List[Chunk], options: ChunkingOptions):
        if not options.enrichment.enabled:
            return chunks, []
        if self.enricher is None:
            message = "Enrichment requested but no enricher is configured; chunks left unannotated"
            logger.warning(message)
            return chunks, [message]

        runner = EnrichmentRunner(
            self.enricher,
            options.enrichment,
            model=options.model,
            limit=options.enrichment_limit,
            max_workers=options.max_workers,
        )
        return runner.run(chunks)


def chunk(
    text: str,
    options: OptionsLike = None,
    ai_splitter: Optional[AISplitter] = None,
    enricher: Optional[Enricher] = None
) -> List[Chunk]:
    """
    Chunk ``text`` and return the chunk collection.

    Examples:
        ```python
        from chunklab import chunk

        chunks = chunk(text, {"strategy": "paragraph"})
        ```
    """
    orchestrator = ChunkingOrchestrator(ai_splitter=ai_splitter, enricher=enricher)
    return orchestrator.chunk(text, options).chunks
