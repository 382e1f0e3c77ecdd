"""
Strategy routing.

Maps a resolved strategy to a chunker and runs it. Deterministic strategies
are built from the registry; AI strategies go through the injected
``AISplitter``.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from chunklab.core.base import BaseChunker
from chunklab.core.config import ChunkingOptions
from chunklab.core.exceptions import MissingConfigurationError
from chunklab.core.registry import StrategyType, create_chunker, requires_ai
from chunklab.core.spans import TextSpan
from chunklab.core.tokens import DEFAULT_ESTIMATOR, TokenEstimator
from chunklab.logging_config import debug_operation, get_logger
from chunklab.strategies.ai.external import AISplitter, ExternalChunker
from chunklab.strategies.text.sentence_based import Segmenter

logger = get_logger(__name__)


@dataclass
class RouteResult:
    """Spans produced by one routed strategy run."""

    strategy: StrategyType
    spans: List[TextSpan]
    warnings: List[str] = field(default_factory=list)


class StrategyRouter:
    """
    Dispatch text to the chunker selected by the options.

    On the parent pass of hierarchical chunking AI strategies are replaced by
    the recursive strategy, so the external service is only called for the
    children.

    Args:
        ai_splitter: Callable serving the semantic, linguistic and LLM strategies
        segmenter: Optional sentence segmenter for sentence and hybrid strategies
        estimator: Token estimator shared by all chunkers
    """

    def __init__(
        self,
        ai_splitter: Optional[AISplitter] = None,
        segmenter: Optional[Segmenter] = None,
        estimator: Optional[TokenEstimator] = None
    ):
        self.ai_splitter = ai_splitter
        self.segmenter = segmenter
        self.estimator = estimator or DEFAULT_ESTIMATOR

    @staticmethod
    def effective_strategy(strategy: StrategyType, parent_pass: bool = False) -> StrategyType:
        if parent_pass and requires_ai(strategy):
            return StrategyType.RECURSIVE
        return strategy

    def build_chunker(
        self,
        options: ChunkingOptions,
        max_size: Optional[int] = None,
        parent_pass: bool = False
    ) -> BaseChunker:
        """
        Create the chunker for one pass.

        Raises:
            MissingConfigurationError: If an AI strategy is selected without a splitter
        """
        strategy = self.effective_strategy(options.strategy, parent_pass)
        size = max_size if max_size is not None else options.chunk_size
        common = dict(
            max_size=size,
            overlap=options.overlap,
            size_unit=options.size_unit,
            estimator=self.estimator,
        )

        if requires_ai(strategy):
            if self.ai_splitter is None:
                raise MissingConfigurationError(
                    f"Strategy '{strategy.value}' requires an AI splitter but none is configured"
                )
            return ExternalChunker(
                self.ai_splitter,
                strategy,
                model=options.model,
                custom_prompt=options.custom_prompt,
                **common
            )

        return create_chunker(
            strategy,
            separators=options.effective_separators,
            pattern=options.effective_regex_pattern,
            segmenter=self.segmenter,
            **common
        )

    def route(
        self,
        text: str,
        options: ChunkingOptions,
        max_size: Optional[int] = None,
        parent_pass: bool = False
    ) -> RouteResult:
        """
        Split ``text`` with the strategy selected by ``options``.

        Args:
            text: Text to split
            options: Validated chunking options
            max_size: Size budget overriding ``options.chunk_size``
            parent_pass: Whether this is the parent pass of hierarchical chunking

        Returns:
            RouteResult with spans anchored in ``text`` where possible
        """
        strategy = self.effective_strategy(options.strategy, parent_pass)
        chunker = self.build_chunker(options, max_size, parent_pass)
        if not text.strip():
            return RouteResult(strategy, [])

        spans = chunker.split(text)
        debug_operation("route", {
            "strategy": chunker.name,
            "max_size": chunker.max_size,
            "parent_pass": parent_pass,
            "spans": len(spans),
        })
        return RouteResult(strategy, spans, list(chunker.warnings))
