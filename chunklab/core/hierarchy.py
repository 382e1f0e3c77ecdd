"""
Span pipeline and parent/child hierarchical chunking.

A pipeline pass is routing followed by small chunk merging. Hierarchical
chunking runs one pass over the whole text with the parent budget, then an
independent pass over every parent with the child budget.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from chunklab.core.base import Chunk, ChunkKind
from chunklab.core.config import ChunkingOptions
from chunklab.core.keywords import extract_keywords
from chunklab.core.merger import SmallChunkMerger
from chunklab.core.spans import TextSpan
from chunklab.logging_config import get_logger
from chunklab.strategies.router import RouteResult, StrategyRouter

logger = get_logger(__name__)

MERGE_SEPARATOR = "\n"


def run_pass(
    router: StrategyRouter,
    text: str,
    options: ChunkingOptions,
    max_size: Optional[int] = None,
    parent_pass: bool = False
) -> RouteResult:
    """Route ``text`` and merge undersized spans."""
    routed = router.route(text, options, max_size=max_size, parent_pass=parent_pass)
    if options.min_chunk_size <= 0 or not routed.spans:
        return routed

    merger = SmallChunkMerger(
        options.min_chunk_size,
        separator=MERGE_SEPARATOR,
        measure=lambda content: router.estimator.measure(content, options.size_unit),
    )
    return RouteResult(routed.strategy, merger.merge(routed.spans, source=text), routed.warnings)


@dataclass
class HierarchyResult:
    """Parents, children and the warnings collected over both passes."""

    parents: List[Chunk]
    children: List[Chunk]
    warnings: List[str] = field(default_factory=list)

    def ordered(self) -> List[Chunk]:
        """Each parent followed by its children."""
        by_parent: Dict[str, List[Chunk]] = {}
        for child in self.children:
            by_parent.setdefault(child.parent_id, []).append(child)
        chunks: List[Chunk] = []
        for parent in self.parents:
            chunks.append(parent)
            chunks.extend(by_parent.get(parent.id, []))
        return chunks


class HierarchicalChunker:
    """
    Two-pass parent/child chunker.

    Parents are built with ``parent_chunk_size`` (default 1000). AI strategies
    are replaced by the recursive strategy for parents. Children are built
    from each parent's content with ``chunk_size`` and the selected strategy,
    optionally in a thread pool when ``max_workers > 1``.

    Examples:
        ```python
        hierarchy = HierarchicalChunker(StrategyRouter(), run_id="a1b2c3d4")
        result = hierarchy.split_hierarchical(text, options)
        for parent in result.parents:
            ...
        ```
    """

    def __init__(self, router: StrategyRouter, run_id: str):
        self.router = router
        self.run_id = run_id

    def split_hierarchical(self, text: str, options: ChunkingOptions) -> HierarchyResult:
        warnings: List[str] = []
        parent_pass = run_pass(
            self.router, text, options,
            max_size=options.effective_parent_size,
            parent_pass=True,
        )
        warnings.extend(parent_pass.warnings)

        parents = [
            Chunk.from_span(
                f"parent-{i}-{self.run_id}",
                span,
                kind=ChunkKind.PARENT,
                keywords=extract_keywords(span.text),
                estimator=self.router.estimator,
            )
            for i, span in enumerate(parent_pass.spans)
        ]

        per_parent = self._children_for_all(parents, options)

        children: List[Chunk] = []
        for child_list, child_warnings in per_parent:
            children.extend(child_list)
            warnings.extend(child_warnings)

        logger.debug(f"Hierarchical split produced {len(parents)} parents and {len(children)} children")
        return HierarchyResult(parents, children, warnings)

    def _children_for_all(
        self,
        parents: List[Chunk],
        options: ChunkingOptions
    ) -> List[Tuple[List[Chunk], List[str]]]:
        if options.max_workers <= 1 or len(parents) <= 1:
            return [self._children_for(i, parent, options) for i, parent in enumerate(parents)]

        results: List[Optional[Tuple[List[Chunk], List[str]]]] = [None] * len(parents)
        with ThreadPoolExecutor(max_workers=options.max_workers) as executor:
            future_to_index = {
                executor.submit(self._children_for, i, parent, options): i
                for i, parent in enumerate(parents)
            }
            for future in as_completed(future_to_index):
                results[future_to_index[future]] = future.result()
        return results

    def _children_for(
        self,
        index: int,
        parent: Chunk,
        options: ChunkingOptions
    ) -> Tuple[List[Chunk], List[str]]:
        child_pass = run_pass(self.router, parent.content, options, max_size=options.chunk_size)
        children = []
        for j, span in enumerate(child_pass.spans):
            if parent.start is None:
                span = TextSpan(span.text)
            children.append(Chunk.from_span(
                f"child-{index}-{j}-{self.run_id}",
                span,
                kind=ChunkKind.CHILD,
                parent_id=parent.id,
                keywords=extract_keywords(span.text),
                estimator=self.router.estimator,
                offset=parent.start or 0,
            ))
        return children, child_pass.warnings
