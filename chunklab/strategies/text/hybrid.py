"""
Hybrid paragraph/sentence chunking strategy.

Paragraphs are packed together up to the size budget; a paragraph that is
too large on its own is broken into sentence groups instead.
"""

from typing import List, Optional

from chunklab.core.base import BaseChunker
from chunklab.core.registry import ComplexityLevel, StrategyType, register_chunker
from chunklab.core.spans import TextSpan, join_spans
from chunklab.strategies.text.paragraph_based import paragraph_spans
from chunklab.strategies.text.sentence_based import Segmenter, SentenceChunker


@register_chunker(
    StrategyType.HYBRID,
    name="Hybrid Chunking",
    description="Adaptively combines paragraph and sentence splitting for balance.",
    best_for=("Production systems", "Diverse corpus"),
    worst_for=("Simple use cases",),
    complexity=ComplexityLevel.MEDIUM,
)
class HybridChunker(BaseChunker):
    """Paragraph packing with a sentence-level fallback for oversized paragraphs."""

    def __init__(self, max_size: int = 1000, segmenter: Optional[Segmenter] = None, **kwargs):
        kwargs.setdefault("name", StrategyType.HYBRID.value)
        super().__init__(max_size=max_size, **kwargs)
        self.sentence_chunker = SentenceChunker(
            max_size=self.max_size,
            segmenter=segmenter,
            size_unit=self.size_unit,
            estimator=self.estimator,
        )

    def _sentence_split(self, paragraph: TextSpan) -> List[TextSpan]:
        pieces = self.sentence_chunker.split(paragraph.text)
        if not paragraph.anchored:
            return pieces
        return [
            TextSpan(piece.text, piece.start + paragraph.start, piece.end + paragraph.start)
            if piece.anchored else piece
            for piece in pieces
        ]

    def split(self, text: str) -> List[TextSpan]:
        chunks: List[TextSpan] = []
        current: Optional[TextSpan] = None

        for paragraph in paragraph_spans(text):
            if self.measure(paragraph.text) > self.max_size:
                if current is not None:
                    chunks.append(current)
                    current = None
                chunks.extend(self._sentence_split(paragraph))
                continue

            if current is None:
                current = paragraph
                continue

            candidate = join_spans(current, paragraph, "\n\n", text)
            if self.measure(candidate.text) > self.max_size:
                chunks.append(current)
                current = paragraph
            else:
                current = candidate

        if current is not None:
            chunks.append(current)

        return chunks
