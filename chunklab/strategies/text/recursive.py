"""
Recursive separator-hierarchy chunking.

The text is split on the coarsest separator first; fragments are packed into
buffers that fit ``max_size`` and any fragment that is too large on its own
is split again with the remaining separators. When the hierarchy is exhausted
(or reaches the ``""`` sentinel) the fragment is cut into fixed windows.

All work is done on offset ranges into the source text, so emitted spans are
exact slices of it.
"""

import re
from typing import List, Optional, Sequence, Tuple, Union

from chunklab.core.base import BaseChunker
from chunklab.core.registry import ComplexityLevel, StrategyType, register_chunker
from chunklab.core.spans import TextSpan, drop_blank, pattern_ranges, span_of, window_ranges
from chunklab.core.tokens import WORD_PATTERN, SizeUnit
from chunklab.logging_config import get_logger

logger = get_logger(__name__)

Separator = Union[str, re.Pattern]
Range = Tuple[int, int]

DEFAULT_SEPARATORS: Tuple[str, ...] = ("\n\n", "\n", " ", "")


class SeparatorSplitter:
    """
    Split a source range on a single separator.

    A literal string is matched verbatim; a compiled pattern may be
    zero-width (lookahead) in which case it only marks boundaries.
    """

    def __init__(self, separator: Separator):
        if isinstance(separator, str):
            self.pattern = re.compile(re.escape(separator))
        else:
            self.pattern = separator
        self.separator = separator

    def fragments(self, source: str, start: int, end: int) -> List[Range]:
        """Non-empty ranges between separator matches."""
        return [
            (frag_start, frag_end)
            for frag_start, frag_end in pattern_ranges(source, self.pattern, start, end)
            if frag_end > frag_start
        ]


@register_chunker(
    StrategyType.RECURSIVE,
    name="Recursive Character Chunking",
    description=(
        "Iteratively splits text using a hierarchy of separators (e.g., \\n\\n, \\n, space) "
        "to find the largest possible chunks that fit constraints."
    ),
    best_for=("LangChain compatibility", "General-purpose RAG", "Preserving context"),
    worst_for=("Highly specialized formats", "Streaming data"),
    complexity=ComplexityLevel.MEDIUM,
)
class RecursiveChunker(BaseChunker):
    """
    Separator-hierarchy chunker.

    Every emitted span fits ``max_size`` unless a single indivisible unit
    (one word in token mode) is larger than the budget.

    Examples:
        ```python
        chunker = RecursiveChunker(max_size=500)
        spans = chunker.split(text)

        chunker = RecursiveChunker(max_size=2, separators=[". "])
        chunker.split("A. B. C.")  # "A", "B", "C."
        ```
    """

    def __init__(
        self,
        max_size: int = 1000,
        overlap: int = 0,
        separators: Optional[Sequence[Separator]] = None,
        **kwargs
    ):
        kwargs.setdefault("name", StrategyType.RECURSIVE.value)
        super().__init__(max_size=max_size, overlap=overlap, **kwargs)
        self.separators: Tuple[Separator, ...] = tuple(separators) if separators else DEFAULT_SEPARATORS

    def split(self, text: str) -> List[TextSpan]:
        if not text:
            return []
        ranges = self._split_range(text, 0, len(text), self.separators)
        return drop_blank(span_of(text, start, end) for start, end in ranges)

    def _size(self, source: str, start: int, end: int) -> int:
        if self.size_unit == SizeUnit.CHARACTERS:
            return end - start
        return self.measure(source[start:end])

    def _split_range(
        self,
        source: str,
        start: int,
        end: int,
        separators: Sequence[Separator]
    ) -> List[Range]:
        if not separators or separators[0] == "":
            return self._hard_split(source, start, end)

        splitter = SeparatorSplitter(separators[0])
        remaining = separators[1:]

        results: List[Range] = []
        buffer_start: Optional[int] = None
        buffer_end = start

        for frag_start, frag_end in splitter.fragments(source, start, end):
            if self._size(source, frag_start, frag_end) > self.max_size:
                if buffer_start is not None:
                    results.append((buffer_start, buffer_end))
                    buffer_start = None
                results.extend(self._split_range(source, frag_start, frag_end, remaining))
                continue

            if buffer_start is None:
                buffer_start, buffer_end = frag_start, frag_end
            elif self._size(source, buffer_start, frag_end) > self.max_size:
                results.append((buffer_start, buffer_end))
                buffer_start, buffer_end = frag_start, frag_end
            else:
                buffer_end = frag_end

        if buffer_start is not None:
            results.append((buffer_start, buffer_end))

        return results

    def _hard_split(self, source: str, start: int, end: int) -> List[Range]:
        """Fixed windows: characters in character mode, words in token mode."""
        if self.size_unit == SizeUnit.CHARACTERS:
            return window_ranges(start, end, self.max_size, self.max_size - self.overlap)

        words = [match.span() for match in WORD_PATTERN.finditer(source, start, end)]
        if not words:
            return [(start, end)]

        window = self.estimator.words_for_budget(self.max_size, SizeUnit.TOKENS)
        overlap_words = int(self.overlap / self.estimator.tokens_per_word)
        step = max(1, window - overlap_words)

        ranges = []
        for first, last in window_ranges(0, len(words), window, step):
            ranges.append((words[first][0], words[last - 1][1]))
        return ranges
