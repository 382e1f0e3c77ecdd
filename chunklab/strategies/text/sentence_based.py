"""
Sentence-based chunking strategy.

Sentences are approximated with a regular expression unless a segmenter is
injected, then grouped while the group still fits the size budget.
"""

import re
from typing import Callable, List, Optional

from chunklab.core.base import BaseChunker
from chunklab.core.registry import ComplexityLevel, StrategyType, register_chunker
from chunklab.core.spans import TextSpan, join_spans, locate_spans, span_of, strip_all, strip_span

SENTENCE_PATTERN = re.compile(r"""[^.!?]+[.!?]+["']?|.+""")

Segmenter = Callable[[str], List[str]]


def regex_sentences(text: str) -> List[TextSpan]:
    """Approximate sentence spans; the final unterminated run counts as one."""
    return [span_of(text, match.start(), match.end()) for match in SENTENCE_PATTERN.finditer(text)]


@register_chunker(
    StrategyType.SENTENCE,
    name="Sentence-Based Chunking",
    description=(
        "Splits at sentence boundaries, grouping sentences until a size "
        "threshold is reached."
    ),
    best_for=("QA Systems", "News articles"),
    worst_for=("Lists", "Complex formatting"),
    complexity=ComplexityLevel.LOW,
)
class SentenceChunker(BaseChunker):
    """
    Group consecutive sentences into chunks no larger than ``max_size``.

    A single sentence larger than the budget becomes its own chunk.

    Args:
        segmenter: Optional callable returning the sentences of a text; its
            output is anchored back into the text where found verbatim
    """

    def __init__(self, max_size: int = 1000, segmenter: Optional[Segmenter] = None, **kwargs):
        kwargs.setdefault("name", StrategyType.SENTENCE.value)
        super().__init__(max_size=max_size, **kwargs)
        self.segmenter = segmenter

    def sentences(self, text: str) -> List[TextSpan]:
        if self.segmenter is not None:
            return locate_spans(text, self.segmenter(text))
        return regex_sentences(text)

    def split(self, text: str) -> List[TextSpan]:
        groups: List[TextSpan] = []
        current: Optional[TextSpan] = None

        for sentence in self.sentences(text):
            if current is None:
                current = sentence
                continue
            candidate = join_spans(current, sentence, " ", text)
            if self.measure(strip_span(candidate).text) > self.max_size:
                groups.append(current)
                current = sentence
            else:
                current = candidate

        if current is not None:
            groups.append(current)

        return strip_all(groups)
