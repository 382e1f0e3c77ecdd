"""
Small chunk merging.

Post-processing pass that coalesces undersized adjacent spans so that at most
one output (and only when the whole input is too small) stays below the
minimum size.
"""

from typing import Callable, List, Optional, Sequence

from chunklab.core.spans import TextSpan, join_spans
from chunklab.logging_config import get_logger

logger = get_logger(__name__)


class SmallChunkMerger:
    """
    Merge consecutive spans until each output reaches ``min_size``.

    Anchored spans are merged by slicing ``source``, so the text between them
    is kept exactly once. Unanchored spans are joined with ``separator``.

    Examples:
        ```python
        merger = SmallChunkMerger(min_size=20)
        merged = merger.merge(spans, source=text)
        ```
    """

    def __init__(
        self,
        min_size: int,
        separator: str = "\n",
        measure: Callable[[str], int] = len
    ):
        self.min_size = min_size
        self.separator = separator
        self.measure = measure

    def merge(self, spans: Sequence[TextSpan], source: Optional[str] = None) -> List[TextSpan]:
        """
        Merge undersized spans.

        Args:
            spans: Spans in document order
            source: Text the spans are anchored in, if any

        Returns:
            Merged spans; the input unchanged when ``min_size <= 0``
        """
        if self.min_size <= 0 or len(spans) < 2:
            return list(spans)

        merged: List[TextSpan] = []
        buffer: Optional[TextSpan] = None

        for span in spans:
            buffer = span if buffer is None else join_spans(buffer, span, self.separator, source)
            if self.measure(buffer.text) >= self.min_size:
                merged.append(buffer)
                buffer = None

        # Trailing remainder goes backward so it never stands alone
        if buffer is not None:
            if merged:
                merged[-1] = join_spans(merged[-1], buffer, self.separator, source)
            else:
                merged.append(buffer)

        if len(merged) < len(spans):
            logger.debug(f"Merged {len(spans)} spans into {len(merged)} (min_size={self.min_size})")

        return merged


def merge_small_spans(
    spans: Sequence[TextSpan],
    min_size: int,
    separator: str = "\n",
    source: Optional[str] = None,
    measure: Callable[[str], int] = len
) -> List[TextSpan]:
    """Functional shortcut for ``SmallChunkMerger(...).merge(...)``."""
    return SmallChunkMerger(min_size, separator, measure).merge(spans, source)
