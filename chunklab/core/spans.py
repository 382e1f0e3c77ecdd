"""
Offset-anchored text spans.

Strategies describe their output as spans into the source text rather than as
free-standing strings. Anchored spans can be merged by slicing the source,
which keeps the exact original separators between them.
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class TextSpan:
    """A piece of text, optionally anchored at ``[start, end)`` of its source."""

    text: str
    start: Optional[int] = None
    end: Optional[int] = None

    @property
    def anchored(self) -> bool:
        return self.start is not None and self.end is not None

    def is_blank(self) -> bool:
        return not self.text.strip()

    def __len__(self) -> int:
        return len(self.text)


def span_of(source: str, start: int, end: int) -> TextSpan:
    """Anchored span for ``source[start:end]``."""
    return TextSpan(source[start:end], start, end)


def strip_span(span: TextSpan) -> TextSpan:
    """Trim surrounding whitespace, moving the anchors with the text."""
    stripped = span.text.strip()
    if stripped == span.text:
        return span
    if not span.anchored:
        return TextSpan(stripped)
    if not stripped:
        return TextSpan("", span.start, span.start)
    leading = len(span.text) - len(span.text.lstrip())
    start = span.start + leading
    return TextSpan(stripped, start, start + len(stripped))


def drop_blank(spans: Iterable[TextSpan]) -> List[TextSpan]:
    return [span for span in spans if not span.is_blank()]


def strip_all(spans: Iterable[TextSpan]) -> List[TextSpan]:
    """Strip every span and drop the ones that end up empty."""
    return drop_blank(strip_span(span) for span in spans)


def locate_spans(source: str, pieces: Iterable[str]) -> List[TextSpan]:
    """
    Anchor externally produced strings in ``source``.

    Pieces are searched in order from a moving cursor. A piece that does not
    occur verbatim stays unanchored and leaves the cursor where it was.
    """
    spans = []
    cursor = 0
    for piece in pieces:
        position = source.find(piece, cursor) if piece else -1
        if position < 0:
            spans.append(TextSpan(piece))
            continue
        end = position + len(piece)
        spans.append(TextSpan(piece, position, end))
        cursor = end
    return spans


def join_spans(
    first: TextSpan,
    second: TextSpan,
    separator: str,
    source: Optional[str] = None
) -> TextSpan:
    """
    Combine two neighbouring spans.

    When both are anchored in ``source`` and in order, the result is the
    source range covering both; otherwise the texts are joined with
    ``separator``.
    """
    if (
        source is not None
        and first.anchored
        and second.anchored
        and first.start <= second.start
        and first.end <= second.end
    ):
        return span_of(source, first.start, second.end)
    if not first.text:
        return TextSpan(second.text)
    if not second.text:
        return TextSpan(first.text)
    return TextSpan(first.text + separator + second.text)


def pattern_ranges(
    source: str,
    pattern: re.Pattern,
    start: int = 0,
    end: Optional[int] = None
) -> List[Tuple[int, int]]:
    """
    Ranges of ``source[start:end]`` lying between matches of ``pattern``.

    Matched text (captured groups included) is dropped. Zero-width matches,
    such as lookaheads, only mark a boundary. Empty ranges are kept so callers
    can decide how to treat them.
    """
    end = len(source) if end is None else end
    ranges = []
    cursor = start
    for match in pattern.finditer(source, start, end):
        if match.end() == match.start() and match.start() == cursor:
            continue
        ranges.append((cursor, match.start()))
        cursor = match.end()
    ranges.append((cursor, end))
    return ranges


def window_ranges(start: int, end: int, size: int, step: int) -> List[Tuple[int, int]]:
    """Fixed windows over ``[start, end)``, stopping once a window reaches ``end``."""
    size = max(1, size)
    step = max(1, step)
    ranges = []
    position = start
    while position < end:
        window_end = min(position + size, end)
        ranges.append((position, window_end))
        if window_end >= end:
            break
        position += step
    return ranges
