"""Tests for offset-anchored spans and range helpers."""

import re

from chunklab.core.spans import (
    TextSpan,
    join_spans,
    locate_spans,
    pattern_ranges,
    span_of,
    strip_all,
    strip_span,
    window_ranges,
)


class TestTextSpan:
    """Test span construction and stripping."""

    def test_span_of_slices_source(self):
        span = span_of("hello world", 6, 11)
        assert span == TextSpan("world", 6, 11)
        assert span.anchored
        assert len(span) == 5

    def test_unanchored_span(self):
        assert not TextSpan("loose").anchored

    def test_strip_moves_anchors(self):
        """Stripping keeps anchors pointing at the remaining text."""
        assert strip_span(TextSpan("  hi  ", 5, 11)) == TextSpan("hi", 7, 9)

    def test_strip_unanchored(self):
        assert strip_span(TextSpan("  hi ")) == TextSpan("hi")

    def test_strip_blank_anchored(self):
        assert strip_span(TextSpan("   ", 4, 7)) == TextSpan("", 4, 4)

    def test_strip_all_drops_empty(self):
        spans = [TextSpan(" a ", 0, 3), TextSpan("   ", 3, 6), TextSpan("b", 6, 7)]
        assert [span.text for span in strip_all(spans)] == ["a", "b"]


class TestLocateSpans:
    """Test anchoring of external strings."""

    def test_sequential_search(self):
        """Repeated pieces are found in order, not at the first occurrence."""
        spans = locate_spans("one two one", ["one", "one"])
        assert [(span.start, span.end) for span in spans] == [(0, 3), (8, 11)]

    def test_missing_piece_stays_unanchored(self):
        spans = locate_spans("one two", ["one", "zzz", "two"])
        assert spans[1] == TextSpan("zzz")
        assert spans[2] == TextSpan("two", 4, 7)


class TestJoinSpans:
    """Test merging of neighbouring spans."""

    def test_anchored_join_slices_source(self):
        """Anchored spans keep the original text between them."""
        source = "abc  \n def"
        joined = join_spans(TextSpan("abc", 0, 3), TextSpan("def", 7, 10), "\n", source)
        assert joined == TextSpan(source, 0, 10)

    def test_unanchored_join_uses_separator(self):
        joined = join_spans(TextSpan("abc"), TextSpan("def"), "\n")
        assert joined == TextSpan("abc\ndef")

    def test_overlapping_windows_do_not_duplicate(self):
        """Overlapping anchored spans merge into their union."""
        source = "abcdefgh"
        joined = join_spans(TextSpan("abcde", 0, 5), TextSpan("defgh", 3, 8), "\n", source)
        assert joined.text == "abcdefgh"


class TestRanges:
    """Test pattern and window range helpers."""

    def test_pattern_ranges_literal(self):
        ranges = pattern_ranges("a,b,,c", re.compile(","))
        assert ranges == [(0, 1), (2, 3), (4, 4), (5, 6)]

    def test_pattern_ranges_lookahead(self):
        """Zero-width matches only mark boundaries."""
        ranges = pattern_ranges("#a\n#b", re.compile(r"(?=^#)", re.MULTILINE))
        assert ranges == [(0, 3), (3, 5)]

    def test_pattern_ranges_sub_range(self):
        ranges = pattern_ranges("xx a b yy", re.compile(" "), 3, 6)
        assert ranges == [(3, 4), (5, 6)]

    def test_window_ranges_stop_at_end(self):
        """Windows stop once one reaches the end of the range."""
        assert window_ranges(0, 10, 4, 3) == [(0, 4), (3, 7), (6, 10)]
        assert window_ranges(0, 10, 4, 4) == [(0, 4), (4, 8), (8, 10)]

    def test_window_ranges_empty(self):
        assert window_ranges(0, 0, 4, 4) == []

    def test_window_ranges_minimum_step(self):
        """A non-positive step still advances."""
        assert window_ranges(0, 3, 2, 0) == [(0, 2), (1, 3)]
