"""Tests for small chunk merging."""

from chunklab.core.merger import SmallChunkMerger, merge_small_spans
from chunklab.core.spans import TextSpan, span_of
from chunklab.core.tokens import DEFAULT_ESTIMATOR, SizeUnit


def anchored(source, *ranges):
    return [span_of(source, start, end) for start, end in ranges]


class TestSmallChunkMerger:
    """Test merging of undersized spans."""

    def test_disabled_when_min_size_zero(self):
        spans = [TextSpan("a"), TextSpan("b")]
        assert SmallChunkMerger(0).merge(spans) == spans

    def test_single_span_untouched(self):
        spans = [TextSpan("a")]
        assert SmallChunkMerger(10).merge(spans) == spans

    def test_merges_until_minimum(self):
        """Spans accumulate until the buffer reaches the minimum."""
        source = "aa bb cc dddddd"
        spans = anchored(source, (0, 2), (3, 5), (6, 8), (9, 15))
        merged = SmallChunkMerger(5).merge(spans, source=source)
        assert [span.text for span in merged] == ["aa bb", "cc dddddd"]

    def test_trailing_remainder_merges_backward(self):
        source = "aaaaa bb"
        spans = anchored(source, (0, 5), (6, 8))
        merged = SmallChunkMerger(5).merge(spans, source=source)
        assert merged == [TextSpan("aaaaa bb", 0, 8)]

    def test_all_small_gives_one_output(self):
        """When everything is too small, one short output remains."""
        merged = SmallChunkMerger(10).merge([TextSpan("a"), TextSpan("b")])
        assert merged == [TextSpan("a\nb")]

    def test_custom_separator_for_unanchored(self):
        merged = SmallChunkMerger(10, separator=" | ").merge([TextSpan("one"), TextSpan("two")])
        assert merged[0].text == "one | two"

    def test_at_most_one_output_below_minimum(self):
        source = "x y zz www vvvv uuuuu tttttt"
        ranges, cursor = [], 0
        for word in source.split(" "):
            ranges.append((cursor, cursor + len(word)))
            cursor += len(word) + 1
        for min_size in (1, 3, 5, 8, 40):
            merged = SmallChunkMerger(min_size).merge(anchored(source, *ranges), source=source)
            below = [span for span in merged if len(span.text) < min_size]
            assert len(below) <= 1
            if below:
                assert len(merged) == 1

    def test_merged_spans_stay_anchored(self):
        source = "one\ntwo\nthree\nfour"
        spans = anchored(source, (0, 3), (4, 7), (8, 13), (14, 18))
        for span in SmallChunkMerger(7).merge(spans, source=source):
            assert source[span.start:span.end] == span.text

    def test_token_measure(self):
        """Sizes can be measured in tokens."""
        merger = SmallChunkMerger(
            3, measure=lambda text: DEFAULT_ESTIMATOR.measure(text, SizeUnit.TOKENS)
        )
        merged = merger.merge([TextSpan("alpha"), TextSpan("beta"), TextSpan("gamma delta")])
        assert [span.text for span in merged] == ["alpha\nbeta", "gamma delta"]

    def test_functional_shortcut(self):
        assert merge_small_spans([TextSpan("a"), TextSpan("b")], 5, separator=" ") == [TextSpan("a b")]
