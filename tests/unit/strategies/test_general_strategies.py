"""Tests for the fixed size, token and regex strategies."""

import pytest

from chunklab.core.exceptions import PatternError
from chunklab.core.tokens import SizeUnit
from chunklab.strategies.general.fixed_size import FixedSizeChunker
from chunklab.strategies.general.regex_chunker import RegexChunker, compile_pattern
from chunklab.strategies.general.token_based import TokenChunker

ALPHABET = "abcdefghijklmnopqrstuvwxy"


def texts(spans):
    return [span.text for span in spans]


class TestFixedSizeChunker:
    """Test character windows."""

    def test_windows(self):
        assert texts(FixedSizeChunker(max_size=10).split(ALPHABET)) == [
            "abcdefghij", "klmnopqrst", "uvwxy",
        ]

    def test_overlap(self):
        spans = FixedSizeChunker(max_size=10, overlap=3).split(ALPHABET)
        assert [(span.start, span.end) for span in spans] == [(0, 10), (7, 17), (14, 24), (21, 25)]

    def test_token_unit_converts_to_characters(self):
        chunker = FixedSizeChunker(max_size=2, size_unit=SizeUnit.TOKENS)
        assert chunker.window_size() == 8
        assert texts(chunker.split(ALPHABET[:16])) == ["abcdefgh", "ijklmnop"]

    def test_blank_windows_dropped(self):
        assert texts(FixedSizeChunker(max_size=4).split("abcd      ")) == ["abcd"]


class TestTokenChunker:
    """Test token-budget windows."""

    def test_default_budget(self):
        assert TokenChunker().max_size == 250

    def test_budget_always_in_tokens(self):
        chunker = TokenChunker(max_size=2)
        assert chunker.size_unit == SizeUnit.CHARACTERS
        assert texts(chunker.split("a" * 20)) == ["a" * 8, "a" * 8, "a" * 4]

    def test_overlap_in_tokens(self):
        spans = TokenChunker(max_size=2, overlap=1).split("a" * 20)
        assert [(span.start, span.end) for span in spans] == [(0, 8), (4, 12), (8, 16), (12, 20)]


class TestRegexChunker:
    """Test delimiter splitting."""

    def test_default_pattern(self):
        assert texts(RegexChunker().split("a\n\nb")) == ["a", "b"]

    def test_custom_pattern(self):
        assert texts(RegexChunker(pattern=r"\d+").split("a1b22c")) == ["a", "b", "c"]

    def test_captured_groups_dropped(self):
        """Delimiters never reach the output, even when captured."""
        assert texts(RegexChunker(pattern=r"(,)").split("x,y")) == ["x", "y"]

    def test_invalid_pattern_falls_back(self):
        text = "some text (with parens"
        chunker = RegexChunker(pattern="(")
        spans = chunker.split(text)
        assert texts(spans) == [text]
        assert len(chunker.warnings) == 1
        assert isinstance(chunker.pattern_error, PatternError)

    def test_anchored_output(self):
        text = "one---two---three"
        spans = RegexChunker(pattern="-{3}").split(text)
        assert all(text[span.start:span.end] == span.text for span in spans)
        assert texts(spans) == ["one", "two", "three"]


class TestCompilePattern:
    """Test pattern compilation errors."""

    def test_invalid(self):
        with pytest.raises(PatternError) as excinfo:
            compile_pattern("(")
        assert excinfo.value.pattern == "("

    def test_valid(self):
        assert compile_pattern(r"\s+").pattern == r"\s+"
