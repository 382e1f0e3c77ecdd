"""Tests for AI strategies served by an injected splitter."""

from chunklab.core.exceptions import ExternalServiceError
from chunklab.core.registry import StrategyType
from chunklab.strategies.ai.external import ExternalChunker


def texts(spans):
    return [span.text for span in spans]


class TestExternalChunker:
    """Test delegation and fallback."""

    def setup_method(self):
        self.text = "First topic here.\n\nSecond topic there."

    def test_pieces_are_anchored(self, fake_ai_splitter):
        chunker = ExternalChunker(
            fake_ai_splitter, StrategyType.SEMANTIC, model="model-x", custom_prompt="split by topic"
        )
        spans = chunker.split(self.text)

        assert texts(spans) == ["First topic here.", "Second topic there."]
        assert all(self.text[span.start:span.end] == span.text for span in spans)
        assert fake_ai_splitter.calls == [(self.text, StrategyType.SEMANTIC, "model-x", "split by topic")]
        assert chunker.warnings == []

    def test_rewritten_pieces_stay_unanchored(self, ai_splitter_factory):
        splitter = ai_splitter_factory(pieces=["A summary of topic one", "Second topic there."])
        spans = ExternalChunker(splitter, StrategyType.LLM).split(self.text)
        assert not spans[0].anchored
        assert spans[1].anchored

    def test_failure_falls_back_to_whole_text(self, ai_splitter_factory):
        splitter = ai_splitter_factory(error=RuntimeError("timeout"))
        chunker = ExternalChunker(splitter, StrategyType.LINGUISTIC)
        assert texts(chunker.split(self.text)) == [self.text]
        assert len(chunker.warnings) == 1
        assert "timeout" in chunker.warnings[0]

    def test_service_error_falls_back(self, ai_splitter_factory):
        splitter = ai_splitter_factory(error=ExternalServiceError("quota exceeded", service="llm"))
        chunker = ExternalChunker(splitter, StrategyType.SEMANTIC)
        assert texts(chunker.split(self.text)) == [self.text]

    def test_empty_answer_falls_back(self, ai_splitter_factory):
        chunker = ExternalChunker(ai_splitter_factory(pieces=["  ", ""]), StrategyType.SEMANTIC)
        assert texts(chunker.split(self.text)) == [self.text]
        assert len(chunker.warnings) == 1

    def test_non_string_answer_falls_back(self):
        chunker = ExternalChunker(lambda text, strategy, model, prompt: [1, 2], StrategyType.LLM)
        assert texts(chunker.split(self.text)) == [self.text]
        assert chunker.warnings

    def test_single_string_answer_rejected(self):
        chunker = ExternalChunker(lambda text, strategy, model, prompt: "one piece", StrategyType.LLM)
        assert texts(chunker.split(self.text)) == [self.text]
