"""
AI-backed chunking through an injected splitter.

The semantic, linguistic and LLM strategies have no local implementation.
They delegate to an ``AISplitter`` callable supplied by the application
(typically a wrapper around a hosted model) and fall back to the whole text
when it fails.
"""

from typing import Callable, List, Optional, Sequence

from chunklab.core.base import BaseChunker
from chunklab.core.exceptions import ExternalServiceError
from chunklab.core.registry import (
    ComplexityLevel,
    StrategyDefinition,
    StrategyType,
    get_registry,
)
from chunklab.core.spans import TextSpan, drop_blank, locate_spans, span_of

AISplitter = Callable[[str, StrategyType, Optional[str], Optional[str]], Sequence[str]]

AI_DEFINITIONS = (
    StrategyDefinition(
        id="semantic",
        strategy=StrategyType.SEMANTIC,
        name="Semantic Chunking",
        description="Uses AI to identify topic shifts and create chunks based on meaning rather than length.",
        best_for=("High-accuracy RAG", "Multi-topic documents"),
        worst_for=("Real-time/Latency sensitive", "Low budget"),
        complexity=ComplexityLevel.HIGH,
        requires_ai=True,
    ),
    StrategyDefinition(
        id="linguistic",
        strategy=StrategyType.LINGUISTIC,
        name="Linguistic Chunking",
        description="Uses grammatical features (clauses, discourse markers) to split text.",
        best_for=("Deep NLP analysis", "Legal docs"),
        worst_for=("Informal text",),
        complexity=ComplexityLevel.HIGH,
        requires_ai=True,
    ),
    StrategyDefinition(
        id="llm",
        strategy=StrategyType.LLM,
        name="LLM-Based Chunking",
        description="Asks an LLM to intelligently segment the text based on context.",
        best_for=("Nuanced content", "Highest accuracy"),
        worst_for=("Large scale processing",),
        complexity=ComplexityLevel.HIGH,
        requires_ai=True,
    ),
)

for _definition in AI_DEFINITIONS:
    get_registry().register(_definition)


class ExternalChunker(BaseChunker):
    """
    Chunker delegating to an external AI splitter.

    Any failure of the splitter, or an empty answer, degrades to a single
    span holding the whole text and records a warning.

    Examples:
        ```python
        def ai_split(text, strategy, model, prompt):
            return my_llm_client.segment(text, instructions=prompt)

        chunker = ExternalChunker(ai_split, StrategyType.SEMANTIC)
        spans = chunker.split(text)
        ```
    """

    def __init__(
        self,
        ai_splitter: AISplitter,
        strategy: StrategyType,
        model: Optional[str] = None,
        custom_prompt: Optional[str] = None,
        **kwargs
    ):
        kwargs.setdefault("name", strategy.value)
        super().__init__(**kwargs)
        self.ai_splitter = ai_splitter
        self.strategy = strategy
        self.model = model
        self.custom_prompt = custom_prompt

    def _call_splitter(self, text: str) -> List[str]:
        """
        Call the splitter, normalizing every failure to ExternalServiceError.

        Raises:
            ExternalServiceError: If the splitter raises or returns something
                other than a sequence of strings
        """
        try:
            pieces = self.ai_splitter(text, self.strategy, self.model, self.custom_prompt)
        except ExternalServiceError:
            raise
        except Exception as e:
            raise ExternalServiceError(f"AI splitter failed: {e}", service="ai_splitter") from e

        if isinstance(pieces, str) or not all(isinstance(piece, str) for piece in pieces or ()):
            raise ExternalServiceError("AI splitter returned a non-string result", service="ai_splitter")
        return list(pieces or ())

    def split(self, text: str) -> List[TextSpan]:
        try:
            pieces = self._call_splitter(text)
        except ExternalServiceError as e:
            self.warn(f"{self.strategy.value} chunking failed, using the whole text: {e}")
            return drop_blank([span_of(text, 0, len(text))])

        spans = drop_blank(locate_spans(text, pieces))
        if not spans:
            self.warn(f"{self.strategy.value} chunking returned no chunks, using the whole text")
            return drop_blank([span_of(text, 0, len(text))])
        return spans
