"""
Pytest configuration and shared fixtures for the test suite.

Provides sample texts, fake external collaborators (AI splitter, enricher,
embedder) and a validator used across the unit and integration tests.
"""

import logging
import threading
from dataclasses import replace
from pathlib import Path
from typing import Dict, List

import pytest

from chunklab.core.base import ChunkEnrichment, QAPair
from chunklab.core.exceptions import ExternalServiceError
from chunklab.logging_config import ChunkLabLogger, LogConfig
from chunklab.utils.validation import ChunkValidator


SAMPLE_TEXTS: Dict[str, str] = {
    "simple": "This is a simple text file for testing basic functionality.",

    "paragraphs": """Chunking splits long documents into retrieval units.
Each unit should carry one coherent idea.

The second paragraph continues the discussion.
It explains why boundaries matter for retrieval quality.

The third paragraph closes the sample.
Short paragraphs are common in real documents.""",

    "markdown": """Intro text before any header.

# Main Title

Opening words of the main section.

## Section 1: Introduction
This is the introduction section with some explanatory text.

## Section 2: Details
Details follow here, with enough words to be a section.
""",

    "code": """import os


def first():
    return 1


def second():
    return 2


class Widget:
    def method(self):
        return os.getcwd()
""",

    "mixed": """Some prose introducing the example.

```python
def example():
    return 42
```

More prose after the code block.""",

    "unicode": "Héllo wörld! 你好世界. Mathematical symbols: α β γ δ ∑ ∏ ∫ ∞. Emojis: 🌍🚀💻.",

    "long": "This is a test sentence for long content. " * 60,
}


@pytest.fixture
def sample_texts() -> Dict[str, str]:
    """Sample texts keyed by kind."""
    return dict(SAMPLE_TEXTS)


@pytest.fixture
def validator() -> ChunkValidator:
    return ChunkValidator()


class FakeAISplitter:
    """Records calls and splits on blank lines, like a well-behaved model."""

    def __init__(self, pieces: List[str] = None, error: Exception = None):
        self.pieces = pieces
        self.error = error
        self.calls = []

    def __call__(self, text, strategy, model, custom_prompt):
        self.calls.append((text, strategy, model, custom_prompt))
        if self.error is not None:
            raise self.error
        if self.pieces is not None:
            return list(self.pieces)
        return [part.strip() for part in text.split("\n\n") if part.strip()]


class FakeEnricher:
    """Thread-safe enricher that can be told to fail on given contents."""

    def __init__(self, fail_on: str = None):
        self.fail_on = fail_on
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, chunk, model, options):
        with self._lock:
            self.calls.append(chunk.id)
        if self.fail_on and self.fail_on in chunk.content:
            raise ExternalServiceError("enrichment service unavailable", service="enricher")
        return replace(chunk, enrichment=ChunkEnrichment(
            summary=chunk.content[:20],
            labels=("test",) if options.label else (),
            qa_pairs=(QAPair("What is this?", chunk.content[:10]),) if options.qa else (),
            standalone_score=7.0,
        ))


class FakeEmbedder:
    """Deterministic embedder: vowel counts as a 5-dimensional vector."""

    def __init__(self, error: Exception = None):
        self.error = error
        self.calls = 0

    def __call__(self, texts):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return [[float(text.lower().count(vowel)) for vowel in "aeiou"] for text in texts]


@pytest.fixture
def fake_ai_splitter() -> FakeAISplitter:
    return FakeAISplitter()


@pytest.fixture
def fake_enricher() -> FakeEnricher:
    return FakeEnricher()


@pytest.fixture
def fake_embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def text_file(tmp_path) -> Path:
    """A paragraph text file on disk."""
    path = tmp_path / "sample.txt"
    path.write_text(SAMPLE_TEXTS["paragraphs"], encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def reset_package_logging():
    """Drop handlers the CLI attaches so later tests do not log to closed streams."""
    yield
    package_logger = logging.getLogger("chunklab")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    shared = ChunkLabLogger()
    shared.config = LogConfig()
    shared._handlers = []


@pytest.fixture
def ai_splitter_factory():
    """Build AI splitters with canned pieces or a failure."""
    return FakeAISplitter


@pytest.fixture
def enricher_factory():
    return FakeEnricher


@pytest.fixture
def embedder_factory():
    return FakeEmbedder
