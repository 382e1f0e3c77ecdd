"""
Source code chunking strategy.

Recursive splitting whose first separator is a boundary before top-level
definitions (``class``, ``def``, ``function``, ``export``), so functions and
classes stay whole whenever they fit the budget.
"""

import re
from typing import Tuple

from chunklab.core.registry import ComplexityLevel, StrategyType, register_chunker
from chunklab.strategies.text.recursive import RecursiveChunker, Separator

DEFINITION_BOUNDARY = re.compile(
    r"(?=^class\s+)|(?=^def\s+)|(?=^function\s+)|(?=^export\s+)",
    re.MULTILINE,
)

CODE_SEPARATORS: Tuple[Separator, ...] = (DEFINITION_BOUNDARY, "\n\n", "\n", "")


@register_chunker(
    StrategyType.CODE,
    name="Code Chunking",
    description="Splits code on top-level definitions (classes, functions) to preserve logic.",
    best_for=("Python", "JavaScript/TypeScript", "Rust"),
    worst_for=("Natural language", "Minified code"),
    complexity=ComplexityLevel.HIGH,
)
class CodeChunker(RecursiveChunker):
    """Recursive chunker over code separators, without overlap."""

    def __init__(self, max_size: int = 1000, **kwargs):
        kwargs.setdefault("name", StrategyType.CODE.value)
        kwargs.pop("overlap", None)
        kwargs.pop("separators", None)
        super().__init__(max_size=max_size, overlap=0, separators=CODE_SEPARATORS, **kwargs)
