"""
Registry system for chunking strategies.

This module provides a decorator-based registry that lets deterministic
chunkers register themselves together with their catalog entry
(``StrategyDefinition``). AI strategies have catalog entries but no chunker
class: they are served by an external splitter.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Type, Union

from chunklab.core.base import BaseChunker
from chunklab.core.exceptions import ConfigurationError
from chunklab.logging_config import get_logger

logger = get_logger(__name__)


class StrategyType(Enum):
    """Every strategy the pipeline can route to."""

    FIXED_SIZE = "fixed_size"
    RECURSIVE = "recursive"
    DOCUMENT = "document"
    SEMANTIC = "semantic"
    SENTENCE = "sentence"
    PARAGRAPH = "paragraph"
    TOKEN = "token"
    SLIDING_WINDOW = "sliding_window"
    CONTENT_AWARE = "content_aware"
    METADATA = "metadata"
    LINGUISTIC = "linguistic"
    HYBRID = "hybrid"
    LLM = "llm"
    CODE = "code"
    REGEX = "regex"


AI_STRATEGIES = frozenset({StrategyType.SEMANTIC, StrategyType.LINGUISTIC, StrategyType.LLM})

# Alternative spellings accepted in options and config files
STRATEGY_NAME_MAPPING = {
    'fixed': 'fixed_size',
    'fixed-size': 'fixed_size',
    'sentence_based': 'sentence',
    'paragraph_based': 'paragraph',
    'header': 'document',
    'markdown': 'document',
    'sliding': 'sliding_window',
    'sliding-window': 'sliding_window',
    'overlapping_window': 'sliding_window',
    'content': 'content_aware',
    'content-aware': 'content_aware',
    'adaptive': 'hybrid',
    'code_splitter': 'code',
    'regex_splitter': 'regex',
    'llm_based': 'llm',
}


class ComplexityLevel(Enum):
    """Complexity levels for chunking strategies."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class StrategyDefinition:
    """
    Static catalog entry describing a strategy.

    Example:
        ```python
        @register_chunker(
            StrategyType.PARAGRAPH,
            name="Paragraph-Based Chunking",
            description="Preserves paragraph integrity.",
            best_for=("Essays", "Narratives"),
        )
        class ParagraphChunker(BaseChunker):
            ...
        ```
    """

    id: str
    strategy: StrategyType
    name: str
    description: str = ""
    best_for: Tuple[str, ...] = ()
    worst_for: Tuple[str, ...] = ()
    complexity: ComplexityLevel = ComplexityLevel.LOW
    requires_ai: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert the entry to a plain dictionary."""
        return {
            "id": self.id,
            "strategy": self.strategy.value,
            "name": self.name,
            "description": self.description,
            "best_for": list(self.best_for),
            "worst_for": list(self.worst_for),
            "complexity": self.complexity.value,
            "requires_ai": self.requires_ai,
        }


@dataclass
class ChunkerRegistry:
    """
    Registry for chunking strategies.

    Holds the chunker class of every deterministic strategy and the catalog
    entry of every strategy, deterministic or not.
    """

    _strategies: Dict[StrategyType, Type[BaseChunker]] = field(default_factory=dict)
    _definitions: Dict[StrategyType, StrategyDefinition] = field(default_factory=dict)

    def register(
        self,
        definition: StrategyDefinition,
        chunker_class: Optional[Type[BaseChunker]] = None
    ) -> None:
        """
        Register a catalog entry and, for deterministic strategies, its class.

        Raises:
            ConfigurationError: If a chunker class is given for an AI strategy
        """
        strategy = definition.strategy
        if chunker_class is not None and definition.requires_ai:
            raise ConfigurationError(f"AI strategy {strategy.value} cannot have a local chunker")

        if strategy in self._definitions:
            logger.warning(f"Overriding existing strategy: {strategy.value}")

        self._definitions[strategy] = definition
        if chunker_class is not None:
            self._strategies[strategy] = chunker_class

        logger.debug(f"Registered strategy: {strategy.value}")

    def get(self, strategy: StrategyType) -> Optional[Type[BaseChunker]]:
        """Get the chunker class for a strategy, None for AI strategies."""
        return self._strategies.get(strategy)

    def get_definition(self, strategy: StrategyType) -> Optional[StrategyDefinition]:
        return self._definitions.get(strategy)

    def list_definitions(self, requires_ai: Optional[bool] = None) -> List[StrategyDefinition]:
        """Catalog entries in declaration order, optionally filtered."""
        definitions = [self._definitions[s] for s in StrategyType if s in self._definitions]
        if requires_ai is not None:
            definitions = [d for d in definitions if d.requires_ai == requires_ai]
        return definitions

    def create_chunker(self, strategy: StrategyType, **kwargs) -> BaseChunker:
        """
        Create an instance of a deterministic chunker.

        Raises:
            ConfigurationError: If the strategy has no local chunker
        """
        chunker_class = self.get(strategy)
        if chunker_class is None:
            raise ConfigurationError(f"No local chunker registered for strategy: {strategy.value}")
        return chunker_class(**kwargs)


# Global registry instance
_global_registry = ChunkerRegistry()


def register_chunker(
    strategy: StrategyType,
    name: str,
    description: str = "",
    best_for: Tuple[str, ...] = (),
    worst_for: Tuple[str, ...] = (),
    complexity: ComplexityLevel = ComplexityLevel.LOW,
    strategy_id: Optional[str] = None
) -> Callable[[Type[BaseChunker]], Type[BaseChunker]]:
    """
    Decorator to register a deterministic chunker with its catalog entry.

    Args:
        strategy: Strategy served by the decorated class
        name: Human-readable name
        description: What the strategy does
        best_for: Content the strategy suits
        worst_for: Content the strategy handles poorly
        complexity: Algorithmic complexity level
        strategy_id: Short identifier, defaults to the strategy value

    Returns:
        Decorator function
    """
    def decorator(chunker_class: Type[BaseChunker]) -> Type[BaseChunker]:
        definition = StrategyDefinition(
            id=strategy_id or strategy.value,
            strategy=strategy,
            name=name,
            description=description,
            best_for=tuple(best_for),
            worst_for=tuple(worst_for),
            complexity=complexity,
        )
        _global_registry.register(definition, chunker_class)
        return chunker_class

    return decorator


def resolve_strategy(value: Union[str, StrategyType]) -> StrategyType:
    """
    Turn a strategy name or alias into a StrategyType.

    Raises:
        ConfigurationError: If the name is unknown
    """
    if isinstance(value, StrategyType):
        return value
    key = str(value).strip().lower().replace(" ", "_")
    key = STRATEGY_NAME_MAPPING.get(key, key)
    try:
        return StrategyType(key)
    except ValueError:
        raise ConfigurationError(f"Unknown chunking strategy: {value}") from None


def requires_ai(strategy: StrategyType) -> bool:
    return strategy in AI_STRATEGIES


def get_chunker(strategy: StrategyType) -> Optional[Type[BaseChunker]]:
    """Get a chunker class by strategy."""
    return _global_registry.get(strategy)


def get_strategy_definition(strategy: Union[str, StrategyType]) -> Optional[StrategyDefinition]:
    """Get the catalog entry for a strategy."""
    return _global_registry.get_definition(resolve_strategy(strategy))


def list_strategies(requires_ai: Optional[bool] = None) -> List[StrategyDefinition]:
    """List catalog entries."""
    return _global_registry.list_definitions(requires_ai=requires_ai)


def create_chunker(strategy: Union[str, StrategyType], **kwargs) -> BaseChunker:
    """Create an instance of a deterministic chunker."""
    return _global_registry.create_chunker(resolve_strategy(strategy), **kwargs)


def get_registry() -> ChunkerRegistry:
    """Get the global registry instance."""
    return _global_registry
