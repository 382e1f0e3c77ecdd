"""
Chunking options.

Options are a plain, fully resolved value passed with every call. Sizes that
cannot work together are clamped with a warning instead of rejected, since
they usually come from interactive tuning rather than programming mistakes.
"""

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from chunklab.core.exceptions import ConfigurationError
from chunklab.core.registry import StrategyType, resolve_strategy
from chunklab.core.tokens import SizeUnit
from chunklab.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_SEPARATORS = ("\n\n", "\n", " ", "")
DEFAULT_PARENT_CHUNK_SIZE = 1000
DEFAULT_REGEX_PATTERN = "\n\n"
DEFAULT_ENRICHMENT_LIMIT = 10


@dataclass(frozen=True)
class EnrichmentOptions:
    """Which annotations the external enrichment function should produce."""

    summarize: bool = False
    qa: bool = False
    label: bool = False
    hallucination: bool = False

    @property
    def enabled(self) -> bool:
        return self.summarize or self.qa or self.label or self.hallucination


@dataclass(frozen=True)
class ChunkingOptions:
    """
    Configuration for one chunking run.

    ``chunk_size``, ``overlap``, ``min_chunk_size`` and ``parent_chunk_size``
    are all expressed in ``size_unit``.

    Examples:
        ```python
        options = ChunkingOptions(strategy="paragraph", chunk_size=500)
        options = ChunkingOptions.from_dict({"strategy": "recursive", "overlap": 50})
        options = load_options("chunking.yaml")
        ```
    """

    chunk_size: int = 500
    overlap: int = 0
    min_chunk_size: int = 0
    strategy: StrategyType = StrategyType.RECURSIVE
    separators: Optional[Tuple[str, ...]] = None
    regex_pattern: Optional[str] = None
    size_unit: SizeUnit = SizeUnit.CHARACTERS
    enable_parent_child: bool = False
    parent_chunk_size: Optional[int] = None

    # Forwarded untouched to the external collaborators
    model: Optional[str] = None
    custom_prompt: Optional[str] = None
    enrichment: EnrichmentOptions = field(default_factory=EnrichmentOptions)
    enrichment_limit: int = DEFAULT_ENRICHMENT_LIMIT
    max_workers: int = 4

    def __post_init__(self):
        object.__setattr__(self, "strategy", resolve_strategy(self.strategy))
        if isinstance(self.size_unit, str):
            try:
                object.__setattr__(self, "size_unit", SizeUnit(self.size_unit.lower()))
            except ValueError:
                raise ConfigurationError(f"Unknown size unit: {self.size_unit}") from None
        if self.separators is not None:
            object.__setattr__(self, "separators", tuple(self.separators))
        if isinstance(self.enrichment, dict):
            object.__setattr__(self, "enrichment", EnrichmentOptions(**self.enrichment))

    @property
    def effective_separators(self) -> Tuple[str, ...]:
        return self.separators if self.separators else DEFAULT_SEPARATORS

    @property
    def effective_parent_size(self) -> int:
        return self.parent_chunk_size or DEFAULT_PARENT_CHUNK_SIZE

    @property
    def effective_regex_pattern(self) -> str:
        return self.regex_pattern or DEFAULT_REGEX_PATTERN

    def validate(self) -> Tuple["ChunkingOptions", List[str]]:
        """
        Clamp inconsistent sizes.

        Returns:
            Tuple of (usable options, warnings describing every adjustment)
        """
        warnings: List[str] = []
        chunk_size = self.chunk_size
        overlap = self.overlap
        min_chunk_size = self.min_chunk_size
        parent_size = self.parent_chunk_size
        max_workers = self.max_workers

        if chunk_size < 1:
            warnings.append(f"chunk_size {chunk_size} is not positive, using 1")
            chunk_size = 1
        if overlap < 0:
            warnings.append(f"overlap {overlap} is negative, using 0")
            overlap = 0
        if overlap >= chunk_size:
            clamped = chunk_size - 1
            warnings.append(f"overlap {overlap} must be smaller than chunk_size {chunk_size}, using {clamped}")
            overlap = clamped
        if min_chunk_size < 0:
            warnings.append(f"min_chunk_size {min_chunk_size} is negative, using 0")
            min_chunk_size = 0
        if min_chunk_size > chunk_size:
            warnings.append(f"min_chunk_size {min_chunk_size} exceeds chunk_size {chunk_size}, using {chunk_size}")
            min_chunk_size = chunk_size
        if parent_size is not None and parent_size < chunk_size:
            warnings.append(f"parent_chunk_size {parent_size} is smaller than chunk_size {chunk_size}, using {chunk_size}")
            parent_size = chunk_size
        elif parent_size is None and self.enable_parent_child and DEFAULT_PARENT_CHUNK_SIZE < chunk_size:
            warnings.append(
                f"default parent_chunk_size {DEFAULT_PARENT_CHUNK_SIZE} is smaller than chunk_size {chunk_size}, "
                f"using {chunk_size}"
            )
            parent_size = chunk_size
        if max_workers < 1:
            warnings.append(f"max_workers {max_workers} is not positive, using 1")
            max_workers = 1

        for warning in warnings:
            logger.warning(warning)

        validated = replace(
            self,
            chunk_size=chunk_size,
            overlap=overlap,
            min_chunk_size=min_chunk_size,
            parent_chunk_size=parent_size,
            max_workers=max_workers,
            enrichment_limit=max(0, self.enrichment_limit),
        )
        return validated, warnings

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChunkingOptions":
        """
        Build options from a mapping, ignoring unknown keys with a warning.

        Raises:
            ConfigurationError: If a value cannot be interpreted
        """
        known = {f.name for f in fields(cls)}
        params = {}
        for key, value in (data or {}).items():
            if key not in known:
                logger.warning(f"Ignoring unknown chunking option: {key}")
                continue
            params[key] = value
        try:
            return cls(**params)
        except TypeError as e:
            raise ConfigurationError(f"Invalid chunking options: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        """Plain dictionary view, suitable for logging."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, (StrategyType, SizeUnit)):
                value = value.value
            elif isinstance(value, EnrichmentOptions):
                value = {e.name: getattr(value, e.name) for e in fields(value)}
            elif isinstance(value, tuple):
                value = list(value)
            result[f.name] = value
        return result


def load_options(config_path: Union[str, Path]) -> ChunkingOptions:
    """
    Load chunking options from a YAML file.

    The options may sit at the top level or under a ``chunking`` key.

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    config_path = Path(config_path)
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            raw_config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to load config file {config_path}: {e}") from e

    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")

    section = raw_config.get("chunking", raw_config)
    logger.debug(f"Loaded chunking options from {config_path}")
    return ChunkingOptions.from_dict(section)
