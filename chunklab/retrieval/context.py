"""Resolve ranked child chunks to their parents for context expansion."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from chunklab.core.base import Chunk, ChunkKind


@dataclass(frozen=True)
class ContextMatch:
    """A ranked chunk together with the parent providing its wider context."""

    chunk: Chunk
    parent: Optional[Chunk] = None

    @property
    def context(self) -> str:
        """Text to hand to a generator: the parent when there is one."""
        return self.parent.content if self.parent is not None else self.chunk.content


def expand_context(ranked: Sequence[Chunk], collection: Sequence[Chunk]) -> List[ContextMatch]:
    """
    Pair each ranked chunk with its parent from ``collection``.

    Standalone chunks, and children whose parent is missing, get no parent.
    """
    parents: Dict[str, Chunk] = {
        chunk.id: chunk for chunk in collection if chunk.kind == ChunkKind.PARENT
    }
    return [ContextMatch(chunk, parents.get(chunk.parent_id) if chunk.parent_id else None) for chunk in ranked]


def unique_contexts(matches: Sequence[ContextMatch]) -> List[str]:
    """Context texts in rank order, each parent contributing once."""
    seen = set()
    contexts = []
    for match in matches:
        key = match.parent.id if match.parent is not None else match.chunk.id
        if key in seen:
            continue
        seen.add(key)
        contexts.append(match.context)
    return contexts
