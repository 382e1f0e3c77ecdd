"""
Metadata-driven chunking strategy.

Uses boundary markers found at the start of lines to split chat logs, mail
threads and multi-author documents:

- timestamps (``2024-01-31``, ``[12:03]``, ``12:03:44 ``)
- mail headers (``From:``, ``To:``, ``Subject:``, ``Date:``)
- markdown headers

Consecutive mail header lines stay together with the message they open.
"""

import re
from typing import List

from chunklab.core.base import BaseChunker
from chunklab.core.registry import ComplexityLevel, StrategyType, register_chunker
from chunklab.core.spans import TextSpan, span_of, strip_all

ENTRY_START = re.compile(
    r"(?:\d{4}-\d{2}-\d{2}"
    r"|\[\d{1,2}:\d{2}(?::\d{2})?\]"
    r"|\d{1,2}:\d{2}(?::\d{2})?\s"
    r"|#{1,6}\s)"
)
MAIL_HEADER = re.compile(r"(?:From|To|Cc|Subject|Date):\s", re.IGNORECASE)
LINE = re.compile(r".*\n?")


def boundary_offsets(text: str) -> List[int]:
    """Offsets of the lines that open a new entry."""
    offsets = []
    in_header_block = False
    for match in LINE.finditer(text):
        line = match.group()
        if not line:
            break
        is_mail_header = MAIL_HEADER.match(line) is not None
        if ENTRY_START.match(line) or (is_mail_header and not in_header_block):
            offsets.append(match.start())
        in_header_block = is_mail_header
    return offsets


@register_chunker(
    StrategyType.METADATA,
    name="Metadata-Driven Chunking",
    description="Uses headers, timestamps, or tags to define boundaries.",
    best_for=("Chat logs", "Emails", "Multi-author docs"),
    worst_for=("Unstructured data",),
    complexity=ComplexityLevel.MEDIUM,
)
class MetadataChunker(BaseChunker):
    """One span per timestamped entry, mail message or header section."""

    def __init__(self, **kwargs):
        kwargs.setdefault("name", StrategyType.METADATA.value)
        super().__init__(**kwargs)

    def split(self, text: str) -> List[TextSpan]:
        offsets = [0] + [offset for offset in boundary_offsets(text) if offset > 0] + [len(text)]
        return strip_all(span_of(text, start, end) for start, end in zip(offsets, offsets[1:]))
