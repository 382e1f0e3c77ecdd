"""Frequency-based keyword extraction for chunk records."""

import re
from collections import Counter
from typing import FrozenSet, List

STOPWORDS: FrozenSet[str] = frozenset({
    'the', 'is', 'at', 'of', 'on', 'and', 'a', 'an', 'in', 'to', 'for',
    'with', 'it', 'this', 'that', 'as', 'by', 'are', 'was',
})

KEYWORD_PATTERN = re.compile(r"\b\w{4,}\b")
MAX_KEYWORDS = 5


def extract_keywords(
    text: str,
    limit: int = MAX_KEYWORDS,
    stopwords: FrozenSet[str] = STOPWORDS
) -> List[str]:
    """
    Most frequent lowercase words of four or more characters.

    Ties keep first-occurrence order.
    """
    counts = Counter(
        word for word in KEYWORD_PATTERN.findall(text.lower())
        if word not in stopwords
    )
    return [word for word, _ in counts.most_common(limit)]
