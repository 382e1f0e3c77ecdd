"""
Keyword overlap scoring.

A light BM25-style approximation: whole-word frequency per query term with
logarithmic dampening, normalized by the number of query terms.
"""

import math
import re
from typing import List

MIN_TERM_LENGTH = 3


def query_terms(query: str) -> List[str]:
    """Lowercased whitespace-separated terms longer than two characters."""
    return [term for term in query.lower().split() if len(term) >= MIN_TERM_LENGTH]


def count_term(term: str, content_lower: str) -> int:
    """Whole-word occurrences of ``term``; regex metacharacters match literally."""
    pattern = re.compile(rf"(?<!\w){re.escape(term)}(?!\w)")
    return len(pattern.findall(content_lower))


def keyword_score(query: str, content: str) -> float:
    """
    Score in [0, 1] of how well ``content`` covers the query terms.

    Each matching term adds ``1 + ln(count)``; the sum is divided by the
    number of valid terms and capped at 1. A query without valid terms
    scores 0.
    """
    terms = query_terms(query)
    if not terms:
        return 0.0

    content_lower = content.lower()
    matches = 0.0
    for term in terms:
        count = count_term(term, content_lower)
        if count > 0:
            matches += 1 + math.log(count)

    return min(matches / len(terms), 1.0)
