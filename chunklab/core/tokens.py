"""
Token estimation and size measurement.

Token counts are approximated from word counts; no tokenizer is involved.
The ratios are tunable because they are heuristics whose accuracy varies
across languages and content types.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum

WORD_PATTERN = re.compile(r"\S+")

DEFAULT_TOKENS_PER_WORD = 1.3
DEFAULT_CHARS_PER_TOKEN = 4
DEFAULT_CHARS_PER_WORD = 5


class SizeUnit(Enum):
    """Unit in which chunk sizes, overlaps and minimum sizes are expressed."""

    CHARACTERS = "characters"
    TOKENS = "tokens"


@dataclass(frozen=True)
class TokenEstimator:
    """
    Approximate token counter.

    Attributes:
        tokens_per_word: Tokens counted per whitespace separated word
        chars_per_token: Characters per token, used to turn token budgets into
            character windows
        chars_per_word: Characters per word, used to turn character budgets
            into word windows
    """

    tokens_per_word: float = DEFAULT_TOKENS_PER_WORD
    chars_per_token: int = DEFAULT_CHARS_PER_TOKEN
    chars_per_word: int = DEFAULT_CHARS_PER_WORD

    def count_words(self, text: str) -> int:
        return len(WORD_PATTERN.findall(text))

    def estimate(self, text: str) -> int:
        """Estimate the token count of ``text``."""
        words = self.count_words(text)
        if words == 0:
            return 0
        return math.ceil(words * self.tokens_per_word)

    def measure(self, text: str, unit: SizeUnit) -> int:
        """Size of ``text`` in the given unit."""
        if unit == SizeUnit.TOKENS:
            return self.estimate(text)
        return len(text)

    def words_for_budget(self, budget: int, unit: SizeUnit) -> int:
        """Number of words that fit in a size budget, never less than one."""
        if unit == SizeUnit.TOKENS:
            return max(1, int(budget / self.tokens_per_word))
        return max(1, budget // self.chars_per_word)

    def chars_for_tokens(self, tokens: int) -> int:
        return max(1, tokens * self.chars_per_token)


DEFAULT_ESTIMATOR = TokenEstimator()
