"""Generates the rows of target text a session is typed against."""

from __future__ import annotations

import logging
import random
from typing import List, Optional

from typetutor.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

ROWS_PER_TRIPLET = 3
WORDS_PER_ROW = 15
NUMBERS_PER_ROW = 3
MIN_NUMBER = 1
MAX_NUMBER = 9999

TRIPLET_COUNTS = {15: 4, 30: 5, 60: 7, 120: 9}

Triplet = List[str]


def triplet_count_for(duration_seconds: int) -> int:
    """Number of triplets generated for a session of *duration_seconds*."""
    try:
        return TRIPLET_COUNTS[duration_seconds]
    except KeyError:
        raise ConfigurationError(f"Unsupported time mode: {duration_seconds}s") from None


class TripletGenerator:
    """Builds triplets (blocks of three rows) from a corpus.

    *corpus* is anything with ``load_words(language)`` and
    ``load_quotes(language)``. *rng* is the only source of randomness, so a
    seeded ``random.Random`` makes generation reproducible.
    """

    def __init__(self, corpus, rng: Optional[random.Random] = None) -> None:
        self._corpus = corpus
        self._rng = rng if rng is not None else random.Random()

    @property
    def rng(self) -> random.Random:
        return self._rng

    def generate_triplets(self, word_mode: str, language: str, duration_seconds: int) -> List[Triplet]:
        count = triplet_count_for(duration_seconds)
        mode = (word_mode or "").strip().lower()

        if mode == "quotes":
            triplets = self._quote_triplets(self._corpus.load_quotes(language), count)
        else:
            words = self._corpus.load_words(language)
            triplets = self._word_triplets(words, count, include_numbers=(mode == "numbers"))

        logger.debug("Generated %d triplets (%s, %s, %ss)", len(triplets), word_mode, language, duration_seconds)
        return triplets

    def _word_triplets(self, words: List[str], count: int, include_numbers: bool) -> List[Triplet]:
        return [
            [self._word_row(words, include_numbers) for _ in range(ROWS_PER_TRIPLET)]
            for _ in range(count)
        ]

    def _quote_triplets(self, quotes: List[str], count: int) -> List[Triplet]:
        if not quotes:
            return []

        shuffled = list(quotes)
        self._rng.shuffle(shuffled)

        triplets: List[Triplet] = []
        position = 0
        for _ in range(count):
            rows: Triplet = []
            for _ in range(ROWS_PER_TRIPLET):
                if position >= len(shuffled):
                    self._rng.shuffle(shuffled)
                    position = 0
                rows.append(shuffled[position])
                position += 1
            triplets.append(rows)
        return triplets

    def _word_row(self, words: List[str], include_numbers: bool) -> str:
        """One row of ``WORDS_PER_ROW`` tokens; Numbers mode swaps three for numbers."""
        if not words:
            return ""

        number_positions = set()
        if include_numbers:
            number_positions = set(self._rng.sample(range(WORDS_PER_ROW), NUMBERS_PER_ROW))

        tokens = []
        for position in range(WORDS_PER_ROW):
            if position in number_positions:
                tokens.append(str(self._rng.randint(MIN_NUMBER, MAX_NUMBER)))
            else:
                tokens.append(self._rng.choice(words))
        return " ".join(tokens)
