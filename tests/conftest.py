"""Shared test doubles: a manual nanosecond clock, an in-memory corpus, a fixed RNG."""

from __future__ import annotations

import random
from typing import List, Optional

import pytest

NANOS = 1_000_000_000


class ManualTime:
    """Nanosecond source that only moves when told to."""

    def __init__(self, start: int = 5 * NANOS) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += int(round(seconds * NANOS))


class StubCorpus:
    """Stands in for CorpusRepository; records which languages were requested."""

    def __init__(self, words: Optional[List[str]] = None, quotes: Optional[List[str]] = None) -> None:
        self.words = list(words or [])
        self.quotes = list(quotes or [])
        self.requests: List[tuple] = []

    def load_words(self, language: str) -> List[str]:
        self.requests.append(("words", language))
        return list(self.words)

    def load_quotes(self, language: str) -> List[str]:
        self.requests.append(("quotes", language))
        return list(self.quotes)


class FirstChoiceRandom(random.Random):
    """Always picks the first element, so every sampled word is predictable."""

    def choice(self, seq):
        return seq[0]


@pytest.fixture()
def manual_time() -> ManualTime:
    return ManualTime()


@pytest.fixture()
def stub_corpus() -> StubCorpus:
    return StubCorpus(words=["alpha", "beta"], quotes=["first quote", "second quote"])
