from __future__ import annotations

import math
from dataclasses import dataclass

CHARS_PER_WORD = 5.0

# Upper bounds (exclusive) on WPM and the percentile reported below them.
WPM_PERCENTILES = (
    (25.0, 0.02),
    (35.0, 7.16),
    (45.0, 14.30),
    (60.0, 21.44),
    (80.0, 28.58),
    (120.0, 35.72),
)
TOP_WPM_PERCENTILE = 42.86

# Upper bounds (exclusive) on the combined score and their rank labels.
RANKS = (
    (16.0, "asleep"),
    (32.0, "noob"),
    (48.0, "average"),
    (64.0, "pro"),
    (80.0, "hacker"),
    (96.0, "god"),
)
TOP_RANK = "legend"


@dataclass(frozen=True)
class TypingStats:
    """Final numbers of one finished session."""

    wpm: float
    correct_count: int
    wrong_count: int

    @property
    def total_typed(self) -> int:
        return self.correct_count + self.wrong_count


@dataclass(frozen=True)
class StatsReport:
    """Everything the stats line shows, derived from :class:`TypingStats`."""

    wpm: float
    correct_count: int
    wrong_count: int
    accuracy: float
    wpm_percentile: float
    wpm_score: float
    combined_score: float
    rank: str


def calculate_wpm(correct_count: int, elapsed_seconds: float) -> float:
    """Correct characters / 5 per elapsed minute; 0 before any time has passed."""
    if elapsed_seconds <= 0:
        return 0.0
    return (correct_count / CHARS_PER_WORD) / (elapsed_seconds / 60.0)


def calculate_accuracy(correct_count: int, wrong_count: int) -> float:
    total = correct_count + wrong_count
    if total <= 0:
        return 0.0
    return (correct_count * 100.0) / total


def percentile_for_wpm(wpm: float) -> float:
    for upper, percentile in WPM_PERCENTILES:
        if wpm < upper:
            return percentile
    return TOP_WPM_PERCENTILE


def rank_for_score(score: float) -> str:
    for upper, label in RANKS:
        if score < upper:
            return label
    return TOP_RANK


def evaluate(stats: TypingStats) -> StatsReport:
    """Derive accuracy, the 0..100 speed score, the combined score and the rank.

    The combined score is the geometric mean of the speed score and accuracy,
    so a low value in either one drags the rank down.
    """
    accuracy = calculate_accuracy(stats.correct_count, stats.wrong_count)
    wpm_percentile = percentile_for_wpm(stats.wpm)
    wpm_score = (wpm_percentile / TOP_WPM_PERCENTILE) * 100.0
    combined_score = math.sqrt(wpm_score * accuracy)
    return StatsReport(
        wpm=stats.wpm,
        correct_count=stats.correct_count,
        wrong_count=stats.wrong_count,
        accuracy=accuracy,
        wpm_percentile=wpm_percentile,
        wpm_score=wpm_score,
        combined_score=combined_score,
        rank=rank_for_score(combined_score),
    )
