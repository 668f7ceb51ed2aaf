"""Single entry point the UI talks to."""

from __future__ import annotations

import logging
import random
import time
from typing import Callable, Optional

from typetutor.core.clock import SessionClock
from typetutor.core.corpus import CorpusRepository
from typetutor.core.generator import TripletGenerator
from typetutor.core.options import SessionOptions
from typetutor.core.session import GameSession, InputResult, SessionSnapshot
from typetutor.core.stats import StatsReport, TypingStats, evaluate

logger = logging.getLogger(__name__)


class TypingEngine:
    """Wires corpus, generator, clock, session and stats behind a small API.

    The engine is not thread-safe; call it from the UI thread only.
    """

    def __init__(
        self,
        corpus: Optional[CorpusRepository] = None,
        rng: Optional[random.Random] = None,
        clock_source: Callable[[], int] = time.monotonic_ns,
    ) -> None:
        self._generator = TripletGenerator(corpus if corpus is not None else CorpusRepository(), rng)
        self._session = GameSession(self._generator, SessionOptions(), SessionClock(source=clock_source))
        self._finished_logged = False

    @property
    def options(self) -> SessionOptions:
        return self._session.options

    @property
    def session(self) -> GameSession:
        return self._session

    def apply_options(self, word_mode: str, language: str, time_mode: str) -> SessionOptions:
        """Normalise the selections and start a fresh session with them."""
        options = SessionOptions.normalized(word_mode, language, time_mode)
        self._session.reset(options)
        self._finished_logged = False
        logger.info(
            "Session options: %s / %s / %s", options.word_mode, options.language, options.time_mode
        )
        return options

    def reset(self) -> None:
        """Start over with the current options."""
        self._session.reset()
        self._finished_logged = False

    def process_typed(self, char: str) -> InputResult:
        result = self._session.process_typed(char)
        self._log_if_finished()
        return result

    def process_backspace(self) -> InputResult:
        return self._session.process_backspace()

    def remaining_seconds(self) -> int:
        remaining = self._session.remaining_seconds()
        self._log_if_finished()
        return remaining

    def is_running(self) -> bool:
        running = self._session.is_running()
        self._log_if_finished()
        return running

    def snapshot(self) -> SessionSnapshot:
        return self._session.snapshot()

    def final_stats(self) -> TypingStats:
        return self._session.typing_stats()

    def report(self) -> StatsReport:
        """Final stats plus accuracy, score and rank."""
        return evaluate(self.final_stats())

    def _log_if_finished(self) -> None:
        if self._finished_logged or self._session.is_running():
            return
        self._finished_logged = True
        stats = self.final_stats()
        logger.info(
            "Session finished: wpm=%.1f correct=%d wrong=%d",
            stats.wpm,
            stats.correct_count,
            stats.wrong_count,
        )
