from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from typetutor.core.clock import SessionClock
from typetutor.core.generator import ROWS_PER_TRIPLET, Triplet, TripletGenerator
from typetutor.core.options import SessionOptions
from typetutor.core.stats import TypingStats, calculate_wpm

logger = logging.getLogger(__name__)

NO_CHAR = "\0"


class SlotState(Enum):
    """Display state of one character of the target text."""

    PENDING = "pending"
    CORRECT = "correct"
    WRONG = "wrong"


@dataclass(frozen=True)
class TypedCharacter:
    """One entry of the typing log."""

    char: str
    correct: bool


@dataclass(frozen=True)
class InputResult:
    """Outcome of a single typed character or backspace."""

    index: int
    typed_char: str = NO_CHAR
    expected_char: str = NO_CHAR
    correct: bool = False
    backspace: bool = False
    game_stopped: bool = False
    triplet_advanced: bool = False

    @classmethod
    def stopped(cls) -> "InputResult":
        """Input arrived after the session ended."""
        return cls(index=-1, game_stopped=True)

    @classmethod
    def noop_backspace(cls) -> "InputResult":
        """Backspace with nothing to undo."""
        return cls(index=-1, backspace=True)


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything a host needs to draw the typing area."""

    rows: Tuple[str, ...]
    target_text: str
    shown: Tuple[str, ...]
    states: Tuple[SlotState, ...]
    cursor: int
    running: bool
    remaining_seconds: int


def join_rows(rows: List[str]) -> str:
    """Flatten a triplet into the text that is actually typed."""
    return " ".join(rows)


class GameSession:
    """Typing rules for one timed run over a sequence of triplets.

    The session is *fresh* after ``reset``, *running* once the first
    character is typed, and *stopped* when the clock runs out or the last
    triplet is finished. A stopped session ignores all input until the next
    ``reset``.

    Correct keystrokes undone with backspace are taken off the correct count;
    wrong keystrokes stay counted, so guessing and correcting still costs
    accuracy.
    """

    def __init__(
        self,
        generator: TripletGenerator,
        options: Optional[SessionOptions] = None,
        clock: Optional[SessionClock] = None,
    ) -> None:
        self._generator = generator
        self._options = options or SessionOptions()
        self._clock = clock or SessionClock()
        self._triplets: List[Triplet] = []
        self._triplet_index = 0
        self._target_text = ""
        self._shown: List[str] = []
        self._states: List[SlotState] = []
        self._typed_log: List[TypedCharacter] = []
        self._cursor_index = 0
        self._correct_count = 0
        self._wrong_count = 0
        self._running = False
        self.reset()

    @property
    def options(self) -> SessionOptions:
        return self._options

    @property
    def clock(self) -> SessionClock:
        return self._clock

    @property
    def triplets(self) -> List[Triplet]:
        """All generated triplets (copies)."""
        return [list(rows) for rows in self._triplets]

    @property
    def triplet_index(self) -> int:
        return self._triplet_index

    @property
    def target_text(self) -> str:
        return self._target_text

    @property
    def cursor_index(self) -> int:
        return self._cursor_index

    @property
    def correct_count(self) -> int:
        return self._correct_count

    @property
    def wrong_count(self) -> int:
        return self._wrong_count

    @property
    def typed_log(self) -> List[TypedCharacter]:
        return list(self._typed_log)

    @property
    def shown(self) -> List[str]:
        return list(self._shown)

    @property
    def states(self) -> List[SlotState]:
        return list(self._states)

    def reset(self, options: Optional[SessionOptions] = None) -> None:
        """Regenerate content for *options* (or the current ones) and clear progress.

        Raises ``ConfigurationError`` before touching any state when the
        options or the corpus are unusable.
        """
        options = options or self._options
        total_seconds = options.seconds
        triplets = self._generator.generate_triplets(options.word_mode, options.language, total_seconds)

        self._options = options
        self._triplets = triplets
        self._triplet_index = 0
        self._load_triplet()
        self._correct_count = 0
        self._wrong_count = 0
        self._clock.reset(total_seconds)
        self._running = True

    def current_rows(self) -> List[str]:
        """Rows of the active triplet; empty when nothing was generated."""
        if self._triplet_index >= len(self._triplets):
            return []
        return list(self._triplets[self._triplet_index])

    def remaining_seconds(self) -> int:
        remaining = self._clock.remaining_seconds()
        if remaining <= 0 and self._running:
            self._stop("time is up")
        return remaining

    def is_running(self) -> bool:
        if not self._running:
            return False
        return self.remaining_seconds() > 0

    def process_typed(self, char: str) -> InputResult:
        """Compare one typed character with the next expected one."""
        if len(char) != 1:
            raise ValueError(f"expected a single character, got {char!r}")
        if not self.is_running():
            return InputResult.stopped()

        self._clock.mark_started()

        if self._cursor_index >= len(self._target_text):
            if not self.advance_triplet():
                self._stop("content exhausted")
                return InputResult.stopped()

        index = self._cursor_index
        expected = self._target_text[index]
        correct = char == expected
        if correct:
            self._correct_count += 1
        else:
            self._wrong_count += 1

        self._typed_log.append(TypedCharacter(char, correct))
        self._shown[index] = char
        self._states[index] = SlotState.CORRECT if correct else SlotState.WRONG
        self._cursor_index += 1

        advanced = False
        if self._cursor_index >= len(self._target_text):
            advanced = self.advance_triplet()
            if not advanced:
                self._stop("content exhausted")

        return InputResult(
            index=index,
            typed_char=char,
            expected_char=expected,
            correct=correct,
            triplet_advanced=advanced,
        )

    def process_backspace(self) -> InputResult:
        """Undo the last keystroke of the current triplet."""
        if not self.is_running() or self._cursor_index == 0 or not self._typed_log:
            return InputResult.noop_backspace()

        self._cursor_index -= 1
        removed = self._typed_log.pop()
        if removed.correct:
            self._correct_count = max(0, self._correct_count - 1)

        index = self._cursor_index
        expected = self._target_text[index]
        self._shown[index] = expected
        self._states[index] = SlotState.PENDING
        return InputResult(index=index, expected_char=expected, backspace=True)

    def advance_triplet(self) -> bool:
        """Move to the next triplet, keeping the counters. False on the last one."""
        if self._triplet_index + 1 >= len(self._triplets):
            return False
        self._triplet_index += 1
        self._load_triplet()
        return True

    def elapsed_seconds(self) -> int:
        return self._clock.total_seconds - self.remaining_seconds()

    def typing_stats(self) -> TypingStats:
        wpm = calculate_wpm(self._correct_count, self.elapsed_seconds()) if self._clock.started else 0.0
        return TypingStats(wpm=wpm, correct_count=self._correct_count, wrong_count=self._wrong_count)

    def snapshot(self) -> SessionSnapshot:
        rows = self.current_rows()
        rows += [""] * (ROWS_PER_TRIPLET - len(rows))
        running = self.is_running()
        return SessionSnapshot(
            rows=tuple(rows[:ROWS_PER_TRIPLET]),
            target_text=self._target_text,
            shown=tuple(self._shown),
            states=tuple(self._states),
            cursor=self._cursor_index,
            running=running,
            remaining_seconds=self.remaining_seconds(),
        )

    def _load_triplet(self) -> None:
        rows = self.current_rows()
        self._target_text = join_rows(rows) if rows else ""
        self._shown = list(self._target_text)
        self._states = [SlotState.PENDING] * len(self._target_text)
        self._typed_log.clear()
        self._cursor_index = 0

    def _stop(self, reason: str) -> None:
        if self._running:
            logger.debug("Session stopped: %s", reason)
        self._running = False
