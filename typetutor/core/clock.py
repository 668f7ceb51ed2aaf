from __future__ import annotations

import time
from typing import Callable, Optional

NANOS_PER_SECOND = 1_000_000_000


class SessionClock:
    """Countdown over a monotonic nanosecond source that starts lazily.

    Until ``mark_started`` is called the full duration is reported as
    remaining. The source defaults to ``time.monotonic_ns`` so wall-clock
    adjustments never affect a running session.
    """

    def __init__(self, total_seconds: int = 0, source: Callable[[], int] = time.monotonic_ns) -> None:
        self._source = source
        self._total_seconds = total_seconds
        self._start_nanos: Optional[int] = None

    @property
    def total_seconds(self) -> int:
        return self._total_seconds

    @property
    def started(self) -> bool:
        return self._start_nanos is not None

    def reset(self, total_seconds: int) -> None:
        self._total_seconds = total_seconds
        self._start_nanos = None

    def mark_started(self) -> None:
        """Latch the start instant; later calls are ignored."""
        if self._start_nanos is None:
            self._start_nanos = self._source()

    def elapsed_seconds(self) -> int:
        if self._start_nanos is None:
            return 0
        return (self._source() - self._start_nanos) // NANOS_PER_SECOND

    def remaining_seconds(self) -> int:
        if self._start_nanos is None:
            return self._total_seconds
        return max(0, self._total_seconds - self.elapsed_seconds())
