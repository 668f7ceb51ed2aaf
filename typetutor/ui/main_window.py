from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QMainWindow, QVBoxLayout, QWidget

from typetutor.core.engine import TypingEngine
from typetutor.core.errors import ConfigurationError
from typetutor.ui.colors import TypingColors
from typetutor.ui.models import StatsSummary
from typetutor.ui.nav_bar import ModeNavBar
from typetutor.ui.typing_widgets import CountdownLabel, StatsPanel, TripletRowsWidget

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 100


class MainWindow(QMainWindow):
    """Typing screen: mode bar on top, countdown and rows in the middle, stats below.

    All session rules live in :class:`TypingEngine`; the window only forwards
    input, re-renders from snapshots and drives the countdown tick. When a
    session ends its stats are shown and a new session with the same options
    starts immediately.
    """

    def __init__(self, engine: TypingEngine) -> None:
        super().__init__()
        self._engine = engine

        self._nav_bar: Optional[ModeNavBar] = None
        self._countdown: Optional[CountdownLabel] = None
        self._rows: Optional[TripletRowsWidget] = None
        self._stats_panel: Optional[StatsPanel] = None

        self._build_ui()

        self._tick_timer = QTimer(self)
        self._tick_timer.setInterval(TICK_INTERVAL_MS)
        self._tick_timer.timeout.connect(self._on_tick)

        self._render()
        self._rows.setFocus()

    def _build_ui(self) -> None:
        self.setWindowTitle("TypeTutor")
        self.resize(1100, 520)

        central = QWidget()
        central.setStyleSheet(f"background: {TypingColors.BG};")
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self._nav_bar = ModeNavBar()
        self._nav_bar.options_changed.connect(self._on_options_changed)
        layout.addWidget(self._nav_bar, 0)

        self._countdown = CountdownLabel()
        layout.addWidget(self._countdown, 0)

        self._rows = TripletRowsWidget()
        self._rows.character_typed.connect(self._on_character_typed)
        self._rows.backspace_pressed.connect(self._on_backspace)
        layout.addWidget(self._rows, 1)

        self._stats_panel = StatsPanel()
        layout.addWidget(self._stats_panel, 0)

        self.setCentralWidget(central)

    def _on_options_changed(self, word_mode: str, language: str, time_mode: str) -> None:
        self._tick_timer.stop()
        try:
            self._engine.apply_options(word_mode, language, time_mode)
        except ConfigurationError as e:
            logger.error("Could not apply options (%s, %s, %s): %s", word_mode, language, time_mode, e)
        self._stats_panel.show_waiting_state()
        self._render()
        self._rows.setFocus()

    def _on_character_typed(self, char: str) -> None:
        result = self._engine.process_typed(char)
        if result.game_stopped:
            self._finish_session_and_reset()
            return
        if not self._tick_timer.isActive():
            self._tick_timer.start()
        self._render()
        if not self._engine.is_running():
            self._finish_session_and_reset()

    def _on_backspace(self) -> None:
        result = self._engine.process_backspace()
        if result.index >= 0:
            self._render()

    def _on_tick(self) -> None:
        self._update_countdown()
        if not self._engine.is_running():
            self._finish_session_and_reset()

    def _finish_session_and_reset(self) -> None:
        self._tick_timer.stop()
        self._stats_panel.show_summary(StatsSummary.from_stats(self._engine.final_stats()))
        try:
            self._engine.reset()
        except ConfigurationError as e:
            logger.error("Could not start a new session: %s", e)
        self._render()
        self._rows.setFocus()

    def _render(self) -> None:
        self._rows.render(self._engine.snapshot())
        self._update_countdown()

    def _update_countdown(self) -> None:
        total = self._engine.session.clock.total_seconds
        self._countdown.set_seconds(self._engine.remaining_seconds(), total)
