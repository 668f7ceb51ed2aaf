"""Typing screen widgets: the three target rows, the countdown and the stats line."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

from typetutor.core.session import SessionSnapshot
from typetutor.ui.colors import TypingColors, timer_color
from typetutor.ui.models import ROW_COUNT, WAITING_TEXT, StatsSummary, render_row_html


class TripletRowsWidget(QWidget):
    """Shows the active triplet and forwards keystrokes.

    The widget takes keyboard focus on click; ``character_typed`` carries one
    printable character, ``backspace_pressed`` fires for Backspace.
    """

    character_typed = Signal(str)
    backspace_pressed = Signal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._snapshot: Optional[SessionSnapshot] = None
        self.setFocusPolicy(Qt.StrongFocus)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setStyleSheet(f"background: {TypingColors.BG};")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 12, 24, 12)
        layout.setSpacing(10)

        self._row_labels: list[QLabel] = []
        for _ in range(ROW_COUNT):
            label = QLabel("")
            label.setTextFormat(Qt.RichText)
            label.setAlignment(Qt.AlignCenter)
            label.setWordWrap(False)
            font = QFont("Monospace")
            font.setStyleHint(QFont.StyleHint.Monospace)
            font.setPointSize(18)
            label.setFont(font)
            label.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
            layout.addWidget(label)
            self._row_labels.append(label)

    def render(self, snapshot: SessionSnapshot) -> None:
        self._snapshot = snapshot
        self._render_rows()

    def mousePressEvent(self, event) -> None:
        self.setFocus()
        super().mousePressEvent(event)

    def focusInEvent(self, event) -> None:
        super().focusInEvent(event)
        self._render_rows()

    def focusOutEvent(self, event) -> None:
        super().focusOutEvent(event)
        self._render_rows()

    def keyPressEvent(self, event) -> None:
        if event.key() == Qt.Key.Key_Backspace:
            self.backspace_pressed.emit()
            event.accept()
            return
        text = event.text()
        if text and text.isprintable():
            for char in text:
                self.character_typed.emit(char)
            event.accept()
            return
        super().keyPressEvent(event)

    def _render_rows(self) -> None:
        if self._snapshot is None:
            return
        show_caret = self.hasFocus() and self._snapshot.running
        for i, label in enumerate(self._row_labels):
            label.setText(render_row_html(self._snapshot, i, show_caret))


class CountdownLabel(QLabel):
    """Remaining seconds, e.g. ``"42s"``."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setAlignment(Qt.AlignCenter)
        font = self.font()
        font.setPointSize(28)
        font.setBold(True)
        self.setFont(font)

    def set_seconds(self, remaining: int, total: int) -> None:
        self.setText(f"{remaining}s")
        self.setStyleSheet(f"color: {timer_color(remaining, total)}; background: transparent;")


class StatsPanel(QLabel):
    """Bottom line with the final stats of the last finished session."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setTextFormat(Qt.RichText)
        self.setAlignment(Qt.AlignCenter)
        self.setStyleSheet(f"color: {TypingColors.TEXT}; background: {TypingColors.BG}; padding: 12px;")
        font = self.font()
        font.setPointSize(14)
        font.setBold(True)
        self.setFont(font)
        self.show_waiting_state()

    def show_waiting_state(self) -> None:
        self.setText(WAITING_TEXT.replace("    ", "&nbsp;" * 4))

    def show_summary(self, summary: StatsSummary) -> None:
        self.setText(summary.as_html())
