"""Mode selection bar: word mode, language and duration button groups."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QFrame, QHBoxLayout, QPushButton, QWidget

from typetutor.core.options import (
    DEFAULT_LANGUAGE,
    DEFAULT_TIME_MODE,
    DEFAULT_WORD_MODE,
    LANGUAGES,
    TIME_MODES,
    WORD_MODES,
)
from typetutor.ui.colors import TypingColors


def _button_style(active: bool) -> str:
    color = TypingColors.ACCENT if active else TypingColors.INACTIVE
    return f"""
        QPushButton {{
            background: transparent;
            border: none;
            color: {color};
            padding: 2px 8px;
            font-weight: 700;
            font-size: 16px;
        }}
    """


def _group_frame() -> QFrame:
    frame = QFrame()
    frame.setObjectName("navGroup")
    frame.setStyleSheet(
        f"""
        QFrame#navGroup {{
            border: 1px solid {TypingColors.INACTIVE};
            border-radius: 10px;
        }}
        """
    )
    return frame


class ModeNavBar(QWidget):
    """Emits ``options_changed`` whenever a different option is picked."""

    options_changed = Signal(str, str, str)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._word_mode = DEFAULT_WORD_MODE
        self._language = DEFAULT_LANGUAGE
        self._time_mode = DEFAULT_TIME_MODE
        self._buttons: dict[str, dict[str, QPushButton]] = {}

        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setStyleSheet(f"background: {TypingColors.NAV_BG};")
        row = QHBoxLayout(self)
        row.setContentsMargins(16, 8, 16, 8)
        row.setSpacing(16)
        row.addStretch(1)
        row.addWidget(self._build_group("word_mode", WORD_MODES))
        row.addWidget(self._build_group("language", LANGUAGES))
        row.addWidget(self._build_group("time_mode", TIME_MODES))
        row.addStretch(1)
        self._update_highlighting()

    def selection(self) -> tuple[str, str, str]:
        return self._word_mode, self._language, self._time_mode

    def _build_group(self, group: str, labels: tuple[str, ...]) -> QFrame:
        frame = _group_frame()
        layout = QHBoxLayout(frame)
        layout.setContentsMargins(10, 6, 10, 6)
        layout.setSpacing(8)
        buttons: dict[str, QPushButton] = {}
        for label in labels:
            button = QPushButton(label)
            button.setCursor(Qt.PointingHandCursor)
            button.setFocusPolicy(Qt.NoFocus)
            button.clicked.connect(lambda _checked=False, g=group, v=label: self._on_selected(g, v))
            layout.addWidget(button)
            buttons[label] = button
        self._buttons[group] = buttons
        return frame

    def _on_selected(self, group: str, value: str) -> None:
        attr = f"_{group}"
        if getattr(self, attr) == value:
            return
        setattr(self, attr, value)
        self._update_highlighting()
        self.options_changed.emit(self._word_mode, self._language, self._time_mode)

    def _update_highlighting(self) -> None:
        current = {"word_mode": self._word_mode, "language": self._language, "time_mode": self._time_mode}
        for group, buttons in self._buttons.items():
            for label, button in buttons.items():
                button.setStyleSheet(_button_style(label == current[group]))
