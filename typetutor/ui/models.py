"""Data models and rendering helpers used by the UI."""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import List, Sequence

from typetutor.core.session import SessionSnapshot
from typetutor.core.stats import TypingStats, evaluate
from typetutor.ui.colors import TypingColors, color_for_state

ROW_COUNT = 3

WAITING_TEXT = "WPM: -    Correct: -    Wrong: -    Accuracy: -    Rank: waiting for game end"


@dataclass(frozen=True)
class StatsSummary:
    """Stats line shown after a session ends."""

    wpm: float
    correct: int
    wrong: int
    accuracy: float
    combined_score: float
    rank: str

    @classmethod
    def from_stats(cls, stats: TypingStats) -> "StatsSummary":
        report = evaluate(stats)
        return cls(
            wpm=report.wpm,
            correct=report.correct_count,
            wrong=report.wrong_count,
            accuracy=report.accuracy,
            combined_score=report.combined_score,
            rank=report.rank,
        )

    def as_text(self) -> str:
        return (
            f"WPM: {self.wpm:.0f}    Correct: {self.correct}    Wrong: {self.wrong}    "
            f"Accuracy: {self.accuracy:.1f}%    Rank: {self.combined_score:.2f}% ({self.rank})"
        )

    def as_html(self, accent: str = TypingColors.ACCENT) -> str:
        def label(name: str) -> str:
            return f'<span style="color:{accent};">{name}:</span>'

        gap = "&nbsp;" * 4
        return gap.join(
            [
                f"{label('WPM')} {self.wpm:.0f}",
                f"{label('Correct')} {self.correct}",
                f"{label('Wrong')} {self.wrong}",
                f"{label('Accuracy')} {self.accuracy:.1f}%",
                f"{label('Rank')} {self.combined_score:.2f}% ({html.escape(self.rank)})",
            ]
        )


def row_starts(rows: Sequence[str]) -> List[int]:
    """Offset of each row inside the flattened target text (rows joined by one space)."""
    starts: List[int] = []
    offset = 0
    for i in range(ROW_COUNT):
        starts.append(offset)
        offset += len(rows[i]) if i < len(rows) else 0
        if i < ROW_COUNT - 1:
            offset += 1
    return starts


def _escape_char(char: str) -> str:
    if char == " ":
        return "&nbsp;"
    return html.escape(char)


def _caret() -> str:
    return f'<span style="color:{TypingColors.CARET};">|</span>'


def render_row_html(snapshot: SessionSnapshot, row_index: int, show_caret: bool) -> str:
    """HTML for one row: each character coloured by its slot state, plus the caret."""
    rows = snapshot.rows
    row = rows[row_index] if row_index < len(rows) else ""
    start = row_starts(rows)[row_index]

    parts = ['<div style="text-align:center;">']
    for local in range(len(row)):
        index = start + local
        if show_caret and snapshot.cursor == index:
            parts.append(_caret())
        if index < len(snapshot.shown):
            char = snapshot.shown[index]
            color = color_for_state(snapshot.states[index])
        else:
            char = row[local]
            color = TypingColors.PENDING
        parts.append(f'<span style="color:{color};">{_escape_char(char)}</span>')

    if show_caret and snapshot.cursor == start + len(row):
        parts.append(_caret())
    parts.append("</div>")
    return "".join(parts)
