"""Session option selections and their normalisation rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from typetutor.core.errors import ConfigurationError

WORD_MODES = ("Words", "Numbers", "Quotes")
LANGUAGES = ("Eng", "Fil")
TIME_MODES = ("120s", "60s", "30s", "15s")

DEFAULT_WORD_MODE = "Words"
DEFAULT_LANGUAGE = "Eng"
DEFAULT_TIME_MODE = "60s"


def _clean(value: Optional[str]) -> str:
    if value is None:
        return ""
    return str(value).strip().lower()


def normalize_word_mode(value: Optional[str]) -> str:
    """Map any user selection onto one of ``WORD_MODES`` (default ``Words``)."""
    cleaned = _clean(value)
    for mode in WORD_MODES:
        if cleaned == mode.lower():
            return mode
    return DEFAULT_WORD_MODE


def normalize_language(value: Optional[str]) -> str:
    """Anything starting with ``fil`` is Filipino, everything else English."""
    return "Fil" if is_filipino(value) else "Eng"


def normalize_time_mode(value: Optional[str]) -> str:
    cleaned = _clean(value)
    return cleaned if cleaned in TIME_MODES else DEFAULT_TIME_MODE


def is_filipino(language: Optional[str]) -> bool:
    return _clean(language).startswith("fil")


def parse_time_mode_seconds(time_mode: Optional[str]) -> int:
    """Convert a time mode label such as ``"60s"`` into seconds."""
    cleaned = _clean(time_mode)
    if not cleaned:
        raise ConfigurationError("time mode cannot be blank")
    if not cleaned.endswith("s"):
        raise ConfigurationError(f"time mode must end with 's', got: {time_mode!r}")
    try:
        return int(cleaned[:-1])
    except ValueError as e:
        raise ConfigurationError(f"invalid time mode: {time_mode!r}") from e


@dataclass(frozen=True)
class SessionOptions:
    """The three selections a session is generated from."""

    word_mode: str = DEFAULT_WORD_MODE
    language: str = DEFAULT_LANGUAGE
    time_mode: str = DEFAULT_TIME_MODE

    @classmethod
    def normalized(
        cls,
        word_mode: Optional[str],
        language: Optional[str],
        time_mode: Optional[str],
    ) -> "SessionOptions":
        """Build options from raw UI strings; unknown values fall back to defaults."""
        return cls(
            word_mode=normalize_word_mode(word_mode),
            language=normalize_language(language),
            time_mode=normalize_time_mode(time_mode),
        )

    @property
    def seconds(self) -> int:
        return parse_time_mode_seconds(self.time_mode)
