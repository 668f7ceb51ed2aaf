"""Theme colors and color utilities for the UI."""

from typetutor.core.session import SlotState


class TypingColors:
    """Dark theme palette used by the typing screen."""

    BG = "#181818"
    NAV_BG = "#1f1f1f"
    TEXT = "#ebebeb"
    ACCENT = "#ffc05a"
    INACTIVE = "#ffffff"

    PENDING = "#9b9b9b"
    CORRECT = "#57e389"
    WRONG = "#ff6b6b"
    CARET = ACCENT


def color_for_state(state: SlotState) -> str:
    if state is SlotState.CORRECT:
        return TypingColors.CORRECT
    if state is SlotState.WRONG:
        return TypingColors.WRONG
    return TypingColors.PENDING


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    a = a.strip()
    b = b.strip()
    if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
        return a
    try:
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
    except ValueError:
        return a
    t = max(0.0, min(1.0, float(t)))
    r = int(ar + (br - ar) * t)
    g = int(ag + (bg - ag) * t)
    bl = int(ab + (bb - ab) * t)
    return f"#{r:02X}{g:02X}{bl:02X}"


def timer_color(remaining_seconds: int, total_seconds: int) -> str:
    """Countdown colour: plain text when full, drifting to the wrong colour at zero."""
    if total_seconds <= 0:
        return TypingColors.TEXT
    used = 1.0 - (remaining_seconds / total_seconds)
    return blend_hex(TypingColors.TEXT, TypingColors.WRONG, used)
