from __future__ import annotations

from enum import Enum


class BreakKey(str, Enum):
    """Slot of one of the three daily breaks."""

    BREAK1 = "break1"
    BREAK2 = "break2"
    BREAK3 = "break3"


class CountdownKind(str, Enum):
    """Which rule produced the countdown label."""

    BREAK_LEFT = "BREAK_LEFT"
    NEXT_BREAK = "NEXT_BREAK"
    NEXT_SHIFT = "NEXT_SHIFT"
    SHIFT_ENDS = "SHIFT_ENDS"
    IDLE = "IDLE"


class PostShiftPolicy(str, Enum):
    """How to count down to the next shift once the resolved one is over."""

    EXTRAPOLATE = "extrapolate"
    RESOLVE = "resolve"
