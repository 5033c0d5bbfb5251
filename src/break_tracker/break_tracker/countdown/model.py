from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_hms
from ..core.enums import BreakKey, CountdownKind


_PREFIXES = {
    CountdownKind.BREAK_LEFT: "Break left",
    CountdownKind.NEXT_BREAK: "Next break in",
    CountdownKind.NEXT_SHIFT: "Next shift in",
    CountdownKind.SHIFT_ENDS: "Shift ends in",
}


@dataclass(frozen=True)
class CountdownState:
    """Result of one countdown evaluation.

    ``expired_break`` names an active break whose time is up; the display has
    already moved on but the owner of the break state still has to clear it.
    """

    kind: CountdownKind
    remaining_seconds: int = 0
    target: Optional[datetime] = None
    break_key: Optional[BreakKey] = None
    expired_break: Optional[BreakKey] = None
    caption: str = ""

    @property
    def text(self) -> str:
        prefix = _PREFIXES.get(self.kind)
        if prefix is None:
            return ""
        return f"{prefix} {format_hms(self.remaining_seconds)}"

    @property
    def remaining_minutes(self) -> int:
        return self.remaining_seconds // 60

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "kind": self.kind.value,
            "remaining_seconds": self.remaining_seconds,
            "remaining_minutes": self.remaining_minutes,
            "target": self.target.isoformat() if self.target else None,
            "break_key": self.break_key.value if self.break_key else None,
            "expired_break": self.expired_break.value if self.expired_break else None,
            "caption": self.caption,
        }
