"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 24 * 60
DEFAULT_SHIFT_HOURS = 9

DEFAULT_TICK_SECONDS = 1.0
DEFAULT_HISTORY_LIMIT = 30
MAX_HISTORY_LIMIT = 100

DEFAULT_BREAK_TIMES = {
    "break1": "11:00",
    "break2": "14:00",
    "break3": "17:00",
}

DEFAULT_BREAK_DURATIONS = {
    "break1": 15 * 60,
    "break2": 30 * 60,
    "break3": 15 * 60,
}

BREAK_LABELS = {
    "break1": "First Break",
    "break2": "Second Break",
    "break3": "Third Break",
}

# Whole-minute marks at which the host raises a one-time alert.
NEXT_BREAK_ALERT_MINUTES = (10, 5)
SHIFT_END_ALERT_MINUTES = (5,)

BREAK_REMINDER_MINUTES = 5
BREAK_ENDING_MINUTES = 1
SHIFT_REMINDER_MINUTES = 5
