"""Functional core - pure reminder logic with no I/O."""

from .clock import Clock
from .repeat import (
    RepeatRule,
    NoRepeat,
    Everyday,
    Weekdays,
    Weekends,
    DaysOfWeek,
    CustomInterval,
    is_due_on,
    repeat_summary,
)
from .history import HistoryEntry, is_done_for_day, record_toggle, last_completion
from .reminders import (
    Reminder,
    ReminderStatus,
    is_done_today,
    is_due_today,
    is_late,
    time_to_deadline,
    format_deadline,
    last_completion_label,
    toggle_done,
    evaluate,
)

__all__ = [
    # Clock
    "Clock",
    # Repeat rules
    "RepeatRule",
    "NoRepeat",
    "Everyday",
    "Weekdays",
    "Weekends",
    "DaysOfWeek",
    "CustomInterval",
    "is_due_on",
    "repeat_summary",
    # History
    "HistoryEntry",
    "is_done_for_day",
    "record_toggle",
    "last_completion",
    # Reminders
    "Reminder",
    "ReminderStatus",
    "is_done_today",
    "is_due_today",
    "is_late",
    "time_to_deadline",
    "format_deadline",
    "last_completion_label",
    "toggle_done",
    "evaluate",
]
