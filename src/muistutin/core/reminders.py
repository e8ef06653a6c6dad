"""Reminder domain logic - due, done, late and display strings.

Every public function takes a Clock and samples it exactly once, then works
from that single snapshot so a decision never straddles a day boundary.
"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta

from .clock import Clock, parse_local_datetime
from .history import (
    HistoryEntry,
    stored_bool,
    is_done_for_day,
    last_completion,
    record_toggle,
)
from .repeat import NoRepeat, RepeatRule, is_due_on, repeat_from_dict, repeat_summary, repeat_to_dict


@dataclass
class Reminder:
    """
    A task assigned to a household member.

    deadline is "YYYY-MM-DDTHH:MM" for one-off reminders and "HH:MM" for
    repeating ones; it may be empty. done is only meaningful for one-off
    reminders.
    """

    title: str
    assigned_to: str
    repeat: RepeatRule = field(default_factory=NoRepeat)
    deadline: str = ""
    history: list[HistoryEntry] = field(default_factory=list)
    done: bool = False

    @property
    def is_one_off(self) -> bool:
        return isinstance(self.repeat, NoRepeat)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "assignedTo": self.assigned_to,
            "done": self.done,
            "repeat": repeat_to_dict(self.repeat),
            "history": [e.to_dict() for e in self.history],
            "deadline": self.deadline,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Reminder":
        """Create Reminder from a stored record. Records without history get an empty one."""
        return cls(
            title=data["title"],
            assigned_to=data.get("assignedTo", ""),
            repeat=repeat_from_dict(data.get("repeat") or {"type": "none"}),
            deadline=data.get("deadline", "") or "",
            history=[HistoryEntry.from_dict(e) for e in data.get("history") or []],
            done=stored_bool(data, "done"),
        )


@dataclass
class ReminderStatus:
    """Everything the display needs about one reminder, from one clock reading."""

    reminder: Reminder
    now: datetime
    due_today: bool
    done_today: bool
    late: bool
    deadline_label: str
    time_to_deadline: str
    last_done: str
    summary: str


def parse_time_of_day(value: str) -> time:
    """Parse "HH:MM". Raises ValueError."""
    hours, _, minutes = value.partition(":")
    return time(int(hours), int(minutes))


def validate_deadline(deadline: str, repeat: RepeatRule) -> None:
    """Raise ValueError if deadline doesn't match the encoding for repeat."""
    if not deadline:
        return
    if isinstance(repeat, NoRepeat):
        if "T" not in deadline:
            raise ValueError(f"Deadline must be YYYY-MM-DDTHH:MM, got {deadline!r}")
        parse_local_datetime(deadline)
    else:
        parse_time_of_day(deadline)


def deadline_at(reminder: Reminder, now: datetime) -> datetime | None:
    """Deadline instant relative to now, or None when unset or unreadable."""
    if not reminder.deadline:
        return None
    try:
        if reminder.is_one_off:
            return parse_local_datetime(reminder.deadline)
        return datetime.combine(now.date(), parse_time_of_day(reminder.deadline))
    except ValueError:
        return None


# ============== Snapshot functions (explicit now) ==============


def _done_on(reminder: Reminder, today: date) -> bool:
    if reminder.is_one_off:
        return reminder.done
    return is_done_for_day(reminder.history, today)


def _due_on(reminder: Reminder, today: date) -> bool:
    if reminder.is_one_off:
        completed = last_completion(reminder.history)
        # Never completed, or completed today: still shown
        return completed is None or completed.day >= today
    return is_due_on(reminder.repeat, today)


def _late_at(reminder: Reminder, now: datetime) -> bool:
    if _done_on(reminder, now.date()):
        return False
    deadline = deadline_at(reminder, now)
    if deadline is None:
        return False
    return now > deadline


def _time_to_deadline_at(reminder: Reminder, now: datetime) -> str:
    deadline = deadline_at(reminder, now)
    if deadline is None:
        return ""
    # Round half up to the nearest minute
    minutes = math.floor((deadline - now).total_seconds() / 60 + 0.5)
    if minutes > 0:
        return f"in {minutes} min"
    if minutes == 0:
        return "now"
    return f"{-minutes} min ago"


def _format_deadline(reminder: Reminder) -> str:
    if not reminder.deadline:
        return ""
    if reminder.is_one_off:
        try:
            return parse_local_datetime(reminder.deadline).strftime("%x %H:%M")
        except ValueError:
            return reminder.deadline
    return reminder.deadline


def _last_completion_label_at(reminder: Reminder, now: datetime) -> str:
    entry = last_completion(reminder.history)
    if entry is None:
        return ""
    today = now.date()
    if entry.day == today:
        day_label = "today"
    elif entry.day == today - timedelta(days=1):
        day_label = "yesterday"
    else:
        day_label = entry.timestamp.strftime("%x")
    return f"Last done: {day_label} at {entry.timestamp.strftime('%H:%M')}"


# ============== Clock-driven API ==============


def is_done_today(reminder: Reminder, clock: Clock) -> bool:
    return _done_on(reminder, clock.now().date())


def is_due_today(reminder: Reminder, clock: Clock) -> bool:
    """Whether the reminder belongs in today's list."""
    return _due_on(reminder, clock.now().date())


def is_late(reminder: Reminder, clock: Clock) -> bool:
    """Past today's deadline and not done for today."""
    return _late_at(reminder, clock.now())


def time_to_deadline(reminder: Reminder, clock: Clock) -> str:
    """'in N min', 'now' or 'N min ago'; empty when there is no deadline."""
    return _time_to_deadline_at(reminder, clock.now())


def format_deadline(reminder: Reminder) -> str:
    """Locale date and time for one-off reminders, bare HH:MM otherwise."""
    return _format_deadline(reminder)


def last_completion_label(reminder: Reminder, clock: Clock) -> str:
    return _last_completion_label_at(reminder, clock.now())


def toggle_done(reminder: Reminder, clock: Clock) -> Reminder:
    """
    Flip today's completion and append one history entry.

    One-off reminders flip their persistent done flag; repeating ones negate
    the state resolved for today. Updates the reminder in place and returns it.
    """
    now = clock.now()
    if reminder.is_one_off:
        new_done = not reminder.done
        reminder.done = new_done
    else:
        new_done = not is_done_for_day(reminder.history, now.date())
    reminder.history = record_toggle(reminder.history, now, new_done)
    return reminder


def evaluate(reminder: Reminder, clock: Clock) -> ReminderStatus:
    """Compute every derived value for display from a single clock reading."""
    now = clock.now()
    today = now.date()
    return ReminderStatus(
        reminder=reminder,
        now=now,
        due_today=_due_on(reminder, today),
        done_today=_done_on(reminder, today),
        late=_late_at(reminder, now),
        deadline_label=_format_deadline(reminder),
        time_to_deadline=_time_to_deadline_at(reminder, now),
        last_done=_last_completion_label_at(reminder, now),
        summary=repeat_summary(reminder.repeat),
    )
