"""Household state - members, reminders and the actions that change them.

Every successful mutation is re-persisted through the store. Validation
failures raise ValidationError before anything is touched.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .core.clock import Clock, parse_local_datetime
from .core.history import HistoryEntry, newest_first
from .core.reminders import Reminder, ReminderStatus, evaluate, toggle_done, validate_deadline
from .core.repeat import CustomInterval, DaysOfWeek, Everyday, NoRepeat, RepeatRule, Weekdays, Weekends
from .ports.store import KeyValueStore

logger = logging.getLogger(__name__)

MEMBERS_KEY = "muistutin:familyMembers"
REMINDERS_KEY = "muistutin:reminders"
CLOCK_KEY = "muistutin:clockOverride"

VIEWS = ("today", "all")


class ValidationError(ValueError):
    """A user-facing, recoverable input error."""


def decode_members(raw: Any) -> list[str]:
    """Stored member list, or [] if the snapshot is malformed."""
    if raw is None:
        return []
    if not isinstance(raw, list) or not all(isinstance(m, str) for m in raw):
        logger.warning("Stored member list is malformed, starting empty")
        return []
    return list(raw)


def decode_reminders(raw: Any) -> list[Reminder]:
    """Stored reminder list; unreadable records are skipped, a non-list gives []."""
    if raw is None:
        return []
    if not isinstance(raw, list):
        logger.warning("Stored reminder list is malformed, starting empty")
        return []
    reminders = []
    for position, item in enumerate(raw, start=1):
        try:
            reminders.append(Reminder.from_dict(item))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Skipping unreadable stored reminder #{position}: {e}")
    return reminders


def decode_clock_override(raw: Any) -> datetime | None:
    if not raw:
        return None
    try:
        return parse_local_datetime(raw)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring unreadable clock override: {raw!r}")
        return None


def demo_reminders(today_iso: str) -> list[Reminder]:
    """Sample reminders covering every repeat rule."""
    return [
        Reminder("Take medicine", "Anna", Everyday(), "07:30"),
        Reminder("Bring phone", "Ben", Weekdays(), "08:00"),
        Reminder("Pack gym clothes", "Charlie", DaysOfWeek((1, 3)), "07:45"),
        Reminder("Take out trash", "Anna", CustomInterval(2, "day"), "08:15"),
        Reminder("Feed the cat", "Ben", Weekends(), "09:00"),
        Reminder("Sign school form", "Anna", NoRepeat(), f"{today_iso}T08:30"),
    ]


@dataclass
class Household:
    """In-memory members and reminders backed by a key-value store."""

    store: KeyValueStore
    clock: Clock = field(default_factory=Clock)
    members: list[str] = field(default_factory=list)
    reminders: list[Reminder] = field(default_factory=list)

    @classmethod
    def load(cls, store: KeyValueStore, clock: Clock | None = None) -> "Household":
        """Restore members, reminders and any saved clock override."""
        clock = clock or Clock()
        if not clock.is_overridden:
            override = decode_clock_override(store.load(CLOCK_KEY))
            if override is not None:
                clock.set_override(override)
        return cls(
            store=store,
            clock=clock,
            members=decode_members(store.load(MEMBERS_KEY)),
            reminders=decode_reminders(store.load(REMINDERS_KEY)),
        )

    # ============== Persistence ==============

    def _save(self, key: str, value: Any) -> None:
        if not self.store.save(key, value):
            logger.warning(f"Could not persist {key}; keeping in-memory state")

    def _save_members(self) -> None:
        self._save(MEMBERS_KEY, list(self.members))

    def _save_reminders(self) -> None:
        self._save(REMINDERS_KEY, [r.to_dict() for r in self.reminders])

    # ============== Members ==============

    def add_member(self, name: str) -> str:
        trimmed = name.strip()
        if not trimmed:
            raise ValidationError("Name cannot be empty")
        if trimmed in self.members:
            raise ValidationError("Member already exists")
        self.members.append(trimmed)
        self._save_members()
        logger.info(f"Added member {trimmed}")
        return trimmed

    # ============== Reminders ==============

    def get(self, index: int) -> Reminder:
        if not 0 <= index < len(self.reminders):
            raise ValidationError(f"No reminder #{index + 1}")
        return self.reminders[index]

    def _validate(
        self,
        title: str,
        assigned_to: str,
        repeat: RepeatRule,
        deadline: str,
        current_assignee: str | None = None,
    ) -> str:
        title = title.strip()
        if not title:
            raise ValidationError("Title cannot be empty")
        if not assigned_to:
            raise ValidationError("Please assign to a member")
        # An orphaned assignee may be kept on edit, but not newly chosen
        if assigned_to not in self.members and assigned_to != current_assignee:
            raise ValidationError(f"Unknown member: {assigned_to}")
        try:
            validate_deadline(deadline, repeat)
        except ValueError:
            raise ValidationError(f"Invalid deadline: {deadline}")
        return title

    def add_reminder(
        self,
        title: str,
        assigned_to: str,
        repeat: RepeatRule | None = None,
        deadline: str = "",
    ) -> Reminder:
        repeat = repeat or NoRepeat()
        title = self._validate(title, assigned_to, repeat, deadline)
        reminder = Reminder(title=title, assigned_to=assigned_to, repeat=repeat, deadline=deadline)
        self.reminders.append(reminder)
        self._save_reminders()
        logger.info(f"Added reminder {title!r} for {assigned_to}")
        return reminder

    def edit_reminder(
        self,
        index: int,
        title: str,
        assigned_to: str,
        repeat: RepeatRule,
        deadline: str,
    ) -> Reminder:
        """Replace title, assignee, rule and deadline. History and done are kept."""
        reminder = self.get(index)
        title = self._validate(title, assigned_to, repeat, deadline, reminder.assigned_to)
        reminder.title = title
        reminder.assigned_to = assigned_to
        reminder.repeat = repeat
        reminder.deadline = deadline
        self._save_reminders()
        logger.info(f"Edited reminder #{index + 1}")
        return reminder

    def remove_reminder(self, index: int) -> Reminder:
        reminder = self.get(index)
        del self.reminders[index]
        self._save_reminders()
        logger.info(f"Removed reminder {reminder.title!r}")
        return reminder

    def toggle_done(self, index: int) -> Reminder:
        reminder = toggle_done(self.get(index), self.clock)
        self._save_reminders()
        return reminder

    def history(self, index: int) -> list[HistoryEntry]:
        return newest_first(self.get(index).history)

    # ============== Views ==============

    def statuses(
        self, view: str = "today", now: datetime | None = None
    ) -> list[tuple[int, ReminderStatus]]:
        """
        (index, status) pairs for a view.

        The whole pass shares one clock reading (now, if given).
        """
        if view not in VIEWS:
            raise ValidationError(f"Unknown view: {view}")
        snapshot = Clock.fixed(now or self.clock.now())
        result = []
        for index, reminder in enumerate(self.reminders):
            status = evaluate(reminder, snapshot)
            if view == "all" or status.due_today:
                result.append((index, status))
        return result

    # ============== Clock ==============

    def set_clock(self, instant: datetime) -> None:
        self.clock.set_override(instant)
        self._save(CLOCK_KEY, instant.isoformat())
        logger.info(f"Clock overridden to {instant.isoformat()}")

    def clear_clock(self) -> None:
        self.clock.clear_override()
        self._save(CLOCK_KEY, None)
        logger.info("Clock override cleared")

    # ============== Demo ==============

    def load_demo_data(self) -> None:
        """Overwrite members and reminders with sample data."""
        self.members = ["Anna", "Ben", "Charlie"]
        self.reminders = demo_reminders(self.clock.now().date().isoformat())
        self._save_members()
        self._save_reminders()
        logger.info("Loaded demo data")
