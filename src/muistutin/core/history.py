"""Completion history - append-only toggle log and per-day resolution.

History is the source of truth for a repeating reminder's daily state; nothing
is cached. Every function here is pure and never edits existing entries.
"""

from dataclasses import dataclass
from datetime import date, datetime

from .clock import parse_local_datetime


@dataclass(frozen=True)
class HistoryEntry:
    """One completion toggle at an instant."""

    timestamp: datetime
    done: bool

    @property
    def day(self) -> date:
        return self.timestamp.date()

    def to_dict(self) -> dict:
        # Milliseconds since the epoch, as the stored records have always used
        return {"timestamp": int(self.timestamp.timestamp() * 1000), "done": self.done}

    @classmethod
    def from_dict(cls, data: dict) -> "HistoryEntry":
        """Parse a stored entry. Raises ValueError for unreadable timestamps or flags."""
        raw = data["timestamp"]
        if isinstance(raw, str):
            timestamp = parse_local_datetime(raw)
        else:
            try:
                timestamp = datetime.fromtimestamp(raw / 1000)
            except (OverflowError, OSError, ValueError) as e:
                raise ValueError(f"Timestamp out of range: {raw!r}") from e
        return cls(timestamp=timestamp, done=stored_bool(data, "done"))


def stored_bool(data: dict, key: str) -> bool:
    """A stored flag; missing means False, anything but a real bool is rejected."""
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, got {value!r}")
    return value


def is_done_for_day(history: list[HistoryEntry], day: date) -> bool:
    """Done flag of the last entry on day, or False when the day has none."""
    for entry in reversed(history):
        if entry.day == day:
            return entry.done
    return False


def record_toggle(history: list[HistoryEntry], at: datetime, done: bool) -> list[HistoryEntry]:
    """Return a new history with one entry appended. Never coalesces."""
    return [*history, HistoryEntry(timestamp=at, done=done)]


def last_completion(history: list[HistoryEntry]) -> HistoryEntry | None:
    """Most recent entry with done=True across all days."""
    for entry in reversed(history):
        if entry.done:
            return entry
    return None


def newest_first(history: list[HistoryEntry]) -> list[HistoryEntry]:
    return sorted(history, key=lambda e: e.timestamp, reverse=True)
