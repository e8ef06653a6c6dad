"""Clock - the single source of "now" for all reminder logic."""

from datetime import datetime
from typing import Callable


class Clock:
    """
    Supplies the current instant, real or operator-overridden.

    All engine functions take a Clock and read it once per call. Naive local
    datetimes throughout; no timezone handling.
    """

    def __init__(
        self,
        override: datetime | None = None,
        source: Callable[[], datetime] = datetime.now,
    ):
        self._override = override
        self._source = source

    def now(self) -> datetime:
        if self._override is not None:
            return self._override
        return self._source()

    @property
    def override(self) -> datetime | None:
        return self._override

    @property
    def is_overridden(self) -> bool:
        return self._override is not None

    def set_override(self, instant: datetime) -> None:
        """Freeze now() at instant until cleared or changed."""
        self._override = instant

    def clear_override(self) -> None:
        """Return to the real wall clock."""
        self._override = None

    @classmethod
    def fixed(cls, instant: datetime) -> "Clock":
        """Clock frozen at instant."""
        clock = cls()
        clock.set_override(instant)
        return clock


def parse_local_datetime(value: str) -> datetime:
    """Parse an ISO date-time in host local time. Raises ValueError for UTC offsets."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        raise ValueError(f"Expected a local date-time without UTC offset, got {value!r}")
    return parsed
