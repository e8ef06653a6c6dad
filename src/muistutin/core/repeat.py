"""Repeat rules - which calendar days a reminder recurs on. Pure, no I/O."""

from dataclasses import dataclass
from datetime import date

# 0=Sun .. 6=Sat
DAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
UNITS = ("day", "week", "month")


@dataclass(frozen=True)
class NoRepeat:
    """Single occurrence. Due-ness comes from history, not the rule."""


@dataclass(frozen=True)
class Everyday:
    pass


@dataclass(frozen=True)
class Weekdays:
    pass


@dataclass(frozen=True)
class Weekends:
    pass


@dataclass(frozen=True)
class DaysOfWeek:
    """Due on the listed weekday numbers (0=Sun..6=Sat)."""

    days: tuple[int, ...] = ()

    def __post_init__(self):
        for d in self.days:
            if not isinstance(d, int) or not 0 <= d <= 6:
                raise ValueError(f"Invalid day of week: {d!r}")
        # Stored sorted with duplicates collapsed
        object.__setattr__(self, "days", tuple(sorted(set(self.days))))


@dataclass(frozen=True)
class CustomInterval:
    """
    Every N units.

    The due test always counts raw days since January 1st, whatever the
    unit. Weeks and months are stored and displayed but not converted.
    """

    interval: int = 2
    unit: str = "day"

    def __post_init__(self):
        if not isinstance(self.interval, int) or self.interval < 1:
            raise ValueError(f"Interval must be a whole number of at least 1, got {self.interval!r}")
        if self.unit not in UNITS:
            raise ValueError(f"Unit must be one of {', '.join(UNITS)}, got {self.unit!r}")


RepeatRule = NoRepeat | Everyday | Weekdays | Weekends | DaysOfWeek | CustomInterval

# Serialized "type" tag for each variant
REPEAT_TYPES = {
    NoRepeat: "none",
    Everyday: "everyday",
    Weekdays: "weekdays",
    Weekends: "weekends",
    DaysOfWeek: "daysOfWeek",
    CustomInterval: "custom",
}


def weekday_number(day: date) -> int:
    """Weekday with Sunday as 0."""
    return day.isoweekday() % 7


def days_since_new_year(day: date) -> int:
    return (day - date(day.year, 1, 1)).days


def is_repeating(rule: RepeatRule) -> bool:
    return not isinstance(rule, NoRepeat)


def is_due_on(rule: RepeatRule, day: date) -> bool:
    """
    Whether a repeating rule falls on the given calendar day.

    NoRepeat always answers False here; one-off reminders are resolved from
    their completion history instead (see reminders.is_due_today).
    """
    weekday = weekday_number(day)
    match rule:
        case Everyday():
            return True
        case Weekdays():
            return 1 <= weekday <= 5
        case Weekends():
            return weekday in (0, 6)
        case DaysOfWeek(days=days):
            return weekday in days
        case CustomInterval(interval=interval):
            return days_since_new_year(day) % interval == 0
        case _:
            return False


def repeat_summary(rule: RepeatRule) -> str:
    """Human-readable description of a rule."""
    match rule:
        case NoRepeat():
            return "Does not repeat"
        case Everyday():
            return "Repeats every day"
        case Weekdays():
            return "Repeats on weekdays"
        case Weekends():
            return "Repeats on weekends"
        case DaysOfWeek(days=days):
            return f"Repeats on {', '.join(DAY_NAMES[d] for d in days)}"
        case CustomInterval(interval=interval, unit=unit):
            plural = "s" if interval > 1 else ""
            return f"Repeats every {interval} {unit}{plural}"
    return ""


def repeat_to_dict(rule: RepeatRule) -> dict:
    data = {"type": REPEAT_TYPES[type(rule)]}
    match rule:
        case DaysOfWeek(days=days):
            data["days"] = list(days)
        case CustomInterval(interval=interval, unit=unit):
            data["interval"] = interval
            data["unit"] = unit
    return data


def repeat_from_dict(data: dict) -> RepeatRule:
    """Parse a stored rule. Raises ValueError for unknown or invalid rules."""
    match data.get("type"):
        case "none":
            return NoRepeat()
        case "everyday":
            return Everyday()
        case "weekdays":
            return Weekdays()
        case "weekends":
            return Weekends()
        case "daysOfWeek":
            return DaysOfWeek(tuple(data.get("days", [])))
        case "custom":
            return CustomInterval(
                interval=data.get("interval", 2),
                unit=data.get("unit", "day"),
            )
        case other:
            raise ValueError(f"Unknown repeat type: {other!r}")


def parse_repeat(
    kind: str,
    days: list[int] | None = None,
    interval: int = 2,
    unit: str = "day",
) -> RepeatRule:
    """Build a rule from editor-style inputs; extra inputs for other kinds are ignored."""
    data: dict = {"type": kind}
    if kind == "daysOfWeek":
        data["days"] = days or []
    elif kind == "custom":
        data["interval"] = interval
        data["unit"] = unit
    return repeat_from_dict(data)
