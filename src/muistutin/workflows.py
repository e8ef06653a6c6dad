"""Shared workflow layer between the CLI commands and the watch loop."""

from datetime import datetime
from pathlib import Path

from .adapters.json_store import JsonFileStore
from .config import DATA_DIR, Config
from .core.clock import Clock
from .core.reminders import ReminderStatus
from .household import Household


def get_store(config: Config) -> JsonFileStore:
    """Resolve data directory from config."""
    if config.data_dir:
        return JsonFileStore(Path(config.data_dir).expanduser())
    return JsonFileStore(DATA_DIR)


def load_household(config: Config, now: datetime | None = None) -> Household:
    """
    Load household state with the right clock.

    Precedence for the override: explicit now, then config, then the
    override saved by `muistutin clock set`.
    """
    override = now or config.clock_override
    clock = Clock(override=override)
    return Household.load(get_store(config), clock)


def format_status_line(number: int, status: ReminderStatus) -> str:
    """One line per reminder: checkbox, title, assignee, deadline and flags."""
    r = status.reminder
    check = "x" if status.done_today else " "
    parts = [f"{number:>2}. [{check}] {r.title}", f"Assigned to: {r.assigned_to}"]
    if status.deadline_label:
        deadline = f"Deadline: {status.deadline_label}"
        if not status.done_today and status.time_to_deadline:
            deadline += f" ({status.time_to_deadline})"
        parts.append(deadline)
    if status.late:
        parts.append("LATE")
    return " | ".join(parts)


def render_view(household: Household, view: str) -> str:
    """Render the today/all list as plain text."""
    now = household.clock.now()
    statuses = household.statuses(view, now)
    mode = "Mocked time" if household.clock.is_overridden else "Real time"
    lines = [f"{now.strftime('%a %x %H:%M')} ({mode})", ""]

    if not statuses:
        lines.append("No reminders for today." if view == "today" else "No reminders.")
        return "\n".join(lines)

    for index, status in statuses:
        lines.append(format_status_line(index + 1, status))
        details = [status.summary]
        if status.last_done:
            details.append(status.last_done)
        lines.append(f"      {' · '.join(details)}")
    return "\n".join(lines)


def status_to_dict(number: int, status: ReminderStatus) -> dict:
    """JSON-friendly form of a status for --json output."""
    return {
        "number": number,
        **status.reminder.to_dict(),
        "dueToday": status.due_today,
        "doneToday": status.done_today,
        "late": status.late,
        "deadlineLabel": status.deadline_label,
        "timeToDeadline": status.time_to_deadline,
        "lastDone": status.last_done,
        "summary": status.summary,
    }
