"""Muistutin CLI - Household reminders."""

import json
import logging
import sys
from datetime import datetime

import click

from .config import load_config
from .core.repeat import DAY_NAMES, UNITS, NoRepeat, RepeatRule, parse_repeat, repeat_summary
from .household import Household
from .workflows import load_household, render_view, status_to_dict

logger = logging.getLogger(__name__)

REPEAT_KINDS = ["none", "everyday", "weekdays", "weekends", "daysOfWeek", "custom"]
DATETIME_FORMATS = ["%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d"]


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _household(ctx: click.Context) -> Household:
    return load_household(ctx.obj["config"], ctx.obj["now"])


def _parse_days(value: str | None) -> list[int]:
    """Parse '1,3' or 'Mon,Wed' into weekday numbers (0=Sun)."""
    if not value:
        return []
    lookup = {name.lower(): i for i, name in enumerate(DAY_NAMES)}
    days = []
    for part in value.split(","):
        part = part.strip().lower()
        if not part:
            continue
        if part.isdigit():
            days.append(int(part))
        elif part[:3] in lookup:
            days.append(lookup[part[:3]])
        else:
            raise click.BadParameter(f"Unknown day {part!r}", param_hint="--days")
    return days


def _build_deadline(repeat: RepeatRule, on_date: str, at_time: str) -> str:
    """One-off reminders need both a date and a time; repeating ones just the time."""
    if isinstance(repeat, NoRepeat):
        return f"{on_date}T{at_time}" if on_date and at_time else ""
    return at_time


def _split_deadline(deadline: str, repeat: RepeatRule, default_time: str) -> tuple[str, str]:
    if isinstance(repeat, NoRepeat) and "T" in deadline:
        on_date, _, at_time = deadline.partition("T")
        return on_date, at_time
    if isinstance(repeat, NoRepeat):
        return "", default_time
    return "", deadline or default_time


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--now",
    type=click.DateTime(formats=DATETIME_FORMATS),
    default=None,
    help="Pretend the current time is this (YYYY-MM-DDTHH:MM) for one command",
)
@click.pass_context
def main(ctx, debug: bool, now: datetime | None):
    """Muistutin - household reminders."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )
    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config()
    ctx.obj["now"] = now


# ============== Members ==============


@main.group()
def member():
    """Manage household members."""
    pass


@member.command("add")
@click.argument("name")
@click.pass_context
def member_add(ctx, name: str):
    """Add a household member."""
    household = _household(ctx)
    try:
        added = household.add_member(name)
    except ValueError as e:
        _fail(str(e))
    click.echo(f"✓ Added {added}")


@member.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def member_list(ctx, as_json: bool):
    """List household members."""
    household = _household(ctx)
    if as_json:
        click.echo(json.dumps(household.members, indent=2))
        return
    if not household.members:
        click.echo("No members yet. Add one with 'muistutin member add NAME'.")
        return
    for name in household.members:
        click.echo(f"• {name}")


# ============== Reminders ==============


def _repeat_options(func):
    func = click.option("--unit", type=click.Choice(UNITS), default=None, help="Unit for custom repeat")(func)
    func = click.option("--interval", type=int, default=None, help="Interval for custom repeat")(func)
    func = click.option("--days", default=None, help="Days for daysOfWeek repeat, e.g. Mon,Wed or 1,3")(func)
    func = click.option("--repeat", "kind", type=click.Choice(REPEAT_KINDS), default=None, help="Repeat rule")(func)
    func = click.option("--time", "at_time", default=None, help="Deadline time (HH:MM)")(func)
    func = click.option("--date", "on_date", default=None, help="Deadline date for one-off reminders (YYYY-MM-DD)")(func)
    return func


@main.command("add")
@click.argument("title")
@click.option("--to", "assigned_to", default="", help="Member the reminder is assigned to")
@_repeat_options
@click.pass_context
def add(ctx, title, assigned_to, on_date, at_time, kind, days, interval, unit):
    """Add a reminder."""
    household = _household(ctx)
    config = ctx.obj["config"]
    try:
        repeat = parse_repeat(
            kind or "none",
            days=_parse_days(days),
            interval=interval if interval is not None else 2,
            unit=unit or "day",
        )
        deadline = _build_deadline(repeat, on_date or "", at_time or config.default_deadline)
        reminder = household.add_reminder(title, assigned_to, repeat, deadline)
    except ValueError as e:
        _fail(str(e))
    click.echo(f"✓ Added {reminder.title!r} for {reminder.assigned_to} ({repeat_summary(reminder.repeat)})")


@main.command("edit")
@click.argument("number", type=int)
@click.option("--title", default=None, help="New title")
@click.option("--to", "assigned_to", default=None, help="New assignee")
@_repeat_options
@click.pass_context
def edit(ctx, number, title, assigned_to, on_date, at_time, kind, days, interval, unit):
    """Edit reminder NUMBER. History and completion are kept."""
    household = _household(ctx)
    config = ctx.obj["config"]
    try:
        current = household.get(number - 1)
        repeat = current.repeat
        if kind is not None:
            repeat = parse_repeat(
                kind,
                days=_parse_days(days) if days is not None else list(getattr(current.repeat, "days", ())),
                interval=interval if interval is not None else getattr(current.repeat, "interval", 2),
                unit=unit or getattr(current.repeat, "unit", "day"),
            )
        cur_date, cur_time = _split_deadline(current.deadline, current.repeat, config.default_deadline)
        deadline = _build_deadline(repeat, on_date or cur_date, at_time or cur_time)
        reminder = household.edit_reminder(
            number - 1,
            title if title is not None else current.title,
            assigned_to if assigned_to is not None else current.assigned_to,
            repeat,
            deadline,
        )
    except ValueError as e:
        _fail(str(e))
    click.echo(f"✓ Saved {reminder.title!r}")


@main.command("remove")
@click.argument("number", type=int)
@click.pass_context
def remove(ctx, number: int):
    """Remove reminder NUMBER."""
    household = _household(ctx)
    try:
        reminder = household.remove_reminder(number - 1)
    except ValueError as e:
        _fail(str(e))
    click.echo(f"✓ Removed {reminder.title!r}")


@main.command("done")
@click.argument("number", type=int)
@click.pass_context
def done(ctx, number: int):
    """Toggle today's completion of reminder NUMBER."""
    household = _household(ctx)
    try:
        reminder = household.toggle_done(number - 1)
    except ValueError as e:
        _fail(str(e))
    state = "done" if reminder.history[-1].done else "not done"
    click.echo(f"✓ {reminder.title!r} marked {state}")


@main.command("list")
@click.option("--all", "show_all", is_flag=True, help="Show all reminders, not just today's")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_reminders(ctx, show_all: bool, as_json: bool):
    """Show today's reminders."""
    household = _household(ctx)
    view = "all" if show_all else ctx.obj["config"].default_view

    if as_json:
        click.echo(
            json.dumps(
                [status_to_dict(index + 1, s) for index, s in household.statuses(view)],
                indent=2,
            )
        )
        return

    click.echo(render_view(household, view))


@main.command("history")
@click.argument("number", type=int)
@click.pass_context
def history(ctx, number: int):
    """Show the completion history of reminder NUMBER, newest first."""
    household = _household(ctx)
    try:
        reminder = household.get(number - 1)
        entries = household.history(number - 1)
    except ValueError as e:
        _fail(str(e))

    click.echo(f"History for {reminder.title!r}\n")
    if not entries:
        click.echo("No history yet.")
        return
    for entry in entries:
        label = "Completed" if entry.done else "Uncompleted"
        click.echo(f"  {label:12} {entry.timestamp.strftime('%x %H:%M:%S')}")


# ============== Clock ==============


@main.group(invoke_without_command=True)
@click.pass_context
def clock(ctx):
    """Show or override the current time."""
    if ctx.invoked_subcommand is None:
        household = _household(ctx)
        mode = "Mocked time" if household.clock.is_overridden else "Real time"
        click.echo(f"{household.clock.now().strftime('%a %x %H:%M')} ({mode})")


@clock.command("set")
@click.argument("instant", type=click.DateTime(formats=DATETIME_FORMATS))
@click.pass_context
def clock_set(ctx, instant: datetime):
    """Freeze the clock at INSTANT (YYYY-MM-DDTHH:MM)."""
    household = _household(ctx)
    household.set_clock(instant)
    click.echo(f"✓ Clock set to {instant.strftime('%a %x %H:%M')}")


@clock.command("clear")
@click.pass_context
def clock_clear(ctx):
    """Return to real time."""
    household = _household(ctx)
    household.clear_clock()
    click.echo("✓ Using real time")


# ============== Misc ==============


@main.command()
@click.option("--yes", is_flag=True, help="Don't ask for confirmation")
@click.pass_context
def demo(ctx, yes: bool):
    """Replace members and reminders with demo data."""
    if not yes and not click.confirm(
        "This will overwrite your current members and reminders with demo data. Continue?"
    ):
        return
    household = _household(ctx)
    household.load_demo_data()
    click.echo(f"✓ Loaded {len(household.members)} members and {len(household.reminders)} reminders")


@main.command()
@click.option("--interval", type=int, default=None, help="Seconds between refreshes")
@click.option("--all", "show_all", is_flag=True, help="Show all reminders, not just today's")
@click.pass_context
def watch(ctx, interval: int | None, show_all: bool):
    """Keep today's list on screen, refreshing periodically."""
    from apscheduler.schedulers.blocking import BlockingScheduler
    from apscheduler.triggers.interval import IntervalTrigger

    config = ctx.obj["config"]
    seconds = interval or config.refresh_seconds
    view = "all" if show_all else config.default_view

    def refresh() -> None:
        # Reload each tick so changes made by other commands show up
        household = _household(ctx)
        click.clear()
        click.echo(render_view(household, view))
        click.echo(f"\nRefreshing every {seconds}s. Press Ctrl+C to stop.")

    scheduler = BlockingScheduler()
    scheduler.add_job(refresh, IntervalTrigger(seconds=seconds), next_run_time=datetime.now())
    logger.info(f"Watching {view} view every {seconds}s")
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        click.echo("\nStopped.")


if __name__ == "__main__":
    main()
