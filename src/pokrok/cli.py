"""Command-line interface for inspecting and updating habits."""

from __future__ import annotations

from datetime import date
from typing import Optional

import click

from .config import BaseConfig
from .context import AppContext, create_app_context, ensure_user
from .logging_config import setup_logging
from .models.habit import Habit
from .services import habits as habit_service
from .services.dates import WEEKDAY_NAMES, local_day, parse_day
from .services.day_state import DayState
from .services.schedule import FREQUENCIES
from .services.statistics import PERIODS, DateWindow

_CALENDAR_MARKS = {
    DayState.COMPLETED: "x",
    DayState.MISSED: "-",
    DayState.TODAY: "*",
    DayState.PLANNED: "o",
    DayState.NOT_SCHEDULED: ".",
    DayState.INACTIVE: " ",
}


class DayParam(click.ParamType):
    """Click parameter accepting YYYY-MM-DD."""

    name = "date"

    def convert(self, value, param, ctx):
        if isinstance(value, date):
            return value
        day = parse_day(value)
        if day is None:
            self.fail(f"{value!r} is not a date in YYYY-MM-DD format", param, ctx)
        return day


DAY = DayParam()


def _context(click_ctx: click.Context) -> AppContext:
    return click_ctx.ensure_object(dict)["app"]


def _today(value: Optional[date]) -> date:
    return value or date.today()


def _account_created(app: AppContext):
    return app.require_user().created_at


@click.group()
@click.option("--user", "username", default="default", show_default=True, help="Account to act as")
@click.pass_context
def cli(click_ctx: click.Context, username: str) -> None:
    """Pokrok habit tracker."""

    config = BaseConfig()
    setup_logging(config)
    app = create_app_context(config)
    ensure_user(app, username)
    click_ctx.ensure_object(dict)["app"] = app


@cli.command("init-db")
@click.pass_context
def init_db(click_ctx: click.Context) -> None:
    """Create the database schema."""

    app = _context(click_ctx)
    click.echo(f"Database ready: {app.config.DATABASE_URL}")


@cli.command("add-habit")
@click.argument("name")
@click.option(
    "--frequency",
    type=click.Choice(FREQUENCIES),
    default="daily",
    show_default=True,
)
@click.option("--day", "days", multiple=True, type=click.Choice(WEEKDAY_NAMES), help="Selected weekday")
@click.option("--always-show", is_flag=True, default=False)
@click.option("--start", "start_date", type=DAY, default=None, help="First tracked day")
@click.pass_context
def add_habit(
    click_ctx: click.Context,
    name: str,
    frequency: str,
    days: tuple[str, ...],
    always_show: bool,
    start_date: Optional[date],
) -> None:
    """Create a habit."""

    app = _context(click_ctx)
    user = app.require_user()
    habit = app.habit_repo.create(
        Habit(
            user_id=user.id,
            name=name,
            frequency=frequency,
            selected_days=list(days) or None,
            always_show=always_show,
            start_date=start_date,
        ),
        user_id=user.id,
    )
    click.echo(f"Created habit {habit.id}: {habit.name}")


@cli.command("stats")
@click.argument("habit_id", type=int)
@click.option("--today", type=DAY, default=None, help="Evaluation day (defaults to today)")
@click.pass_context
def stats(click_ctx: click.Context, habit_id: int, today: Optional[date]) -> None:
    """Show streaks and totals for a habit."""

    app = _context(click_ctx)
    try:
        result = habit_service.habit_stats(
            app.habit_repo,
            habit_id,
            today=_today(today),
            user_id=app.require_user().id,
            anchor=app.config.STATS_ANCHOR,
            account_created=_account_created(app),
        )
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Current streak:   {result.current_streak}")
    click.echo(f"Longest streak:   {result.longest_streak}")
    click.echo(f"Completed:        {result.total_completed}")
    click.echo(f"Missed:           {result.total_missed}")
    click.echo(f"Off-schedule:     {result.completed_outside_schedule}")


@cli.command("toggle")
@click.argument("habit_id", type=int)
@click.argument("day", type=DAY)
@click.option("--today", type=DAY, default=None, help="Evaluation day (defaults to today)")
@click.pass_context
def toggle(click_ctx: click.Context, habit_id: int, day: date, today: Optional[date]) -> None:
    """Toggle a habit between completed and missed on DAY."""

    app = _context(click_ctx)
    try:
        result = habit_service.toggle_completion(
            app.habit_repo,
            habit_id,
            day,
            today=_today(today),
            user_id=app.require_user().id,
            anchor=app.config.STATS_ANCHOR,
            account_created=_account_created(app),
        )
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"{day.isoformat()}: {result.state.value}")


@cli.command("calendar")
@click.argument("habit_id", type=int)
@click.argument("year", type=int)
@click.argument("month", type=click.IntRange(1, 12))
@click.option("--today", type=DAY, default=None, help="Evaluation day (defaults to today)")
@click.pass_context
def calendar(
    click_ctx: click.Context, habit_id: int, year: int, month: int, today: Optional[date]
) -> None:
    """Print a month of day states for a habit."""

    app = _context(click_ctx)
    try:
        weeks = habit_service.habit_calendar(
            app.habit_repo,
            habit_id,
            year,
            month,
            today=_today(today),
            user_id=app.require_user().id,
            first_weekday=app.config.FIRST_WEEKDAY,
            anchor=app.config.STATS_ANCHOR,
            account_created=_account_created(app),
        )
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    for week in weeks:
        cells = []
        for cell in week:
            if cell is None:
                cells.append("    ")
            else:
                cells.append(f"{cell.day.day:>2}{_CALENDAR_MARKS[cell.state]} ")
        click.echo("".join(cells).rstrip())


@cli.command("summary")
@click.option("--period", type=click.Choice(PERIODS), default="day", show_default=True)
@click.option("--today", type=DAY, default=None, help="Evaluation day (defaults to today)")
@click.pass_context
def summary(click_ctx: click.Context, period: str, today: Optional[date]) -> None:
    """Show completed vs scheduled habits and steps for a period."""

    app = _context(click_ctx)
    user = app.require_user()
    window = DateWindow.for_period(period, _today(today), all_start=local_day(user.created_at))
    result = habit_service.dashboard_summary(
        app.habit_repo,
        app.step_repo,
        window,
        user_id=user.id,
        anchor=app.config.STATS_ANCHOR,
        account_created=user.created_at,
    )
    click.echo(f"{window.start.isoformat()} .. {window.end.isoformat()}")
    click.echo(f"Habits: {result.habits_completed}/{result.habits_total}")
    click.echo(f"Steps:  {result.steps_completed}/{result.steps_total}")
    click.echo(f"Progress: {result.progress_percent}%")


def main() -> None:  # pragma: no cover - console script entry
    cli(obj={})


if __name__ == "__main__":  # pragma: no cover
    main()
