"""
Main CLI application using Typer.
"""

from pathlib import Path
from typing import Annotated, List, Optional

import pendulum
import typer
from pendulum import DateTime
from rich.console import Console
from rich.table import Table

from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import TimefilterError
from ..domain.models import WeekdayTimeRangeSet
from ..domain.parser import parse_range
from ..logging_setup import configure_logging
from ..services.schedule_checker import ScheduleChecker

app = typer.Typer(
    name="timefilters",
    help="Check instants against recurring weekday and time-of-day ranges",
    add_completion=False
)

console = Console()

EXIT_WITHIN = 0
EXIT_OUTSIDE = 1
EXIT_ERROR = 2

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
RangeOption = Annotated[Optional[List[str]], typer.Option("--range", "-r", help="Range expression, e.g. 'Mon 09:00-17:00'. Repeatable.")]
ScheduleOption = Annotated[Optional[str], typer.Option("--schedule", "-s", help="Name of a schedule from the config file")]


@app.callback()
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Parse weekday/time range expressions and test instants against them.
    """
    ctx.obj = {"verbose": verbose}
    configure_logging("DEBUG" if verbose else "WARNING")


def _load_config(ctx: typer.Context, config_file: Optional[Path]) -> AppConfig:
    """
    Load the config file, falling back to defaults when no file is present.

    An explicitly given path must exist.
    """
    config_path = config_file or get_default_config_path()
    if config_file is None and not config_path.exists():
        config = AppConfig()
    else:
        config = AppConfig.load_from_yaml(config_path)

    if not (ctx.obj or {}).get("verbose"):
        configure_logging(config.log_level)
    return config


def _resolve_range_set(
    config: AppConfig,
    ranges: Optional[List[str]],
    schedule: Optional[str],
) -> WeekdayTimeRangeSet:
    """Pick the ad-hoc ranges or the named schedule, never both."""
    if ranges and schedule:
        raise ValueError("Use either --range or --schedule, not both.")
    if schedule:
        return config.get_schedule(schedule)
    if ranges:
        return WeekdayTimeRangeSet.parse(ranges)
    raise ValueError("Provide at least one --range or a --schedule.")


def _parse_instant(text: str, tz: str) -> DateTime:
    """Parse an instant such as '2024-11-24 10:00' in the given timezone."""
    parsed = pendulum.parse(text, tz=tz)
    if not isinstance(parsed, DateTime):
        raise ValueError(f"Not a date and time: '{text}'")
    return parsed


def _print_error(error: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {error}")


@app.command()
def parse(
    expressions: Annotated[List[str], typer.Argument(help="Range expressions, e.g. 'Sunday' or 'Mon 09:00-17:00'")],
):
    """
    Parse expressions and show their canonical form.

    Examples:
        timefilters parse "Mon 09:00-17:00" "sat" "13:00 - 14:30:15"
    """
    table = Table(
        title="Parsed ranges",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Expression", style="bold yellow")
    table.add_column("Weekday")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Canonical", style="green")

    invalid = 0
    for expression in expressions:
        time_range = parse_range(expression)
        if time_range is None:
            invalid += 1
            table.add_row(expression, "", "", "", "[red]invalid[/red]")
            continue

        table.add_row(
            expression,
            time_range.weekday.name.capitalize() if time_range.weekday is not None else "any",
            time_range.start_time.format("HH:mm:ss") if time_range.has_times else "-",
            time_range.end_time.format("HH:mm:ss") if time_range.has_times else "-",
            time_range.render(),
        )

    console.print()
    console.print(table)
    console.print()

    if invalid:
        console.print(f"[bold red]✗ {invalid} invalid expression(s)[/bold red]")
        raise typer.Exit(EXIT_OUTSIDE)


@app.command()
def check(
    ctx: typer.Context,
    ranges: RangeOption = None,
    schedule: ScheduleOption = None,
    at: Annotated[Optional[str], typer.Option("--at", help="Instant to check (e.g. 2024-11-24T10:00). Defaults to now.")] = None,
    config_file: ConfigOption = None,
):
    """
    Check whether an instant falls within ranges or a configured schedule.

    Exits with 0 when inside the window, 1 when outside and 2 on errors.

    Examples:
        timefilters check -r "Mon 09:00-17:00" -r "Tue 09:00-17:00"
        timefilters check --schedule office-hours --at "2024-11-25 10:30"
    """
    try:
        config = _load_config(ctx, config_file)
        range_set = _resolve_range_set(config, ranges, schedule)
        instant = _parse_instant(at, config.timezone) if at else pendulum.now(config.timezone)
    except (FileNotFoundError, ValueError, TimefilterError) as e:
        _print_error(e)
        raise typer.Exit(EXIT_ERROR)

    weekday = instant.format("dddd", locale="en")
    label = schedule or range_set.render()
    if range_set.within(instant):
        console.print(f"[green]✓ {weekday} {instant.to_datetime_string()} is within {label}[/green]")
        raise typer.Exit(EXIT_WITHIN)

    console.print(f"[yellow]✗ {weekday} {instant.to_datetime_string()} is outside {label}[/yellow]")
    raise typer.Exit(EXIT_OUTSIDE)


@app.command("filter")
def filter_instants(
    ctx: typer.Context,
    instants: Annotated[List[str], typer.Argument(help="Instants to test, e.g. '2024-11-24 10:00'")],
    ranges: RangeOption = None,
    schedule: ScheduleOption = None,
    config_file: ConfigOption = None,
):
    """
    Print the instants that fall within ranges or a configured schedule.

    Exits with 1 when none of them match.
    """
    try:
        config = _load_config(ctx, config_file)
        range_set = _resolve_range_set(config, ranges, schedule)
        parsed = [_parse_instant(text, config.timezone) for text in instants]
    except (FileNotFoundError, ValueError, TimefilterError) as e:
        _print_error(e)
        raise typer.Exit(EXIT_ERROR)

    found, matches = range_set.filter_within(parsed)
    for instant in matches:
        console.print(instant.to_iso8601_string())

    if not found:
        raise typer.Exit(EXIT_OUTSIDE)


@app.command()
def schedules(
    ctx: typer.Context,
    at: Annotated[Optional[str], typer.Option("--at", help="Instant to check. Defaults to now.")] = None,
    config_file: ConfigOption = None,
):
    """
    List all configured schedules and whether they are active.
    """
    try:
        config = _load_config(ctx, config_file)
        checker = ScheduleChecker.from_config(config)
        instant = _parse_instant(at, config.timezone) if at else checker.now()
    except (FileNotFoundError, ValueError, TimefilterError) as e:
        _print_error(e)
        raise typer.Exit(EXIT_ERROR)

    if not checker.schedule_names:
        console.print("[yellow]No schedules defined in the config file.[/yellow]")
        return

    active = set(checker.active_schedules(at=instant))

    table = Table(
        title=f"Schedules at {instant.to_datetime_string()}",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Name", style="bold yellow")
    table.add_column("Ranges", style="dim")
    table.add_column("Active")

    for name in checker.schedule_names:
        table.add_row(
            name,
            checker.get_schedule(name).render(),
            "[green]yes[/green]" if name in active else "no",
        )

    console.print()
    console.print(table)
    console.print()


if __name__ == "__main__":
    app()
