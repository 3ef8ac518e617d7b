"""CLI helpers for date range resolution."""

from datetime import date

import click

from gaurakshak.cli.value_parsing import parse_date_or_exit
from gaurakshak.utils.date_parser import PERIODS, get_date_range


def period_options(func):
    """Add --start-date, --end-date and the period flags to a command.

    The period flags reach the command as keyword arguments named after the
    period with underscores (``this_month``, ``last_week``, ...).
    """
    for period in reversed(PERIODS):
        func = click.option(
            f"--{period}", is_flag=True, help=f"Restrict to {period.replace('-', ' ')}"
        )(func)
    func = click.option("--end-date", help="End date (YYYY-MM-DD, DD-MM-YYYY or relative like 'today')")(func)
    func = click.option(
        "--start-date", help="Start date (YYYY-MM-DD, DD-MM-YYYY or 'last month', 'this year')"
    )(func)
    return func


def period_flags_from(values: dict) -> dict[str, bool]:
    """Collect period flag values from command keyword arguments."""
    return {period: bool(values.get(period.replace("-", "_"))) for period in PERIODS}


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    period_count = sum(1 for is_set in period_flags.values() if is_set)

    if period_count > 1:
        click.echo(
            "Error: Only one period option (--this-month, --this-year, --this-week, --last-month, --last-year, --last-week) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if period_count > 0 and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --this-year, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    start = None
    end = None

    if period_count == 1:
        for period, is_set in period_flags.items():
            if is_set:
                start, end = get_date_range(period)
                break
    else:
        if start_date:
            start = parse_date_or_exit(ctx, start_date, "start date")
        if end_date:
            end = parse_date_or_exit(ctx, end_date, "end date")

        if start is None and end is None and default_range is not None:
            start, end = default_range

    if start is not None and end is not None and start > end:
        click.echo("Error: Start date must be on or before end date.", err=True)
        ctx.exit(1)

    return start, end
