"""Herd population report commands."""

import click
from gaurakshak.cli.date_filters import period_flags_from, period_options, resolve_cli_date_range
from gaurakshak.cli.output import echo_table
from gaurakshak.domain.population import ALL_TYPES, PopulationService
from gaurakshak.reporting.export import (
    cross_tab_table,
    daily_summary_table,
    detailed_report_table,
    format_date,
    write_csv,
)
from gaurakshak.utils.date_parser import last_n_days

DEFAULT_WINDOW_DAYS = 7


def _emit(headers, rows, csv_path: str | None) -> None:
    echo_table(headers, rows)
    if csv_path:
        write_csv(csv_path, headers, rows)
        click.echo(f"Wrote {csv_path}")


@click.group()
def report_group():
    """Herd population reports built from the movement log."""
    pass


@report_group.command("types")
@click.pass_context
def list_types(ctx):
    """List the animal types that can be used with --type."""
    click.echo(ALL_TYPES)
    for animal_type in PopulationService(ctx.obj["db"]).list_animal_types():
        click.echo(animal_type)


@report_group.command("daily")
@period_options
@click.option("--type", "animal_type", default=ALL_TYPES, show_default=True, help="Animal type")
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False), help="Also write the report to a CSV file")
@click.pass_context
def daily_report(
    ctx, start_date: str | None, end_date: str | None, animal_type: str, csv_path: str | None, **periods
):
    """Daily opening, in, out and closing headcounts by gender and age.

    Defaults to the last 7 days. Each day's closing is the next day's
    opening.

    Examples:
        gaurakshak report daily --start-date 2024-01-01 --end-date 2024-01-31 --type Cow
    """
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(periods),
        default_range=last_n_days(DEFAULT_WINDOW_DAYS),
    )
    rows = PopulationService(ctx.obj["db"]).daily_summary(start, end, animal_type=animal_type)
    if not rows:
        click.echo("No summary data available for the selected range.")
        return

    headers, body = daily_summary_table(rows)
    _emit(headers, body, csv_path)


@report_group.command("crosstab")
@period_options
@click.option("--type", "animal_type", default=ALL_TYPES, show_default=True, help="Animal type")
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False), help="Also write the report to a CSV file")
@click.pass_context
def crosstab_report(
    ctx, start_date: str | None, end_date: str | None, animal_type: str, csv_path: str | None, **periods
):
    """Gender by age-cohort summary over the whole range.

    Defaults to the last 7 days.
    """
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(periods),
        default_range=last_n_days(DEFAULT_WINDOW_DAYS),
    )
    report = PopulationService(ctx.obj["db"]).cross_tab_summary(start, end, animal_type=animal_type)
    if report is None:
        click.echo("No summary data available for the selected range.")
        return

    click.echo(f"Summary from {format_date(report.start)} to {format_date(report.end)}")
    headers, body = cross_tab_table(report)
    _emit(headers, body, csv_path)


@report_group.command("detailed")
@click.option("--year", "as_of_year", type=int, help="Compute ages as of this year (defaults to this year)")
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False), help="Also write the report to a CSV file")
@click.pass_context
def detailed_report(ctx, as_of_year: int | None, csv_path: str | None):
    """Check-in and check-out roster of every animal with movements."""
    rows = PopulationService(ctx.obj["db"]).detailed_report(as_of_year=as_of_year)
    if not rows:
        click.echo("No animals with movements found.")
        return

    headers, body = detailed_report_table(rows)
    _emit(headers, body, csv_path)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
