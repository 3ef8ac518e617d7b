"""Account ledger command."""

import click
from gaurakshak.cli.account_resolution import resolve_account_or_exit
from gaurakshak.cli.date_filters import period_flags_from, period_options, resolve_cli_date_range
from gaurakshak.cli.error_handling import handle_domain_error
from gaurakshak.cli.output import echo_table
from gaurakshak.domain.errors import DomainError
from gaurakshak.domain.ledger import LedgerService
from gaurakshak.reporting.export import ledger_table, write_csv


@click.command("ledger")
@click.argument("account", metavar="ACCOUNT")
@period_options
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False), help="Also write the ledger to a CSV file")
@click.pass_context
def show_ledger(
    ctx, account: str, start_date: str | None, end_date: str | None, csv_path: str | None, **periods
):
    """Show the running-balance ledger of ACCOUNT.

    ACCOUNT can be an account name or ID, or "cash-customer" for
    walk-in milk sales. With a start date the ledger opens with the
    balance carried forward from earlier transactions.

    Examples:
        gaurakshak ledger "Ramesh Dairy" --this-month
        gaurakshak ledger cash-customer --start-date 2024-01-01 --csv ledger.csv
    """
    db = ctx.obj["db"]
    account_ref = resolve_account_or_exit(ctx, db, account, allow_cash_customer=True)
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags_from(periods)
    )

    try:
        report = LedgerService(db).get_ledger(account_ref, start_date=start, end_date=end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not report.rows and not report.show_opening:
        click.echo("No transactions found for this account.")
        return

    headers, rows = ledger_table(report)
    echo_table(headers, rows)
    if csv_path:
        write_csv(csv_path, headers, rows)
        click.echo(f"Wrote {csv_path}")


def register_commands(cli):
    """Register ledger command with main CLI."""
    cli.add_command(show_ledger)
