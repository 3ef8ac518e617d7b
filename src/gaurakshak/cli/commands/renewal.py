"""AMC renewal commands."""

import click
from gaurakshak.cli.error_handling import handle_domain_error
from gaurakshak.cli.output import echo_table
from gaurakshak.cli.value_parsing import parse_amount_or_exit, parse_date_or_exit
from gaurakshak.domain.entities import PaymentMode, RenewalStatus
from gaurakshak.domain.errors import DomainError
from gaurakshak.domain.renewal import RenewalService
from gaurakshak.reporting.export import format_date, format_money

PAYMENT_MODES = [m.value for m in PaymentMode]
RENEWAL_STATUSES = [s.value for s in RenewalStatus]


@click.group()
def renewal_group():
    """Submit and approve annual maintenance (AMC) renewals."""
    pass


@renewal_group.command("submit")
@click.argument("user_id", type=int)
@click.argument("amount")
@click.option("--mode", "payment_mode", type=click.Choice(PAYMENT_MODES, case_sensitive=False), required=True)
@click.option("--date", "payment_date", default="today", show_default=True, help="Payment date")
@click.pass_context
def submit_renewal(ctx, user_id: int, amount: str, payment_mode: str, payment_date: str):
    """Submit a renewal payment for approval."""
    value = parse_amount_or_exit(ctx, amount)
    day = parse_date_or_exit(ctx, payment_date)

    try:
        renewal_id = RenewalService(ctx.obj["db"]).submit_renewal(user_id, value, day, payment_mode)
        click.echo(f"Submitted renewal {renewal_id} for approval")
    except DomainError as e:
        handle_domain_error(ctx, e)


@renewal_group.command("list")
@click.option("--status", type=click.Choice(RENEWAL_STATUSES, case_sensitive=False))
@click.pass_context
def list_renewals(ctx, status: str | None):
    """List renewal requests, most recent first."""
    renewals = RenewalService(ctx.obj["db"]).list_renewals(status=status)
    if not renewals:
        click.echo("No renewal requests found.")
        return

    rows = [
        [
            str(r.id),
            r.customer_id or "",
            r.user_name,
            format_date(r.date),
            format_money(r.amount),
            r.payment_mode.value,
            r.status.value,
        ]
        for r in renewals
    ]
    echo_table(["ID", "Customer ID", "Name", "Date", "Amount", "Mode", "Status"], rows)


@renewal_group.command("approve")
@click.argument("renewal_id", type=int)
@click.option("--valid-until", "validity_date", required=True, help="New last day of access")
@click.pass_context
def approve_renewal(ctx, renewal_id: int, validity_date: str):
    """Approve a renewal and extend the user's validity."""
    day = parse_date_or_exit(ctx, validity_date, "validity date")

    try:
        RenewalService(ctx.obj["db"]).approve_renewal(renewal_id, day)
        click.echo(f"Approved renewal {renewal_id}, valid until {format_date(day)}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register AMC renewal commands with main CLI."""
    cli.add_command(renewal_group, name="amc")
