"""Support ticket commands."""

import click
from gaurakshak.cli.error_handling import handle_domain_error
from gaurakshak.cli.output import echo_table
from gaurakshak.domain.entities import TicketStatus
from gaurakshak.domain.errors import DomainError
from gaurakshak.domain.support import CLOSED_TICKET_RETENTION_DAYS, SupportService
from gaurakshak.reporting.export import format_date

TICKET_STATUSES = [s.value for s in TicketStatus]


@click.group()
def support_group():
    """Raise and resolve support tickets."""
    pass


@support_group.command("submit")
@click.argument("user_id", type=int)
@click.argument("subject")
@click.option("--description", "-d", required=True, help="What the user needs help with")
@click.pass_context
def submit_ticket(ctx, user_id: int, subject: str, description: str):
    """Open a support ticket for a user."""
    try:
        ticket_id = SupportService(ctx.obj["db"]).submit_ticket(user_id, subject, description)
        click.echo(f"Opened support ticket {ticket_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@support_group.command("list")
@click.option("--user", "user_id", type=int, help="Only this user's tickets")
@click.option("--status", type=click.Choice(TICKET_STATUSES, case_sensitive=False))
@click.option("--search", help="Match name, email, subject or customer ID")
@click.option(
    "--all",
    "show_all",
    is_flag=True,
    help=f"Include tickets closed more than {CLOSED_TICKET_RETENTION_DAYS} days ago",
)
@click.pass_context
def list_tickets(ctx, user_id: int | None, status: str | None, search: str | None, show_all: bool):
    """List support tickets, most recent first."""
    try:
        tickets = SupportService(ctx.obj["db"]).list_tickets(
            user_id=user_id,
            status=status,
            search=search,
            closed_within_days=None if show_all else CLOSED_TICKET_RETENTION_DAYS,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not tickets:
        click.echo("No support tickets found.")
        return

    rows = [
        [
            str(t.id),
            t.customer_id or "",
            t.user_name,
            t.subject,
            t.status.value,
            format_date(t.submitted_at),
            format_date(t.closed_at),
        ]
        for t in tickets
    ]
    echo_table(["ID", "Customer ID", "Name", "Subject", "Status", "Submitted", "Closed"], rows)


def _set_status(ctx, ticket_id: int, status: TicketStatus) -> None:
    try:
        SupportService(ctx.obj["db"]).set_status(ticket_id, status)
        click.echo(f"Marked ticket {ticket_id} as {status.value}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@support_group.command("close")
@click.argument("ticket_id", type=int)
@click.pass_context
def close_ticket(ctx, ticket_id: int):
    """Mark a ticket resolved."""
    _set_status(ctx, ticket_id, TicketStatus.CLOSED)


@support_group.command("reopen")
@click.argument("ticket_id", type=int)
@click.pass_context
def reopen_ticket(ctx, ticket_id: int):
    """Reopen a closed ticket."""
    _set_status(ctx, ticket_id, TicketStatus.OPEN)


def register_commands(cli):
    """Register support ticket commands with main CLI."""
    cli.add_command(support_group, name="support")
