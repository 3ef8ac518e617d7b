"""User account commands."""

import click
from gaurakshak.cli.error_handling import handle_domain_error
from gaurakshak.cli.output import echo_table
from gaurakshak.cli.value_parsing import parse_date_or_exit
from gaurakshak.domain.entities import UserStatus
from gaurakshak.domain.errors import DomainError
from gaurakshak.domain.user import UserService
from gaurakshak.reporting.export import format_date

USER_STATUSES = [s.value for s in UserStatus]


@click.group()
def user_group():
    """Manage user sign-ups and access validity."""
    pass


@user_group.command("signup")
@click.argument("name")
@click.argument("email")
@click.option("--address", help="Postal address")
@click.option("--mobile", "mobile_no", help="Mobile number")
@click.pass_context
def sign_up(ctx, name: str, email: str, address: str | None, mobile_no: str | None):
    """Sign up a new user.

    The first user becomes the administrator; later users wait for approval.
    """
    service = UserService(ctx.obj["db"])

    try:
        user_id = service.sign_up(name, email, address=address, mobile_no=mobile_no)
        user = service.get_user(user_id)
        click.echo(f"Signed up {user.email} as {user.role.value} (ID: {user_id}, status: {user.status.value})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@user_group.command("list")
@click.option("--status", type=click.Choice(USER_STATUSES, case_sensitive=False))
@click.pass_context
def list_users(ctx, status: str | None):
    """List users."""
    users = UserService(ctx.obj["db"]).list_users(status=status)
    if not users:
        click.echo("No users found.")
        return

    rows = [
        [
            str(u.id),
            u.customer_id or "",
            u.name,
            u.email,
            u.role.value,
            u.status.value,
            format_date(u.validity_date),
        ]
        for u in users
    ]
    echo_table(["ID", "Customer ID", "Name", "Email", "Role", "Status", "Valid Until"], rows)


@user_group.command("approve")
@click.argument("user_id", type=int)
@click.option("--valid-until", "validity_date", required=True, help="Last day of access")
@click.pass_context
def approve_user(ctx, user_id: int, validity_date: str):
    """Approve a pending user and assign a customer ID."""
    day = parse_date_or_exit(ctx, validity_date, "validity date")

    try:
        customer_id = UserService(ctx.obj["db"]).approve_user(user_id, day)
        click.echo(f"Approved user {user_id} as {customer_id}, valid until {format_date(day)}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@user_group.command("deactivate")
@click.argument("user_id", type=int)
@click.pass_context
def deactivate_user(ctx, user_id: int):
    """Mark a user inactive."""
    try:
        UserService(ctx.obj["db"]).deactivate_user(user_id)
        click.echo(f"Deactivated user {user_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@user_group.command("expire")
@click.option("--as-of", "as_of", default="today", show_default=True, help="Expire validity dates before this day")
@click.pass_context
def expire_users(ctx, as_of: str):
    """Mark active users whose validity has passed as expired."""
    day = parse_date_or_exit(ctx, as_of)
    expired = UserService(ctx.obj["db"]).expire_users(today=day)
    click.echo(f"Expired {len(expired)} user(s)")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
