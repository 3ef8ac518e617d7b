"""Account management commands."""

import click
from gaurakshak.cli.account_resolution import resolve_account_or_exit
from gaurakshak.cli.error_handling import handle_domain_error
from gaurakshak.domain.account import AccountService
from gaurakshak.domain.entities import AccountType
from gaurakshak.domain.errors import DomainError

ACCOUNT_TYPES = [t.value for t in AccountType]


@click.group()
def account_group():
    """Manage ledger accounts (customers, banks and expense heads)."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    required=True,
    help="Account type",
)
@click.pass_context
def create_account(ctx, name: str, account_type: str):
    """Create a new account.

    Examples:
        gaurakshak account create "Ramesh Dairy" --type Customer
        gaurakshak account create "SBI Current" --type Bank
        gaurakshak account create "Fodder" --type Expense
    """
    service = AccountService(ctx.obj["db"])

    try:
        account_id = service.create_account(name=name, account_type=account_type)
        click.echo(f"Created account '{name.strip()}' (ID: {account_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="Only show accounts of this type",
)
@click.pass_context
def list_accounts(ctx, account_type: str | None):
    """List accounts."""
    service = AccountService(ctx.obj["db"])

    accounts = service.list_accounts(account_type=account_type)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(f"ID: {acc.id:3d} | {acc.name:30s} | {acc.account_type.value}")


@account_group.command("rename")
@click.argument("account", metavar="ACCOUNT")
@click.argument("new_name", metavar="NEW_NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="New account type (optional)",
)
@click.pass_context
def rename_account(ctx, account: str, new_name: str, account_type: str | None) -> None:
    """Rename an account.

    ACCOUNT can be an account name or ID.

    Examples:
        gaurakshak account rename "SBI" "SBI Current"
        gaurakshak account rename 1 "Fodder & Feed" --type Expense
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, db, account)

    try:
        service.update_account(account_id, name=new_name, account_type=account_type)
        click.echo(f"Renamed account to '{new_name.strip()}'")
        if account_type is not None:
            click.echo(f"Account type updated to '{account_type}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID. Only accounts with no
    transactions can be deleted.
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, db, account)
    account_obj = service.get_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
        click.echo(f"Deleted account '{account_obj.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
