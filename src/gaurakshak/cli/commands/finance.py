"""Financial record commands."""

import click
from gaurakshak.cli.account_resolution import resolve_account_or_exit
from gaurakshak.cli.date_filters import period_flags_from, period_options, resolve_cli_date_range
from gaurakshak.cli.error_handling import handle_domain_error
from gaurakshak.cli.value_parsing import parse_amount_or_exit, parse_date_or_exit
from gaurakshak.domain.entities import RecordType
from gaurakshak.domain.errors import DomainError
from gaurakshak.domain.transaction import TransactionService

RECORD_TYPES = [t.value for t in RecordType]


@click.group()
def finance_group():
    """Record receipts, payments, expenses and bank transfers."""
    pass


@finance_group.command("receipt")
@click.argument("account", metavar="ACCOUNT")
@click.argument("amount")
@click.option("--date", "txn_date", default="today", show_default=True, help="Transaction date")
@click.option("--description", default="", help="Description")
@click.pass_context
def record_receipt(ctx, account: str, amount: str, txn_date: str, description: str):
    """Record money received into ACCOUNT."""
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, db, account)
    value = parse_amount_or_exit(ctx, amount)
    day = parse_date_or_exit(ctx, txn_date)

    try:
        txn_id = TransactionService(db).record_receipt(account_id, day, value, description)
        click.echo(f"Recorded receipt of {value:.2f} (ID: {txn_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@finance_group.command("payment")
@click.argument("account", metavar="ACCOUNT")
@click.argument("amount")
@click.option("--date", "txn_date", default="today", show_default=True, help="Transaction date")
@click.option("--description", default="", help="Description")
@click.pass_context
def record_payment(ctx, account: str, amount: str, txn_date: str, description: str):
    """Record money paid from ACCOUNT."""
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, db, account)
    value = parse_amount_or_exit(ctx, amount)
    day = parse_date_or_exit(ctx, txn_date)

    try:
        txn_id = TransactionService(db).record_payment(account_id, day, value, description)
        click.echo(f"Recorded payment of {value:.2f} (ID: {txn_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@finance_group.command("expense")
@click.argument("amount")
@click.option("--account", help="Account charged with the expense (name or ID)")
@click.option("--category", help="Expense category label")
@click.option("--date", "txn_date", default="today", show_default=True, help="Transaction date")
@click.option("--description", default="", help="Description")
@click.pass_context
def record_expense(
    ctx, amount: str, account: str | None, category: str | None, txn_date: str, description: str
):
    """Record an expense."""
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, db, account) if account else None
    value = parse_amount_or_exit(ctx, amount)
    day = parse_date_or_exit(ctx, txn_date)

    try:
        txn_id = TransactionService(db).record_expense(
            day, value, description=description, account_id=account_id, category=category
        )
        click.echo(f"Recorded expense of {value:.2f} (ID: {txn_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@finance_group.command("transfer")
@click.argument("from_account", metavar="FROM_ACCOUNT")
@click.argument("to_account", metavar="TO_ACCOUNT")
@click.argument("amount")
@click.option("--date", "txn_date", default="today", show_default=True, help="Transfer date")
@click.option("--description", default="", help="Description")
@click.pass_context
def record_transfer(
    ctx, from_account: str, to_account: str, amount: str, txn_date: str, description: str
):
    """Transfer AMOUNT from FROM_ACCOUNT to TO_ACCOUNT.

    Records a payment on the source and a receipt on the destination.

    Examples:
        gaurakshak finance transfer "SBI Current" "Cash" 5000 --description "Petty cash"
    """
    db = ctx.obj["db"]
    source_id = resolve_account_or_exit(ctx, db, from_account)
    destination_id = resolve_account_or_exit(ctx, db, to_account)
    value = parse_amount_or_exit(ctx, amount)
    day = parse_date_or_exit(ctx, txn_date)

    try:
        payment_id, receipt_id = TransactionService(db).record_transfer(
            source_id, destination_id, day, value, description
        )
        click.echo(f"Recorded transfer of {value:.2f} (IDs: {payment_id}, {receipt_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@finance_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--type", "record_type", type=click.Choice(["Receipt", "Payment", "Expense"], case_sensitive=False))
@click.option("--account", help="Account name or ID")
@click.option("--date", "txn_date", help="Transaction date")
@click.option("--amount", help="Amount")
@click.option("--description", help="Description")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    record_type: str | None,
    account: str | None,
    txn_date: str | None,
    amount: str | None,
    description: str | None,
):
    """Update a receipt, payment or expense.

    Bank transfers and milk sales cannot be edited here.
    """
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, db, account) if account else None
    value = parse_amount_or_exit(ctx, amount) if amount else None
    day = parse_date_or_exit(ctx, txn_date) if txn_date else None

    try:
        TransactionService(db).update_transaction(
            transaction_id,
            record_type=record_type,
            account_id=account_id,
            txn_date=day,
            amount=value,
            description=description,
        )
        click.echo("Transaction updated successfully.")
    except DomainError as e:
        handle_domain_error(ctx, e)


@finance_group.command("list")
@period_options
@click.option("--type", "record_type", type=click.Choice(RECORD_TYPES, case_sensitive=False))
@click.option("--account", help="Account name or ID")
@click.option("--totals", is_flag=True, help="Show totals per record type")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    record_type: str | None,
    account: str | None,
    totals: bool,
    **periods,
):
    """List financial records."""
    db = ctx.obj["db"]
    service = TransactionService(db)
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags_from(periods)
    )
    account_id = resolve_account_or_exit(ctx, db, account) if account else None

    transactions = service.list_transactions(
        start_date=start, end_date=end, record_type=record_type, account_id=account_id
    )
    if not transactions:
        click.echo("No transactions found.")
    else:
        names = {acc.id: acc.name for acc in db.list_accounts()}
        click.echo(f"\nFound {len(transactions)} transaction(s):")
        click.echo("-" * 100)
        click.echo(f"{'ID':<6} {'Date':<12} {'Type':<10} {'Amount':>12}  {'Account':<20} {'Description'}")
        click.echo("-" * 100)
        for txn in transactions:
            label = names.get(txn.account_id, txn.category or "")
            click.echo(
                f"{txn.id:<6} {str(txn.date):<12} {txn.record_type.value:<10} {txn.amount:>12.2f}  "
                f"{label[:20]:<20} {txn.description}"
            )

    if totals:
        click.echo("\nTotals:")
        for kind, total in service.get_totals(start_date=start, end_date=end).items():
            click.echo(f"  {kind.value:<10} {total:>12.2f}")


@finance_group.command("delete")
@click.argument("transaction_id", type=int)
@click.pass_context
def delete_transaction(ctx, transaction_id: int):
    """Delete a transaction.

    Deleting either side of a bank transfer removes both sides.
    """
    service = TransactionService(ctx.obj["db"])

    try:
        deleted = service.delete_transaction(transaction_id)
        click.echo(f"Deleted transaction(s) {', '.join(str(i) for i in deleted)}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register finance commands with main CLI."""
    cli.add_command(finance_group, name="finance")
