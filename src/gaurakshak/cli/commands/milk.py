"""Milk production and milk sale commands."""

import click
from gaurakshak.cli.account_resolution import resolve_account_or_exit, resolve_animal_or_exit
from gaurakshak.cli.date_filters import period_flags_from, period_options, resolve_cli_date_range
from gaurakshak.cli.error_handling import handle_domain_error
from gaurakshak.cli.output import echo_table
from gaurakshak.cli.value_parsing import parse_amount_or_exit, parse_date_or_exit
from gaurakshak.domain.entities import MilkSession
from gaurakshak.domain.errors import DomainError
from gaurakshak.domain.milk import MilkService
from gaurakshak.domain.transaction import TransactionService
from gaurakshak.reporting.export import format_date, format_money

SESSIONS = [s.value for s in MilkSession]


@click.group()
def milk_group():
    """Record milk production and milk sales."""
    pass


@milk_group.command("produce")
@click.argument("entries", nargs=-1, required=True, metavar="ANIMAL=LITRES...")
@click.option("--session", type=click.Choice(SESSIONS, case_sensitive=False), required=True)
@click.option("--date", "production_date", default="today", show_default=True, help="Milking date")
@click.pass_context
def record_production(ctx, entries: tuple[str, ...], session: str, production_date: str):
    """Record one milking session for several animals.

    Each entry is an animal tag number (or ID) and the litres it gave.

    Examples:
        gaurakshak milk produce --session Morning IN-1001=6.5 IN-1002=4
    """
    db = ctx.obj["db"]
    day = parse_date_or_exit(ctx, production_date)

    pairs = []
    for entry in entries:
        animal, sep, litres = entry.rpartition("=")
        if not sep or not animal:
            click.echo(f"Error: Expected ANIMAL=LITRES, got '{entry}'", err=True)
            ctx.exit(1)
        animal_id = resolve_animal_or_exit(ctx, db, animal)
        pairs.append((animal_id, parse_amount_or_exit(ctx, litres, "quantity")))

    try:
        ids = MilkService(db).record_production(day, session, pairs)
        click.echo(f"Recorded {len(ids)} milk record(s) for the {session} session of {day}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@milk_group.command("list")
@period_options
@click.pass_context
def list_records(ctx, start_date: str | None, end_date: str | None, **periods):
    """List individual milk records."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags_from(periods)
    )
    records = MilkService(ctx.obj["db"]).list_records(start, end)
    if not records:
        click.echo("No milk records found.")
        return

    rows = [
        [str(r.id), format_date(r.date), r.session.value, r.animal_tag, format_money(r.quantity)]
        for r in records
    ]
    echo_table(["ID", "Date", "Session", "Tag No", "Litres"], rows)


@milk_group.command("totals")
@period_options
@click.pass_context
def daily_totals(ctx, start_date: str | None, end_date: str | None, **periods):
    """Show morning, evening and total litres per day, newest first."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags_from(periods)
    )
    totals = MilkService(ctx.obj["db"]).get_daily_totals(start, end)
    if not totals:
        click.echo("No milk records found.")
        return

    rows = [
        [format_date(t.date), format_money(t.morning), format_money(t.evening), format_money(t.total)]
        for t in totals
    ]
    echo_table(["Date", "Morning", "Evening", "Total"], rows)


@milk_group.command("update")
@click.argument("record_id", type=int)
@click.argument("litres")
@click.pass_context
def update_record(ctx, record_id: int, litres: str):
    """Correct the litres of a milk record."""
    quantity = parse_amount_or_exit(ctx, litres, "quantity")

    try:
        MilkService(ctx.obj["db"]).update_quantity(record_id, quantity)
        click.echo(f"Updated milk record {record_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@milk_group.command("delete")
@click.argument("record_id", type=int)
@click.pass_context
def delete_record(ctx, record_id: int):
    """Delete a milk record."""
    try:
        MilkService(ctx.obj["db"]).delete_record(record_id)
        click.echo(f"Deleted milk record {record_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@milk_group.command("sale")
@click.argument("customer", metavar="CUSTOMER")
@click.option("--quantity", help="Litres sold")
@click.option("--rate", help="Price per litre")
@click.option("--amount", help="Total amount (defaults to quantity x rate)")
@click.option("--invoice", "invoice_no", help="Invoice number (defaults to the next free number)")
@click.option("--date", "sale_date", default="today", show_default=True, help="Sale date")
@click.pass_context
def record_sale(
    ctx,
    customer: str,
    quantity: str | None,
    rate: str | None,
    amount: str | None,
    invoice_no: str | None,
    sale_date: str,
):
    """Record a milk sale to CUSTOMER.

    CUSTOMER is a customer account name or ID, or "cash-customer" for
    walk-in sales.

    Examples:
        gaurakshak milk sale "Ramesh Dairy" --quantity 10 --rate 60
        gaurakshak milk sale cash-customer --amount 120
    """
    db = ctx.obj["db"]
    customer_ref = resolve_account_or_exit(ctx, db, customer, allow_cash_customer=True)
    day = parse_date_or_exit(ctx, sale_date)
    qty = parse_amount_or_exit(ctx, quantity, "quantity") if quantity else None
    price = parse_amount_or_exit(ctx, rate, "rate") if rate else None
    total = parse_amount_or_exit(ctx, amount) if amount else None

    service = TransactionService(db)
    try:
        txn_id = service.record_milk_sale(
            customer_ref, day, quantity=qty, rate=price, amount=total, invoice_no=invoice_no
        )
        txn = service.get_transaction(txn_id)
        click.echo(
            f"Recorded milk sale Inv# {txn.milk_sale.invoice_no} of {txn.amount:.2f} (ID: {txn_id})"
        )
    except DomainError as e:
        handle_domain_error(ctx, e)


@milk_group.command("sale-update")
@click.argument("transaction_id", type=int)
@click.argument("customer", metavar="CUSTOMER")
@click.option("--quantity", help="Litres sold")
@click.option("--rate", help="Price per litre")
@click.option("--amount", help="Total amount (defaults to quantity x rate)")
@click.option("--invoice", "invoice_no", help="Invoice number (keeps the current one if omitted)")
@click.option("--date", "sale_date", default="today", show_default=True, help="Sale date")
@click.pass_context
def update_sale(
    ctx,
    transaction_id: int,
    customer: str,
    quantity: str | None,
    rate: str | None,
    amount: str | None,
    invoice_no: str | None,
    sale_date: str,
):
    """Replace the details of a recorded milk sale."""
    db = ctx.obj["db"]
    customer_ref = resolve_account_or_exit(ctx, db, customer, allow_cash_customer=True)
    day = parse_date_or_exit(ctx, sale_date)
    qty = parse_amount_or_exit(ctx, quantity, "quantity") if quantity else None
    price = parse_amount_or_exit(ctx, rate, "rate") if rate else None
    total = parse_amount_or_exit(ctx, amount) if amount else None

    try:
        TransactionService(db).update_milk_sale(
            transaction_id, customer_ref, day, quantity=qty, rate=price, amount=total, invoice_no=invoice_no
        )
        click.echo(f"Updated milk sale {transaction_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register milk commands with main CLI."""
    cli.add_command(milk_group, name="milk")
