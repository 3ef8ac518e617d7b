"""CLI helpers for account and animal resolution."""

from __future__ import annotations

import click
from gaurakshak.database.base import Database
from gaurakshak.domain.entities import AccountRef
from gaurakshak.utils.account_resolver import resolve_account, resolve_animal


def resolve_account_or_exit(
    ctx: click.Context, db: Database, account: str | int, allow_cash_customer: bool = False
) -> AccountRef:
    """Resolve account name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(db, account, allow_cash_customer=allow_cash_customer)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_animal_or_exit(ctx: click.Context, db: Database, animal: str | int) -> int:
    """Resolve animal tag number or ID, or exit with a CLI error."""
    try:
        return resolve_animal(db, animal)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
