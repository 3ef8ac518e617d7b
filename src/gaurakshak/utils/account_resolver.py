"""Utilities for resolving account and animal references typed by users."""

from gaurakshak.database.base import Database
from gaurakshak.domain.entities import CASH_CUSTOMER_ID, CASH_CUSTOMER_NAME, AccountRef


def resolve_account(db: Database, account: str | int, allow_cash_customer: bool = False) -> AccountRef:
    """Resolve account name or ID to account ID.

    Args:
        db: Database instance
        account: Account name, or ID (int or string representation of int)
        allow_cash_customer: Accept "cash-customer" / "Cash Customer" and
            return the sentinel

    Returns:
        Account ID, or the cash-customer sentinel

    Raises:
        ValueError: If account is not found
    """
    if allow_cash_customer and str(account).strip().lower() in (
        CASH_CUSTOMER_ID,
        CASH_CUSTOMER_NAME.lower(),
    ):
        return CASH_CUSTOMER_ID

    account_id = None
    if isinstance(account, int):
        account_id = account
    elif str(account).strip().isdigit():
        account_id = int(account)

    if account_id is not None:
        if db.get_account(account_id) is None:
            raise ValueError(f"Account ID {account_id} not found")
        return account_id

    for acc in db.list_accounts():
        if acc.name == account:
            return acc.id

    raise ValueError(f"Account '{account}' not found")


def resolve_animal(db: Database, animal: str | int) -> int:
    """Resolve an animal tag number or ID to an animal ID.

    A tag number takes precedence over an ID when both could match.

    Raises:
        ValueError: If animal is not found
    """
    by_tag = db.get_animal_by_tag(str(animal).strip())
    if by_tag is not None:
        return by_tag.id

    if isinstance(animal, int) or str(animal).strip().isdigit():
        animal_id = int(animal)
        if db.get_animal(animal_id) is not None:
            return animal_id

    raise ValueError(f"Animal '{animal}' not found")
