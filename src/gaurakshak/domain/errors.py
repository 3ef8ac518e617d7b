"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class StoreError(RuntimeError):
    """The backing store rejected or failed a read or write."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def animal_not_found(animal_id: int) -> str:
    """Return message for missing animal."""
    return f"Animal {animal_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def movement_not_found(movement_id: int) -> str:
    return f"Movement {movement_id} not found"


def user_not_found(user_id: int) -> str:
    return f"User {user_id} not found"


def duplicate_tag_number(tag_no: str) -> str:
    """Return message for a tag number already present in the roster."""
    return f'An animal with Tag No "{tag_no}" already exists'


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count != 1 else ''}"


def account_delete_blocked(account_id: int, transaction_count: int) -> str:
    """Return message when account has dependent transactions."""
    return (
        f"Cannot delete account {account_id}: it has "
        f"{_plural(transaction_count, 'transaction')}. "
        "Please reassign or delete them first."
    )


def animal_delete_blocked(animal_id: int, movement_count: int, milk_record_count: int) -> str:
    """Return message when animal has dependent movements or milk records."""
    parts = []
    if movement_count > 0:
        parts.append(_plural(movement_count, "movement"))
    if milk_record_count > 0:
        parts.append(_plural(milk_record_count, "milk record"))
    return (
        f"Cannot delete animal {animal_id}: it has {', '.join(parts)}. "
        "Please delete them first."
    )
