"""Account domain service."""

import logging
from typing import Optional

from gaurakshak.database.base import Database
from gaurakshak.domain.entities import Account as AccountEntity, AccountType
from gaurakshak.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    account_delete_blocked,
    account_not_found,
)
from gaurakshak.utils.choice_parser import parse_choice

logger = logging.getLogger(__name__)


def parse_account_type(value: str | AccountType) -> AccountType:
    return parse_choice(AccountType, value, "account type")


class AccountService:
    """Service for managing ledger accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_unique_name(self, name: str, exclude_id: Optional[int] = None) -> None:
        for acc in self.db.list_accounts():
            if acc.id != exclude_id and acc.name == name:
                logger.debug("Rejected duplicate account name %r", name)
                raise ConflictError(f"Account with name '{name}' already exists")

    def create_account(self, name: str, account_type: str | AccountType) -> int:
        """Create a new account.

        Args:
            name: Account name
            account_type: Customer, Bank or Expense

        Returns:
            Account ID

        Raises:
            ValidationError: If the name is blank or the type is unknown
            ConflictError: If account name already exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name is required")
        parsed_type = parse_account_type(account_type)
        self._check_unique_name(name)

        return self.db.create_account(name=name, account_type=parsed_type)

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def list_accounts(self, account_type: Optional[str | AccountType] = None) -> list[AccountEntity]:
        """List accounts, optionally restricted to one type.

        Returns:
            List of account entities ordered by name
        """
        if account_type is None:
            return self.db.list_accounts()
        return self.db.list_accounts(account_type=parse_account_type(account_type))

    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        account_type: Optional[str | AccountType] = None,
    ) -> None:
        """Rename an account and/or change its type.

        Raises:
            NotFoundError: If account not found
            ValidationError: If the new name is blank or the type is unknown
            ConflictError: If the new name is taken by another account
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        parsed_type = parse_account_type(account_type) if account_type is not None else None
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Account name is required")
            self._check_unique_name(name, exclude_id=account_id)

        self.db.update_account(account_id, name=name, account_type=parsed_type)
        logger.info("Updated account %s", account_id)

    def delete_account(self, account_id: int) -> None:
        """Delete an account.

        Args:
            account_id: Account ID to delete

        Raises:
            NotFoundError: If account not found
            DependencyError: If transactions are posted to the account
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        transaction_count = self.db.get_account_transaction_count(account_id)
        if transaction_count > 0:
            raise DependencyError(account_delete_blocked(account_id, transaction_count))

        self.db.delete_account(account_id)
