"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from gaurakshak.domain.entities import (
    Account,
    AmcRenewal,
    Animal,
    MilkRecord,
    Movement,
    SupportTicket,
    Transaction,
    User,
)


class Database(ABC):
    """Abstract database interface for gaurakshak.

    Every read returns frozen domain entities, so callers always hold an
    immutable snapshot of a collection.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str, account_type: str) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, account_type: Optional[str] = None) -> list[Account]:
        """List accounts, optionally filtered by type."""
        pass

    @abstractmethod
    def update_account(
        self, account_id: int, name: Optional[str] = None, account_type: Optional[str] = None
    ) -> None:
        """Update account name and/or type."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def get_account_transaction_count(self, account_id: int) -> int:
        """Get count of transactions posted to an account."""
        pass

    # Animal operations
    @abstractmethod
    def create_animal(self, **fields: Any) -> int:
        """Create an animal. Returns animal ID."""
        pass

    @abstractmethod
    def create_animals(self, records: list[dict[str, Any]]) -> list[int]:
        """Create several animals in one atomic write. Returns their IDs."""
        pass

    @abstractmethod
    def get_animal(self, animal_id: int) -> Optional[Animal]:
        """Get animal by ID."""
        pass

    @abstractmethod
    def get_animal_by_tag(self, govt_tag_no: str) -> Optional[Animal]:
        """Get animal by government tag number."""
        pass

    @abstractmethod
    def list_animals(self, animal_type: Optional[str] = None) -> list[Animal]:
        """List animals, optionally filtered by type."""
        pass

    @abstractmethod
    def update_animal(self, animal_id: int, **fields: Any) -> None:
        """Update the given animal fields."""
        pass

    @abstractmethod
    def delete_animal(self, animal_id: int) -> None:
        """Delete an animal."""
        pass

    @abstractmethod
    def get_animal_movement_count(self, animal_id: int) -> int:
        """Get count of movements recorded for an animal."""
        pass

    @abstractmethod
    def get_animal_milk_record_count(self, animal_id: int) -> int:
        """Get count of milk records for an animal."""
        pass

    # Movement operations
    @abstractmethod
    def create_movement(self, animal_id: int, movement_type: str, date: date, reason: str) -> int:
        """Create a movement. Returns movement ID."""
        pass

    @abstractmethod
    def get_movement(self, movement_id: int) -> Optional[Movement]:
        """Get movement by ID."""
        pass

    @abstractmethod
    def list_movements(
        self, animal_id: Optional[int] = None, movement_type: Optional[str] = None
    ) -> list[Movement]:
        """List movements in storage order, optionally filtered."""
        pass

    @abstractmethod
    def update_movement(
        self,
        movement_id: int,
        animal_id: Optional[int] = None,
        movement_type: Optional[str] = None,
        date: Optional[date] = None,
        reason: Optional[str] = None,
    ) -> None:
        """Update movement fields."""
        pass

    @abstractmethod
    def delete_movement(self, movement_id: int) -> None:
        """Delete a movement."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transactions(self, records: list[dict[str, Any]]) -> list[int]:
        """Create several transactions in one atomic write. Returns their IDs."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        record_type: Optional[str] = None,
        account_id: Optional[int] = None,
        transfer_group: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions in storage order with optional filters."""
        pass

    @abstractmethod
    def update_transaction(self, transaction_id: int, **fields: Any) -> None:
        """Update the given transaction fields."""
        pass

    @abstractmethod
    def delete_transactions(self, transaction_ids: list[int]) -> None:
        """Delete several transactions in one atomic write."""
        pass

    # Milk record operations
    @abstractmethod
    def create_milk_records(self, records: list[dict[str, Any]]) -> list[int]:
        """Create several milk records in one atomic write. Returns their IDs."""
        pass

    @abstractmethod
    def get_milk_record(self, record_id: int) -> Optional[MilkRecord]:
        """Get milk record by ID."""
        pass

    @abstractmethod
    def list_milk_records(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[MilkRecord]:
        """List milk records ordered by date."""
        pass

    @abstractmethod
    def update_milk_record(self, record_id: int, quantity: Decimal) -> None:
        """Update the quantity of a milk record."""
        pass

    @abstractmethod
    def delete_milk_record(self, record_id: int) -> None:
        """Delete a milk record."""
        pass

    # User operations
    @abstractmethod
    def create_user(self, **fields: Any) -> int:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email address."""
        pass

    @abstractmethod
    def list_users(self, status: Optional[str] = None) -> list[User]:
        """List users, optionally filtered by status."""
        pass

    @abstractmethod
    def update_user(self, user_id: int, **fields: Any) -> None:
        """Update the given user fields."""
        pass

    # AMC renewal operations
    @abstractmethod
    def create_renewal(self, **fields: Any) -> int:
        """Create a renewal request. Returns renewal ID."""
        pass

    @abstractmethod
    def get_renewal(self, renewal_id: int) -> Optional[AmcRenewal]:
        """Get renewal request by ID."""
        pass

    @abstractmethod
    def list_renewals(
        self, status: Optional[str] = None, user_id: Optional[int] = None
    ) -> list[AmcRenewal]:
        """List renewal requests, optionally filtered."""
        pass

    @abstractmethod
    def approve_renewal(self, renewal_id: int, validity_date: date) -> None:
        """Mark a renewal approved and reactivate its user in one atomic write."""
        pass

    # Support ticket operations
    @abstractmethod
    def create_support_ticket(self, **fields: Any) -> int:
        """Create a support ticket. Returns ticket ID."""
        pass

    @abstractmethod
    def get_support_ticket(self, ticket_id: int) -> Optional[SupportTicket]:
        """Get support ticket by ID."""
        pass

    @abstractmethod
    def list_support_tickets(
        self, status: Optional[str] = None, user_id: Optional[int] = None
    ) -> list[SupportTicket]:
        """List support tickets, newest first, optionally filtered."""
        pass

    @abstractmethod
    def update_support_ticket(self, ticket_id: int, **fields: Any) -> None:
        """Update the given support ticket fields."""
        pass
