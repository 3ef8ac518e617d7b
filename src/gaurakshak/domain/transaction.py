"""Financial record domain service."""

import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from gaurakshak.database.base import Database
from gaurakshak.domain.entities import (
    CASH_CUSTOMER_ID,
    CASH_CUSTOMER_NAME,
    MILK_SALE_CATEGORY,
    TRANSFER_CATEGORY,
    AccountRef,
    RecordType,
    Transaction as TransactionEntity,
)
from gaurakshak.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    transaction_not_found,
)
from gaurakshak.utils.choice_parser import parse_choice

logger = logging.getLogger(__name__)


def _require_positive(amount: Optional[Decimal], label: str = "Amount") -> Decimal:
    if amount is None:
        raise ValidationError(f"{label} is required")
    amount = Decimal(amount)
    if not amount.is_finite() or amount <= 0:
        logger.debug("Rejected non-positive %s %s", label.lower(), amount)
        raise ValidationError(f"{label} must be greater than zero")
    return amount


class TransactionService:
    """Service for recording receipts, payments, expenses, transfers and milk sales."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require_account(self, account_id: Optional[int]):
        if account_id is None:
            raise ValidationError("An account must be selected.")
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def _create_one(self, **fields: Any) -> int:
        [transaction_id] = self.db.create_transactions([fields])
        return transaction_id

    def record_receipt(
        self, account_id: int, txn_date: date, amount: Decimal, description: str = ""
    ) -> int:
        """Record money received into an account.

        The record's category is the account's type.

        Returns:
            Transaction ID

        Raises:
            ValidationError: If no account is given or amount is not positive
            NotFoundError: If account not found
        """
        return self._record_single(RecordType.RECEIPT, account_id, txn_date, amount, description)

    def record_payment(
        self, account_id: int, txn_date: date, amount: Decimal, description: str = ""
    ) -> int:
        """Record money paid out of an account.

        Returns:
            Transaction ID

        Raises:
            ValidationError: If no account is given or amount is not positive
            NotFoundError: If account not found
        """
        return self._record_single(RecordType.PAYMENT, account_id, txn_date, amount, description)

    def _record_single(
        self,
        record_type: RecordType,
        account_id: Optional[int],
        txn_date: date,
        amount: Decimal,
        description: str,
    ) -> int:
        account = self._require_account(account_id)
        amount = _require_positive(amount)
        transaction_id = self._create_one(
            date=txn_date,
            record_type=record_type,
            account_id=account.id,
            amount=amount,
            description=(description or "").strip(),
            category=account.account_type.value,
        )
        logger.info("Recorded %s of %s on account %s", record_type.value.lower(), amount, account.id)
        return transaction_id

    def record_expense(
        self,
        txn_date: date,
        amount: Decimal,
        description: str = "",
        account_id: Optional[int] = None,
        category: Optional[str] = None,
    ) -> int:
        """Record an expense, optionally charged to an account.

        Args:
            txn_date: Expense date
            amount: Positive amount
            description: Free text
            account_id: Optional account charged with the expense
            category: Optional label; defaults to the account's type

        Returns:
            Transaction ID
        """
        amount = _require_positive(amount)
        if account_id is not None:
            account = self._require_account(account_id)
            if category is None:
                category = account.account_type.value
        transaction_id = self._create_one(
            date=txn_date,
            record_type=RecordType.EXPENSE,
            account_id=account_id,
            amount=amount,
            description=(description or "").strip(),
            category=category,
        )
        logger.info("Recorded expense of %s", amount)
        return transaction_id

    def record_transfer(
        self,
        from_account_id: int,
        to_account_id: int,
        txn_date: date,
        amount: Decimal,
        description: str = "",
    ) -> tuple[int, int]:
        """Move money between two accounts.

        Writes a Payment on the source and a Receipt on the destination with
        the same date and amount, sharing one transfer group key, in a single
        atomic write.

        Args:
            from_account_id: Account paying out
            to_account_id: Account receiving
            txn_date: Transfer date
            amount: Positive amount
            description: Appended to both leg descriptions

        Returns:
            Tuple of (payment ID, receipt ID)

        Raises:
            ValidationError: If an account is missing, both are the same, or
                amount is not positive
            NotFoundError: If either account does not exist
        """
        if from_account_id is None or to_account_id is None:
            raise ValidationError('Both "From" and "To" accounts are required for a transfer.')
        if from_account_id == to_account_id:
            raise ValidationError("Cannot transfer to the same account")
        source = self._require_account(from_account_id)
        destination = self._require_account(to_account_id)
        amount = _require_positive(amount)
        description = (description or "").strip()
        group = uuid.uuid4().hex

        payment_id, receipt_id = self.db.create_transactions(
            [
                {
                    "date": txn_date,
                    "record_type": RecordType.PAYMENT,
                    "account_id": source.id,
                    "amount": amount,
                    "description": f"Transfer to {destination.name}: {description}",
                    "category": TRANSFER_CATEGORY,
                    "transfer_group": group,
                },
                {
                    "date": txn_date,
                    "record_type": RecordType.RECEIPT,
                    "account_id": destination.id,
                    "amount": amount,
                    "description": f"Transfer from {source.name}: {description}",
                    "category": TRANSFER_CATEGORY,
                    "transfer_group": group,
                },
            ]
        )
        logger.info("Recorded transfer of %s from %s to %s", amount, source.id, destination.id)
        return payment_id, receipt_id

    def _milk_sale_fields(
        self,
        customer: AccountRef,
        txn_date: date,
        quantity: Optional[Decimal],
        rate: Optional[Decimal],
        amount: Optional[Decimal],
        invoice_no: Optional[str],
    ) -> dict[str, Any]:
        if customer is None or customer == "":
            raise ValidationError("Customer, amount, and date are required.")
        if txn_date is None:
            raise ValidationError("Customer, amount, and date are required.")
        if amount is None and quantity is not None and rate is not None:
            amount = Decimal(quantity) * Decimal(rate)
        if amount is None:
            raise ValidationError("Customer, amount, and date are required.")
        amount = _require_positive(amount)
        for label, value in (("Quantity", quantity), ("Rate", rate)):
            if value is not None and Decimal(value) < 0:
                raise ValidationError(f"{label} cannot be negative")

        if customer == CASH_CUSTOMER_ID:
            customer_name = CASH_CUSTOMER_NAME
            account_id = None
            record_type = RecordType.RECEIPT
        else:
            try:
                customer_id = int(customer)
            except (TypeError, ValueError):
                raise ValidationError(f"Invalid customer: {customer!r}")
            account = self._require_account(customer_id)
            customer_name = account.name
            account_id = account.id
            record_type = RecordType.MILK_SALE

        return {
            "date": txn_date,
            "record_type": record_type,
            "account_id": account_id,
            "amount": amount,
            "description": f"Milk sale to {customer_name}",
            "category": MILK_SALE_CATEGORY,
            "customer_name": customer_name,
            "quantity": quantity,
            "rate": rate,
            "invoice_no": invoice_no or None,
        }

    def record_milk_sale(
        self,
        customer: AccountRef,
        txn_date: date,
        quantity: Optional[Decimal] = None,
        rate: Optional[Decimal] = None,
        amount: Optional[Decimal] = None,
        invoice_no: Optional[str] = None,
    ) -> int:
        """Record a milk sale.

        A sale to the cash customer is stored as a Receipt without an account;
        a sale to a customer account is stored as a Milk Sale on it.

        Args:
            customer: Customer account ID or the cash-customer sentinel
            txn_date: Sale date
            quantity: Litres sold
            rate: Price per litre
            amount: Total; defaults to quantity x rate
            invoice_no: Invoice number; defaults to the next free number

        Returns:
            Transaction ID

        Raises:
            ValidationError: If customer, amount or date is missing
            NotFoundError: If the customer account does not exist
        """
        if not invoice_no:
            invoice_no = self.next_invoice_number()
        fields = self._milk_sale_fields(customer, txn_date, quantity, rate, amount, invoice_no)
        transaction_id = self._create_one(**fields)
        logger.info(
            "Recorded milk sale %s of %s to %s", invoice_no, fields["amount"], fields["customer_name"]
        )
        return transaction_id

    def update_milk_sale(
        self,
        transaction_id: int,
        customer: AccountRef,
        txn_date: date,
        quantity: Optional[Decimal] = None,
        rate: Optional[Decimal] = None,
        amount: Optional[Decimal] = None,
        invoice_no: Optional[str] = None,
    ) -> None:
        """Replace the details of a recorded milk sale.

        Raises:
            NotFoundError: If the transaction or customer does not exist
            ValidationError: If the transaction is not a milk sale
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        if txn.category != MILK_SALE_CATEGORY:
            raise ValidationError(f"Transaction {transaction_id} is not a milk sale")

        if invoice_no is None and txn.milk_sale is not None:
            invoice_no = txn.milk_sale.invoice_no
        fields = self._milk_sale_fields(customer, txn_date, quantity, rate, amount, invoice_no)
        self.db.update_transaction(transaction_id, **fields)

    def next_invoice_number(self) -> str:
        """Next milk-sale invoice number: one past the highest numeric one."""
        numbers = []
        for txn in self.db.list_transactions():
            details = txn.milk_sale
            if txn.category == MILK_SALE_CATEGORY and details and details.invoice_no:
                try:
                    numbers.append(int(details.invoice_no))
                except ValueError:
                    continue
        return str(max(numbers) + 1) if numbers else "1"

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def update_transaction(
        self,
        transaction_id: int,
        record_type: Optional[str | RecordType] = None,
        account_id: Optional[int] = None,
        txn_date: Optional[date] = None,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
    ) -> None:
        """Update a receipt, payment or expense.

        Transfer legs and milk sales cannot be edited here.

        Raises:
            NotFoundError: If transaction or account doesn't exist
            ValidationError: If the record is a transfer leg or milk sale, or
                a new value is invalid
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        if txn.is_transfer_leg:
            raise ValidationError("Bank transfers cannot be edited; delete and record again")
        if txn.category == MILK_SALE_CATEGORY:
            raise ValidationError("Milk sales are edited with the milk sale command")

        fields: dict[str, Any] = {}
        if record_type is not None:
            parsed = parse_choice(RecordType, record_type, "record type")
            if parsed is RecordType.MILK_SALE:
                raise ValidationError("Use the milk sale command to record milk sales")
            fields["record_type"] = parsed
        if account_id is not None:
            account = self._require_account(account_id)
            fields["account_id"] = account.id
            fields["category"] = account.account_type.value
        if txn_date is not None:
            fields["date"] = txn_date
        if amount is not None:
            fields["amount"] = _require_positive(amount)
        if description is not None:
            fields["description"] = description.strip()

        new_type = fields.get("record_type", txn.record_type)
        new_account = fields.get("account_id", txn.account_id)
        if new_type is not RecordType.EXPENSE and new_account is None:
            raise ValidationError("An account must be selected.")

        if fields:
            self.db.update_transaction(transaction_id, **fields)

    def delete_transaction(self, transaction_id: int) -> list[int]:
        """Delete a transaction.

        Deleting either leg of a transfer deletes both legs together.

        Returns:
            IDs of the deleted records

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        ids = [transaction_id]
        if txn.transfer_group is not None:
            ids = [leg.id for leg in self.db.list_transactions(transfer_group=txn.transfer_group)]
        self.db.delete_transactions(ids)
        return ids

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        record_type: Optional[str | RecordType] = None,
        account_id: Optional[int] = None,
        category: Optional[str] = None,
    ) -> list[TransactionEntity]:
        """List transactions with filters.

        Args:
            start_date: Optional first day
            end_date: Optional last day
            record_type: Receipt, Payment, Expense or Milk Sale
            account_id: Optional account ID filter
            category: Optional exact category label

        Returns:
            List of transaction entities ordered by date
        """
        parsed = parse_choice(RecordType, record_type, "record type") if record_type else None
        transactions = self.db.list_transactions(
            start_date=start_date,
            end_date=end_date,
            record_type=parsed,
            account_id=account_id,
        )
        if category is not None:
            transactions = [txn for txn in transactions if txn.category == category]
        return transactions

    def get_totals(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> dict[RecordType, Decimal]:
        """Sum amounts per record type over an optional date range."""
        totals = {record_type: Decimal("0") for record_type in RecordType}
        for txn in self.db.list_transactions(start_date=start_date, end_date=end_date):
            totals[txn.record_type] += txn.amount
        return totals
