"""Account ledger: running balances derived from the transaction log."""

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from gaurakshak.database.base import Database
from gaurakshak.domain.entities import (
    CASH_CUSTOMER_ID,
    MILK_SALE_CATEGORY,
    AccountRef,
    DateRange,
    LedgerReport,
    LedgerRow,
    RecordType,
    Transaction,
)
from gaurakshak.domain.errors import NotFoundError, account_not_found


def as_day(value: date) -> date:
    """Strip any time-of-day so comparisons happen at day granularity."""
    if isinstance(value, datetime):
        return value.date()
    return value


def format_quantity(value: Optional[Decimal]) -> str:
    """Render a quantity or rate without trailing zeros ("10.50" -> "10.5")."""
    if value is None:
        return "0"
    return f"{Decimal(value).normalize():f}"


def belongs_to_account(txn: Transaction, account_id: AccountRef) -> bool:
    """Whether a transaction is posted to the given account.

    The cash-customer sentinel collects every milk-sale category record,
    cash receipts and invoiced sales alike, whatever account it names.
    """
    if account_id == CASH_CUSTOMER_ID:
        return txn.category == MILK_SALE_CATEGORY and txn.record_type in (
            RecordType.RECEIPT,
            RecordType.MILK_SALE,
        )
    return txn.account_id is not None and txn.account_id == account_id


def signed_amount(txn: Transaction) -> Decimal:
    """Credit minus debit contributed by one transaction."""
    return txn.credit - txn.debit


def ledger_description(txn: Transaction) -> str:
    """Displayed narrative; customer-side milk-sale legs show invoice details."""
    if txn.category == MILK_SALE_CATEGORY and txn.record_type is not RecordType.RECEIPT:
        details = txn.milk_sale
        invoice_no = details.invoice_no if details and details.invoice_no else ""
        quantity = format_quantity(details.quantity if details else None)
        rate = format_quantity(details.rate if details else None)
        return f"Inv#{invoice_no}: {quantity}L @ ₹{rate}"
    return txn.description


def compute_ledger(
    account_id: Optional[AccountRef],
    transactions: Iterable[Transaction],
    date_range: Optional[DateRange] = None,
) -> LedgerReport:
    """Build the statement of one account over an optional date window.

    Transactions are ordered by day with a stable sort, so same-day entries
    keep the order they were given in. The opening balance sums everything
    strictly before the window start; each row carries the balance after it.

    Args:
        account_id: Account ID, the cash-customer sentinel, or None
        transactions: Full, unfiltered transaction log
        date_range: Optional inclusive window; either bound may be open

    Returns:
        LedgerReport with rows, opening balance and closing balance
    """
    if account_id is None:
        return LedgerReport(account_id=None)

    selected = sorted(
        (txn for txn in transactions if belongs_to_account(txn, account_id)),
        key=lambda txn: as_day(txn.date),
    )

    window = date_range or DateRange()
    opening = Decimal("0")
    if window.start is not None:
        opening = sum(
            (signed_amount(txn) for txn in selected if as_day(txn.date) < window.start),
            Decimal("0"),
        )

    balance = opening
    rows: list[LedgerRow] = []
    for txn in selected:
        if not window.contains(as_day(txn.date)):
            continue
        balance += signed_amount(txn)
        rows.append(
            LedgerRow(
                transaction_id=txn.id,
                date=as_day(txn.date),
                description=ledger_description(txn),
                debit=txn.debit,
                credit=txn.credit,
                balance=balance,
            )
        )

    return LedgerReport(
        account_id=account_id,
        rows=tuple(rows),
        opening_balance=opening,
        closing_balance=rows[-1].balance if rows else opening,
        show_opening=window.start is not None,
    )


class LedgerService:
    """Service for producing account statements."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_ledger(
        self,
        account_id: Optional[AccountRef],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> LedgerReport:
        """Compute the ledger for an account from the current transaction log.

        Args:
            account_id: Account ID or the cash-customer sentinel
            start_date: Optional first day of the window
            end_date: Optional last day of the window

        Returns:
            LedgerReport

        Raises:
            NotFoundError: If a real account ID does not exist
        """
        if account_id is not None and account_id != CASH_CUSTOMER_ID:
            if self.db.get_account(account_id) is None:
                raise NotFoundError(account_not_found(account_id))

        snapshot: Sequence[Transaction] = tuple(self.db.list_transactions())
        return compute_ledger(account_id, snapshot, DateRange(start_date, end_date))
