"""Tests for the account ledger engine."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from gaurakshak.domain.entities import (
    CASH_CUSTOMER_ID,
    MILK_SALE_CATEGORY,
    TRANSFER_CATEGORY,
    DateRange,
    MilkSaleDetails,
    RecordType,
    Transaction,
)
from gaurakshak.domain.errors import NotFoundError
from gaurakshak.domain.ledger import LedgerService, compute_ledger, format_quantity

ACCOUNT_A = 1
ACCOUNT_B = 2


def _txn(txn_id, record_type, day, amount, account_id=ACCOUNT_A, **extra):
    return Transaction(
        id=txn_id,
        date=day,
        record_type=record_type,
        amount=Decimal(amount),
        account_id=account_id,
        description=extra.pop("description", f"txn {txn_id}"),
        **extra,
    )


@pytest.fixture
def receipt_then_payment():
    return [
        _txn(1, RecordType.RECEIPT, date(2024, 1, 1), "100"),
        _txn(2, RecordType.PAYMENT, date(2024, 1, 5), "40"),
    ]


def test_receipt_then_payment_running_balance(receipt_then_payment):
    report = compute_ledger(ACCOUNT_A, receipt_then_payment)

    assert [(r.date, r.credit, r.debit, r.balance) for r in report.rows] == [
        (date(2024, 1, 1), Decimal("100"), Decimal("0"), Decimal("100")),
        (date(2024, 1, 5), Decimal("0"), Decimal("40"), Decimal("60")),
    ]
    assert report.closing_balance == Decimal("60")
    assert report.opening_balance == Decimal("0")
    assert report.show_opening is False


def test_no_account_gives_empty_report(receipt_then_payment):
    report = compute_ledger(None, receipt_then_payment)

    assert report.rows == ()
    assert report.opening_balance == Decimal("0")
    assert report.closing_balance == Decimal("0")


def test_other_accounts_are_ignored(receipt_then_payment):
    transactions = receipt_then_payment + [
        _txn(3, RecordType.RECEIPT, date(2024, 1, 3), "999", account_id=ACCOUNT_B)
    ]

    report = compute_ledger(ACCOUNT_A, transactions)

    assert [r.transaction_id for r in report.rows] == [1, 2]
    assert report.closing_balance == Decimal("60")


def test_opening_balance_equals_prior_closing():
    transactions = [
        _txn(1, RecordType.RECEIPT, date(2024, 1, 1), "500"),
        _txn(2, RecordType.PAYMENT, date(2024, 1, 10), "120"),
        _txn(3, RecordType.EXPENSE, date(2024, 1, 20), "30"),
        _txn(4, RecordType.RECEIPT, date(2024, 2, 2), "75"),
    ]

    before = compute_ledger(ACCOUNT_A, transactions, DateRange(end=date(2024, 1, 14)))
    windowed = compute_ledger(ACCOUNT_A, transactions, DateRange(date(2024, 1, 15), date(2024, 1, 31)))

    assert windowed.show_opening is True
    assert windowed.opening_balance == before.closing_balance == Decimal("380")
    assert [r.transaction_id for r in windowed.rows] == [3]
    assert windowed.closing_balance == Decimal("350")


def test_closing_is_opening_plus_net_of_rows():
    transactions = [
        _txn(1, RecordType.RECEIPT, date(2024, 3, 1), "250.50"),
        _txn(2, RecordType.PAYMENT, date(2024, 3, 2), "100.25"),
        _txn(3, RecordType.RECEIPT, date(2024, 3, 5), "10"),
        _txn(4, RecordType.PAYMENT, date(2024, 3, 9), "5"),
    ]

    report = compute_ledger(ACCOUNT_A, transactions, DateRange(date(2024, 3, 2), date(2024, 3, 31)))

    net = sum((r.credit - r.debit for r in report.rows), Decimal("0"))
    assert report.closing_balance == report.opening_balance + net


def test_window_with_no_rows_closes_at_opening():
    transactions = [_txn(1, RecordType.RECEIPT, date(2024, 1, 1), "100")]

    report = compute_ledger(ACCOUNT_A, transactions, DateRange(date(2024, 6, 1), date(2024, 6, 30)))

    assert report.rows == ()
    assert report.opening_balance == Decimal("100")
    assert report.closing_balance == Decimal("100")


def test_same_day_entries_keep_given_order():
    transactions = [
        _txn(7, RecordType.PAYMENT, date(2024, 1, 2), "10"),
        _txn(3, RecordType.RECEIPT, date(2024, 1, 1), "50"),
        _txn(5, RecordType.RECEIPT, date(2024, 1, 2), "20"),
    ]

    report = compute_ledger(ACCOUNT_A, transactions)

    assert [r.transaction_id for r in report.rows] == [3, 7, 5]
    assert [r.balance for r in report.rows] == [Decimal("50"), Decimal("40"), Decimal("60")]


def test_time_of_day_is_ignored_for_window():
    transactions = [_txn(1, RecordType.RECEIPT, datetime(2024, 1, 31, 23, 30), "100")]

    report = compute_ledger(ACCOUNT_A, transactions, DateRange(date(2024, 1, 31), date(2024, 1, 31)))

    assert len(report.rows) == 1
    assert report.rows[0].date == date(2024, 1, 31)


def test_transfer_legs_have_opposite_signs():
    transactions = [
        _txn(1, RecordType.PAYMENT, date(2024, 1, 1), "300", account_id=ACCOUNT_A,
             category=TRANSFER_CATEGORY, transfer_group="g1"),
        _txn(2, RecordType.RECEIPT, date(2024, 1, 1), "300", account_id=ACCOUNT_B,
             category=TRANSFER_CATEGORY, transfer_group="g1"),
    ]

    source = compute_ledger(ACCOUNT_A, transactions)
    destination = compute_ledger(ACCOUNT_B, transactions)

    assert source.closing_balance == Decimal("-300")
    assert destination.closing_balance == Decimal("300")


def test_customer_milk_sale_is_debit_with_invoice_description():
    sale = _txn(
        1, RecordType.MILK_SALE, date(2024, 1, 1), "610", category=MILK_SALE_CATEGORY,
        milk_sale=MilkSaleDetails(
            customer_name="Ramesh Dairy", quantity=Decimal("10.50"), rate=Decimal("58.10"), invoice_no="12"
        ),
    )

    report = compute_ledger(ACCOUNT_A, [sale])

    row = report.rows[0]
    assert row.debit == Decimal("610")
    assert row.credit == Decimal("0")
    assert row.description == "Inv#12: 10.5L @ ₹58.1"
    assert report.closing_balance == Decimal("-610")


def test_cash_customer_collects_milk_sale_records():
    transactions = [
        _txn(1, RecordType.RECEIPT, date(2024, 1, 1), "120", account_id=None,
             category=MILK_SALE_CATEGORY, description="Milk sale to Cash Customer",
             milk_sale=MilkSaleDetails(customer_name="Cash Customer", invoice_no="1")),
        _txn(2, RecordType.RECEIPT, date(2024, 1, 2), "80", account_id=None, category="Donation"),
        _txn(3, RecordType.RECEIPT, date(2024, 1, 3), "50", account_id=ACCOUNT_A),
        _txn(4, RecordType.MILK_SALE, date(2024, 1, 4), "60", account_id=7, category=MILK_SALE_CATEGORY,
             milk_sale=MilkSaleDetails(customer_name="Ramesh Dairy", quantity=Decimal("1"),
                                       rate=Decimal("60"), invoice_no="5")),
    ]

    report = compute_ledger(CASH_CUSTOMER_ID, transactions)

    assert [r.transaction_id for r in report.rows] == [1, 4]
    assert report.rows[0].credit == Decimal("120")
    assert report.rows[0].description == "Milk sale to Cash Customer"
    assert report.rows[1].debit == Decimal("60")
    assert report.rows[1].description == "Inv#5: 1L @ ₹60"
    assert report.closing_balance == Decimal("60")


def test_recomputing_gives_identical_report(receipt_then_payment):
    window = DateRange(date(2024, 1, 2), None)

    assert compute_ledger(ACCOUNT_A, receipt_then_payment, window) == compute_ledger(
        ACCOUNT_A, receipt_then_payment, window
    )


def test_format_quantity_strips_trailing_zeros():
    assert format_quantity(Decimal("10.50")) == "10.5"
    assert format_quantity(Decimal("60.00")) == "60"
    assert format_quantity(None) == "0"


class TestLedgerService:
    def test_get_ledger_from_store(self, temp_db, transaction_service, sample_customer):
        transaction_service.record_receipt(sample_customer.id, date(2024, 1, 1), Decimal("100"))
        transaction_service.record_payment(sample_customer.id, date(2024, 1, 5), Decimal("40"))

        report = LedgerService(temp_db).get_ledger(sample_customer.id)

        assert report.closing_balance == Decimal("60")
        assert len(report.rows) == 2

    def test_get_ledger_unknown_account(self, temp_db):
        with pytest.raises(NotFoundError):
            LedgerService(temp_db).get_ledger(42)

    def test_get_ledger_cash_customer(self, temp_db, transaction_service):
        transaction_service.record_milk_sale(
            CASH_CUSTOMER_ID, date(2024, 1, 1), quantity=Decimal("2"), rate=Decimal("60")
        )

        report = LedgerService(temp_db).get_ledger(CASH_CUSTOMER_ID)

        assert report.closing_balance == Decimal("120")
