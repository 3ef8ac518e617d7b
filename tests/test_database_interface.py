"""Tests for Database interface returning domain models."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from gaurakshak.domain import entities
from gaurakshak.domain.errors import StoreError


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_account_returns_domain_model(self, temp_db):
        account_id = temp_db.create_account(name="Ramesh Dairy", account_type=entities.AccountType.CUSTOMER)

        account = temp_db.get_account(account_id)

        assert isinstance(account, entities.Account)
        assert account.name == "Ramesh Dairy"
        assert account.account_type is entities.AccountType.CUSTOMER
        assert isinstance(account.created_at, datetime)

    def test_list_accounts_filters_by_type(self, temp_db):
        temp_db.create_account(name="SBI Current", account_type="Bank")
        temp_db.create_account(name="Fodder", account_type="Expense")

        accounts = temp_db.list_accounts(account_type="Bank")

        assert [a.name for a in accounts] == ["SBI Current"]

    def test_get_animal_returns_enums(self, temp_db):
        animal_id = temp_db.create_animal(
            animal_type="Cow", govt_tag_no="IN-1", breed="Gir", color="White",
            gender=entities.Gender.FEMALE, year_of_birth=2019,
            health_status=entities.HealthStatus.SICK,
        )

        animal = temp_db.get_animal(animal_id)

        assert isinstance(animal, entities.Animal)
        assert animal.gender is entities.Gender.FEMALE
        assert animal.health_status is entities.HealthStatus.SICK
        assert temp_db.get_animal_by_tag("IN-1").id == animal_id
        assert temp_db.get_animal_by_tag("missing") is None

    def test_get_missing_rows_return_none(self, temp_db):
        assert temp_db.get_account(99) is None
        assert temp_db.get_animal(99) is None
        assert temp_db.get_movement(99) is None
        assert temp_db.get_transaction(99) is None
        assert temp_db.get_user(99) is None
        assert temp_db.get_renewal(99) is None


class TestTransactions:
    def test_milk_sale_details_are_mapped(self, temp_db):
        [txn_id] = temp_db.create_transactions(
            [
                {
                    "date": date(2024, 1, 1),
                    "record_type": entities.RecordType.MILK_SALE,
                    "amount": Decimal("250"),
                    "customer_name": "cash-customer",
                    "quantity": Decimal("5"),
                    "rate": Decimal("50"),
                    "invoice_no": "3",
                }
            ]
        )

        txn = temp_db.get_transaction(txn_id)

        assert txn.record_type is entities.RecordType.MILK_SALE
        assert txn.account_id is None
        assert txn.milk_sale.customer_name == "cash-customer"
        assert txn.milk_sale.invoice_no == "3"
        assert txn.amount == Decimal("250")

    def test_list_orders_by_date_then_storage_order(self, temp_db):
        account_id = temp_db.create_account(name="Cash", account_type="Bank")
        ids = temp_db.create_transactions(
            [
                {"date": date(2024, 1, 5), "record_type": "Receipt", "account_id": account_id, "amount": Decimal("1")},
                {"date": date(2024, 1, 1), "record_type": "Payment", "account_id": account_id, "amount": Decimal("2")},
                {"date": date(2024, 1, 5), "record_type": "Payment", "account_id": account_id, "amount": Decimal("3")},
            ]
        )

        listed = temp_db.list_transactions(account_id=account_id)

        assert [t.id for t in listed] == [ids[1], ids[0], ids[2]]

    def test_list_filters_by_range_and_type(self, temp_db):
        account_id = temp_db.create_account(name="Cash", account_type="Bank")
        temp_db.create_transactions(
            [
                {"date": date(2024, 1, 1), "record_type": "Receipt", "account_id": account_id, "amount": Decimal("1")},
                {"date": date(2024, 2, 1), "record_type": "Receipt", "account_id": account_id, "amount": Decimal("2")},
                {"date": date(2024, 2, 2), "record_type": "Expense", "account_id": account_id, "amount": Decimal("3")},
            ]
        )

        listed = temp_db.list_transactions(
            start_date=date(2024, 1, 15), end_date=date(2024, 2, 28), record_type=entities.RecordType.RECEIPT
        )

        assert [t.amount for t in listed] == [Decimal("2")]

    def test_batch_is_atomic(self, temp_db):
        account_id = temp_db.create_account(name="Cash", account_type="Bank")

        with pytest.raises(StoreError):
            temp_db.create_transactions(
                [
                    {"date": date(2024, 1, 1), "record_type": "Receipt", "account_id": account_id,
                     "amount": Decimal("10")},
                    {"date": date(2024, 1, 1), "record_type": "Payment", "account_id": account_id,
                     "amount": None},
                ]
            )

        assert temp_db.list_transactions() == []

    def test_delete_missing_transaction(self, temp_db):
        with pytest.raises(ValueError, match="not found"):
            temp_db.delete_transactions([42])

    def test_account_transaction_count(self, temp_db):
        account_id = temp_db.create_account(name="Cash", account_type="Bank")
        temp_db.create_transactions(
            [{"date": date(2024, 1, 1), "record_type": "Receipt", "account_id": account_id, "amount": Decimal("1")}]
        )

        assert temp_db.get_account_transaction_count(account_id) == 1


class TestMovementsAndMilk:
    @pytest.fixture
    def animal_id(self, temp_db):
        return temp_db.create_animal(
            animal_type="Bull", govt_tag_no="B-1", breed="Sahiwal", color="",
            gender="Male", year_of_birth=2020, health_status="Healthy",
        )

    def test_movement_round_trip(self, temp_db, animal_id):
        movement_id = temp_db.create_movement(animal_id, entities.MovementType.ENTRY, date(2024, 1, 1), "Rescued")

        movement = temp_db.get_movement(movement_id)

        assert movement.movement_type is entities.MovementType.ENTRY
        assert temp_db.get_animal_movement_count(animal_id) == 1
        assert temp_db.list_movements(movement_type="Exit") == []

    def test_milk_records_batch(self, temp_db, animal_id):
        ids = temp_db.create_milk_records(
            [
                {"date": date(2024, 1, 1), "animal_id": animal_id, "animal_tag": "B-1",
                 "quantity": Decimal("4.5"), "session": entities.MilkSession.MORNING},
            ]
        )

        record = temp_db.get_milk_record(ids[0])

        assert record.session is entities.MilkSession.MORNING
        assert record.quantity == Decimal("4.5")
        assert temp_db.get_animal_milk_record_count(animal_id) == 1


class TestUsersAndRenewals:
    def test_approve_renewal_reactivates_user(self, temp_db):
        user_id = temp_db.create_user(
            name="Sita", email="sita@example.com", role="User", status=entities.UserStatus.EXPIRED,
            signup_date=date(2024, 1, 1), customer_id="G-002", validity_date=date(2024, 6, 30),
        )
        renewal_id = temp_db.create_renewal(
            user_id=user_id, user_name="Sita", customer_id="G-002", date=date(2024, 7, 2),
            amount=Decimal("1500"), payment_mode="UPI", status="Pending",
        )

        temp_db.approve_renewal(renewal_id, date(2025, 6, 30))

        renewal = temp_db.get_renewal(renewal_id)
        user = temp_db.get_user(user_id)
        assert renewal.status is entities.RenewalStatus.APPROVED
        assert renewal.payment_mode is entities.PaymentMode.UPI
        assert user.status is entities.UserStatus.ACTIVE
        assert user.validity_date == date(2025, 6, 30)

    def test_duplicate_email_raises_store_error(self, temp_db):
        fields = dict(name="A", email="a@example.com", role="Admin", status="Active", signup_date=date(2024, 1, 1))
        temp_db.create_user(**fields)

        with pytest.raises(StoreError):
            temp_db.create_user(**fields)

        assert len(temp_db.list_users()) == 1
