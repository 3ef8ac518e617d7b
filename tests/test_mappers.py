"""Tests for database mappers."""

from datetime import datetime, date, UTC
from decimal import Decimal

from gaurakshak.database.models import (
    Account as ORMAccount,
    Animal as ORMAnimal,
    Transaction as ORMTransaction,
    User as ORMUser,
)
from gaurakshak.database.mappers import (
    account_to_domain,
    animal_to_domain,
    transaction_to_domain,
    user_to_domain,
)
from gaurakshak.domain.entities import (
    AccountType,
    Animal,
    Gender,
    HealthStatus,
    RecordType,
    TransactionKind,
    UserRole,
    UserStatus,
)


class TestAccountMapper:
    def test_account_to_domain(self):
        orm_account = ORMAccount(
            id=1, name="Ramesh Dairy", account_type="Customer", created_at=datetime.now(UTC)
        )

        account = account_to_domain(orm_account)

        assert account.account_type is AccountType.CUSTOMER
        assert account.created_at == orm_account.created_at


class TestAnimalMapper:
    def test_animal_to_domain(self):
        orm_animal = ORMAnimal(
            id=3, animal_type="Cow", govt_tag_no="IN-3", breed="Gir", color="", gender="Female",
            year_of_birth=2021, health_status="Under Treatment", tag_color="Yellow",
        )

        animal = animal_to_domain(orm_animal)

        assert isinstance(animal, Animal)
        assert animal.gender is Gender.FEMALE
        assert animal.health_status is HealthStatus.UNDER_TREATMENT
        assert animal.identification_mark is None


class TestTransactionMapper:
    def test_plain_receipt_has_no_milk_sale(self):
        orm_txn = ORMTransaction(
            id=1, date=date(2024, 1, 1), record_type="Receipt", account_id=2,
            amount=Decimal("100.00"), description=None,
        )

        txn = transaction_to_domain(orm_txn)

        assert txn.record_type is RecordType.RECEIPT
        assert txn.description == ""
        assert txn.milk_sale is None
        assert txn.kind is TransactionKind.RECEIPT

    def test_milk_sale_details(self):
        orm_txn = ORMTransaction(
            id=2, date=date(2024, 1, 1), record_type="Milk Sale", account_id=2,
            amount=Decimal("610.05"), category="Milk Sale", customer_name="Ramesh Dairy",
            quantity=Decimal("10.5"), rate=Decimal("58.1"), invoice_no="12",
        )

        txn = transaction_to_domain(orm_txn)

        assert txn.milk_sale.quantity == Decimal("10.5")
        assert txn.milk_sale.invoice_no == "12"
        assert txn.kind is TransactionKind.MILK_SALE


class TestUserMapper:
    def test_user_to_domain(self):
        orm_user = ORMUser(
            id=1, name="Admin", email="admin@example.com", role="Admin", status="Active",
            signup_date=date(2024, 1, 1), customer_id="G-001", validity_date=date(2099, 12, 31),
        )

        user = user_to_domain(orm_user)

        assert user.role is UserRole.ADMIN
        assert user.status is UserStatus.ACTIVE
        assert user.validity_date == date(2099, 12, 31)
