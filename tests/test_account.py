"""Tests for account commands and service."""

from datetime import date
from decimal import Decimal

import pytest
from gaurakshak.cli.main import cli
from gaurakshak.domain.entities import AccountType
from gaurakshak.domain.errors import ConflictError, DependencyError, ValidationError


def test_account_create(cli_runner, temp_db):
    """Test creating an account with a type."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "create", "Ramesh Dairy", "--type", "Customer"]
    )

    assert result.exit_code == 0
    assert "Created account 'Ramesh Dairy'" in result.output
    assert "ID:" in result.output


def test_account_create_type_is_case_insensitive(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "create", "SBI", "--type", "bank"]
    )

    assert result.exit_code == 0
    assert temp_db.list_accounts()[0].account_type is AccountType.BANK


def test_account_create_requires_type(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "create", "Fodder"]
    )

    assert result.exit_code != 0


def test_account_list_empty(cli_runner, temp_db):
    """Test listing accounts when none exist."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "list"]
    )

    assert result.exit_code == 0
    assert "No accounts found" in result.output


def test_account_list_filtered_by_type(cli_runner, temp_db, sample_customer, sample_bank):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "list", "--type", "Bank"]
    )

    assert result.exit_code == 0
    assert "SBI Current" in result.output
    assert "Ramesh Dairy" not in result.output


def test_account_create_duplicate(cli_runner, temp_db):
    """Test creating duplicate account name fails."""
    args = ["--db-path", temp_db.database_path, "account", "create", "Fodder", "--type", "Expense"]
    assert cli_runner.invoke(cli, args).exit_code == 0

    result = cli_runner.invoke(cli, args)

    assert result.exit_code == 1
    assert "already exists" in result.output.lower()


def test_account_rename(cli_runner, temp_db, sample_bank):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "account", "rename", "SBI Current", "SBI Savings", "--type", "Bank"],
    )

    assert result.exit_code == 0
    assert "Renamed account to 'SBI Savings'" in result.output
    # Drop rows cached by the fixture's session before re-reading
    temp_db.disconnect()
    assert temp_db.get_account(sample_bank.id).name == "SBI Savings"


def test_account_rename_unknown(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "rename", "Nope", "Other"]
    )

    assert result.exit_code == 1
    assert "not found" in result.output


def test_account_delete_with_yes(cli_runner, temp_db, sample_bank):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "delete", str(sample_bank.id), "--yes"]
    )

    assert result.exit_code == 0
    assert "Deleted account 'SBI Current'" in result.output
    assert temp_db.get_account(sample_bank.id) is None


def test_account_delete_cancelled(cli_runner, temp_db, sample_bank):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "delete", "SBI Current"], input="n\n"
    )

    assert result.exit_code == 0
    assert "Deletion cancelled." in result.output
    assert temp_db.get_account(sample_bank.id) is not None


def test_account_delete_blocked_by_transactions(cli_runner, temp_db, transaction_service, sample_bank):
    transaction_service.record_receipt(sample_bank.id, date(2024, 1, 1), Decimal("10"))

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "delete", "SBI Current", "--yes"]
    )

    assert result.exit_code == 1
    assert "Cannot delete account" in result.output
    assert "1 transaction." in result.output


class TestAccountService:
    def test_create_strips_name(self, account_service):
        account_id = account_service.create_account("  Cash  ", "Bank")

        assert account_service.get_account(account_id).name == "Cash"

    def test_blank_name_rejected(self, account_service):
        with pytest.raises(ValidationError):
            account_service.create_account("   ", "Bank")

    def test_unknown_type_rejected(self, account_service):
        with pytest.raises(ValidationError, match="Invalid account type"):
            account_service.create_account("Cash", "Wallet")

    def test_rename_to_existing_name_conflicts(self, account_service, sample_bank, sample_customer):
        with pytest.raises(ConflictError):
            account_service.update_account(sample_customer.id, name="SBI Current")

    def test_rename_keeping_own_name(self, account_service, sample_bank):
        account_service.update_account(sample_bank.id, name="SBI Current", account_type="Expense")

        assert account_service.get_account(sample_bank.id).account_type is AccountType.EXPENSE

    def test_list_by_type(self, account_service, sample_bank, sample_customer):
        customers = account_service.list_accounts(account_type="customer")

        assert [a.name for a in customers] == ["Ramesh Dairy"]

    def test_delete_blocked(self, account_service, transaction_service, sample_bank):
        transaction_service.record_payment(sample_bank.id, date(2024, 1, 1), Decimal("5"))

        with pytest.raises(DependencyError):
            account_service.delete_account(sample_bank.id)
