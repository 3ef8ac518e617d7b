"""Shared pytest fixtures for gaurakshak tests."""

import tempfile
import os
from datetime import date
import pytest

from gaurakshak.database.factories import create_sqlite_database
from gaurakshak.domain.account import AccountService
from gaurakshak.domain.animal import AnimalService
from gaurakshak.domain.milk import MilkService
from gaurakshak.domain.movement import MovementService
from gaurakshak.domain.renewal import RenewalService
from gaurakshak.domain.support import SupportService
from gaurakshak.domain.transaction import TransactionService
from gaurakshak.domain.user import UserService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def animal_service(temp_db):
    """Create an AnimalService with a temporary database."""
    return AnimalService(temp_db)


@pytest.fixture
def movement_service(temp_db):
    """Create a MovementService with a temporary database."""
    return MovementService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def milk_service(temp_db):
    return MilkService(temp_db)


@pytest.fixture
def user_service(temp_db):
    return UserService(temp_db)


@pytest.fixture
def renewal_service(temp_db):
    return RenewalService(temp_db)


@pytest.fixture
def support_service(temp_db):
    return SupportService(temp_db)


@pytest.fixture
def sample_customer(account_service):
    """Create a sample customer account for testing."""
    account_id = account_service.create_account(name="Ramesh Dairy", account_type="Customer")
    return account_service.get_account(account_id)


@pytest.fixture
def sample_bank(account_service):
    """Create a sample bank account for testing."""
    account_id = account_service.create_account(name="SBI Current", account_type="Bank")
    return account_service.get_account(account_id)


@pytest.fixture
def sample_animal(animal_service):
    """Register a female cow born in 2018."""
    animal_id = animal_service.register_animal(
        animal_type="Cow",
        govt_tag_no="IN-1001",
        breed="Gir",
        color="Brown",
        gender="Female",
        year_of_birth=2018,
    )
    return animal_service.get_animal(animal_id)


@pytest.fixture
def present_animal(sample_animal, movement_service):
    """The sample animal with an Entry on 2024-01-01."""
    movement_service.record_movement(sample_animal.id, "Entry", date(2024, 1, 1), "Rescued")
    return sample_animal


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
