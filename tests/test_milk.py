"""Tests for milk production and milk sales."""

from datetime import date
from decimal import Decimal

import pytest
from gaurakshak.cli.main import cli
from gaurakshak.domain.entities import MilkRecord, MilkSession
from gaurakshak.domain.errors import NotFoundError, ValidationError
from gaurakshak.domain.milk import daily_totals


@pytest.fixture
def second_animal(animal_service):
    animal_id = animal_service.register_animal(
        animal_type="Cow", govt_tag_no="IN-1002", breed="Sahiwal", gender="Female", year_of_birth=2019
    )
    return animal_service.get_animal(animal_id)


class TestMilkService:
    def test_record_session_batch(self, milk_service, sample_animal, second_animal):
        ids = milk_service.record_production(
            date(2024, 1, 1),
            "morning",
            [(sample_animal.id, Decimal("6.5")), (second_animal.id, Decimal("4"))],
        )

        records = milk_service.list_records()
        assert len(ids) == 2
        assert [r.animal_tag for r in records] == ["IN-1001", "IN-1002"]
        assert all(r.session is MilkSession.MORNING for r in records)

    def test_empty_batch_rejected(self, milk_service):
        with pytest.raises(ValidationError, match="Please add at least one milk record."):
            milk_service.record_production(date(2024, 1, 1), "Morning", [])

    def test_repeated_animal_rejected(self, milk_service, sample_animal):
        entries = [(sample_animal.id, Decimal("2")), (sample_animal.id, Decimal("3"))]

        with pytest.raises(ValidationError, match="already been added"):
            milk_service.record_production(date(2024, 1, 1), "Morning", entries)
        assert milk_service.list_records() == []

    def test_non_positive_quantity_rejected(self, milk_service, sample_animal):
        with pytest.raises(ValidationError, match="valid quantity"):
            milk_service.record_production(date(2024, 1, 1), "Evening", [(sample_animal.id, Decimal("0"))])

    def test_invalid_session(self, milk_service, sample_animal):
        with pytest.raises(ValidationError, match="Invalid session"):
            milk_service.record_production(date(2024, 1, 1), "Noon", [(sample_animal.id, Decimal("1"))])

    def test_update_and_delete(self, milk_service, sample_animal):
        [record_id] = milk_service.record_production(
            date(2024, 1, 1), "Morning", [(sample_animal.id, Decimal("5"))]
        )

        milk_service.update_quantity(record_id, Decimal("5.5"))
        assert milk_service.list_records()[0].quantity == Decimal("5.5")

        milk_service.delete_record(record_id)
        assert milk_service.list_records() == []
        with pytest.raises(NotFoundError):
            milk_service.delete_record(record_id)

    def test_daily_totals_from_store(self, milk_service, sample_animal, second_animal):
        milk_service.record_production(date(2024, 1, 1), "Morning", [(sample_animal.id, Decimal("5"))])
        milk_service.record_production(
            date(2024, 1, 1), "Evening", [(sample_animal.id, Decimal("4")), (second_animal.id, Decimal("3"))]
        )
        milk_service.record_production(date(2024, 1, 2), "Morning", [(second_animal.id, Decimal("2"))])

        totals = milk_service.get_daily_totals()

        assert [t.date for t in totals] == [date(2024, 1, 2), date(2024, 1, 1)]
        assert totals[1].morning == Decimal("5")
        assert totals[1].evening == Decimal("7")
        assert totals[1].total == Decimal("12")


def test_daily_totals_pure():
    records = [
        MilkRecord(id=1, date=date(2024, 3, 1), animal_id=1, animal_tag="A", quantity=Decimal("3"),
                   session=MilkSession.EVENING),
        MilkRecord(id=2, date=date(2024, 3, 1), animal_id=2, animal_tag="B", quantity=Decimal("2"),
                   session=MilkSession.EVENING),
    ]

    [total] = daily_totals(records)

    assert total.morning == Decimal("0")
    assert total.evening == Decimal("5")


class TestMilkCommands:
    def test_produce(self, cli_runner, temp_db, sample_animal, second_animal):
        result = cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "milk", "produce", "--session", "Morning",
             "--date", "2024-01-01", "IN-1001=6.5", "IN-1002=4"],
        )

        assert result.exit_code == 0
        assert "Recorded 2 milk record(s)" in result.output

    def test_produce_bad_entry(self, cli_runner, temp_db, sample_animal):
        result = cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "milk", "produce", "--session", "Morning", "IN-1001"],
        )

        assert result.exit_code == 1
        assert "Expected ANIMAL=LITRES" in result.output

    def test_totals(self, cli_runner, temp_db, milk_service, sample_animal):
        milk_service.record_production(date(2024, 1, 1), "Morning", [(sample_animal.id, Decimal("5"))])

        result = cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "milk", "totals", "--start-date", "2024-01-01",
             "--end-date", "2024-01-31"],
        )

        assert result.exit_code == 0
        assert "01-01-2024" in result.output
        assert "5.00" in result.output

    def test_sale_to_cash_customer(self, cli_runner, temp_db):
        result = cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "milk", "sale", "cash-customer", "--quantity", "2",
             "--rate", "60", "--date", "2024-01-01"],
        )

        assert result.exit_code == 0
        assert "Recorded milk sale Inv# 1 of 120.00" in result.output

    def test_sale_to_account(self, cli_runner, temp_db, sample_customer):
        result = cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "milk", "sale", "Ramesh Dairy", "--amount", "500",
             "--invoice", "17"],
        )

        assert result.exit_code == 0
        assert "Inv# 17 of 500.00" in result.output

    def test_sale_without_amount(self, cli_runner, temp_db, sample_customer):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "milk", "sale", "Ramesh Dairy"]
        )

        assert result.exit_code == 1
        assert "Customer, amount, and date are required." in result.output
