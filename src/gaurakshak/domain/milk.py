"""Milk production domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from gaurakshak.database.base import Database
from gaurakshak.domain.entities import (
    MilkDailyTotal,
    MilkRecord as MilkRecordEntity,
    MilkSession,
)
from gaurakshak.domain.errors import NotFoundError, ValidationError, animal_not_found
from gaurakshak.utils.choice_parser import parse_choice

logger = logging.getLogger(__name__)


def daily_totals(records: Iterable[MilkRecordEntity]) -> list[MilkDailyTotal]:
    """Morning and evening litres per day, most recent day first."""
    sessions: dict[date, dict[MilkSession, Decimal]] = {}
    for record in records:
        day = sessions.setdefault(
            record.date, {MilkSession.MORNING: Decimal("0"), MilkSession.EVENING: Decimal("0")}
        )
        day[record.session] += record.quantity
    return [
        MilkDailyTotal(
            date=day,
            morning=sessions[day][MilkSession.MORNING],
            evening=sessions[day][MilkSession.EVENING],
        )
        for day in sorted(sessions, reverse=True)
    ]


class MilkService:
    """Service for recording milk production."""

    def __init__(self, db: Database):
        """Initialize milk service.

        Args:
            db: Database instance
        """
        self.db = db

    def record_production(
        self,
        production_date: date,
        session: str | MilkSession,
        entries: Iterable[tuple[int, Decimal]],
    ) -> list[int]:
        """Record one session's yield for several animals in one write.

        Args:
            production_date: Day of milking
            session: Morning or Evening
            entries: (animal ID, litres) pairs; each animal at most once

        Returns:
            IDs of the created milk records

        Raises:
            ValidationError: If the batch is empty, an animal repeats, or a
                quantity is not positive
            NotFoundError: If an animal does not exist
        """
        parsed_session = parse_choice(MilkSession, session, "session")
        entries = list(entries)
        if not entries:
            raise ValidationError("Please add at least one milk record.")

        seen: set[int] = set()
        records = []
        for animal_id, quantity in entries:
            if animal_id in seen:
                raise ValidationError("This animal has already been added to the list.")
            seen.add(animal_id)
            animal = self.db.get_animal(animal_id)
            if animal is None:
                raise NotFoundError(animal_not_found(animal_id))
            if quantity is None or Decimal(quantity) <= 0:
                logger.debug("Rejected milk quantity %s for animal %s", quantity, animal_id)
                raise ValidationError("Please select an animal and enter a valid quantity.")
            records.append(
                {
                    "date": production_date,
                    "animal_id": animal.id,
                    "animal_tag": animal.govt_tag_no,
                    "quantity": Decimal(quantity),
                    "session": parsed_session,
                }
            )

        return self.db.create_milk_records(records)

    def update_quantity(self, record_id: int, quantity: Decimal) -> None:
        """Correct the litres of one milk record.

        Raises:
            NotFoundError: If the record does not exist
            ValidationError: If quantity is not positive
        """
        if self.db.get_milk_record(record_id) is None:
            raise NotFoundError(f"Milk record {record_id} not found")
        if quantity is None or Decimal(quantity) <= 0:
            raise ValidationError("Quantity must be greater than zero")
        self.db.update_milk_record(record_id, Decimal(quantity))
        logger.info("Updated milk record %s to %s L", record_id, quantity)

    def delete_record(self, record_id: int) -> None:
        if self.db.get_milk_record(record_id) is None:
            raise NotFoundError(f"Milk record {record_id} not found")
        self.db.delete_milk_record(record_id)
        logger.info("Deleted milk record %s", record_id)

    def list_records(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[MilkRecordEntity]:
        return self.db.list_milk_records(start_date=start_date, end_date=end_date)

    def get_daily_totals(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[MilkDailyTotal]:
        """Per-day morning, evening and total litres over an optional range."""
        return daily_totals(self.list_records(start_date, end_date))
