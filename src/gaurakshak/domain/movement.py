"""Animal movement domain service."""

import logging
from datetime import date
from typing import Optional

from gaurakshak.database.base import Database
from gaurakshak.domain.entities import Animal, Movement as MovementEntity, MovementType
from gaurakshak.domain.errors import (
    NotFoundError,
    ValidationError,
    animal_not_found,
    movement_not_found,
)
from gaurakshak.domain.population import index_movements, latest_state
from gaurakshak.utils.choice_parser import parse_choice

logger = logging.getLogger(__name__)

STATUS_IN = "in"
STATUS_OUT = "out"


class MovementService:
    """Service for recording animal entries and exits."""

    def __init__(self, db: Database):
        """Initialize movement service.

        Args:
            db: Database instance
        """
        self.db = db

    def _is_present(self, animal_id: int) -> bool:
        history = index_movements(self.db.list_movements(animal_id=animal_id)).get(animal_id, [])
        return latest_state(history)

    def record_movement(
        self,
        animal_id: int,
        movement_type: str | MovementType,
        movement_date: date,
        reason: str,
    ) -> int:
        """Record an Entry or Exit.

        An Entry is accepted only for an animal currently out and an Exit only
        for an animal currently in.

        Args:
            animal_id: Animal ID
            movement_type: Entry or Exit
            movement_date: Day of the movement
            reason: Reason for the movement (required)

        Returns:
            Movement ID

        Raises:
            NotFoundError: If animal not found
            ValidationError: If the reason is missing or the type does not
                match the animal's current state
        """
        if self.db.get_animal(animal_id) is None:
            raise NotFoundError(animal_not_found(animal_id))
        parsed_type = parse_choice(MovementType, movement_type, "movement type")
        reason = (reason or "").strip()
        if not reason:
            raise ValidationError("Please fill all required fields.")

        present = self._is_present(animal_id)
        if parsed_type is MovementType.ENTRY and present:
            logger.debug("Rejected entry for animal %s already present", animal_id)
            raise ValidationError(f"Animal {animal_id} is already in the gaushala")
        if parsed_type is MovementType.EXIT and not present:
            logger.debug("Rejected exit for absent animal %s", animal_id)
            raise ValidationError(f"Animal {animal_id} is not currently in the gaushala")

        return self.db.create_movement(
            animal_id=animal_id,
            movement_type=parsed_type,
            date=movement_date,
            reason=reason,
        )

    def get_movement(self, movement_id: int) -> Optional[MovementEntity]:
        return self.db.get_movement(movement_id)

    def update_movement(
        self,
        movement_id: int,
        animal_id: Optional[int] = None,
        movement_type: Optional[str | MovementType] = None,
        movement_date: Optional[date] = None,
        reason: Optional[str] = None,
    ) -> None:
        """Correct a recorded movement.

        Corrections are stored as given; entry/exit alternation is only
        enforced when recording.

        Raises:
            NotFoundError: If the movement or new animal does not exist
            ValidationError: If the new reason is blank or type is unknown
        """
        if self.db.get_movement(movement_id) is None:
            raise NotFoundError(movement_not_found(movement_id))
        if animal_id is not None and self.db.get_animal(animal_id) is None:
            raise NotFoundError(animal_not_found(animal_id))

        parsed_type = None
        if movement_type is not None:
            parsed_type = parse_choice(MovementType, movement_type, "movement type")
        if reason is not None:
            reason = reason.strip()
            if not reason:
                raise ValidationError("Please fill all required fields.")

        self.db.update_movement(
            movement_id,
            animal_id=animal_id,
            movement_type=parsed_type,
            date=movement_date,
            reason=reason,
        )
        logger.info("Updated movement %s", movement_id)

    def delete_movement(self, movement_id: int) -> None:
        """Delete a movement.

        Raises:
            NotFoundError: If movement not found
        """
        if self.db.get_movement(movement_id) is None:
            raise NotFoundError(movement_not_found(movement_id))
        self.db.delete_movement(movement_id)

    def list_movements(
        self,
        movement_type: Optional[str | MovementType] = None,
        tag_search: Optional[str] = None,
    ) -> list[tuple[MovementEntity, Optional[Animal]]]:
        """List movements, newest first, paired with their animal.

        Args:
            movement_type: Restrict to Entry or Exit
            tag_search: Case-insensitive substring of the animal's tag number

        Returns:
            List of (movement, animal) pairs; animal is None if it was removed
        """
        parsed_type = None
        if movement_type is not None:
            parsed_type = parse_choice(MovementType, movement_type, "movement type")

        animals = {animal.id: animal for animal in self.db.list_animals()}
        movements = self.db.list_movements(movement_type=parsed_type)
        needle = tag_search.lower() if tag_search else None

        result = []
        for movement in reversed(movements):
            animal = animals.get(movement.animal_id)
            if needle is not None and (animal is None or needle not in animal.govt_tag_no.lower()):
                continue
            result.append((movement, animal))
        return result

    def current_status(self) -> dict[int, str]:
        """Map every registered animal to ``"in"`` or ``"out"``.

        Animals without movements are out.
        """
        histories = index_movements(self.db.list_movements())
        return {
            animal.id: STATUS_IN if latest_state(histories.get(animal.id, ())) else STATUS_OUT
            for animal in self.db.list_animals()
        }
