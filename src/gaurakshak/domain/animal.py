"""Animal registry domain service."""

import logging
from datetime import date
from typing import Any, Iterable, Mapping, Optional

from gaurakshak.database.base import Database
from gaurakshak.domain.entities import (
    Animal as AnimalEntity,
    Gender,
    HealthStatus,
    MovementType,
)
from gaurakshak.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    animal_delete_blocked,
    animal_not_found,
    duplicate_tag_number,
)
from gaurakshak.domain.population import index_movements, latest_state
from gaurakshak.utils.choice_parser import parse_choice

logger = logging.getLogger(__name__)

# Registry age filter buckets, inclusive bounds; None leaves the top open.
AGE_BUCKETS: dict[str, tuple[int, Optional[int]]] = {
    "0-2": (0, 2),
    "3-5": (3, 5),
    "6-10": (6, 10),
    "10+": (11, None),
}

# Column headers of the tabular roster used for import and export.
IMPORT_COLUMNS = {
    "TYPE": "animal_type",
    "TAG NO": "govt_tag_no",
    "BREED": "breed",
    "COLOR": "color",
    "GENDER": "gender",
    "YEAR OF BIRTH": "year_of_birth",
    "HEALTH STATUS": "health_status",
    "TAG COLOR": "tag_color",
    "IDENTIFICATION MARK": "identification_mark",
}

_EDITABLE_FIELDS = frozenset(
    {
        "animal_type",
        "govt_tag_no",
        "breed",
        "color",
        "gender",
        "year_of_birth",
        "health_status",
        "tag_color",
        "identification_mark",
        "image_url",
    }
)


def in_age_bucket(animal: AnimalEntity, bucket: str, year: int) -> bool:
    """Whether an animal's age in ``year`` falls in a named bucket."""
    if bucket not in AGE_BUCKETS:
        raise ValidationError(
            f"Invalid age bucket '{bucket}'. Expected one of: {', '.join(AGE_BUCKETS)}"
        )
    low, high = AGE_BUCKETS[bucket]
    age = animal.age_in(year)
    return age >= low and (high is None or age <= high)


def matches_search(animal: AnimalEntity, term: str) -> bool:
    """Case-insensitive substring match against any displayed field."""
    needle = term.lower()
    values = (
        animal.animal_type,
        animal.govt_tag_no,
        animal.breed,
        animal.color,
        animal.gender.value,
        str(animal.year_of_birth),
        animal.health_status.value,
        animal.tag_color,
        animal.identification_mark or "",
    )
    return any(needle in value.lower() for value in values)


class AnimalService:
    """Service for managing the animal registry."""

    def __init__(self, db: Database):
        """Initialize animal service.

        Args:
            db: Database instance
        """
        self.db = db

    def _normalize(self, fields: Mapping[str, Any], *, partial: bool = False) -> dict[str, Any]:
        """Validate and coerce animal fields.

        With ``partial`` only the given fields are checked, as for an update.
        """
        unknown = set(fields) - _EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown animal field(s): {', '.join(sorted(unknown))}")

        clean: dict[str, Any] = {}
        for key, value in fields.items():
            if isinstance(value, str):
                value = value.strip()
            clean[key] = value

        for required in ("govt_tag_no", "breed"):
            if (not partial or required in clean) and not clean.get(required):
                logger.debug("Rejected animal without %s", required)
                raise ValidationError("Tag No and Breed are required.")
        if not partial and not clean.get("animal_type"):
            raise ValidationError("Animal type is required")
        if partial and "animal_type" in clean and not clean["animal_type"]:
            raise ValidationError("Animal type is required")

        if "gender" in clean or not partial:
            clean["gender"] = parse_choice(Gender, clean.get("gender", ""), "gender")
        if "health_status" in clean:
            clean["health_status"] = parse_choice(HealthStatus, clean["health_status"], "health status")
        elif not partial:
            clean["health_status"] = HealthStatus.HEALTHY

        if "year_of_birth" in clean or not partial:
            try:
                year = int(clean.get("year_of_birth"))
            except (TypeError, ValueError):
                raise ValidationError(f"Invalid year of birth: {clean.get('year_of_birth')!r}")
            if year > date.today().year:
                raise ValidationError(f"Year of birth {year} is in the future")
            clean["year_of_birth"] = year

        if not partial:
            clean.setdefault("color", "")
            clean.setdefault("tag_color", "")
        for optional in ("identification_mark", "image_url"):
            if optional in clean and not clean[optional]:
                clean[optional] = None
        return clean

    def _check_unique_tag(self, tag_no: str, exclude_id: Optional[int] = None) -> None:
        existing = self.db.get_animal_by_tag(tag_no)
        if existing is not None and existing.id != exclude_id:
            logger.debug("Rejected duplicate tag number %r", tag_no)
            raise ConflictError(duplicate_tag_number(tag_no))

    def register_animal(self, **fields: Any) -> int:
        """Register a new animal.

        Args:
            **fields: animal_type, govt_tag_no, breed, color, gender,
                year_of_birth, health_status, tag_color, identification_mark,
                image_url

        Returns:
            Animal ID

        Raises:
            ValidationError: If a required field is missing or malformed
            ConflictError: If the tag number is already registered
        """
        clean = self._normalize(fields)
        self._check_unique_tag(clean["govt_tag_no"])
        return self.db.create_animal(**clean)

    def get_animal(self, animal_id: int) -> Optional[AnimalEntity]:
        return self.db.get_animal(animal_id)

    def get_animal_by_tag(self, govt_tag_no: str) -> Optional[AnimalEntity]:
        return self.db.get_animal_by_tag(govt_tag_no.strip())

    def update_animal(self, animal_id: int, **fields: Any) -> None:
        """Update animal details.

        Raises:
            NotFoundError: If animal not found
            ValidationError: If a given field is malformed
            ConflictError: If the new tag number belongs to another animal
        """
        if self.db.get_animal(animal_id) is None:
            raise NotFoundError(animal_not_found(animal_id))

        clean = self._normalize(fields, partial=True)
        if not clean:
            return
        if "govt_tag_no" in clean:
            self._check_unique_tag(clean["govt_tag_no"], exclude_id=animal_id)

        self.db.update_animal(animal_id, **clean)
        logger.info("Updated animal %s", animal_id)

    def delete_animal(self, animal_id: int) -> None:
        """Delete an animal.

        Raises:
            NotFoundError: If animal not found
            DependencyError: If the animal has movements or milk records
        """
        if self.db.get_animal(animal_id) is None:
            raise NotFoundError(animal_not_found(animal_id))

        movement_count = self.db.get_animal_movement_count(animal_id)
        milk_record_count = self.db.get_animal_milk_record_count(animal_id)
        if movement_count > 0 or milk_record_count > 0:
            raise DependencyError(animal_delete_blocked(animal_id, movement_count, milk_record_count))

        self.db.delete_animal(animal_id)

    def import_animals(self, rows: Iterable[Mapping[str, Any]]) -> list[int]:
        """Register a batch of animals from roster rows keyed by column header.

        The whole batch is rejected if any tag number repeats inside it or is
        already registered; otherwise all rows are stored in one write.

        Args:
            rows: Mappings keyed by the IMPORT_COLUMNS headers

        Returns:
            IDs of the created animals

        Raises:
            ValidationError: If the batch is empty or a row is malformed
            ConflictError: On a duplicate tag number
        """
        rows = list(rows)
        if not rows:
            raise ValidationError("The import file is empty.")

        existing_tags = {animal.govt_tag_no for animal in self.db.list_animals()}
        seen: set[str] = set()
        records = []
        for line_no, row in enumerate(rows, start=1):
            # Blank cells fall back to the registration defaults
            fields = {
                field: row[header]
                for header, field in IMPORT_COLUMNS.items()
                if row.get(header) is not None and str(row[header]).strip()
            }
            tag_no = str(fields.get("govt_tag_no", "")).strip()
            if tag_no in seen:
                raise ConflictError(f'Duplicate Tag No "{tag_no}" found in the import file.')
            if tag_no in existing_tags:
                raise ConflictError(f'Tag No "{tag_no}" already exists in the database.')
            seen.add(tag_no)
            try:
                records.append(self._normalize(fields))
            except ValidationError as e:
                raise ValidationError(f"Row {line_no}: {e}") from e

        return self.db.create_animals(records)

    def list_animals(
        self,
        animal_type: Optional[str] = None,
        breed: Optional[str] = None,
        color: Optional[str] = None,
        health_status: Optional[str] = None,
        age_bucket: Optional[str] = None,
        search: Optional[str] = None,
        as_of_year: Optional[int] = None,
    ) -> list[AnimalEntity]:
        """List animals matching every given filter.

        Args:
            animal_type: Exact animal type
            breed: Exact breed
            color: Exact color
            health_status: Healthy, Sick or Under Treatment
            age_bucket: One of 0-2, 3-5, 6-10, 10+
            search: Substring matched against every displayed field
            as_of_year: Year used for age buckets (defaults to current year)

        Returns:
            List of animal entities in registration order
        """
        year = as_of_year if as_of_year is not None else date.today().year
        status = parse_choice(HealthStatus, health_status, "health status") if health_status else None

        animals = self.db.list_animals(animal_type=animal_type)
        return [
            animal
            for animal in animals
            if (breed is None or animal.breed == breed)
            and (color is None or animal.color == color)
            and (status is None or animal.health_status is status)
            and (age_bucket is None or in_age_bucket(animal, age_bucket, year))
            and (search is None or matches_search(animal, search))
        ]

    def mark_exit(self, animal_id: int, reason: str, exit_date: Optional[date] = None) -> int:
        """Record an animal leaving the gaushala.

        Args:
            animal_id: Animal ID
            reason: Why the animal left (required)
            exit_date: Day of exit, defaults to today

        Returns:
            Movement ID of the recorded Exit

        Raises:
            NotFoundError: If animal not found
            ValidationError: If no reason is given or the animal is not present
        """
        if self.db.get_animal(animal_id) is None:
            raise NotFoundError(animal_not_found(animal_id))
        reason = (reason or "").strip()
        if not reason:
            raise ValidationError("A reason for exit is required.")

        history = index_movements(self.db.list_movements(animal_id=animal_id)).get(animal_id, [])
        if not latest_state(history):
            raise ValidationError(f"Animal {animal_id} is not currently in the gaushala")

        return self.db.create_movement(
            animal_id=animal_id,
            movement_type=MovementType.EXIT,
            date=exit_date or date.today(),
            reason=reason,
        )
