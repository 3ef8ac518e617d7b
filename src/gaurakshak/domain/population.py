"""Herd population reconstructed from the movement log.

An animal's presence at any instant is the state left by its latest movement
before that instant. Opening balances are resolved per animal with that rule,
and each reporting day then moves the counts forward with the entries and
exits recorded on it.
"""

from bisect import bisect_left
from collections import defaultdict
from datetime import date
from typing import Iterable, Optional, Sequence

from gaurakshak.database.base import Database
from gaurakshak.domain.entities import (
    AgeBreakdown,
    Animal,
    CohortCounts,
    CrossTabReport,
    CrossTabSummary,
    DailySummaryRow,
    DateRange,
    DetailedReportRow,
    Gender,
    Movement,
    MovementType,
)
from gaurakshak.domain.ledger import as_day

ALL_TYPES = "All"


def _movement_day(movement: Movement) -> date:
    return as_day(movement.date)


def sort_movements(movements: Iterable[Movement]) -> list[Movement]:
    """Order movements by day; same-day movements keep their given order."""
    return sorted(movements, key=_movement_day)


def index_movements(movements: Iterable[Movement]) -> dict[int, list[Movement]]:
    """Group movements per animal, each history sorted by day."""
    histories: dict[int, list[Movement]] = defaultdict(list)
    for movement in sort_movements(movements):
        histories[movement.animal_id].append(movement)
    return dict(histories)


def is_present(history: Sequence[Movement], cutoff: date) -> bool:
    """Whether an animal is on the premises at the start of ``cutoff``.

    ``history`` must be sorted by day. Only movements strictly before the
    cutoff day count; the animal is present iff the latest of them is an Entry.
    """
    position = bisect_left(history, cutoff, key=_movement_day)
    if position == 0:
        return False
    return history[position - 1].movement_type is MovementType.ENTRY


def latest_state(history: Sequence[Movement]) -> bool:
    """Whether the most recent movement in a sorted history is an Entry."""
    return bool(history) and history[-1].movement_type is MovementType.ENTRY


def filter_animals(animals: Iterable[Animal], animal_type: Optional[str]) -> list[Animal]:
    if animal_type is None or animal_type == ALL_TYPES:
        return list(animals)
    return [animal for animal in animals if animal.animal_type == animal_type]


def opening_counts(
    animals: Iterable[Animal],
    histories: dict[int, list[Movement]],
    cutoff: date,
) -> CohortCounts:
    """Headcount present at the start of ``cutoff``, aged in the cutoff's year."""
    counts = CohortCounts()
    for animal in animals:
        if is_present(histories.get(animal.id, ()), cutoff):
            counts += CohortCounts.single(animal, cutoff.year)
    return counts


def _window(date_range: Optional[DateRange]) -> Optional[DateRange]:
    if date_range is None or date_range.start is None:
        return None
    end = date_range.end if date_range.end is not None else date_range.start
    if end < date_range.start:
        return None
    return DateRange(date_range.start, end)


def compute_daily_summary(
    animals: Iterable[Animal],
    movements: Iterable[Movement],
    animal_type: Optional[str],
    date_range: Optional[DateRange],
) -> list[DailySummaryRow]:
    """Per-day opening, in, out and closing headcounts.

    Args:
        animals: Full animal roster
        movements: Full movement log
        animal_type: Restrict to one animal type; None or "All" keeps every type
        date_range: Reporting window; without a start no rows are produced

    Returns:
        One DailySummaryRow per day, where each day's closing is the next
        day's opening
    """
    window = _window(date_range)
    if window is None:
        return []

    in_scope = {animal.id: animal for animal in filter_animals(animals, animal_type)}
    scoped_movements = [m for m in movements if m.animal_id in in_scope]
    histories = index_movements(scoped_movements)

    by_day: dict[date, list[Movement]] = defaultdict(list)
    for movement in sort_movements(scoped_movements):
        day = _movement_day(movement)
        if window.contains(day):
            by_day[day].append(movement)

    opening = opening_counts(in_scope.values(), histories, window.start)
    rows: list[DailySummaryRow] = []
    for day in window.days():
        inflow = CohortCounts()
        outflow = CohortCounts()
        in_reasons: list[str] = []
        out_reasons: list[str] = []
        for movement in by_day.get(day, ()):
            tally = CohortCounts.single(in_scope[movement.animal_id], day.year)
            if movement.movement_type is MovementType.ENTRY:
                inflow += tally
                if movement.reason:
                    in_reasons.append(movement.reason)
            else:
                outflow += tally
                if movement.reason:
                    out_reasons.append(movement.reason)

        closing = opening + inflow - outflow
        rows.append(
            DailySummaryRow(
                date=day,
                opening=opening,
                inflow=inflow,
                outflow=outflow,
                closing=closing,
                in_reasons=", ".join(in_reasons),
                out_reasons=", ".join(out_reasons),
            )
        )
        opening = closing

    return rows


def compute_cross_tab_summary(
    animals: Iterable[Animal],
    movements: Iterable[Movement],
    animal_type: Optional[str],
    date_range: Optional[DateRange],
) -> Optional[CrossTabReport]:
    """Gender by age-cohort headcount aggregated over a whole window.

    Returns None when no window start is given.
    """
    window = _window(date_range)
    if window is None:
        return None

    in_scope = {animal.id: animal for animal in filter_animals(animals, animal_type)}
    scoped_movements = sort_movements(m for m in movements if m.animal_id in in_scope)
    histories = index_movements(scoped_movements)

    opening = {Gender.MALE: AgeBreakdown(), Gender.FEMALE: AgeBreakdown()}
    inflow = {Gender.MALE: AgeBreakdown(), Gender.FEMALE: AgeBreakdown()}
    outflow = {Gender.MALE: AgeBreakdown(), Gender.FEMALE: AgeBreakdown()}
    in_reasons: dict[Gender, list[str]] = {Gender.MALE: [], Gender.FEMALE: []}
    out_reasons: dict[Gender, list[str]] = {Gender.MALE: [], Gender.FEMALE: []}

    for animal in in_scope.values():
        if is_present(histories.get(animal.id, ()), window.start):
            opening[animal.gender] = opening[animal.gender].plus(animal.cohort_in(window.start.year))

    for movement in scoped_movements:
        day = _movement_day(movement)
        if not window.contains(day):
            continue
        animal = in_scope[movement.animal_id]
        cohort = animal.cohort_in(day.year)
        if movement.movement_type is MovementType.ENTRY:
            inflow[animal.gender] = inflow[animal.gender].plus(cohort)
            if movement.reason:
                in_reasons[animal.gender].append(movement.reason)
        else:
            outflow[animal.gender] = outflow[animal.gender].plus(cohort)
            if movement.reason:
                out_reasons[animal.gender].append(movement.reason)

    def summary_for(gender: Gender) -> CrossTabSummary:
        return CrossTabSummary(
            opening=opening[gender],
            inflow=inflow[gender],
            outflow=outflow[gender],
            closing=opening[gender] + inflow[gender] - outflow[gender],
            in_reasons=tuple(in_reasons[gender]),
            out_reasons=tuple(out_reasons[gender]),
        )

    return CrossTabReport(
        start=window.start,
        end=window.end,
        male=summary_for(Gender.MALE),
        female=summary_for(Gender.FEMALE),
    )


def build_detailed_report(
    animals: Iterable[Animal],
    movements: Iterable[Movement],
    as_of_year: int,
) -> list[DetailedReportRow]:
    """Roster of animals with movement history: first entry and last exit."""
    first_entry: dict[int, Movement] = {}
    last_exit: dict[int, Movement] = {}
    for movement in sort_movements(movements):
        if movement.movement_type is MovementType.ENTRY:
            first_entry.setdefault(movement.animal_id, movement)
        else:
            current = last_exit.get(movement.animal_id)
            if current is None or _movement_day(movement) > _movement_day(current):
                last_exit[movement.animal_id] = movement

    rows = []
    for animal in animals:
        if animal.id not in first_entry and animal.id not in last_exit:
            continue
        entry = first_entry.get(animal.id)
        exit_ = last_exit.get(animal.id)
        rows.append(
            DetailedReportRow(
                animal=animal,
                age=animal.age_in(as_of_year),
                check_in_date=_movement_day(entry) if entry else None,
                check_out_date=_movement_day(exit_) if exit_ else None,
                check_out_reason=exit_.reason if exit_ else None,
            )
        )
    return rows


class PopulationService:
    """Service for herd population reports."""

    def __init__(self, db: Database):
        """Initialize population service.

        Args:
            db: Database instance
        """
        self.db = db

    def _snapshot(self) -> tuple[tuple[Animal, ...], tuple[Movement, ...]]:
        # Both collections are read before computing so a report never mixes
        # a fresh roster with a stale log.
        return tuple(self.db.list_animals()), tuple(self.db.list_movements())

    def list_animal_types(self) -> list[str]:
        """Distinct animal types in the roster, in first-seen order."""
        seen: dict[str, None] = {}
        for animal in self.db.list_animals():
            seen.setdefault(animal.animal_type, None)
        return list(seen)

    def daily_summary(
        self,
        start_date: Optional[date],
        end_date: Optional[date] = None,
        animal_type: Optional[str] = None,
    ) -> list[DailySummaryRow]:
        """Daily opening/in/out/closing rows for a date window."""
        animals, movements = self._snapshot()
        return compute_daily_summary(
            animals, movements, animal_type, DateRange(start_date, end_date)
        )

    def cross_tab_summary(
        self,
        start_date: Optional[date],
        end_date: Optional[date] = None,
        animal_type: Optional[str] = None,
    ) -> Optional[CrossTabReport]:
        """Gender by age-cohort summary over a date window."""
        animals, movements = self._snapshot()
        return compute_cross_tab_summary(
            animals, movements, animal_type, DateRange(start_date, end_date)
        )

    def detailed_report(self, as_of_year: Optional[int] = None) -> list[DetailedReportRow]:
        """Check-in/check-out roster for every animal with movements."""
        animals, movements = self._snapshot()
        year = as_of_year if as_of_year is not None else date.today().year
        return build_detailed_report(animals, movements, year)
