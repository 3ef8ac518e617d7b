"""Tabular rendering of reports for display and CSV export.

Every ``*_table`` function returns ``(headers, rows)`` where each row is a
list of strings ready to print or write.
"""

import csv
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Mapping, Optional, Sequence

from gaurakshak.domain.entities import (
    AgeBreakdown,
    Animal,
    CohortCounts,
    CrossTabReport,
    CrossTabSummary,
    DailySummaryRow,
    DetailedReportRow,
    LedgerReport,
    Movement,
)

Table = tuple[list[str], list[list[str]]]

DATE_FORMAT = "%d-%m-%Y"


def format_date(value: Optional[date]) -> str:
    return value.strftime(DATE_FORMAT) if value is not None else ""


def format_money(value: Optional[Decimal]) -> str:
    """Render money with two decimal places."""
    if value is None:
        return ""
    return f"{Decimal(value):.2f}"


def _money_or_blank(value: Decimal) -> str:
    return format_money(value) if value else ""


def distinct_reasons(reasons: Iterable[str]) -> str:
    """Join reasons with ", " keeping only the first occurrence of each."""
    return ", ".join(dict.fromkeys(r for r in reasons if r))


def ledger_table(report: LedgerReport) -> Table:
    headers = ["Date", "Description", "Debit (₹)", "Credit (₹)", "Balance (₹)"]
    rows: list[list[str]] = []
    if report.show_opening:
        rows.append(["", "Opening Balance", "", "", format_money(report.opening_balance)])
    for row in report.rows:
        rows.append(
            [
                format_date(row.date),
                row.description,
                _money_or_blank(row.debit),
                _money_or_blank(row.credit),
                format_money(row.balance),
            ]
        )
    rows.append(
        [
            "",
            "Closing Balance",
            format_money(report.total_debit),
            format_money(report.total_credit),
            format_money(report.closing_balance),
        ]
    )
    return headers, rows


def _counts(counts: CohortCounts) -> list[str]:
    return [str(counts.male), str(counts.female), str(counts.age_0_3), str(counts.age_gt_3)]


def daily_summary_table(rows: Sequence[DailySummaryRow]) -> Table:
    headers = [
        "Date",
        "Open M", "Open F", "Open 0-3", "Open >3",
        "In M", "In F", "In 0-3", "In >3", "In Reasons",
        "Out M", "Out F", "Out 0-3", "Out >3", "Out Reasons",
        "Close M", "Close F", "Close 0-3", "Close >3",
    ]
    body = [
        [format_date(row.date)]
        + _counts(row.opening)
        + _counts(row.inflow)
        + [row.in_reasons]
        + _counts(row.outflow)
        + [row.out_reasons]
        + _counts(row.closing)
        for row in rows
    ]
    return headers, body


def _breakdown(values: AgeBreakdown) -> list[str]:
    return [str(values.age_0_3), str(values.age_gt_3), str(values.total)]


def _cross_tab_row(label: str, summary: CrossTabSummary) -> list[str]:
    return (
        [label]
        + _breakdown(summary.opening)
        + _breakdown(summary.inflow)
        + [distinct_reasons(summary.in_reasons)]
        + _breakdown(summary.outflow)
        + [distinct_reasons(summary.out_reasons)]
        + _breakdown(summary.closing)
    )


def cross_tab_table(report: CrossTabReport) -> Table:
    headers = ["Gender"]
    for section in ("Opening", "In", "Out", "Closing"):
        headers += [f"{section} 0-3 Yr", f"{section} >3 Yr", f"{section} Total"]
        if section in ("In", "Out"):
            headers.append(f"{section} Reason")
    rows = [
        _cross_tab_row("Male", report.male),
        _cross_tab_row("Female", report.female),
        _cross_tab_row("Total", report.total),
    ]
    return headers, rows


def detailed_report_table(rows: Sequence[DetailedReportRow]) -> Table:
    headers = [
        "S.N.", "Check In Date", "Tag No.", "Tag Color", "Breed", "Age", "Gender",
        "Cow Color", "Iden. Mark", "Health Status", "Check Out Date", "Check Out Reason",
    ]
    body = []
    for number, row in enumerate(rows, start=1):
        animal = row.animal
        body.append(
            [
                str(number),
                format_date(row.check_in_date),
                animal.govt_tag_no,
                animal.tag_color,
                animal.breed,
                str(row.age),
                animal.gender.value,
                animal.color,
                animal.identification_mark or "",
                animal.health_status.value,
                format_date(row.check_out_date),
                row.check_out_reason or "",
            ]
        )
    return headers, body


def animal_registry_table(animals: Sequence[Animal], statuses: Optional[Mapping[int, str]] = None) -> Table:
    """Registry listing; ``statuses`` maps animal IDs to in/out when given."""
    headers = ["ID", "Tag No", "Type", "Breed", "Color", "Gender", "Birth Year", "Health"]
    if statuses is not None:
        headers.append("Status")
    body = []
    for animal in animals:
        row = [
            str(animal.id),
            animal.govt_tag_no,
            animal.animal_type,
            animal.breed,
            animal.color,
            animal.gender.value,
            str(animal.year_of_birth),
            animal.health_status.value,
        ]
        if statuses is not None:
            row.append(statuses.get(animal.id, "out"))
        body.append(row)
    return headers, body


def movement_history_table(entries: Sequence[tuple[Movement, Optional[Animal]]]) -> Table:
    headers = ["ID", "Date", "Animal Tag", "Type", "Reason"]
    body = [
        [
            str(movement.id),
            format_date(movement.date),
            animal.govt_tag_no if animal is not None else "",
            movement.movement_type.value,
            movement.reason,
        ]
        for movement, animal in entries
    ]
    return headers, body


def write_csv(path: str | Path, headers: Sequence[str], rows: Iterable[Sequence[str]]) -> None:
    """Write a table to a UTF-8 CSV file."""
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(headers)
        writer.writerows(rows)
