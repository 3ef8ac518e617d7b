"""Tests for report table rendering and CSV export."""

import csv
from datetime import date
from decimal import Decimal

from gaurakshak.domain.entities import (
    AgeBreakdown,
    Animal,
    CohortCounts,
    CrossTabReport,
    CrossTabSummary,
    DailySummaryRow,
    DetailedReportRow,
    Gender,
)
from gaurakshak.reporting.export import (
    cross_tab_table,
    daily_summary_table,
    detailed_report_table,
    distinct_reasons,
    format_date,
    format_money,
    write_csv,
)


def test_format_money():
    assert format_money(Decimal("5")) == "5.00"
    assert format_money(Decimal("-12.346")) == "-12.35"
    assert format_money(None) == ""


def test_format_date_is_day_first():
    assert format_date(date(2024, 3, 7)) == "07-03-2024"
    assert format_date(None) == ""


def test_distinct_reasons_keeps_first_occurrence():
    assert distinct_reasons(["Rescued", "Donated", "Rescued", ""]) == "Rescued, Donated"


def test_daily_summary_table_layout():
    counts = CohortCounts(male=1, female=2, age_0_3=1, age_gt_3=2)
    row = DailySummaryRow(
        date=date(2024, 1, 1),
        opening=counts,
        inflow=CohortCounts(),
        outflow=CohortCounts(),
        closing=counts,
        in_reasons="",
        out_reasons="Died",
    )

    headers, body = daily_summary_table([row])

    assert len(headers) == 19
    assert len(body[0]) == 19
    assert body[0][:5] == ["01-01-2024", "1", "2", "1", "2"]
    assert body[0][headers.index("Out Reasons")] == "Died"


def test_cross_tab_table_has_total_row():
    male = CrossTabSummary(
        opening=AgeBreakdown(1, 0), in_reasons=("Rescued", "Rescued"), closing=AgeBreakdown(1, 0)
    )
    female = CrossTabSummary(opening=AgeBreakdown(0, 2), closing=AgeBreakdown(0, 2))
    report = CrossTabReport(start=date(2024, 1, 1), end=date(2024, 1, 31), male=male, female=female)

    headers, rows = cross_tab_table(report)

    assert [row[0] for row in rows] == ["Male", "Female", "Total"]
    total = dict(zip(headers, rows[2]))
    assert total["Opening Total"] == "3"
    assert total["In Reason"] == "Rescued"


def test_detailed_report_numbers_rows_and_writes_csv(tmp_path):
    animal = Animal(
        id=1, animal_type="Cow", govt_tag_no="IN-7", breed="Gir", color="Brown",
        gender=Gender.FEMALE, year_of_birth=2020,
    )
    rows = [DetailedReportRow(animal=animal, age=4, check_in_date=date(2024, 1, 2))]
    out = tmp_path / "detailed.csv"

    headers, body = detailed_report_table(rows)
    write_csv(out, headers, body)

    with open(out, newline="", encoding="utf-8") as f:
        written = list(csv.reader(f))
    assert written[0][0] == "S.N."
    assert written[1][:3] == ["1", "02-01-2024", "IN-7"]
    assert written[1][-2:] == ["", ""]
