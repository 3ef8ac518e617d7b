"""Tests for date parsing and reporting periods."""

import pytest
from datetime import date, timedelta
from dateutil.relativedelta import relativedelta
from gaurakshak.utils.date_parser import parse_date, get_date_range, last_n_days


def test_parse_iso_date():
    assert parse_date("2024-01-15") == date(2024, 1, 15)


@pytest.mark.parametrize("value", ["15-01-2024", "15/01/2024", "15 Jan 2024"])
def test_parse_day_first_dates(value):
    """Numeric dates are read day first, as written on gaushala registers."""
    assert parse_date(value) == date(2024, 1, 15)


def test_parse_ambiguous_numeric_date_is_day_first():
    assert parse_date("05-02-2024") == date(2024, 2, 5)
    assert parse_date("05/02/2024") == date(2024, 2, 5)


def test_parse_drops_time_of_day():
    assert parse_date("2024-01-15T18:30:00") == date(2024, 1, 15)
    assert parse_date("15-01-2024 09:45") == date(2024, 1, 15)


def test_parse_today_and_yesterday():
    assert parse_date(" Today ") == date.today()
    assert parse_date("yesterday") == date.today() - timedelta(days=1)


def test_parse_month_and_year_starts():
    today = date.today()
    assert parse_date("this month") == today.replace(day=1)
    assert parse_date("this year") == date(today.year, 1, 1)
    assert parse_date("last month") == (today - relativedelta(months=1)).replace(day=1)
    assert parse_date("last year") == date(today.year - 1, 1, 1)


@pytest.mark.parametrize("value", ["last invalid", "31-02-2024", "not a date"])
def test_parse_invalid(value):
    with pytest.raises(ValueError):
        parse_date(value)


def test_get_date_range_this_month():
    today = date.today()
    start, end = get_date_range("this-month")
    assert start == date(today.year, today.month, 1)
    assert end == today


def test_get_date_range_last_month():
    today = date.today()
    start, end = get_date_range("last-month")
    assert start == (today - relativedelta(months=1)).replace(day=1)
    # Last day of last month
    assert end == today.replace(day=1) - timedelta(days=1)


def test_get_date_range_last_year():
    today = date.today()
    start, end = get_date_range("last-year")
    assert start == date(today.year - 1, 1, 1)
    assert end == date(today.year - 1, 12, 31)


def test_get_date_range_last_week_runs_monday_to_sunday():
    start, end = get_date_range("last-week")
    assert start.weekday() == 0
    assert end.weekday() == 6
    assert end < date.today()


def test_get_date_range_invalid_period():
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("invalid-period")


def test_last_n_days_is_inclusive():
    start, end = last_n_days(7, today=date(2024, 3, 10))
    assert start == date(2024, 3, 4)
    assert end == date(2024, 3, 10)


def test_last_n_days_defaults_to_today():
    start, end = last_n_days(1)
    assert start == end == date.today()
