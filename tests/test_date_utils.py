"""
Calendar date normalization tests.
"""

from datetime import date, datetime

import pytest

from app.core.exceptions import FormatError
from app.utils.date_utils import (
    format_calendar_date,
    minutes_since_midnight,
    parse_calendar_date,
    parse_time_of_day,
    to_calendar_date,
)


def test_parse_calendar_date():
    assert parse_calendar_date("2024-01-05") == date(2024, 1, 5)


def test_format_pads_components():
    assert format_calendar_date(date(2024, 3, 7)) == "2024-03-07"


@pytest.mark.parametrize("day", [date(2024, 1, 1), date(2024, 2, 29), date(1999, 12, 31)])
def test_parse_format_round_trip(day):
    assert parse_calendar_date(format_calendar_date(day)) == day


@pytest.mark.parametrize(
    "text",
    ["2024-1-5", "2024/01/05", "05-01-2024", "2024-01-05T00:00:00", "", "2024-02-30", "2023-13-01"],
)
def test_parse_rejects_other_shapes(text):
    with pytest.raises(FormatError):
        parse_calendar_date(text)


def test_to_calendar_date_drops_time_of_day():
    assert to_calendar_date(datetime(2024, 1, 5, 23, 59, 59)) == date(2024, 1, 5)
    assert to_calendar_date(date(2024, 1, 5)) == date(2024, 1, 5)
    assert to_calendar_date("2024-01-05") == date(2024, 1, 5)


def test_time_of_day():
    assert parse_time_of_day("7:30") == "7:30"
    assert minutes_since_midnight("17:45") == 17 * 60 + 45
    for bad in ["24:00", "12:60", "noon", "1230"]:
        with pytest.raises(FormatError):
            parse_time_of_day(bad)
