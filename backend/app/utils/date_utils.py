"""
Calendar-date normalization helpers.

Attendance records are keyed by calendar day, so every date entering the system
is reduced to a plain ``date`` (local midnight) and every date leaving it is
rendered as ``YYYY-MM-DD``.
"""

import re
from datetime import date, datetime
from typing import Union

from app.core.exceptions import FormatError

CALENDAR_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_OF_DAY_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")


def parse_calendar_date(text: str) -> date:
    """
    Parse ``YYYY-MM-DD`` into a calendar date.

    Args:
        text: Date text

    Returns:
        The calendar date

    Raises:
        FormatError: If the text is not exactly ``YYYY-MM-DD`` or names no real day
    """
    if not isinstance(text, str) or not CALENDAR_DATE_PATTERN.match(text):
        raise FormatError(
            "Invalid date format. Expected YYYY-MM-DD",
            details={"value": str(text)},
        )
    year, month, day = (int(part) for part in text.split("-"))
    try:
        return date(year, month, day)
    except ValueError as e:
        raise FormatError(f"Invalid calendar date: {text}", details={"value": text}) from e


def format_calendar_date(day: date) -> str:
    """Render a calendar date as ``YYYY-MM-DD``."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def to_calendar_date(value: Union[date, datetime, str]) -> date:
    """
    Truncate a date-like value to its calendar day.

    Datetimes lose their time of day, strings are parsed strictly.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_calendar_date(value)


def parse_time_of_day(text: str) -> str:
    """Validate an ``HH:MM`` 24-hour time and return it unchanged."""
    if not isinstance(text, str) or not TIME_OF_DAY_PATTERN.match(text):
        raise FormatError(
            "Invalid time format (use HH:MM)",
            details={"value": str(text)},
        )
    return text


def minutes_since_midnight(text: str) -> int:
    """Convert a validated ``HH:MM`` string to minutes since midnight."""
    hours, minutes = parse_time_of_day(text).split(":")
    return int(hours) * 60 + int(minutes)


def local_today() -> date:
    """Today's date on the server's local calendar."""
    return datetime.now().date()
