"""
Working-calendar arithmetic: working-day classification, range counting and
completion-date projection.

Day-of-week codes follow the profile settings: 0 = Sunday through 6 = Saturday.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Tuple, Union

from app.schemas.user import CalendarConfig
from app.core.exceptions import RangeError
from app.utils.date_utils import minutes_since_midnight, to_calendar_date

FALLBACK_HOURS_PER_DAY = 8.0
MAX_PROJECTION_DAYS = 365 * 2

SUNDAY = 0
SATURDAY = 6

DateLike = Union[date, datetime]


@dataclass(frozen=True)
class CompletionProjection:
    """Result of walking the working calendar forward from an anchor date."""
    completion_date: date
    working_days_needed: int
    working_days_counted: int
    met: bool


def day_of_week(day: DateLike) -> int:
    """Day-of-week code with Sunday as 0."""
    return (to_calendar_date(day).weekday() + 1) % 7


def is_working_day(day: DateLike, config: CalendarConfig) -> bool:
    """Return True unless weekend policy, excluded weekdays or a holiday rule the day out."""
    day = to_calendar_date(day)
    dow = day_of_week(day)

    if config.exclude_weekends.saturday and dow == SATURDAY:
        return False
    if config.exclude_weekends.sunday and dow == SUNDAY:
        return False
    if dow in config.excluded_weekday_set:
        return False
    return day not in config.holiday_set


def count_working_days(start: DateLike, end: DateLike, config: CalendarConfig) -> int:
    """
    Count working days in the inclusive range [start, end].

    A linear scan keeps arbitrary weekday sets and holiday lists composable;
    ranges are bounded by realistic internship horizons.
    """
    current = to_calendar_date(start)
    end = to_calendar_date(end)

    count = 0
    while current <= end:
        if is_working_day(current, config):
            count += 1
        current += timedelta(days=1)
    return count


def project_completion(
    remaining_hours: float,
    average_hours_per_day: float,
    anchor: DateLike,
    config: CalendarConfig,
) -> CompletionProjection:
    """
    Project the date on which ``remaining_hours`` are worked off at the observed pace.

    The anchor day counts toward the requirement when it is a working day.
    The walk advances at most MAX_PROJECTION_DAYS calendar days; when the
    requirement is not satisfied by then the last date reached is returned
    with ``met=False``.

    Args:
        remaining_hours: Hours still required
        average_hours_per_day: Observed pace; non-positive pace falls back to 8h/day
        anchor: Day the walk starts from (normally today)
        config: Calendar policy

    Returns:
        CompletionProjection
    """
    anchor = to_calendar_date(anchor)
    if remaining_hours <= 0:
        return CompletionProjection(
            completion_date=anchor,
            working_days_needed=0,
            working_days_counted=0,
            met=True,
        )

    pace = average_hours_per_day if average_hours_per_day > 0 else FALLBACK_HOURS_PER_DAY
    working_days_needed = math.ceil(remaining_hours / pace)

    current = anchor
    counted = 0
    days_passed = 0
    while counted < working_days_needed and days_passed < MAX_PROJECTION_DAYS:
        if is_working_day(current, config):
            counted += 1
        if counted < working_days_needed:
            current += timedelta(days=1)
            days_passed += 1

    return CompletionProjection(
        completion_date=current,
        working_days_needed=working_days_needed,
        working_days_counted=counted,
        met=counted >= working_days_needed,
    )


def calculate_completion_date(
    remaining_hours: float,
    average_hours_per_day: float,
    anchor: DateLike,
    config: CalendarConfig,
) -> date:
    """Projected completion date only; see project_completion."""
    return project_completion(remaining_hours, average_hours_per_day, anchor, config).completion_date


def calculate_hours_from_times(start_time: str, end_time: str, config: CalendarConfig) -> Tuple[float, float]:
    """
    Hours worked between two ``HH:MM`` times, less the lunch break when enabled.

    Returns:
        (hours_logged, lunch_break_deducted), hours rounded to 2 decimals and floored at 0

    Raises:
        RangeError: If the end precedes the start
    """
    start = minutes_since_midnight(start_time)
    end = minutes_since_midnight(end_time)
    if end < start:
        raise RangeError(
            "End time must not be before start time",
            details={"start_time": start_time, "end_time": end_time},
        )

    hours = (end - start) / 60
    deducted = 0.0
    if config.lunch_break.enabled and config.lunch_break.hours:
        deducted = config.lunch_break.hours
        hours = max(0.0, hours - deducted)

    return round(hours, 2), deducted
