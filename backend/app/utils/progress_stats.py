"""
Progress statistics over a user's attendance records.

Records are any objects exposing ``date`` and ``hours_logged``; ORM rows and
response schemas both qualify.
"""

import calendar
from datetime import date, timedelta
from typing import Iterable, List, Sequence, Tuple

from app.core.exceptions import RangeError
from app.schemas.attendance import (
    CalendarDay,
    MonthStats,
    PreviousMonthStats,
    ProgressSnapshot,
    WeekStats,
)
from app.schemas.user import CalendarConfig
from app.utils.date_calculations import count_working_days, project_completion
from app.utils.date_utils import format_calendar_date, to_calendar_date


def _round2(value: float) -> float:
    return round(value, 2)


def week_bounds(today: date) -> Tuple[date, date]:
    """Monday-start week containing ``today``."""
    start = today - timedelta(days=today.weekday())
    return start, start + timedelta(days=6)


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last day of a calendar month."""
    if not (1 <= month <= 12 and date.min.year <= year <= date.max.year):
        raise RangeError("Invalid year or month", details={"year": year, "month": month})
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def previous_month_bounds(today: date) -> Tuple[date, date]:
    """First and last day of the month before the one containing ``today``."""
    end = today.replace(day=1) - timedelta(days=1)
    return end.replace(day=1), end


def _in_window(records: Iterable, start: date, end: date) -> list:
    return [r for r in records if start <= to_calendar_date(r.date) <= end]


def average_hours_per_day(records: Sequence) -> float:
    """Average hours per logged day; gap days do not dilute the pace."""
    if not records:
        return 0.0
    return sum(r.hours_logged for r in records) / len(records)


def compute_stats(records: Sequence, config: CalendarConfig, today: date) -> ProgressSnapshot:
    """
    Build the progress snapshot for one user.

    Every window is derived from the single ``today`` argument.

    Args:
        records: The user's attendance records, at most one per calendar day
        config: The user's calendar configuration
        today: Reference date for the projection and the windows

    Returns:
        ProgressSnapshot
    """
    today = to_calendar_date(today)
    records = list(records)

    total_hours = sum(r.hours_logged for r in records)
    target_hours = config.target_hours
    hours_remaining = max(0.0, target_hours - total_hours)
    if target_hours > 0:
        progress = min(100.0, max(0.0, total_hours / target_hours * 100))
    else:
        progress = 0.0

    pace = average_hours_per_day(records)
    projection = project_completion(hours_remaining, pace, today, config)
    working_days_remaining = count_working_days(today, projection.completion_date, config)

    week_start, week_end = week_bounds(today)
    this_week = _in_window(records, week_start, week_end)
    week_hours = sum(r.hours_logged for r in this_week)
    week_days = len(this_week)

    month_start, month_end = month_bounds(today.year, today.month)
    this_month = _in_window(records, month_start, month_end)
    month_hours = sum(r.hours_logged for r in this_month)

    prev_start, prev_end = previous_month_bounds(today)
    prev_month_hours = sum(r.hours_logged for r in _in_window(records, prev_start, prev_end))

    return ProgressSnapshot(
        total_hours=total_hours,
        target_hours=target_hours,
        hours_remaining=hours_remaining,
        progress_percentage=_round2(progress),
        average_hours_per_day=_round2(pace),
        completion_date=projection.completion_date,
        completion_met=projection.met,
        working_days_remaining=working_days_remaining,
        this_week=WeekStats(
            hours=week_hours,
            days=week_days,
            average=_round2(week_hours / week_days) if week_days else 0,
        ),
        this_month=MonthStats(hours=month_hours, days=len(this_month)),
        previous_month=PreviousMonthStats(hours=prev_month_hours),
        month_over_month_delta=month_hours - prev_month_hours,
        total_entries=len(records),
    )


def build_calendar_grid(records: Iterable, year: int, month: int) -> List[CalendarDay]:
    """One entry per record falling within the given month, ordered by date."""
    start, end = month_bounds(year, month)
    in_month = sorted(_in_window(records, start, end), key=lambda r: to_calendar_date(r.date))
    return [
        CalendarDay(date=format_calendar_date(to_calendar_date(r.date)), hours=r.hours_logged)
        for r in in_month
    ]
