"""
Progress snapshot and calendar grid tests.
"""

from datetime import date, datetime
from types import SimpleNamespace

import pytest

from app.core.exceptions import RangeError
from app.schemas.user import CalendarConfig
from app.utils.progress_stats import (
    average_hours_per_day,
    build_calendar_grid,
    compute_stats,
    month_bounds,
    previous_month_bounds,
    week_bounds,
)


def record(day: str, hours: float):
    return SimpleNamespace(date=date.fromisoformat(day), hours_logged=hours)


def test_empty_records_use_fallback_pace():
    snapshot = compute_stats([], CalendarConfig(target_hours=500), date(2024, 1, 1))
    
    assert snapshot.total_hours == 0
    assert snapshot.average_hours_per_day == 0
    assert snapshot.progress_percentage == 0
    assert snapshot.hours_remaining == 500
    # 500 / 8 rounds up to 63 working days, every day counts
    assert snapshot.completion_date == date(2024, 3, 3)
    assert snapshot.working_days_remaining == 63
    assert snapshot.completion_met
    assert snapshot.total_entries == 0
    assert snapshot.this_week.average == 0


def test_snapshot_windows_and_projection():
    config = CalendarConfig(
        target_hours=100,
        exclude_weekends={"saturday": True, "sunday": True},
    )
    records = [
        record("2023-12-29", 6),
        record("2024-01-02", 8),
        record("2024-01-03", 8),
    ]
    snapshot = compute_stats(records, config, date(2024, 1, 4))
    
    assert snapshot.total_hours == 22
    assert snapshot.hours_remaining == 78
    assert snapshot.progress_percentage == 22
    assert snapshot.average_hours_per_day == pytest.approx(7.33)
    # ceil(78 / 7.333) = 11 working days starting Thursday 2024-01-04
    assert snapshot.completion_date == date(2024, 1, 18)
    assert snapshot.working_days_remaining == 11
    assert snapshot.this_week.hours == 16
    assert snapshot.this_week.days == 2
    assert snapshot.this_week.average == 8
    assert snapshot.this_month.hours == 16
    assert snapshot.this_month.days == 2
    assert snapshot.previous_month.hours == 6
    assert snapshot.month_over_month_delta == 10
    assert snapshot.total_entries == 3


def test_pace_is_per_logged_day():
    # two logged days a week apart still average their own hours
    records = [record("2024-01-01", 4), record("2024-01-08", 6)]
    assert average_hours_per_day(records) == 5
    assert average_hours_per_day([]) == 0


def test_progress_is_clamped_and_goal_met():
    config = CalendarConfig(target_hours=10)
    snapshot = compute_stats([record("2024-01-01", 8), record("2024-01-02", 8)], config, date(2024, 1, 3))
    
    assert snapshot.progress_percentage == 100
    assert snapshot.hours_remaining == 0
    assert snapshot.completion_date == date(2024, 1, 3)
    assert snapshot.working_days_remaining == 1


def test_progress_percentage_is_rounded():
    snapshot = compute_stats([record("2024-01-01", 1)], CalendarConfig(target_hours=3), date(2024, 1, 1))
    assert snapshot.progress_percentage == 33.33


def test_negative_month_over_month_delta():
    records = [record("2024-01-15", 8), record("2024-01-16", 8), record("2024-02-01", 4)]
    snapshot = compute_stats(records, CalendarConfig(), date(2024, 2, 10))
    
    assert snapshot.this_month.hours == 4
    assert snapshot.previous_month.hours == 16
    assert snapshot.month_over_month_delta == -12


def test_week_is_monday_start():
    assert week_bounds(date(2024, 1, 10)) == (date(2024, 1, 8), date(2024, 1, 14))
    assert week_bounds(date(2024, 1, 14)) == (date(2024, 1, 8), date(2024, 1, 14))
    
    records = [record("2024-01-07", 5), record("2024-01-08", 3), record("2024-01-14", 2)]
    snapshot = compute_stats(records, CalendarConfig(), date(2024, 1, 10))
    assert snapshot.this_week.hours == 5
    assert snapshot.this_week.days == 2


def test_previous_month_crosses_year():
    assert previous_month_bounds(date(2024, 1, 20)) == (date(2023, 12, 1), date(2023, 12, 31))
    assert previous_month_bounds(date(2024, 3, 1)) == (date(2024, 2, 1), date(2024, 2, 29))


def test_snapshot_serializes_with_camel_case_keys():
    data = compute_stats([], CalendarConfig(), date(2024, 1, 1)).model_dump(mode="json", by_alias=True)
    assert data["completionDate"] == "2024-03-03"
    assert set(data["thisWeek"]) == {"hours", "days", "average"}
    assert "workingDaysRemaining" in data
    assert "previousMonth" in data


def test_calendar_grid_filters_month():
    records = [
        SimpleNamespace(date=datetime(2024, 2, 3, 9, 0), hours_logged=4),
        record("2024-02-01", 8),
        record("2024-01-31", 7),
        record("2024-03-01", 6),
    ]
    grid = build_calendar_grid(records, 2024, 2)
    assert [(day.date, day.hours) for day in grid] == [("2024-02-01", 8), ("2024-02-03", 4)]


def test_calendar_grid_rejects_bad_month():
    with pytest.raises(RangeError):
        build_calendar_grid([], 2024, 13)


def test_month_bounds():
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    with pytest.raises(RangeError):
        month_bounds(2024, 0)
