"""
Calendar configuration validation and merge tests.
"""

from datetime import date

import pytest

from app.core.exceptions import FormatError, RangeError
from app.schemas.attendance import AttendanceCreate, AttendanceUpdate
from app.schemas.user import (
    CalendarConfig,
    CalendarConfigUpdate,
    LunchBreak,
    merge_calendar_config,
)


def test_defaults():
    config = CalendarConfig()
    assert config.target_hours == 500
    assert not config.exclude_weekends.saturday
    assert not config.lunch_break.enabled
    assert config.lunch_break.hours == 1
    assert config.default_start_time == "08:00"
    assert config.default_end_time == "17:00"


def test_accepts_camel_case_payload():
    config = CalendarConfig.model_validate({
        "targetHours": 300,
        "excludeWeekends": {"saturday": True},
        "excludedWeekdays": [5, 3, 5],
        "holidays": ["2024-12-25", "2024-01-01"],
    })
    assert config.target_hours == 300
    assert config.excluded_weekdays == [3, 5]
    assert config.holidays == [date(2024, 1, 1), date(2024, 12, 25)]
    assert date(2024, 12, 25) in config.holiday_set


@pytest.mark.parametrize("codes", [[7], [-1], [0, 6, 9]])
def test_weekday_codes_out_of_range(codes):
    with pytest.raises(RangeError):
        CalendarConfig(excluded_weekdays=codes)


@pytest.mark.parametrize("hours", [-0.5, 8.5])
def test_lunch_break_out_of_range(hours):
    with pytest.raises(RangeError):
        LunchBreak(enabled=True, hours=hours)


def test_target_hours_must_be_positive():
    with pytest.raises(RangeError):
        CalendarConfig(target_hours=0)


def test_malformed_holiday_and_time():
    with pytest.raises(FormatError):
        CalendarConfig(holidays=["12/25/2024"])
    with pytest.raises(FormatError):
        CalendarConfig(default_start_time="8am")


def test_merge_returns_new_value():
    current = CalendarConfig(exclude_weekends={"saturday": True}, holidays=["2024-01-01"])
    patch = CalendarConfigUpdate.model_validate({"excludeWeekends": {"sunday": True}, "targetHours": 240})
    
    merged = merge_calendar_config(current, patch)
    
    assert merged.exclude_weekends.saturday
    assert merged.exclude_weekends.sunday
    assert merged.target_hours == 240
    assert merged.holidays == [date(2024, 1, 1)]
    assert not current.exclude_weekends.sunday
    assert current.target_hours == 500


def test_merge_replaces_lists_and_validates():
    current = CalendarConfig(excluded_weekdays=[1, 2])
    merged = merge_calendar_config(current, CalendarConfigUpdate(excluded_weekdays=[5]))
    assert merged.excluded_weekdays == [5]
    
    with pytest.raises(RangeError):
        merge_calendar_config(current, CalendarConfigUpdate(excluded_weekdays=[8]))


def test_merge_partial_lunch_break():
    current = CalendarConfig(lunch_break={"enabled": True, "hours": 0.5})
    merged = merge_calendar_config(current, CalendarConfigUpdate.model_validate({"lunchBreak": {"hours": 1.5}}))
    assert merged.lunch_break.enabled
    assert merged.lunch_break.hours == 1.5


def test_attendance_hours_range():
    with pytest.raises(RangeError):
        AttendanceCreate(date="2024-01-01", hours_logged=24.5)
    with pytest.raises(RangeError):
        AttendanceUpdate(hours_logged=-1)
    assert AttendanceCreate(date="2024-01-01", hours_logged=24).hours_logged == 24


def test_attendance_date_and_time_format():
    with pytest.raises(FormatError):
        AttendanceCreate(date="01/02/2024", hours_logged=8)
    with pytest.raises(FormatError):
        AttendanceCreate(date="2024-01-02", hours_logged=8, start_time="25:00")


@pytest.mark.parametrize("value", [float("nan"), float("inf")])
def test_non_finite_numbers_are_rejected(value):
    with pytest.raises(RangeError):
        AttendanceCreate(date="2024-01-01", hours_logged=value)
    with pytest.raises(RangeError):
        AttendanceUpdate(hours_logged=value)
    with pytest.raises(RangeError):
        LunchBreak(enabled=True, hours=value)
    with pytest.raises(RangeError):
        CalendarConfig(target_hours=value)


def test_update_cannot_clear_hours():
    with pytest.raises(RangeError):
        AttendanceUpdate.model_validate({"hoursLogged": None})
    assert "hours_logged" not in AttendanceUpdate(notes="x").model_dump(exclude_unset=True)


def test_merge_ignores_nulls_except_start_date():
    current = CalendarConfig(
        target_hours=240,
        start_date="2024-01-01",
        excluded_weekdays=[3],
        lunch_break={"enabled": True, "hours": 0.5},
    )
    patch = CalendarConfigUpdate.model_validate({
        "targetHours": None,
        "excludedWeekdays": None,
        "holidays": None,
        "lunchBreak": None,
        "defaultStartTime": None,
        "startDate": None,
    })
    
    merged = merge_calendar_config(current, patch)
    
    assert merged.target_hours == 240
    assert merged.excluded_weekdays == [3]
    assert merged.lunch_break.hours == 0.5
    assert merged.default_start_time == "08:00"
    assert merged.start_date is None
