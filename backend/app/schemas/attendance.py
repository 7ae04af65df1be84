"""
Attendance Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, Optional, List
from datetime import date, datetime
from uuid import UUID

from app.core.exceptions import RangeError
from app.utils.date_utils import parse_calendar_date, parse_time_of_day


def _hours_in_range(value: Optional[float]) -> Optional[float]:
    if value is not None and not (0 <= value <= 24):
        raise RangeError("Hours must be between 0 and 24", details={"value": str(value)})
    return value


def _time_or_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    return parse_time_of_day(value)


class AttendanceBase(BaseModel):
    """Base attendance schema with common fields."""
    hours_logged: float
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("hours_logged")
    @classmethod
    def _validate_hours(cls, value: float) -> float:
        return _hours_in_range(value)

    @field_validator("start_time", "end_time")
    @classmethod
    def _validate_time(cls, value: Optional[str]) -> Optional[str]:
        return _time_or_none(value)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class AttendanceCreate(AttendanceBase):
    """Schema for logging hours for one calendar day."""
    date: date

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_calendar_date(value)
        return value


class AttendanceUpdate(BaseModel):
    """Schema for updating an attendance record (all fields optional, date is fixed)."""
    hours_logged: Optional[float] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("hours_logged")
    @classmethod
    def _validate_hours(cls, value: Optional[float]) -> float:
        # only runs for a value the client sent; an omitted field stays unset
        if value is None:
            raise RangeError("Hours logged cannot be cleared", details={"field": "hoursLogged"})
        return _hours_in_range(value)

    @field_validator("start_time", "end_time")
    @classmethod
    def _validate_time(cls, value: Optional[str]) -> Optional[str]:
        return _time_or_none(value)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class AttendanceResponse(BaseModel):
    """Schema for attendance response."""
    id: UUID
    user_id: UUID
    date: date
    hours_logged: float
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class AttendanceListResponse(BaseModel):
    """Schema for attendance list response."""
    items: List[AttendanceResponse]
    total: int


class WeekStats(BaseModel):
    """Hours logged in the Monday-start week containing today."""
    hours: float = 0
    days: int = 0
    average: float = 0


class MonthStats(BaseModel):
    """Hours logged in the calendar month containing today."""
    hours: float = 0
    days: int = 0


class PreviousMonthStats(BaseModel):
    """Hours logged in the month before the current one."""
    hours: float = 0


class ProgressSnapshot(BaseModel):
    """Computed progress statistics for one user at one point in time."""
    total_hours: float
    target_hours: float
    hours_remaining: float
    progress_percentage: float
    average_hours_per_day: float
    completion_date: date
    completion_met: bool
    working_days_remaining: int
    this_week: WeekStats
    this_month: MonthStats
    previous_month: PreviousMonthStats
    month_over_month_delta: float
    total_entries: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class CalendarDay(BaseModel):
    """Hours logged on one day of a month grid."""
    date: str
    hours: float


class CalendarMonthResponse(BaseModel):
    """Schema for the month calendar view."""
    year: int
    month: int
    attendance: List[CalendarDay]


class HoursFromTimesRequest(BaseModel):
    """Start and end of a working day."""
    start_time: str
    end_time: str

    @field_validator("start_time", "end_time")
    @classmethod
    def _validate_time(cls, value: str) -> str:
        return parse_time_of_day(value)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class HoursFromTimesResponse(BaseModel):
    """Hours derived from a start/end pair."""
    hours_logged: float
    lunch_break_deducted: float

    class Config:
        alias_generator = to_camel
        populate_by_name = True
