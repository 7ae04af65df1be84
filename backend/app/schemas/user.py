"""
User profile and calendar configuration schemas.

CalendarConfig is the immutable value the progress engine consumes; updates
arrive as CalendarConfigUpdate patches and are merged into a new value.
"""

import math
from datetime import date, datetime
from functools import cached_property
from typing import Any, FrozenSet, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from app.core.config import settings
from app.core.exceptions import RangeError
from app.utils.date_utils import parse_time_of_day, to_calendar_date


def _check_range(value: float, low: float, high: float, name: str) -> float:
    if not (low <= value <= high):
        raise RangeError(
            f"{name} must be between {low:g} and {high:g}",
            details={"field": name, "value": str(value)},
        )
    return value


def _coerce_date(value: Any) -> Any:
    if isinstance(value, (str, datetime)):
        return to_calendar_date(value)
    return value


class WeekendExclusion(BaseModel):
    """Weekend days excluded from the working calendar."""
    saturday: bool = False
    sunday: bool = False

    class Config:
        frozen = True


class LunchBreak(BaseModel):
    """Lunch break deducted when hours are derived from start and end times."""
    enabled: bool = False
    hours: float = 1.0

    @field_validator("hours")
    @classmethod
    def _hours_in_range(cls, value: float) -> float:
        return _check_range(value, 0, 8, "lunchBreak.hours")

    class Config:
        frozen = True


class CalendarConfig(BaseModel):
    """Per-user working calendar and internship goal."""
    target_hours: float = settings.DEFAULT_TARGET_HOURS
    start_date: Optional[date] = None
    exclude_weekends: WeekendExclusion = WeekendExclusion()
    excluded_weekdays: List[int] = []
    holidays: List[date] = []
    lunch_break: LunchBreak = LunchBreak()
    default_start_time: str = "08:00"
    default_end_time: str = "17:00"

    @field_validator("target_hours")
    @classmethod
    def _target_positive(cls, value: float) -> float:
        if not (value > 0 and math.isfinite(value)):
            raise RangeError("Target hours must be a positive number", details={"value": str(value)})
        return value

    @field_validator("start_date", mode="before")
    @classmethod
    def _parse_start_date(cls, value: Any) -> Any:
        return _coerce_date(value)

    @field_validator("excluded_weekdays")
    @classmethod
    def _weekday_codes(cls, value: List[int]) -> List[int]:
        for code in value:
            _check_range(code, 0, 6, "excludedWeekdays")
        return sorted(set(value))

    @field_validator("holidays", mode="before")
    @classmethod
    def _parse_holidays(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple, set, frozenset)):
            return sorted({_coerce_date(item) for item in value})
        return value

    @field_validator("default_start_time", "default_end_time")
    @classmethod
    def _time_of_day(cls, value: str) -> str:
        return parse_time_of_day(value)

    @cached_property
    def holiday_set(self) -> FrozenSet[date]:
        return frozenset(self.holidays)

    @cached_property
    def excluded_weekday_set(self) -> FrozenSet[int]:
        return frozenset(self.excluded_weekdays)

    class Config:
        frozen = True
        alias_generator = to_camel
        populate_by_name = True


class WeekendExclusionUpdate(BaseModel):
    """Partial weekend exclusion patch."""
    saturday: Optional[bool] = None
    sunday: Optional[bool] = None


class LunchBreakUpdate(BaseModel):
    """Partial lunch break patch."""
    enabled: Optional[bool] = None
    hours: Optional[float] = None

    @field_validator("hours")
    @classmethod
    def _hours_in_range(cls, value: Optional[float]) -> Optional[float]:
        if value is None:
            return value
        return _check_range(value, 0, 8, "lunchBreak.hours")


class CalendarConfigUpdate(BaseModel):
    """Schema for updating calendar configuration (all fields optional)."""
    target_hours: Optional[float] = None
    start_date: Optional[date] = None
    exclude_weekends: Optional[WeekendExclusionUpdate] = None
    excluded_weekdays: Optional[List[int]] = None
    holidays: Optional[List[date]] = None
    lunch_break: Optional[LunchBreakUpdate] = None
    default_start_time: Optional[str] = None
    default_end_time: Optional[str] = None

    @field_validator("start_date", mode="before")
    @classmethod
    def _parse_start_date(cls, value: Any) -> Any:
        return _coerce_date(value)

    @field_validator("holidays", mode="before")
    @classmethod
    def _parse_holidays(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [_coerce_date(item) for item in value]
        return value

    @field_validator("default_start_time", "default_end_time")
    @classmethod
    def _time_of_day(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return parse_time_of_day(value)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


def _deep_merge(base: dict, override: dict) -> dict:
    """Merge nested dicts; lists and scalars in the override replace the base value."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


NULLABLE_CONFIG_FIELDS = frozenset({"start_date"})


def merge_calendar_config(current: CalendarConfig, patch: CalendarConfigUpdate) -> CalendarConfig:
    """
    Apply a partial update to a calendar configuration.

    Returns a new CalendarConfig; ``current`` is left untouched. Fields the
    patch did not set keep their current value, nested objects merge key by key.
    An explicit null only clears fields in NULLABLE_CONFIG_FIELDS; elsewhere it
    leaves the current value in place.
    """
    changes = {
        key: value
        for key, value in patch.model_dump(exclude_unset=True).items()
        if value is not None or key in NULLABLE_CONFIG_FIELDS
    }
    for nested in ("exclude_weekends", "lunch_break"):
        if isinstance(changes.get(nested), dict):
            changes[nested] = {k: v for k, v in changes[nested].items() if v is not None}
    merged = _deep_merge(current.model_dump(), changes)
    return CalendarConfig.model_validate(merged)


class UserCreate(BaseModel):
    """Schema for registering a user profile."""
    email: str = Field(..., max_length=255, pattern=r"^\S+@\S+\.\S+$")
    first_name: Optional[str] = Field(None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(None, min_length=1, max_length=50)
    internship_config: Optional[CalendarConfigUpdate] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class UserUpdate(BaseModel):
    """Schema for updating profile names."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(None, min_length=1, max_length=50)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class UserResponse(BaseModel):
    """Schema for user profile response."""
    id: UUID
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    internship_config: CalendarConfig

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True
