"""
Attendance API endpoints.
"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.db.session import get_db
from app.api.v1.middleware import require_current_user
from app.controllers.attendance_controller import AttendanceController
from app.models.user import User
from app.schemas.attendance import (
    AttendanceCreate,
    AttendanceListResponse,
    AttendanceResponse,
    AttendanceUpdate,
    CalendarMonthResponse,
    HoursFromTimesRequest,
    HoursFromTimesResponse,
    ProgressSnapshot,
)
from app.utils.date_utils import parse_calendar_date

router = APIRouter()


def _optional_date(value: Optional[str]) -> Optional[date]:
    """Parse an optional YYYY-MM-DD query parameter."""
    return parse_calendar_date(value) if value else None


@router.post("", response_model=AttendanceResponse, status_code=status.HTTP_201_CREATED)
async def create_attendance(
    record_data: AttendanceCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_current_user),
) -> AttendanceResponse:
    """Log hours for a calendar day. A day that is already logged returns 409."""
    controller = AttendanceController(db)
    return await controller.create_record(current_user, record_data)


@router.get("", response_model=AttendanceListResponse)
async def list_attendance(
    start_date: Optional[str] = Query(None, alias="startDate", description="YYYY-MM-DD, inclusive"),
    end_date: Optional[str] = Query(None, alias="endDate", description="YYYY-MM-DD, inclusive"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_current_user),
) -> AttendanceListResponse:
    """List attendance records, newest first."""
    controller = AttendanceController(db)
    return await controller.list_records(
        current_user,
        start_date=_optional_date(start_date),
        end_date=_optional_date(end_date),
    )


@router.get("/stats", response_model=ProgressSnapshot)
async def get_stats(
    today: Optional[str] = Query(None, description="Reference date YYYY-MM-DD; defaults to the local date"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_current_user),
) -> ProgressSnapshot:
    """Progress toward the target hours and projected completion date."""
    controller = AttendanceController(db)
    return await controller.get_stats(current_user, _optional_date(today))


@router.get("/calendar/{year}/{month}", response_model=CalendarMonthResponse)
async def get_calendar_month(
    year: int = Path(..., ge=1, le=9999),
    month: int = Path(..., ge=1, le=12),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_current_user),
) -> CalendarMonthResponse:
    """Hours per logged day for a month."""
    controller = AttendanceController(db)
    return await controller.get_calendar_month(current_user, year, month)


@router.post("/hours-from-times", response_model=HoursFromTimesResponse)
async def hours_from_times(
    request: HoursFromTimesRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_current_user),
) -> HoursFromTimesResponse:
    """Hours between a start and end time, less the configured lunch break."""
    controller = AttendanceController(db)
    return controller.hours_from_times(current_user, request)


@router.get("/{record_id}", response_model=AttendanceResponse)
async def get_attendance(
    record_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_current_user),
) -> AttendanceResponse:
    """Get an attendance record by ID."""
    controller = AttendanceController(db)
    return await controller.get_record(current_user, record_id)


@router.put("/{record_id}", response_model=AttendanceResponse)
async def update_attendance(
    record_id: UUID,
    record_data: AttendanceUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_current_user),
) -> AttendanceResponse:
    """Update hours, times or notes of an attendance record."""
    controller = AttendanceController(db)
    return await controller.update_record(current_user, record_id, record_data)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_attendance(
    record_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_current_user),
) -> Response:
    """Delete an attendance record."""
    controller = AttendanceController(db)
    await controller.delete_record(current_user, record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
