"""
Attendance controller.
"""

from datetime import date
from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.models.user import User
from app.services.attendance_service import AttendanceService
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


class AttendanceController(BaseController):
    """Controller for attendance operations."""
    
    def __init__(self, session: AsyncSession):
        self.attendance_service = AttendanceService(session)
    
    async def create_record(self, user: User, record_data: AttendanceCreate) -> AttendanceResponse:
        """Log hours for a day."""
        return await self.attendance_service.create_record(user, record_data)
    
    async def list_records(
        self,
        user: User,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> AttendanceListResponse:
        """List records with an optional date range."""
        items = await self.attendance_service.list_records(user, start_date, end_date)
        return AttendanceListResponse(items=items, total=len(items))
    
    async def get_record(self, user: User, record_id: UUID) -> AttendanceResponse:
        """Get a record by ID."""
        return await self.attendance_service.get_record(user, record_id)
    
    async def update_record(
        self,
        user: User,
        record_id: UUID,
        record_data: AttendanceUpdate,
    ) -> AttendanceResponse:
        """Update a record."""
        return await self.attendance_service.update_record(user, record_id, record_data)
    
    async def delete_record(self, user: User, record_id: UUID) -> None:
        """Delete a record."""
        await self.attendance_service.delete_record(user, record_id)
    
    async def get_stats(self, user: User, today: Optional[date] = None) -> ProgressSnapshot:
        """Progress snapshot."""
        return await self.attendance_service.get_stats(user, today)
    
    async def get_calendar_month(self, user: User, year: int, month: int) -> CalendarMonthResponse:
        """Month calendar grid."""
        return await self.attendance_service.get_calendar_month(user, year, month)
    
    def hours_from_times(self, user: User, request: HoursFromTimesRequest) -> HoursFromTimesResponse:
        """Hours for a start/end pair."""
        return self.attendance_service.hours_from_times(user, request)
