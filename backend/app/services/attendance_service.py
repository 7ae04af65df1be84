"""
Attendance service with business logic.
"""

import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DuplicateKeyError, NotFoundError, RangeError
from app.db.repositories.attendance_repository import AttendanceRepository
from app.models.user import User
from app.schemas.attendance import (
    AttendanceCreate,
    AttendanceResponse,
    AttendanceUpdate,
    CalendarMonthResponse,
    HoursFromTimesRequest,
    HoursFromTimesResponse,
    ProgressSnapshot,
)
from app.services.base_service import BaseService
from app.services.user_service import calendar_config_for
from app.utils.date_calculations import calculate_hours_from_times
from app.utils.date_utils import format_calendar_date, local_today
from app.utils.progress_stats import build_calendar_grid, compute_stats, month_bounds

logger = logging.getLogger(__name__)


class AttendanceService(BaseService):
    """Service for attendance operations."""
    
    def __init__(self, session: AsyncSession):
        self.session = session
        self.attendance_repo = AttendanceRepository(session)
    
    async def create_record(
        self,
        user: User,
        record_data: AttendanceCreate,
        today: Optional[date] = None,
    ) -> AttendanceResponse:
        """
        Log hours for a calendar day.
        
        Raises:
            RangeError: If the day lies in the future
            DuplicateKeyError: If the day is already logged; use update instead
        """
        user_id = user.id
        today = today or local_today()
        if record_data.date > today:
            raise RangeError(
                "Cannot log hours for future dates",
                details={"date": format_calendar_date(record_data.date)},
            )
        
        if await self.attendance_repo.get_by_user_and_date(user_id, record_data.date):
            raise self._duplicate(record_data.date)
        
        try:
            record = await self.attendance_repo.create(
                user_id=user_id,
                **record_data.model_dump(),
            )
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            # a concurrent create for the same day won the race
            if await self.attendance_repo.get_by_user_and_date(user_id, record_data.date):
                raise self._duplicate(record_data.date) from e
            raise
        
        logger.info(
            "Attendance record created",
            extra={"user_id": str(user_id), "date": format_calendar_date(record.date)},
        )
        return AttendanceResponse.model_validate(record)
    
    async def get_record(self, user: User, record_id: UUID) -> AttendanceResponse:
        """Get one of the user's records."""
        record = await self.attendance_repo.get_for_user(record_id, user.id)
        if not record:
            raise NotFoundError("Attendance entry not found", details={"id": str(record_id)})
        return AttendanceResponse.model_validate(record)
    
    async def list_records(
        self,
        user: User,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[AttendanceResponse]:
        """List the user's records, newest first."""
        records = await self.attendance_repo.list_by_user(user.id, start_date, end_date)
        return [AttendanceResponse.model_validate(r) for r in records]
    
    async def update_record(
        self,
        user: User,
        record_id: UUID,
        record_data: AttendanceUpdate,
    ) -> AttendanceResponse:
        """Update hours, times or notes of an existing record; the day itself is fixed."""
        record = await self.attendance_repo.get_for_user(record_id, user.id)
        if not record:
            raise NotFoundError("Attendance entry not found", details={"id": str(record_id)})
        
        update_dict = record_data.model_dump(exclude_unset=True)
        if update_dict:
            record = await self.attendance_repo.update(record, **update_dict)
            await self.session.commit()
            logger.info(
                "Attendance record updated",
                extra={"user_id": str(user.id), "record_id": str(record_id)},
            )
        return AttendanceResponse.model_validate(record)
    
    async def delete_record(self, user: User, record_id: UUID) -> None:
        """Delete one of the user's records."""
        deleted = await self.attendance_repo.delete_for_user(record_id, user.id)
        if not deleted:
            raise NotFoundError("Attendance entry not found", details={"id": str(record_id)})
        await self.session.commit()
        logger.info(
            "Attendance record deleted",
            extra={"user_id": str(user.id), "record_id": str(record_id)},
        )
    
    async def get_stats(self, user: User, today: Optional[date] = None) -> ProgressSnapshot:
        """Compute the progress snapshot from all of the user's records."""
        records = await self.attendance_repo.list_by_user(user.id)
        return compute_stats(records, calendar_config_for(user), today or local_today())
    
    async def get_calendar_month(self, user: User, year: int, month: int) -> CalendarMonthResponse:
        """Hours per logged day for one month."""
        start, end = month_bounds(year, month)
        records = await self.attendance_repo.list_by_user(user.id, start, end)
        return CalendarMonthResponse(
            year=year,
            month=month,
            attendance=build_calendar_grid(records, year, month),
        )
    
    def hours_from_times(self, user: User, request: HoursFromTimesRequest) -> HoursFromTimesResponse:
        """Derive logged hours from start/end times under the user's lunch-break setting."""
        hours, deducted = calculate_hours_from_times(
            request.start_time,
            request.end_time,
            calendar_config_for(user),
        )
        return HoursFromTimesResponse(hours_logged=hours, lunch_break_deducted=deducted)
    
    @staticmethod
    def _duplicate(day: date) -> DuplicateKeyError:
        return DuplicateKeyError(
            "Entry already exists for this date. Use PUT to update.",
            details={"date": format_calendar_date(day)},
        )
