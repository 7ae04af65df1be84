"""
Attendance repository for database operations.
"""

from datetime import date
from typing import Optional, List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_

from app.db.repositories.base_repository import BaseRepository
from app.models.attendance import AttendanceRecord


class AttendanceRepository(BaseRepository[AttendanceRecord]):
    """Repository for attendance record operations."""
    
    def __init__(self, session: AsyncSession):
        super().__init__(AttendanceRecord, session)
    
    async def get_for_user(self, record_id: UUID, user_id: UUID) -> Optional[AttendanceRecord]:
        """Get a record by ID, scoped to its owner."""
        result = await self.session.execute(
            select(AttendanceRecord).where(
                and_(
                    AttendanceRecord.id == record_id,
                    AttendanceRecord.user_id == user_id,
                )
            )
        )
        return result.scalar_one_or_none()
    
    async def get_by_user_and_date(self, user_id: UUID, day: date) -> Optional[AttendanceRecord]:
        """Get the record for a user's calendar day."""
        result = await self.session.execute(
            select(AttendanceRecord).where(
                and_(
                    AttendanceRecord.user_id == user_id,
                    AttendanceRecord.date == day,
                )
            )
        )
        return result.scalar_one_or_none()
    
    async def list_by_user(
        self,
        user_id: UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[AttendanceRecord]:
        """List a user's records, newest first, optionally within an inclusive date range."""
        query = select(AttendanceRecord).where(AttendanceRecord.user_id == user_id)
        if start_date:
            query = query.where(AttendanceRecord.date >= start_date)
        if end_date:
            query = query.where(AttendanceRecord.date <= end_date)
        query = query.order_by(AttendanceRecord.date.desc())
        result = await self.session.execute(query)
        return list(result.scalars().all())
    
    async def delete_for_user(self, record_id: UUID, user_id: UUID) -> bool:
        """Delete a record owned by the user."""
        record = await self.get_for_user(record_id, user_id)
        if not record:
            return False
        await self.session.delete(record)
        await self.session.flush()
        return True
