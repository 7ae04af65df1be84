"""
Attendance model - hours logged by one user on one calendar day.
"""

from sqlalchemy import Column, String, Date, DateTime, Float, ForeignKey, UniqueConstraint, Uuid, func
from sqlalchemy.orm import relationship
import uuid

from app.db.base import Base


class AttendanceRecord(Base):
    """Attendance record - one per user per calendar day."""
    
    __tablename__ = "attendance_records"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_attendance_user_date"),
    )
    
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    hours_logged = Column(Float, nullable=False)
    start_time = Column(String(5), nullable=True)  # HH:MM
    end_time = Column(String(5), nullable=True)  # HH:MM
    notes = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())
    
    # Relationships
    user = relationship("User", back_populates="attendance_records")
