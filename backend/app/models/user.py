"""
User model holding the profile and the internship calendar configuration.
"""

from sqlalchemy import Column, String, DateTime, JSON, Uuid, func
from sqlalchemy.orm import relationship
import uuid

from app.db.base import Base


class User(Base):
    """Intern profile; the calendar configuration is stored as one JSON document."""
    
    __tablename__ = "users"
    
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    first_name = Column(String(50), nullable=True)
    last_name = Column(String(50), nullable=True)
    internship_config = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())
    
    # Relationships
    attendance_records = relationship(
        "AttendanceRecord",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
