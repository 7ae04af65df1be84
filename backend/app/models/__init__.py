"""
Database models.
Import all models here to ensure they're registered with Base.
"""

from app.models.user import User
from app.models.attendance import AttendanceRecord

__all__ = [
    "User",
    "AttendanceRecord",
]
