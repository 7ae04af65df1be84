"""
SQLAlchemy declarative base shared by the user and attendance models.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all database models."""
