"""
Base service class.
Services hold business logic, call the progress engine and coordinate repositories.
"""

from abc import ABC


class BaseService(ABC):
    """Base class for all services."""
