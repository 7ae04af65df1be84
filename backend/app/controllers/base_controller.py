"""
Base controller class.
Controllers sit between the API endpoints and the services and return Pydantic schemas.
"""

from abc import ABC


class BaseController(ABC):
    """Base class for all controllers."""
