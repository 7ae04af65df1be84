"""
Health check response schemas.
"""

from pydantic import BaseModel
from typing import Dict

from app.core.config import settings


class HealthResponse(BaseModel):
    """Health check response schema."""
    status: str
    uptime: str
    version: str = settings.VERSION
    checks: Dict[str, str] = {}
