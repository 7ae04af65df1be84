"""
Health service.
Reports uptime and database reachability.
"""

import logging
import time

from app.services.base_service import BaseService
from app.schemas.health import HealthResponse
from app.db import session as db_session
from app.db.repositories.health_repository import HealthRepository

logger = logging.getLogger(__name__)


class HealthService(BaseService):
    """Service for health check operations."""
    
    def __init__(self):
        self.start_time = time.time()
    
    async def get_health(self) -> HealthResponse:
        """
        Get system health status.
        
        Returns:
            HealthResponse with status, uptime, and checks
        """
        uptime_seconds = int(time.time() - self.start_time)
        uptime_str = f"PT{uptime_seconds}S"  # ISO 8601 duration format
        
        checks = {}
        if db_session.async_session_maker is None:
            checks["database"] = "not initialized"
        else:
            async with db_session.async_session_maker() as session:
                db_ok = await HealthRepository(session=session).check_database()
            checks["database"] = "ok" if db_ok else "error"
        
        status = "ok" if all(check == "ok" for check in checks.values()) else "degraded"
        if status != "ok":
            logger.warning("Health check degraded", extra={"checks": checks})
        
        return HealthResponse(
            status=status,
            uptime=uptime_str,
            checks=checks,
        )
