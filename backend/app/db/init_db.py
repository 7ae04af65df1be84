"""
Database bootstrapping for development and tests.
Production schemas are expected to be managed by migrations.
"""

from app.db.base import Base
from app.db import session as db_session
from app.core.logging import get_logger

import app.models  # noqa: F401  registers models with Base

logger = get_logger(__name__)


async def create_tables() -> None:
    """Create all tables that do not exist yet."""
    if db_session.engine is None:
        db_session.create_engine()
    
    async with db_session.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    logger.info("Database tables created", extra={"tables": sorted(Base.metadata.tables)})
