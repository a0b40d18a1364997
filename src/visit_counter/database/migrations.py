"""Database migration utilities."""

import logging

from ..models.base import Base
from ..models.day_counter import DayCounter  # noqa: F401  registers the visits table
from .connection import DatabaseManager

logger = logging.getLogger(__name__)


async def create_tables(db: DatabaseManager):
    """Create all database tables that do not exist yet."""
    db.initialize()
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    db.tables_ready = True
    logger.info("Visit tables ready")


async def drop_tables(db: DatabaseManager):
    """Drop all database tables."""
    db.initialize()
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    db.tables_ready = False
