"""Durable day counters backed by SQLite.

Every operation returns a ``StoreResult`` instead of raising. Storage
problems become a result carrying a ``StoreError`` and the caller picks the
fallback.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError

from ..database.connection import DatabaseManager
from ..database.migrations import create_tables
from ..models.day_counter import DayCounter
from .clock import is_date_key, is_year_month
from .errors import InvalidKey, StoreError, StoreUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreResult:
    """A count read from or written to the store, or the reason it failed."""

    value: int = 0
    error: Optional[StoreError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[int]) -> "StoreResult":
        return cls(value=int(value or 0))

    @classmethod
    def failure(cls, error: StoreError) -> "StoreResult":
        return cls(error=error)

    def value_or(self, default: int) -> int:
        return self.value if self.ok else default


class VisitStore:
    """Day counter operations over one ``DatabaseManager``."""

    def __init__(self, db: DatabaseManager):
        self.db = db

    async def _ensure_tables(self):
        """Create the visits table if startup could not."""
        if self.db.tables_ready:
            return
        async with self.db.tables_lock:
            if not self.db.tables_ready:
                await create_tables(self.db)

    async def increment(self, day: str) -> StoreResult:
        """Add one visit to ``day`` and return the new count.

        Runs as a single ``INSERT ... ON CONFLICT DO UPDATE ... RETURNING``
        so concurrent callers on the same day serialise on the database
        write lock instead of racing a read against a write.
        """
        if not is_date_key(day):
            return StoreResult.failure(InvalidKey(day, "increment"))

        stmt = (
            sqlite_insert(DayCounter)
            .values(date_key=day, count=1)
            .on_conflict_do_update(
                index_elements=[DayCounter.date_key],
                set_={
                    "count": DayCounter.count + 1,
                    "updated_at": func.now(),
                },
            )
            .returning(DayCounter.count)
        )

        try:
            await self._ensure_tables()
            async with self.db.session() as session:
                count = (await session.execute(stmt)).scalar_one()
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            return StoreResult.failure(StoreUnavailable(str(e), "increment"))

        logger.debug("Visit recorded for %s (count=%d)", day, count)
        return StoreResult.success(count)

    async def get_day_count(self, day: str) -> StoreResult:
        """Return the visits recorded for ``day``; a missing row counts as 0."""
        if not is_date_key(day):
            return StoreResult.failure(InvalidKey(day, "get_day_count"))

        try:
            await self._ensure_tables()
            async with self.db.session() as session:
                count = (
                    await session.execute(
                        select(DayCounter.count).where(DayCounter.date_key == day)
                    )
                ).scalar()
        except (SQLAlchemyError, OSError) as e:
            return StoreResult.failure(StoreUnavailable(str(e), "get_day_count"))

        return StoreResult.success(count)

    async def get_month_total(self, month: str) -> StoreResult:
        """Sum the day counters whose key starts with ``month`` (YYYY-MM)."""
        if not is_year_month(month):
            return StoreResult.failure(InvalidKey(month, "get_month_total"))

        try:
            await self._ensure_tables()
            async with self.db.session() as session:
                total = (
                    await session.execute(
                        select(func.coalesce(func.sum(DayCounter.count), 0)).where(
                            DayCounter.date_key.startswith(f"{month}-")
                        )
                    )
                ).scalar()
        except (SQLAlchemyError, OSError) as e:
            return StoreResult.failure(StoreUnavailable(str(e), "get_month_total"))

        return StoreResult.success(total)
