"""Visit counting service.

Each request takes one of three paths: record a visit and report, report
only, or reject. The service keeps nothing between requests; the store and
the clock are handed in at construction.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..observability.logging import set_log_context
from .clock import Clock, date_key, year_month
from .store import StoreResult, VisitStore

logger = logging.getLogger(__name__)

INVALID_ACTION = "Invalid action"
METHOD_NOT_ALLOWED = "Method not allowed"
SERVER_ERROR = "Server error"


@dataclass(frozen=True)
class VisitReport:
    """Body returned to the client for every request."""

    success: bool
    day_count: Optional[int] = None
    month_count: Optional[int] = None
    date: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def rejected(cls, reason: str) -> "VisitReport":
        return cls(success=False, error=reason)

    @classmethod
    def server_error(cls) -> "VisitReport":
        return cls(success=False, error=SERVER_ERROR, day_count=0, month_count=0)

    def to_dict(self) -> dict:
        body = {"success": self.success}
        if self.error is not None:
            body["error"] = self.error
        if self.day_count is not None:
            body["dayCount"] = self.day_count
        if self.month_count is not None:
            body["monthCount"] = self.month_count
        if self.date is not None:
            body["date"] = self.date
        return body


class VisitCounterService:
    """Records and reports visits for the clock's current day and month."""

    def __init__(self, store: VisitStore, clock: Clock):
        self.store = store
        self.clock = clock

    async def record_visit(self) -> VisitReport:
        """Count one visit for today, then report today's and this month's totals."""
        now = self.clock.now()
        today = date_key(now)
        set_log_context(date_key=today)

        day_count = self._value_or_zero(await self.store.increment(today))
        month_count = self._value_or_zero(await self.store.get_month_total(year_month(now)))

        return VisitReport(
            success=True,
            day_count=day_count,
            month_count=month_count,
            date=today,
        )

    async def report(self) -> VisitReport:
        """Report today's and this month's totals without recording anything."""
        now = self.clock.now()
        today = date_key(now)
        set_log_context(date_key=today)

        day_count = self._value_or_zero(await self.store.get_day_count(today))
        month_count = self._value_or_zero(await self.store.get_month_total(year_month(now)))

        return VisitReport(
            success=True,
            day_count=day_count,
            month_count=month_count,
            date=today,
        )

    def reject(self, reason: str) -> VisitReport:
        return VisitReport.rejected(reason)

    @staticmethod
    def _value_or_zero(result: StoreResult) -> int:
        if not result.ok:
            logger.warning(
                "Store %s failed, reporting 0: %s",
                result.error.operation or "operation",
                result.error,
            )
        return result.value_or(0)
