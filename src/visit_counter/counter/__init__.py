"""Visit counting: date keys, the day counter store and the request service."""

from .clock import Clock, FixedClock, SystemClock, date_key, year_month
from .errors import InvalidKey, StoreError, StoreUnavailable
from .service import VisitCounterService, VisitReport
from .store import StoreResult, VisitStore

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "date_key",
    "year_month",
    "InvalidKey",
    "StoreError",
    "StoreUnavailable",
    "VisitCounterService",
    "VisitReport",
    "StoreResult",
    "VisitStore",
]
