"""Clocks and calendar keys.

Day buckets are named ``YYYY-MM-DD`` and months ``YYYY-MM``. Both come from
the server's clock, never from the client.
"""

import re
from datetime import datetime, tzinfo
from typing import Optional, Protocol
from zoneinfo import ZoneInfo

DATE_KEY_FORMAT = "%Y-%m-%d"
YEAR_MONTH_FORMAT = "%Y-%m"

_DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_YEAR_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock, server-local unless a zone is given."""

    def __init__(self, tz: Optional[tzinfo] = None):
        self.tz = tz

    @classmethod
    def from_name(cls, name: Optional[str]) -> "SystemClock":
        return cls(ZoneInfo(name) if name else None)

    def now(self) -> datetime:
        if self.tz is None:
            return datetime.now()
        return datetime.now(self.tz)


class FixedClock:
    """Clock pinned to a moment until moved with ``set``."""

    def __init__(self, moment: datetime):
        self.moment = moment

    def set(self, moment: datetime):
        self.moment = moment

    def now(self) -> datetime:
        return self.moment


def date_key(moment: datetime) -> str:
    return moment.strftime(DATE_KEY_FORMAT)


def year_month(moment: datetime) -> str:
    return moment.strftime(YEAR_MONTH_FORMAT)


def is_date_key(value: str) -> bool:
    """True for a real calendar day written as YYYY-MM-DD."""
    if not isinstance(value, str) or not _DATE_KEY_RE.match(value):
        return False
    try:
        datetime.strptime(value, DATE_KEY_FORMAT)
    except ValueError:
        return False
    return True


def is_year_month(value: str) -> bool:
    if not isinstance(value, str) or not _YEAR_MONTH_RE.match(value):
        return False
    return 1 <= int(value[5:]) <= 12
