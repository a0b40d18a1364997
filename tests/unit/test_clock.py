"""Tests for clocks and calendar keys."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from visit_counter.counter.clock import (
    FixedClock,
    SystemClock,
    date_key,
    is_date_key,
    is_year_month,
    year_month,
)


class TestKeys:
    """Test date key and year-month formatting."""

    def test_date_key_is_zero_padded(self):
        assert date_key(datetime(2024, 3, 5, 23, 59)) == "2024-03-05"

    def test_year_month(self):
        assert year_month(datetime(2024, 12, 31)) == "2024-12"

    def test_date_key_starts_with_year_month(self):
        moment = datetime(2025, 1, 9)
        assert date_key(moment).startswith(year_month(moment))

    def test_is_date_key(self):
        assert is_date_key("2024-02-29") is True
        assert is_date_key("2023-02-29") is False
        assert is_date_key("2024-3-15") is False
        assert is_date_key("2024-03-15 ") is False
        assert is_date_key("2024-03") is False
        assert is_date_key(None) is False

    def test_is_year_month(self):
        assert is_year_month("2024-03") is True
        assert is_year_month("2024-13") is False
        assert is_year_month("2024-00") is False
        assert is_year_month("2024-03-15") is False
        assert is_year_month("2024-%") is False


class TestClocks:
    """Test clock implementations."""

    def test_fixed_clock_can_be_moved(self):
        clock = FixedClock(datetime(2024, 3, 15))
        assert date_key(clock.now()) == "2024-03-15"

        clock.set(datetime(2024, 3, 16))
        assert date_key(clock.now()) == "2024-03-16"

    def test_system_clock_is_naive_local_time_by_default(self):
        now = SystemClock().now()
        assert now.tzinfo is None

    def test_system_clock_uses_given_zone(self):
        now = SystemClock(timezone.utc).now()
        assert now.tzinfo is timezone.utc

    def test_system_clock_from_empty_name(self):
        assert SystemClock.from_name(None).tz is None

    def test_system_clock_from_zone_name(self):
        clock = SystemClock.from_name("Asia/Seoul")

        assert isinstance(clock.tz, ZoneInfo)
        assert clock.tz.key == "Asia/Seoul"
        assert clock.now().utcoffset() == timedelta(hours=9)
