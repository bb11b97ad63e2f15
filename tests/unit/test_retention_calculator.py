"""Tests for retention expiry (20 calendar years after last activity)."""

from datetime import UTC, date, datetime

import pytest

from recordvault.application.services.retention_calculator import (
    add_years,
    expiry_of,
    is_expired,
)


class TestExpiryOf:
    def test_twenty_years_from_date(self) -> None:
        assert expiry_of(date(2024, 3, 15)) == date(2044, 3, 15)

    def test_keeps_time_and_tz(self) -> None:
        activity = datetime(2024, 3, 15, 10, 30, tzinfo=UTC)
        assert expiry_of(activity) == datetime(2044, 3, 15, 10, 30, tzinfo=UTC)

    def test_leap_day_to_non_leap_year(self) -> None:
        assert expiry_of(date(2024, 2, 29), retention_years=1) == date(2025, 2, 28)

    def test_leap_day_to_leap_year_kept(self) -> None:
        assert expiry_of(date(2024, 2, 29)) == date(2044, 2, 29)

    def test_none_stays_none(self) -> None:
        assert expiry_of(None) is None

    def test_negative_years_rejected(self) -> None:
        with pytest.raises(ValueError, match="negative"):
            expiry_of(date(2024, 1, 1), retention_years=-1)


class TestAddYears:
    def test_plain(self) -> None:
        assert add_years(date(2000, 1, 31), 5) == date(2005, 1, 31)


class TestIsExpired:
    def test_on_expiry_day(self) -> None:
        assert is_expired(date(2044, 3, 15), date(2044, 3, 15))

    def test_before_expiry_day(self) -> None:
        assert not is_expired(date(2044, 3, 15), date(2044, 3, 14))

    def test_datetime_expiry_compared_by_day(self) -> None:
        expiry = datetime(2044, 3, 15, 23, 59, tzinfo=UTC)
        assert is_expired(expiry, date(2044, 3, 15))

    def test_no_expiry_never_expires(self) -> None:
        assert not is_expired(None, date(2100, 1, 1))
