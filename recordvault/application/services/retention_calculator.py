"""Retention expiry for medical records (Lei 13.787/2018).

Records are kept for RETENTION_YEARS calendar years after the last
activity. Year addition keeps month and day; 29 February rolls back to
28 February when the target year is not a leap year.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TypeVar

from recordvault.core.constants import RETENTION_YEARS

D = TypeVar("D", date, datetime)


def add_years(value: D, years: int) -> D:
    """Add calendar years to a date or datetime, preserving time and tzinfo."""
    try:
        return value.replace(year=value.year + years)
    except ValueError:
        # Only 29 February can fail here.
        return value.replace(year=value.year + years, day=28)


def expiry_of(activity_date: D | None, retention_years: int = RETENTION_YEARS) -> D | None:
    """Return the retention expiry for an activity date; None stays None."""
    if activity_date is None:
        return None
    if retention_years < 0:
        raise ValueError(f"retention_years must not be negative, got {retention_years}")
    return add_years(activity_date, retention_years)


def is_expired(expiry: date | datetime | None, today: date) -> bool:
    """Return True when the expiry date has been reached on or before today."""
    if expiry is None:
        return False
    expiry_day = expiry.date() if isinstance(expiry, datetime) else expiry
    return expiry_day <= today
