"""
Business-day calendar helpers.

Saturday and Sunday are non-working days. There is no holiday calendar.
"""

from datetime import date, datetime, timedelta
from typing import Union

DateLike = Union[date, datetime, str]

SATURDAY = 5
SUNDAY = 6


def to_date(value: DateLike) -> date:
    """Normalize a date, datetime or ISO string to a plain date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    raise TypeError(f"Cannot convert {type(value).__name__} to date")


def is_business_day(day: date) -> bool:
    return day.weekday() < SATURDAY


def next_business_day(day: date) -> date:
    """Roll a weekend day forward to the following Monday."""
    if day.weekday() == SATURDAY:
        return day + timedelta(days=2)
    if day.weekday() == SUNDAY:
        return day + timedelta(days=1)
    return day


def count_business_days(start: date, end: date) -> int:
    """Count business days in the half-open range [start, end)."""
    if end <= start:
        return 0

    total_days = (end - start).days
    full_weeks, remainder = divmod(total_days, 7)
    count = full_weeks * 5

    # Walk the leftover partial week
    first_weekday = start.weekday()
    for offset in range(remainder):
        if (first_weekday + offset) % 7 < SATURDAY:
            count += 1
    return count


def count_business_days_inclusive(start: date, end: date) -> int:
    """Count business days in the closed range [start, end]."""
    return count_business_days(start, end + timedelta(days=1))


def start_of_week(day: date) -> date:
    """Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def start_of_next_month(day: date) -> date:
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def business_days_in_month(day: date) -> int:
    return count_business_days(start_of_month(day), start_of_next_month(day))


def days_between(old: DateLike, new: DateLike) -> int:
    """Whole-day difference ``new - old``."""
    return (to_date(new) - to_date(old)).days
