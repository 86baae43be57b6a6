"""
Calendar-period workload: today, this week and this month.

Unlike the window report, hours are not spread across business days here.
An item counts fully toward every period that contains its due date.
"""

import math
from datetime import date, timedelta
from typing import Dict, Iterable, Tuple

from .calendar import (
    DateLike,
    business_days_in_month,
    start_of_month,
    start_of_next_month,
    start_of_week,
    to_date,
)
from .core import round_percent
from .models import PeriodLoad, Resource, WorkItem, WorkloadReport

Window = Tuple[date, date]


def period_windows(today: DateLike) -> Dict[str, Window]:
    """Half-open day, week (Monday start) and month windows around ``today``."""
    day = to_date(today)
    monday = start_of_week(day)
    return {
        "day": (day, day + timedelta(days=1)),
        "week": (monday, monday + timedelta(days=7)),
        "month": (start_of_month(day), start_of_next_month(day)),
    }


def hours_due_within(items: Iterable[WorkItem], window: Window) -> float:
    """Sum of estimated hours of items due inside ``window``."""
    start, end = window
    return math.fsum(
        item.estimated_hours or 0.0
        for item in items
        if item.due_date is not None and start <= item.due_date < end
    )


def _load(assigned: float, capacity: float) -> PeriodLoad:
    percentage = round_percent(assigned / capacity * 100) if capacity > 0 else 0
    return PeriodLoad(assigned=assigned, capacity=capacity, percentage=percentage)


def summarize_workload(resource: Resource, today: DateLike) -> WorkloadReport:
    """Assigned hours against capacity for the day, week and month containing today."""
    windows = period_windows(today)
    weekly = resource.weekly_available_hours
    daily = resource.daily_hours
    monthly = daily * business_days_in_month(to_date(today))

    return WorkloadReport(
        resource_id=resource.id,
        name=resource.name,
        email=resource.email,
        weekly_hours=resource.weekly_hours,
        workload_percent=resource.workload_percent,
        available_hours_per_week=weekly,
        day=_load(hours_due_within(resource.open_items, windows["day"]), daily),
        week=_load(hours_due_within(resource.open_items, windows["week"]), weekly),
        month=_load(hours_due_within(resource.open_items, windows["month"]), monthly),
    )
