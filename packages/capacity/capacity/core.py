"""
Core workload distribution and capacity aggregation.
"""

import logging
import math
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional

from .calendar import (
    DateLike,
    count_business_days,
    count_business_days_inclusive,
    next_business_day,
    to_date,
)
from .models import CapacityPeriod, CapacityReport, CapacityResult, Resource, WorkItem

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 14
WORK_DAYS_PER_WEEK = 5


def round_hours(value: float) -> float:
    """Round an hour figure to one decimal place, half away from zero."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def round_percent(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _single_day_hours(anchor: date, hours: float, window_start: date, window_end: date) -> float:
    """All hours land on ``anchor``; count them only if the window contains it."""
    if window_start <= anchor < window_end:
        return hours
    return 0.0


def distribute(
    item: WorkItem,
    window_start: DateLike,
    window_end: DateLike,
    today: DateLike,
) -> float:
    """
    Hours of ``item`` that fall inside the window [window_start, window_end).

    Remaining hours are spread evenly across the business days between the
    next business day on/after ``today`` and the due date (inclusive).
    Overdue items put all of their hours on the next business day.

    Args:
        item: Work item with estimated hours and due date
        window_start: First day of the reporting window
        window_end: Day after the last day of the reporting window
        today: Reference day used to find the next business day

    Returns:
        Hours attributed to the window (never negative)
    """
    if item.due_date is None or item.estimated_hours is None:
        return 0.0
    if item.estimated_hours <= 0:
        return 0.0

    start = to_date(window_start)
    end = to_date(window_end)
    reference = to_date(today)
    due = to_date(item.due_date)
    hours = float(item.estimated_hours)

    next_workday = next_business_day(reference)

    # Overdue: everything is due now
    if due < reference:
        return _single_day_hours(next_workday, hours, start, end)

    # No business day left before the due date
    if next_workday > due:
        return _single_day_hours(next_workday, hours, start, end)

    total_work_days = max(1, count_business_days_inclusive(next_workday, due))
    hours_per_day = hours / total_work_days

    overlap_start = max(start, next_workday)
    overlap_end = min(end, due + timedelta(days=1))
    period_work_days = count_business_days(overlap_start, overlap_end)

    return hours_per_day * period_work_days


def _build_report(resource: Resource, window_start: date, window_end: date, work_days: int) -> CapacityReport:
    daily_hours = resource.daily_hours
    total_available_hours = daily_hours * work_days

    # The window start doubles as "today" for distribution
    assigned_hours = math.fsum(
        distribute(item, window_start, window_end, window_start)
        for item in resource.open_items
    )

    free_hours = max(0.0, total_available_hours - assigned_hours)
    utilization_percent = (
        round_percent(assigned_hours / total_available_hours * 100)
        if total_available_hours > 0
        else 0
    )

    return CapacityReport(
        resource_id=resource.id,
        name=resource.name,
        email=resource.email,
        weekly_hours=resource.weekly_hours,
        workload_percent=resource.workload_percent,
        daily_hours=round_hours(daily_hours),
        work_days=work_days,
        total_available_hours=round_hours(total_available_hours),
        assigned_hours=round_hours(assigned_hours),
        free_hours=round_hours(free_hours),
        utilization_percent=utilization_percent,
        open_sub_tasks=len(resource.open_items),
        open_tickets=resource.open_ticket_count,
    )


def aggregate(
    resources: Iterable[Resource],
    window_start: DateLike,
    window_end: DateLike,
) -> List[CapacityReport]:
    """
    Compute a capacity report per resource for the window [window_start, window_end).

    Reports are ordered by free hours, largest first. Resources with equal
    free hours keep their input order.
    """
    start = to_date(window_start)
    end = to_date(window_end)
    work_days = max(1, count_business_days(start, end))

    reports = [_build_report(resource, start, end, work_days) for resource in resources]

    # sorted() is stable, so ties keep encounter order
    return sorted(reports, key=lambda report: report.free_hours, reverse=True)


def resolve_window(
    today: DateLike,
    deadline: Optional[DateLike] = None,
    default_days: int = DEFAULT_WINDOW_DAYS,
) -> CapacityPeriod:
    """Resolve the reporting window, defaulting to ``default_days`` after today."""
    start = to_date(today)
    end = to_date(deadline) if deadline is not None else start + timedelta(days=default_days)
    work_days = max(1, count_business_days(start, end))

    logger.debug(f"Resolved capacity window {start} -> {end} ({work_days} business days)")
    return CapacityPeriod(from_date=start, to_date=end, work_days=work_days)


def build_capacity_result(
    resources: Iterable[Resource],
    today: DateLike,
    deadline: Optional[DateLike] = None,
    default_days: int = DEFAULT_WINDOW_DAYS,
) -> CapacityResult:
    """Resolve the window and aggregate every resource over it."""
    period = resolve_window(today, deadline, default_days)
    reports = aggregate(resources, period.from_date, period.to_date)
    return CapacityResult(resources=reports, period=period)
