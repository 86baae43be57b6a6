"""
Tests for workload distribution and capacity aggregation.
"""

import pytest
from datetime import date, datetime

from capacity.core import (
    aggregate,
    build_capacity_result,
    distribute,
    resolve_window,
    round_hours,
    round_percent,
)
from capacity.models import Resource, WorkItem

# 2025-01-06 is a Monday
MONDAY = date(2025, 1, 6)
FRIDAY = date(2025, 1, 10)
SATURDAY = date(2025, 1, 11)
NEXT_MONDAY = date(2025, 1, 13)
TWO_WEEKS_LATER = date(2025, 1, 20)


class TestDistribute:
    """Test cases for spreading item hours over business days."""

    @pytest.mark.parametrize(
        "item",
        [
            WorkItem(estimated_hours=8.0, due_date=None),
            WorkItem(estimated_hours=None, due_date=FRIDAY),
            WorkItem(),
        ],
    )
    def test_missing_data_contributes_nothing(self, item):
        """Items without hours or due date yield zero hours for any window."""
        assert distribute(item, MONDAY, TWO_WEEKS_LATER, MONDAY) == 0
        assert distribute(item, date(2024, 1, 1), date(2026, 1, 1), MONDAY) == 0

    def test_non_positive_hours_contribute_nothing(self):
        """Negative or zero estimates are treated as no work."""
        assert distribute(WorkItem(estimated_hours=-4, due_date=FRIDAY), MONDAY, TWO_WEEKS_LATER, MONDAY) == 0
        assert distribute(WorkItem(estimated_hours=0, due_date=FRIDAY), MONDAY, TWO_WEEKS_LATER, MONDAY) == 0

    def test_item_due_today_lands_on_today(self):
        """An item due today on a weekday puts all hours on today."""
        item = WorkItem(estimated_hours=6.0, due_date=MONDAY)

        assert distribute(item, MONDAY, date(2025, 1, 7), MONDAY) == pytest.approx(6.0)
        assert distribute(item, date(2025, 1, 7), TWO_WEEKS_LATER, MONDAY) == 0

    def test_item_due_on_weekend_today_moves_to_monday(self):
        """A weekend due date with no business day left lands on the next Monday."""
        item = WorkItem(estimated_hours=5.0, due_date=SATURDAY)

        assert distribute(item, NEXT_MONDAY, date(2025, 1, 14), SATURDAY) == pytest.approx(5.0)
        assert distribute(item, SATURDAY, NEXT_MONDAY, SATURDAY) == 0

    def test_overdue_item_concentrates_on_next_workday(self):
        """Overdue hours are all attributed to the next business day."""
        item = WorkItem(estimated_hours=12.0, due_date=date(2025, 1, 3))

        assert distribute(item, MONDAY, date(2025, 1, 7), MONDAY) == pytest.approx(12.0)
        assert distribute(item, date(2025, 1, 7), TWO_WEEKS_LATER, MONDAY) == 0

    def test_overdue_item_seen_on_weekend(self):
        """Overdue work seen on a Saturday lands on the following Monday."""
        item = WorkItem(estimated_hours=3.0, due_date=date(2025, 1, 9))

        assert distribute(item, SATURDAY, NEXT_MONDAY, SATURDAY) == 0
        assert distribute(item, NEXT_MONDAY, TWO_WEEKS_LATER, SATURDAY) == pytest.approx(3.0)

    def test_even_spread_across_business_days(self):
        """40 hours over Monday-Friday is 8 hours per business day."""
        item = WorkItem(estimated_hours=40.0, due_date=FRIDAY)

        assert distribute(item, MONDAY, date(2025, 1, 8), MONDAY) == pytest.approx(16.0)
        assert distribute(item, date(2025, 1, 8), TWO_WEEKS_LATER, MONDAY) == pytest.approx(24.0)

    def test_weekends_contribute_zero(self):
        """A span crossing a weekend only counts weekdays."""
        thursday = date(2025, 1, 9)
        item = WorkItem(estimated_hours=10.0, due_date=date(2025, 1, 14))

        # Thu, Fri, Mon, Tue -> 2.5 hours per day
        assert distribute(item, SATURDAY, NEXT_MONDAY, thursday) == 0
        assert distribute(item, thursday, SATURDAY, thursday) == pytest.approx(5.0)
        assert distribute(item, NEXT_MONDAY, TWO_WEEKS_LATER, thursday) == pytest.approx(5.0)

    def test_window_after_due_date_is_empty(self):
        item = WorkItem(estimated_hours=10.0, due_date=FRIDAY)
        assert distribute(item, NEXT_MONDAY, TWO_WEEKS_LATER, MONDAY) == 0

    def test_disjoint_windows_sum_to_total(self):
        """Any partition of the active span adds back up to the estimate."""
        item = WorkItem(estimated_hours=17.0, due_date=date(2025, 1, 22))
        boundaries = [MONDAY, date(2025, 1, 7), date(2025, 1, 9), SATURDAY, date(2025, 1, 15), date(2025, 2, 1)]

        total = sum(
            distribute(item, start, end, MONDAY)
            for start, end in zip(boundaries, boundaries[1:])
        )

        assert total == pytest.approx(17.0)

    def test_time_of_day_is_ignored(self):
        """Datetimes are compared at day granularity."""
        item = WorkItem(estimated_hours=40.0, due_date=datetime(2025, 1, 10, 8, 0))

        hours = distribute(
            item,
            datetime(2025, 1, 6, 23, 59),
            datetime(2025, 1, 8, 0, 1),
            datetime(2025, 1, 6, 17, 30),
        )

        assert item.due_date == FRIDAY
        assert hours == pytest.approx(16.0)


class TestAggregate:
    """Test cases for per-resource capacity reports."""

    def test_two_week_reference_scenario(self):
        """Full-time resource with one week of work in a two-week window."""
        resource = Resource(
            id="user1",
            weekly_hours=40,
            workload_percent=100,
            open_items=[WorkItem(estimated_hours=40.0, due_date=FRIDAY)],
        )

        [report] = aggregate([resource], MONDAY, TWO_WEEKS_LATER)

        assert report.work_days == 10
        assert report.daily_hours == 8.0
        assert report.total_available_hours == 80.0
        assert report.assigned_hours == 40.0
        assert report.free_hours == 40.0
        assert report.utilization_percent == 50
        assert report.open_sub_tasks == 1

    def test_free_hours_never_negative(self):
        """Over-allocation floors free hours at zero and exceeds 100 percent."""
        resource = Resource(
            id="busy",
            weekly_hours=40,
            workload_percent=100,
            open_items=[WorkItem(estimated_hours=80.0, due_date=MONDAY)],
        )

        [report] = aggregate([resource], MONDAY, date(2025, 1, 8))

        assert report.total_available_hours == 16.0
        assert report.assigned_hours == 80.0
        assert report.free_hours == 0
        assert report.utilization_percent == 500

    def test_zero_capacity_has_zero_utilization(self):
        resource = Resource(
            id="away",
            weekly_hours=40,
            workload_percent=0,
            open_items=[WorkItem(estimated_hours=4.0, due_date=FRIDAY)],
        )

        [report] = aggregate([resource], MONDAY, TWO_WEEKS_LATER)

        assert report.total_available_hours == 0
        assert report.free_hours == 0
        assert report.utilization_percent == 0

    def test_part_time_resource(self):
        """Workload percentage scales the daily hours."""
        resource = Resource(id="part", weekly_hours=40, workload_percent=50)

        [report] = aggregate([resource], MONDAY, TWO_WEEKS_LATER)

        assert report.daily_hours == 4.0
        assert report.total_available_hours == 40.0
        assert report.free_hours == 40.0
        assert report.utilization_percent == 0

    def test_weekend_only_window_counts_one_work_day(self):
        resource = Resource(id="user1", weekly_hours=40)

        [report] = aggregate([resource], SATURDAY, NEXT_MONDAY)

        assert report.work_days == 1
        assert report.total_available_hours == 8.0

    def test_sorted_by_free_hours_descending_and_stable(self):
        """Reports are ordered by free hours; ties keep input order."""
        resources = [
            Resource(id="first", weekly_hours=10),
            Resource(id="most", weekly_hours=30),
            Resource(id="second", weekly_hours=10),
            Resource(id="none", weekly_hours=0),
        ]

        reports = aggregate(resources, MONDAY, TWO_WEEKS_LATER)

        assert [r.resource_id for r in reports] == ["most", "first", "second", "none"]
        free = [r.free_hours for r in reports]
        assert free == sorted(free, reverse=True)

    def test_utilization_uses_unrounded_values(self):
        """Percent is derived from raw hours, not from the one-decimal display."""
        resource = Resource(
            id="user1",
            weekly_hours=37,
            workload_percent=100,
            open_items=[WorkItem(estimated_hours=1.0, due_date=MONDAY)],
        )

        [report] = aggregate([resource], MONDAY, date(2025, 1, 7))

        # 1 / 7.4 = 13.51 percent
        assert report.daily_hours == 7.4
        assert report.utilization_percent == 14

    def test_empty_input(self):
        assert aggregate([], MONDAY, TWO_WEEKS_LATER) == []


class TestWindow:
    """Test cases for window resolution."""

    def test_default_window_is_fourteen_days(self):
        period = resolve_window(MONDAY)

        assert period.from_date == MONDAY
        assert period.to_date == TWO_WEEKS_LATER
        assert period.work_days == 10

    def test_explicit_deadline(self):
        period = resolve_window(MONDAY, "2025-01-13")

        assert period.to_date == NEXT_MONDAY
        assert period.work_days == 5

    def test_deadline_before_today_still_has_one_work_day(self):
        period = resolve_window(MONDAY, date(2025, 1, 1))
        assert period.work_days == 1

    def test_build_capacity_result_serializes_period_aliases(self):
        resource = Resource(id="user1", weekly_hours=40)

        result = build_capacity_result([resource], MONDAY)
        payload = result.model_dump(mode="json", by_alias=True)

        assert payload["period"] == {"from": "2025-01-06", "to": "2025-01-20", "work_days": 10}
        assert payload["resources"][0]["free_hours"] == 80.0


class TestRounding:
    """Test cases for presentation rounding."""

    def test_hours_round_half_up(self):
        assert round_hours(0.25) == 0.3
        assert round_hours(2.449) == 2.4
        assert round_hours(7.4) == 7.4

    def test_percent_rounds_half_up(self):
        assert round_percent(12.5) == 13
        assert round_percent(49.4) == 49
