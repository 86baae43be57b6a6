"""
Tests for the day/week/month workload summary.
"""

import pytest
from datetime import date

from capacity.models import Resource, WorkItem
from capacity.workload import hours_due_within, period_windows, summarize_workload

# 2025-01-08 is a Wednesday
WEDNESDAY = date(2025, 1, 8)


class TestWorkloadSummary:
    """Test cases for calendar-period workload."""

    def test_period_windows(self):
        windows = period_windows(WEDNESDAY)

        assert windows["day"] == (date(2025, 1, 8), date(2025, 1, 9))
        assert windows["week"] == (date(2025, 1, 6), date(2025, 1, 13))
        assert windows["month"] == (date(2025, 1, 1), date(2025, 2, 1))

    def test_hours_due_within_skips_undated_items(self):
        items = [
            WorkItem(estimated_hours=2.0, due_date=WEDNESDAY),
            WorkItem(estimated_hours=3.0, due_date=None),
            WorkItem(estimated_hours=None, due_date=WEDNESDAY),
        ]

        assert hours_due_within(items, (WEDNESDAY, date(2025, 1, 9))) == 2.0

    def test_summarize_workload(self):
        resource = Resource(
            id="user1",
            name="Anna",
            weekly_hours=40,
            workload_percent=50,
            open_items=[
                WorkItem(estimated_hours=2.0, due_date=WEDNESDAY),
                WorkItem(estimated_hours=6.0, due_date=date(2025, 1, 10)),
                WorkItem(estimated_hours=10.0, due_date=date(2025, 1, 20)),
                WorkItem(estimated_hours=5.0, due_date=date(2025, 2, 3)),
                WorkItem(estimated_hours=3.0),
            ],
        )

        report = summarize_workload(resource, WEDNESDAY)

        assert report.available_hours_per_week == 20.0
        assert report.day.assigned == 2.0
        assert report.day.capacity == 4.0
        assert report.day.percentage == 50
        assert report.week.assigned == 8.0
        assert report.week.percentage == 40
        assert report.month.assigned == 18.0
        assert report.month.capacity == pytest.approx(92.0)
        assert report.month.percentage == 20

    def test_zero_capacity_reports_zero_percent(self):
        resource = Resource(
            id="user1",
            weekly_hours=0,
            open_items=[WorkItem(estimated_hours=4.0, due_date=WEDNESDAY)],
        )

        report = summarize_workload(resource, WEDNESDAY)

        assert report.day.assigned == 4.0
        assert report.day.percentage == 0
        assert report.month.percentage == 0
