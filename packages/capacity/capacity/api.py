"""
API wrapper functions for capacity planning.
"""

from datetime import date
from typing import Any, Dict, Optional

from .calendar import to_date
from .cascade import InMemoryDependencyGraph, shift_due_dates
from .core import DEFAULT_WINDOW_DAYS, build_capacity_result
from .models import Resource, ScheduledItem
from .workload import summarize_workload


def _today(request_data: Dict[str, Any]) -> date:
    value = request_data.get("today")
    return to_date(value) if value else date.today()


def capacity_report_api(request_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    API wrapper for the capacity report.

    Args:
        request_data: Dictionary with ``resources``, optional ``deadline``,
            ``today`` and ``default_window_days``

    Returns:
        Dictionary with ``resources`` (sorted by free hours) and ``period``

    Raises:
        ValueError: If request data is invalid
    """
    resources = [Resource(**entry) for entry in request_data.get("resources", [])]
    deadline: Optional[str] = request_data.get("deadline")

    result = build_capacity_result(
        resources,
        today=_today(request_data),
        deadline=deadline or None,
        default_days=int(request_data.get("default_window_days", DEFAULT_WINDOW_DAYS)),
    )
    return result.model_dump(mode="json", by_alias=True)


def workload_api(request_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    API wrapper for the day/week/month workload summary.

    Args:
        request_data: Dictionary with ``resources`` and optional ``today``

    Returns:
        Dictionary with a ``workloads`` list, one entry per resource
    """
    today = _today(request_data)
    resources = [Resource(**entry) for entry in request_data.get("resources", [])]
    return {
        "workloads": [
            summarize_workload(resource, today).model_dump(mode="json")
            for resource in resources
        ]
    }


def cascade_api(request_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    API wrapper for due-date cascades over a snapshot of items.

    Args:
        request_data: Dictionary with ``root_id``, ``old_due_date``,
            ``new_due_date`` and ``items`` (each with ``id``, ``due_date``
            and optional ``depends_on_id``)

    Returns:
        Dictionary with the list of ``updates``

    Raises:
        ValueError: If request data is invalid
    """
    if "root_id" not in request_data:
        raise ValueError("root_id is required")

    graph = InMemoryDependencyGraph(
        ScheduledItem(**entry) for entry in request_data.get("items", [])
    )
    updates = shift_due_dates(
        str(request_data["root_id"]),
        request_data.get("old_due_date"),
        request_data.get("new_due_date"),
        graph,
    )
    return {"updates": [update.model_dump(mode="json") for update in updates]}
