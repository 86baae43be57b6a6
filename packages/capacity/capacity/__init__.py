"""
Capacity Planning Package

Workload distribution, capacity aggregation and due-date cascades.
"""

from .api import capacity_report_api, cascade_api, workload_api
from .cascade import DependencyGraph, InMemoryDependencyGraph, cascade, shift_due_dates
from .core import aggregate, build_capacity_result, distribute, resolve_window
from .models import (
    CapacityPeriod,
    CapacityReport,
    CapacityResult,
    DateUpdate,
    PeriodLoad,
    Resource,
    ScheduledItem,
    WorkItem,
    WorkloadReport,
)
from .workload import period_windows, summarize_workload

__version__ = "0.1.0"
__all__ = [
    "distribute",
    "aggregate",
    "resolve_window",
    "build_capacity_result",
    "cascade",
    "shift_due_dates",
    "period_windows",
    "summarize_workload",
    "capacity_report_api",
    "workload_api",
    "cascade_api",
    "DependencyGraph",
    "InMemoryDependencyGraph",
    "WorkItem",
    "Resource",
    "CapacityReport",
    "CapacityPeriod",
    "CapacityResult",
    "ScheduledItem",
    "DateUpdate",
    "PeriodLoad",
    "WorkloadReport",
]
