"""
Data models for capacity planning using Pydantic.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .calendar import to_date


def _strip_time(value):
    """Drop the time of day from datetimes and ISO strings before validation."""
    if isinstance(value, (datetime, str)):
        return to_date(value)
    return value


class WorkItem(BaseModel):
    """Open unit of estimated work (a sub-task) assigned to a resource."""
    estimated_hours: Optional[float] = Field(None, description="Estimated hours of remaining work")
    due_date: Optional[date] = Field(None, description="Due date of the work item")

    @field_validator("due_date", mode="before")
    @classmethod
    def strip_time_of_day(cls, v):
        return _strip_time(v)


class Resource(BaseModel):
    """Team member with weekly capacity and a list of open work items."""
    id: str = Field(..., description="Unique resource identifier")
    name: Optional[str] = Field(None, description="Display name")
    email: Optional[str] = Field(None, description="Contact email")
    weekly_hours: float = Field(..., ge=0, description="Contractual hours per week")
    workload_percent: float = Field(100.0, ge=0, le=100, description="Employment percentage")
    open_items: List[WorkItem] = Field(default_factory=list, description="Open work items")
    open_ticket_count: int = Field(0, ge=0, description="Open tickets assigned to the resource")

    @property
    def weekly_available_hours(self) -> float:
        """Hours per week after applying the workload percentage."""
        return self.weekly_hours * self.workload_percent / 100

    @property
    def daily_hours(self) -> float:
        return self.weekly_available_hours / 5


class CapacityReport(BaseModel):
    """Derived capacity figures for one resource over a window."""
    resource_id: str = Field(..., description="Resource identifier")
    name: Optional[str] = None
    email: Optional[str] = None
    weekly_hours: float = 0.0
    workload_percent: float = 0.0
    daily_hours: float = Field(0.0, description="Available hours per business day")
    work_days: int = Field(1, ge=1, description="Business days in the window")
    total_available_hours: float = Field(0.0, description="Available hours in the window")
    assigned_hours: float = Field(0.0, description="Hours of open work falling in the window")
    free_hours: float = Field(0.0, ge=0, description="Remaining capacity, floored at zero")
    utilization_percent: int = Field(0, description="Assigned hours as percent of available hours")
    open_sub_tasks: int = 0
    open_tickets: int = 0


class CapacityPeriod(BaseModel):
    """Resolved reporting window [from, to)."""
    model_config = ConfigDict(populate_by_name=True)

    from_date: date = Field(..., alias="from")
    to_date: date = Field(..., alias="to")
    work_days: int = Field(..., ge=1)


class CapacityResult(BaseModel):
    """Capacity reports for all resources plus the window they cover."""
    resources: List[CapacityReport] = Field(default_factory=list)
    period: CapacityPeriod


class ScheduledItem(BaseModel):
    """Dated item that may depend on another item (e.g. a milestone)."""
    id: str = Field(..., description="Unique item identifier")
    due_date: date = Field(..., description="Current due date")
    depends_on_id: Optional[str] = Field(None, description="Item this one follows")

    @field_validator("due_date", mode="before")
    @classmethod
    def strip_time_of_day(cls, v):
        return _strip_time(v)


class DateUpdate(BaseModel):
    """New due date computed for a dependent item during a cascade."""
    item_id: str
    old_due_date: date
    new_due_date: date


class PeriodLoad(BaseModel):
    """Assigned hours against capacity for one calendar period."""
    assigned: float = 0.0
    capacity: float = 0.0
    percentage: int = 0


class WorkloadReport(BaseModel):
    """Day, week and month workload for a single resource."""
    resource_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    weekly_hours: float = 0.0
    workload_percent: float = 0.0
    available_hours_per_week: float = 0.0
    day: PeriodLoad = Field(default_factory=PeriodLoad)
    week: PeriodLoad = Field(default_factory=PeriodLoad)
    month: PeriodLoad = Field(default_factory=PeriodLoad)
