from datetime import date, datetime, UTC
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import SQLModel
from sqlmodel import Field as SQLField


class TicketStatus(str, Enum):
    """Ticket status enum"""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


OPEN_TICKET_STATUSES = (TicketStatus.OPEN, TicketStatus.IN_PROGRESS)


class UserRole(str, Enum):
    """User role enum"""

    ADMIN = "admin"
    KOORDINATOR = "koordinator"
    MEMBER = "member"


# Database Models (SQLModel)
class UserBase(SQLModel):
    """Base user model"""

    email: str = SQLField(unique=True, index=True)
    name: str | None = SQLField(default=None, max_length=200)
    role: str = SQLField(default=UserRole.MEMBER.value, max_length=50)
    weekly_hours: float = SQLField(default=40.0, ge=0)
    workload_percent: float = SQLField(default=100.0, ge=0, le=100)


class User(UserBase, table=True):  # type: ignore[call-arg]
    """User database model"""

    __tablename__ = "users"

    id: UUID = SQLField(default_factory=uuid4, primary_key=True)
    created_at: datetime | None = SQLField(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime | None = SQLField(default_factory=lambda: datetime.now(UTC))


class Ticket(SQLModel, table=True):  # type: ignore[call-arg]
    """Ticket database model"""

    __tablename__ = "tickets"

    id: UUID = SQLField(default_factory=uuid4, primary_key=True)
    title: str = SQLField(min_length=1, max_length=200)
    status: TicketStatus = SQLField(default=TicketStatus.OPEN)
    assignee_id: UUID | None = SQLField(default=None, foreign_key="users.id", index=True)
    created_at: datetime | None = SQLField(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime | None = SQLField(default_factory=lambda: datetime.now(UTC))


class SubTask(SQLModel, table=True):  # type: ignore[call-arg]
    """Sub-task database model; the unit of estimated work"""

    __tablename__ = "sub_tasks"

    id: UUID = SQLField(default_factory=uuid4, primary_key=True)
    ticket_id: UUID = SQLField(foreign_key="tickets.id", index=True)
    title: str = SQLField(min_length=1, max_length=200)
    assignee_id: UUID | None = SQLField(default=None, foreign_key="users.id", index=True)
    estimated_hours: float | None = SQLField(default=None)
    due_date: date | None = SQLField(default=None)
    completed: bool = SQLField(default=False)
    created_at: datetime | None = SQLField(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime | None = SQLField(default_factory=lambda: datetime.now(UTC))


class MilestoneBase(SQLModel):
    """Base milestone model"""

    title: str = SQLField(min_length=1, max_length=200)
    description: str | None = SQLField(default=None, max_length=1000)
    due_date: date
    completed: bool = SQLField(default=False)
    color: str = SQLField(default="gray", max_length=30)
    responsibility: str | None = SQLField(default=None, max_length=200)


class Milestone(MilestoneBase, table=True):  # type: ignore[call-arg]
    """Milestone database model"""

    __tablename__ = "milestones"

    id: UUID = SQLField(default_factory=uuid4, primary_key=True)
    ticket_id: UUID = SQLField(foreign_key="tickets.id", index=True)
    depends_on_id: UUID | None = SQLField(
        default=None, foreign_key="milestones.id", index=True
    )
    position: int = SQLField(default=0)
    created_at: datetime | None = SQLField(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime | None = SQLField(default_factory=lambda: datetime.now(UTC))


# API Request/Response Models (Pydantic)
class MilestoneCreate(MilestoneBase):
    """Milestone creation request"""

    ticket_id: UUID
    depends_on_id: UUID | None = None


class MilestoneUpdate(BaseModel):
    """Milestone update request"""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    due_date: date | None = None
    completed: bool | None = None
    color: str | None = Field(None, max_length=30)
    responsibility: str | None = Field(None, max_length=200)
    position: int | None = None
    depends_on_id: UUID | None = None
    cascade_shift: bool = Field(
        default=False,
        description="Shift dependent milestones by the same number of days",
    )


class MilestoneResponse(MilestoneBase):
    """Milestone response model"""

    id: UUID
    ticket_id: UUID
    depends_on_id: UUID | None = None
    position: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MilestoneShift(BaseModel):
    """Due date change applied to a dependent milestone"""

    id: UUID
    old_due_date: date
    new_due_date: date


class MilestoneUpdateResponse(BaseModel):
    """Milestone update response with cascaded shifts"""

    milestone: MilestoneResponse
    shifted: list[MilestoneShift] = Field(default_factory=list)


class ErrorDetail(BaseModel):
    """Error detail model following API standardization"""

    code: str = Field(..., description="Error code for programmatic handling")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(
        default=None, description="Additional error context"
    )


class ErrorResponse(BaseModel):
    """Standardized error response model"""

    error: ErrorDetail

    @classmethod
    def create(
        cls, code: str, message: str, details: dict[str, Any] | None = None
    ) -> "ErrorResponse":
        """Create a standardized error response"""
        return cls(error=ErrorDetail(code=code, message=message, details=details))
