import os
from datetime import date
from uuid import UUID

import pytest

# Set test environment variables before importing any application code
os.environ.update({
    "DATABASE_URL": "sqlite:///:memory:",
    "ENVIRONMENT": "test",
    "DEBUG": "false",
})

# Import after setting environment variables
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from ticketdesk_api.models import (
    Milestone,
    SubTask,
    Ticket,
    TicketStatus,
    User,
    UserRole,
)

# Shared in-memory SQLite database for the test session
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@pytest.fixture(scope="function")
def session():
    """Create a fresh database for each test"""
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(scope="function")
def client(session: Session):
    """Create a test client with overridden database dependency"""
    from fastapi.testclient import TestClient

    from ticketdesk_api.database import get_session
    from ticketdesk_api.main import app

    def override_get_session():
        yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(user: User) -> dict[str, str]:
    """Bearer header resolving to ``user``"""
    return {"Authorization": f"Bearer {user.id}"}


def create_test_user(
    session: Session,
    email: str = "member@example.com",
    role: str = UserRole.MEMBER.value,
    weekly_hours: float = 40.0,
    workload_percent: float = 100.0,
    name: str | None = None,
) -> User:
    """Create a test user"""
    user = User(
        email=email,
        name=name or email.split("@")[0],
        role=role,
        weekly_hours=weekly_hours,
        workload_percent=workload_percent,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def create_test_ticket(
    session: Session,
    title: str = "Test Ticket",
    assignee_id: UUID | None = None,
    status: TicketStatus = TicketStatus.OPEN,
) -> Ticket:
    """Create a test ticket"""
    ticket = Ticket(title=title, assignee_id=assignee_id, status=status)
    session.add(ticket)
    session.commit()
    session.refresh(ticket)
    return ticket


def create_test_sub_task(
    session: Session,
    ticket_id: UUID,
    assignee_id: UUID | None,
    estimated_hours: float | None = 4.0,
    due_date: date | None = None,
    completed: bool = False,
) -> SubTask:
    """Create a test sub-task"""
    sub_task = SubTask(
        ticket_id=ticket_id,
        title="Test Sub-task",
        assignee_id=assignee_id,
        estimated_hours=estimated_hours,
        due_date=due_date,
        completed=completed,
    )
    session.add(sub_task)
    session.commit()
    session.refresh(sub_task)
    return sub_task


def create_test_milestone(
    session: Session,
    ticket_id: UUID,
    due_date: date,
    title: str = "Test Milestone",
    depends_on_id: UUID | None = None,
    position: int = 0,
) -> Milestone:
    """Create a test milestone"""
    milestone = Milestone(
        ticket_id=ticket_id,
        title=title,
        due_date=due_date,
        depends_on_id=depends_on_id,
        position=position,
    )
    session.add(milestone)
    session.commit()
    session.refresh(milestone)
    return milestone
