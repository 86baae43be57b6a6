"""
Services bridging persisted records and the capacity planning engine
"""

import logging
from collections import Counter
from datetime import date, datetime, UTC
from uuid import UUID

from sqlmodel import Session, col, or_, select

from capacity import (
    CapacityResult,
    DateUpdate,
    Resource,
    ScheduledItem,
    WorkItem,
    WorkloadReport,
    build_capacity_result,
    shift_due_dates,
    summarize_workload,
)
from ticketdesk_api.common.error_handlers import (
    AuthorizationError,
    ResourceNotFoundError,
    ValidationError,
    safe_execute,
    validate_uuid,
)
from ticketdesk_api.config import settings
from ticketdesk_api.models import (
    OPEN_TICKET_STATUSES,
    Milestone,
    MilestoneCreate,
    MilestoneUpdate,
    SubTask,
    Ticket,
    User,
)

logger = logging.getLogger(__name__)

# Guard against corrupted depends-on chains when checking for cycles
MAX_DEPENDENCY_DEPTH = 100


def _to_resource(user: User, sub_tasks: list[SubTask], open_tickets: int = 0) -> Resource:
    # Table rows are not validated; out-of-range capacity is clamped
    weekly_hours = max(0.0, user.weekly_hours or 0.0)
    workload_percent = min(max(user.workload_percent or 0.0, 0.0), 100.0)
    if (weekly_hours, workload_percent) != (user.weekly_hours, user.workload_percent):
        logger.warning(
            f"User {user.id} has out-of-range capacity "
            f"({user.weekly_hours}h, {user.workload_percent}%), clamped to "
            f"({weekly_hours}h, {workload_percent}%)"
        )

    return Resource(
        id=str(user.id),
        name=user.name,
        email=user.email,
        weekly_hours=weekly_hours,
        workload_percent=workload_percent,
        open_items=[
            WorkItem(estimated_hours=sub_task.estimated_hours, due_date=sub_task.due_date)
            for sub_task in sub_tasks
        ],
        open_ticket_count=open_tickets,
    )


def _open_sub_tasks_by_assignee(
    session: Session, user_ids: list[UUID], deadline: date | None = None
) -> dict[UUID, list[SubTask]]:
    statement = select(SubTask).where(
        col(SubTask.assignee_id).in_(user_ids),
        SubTask.completed == False,  # noqa: E712
    )
    if deadline is not None:
        # Undated sub-tasks stay in the list; they just carry no hours
        statement = statement.where(
            or_(col(SubTask.due_date).is_(None), col(SubTask.due_date) <= deadline)
        )
    statement = statement.order_by(col(SubTask.due_date), col(SubTask.created_at))

    grouped: dict[UUID, list[SubTask]] = {user_id: [] for user_id in user_ids}
    for sub_task in session.exec(statement).all():
        grouped[sub_task.assignee_id].append(sub_task)
    return grouped


class ResourceService:
    """Capacity report over every user"""

    @staticmethod
    def load_resources(session: Session, deadline: date | None = None) -> list[Resource]:
        """Load users with their open sub-tasks and open ticket counts"""
        users = list(session.exec(select(User).order_by(col(User.created_at))).all())
        if not users:
            return []

        user_ids = [user.id for user in users]
        sub_tasks = _open_sub_tasks_by_assignee(session, user_ids, deadline)

        ticket_assignees = session.exec(
            select(Ticket.assignee_id).where(
                col(Ticket.assignee_id).in_(user_ids),
                col(Ticket.status).in_(OPEN_TICKET_STATUSES),
            )
        ).all()
        open_tickets = Counter(ticket_assignees)

        return [
            _to_resource(user, sub_tasks[user.id], open_tickets[user.id])
            for user in users
        ]

    @staticmethod
    def get_capacity_report(
        session: Session,
        deadline: date | None = None,
        today: date | None = None,
    ) -> CapacityResult:
        """Capacity of every user from today until the deadline"""
        today = today or date.today()
        resources = ResourceService.load_resources(session, deadline)
        result = build_capacity_result(
            resources,
            today=today,
            deadline=deadline,
            default_days=settings.default_window_days,
        )
        logger.info(
            f"Capacity report for {len(result.resources)} users, "
            f"{result.period.from_date} -> {result.period.to_date}"
        )
        return result


class WorkloadService:
    """Day, week and month workload per user"""

    @staticmethod
    def get_workloads(
        session: Session,
        user_ids: list[str],
        requester_id: str,
        can_view_others: bool = False,
        today: date | None = None,
    ) -> list[WorkloadReport]:
        """Workload summaries for the given users; unknown ids are skipped"""
        today = today or date.today()
        ids = [validate_uuid(user_id, "user_id") for user_id in user_ids]
        requester = validate_uuid(requester_id, "requester_id")

        if not can_view_others and any(user_id != requester for user_id in ids):
            logger.warning(f"🔒 User {requester} denied workload of other users")
            raise AuthorizationError("workload of other users", "view")

        users = []
        for user_id in ids:
            user = session.get(User, user_id)
            if user is None:
                logger.debug(f"Skipping unknown user {user_id}")
                continue
            users.append(user)
        if not users:
            return []

        sub_tasks = _open_sub_tasks_by_assignee(session, [user.id for user in users])
        return [
            summarize_workload(_to_resource(user, sub_tasks[user.id]), today)
            for user in users
        ]


class MilestoneGraph:
    """Dependency graph view over persisted milestones"""

    def __init__(self, session: Session):
        self.session = session

    def find_dependents(self, item_id: str) -> list[ScheduledItem]:
        milestones = self.session.exec(
            select(Milestone).where(Milestone.depends_on_id == UUID(item_id))
        ).all()
        return [
            ScheduledItem(
                id=str(milestone.id),
                due_date=milestone.due_date,
                depends_on_id=str(milestone.depends_on_id),
            )
            for milestone in milestones
        ]


class MilestoneService:
    """Milestone CRUD with due-date cascades"""

    @staticmethod
    def get_milestones(session: Session, ticket_id: str | UUID) -> list[Milestone]:
        """Milestones of a ticket ordered by due date, then position"""
        ticket_id = validate_uuid(ticket_id, "ticket_id")
        statement = (
            select(Milestone)
            .where(Milestone.ticket_id == ticket_id)
            .order_by(col(Milestone.due_date), col(Milestone.position))
        )
        return list(session.exec(statement).all())

    @staticmethod
    def get_milestone(session: Session, milestone_id: str | UUID) -> Milestone:
        milestone_id = validate_uuid(milestone_id, "milestone_id")
        milestone = session.get(Milestone, milestone_id)
        if milestone is None:
            raise ResourceNotFoundError("Milestone", milestone_id)
        return milestone

    @staticmethod
    def _validate_dependency(
        session: Session, milestone_id: UUID | None, depends_on_id: UUID | None
    ) -> None:
        """Reject dependencies on missing milestones, on itself, or that close a loop"""
        if depends_on_id is None:
            return
        if depends_on_id == milestone_id:
            raise ValidationError("Milestone cannot depend on itself", "depends_on_id")

        current = session.get(Milestone, depends_on_id)
        if current is None:
            raise ResourceNotFoundError("Milestone", depends_on_id)

        depth = 0
        while current is not None and current.depends_on_id is not None:
            if current.depends_on_id == milestone_id:
                raise ValidationError(
                    "Creating this dependency would create a circular dependency",
                    "depends_on_id",
                )
            depth += 1
            if depth >= MAX_DEPENDENCY_DEPTH:
                logger.warning(
                    f"Dependency chain depth limit reached: {MAX_DEPENDENCY_DEPTH}"
                )
                return
            current = session.get(Milestone, current.depends_on_id)

    @staticmethod
    def create_milestone(session: Session, data: MilestoneCreate) -> Milestone:
        """Create a milestone at the end of its ticket's list"""
        if session.get(Ticket, data.ticket_id) is None:
            raise ResourceNotFoundError("Ticket", data.ticket_id)
        MilestoneService._validate_dependency(session, None, data.depends_on_id)

        def create_operation():
            last_position = session.exec(
                select(Milestone.position)
                .where(Milestone.ticket_id == data.ticket_id)
                .order_by(col(Milestone.position).desc())
            ).first()
            milestone = Milestone(
                **data.model_dump(),
                position=(last_position or 0) + 1,
            )
            session.add(milestone)
            session.flush()
            return milestone

        milestone = safe_execute(session, create_operation)
        session.refresh(milestone)
        logger.info(f"Created milestone {milestone.id} for ticket {milestone.ticket_id}")
        return milestone

    @staticmethod
    def update_milestone(
        session: Session, milestone_id: str | UUID, data: MilestoneUpdate
    ) -> tuple[Milestone, list[DateUpdate]]:
        """
        Update a milestone and optionally shift its dependents.

        When ``cascade_shift`` is set and the due date actually changes, every
        milestone that transitively depends on this one moves by the same
        number of days. The update and all shifts commit together.
        """
        milestone = MilestoneService.get_milestone(session, milestone_id)
        update_data = data.model_dump(exclude_unset=True, exclude={"cascade_shift"})

        if "due_date" in update_data and update_data["due_date"] is None:
            raise ValidationError("Milestone due date cannot be removed", "due_date")
        if "depends_on_id" in update_data:
            MilestoneService._validate_dependency(
                session, milestone.id, update_data["depends_on_id"]
            )

        old_due_date = milestone.due_date
        new_due_date = update_data.get("due_date") or old_due_date

        def update_operation():
            for field, value in update_data.items():
                setattr(milestone, field, value)
            milestone.updated_at = datetime.now(UTC)
            session.add(milestone)

            updates: list[DateUpdate] = []
            if data.cascade_shift and new_due_date != old_due_date:
                updates = shift_due_dates(
                    str(milestone.id), old_due_date, new_due_date, MilestoneGraph(session)
                )
                for update in updates:
                    dependent = session.get(Milestone, UUID(update.item_id))
                    dependent.due_date = update.new_due_date
                    dependent.updated_at = datetime.now(UTC)
                    session.add(dependent)

            session.flush()
            return updates

        updates = safe_execute(session, update_operation)
        session.refresh(milestone)

        if updates:
            logger.info(
                f"Milestone {milestone.id} moved {old_due_date} -> {new_due_date}, "
                f"shifted {len(updates)} dependents"
            )
        return milestone, updates

    @staticmethod
    def delete_milestone(session: Session, milestone_id: str | UUID) -> bool:
        """Delete a milestone; its dependents lose the dependency"""
        milestone = MilestoneService.get_milestone(session, milestone_id)

        def delete_operation():
            dependents = session.exec(
                select(Milestone).where(Milestone.depends_on_id == milestone.id)
            ).all()
            for dependent in dependents:
                dependent.depends_on_id = None
                session.add(dependent)
            session.delete(milestone)
            return True

        return safe_execute(session, delete_operation)
