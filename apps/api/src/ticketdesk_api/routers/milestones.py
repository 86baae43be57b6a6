import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlmodel import Session

from ticketdesk_api.auth import AuthUser, get_current_user
from ticketdesk_api.common.error_handlers import ServiceError, handle_service_error
from ticketdesk_api.database import get_session
from ticketdesk_api.models import (
    ErrorResponse,
    MilestoneCreate,
    MilestoneResponse,
    MilestoneShift,
    MilestoneUpdate,
    MilestoneUpdateResponse,
)
from ticketdesk_api.rate_limiter import RATE_LIMITS, limiter
from ticketdesk_api.services import MilestoneService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/milestones", tags=["milestones"])


@router.get("", response_model=list[MilestoneResponse])
@limiter.limit(RATE_LIMITS["milestones"])
async def get_milestones(
    request: Request,
    ticket_id: Annotated[UUID, Query(description="Ticket the milestones belong to")],
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[AuthUser, Depends(get_current_user)],
) -> list[MilestoneResponse]:
    """Get all milestones of a ticket"""
    try:
        milestones = MilestoneService.get_milestones(session, ticket_id)
    except ServiceError as e:
        raise handle_service_error(e) from e
    return [MilestoneResponse.model_validate(m) for m in milestones]


@router.post(
    "",
    response_model=MilestoneResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse, "description": "Ticket not found"}},
)
@limiter.limit(RATE_LIMITS["milestones"])
async def create_milestone(
    request: Request,
    milestone_data: MilestoneCreate,
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[AuthUser, Depends(get_current_user)],
) -> MilestoneResponse:
    """Create a new milestone"""
    try:
        milestone = MilestoneService.create_milestone(session, milestone_data)
    except ServiceError as e:
        raise handle_service_error(e) from e
    return MilestoneResponse.model_validate(milestone)


@router.get(
    "/{milestone_id}",
    response_model=MilestoneResponse,
    responses={404: {"model": ErrorResponse, "description": "Milestone not found"}},
)
@limiter.limit(RATE_LIMITS["milestones"])
async def get_milestone(
    request: Request,
    milestone_id: UUID,
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[AuthUser, Depends(get_current_user)],
) -> MilestoneResponse:
    """Get a specific milestone"""
    try:
        milestone = MilestoneService.get_milestone(session, milestone_id)
    except ServiceError as e:
        raise handle_service_error(e) from e
    return MilestoneResponse.model_validate(milestone)


@router.put(
    "/{milestone_id}",
    response_model=MilestoneUpdateResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid dependency"},
        404: {"model": ErrorResponse, "description": "Milestone not found"},
    },
)
@limiter.limit(RATE_LIMITS["milestones"])
async def update_milestone(
    request: Request,
    milestone_id: UUID,
    milestone_data: MilestoneUpdate,
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[AuthUser, Depends(get_current_user)],
) -> MilestoneUpdateResponse:
    """Update a milestone, optionally shifting dependent milestones"""
    try:
        milestone, updates = MilestoneService.update_milestone(
            session, milestone_id, milestone_data
        )
    except ServiceError as e:
        raise handle_service_error(e) from e

    return MilestoneUpdateResponse(
        milestone=MilestoneResponse.model_validate(milestone),
        shifted=[
            MilestoneShift(
                id=UUID(update.item_id),
                old_due_date=update.old_due_date,
                new_due_date=update.new_due_date,
            )
            for update in updates
        ],
    )


@router.delete(
    "/{milestone_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse, "description": "Milestone not found"}},
)
@limiter.limit(RATE_LIMITS["milestones"])
async def delete_milestone(
    request: Request,
    milestone_id: UUID,
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[AuthUser, Depends(get_current_user)],
) -> None:
    """Delete a milestone"""
    try:
        MilestoneService.delete_milestone(session, milestone_id)
    except ServiceError as e:
        raise handle_service_error(e) from e
    logger.info(f"🗑️ Milestone {milestone_id} deleted by {current_user.user_id}")
