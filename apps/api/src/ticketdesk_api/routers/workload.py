from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlmodel import Session

from capacity import WorkloadReport
from ticketdesk_api.auth import AuthUser, get_current_user
from ticketdesk_api.common.error_handlers import ServiceError, handle_service_error
from ticketdesk_api.database import get_session
from ticketdesk_api.rate_limiter import RATE_LIMITS, limiter
from ticketdesk_api.services import WorkloadService

router = APIRouter(prefix="/workload", tags=["workload"])


@router.get(
    "",
    response_model=list[WorkloadReport],
    summary="Get workload per period",
    description=(
        "Assigned hours against capacity for today, this week and this month. "
        "Only admins and coordinators may query other users."
    ),
)
@limiter.limit(RATE_LIMITS["workload"])
async def get_workload(
    request: Request,
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[AuthUser, Depends(get_current_user)],
    user_ids: Annotated[
        str | None, Query(description="Comma-separated user ids")
    ] = None,
) -> list[WorkloadReport]:
    """Workload for the requested users, defaulting to the caller"""
    ids = [uid.strip() for uid in user_ids.split(",") if uid.strip()] if user_ids else []
    if not ids:
        ids = [current_user.user_id]

    try:
        return WorkloadService.get_workloads(
            session,
            ids,
            requester_id=current_user.user_id,
            can_view_others=current_user.can_view_others,
        )
    except ServiceError as e:
        raise handle_service_error(e) from e
