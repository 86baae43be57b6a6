import logging
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlmodel import Session

from capacity import CapacityResult
from ticketdesk_api.auth import AuthUser, get_current_user
from ticketdesk_api.common.error_handlers import ServiceError, handle_service_error
from ticketdesk_api.database import get_session
from ticketdesk_api.rate_limiter import RATE_LIMITS, limiter
from ticketdesk_api.services import ResourceService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resources", tags=["resources"])


@router.get(
    "",
    response_model=CapacityResult,
    summary="Get resource availability",
    description=(
        "Free capacity and utilization of every team member from today until "
        "the deadline (default: two weeks), ordered by free hours."
    ),
)
@limiter.limit(RATE_LIMITS["resources"])
async def get_resources(
    request: Request,
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[AuthUser, Depends(get_current_user)],
    deadline: Annotated[
        date | None, Query(description="Window end date (YYYY-MM-DD)")
    ] = None,
) -> CapacityResult:
    """Capacity report for all users"""
    try:
        return ResourceService.get_capacity_report(session, deadline=deadline)
    except ServiceError as e:
        logger.error(f"❌ [RESOURCES] {e.message}")
        raise handle_service_error(e) from e
