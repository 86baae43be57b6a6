import logging
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from ticketdesk_api.database import get_session
from ticketdesk_api.models import User, UserRole

logger = logging.getLogger(__name__)

# Security scheme
security = HTTPBearer(auto_error=False)

# Role spellings found in stored user records
ADMIN_ROLES = {"admin", "administrator"}
KOORDINATOR_ROLES = {UserRole.KOORDINATOR.value}


class AuthUser:
    """Authenticated user information"""

    def __init__(self, user_id: str, email: str, role: str = UserRole.MEMBER.value):
        self.user_id = user_id
        self.email = email
        self.role = role

    @property
    def is_admin(self) -> bool:
        return self.role.lower() in ADMIN_ROLES

    @property
    def can_view_others(self) -> bool:
        """Admins and coordinators may look at other users' workload"""
        return self.is_admin or self.role.lower() in KOORDINATOR_ROLES


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    session: Annotated[Session, Depends(get_session)],
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> AuthUser:
    """
    Resolve the user behind the bearer token.

    Session tokens are issued by the login service; by the time a request
    reaches this API the token is the user's id.
    """
    if not credentials or not credentials.credentials:
        logger.warning("❌ [AUTH] No credentials provided")
        raise _unauthorized("No authentication credentials provided")

    try:
        user_id = UUID(credentials.credentials)
    except ValueError:
        logger.warning("❌ [AUTH] Malformed token")
        raise _unauthorized("Invalid authentication token") from None

    user = session.get(User, user_id)
    if user is None:
        logger.warning(f"❌ [AUTH] Unknown user: {user_id}")
        raise _unauthorized("Invalid authentication token")

    return AuthUser(user_id=str(user.id), email=user.email, role=user.role)

