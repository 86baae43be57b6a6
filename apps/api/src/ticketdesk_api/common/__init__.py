"""
Common utilities module
"""

from ticketdesk_api.common.error_handlers import (
    ServiceError,
    ResourceNotFoundError,
    ValidationError,
    AuthorizationError,
    handle_service_error,
    safe_execute,
    validate_uuid,
)

__all__ = [
    "ServiceError",
    "ResourceNotFoundError",
    "ValidationError",
    "AuthorizationError",
    "handle_service_error",
    "safe_execute",
    "validate_uuid",
]
