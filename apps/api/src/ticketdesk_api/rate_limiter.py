"""
Rate limiting for API protection
"""

import logging

from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

logger = logging.getLogger(__name__)

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["200 per minute"],
    headers_enabled=False,
    storage_uri="memory://",
)

# Per-endpoint limits applied with @limiter.limit in the routers
RATE_LIMITS = {
    "resources": "60 per minute",
    "workload": "60 per minute",
    "milestones": "120 per minute",
    "health": "1000 per minute",
}


def configure_rate_limiting(app, enabled: bool = True):
    """
    Configure rate limiting for the FastAPI application
    """
    limiter.enabled = enabled
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    logger.info(f"✅ Rate limiting {'enabled' if enabled else 'disabled'}")
    for name, limit in RATE_LIMITS.items():
        logger.info(f"  {name}: {limit}")

    return limiter
