"""
Rate limiter configuration module.

This module creates the SlowAPI rate limiter instance that can be imported
by route modules without circular import issues.
"""

import logging
from typing import Optional

from slowapi import Limiter
from slowapi.util import get_remote_address

from reminders.core.config import settings

logger = logging.getLogger(__name__)


def get_limiter_storage() -> Optional[str]:
    """
    Get the storage backend for rate limiting.

    Returns Redis URL if configured, otherwise None (uses in-memory storage).
    """
    if not settings.redis_url:
        return None
    if not settings.redis_url.startswith(("redis://", "rediss://")):
        logger.warning(
            "Invalid REDIS_URL format: %s. Using in-memory storage instead.",
            settings.redis_url
        )
        return None
    logger.info("Using Redis backend for rate limiting")
    return settings.redis_url


def create_limiter() -> Limiter:
    """
    Create and configure the SlowAPI rate limiter.

    In-memory storage is suitable for single-instance deployments, while
    Redis is required when several workers must share counters.
    """
    storage_uri = get_limiter_storage()

    if storage_uri:
        return Limiter(
            key_func=get_remote_address,
            storage_uri=storage_uri,
            enabled=settings.rate_limit_enabled,
            default_limits=[],
        )
    logger.info("Using in-memory storage for rate limiting")
    return Limiter(
        key_func=get_remote_address,
        enabled=settings.rate_limit_enabled,
        default_limits=[],
    )


# Single limiter instance used throughout the app
limiter = create_limiter()
