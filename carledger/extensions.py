"""
Flask extensions for CarLedger.

This module initializes Flask extensions that need to be shared
across the application to avoid circular imports.
"""

from flask_caching import Cache
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .config import Config

# Configured per environment by app.init_cache
cache = Cache()

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["1000 per hour", "200 per minute"],
    storage_uri=Config.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    headers_enabled=True,
)


class RateLimits:
    """Common rate limit configurations for different endpoint types."""

    # Cheap lookups (unit labels)
    READ_HEAVY = "500 per hour"

    # Report computations over caller-supplied data
    EXPENSIVE = "20 per minute"
