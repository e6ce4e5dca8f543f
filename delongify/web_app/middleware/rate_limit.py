"""Per-client rate limiting backed by slowapi."""

from typing import Callable

from fastapi import FastAPI
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded

from ..errors import rate_limit_exceeded_handler
from .headers import client_ip_key

# Every limited route counts against the same per-client quota
RATE_LIMIT_SCOPE = "delongify"


def build_limiter(config) -> Limiter:
    """Create a moving-window limiter keyed by client address.

    Args:
        config: Configuration instance

    Returns:
        Configured limiter
    """
    return Limiter(
        key_func=client_ip_key,
        storage_uri=config.rate_limit_storage_uri,
        strategy="moving-window",
        enabled=config.rate_limit_enabled,
    )


def shared_rate_limit(limiter: Limiter, config) -> Callable:
    """Route decorator applying the configured quota, shared across routes.

    Decorated endpoints must take a ``request`` argument.
    """
    return limiter.shared_limit(config.rate_limit, scope=RATE_LIMIT_SCOPE)


def install_rate_limiting(app: FastAPI, limiter: Limiter) -> None:
    """Attach the limiter and its 429 handler."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
