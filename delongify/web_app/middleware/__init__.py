"""Middleware for delongify web app."""

from .headers import ClientIPMiddleware, client_ip_key
from .logging import LoggingMiddleware
from .rate_limit import build_limiter, install_rate_limiting, shared_rate_limit

__all__ = [
    "ClientIPMiddleware",
    "client_ip_key",
    "LoggingMiddleware",
    "build_limiter",
    "install_rate_limiting",
    "shared_rate_limit",
]
