"""Client address middleware."""

from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from ...lib.common.headers import resolve_client_ip


class ClientIPMiddleware(BaseHTTPMiddleware):
    """Resolve the client address once per request and store it in request state."""

    def __init__(self, app, trusted_proxy_count: int = 0):
        super().__init__(app)
        self.trusted_proxy_count = trusted_proxy_count

    async def dispatch(self, request: Request, call_next: Callable):
        request.state.client_ip = resolve_client_ip(
            dict(request.headers),
            request.client.host if request.client else None,
            self.trusted_proxy_count,
        )
        return await call_next(request)


def client_ip_key(request: Request) -> str:
    """Rate limit key: the address resolved by ClientIPMiddleware."""
    client_ip = getattr(request.state, "client_ip", None)
    if client_ip:
        return client_ip
    return request.client.host if request.client else "unknown"
