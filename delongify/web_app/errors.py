"""Error responses and exception handlers."""

from typing import Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from ..lib.common.logging_config import get_logger

logger = get_logger("delongify.web")

MISSING_URL_MESSAGE = "Body must contain a `url` field."
INVALID_URL_MESSAGE = "Invalid URL"
INTERNAL_ERROR_MESSAGE = "Internal server error"


def error_response(status_code: int, message: str, err: Optional[str] = None) -> JSONResponse:
    """Build a JSON error response."""
    content = {"message": message}
    if err:
        content["err"] = err
    return JSONResponse(status_code=status_code, content=content)


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid')}")
    return "; ".join(parts)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 instead of FastAPI's 422."""
    detail = _describe_validation_errors(exc)
    logger.info(f"Rejected body for {request.method} {request.url.path}: {detail}")
    return error_response(status.HTTP_400_BAD_REQUEST, MISSING_URL_MESSAGE, err=detail)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Reply 429 when a client exceeds its quota."""
    client_ip = getattr(request.state, "client_ip", "unknown")
    logger.warning(f"Rate limit exceeded for {client_ip}: {exc.detail}")
    return error_response(
        status.HTTP_429_TOO_MANY_REQUESTS,
        f"Rate limit exceeded: {exc.detail}",
    )
