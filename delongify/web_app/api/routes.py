"""API routes implementation."""

from datetime import datetime, timezone
from typing import Callable

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from ...lib.common.logging_config import get_logger
from ...lib.exceptions import InvalidURLError
from ..errors import INTERNAL_ERROR_MESSAGE, INVALID_URL_MESSAGE, error_response
from .schemas import (
    CreateSlugURLPairRequest,
    CreateSlugURLPairResponse,
    ErrorResponse,
    HealthResponse,
)

logger = get_logger("delongify.web")


def build_router(rate_limit: Callable) -> APIRouter:
    """Create the API router.

    Args:
        rate_limit: Decorator enforcing the per-client quota; /health is
            left without it

    Returns:
        Router with the API routes
    """
    router = APIRouter()

    @router.post(
        "/createSlugURLPair",
        response_model=CreateSlugURLPairResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Invalid body or URL"},
            429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
            500: {"model": ErrorResponse, "description": "Internal server error"},
        },
        summary="Create slug",
        description="Shorten a URL. The slug expires after the configured retention window.",
    )
    @rate_limit
    async def create_slug_url_pair(request: Request, body: CreateSlugURLPairRequest):
        """Create a slug for a URL."""
        service = request.app.state.service

        try:
            result, mapping = await service.create_slug_url_pair(body.url)
        except InvalidURLError as e:
            logger.info(f"Error - Invalid URL: {body.url} ({e.reason})")
            return error_response(status.HTTP_400_BAD_REQUEST, INVALID_URL_MESSAGE)
        except Exception as e:
            logger.error(f"Failed to create slug for {body.url}: {e}", exc_info=True)
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)

        return CreateSlugURLPairResponse(
            result=result.to_dict(),
            slugURLPair=mapping.to_dict(),
        )

    @router.get(
        "/health",
        response_model=HealthResponse,
        responses={503: {"model": HealthResponse, "description": "Service unhealthy"}},
        summary="Health check",
        description="Check if the service and its database are healthy.",
    )
    async def health_check(request: Request):
        """Health check endpoint for load balancers and monitoring."""
        service = request.app.state.service

        health = await service.health_check()

        response = HealthResponse(
            status="healthy" if health["overall"] else "unhealthy",
            database="healthy" if health["database"] else "unhealthy",
            timestamp=datetime.now(timezone.utc),
        )
        if not health["overall"]:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content=response.model_dump(mode="json"),
            )
        return response

    return router
