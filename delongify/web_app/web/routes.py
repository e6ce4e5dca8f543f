"""Browser-facing routes: greeting and slug redirects."""

from typing import Callable

from fastapi import APIRouter, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from ...lib.common.logging_config import get_logger
from ..api.schemas import MessageResponse
from ..errors import INTERNAL_ERROR_MESSAGE, error_response

logger = get_logger("delongify.web")

NOT_FOUND_MESSAGE = "404: Error - Unable to find redirection URL."


def build_router(rate_limit: Callable) -> APIRouter:
    """Create the web router. The slug route matches any path, so include it last."""
    router = APIRouter()

    @router.get("/", response_model=MessageResponse)
    @rate_limit
    async def hello(request: Request):
        """Greeting."""
        return MessageResponse(message="Hello Delongify!")

    @router.get("/{slug}", include_in_schema=False)
    @rate_limit
    async def redirect_to_url(request: Request, slug: str):
        """Redirect to the URL stored for a slug."""
        service = request.app.state.service

        try:
            url = await service.resolve_slug(slug)
        except Exception as e:
            logger.error(f"Failed to resolve slug {slug}: {e}", exc_info=True)
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)

        if url is None:
            return PlainTextResponse(NOT_FOUND_MESSAGE, status_code=status.HTTP_404_NOT_FOUND)

        return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)

    return router
