"""FastAPI application factory."""

from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter

from .. import __version__
from .api import build_api_router
from .errors import request_validation_handler, unhandled_exception_handler
from .middleware.headers import ClientIPMiddleware
from .middleware.logging import LoggingMiddleware
from .middleware.rate_limit import build_limiter, install_rate_limiting, shared_rate_limit
from .web import build_web_router


def create_app(
    service_instance,
    config,
    limiter: Optional[Limiter] = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        service_instance: Slug service (may be set later, e.g. by a lifespan)
        config: Configuration instance
        limiter: Optional rate limiter (built from config if omitted)

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Delongify",
        description="URL shortening service",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # Store instances in app state for access in routes
    app.state.service = service_instance
    app.state.config = config

    limiter = limiter or build_limiter(config)
    install_rate_limiting(app, limiter)
    rate_limit = shared_rate_limit(limiter, config)

    # Middleware added last runs first: CORS, client address, logging
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ClientIPMiddleware, trusted_proxy_count=config.trusted_proxy_count)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # The slug catch-all lives in the web router, so it goes last
    app.include_router(build_api_router(rate_limit), tags=["API"])
    app.include_router(build_web_router(rate_limit), tags=["Web"])

    return app
