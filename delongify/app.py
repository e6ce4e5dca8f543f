"""
Main entry point for the delongify service.

Usage:
    delongify
    python -m delongify

Environment variables (also read from .env):
    MONGODB_URI - MongoDB connection URI (required)
    MONGODB_DATABASE / MONGODB_COLLECTION - Where mappings are stored
    PORT - Port to listen on (default 8000)
    SLUG_TTL_SECONDS - How long slugs stay valid (default 5 days)
    DEFAULT_SCHEME - Scheme for URLs submitted without one (default https)
    CHECK_URL_LIVENESS - GET submitted URLs before shortening them
    RATE_LIMIT_PER_MINUTE - Requests per client per minute (default 5)
    TRUSTED_PROXY_COUNT - Reverse proxies appending to X-Forwarded-For
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI
from pydantic import ValidationError

from .config import Config, load_config
from .lib.common.logging_config import setup_logging
from .lib.database.mongo import MongoSlugStore
from .lib.liveness import URLLivenessChecker
from .lib.service import SlugService
from .lib.slug import SlugGenerator
from .web_app import create_app


def describe_config_error(error: ValidationError) -> str:
    """Explain a configuration failure, pointing at MONGODB_URI when it is the cause."""
    message = f"Configuration error: {error}"
    if any(err["loc"][:1] == ("mongodb_uri",) for err in error.errors()):
        message = "You must set your 'MONGODB_URI' environment variable.\n" + message
    return message


def build_service(config: Config, db, logger, http_client=None) -> SlugService:
    """Wire a slug service from configuration."""
    liveness_checker = None
    if config.check_url_liveness and http_client is not None:
        liveness_checker = URLLivenessChecker(
            client=http_client,
            timeout_seconds=config.liveness_timeout_seconds,
            logger=logger,
        )

    return SlugService(
        db=db,
        slug_generator=SlugGenerator(length=config.slug_length),
        logger=logger,
        liveness_checker=liveness_checker,
        default_scheme=config.default_scheme,
        ttl_seconds=config.slug_ttl_seconds,
        max_attempts=config.slug_max_attempts,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting delongify service...")

    db = MongoSlugStore(
        db_config=config.mongodb_uri,
        database_name=config.mongodb_database,
        collection_name=config.mongodb_collection,
        timeout_ms=config.mongodb_timeout_ms,
        logger=logger,
    )

    # Indexes are created once here rather than on every request
    try:
        await db.ensure_indexes()
    except Exception as e:
        logger.error(f"Failed to ensure indexes: {e}")
        await db.close()
        raise

    http_client = httpx.AsyncClient() if config.check_url_liveness else None
    if http_client is None:
        logger.info("URL liveness check disabled")

    service = build_service(config, db, logger, http_client)
    app.state.service = service

    logger.info("Service started successfully")

    try:
        yield
    finally:
        logger.info("Shutting down delongify service...")
        await service.close()
        if http_client is not None:
            await http_client.aclose()
        logger.info("Service stopped")


def main():
    """Main entry point."""
    try:
        config = load_config()
    except ValidationError as e:
        print(describe_config_error(e), file=sys.stderr)
        sys.exit(1)

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("Delongify URL Shortener")
    logger.info(f"Configuration: {config.model_dump(exclude={'mongodb_uri'})}")

    # The service is created in the lifespan
    app = create_app(service_instance=None, config=config)
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        log_config=None,
        access_log=False,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
