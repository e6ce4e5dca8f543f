"""JSON API for delongify."""

from .routes import build_router as build_api_router

__all__ = ["build_api_router"]
