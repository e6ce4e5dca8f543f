"""Browser-facing routes for delongify."""

from .routes import build_router as build_web_router

__all__ = ["build_web_router"]
