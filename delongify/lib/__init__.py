"""Core business logic for delongify."""

from .slug import SlugGenerator
from .service import SlugService
from .liveness import URLLivenessChecker

__all__ = ["SlugGenerator", "SlugService", "URLLivenessChecker"]
