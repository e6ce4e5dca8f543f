"""Common utilities for delongify."""

from .validators import normalize_url
from .headers import extract_forwarded_for, resolve_client_ip
from .logging_config import setup_logging, get_logger

__all__ = [
    "normalize_url",
    "extract_forwarded_for",
    "resolve_client_ip",
    "setup_logging",
    "get_logger",
]
