"""URL validation and normalization utilities."""

import ipaddress
import re
from urllib.parse import urlsplit

from ..exceptions import InvalidURLError

MAX_URL_LENGTH = 2048
ALLOWED_SCHEMES = ("http", "https")

# Letters (including IDN), digits, dots, hyphens and underscores
_HOST_PATTERN = re.compile(r"^[\w-]+(\.[\w-]+)*\.?$")
_WHITESPACE = re.compile(r"\s")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def normalize_url(raw_url: str, default_scheme: str = "https") -> str:
    """Make sure a URL leads with an http or https scheme.

    URLs that already use http:// or https:// are returned unchanged. A URL
    without a scheme gets ``default_scheme`` prepended and any other scheme is
    replaced by it.

    Args:
        raw_url: The URL as submitted by the client
        default_scheme: Scheme to use when the URL has none or an unsupported one

    Returns:
        Normalized URL

    Raises:
        InvalidURLError: If the URL cannot be parsed or has no usable host
        ValueError: If default_scheme is not http or https
    """
    if default_scheme not in ALLOWED_SCHEMES:
        raise ValueError(f"Default scheme must be one of {ALLOWED_SCHEMES}, got {default_scheme!r}")

    if not raw_url or not isinstance(raw_url, str):
        raise InvalidURLError(str(raw_url or ""), "URL is required")

    url = raw_url.strip()
    if not url:
        raise InvalidURLError(raw_url, "URL is required")

    if "://" in url:
        scheme, rest = url.split("://", 1)
        if scheme.lower() not in ALLOWED_SCHEMES:
            url = f"{default_scheme}://{rest}"
    else:
        url = f"{default_scheme}://{url.lstrip('/')}"

    _validate_absolute_url(url)
    return url


def _validate_absolute_url(url: str) -> None:
    """Check that an absolute http(s) URL has a well-formed host."""
    if len(url) > MAX_URL_LENGTH:
        raise InvalidURLError(url, f"URL is too long (max {MAX_URL_LENGTH} characters)")

    if _CONTROL_CHARS.search(url):
        raise InvalidURLError(url, "URL must not contain control characters")

    try:
        parts = urlsplit(url)
        # Accessing port validates it
        parts.port
    except ValueError as e:
        raise InvalidURLError(url, f"Invalid URL format: {e}") from e

    # Spaces are allowed in the path and query, never in the host
    if _WHITESPACE.search(parts.netloc):
        raise InvalidURLError(url, "URL host must not contain whitespace")

    host = parts.hostname
    if not host:
        raise InvalidURLError(url, "URL must have a valid host")

    if ":" in host:
        try:
            ipaddress.IPv6Address(host.split("%", 1)[0])
        except ValueError as e:
            raise InvalidURLError(url, "URL has an invalid IPv6 host") from e
    elif not _HOST_PATTERN.match(host):
        raise InvalidURLError(url, "URL must have a valid host")
