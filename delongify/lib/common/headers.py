"""Header parsing utilities for delongify."""

from typing import Dict, List, Optional


def extract_forwarded_for(headers: Dict[str, str]) -> List[str]:
    """Split the X-Forwarded-For header into its addresses.

    Args:
        headers: Request headers dictionary

    Returns:
        Addresses in header order (client first, latest proxy last)
    """
    # Convert headers to lowercase for case-insensitive lookup
    headers_lower = {k.lower(): v for k, v in headers.items()}
    value = headers_lower.get("x-forwarded-for")
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def resolve_client_ip(
    headers: Dict[str, str],
    peer_host: Optional[str],
    trusted_proxy_count: int = 0,
) -> str:
    """Work out the address a request should be attributed to.

    Each trusted proxy appends the address it received the request from to
    X-Forwarded-For, so with N trusted proxies in front of the service the
    N-th entry from the right is the last address no client could forge.

    Args:
        headers: Request headers
        peer_host: Address of the socket peer
        trusted_proxy_count: Number of reverse proxies in front of the service

    Returns:
        Client address, or "unknown" when none is available
    """
    if trusted_proxy_count > 0:
        forwarded = extract_forwarded_for(headers)
        if forwarded:
            if len(forwarded) >= trusted_proxy_count:
                return forwarded[-trusted_proxy_count]
            return forwarded[0]

    return peer_host or "unknown"
