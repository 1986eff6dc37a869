"""Client address resolution for rate limiting."""

import ipaddress
from collections.abc import Iterable

from fastapi import Request

UNKNOWN_CLIENT = "unknown"


def _is_trusted(address: str, trusted_proxies: Iterable[str]) -> bool:
    try:
        ip = ipaddress.ip_address(address)
    except ValueError:
        return False
    for proxy in trusted_proxies:
        try:
            if ip in ipaddress.ip_network(proxy, strict=False):
                return True
        except ValueError:
            continue
    return False


def resolve_client_address(
    peer: str | None, forwarded_for: str | None, trusted_proxies: list[str]
) -> str:
    """Resolve the address a request should be rate limited under.

    ``X-Forwarded-For`` is only consulted when the connecting peer is a
    trusted proxy. Hops are then read right to left and the first one that
    is not itself a trusted proxy is the client.

    Args:
        peer: Address of the connecting socket peer
        forwarded_for: Raw ``X-Forwarded-For`` header value
        trusted_proxies: Proxy IPs or CIDR ranges

    Returns:
        Client address
    """
    if not peer:
        return UNKNOWN_CLIENT
    if not forwarded_for or not _is_trusted(peer, trusted_proxies):
        return peer

    hops = [hop.strip() for hop in forwarded_for.split(",") if hop.strip()]
    for hop in reversed(hops):
        if not _is_trusted(hop, trusted_proxies):
            return hop
    # Every hop is a proxy; the left-most is the closest we get to the client
    return hops[0] if hops else peer


def client_address(request: Request, trusted_proxies: list[str]) -> str:
    """Rate limit key for a FastAPI request."""
    return resolve_client_address(
        request.client.host if request.client else None,
        request.headers.get("x-forwarded-for"),
        trusted_proxies,
    )
