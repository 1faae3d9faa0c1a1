"""Header parsing utilities for the short link service."""

from typing import Dict, Optional


DIRECT_SOURCE = "direct"


def extract_forwarded_headers(headers: Dict[str, str]) -> Dict[str, Optional[str]]:
    """Extract X-Forwarded-* headers from request.
    
    Args:
        headers: Request headers dictionary
        
    Returns:
        Dictionary with forwarded_proto, forwarded_host, forwarded_for
    """
    # Convert headers to lowercase for case-insensitive lookup
    headers_lower = {k.lower(): v for k, v in headers.items()}
    
    return {
        "forwarded_proto": headers_lower.get("x-forwarded-proto"),
        "forwarded_host": headers_lower.get("x-forwarded-host"),
        "forwarded_for": headers_lower.get("x-forwarded-for"),
    }


def build_base_url(
    headers: Dict[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Build base URL from headers or fallback.
    
    Priority:
    1. X-Forwarded-Proto + X-Forwarded-Host
    2. Request scheme + host
    3. Fallback base URL from config
    
    Args:
        headers: Request headers
        fallback_base_url: Fallback base URL from configuration
        request_scheme: Request scheme (http/https)
        request_host: Request host
        
    Returns:
        Base URL (e.g., https://example.com)
    """
    forwarded = extract_forwarded_headers(headers)
    
    # Try X-Forwarded headers first (from proxy)
    if forwarded["forwarded_proto"] and forwarded["forwarded_host"]:
        proto = forwarded["forwarded_proto"]
        host = forwarded["forwarded_host"]
        return f"{proto}://{host}"
    
    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"
    
    return fallback_base_url.rstrip("/")


def get_client_address(headers: Dict[str, str], peer_host: Optional[str] = None) -> Optional[str]:
    """Best-effort origin address: first X-Forwarded-For hop, else the socket peer."""
    forwarded_for = extract_forwarded_headers(headers)["forwarded_for"]
    if forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop
    return peer_host


def get_click_source(headers: Dict[str, str]) -> str:
    """Referrer of a redirect request, or ``"direct"`` when there is none."""
    headers_lower = {k.lower(): v for k, v in headers.items()}
    referrer = headers_lower.get("referer") or headers_lower.get("referrer")
    return referrer.strip() if referrer and referrer.strip() else DIRECT_SOURCE
