"""Bearer token gate for protected API routes.

Credential contents are not verified here; a non-empty bearer token is all
that is required. Real verification belongs to an upstream identity service.
"""

from typing import Optional

from fastapi import Header

from shortener.exceptions import UnauthorizedError


async def require_bearer_token(authorization: Optional[str] = Header(None)) -> str:
    """Return the presented bearer token or raise ``UnauthorizedError``."""
    if not authorization:
        raise UnauthorizedError("Authorization token missing")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("Authorization header must be 'Bearer <token>'")

    return token.strip()
