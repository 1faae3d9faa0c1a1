"""API routes implementation."""

import logging
import uuid
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, Request

from .auth import require_bearer_token
from .schemas import (
    ShortenRequest,
    ShortenResponse,
    LinkStatsResponse,
    StatisticsResponse,
    HealthResponse,
    ErrorResponse,
    LogRequest,
    LogResponse,
)
from shortener.common.headers import build_base_url
from shortener.common.logging_config import LOGGER_NAME, get_logger
from shortener.common.url_builder import build_short_url

router = APIRouter()

ingest_logger = get_logger(f"{LOGGER_NAME}.ingest")

_INGEST_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
}


def short_url_for(request: Request, short_code: str) -> str:
    """Build the fully-qualified short URL for a code as seen by this request."""
    config = request.app.state.config
    base_url = build_base_url(
        headers=dict(request.headers),
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    return build_short_url(
        short_code=short_code,
        base_url=base_url,
        path_prefix=config.path_prefix,
    )


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing field or invalid format"},
        401: {"model": ErrorResponse, "description": "Bearer token missing"},
        409: {"model": ErrorResponse, "description": "Short code already exists"},
    },
    summary="Create short URL",
    description="Create a shortened URL with an optional validity window and custom short code.",
)
async def shorten_url(
    request: Request,
    body: ShortenRequest,
    _token: str = Depends(require_bearer_token),
):
    """Create a shortened URL."""
    service = request.app.state.service

    link = await service.create_short_url(
        original_url=body.url,
        validity_minutes=body.validity_minutes,
        custom_code=body.custom_code,
    )

    return ShortenResponse(
        original_url=link.original_url,
        short_code=link.code,
        short_url=short_url_for(request, link.code),
        created_at=link.created_at,
        expiry=link.expiry_label(),
    )


@router.get(
    "/stats",
    response_model=List[LinkStatsResponse],
    responses={
        401: {"model": ErrorResponse, "description": "Bearer token missing"},
    },
    summary="List links",
    description="List every stored link with its click history.",
)
async def list_links(request: Request, _token: str = Depends(require_bearer_token)):
    """List all links with click statistics."""
    service = request.app.state.service

    links = await service.list_links()

    return [
        LinkStatsResponse(short_url=short_url_for(request, link.code), **link.to_dict())
        for link in links
    ]


@router.get(
    "/stats/summary",
    response_model=StatisticsResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Bearer token missing"},
    },
    summary="Get statistics",
    description="Get service-wide statistics.",
)
async def get_statistics(request: Request, _token: str = Depends(require_bearer_token)):
    """Get service statistics."""
    service = request.app.state.service

    stats = await service.get_statistics()

    return StatisticsResponse(**stats)


@router.post(
    "/logs",
    response_model=LogResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid log entry"},
        401: {"model": ErrorResponse, "description": "Bearer token missing"},
    },
    summary="Ingest log entry",
    description="Record a structured log entry (stack, level, package, message) from a client.",
)
async def ingest_log(body: LogRequest, _token: str = Depends(require_bearer_token)):
    """Re-emit a client log entry through the service logger."""
    log_id = str(uuid.uuid4())

    ingest_logger.log(
        _INGEST_LEVELS[body.level.value],
        f"[{body.stack}/{body.package}] {body.message} (log_id={log_id})",
    )

    return LogResponse(log_id=log_id, message="log created successfully")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        registry="healthy" if health["registry"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
