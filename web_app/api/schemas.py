"""Pydantic schemas for API requests and responses."""

from enum import Enum
from pydantic import AliasChoices, BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime


class ShortenRequest(BaseModel):
    """Request to shorten a URL.

    Accepts snake_case field names and the camelCase names used by older
    clients (``originalUrl``, ``validityMinutes``, ``customShortCode``).
    """

    url: Optional[str] = Field(
        None,
        description="The URL to shorten",
        validation_alias=AliasChoices("url", "original_url", "originalUrl"),
    )
    validity_minutes: Optional[float] = Field(
        None,
        description="Minutes the link stays valid (default 30)",
        validation_alias=AliasChoices("validity_minutes", "validity", "validityMinutes"),
    )
    custom_code: Optional[str] = Field(
        None,
        description="Optional custom short code (4-10 letters and digits)",
        validation_alias=AliasChoices("custom_code", "shortcode", "customShortCode"),
    )

    @field_validator("custom_code")
    @classmethod
    def blank_code_means_generated(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty custom code (e.g. an untouched form field) as absent."""
        if v is not None and not v.strip():
            return None
        return v

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://example.com/very/long/path/to/resource",
                    "validity_minutes": 30,
                },
                {
                    "url": "https://github.com/user/repo",
                    "custom_code": "myrepo",
                }
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    original_url: str = Field(..., description="The original long URL")
    short_code: str = Field(..., description="The short code")
    short_url: str = Field(..., description="The complete short URL")
    created_at: datetime = Field(..., description="Creation timestamp")
    expiry: str = Field(..., description="ISO-8601 expiry timestamp, or 'never'")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "original_url": "https://example.com/very/long/path",
                    "short_code": "k3x9qa",
                    "short_url": "https://short.link/k3x9qa",
                    "created_at": "2024-01-01T12:00:00Z",
                    "expiry": "2024-01-01T12:30:00Z",
                }
            ]
        }
    }


class ClickResponse(BaseModel):
    """One recorded click."""

    timestamp: str
    source: str
    client_address: Optional[str] = None


class LinkStatsResponse(BaseModel):
    """A stored link with its click history."""

    short_code: str
    original_url: str
    short_url: str
    created_at: str
    expiry: str
    total_clicks: int
    detailed_clicks: List[ClickResponse]


class StatisticsResponse(BaseModel):
    """Aggregate statistics response."""

    total_links: int
    active_links: int
    total_clicks: int
    custom_codes_enabled: bool


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    registry: str = Field(..., description="Registry status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Stable error code")
    detail: Optional[str] = Field(None, description="Detailed error information")


class LogLevel(str, Enum):
    debug = "debug"
    info = "info"
    warn = "warn"
    error = "error"
    fatal = "fatal"


class LogRequest(BaseModel):
    """Structured log entry submitted by a client."""

    stack: str = Field(..., min_length=1, description="Emitting stack, e.g. frontend or backend")
    level: LogLevel
    package: str = Field(..., min_length=1, description="Emitting package or module")
    message: str = Field(..., min_length=1)


class LogResponse(BaseModel):
    """Acknowledgement of an ingested log entry."""

    log_id: str
    message: str
