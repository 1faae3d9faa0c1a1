"""Configuration management for the short link service."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field

from shortener.common.validators import MAX_VALIDITY_MINUTES


class Config(BaseSettings):
    """Application configuration."""
    
    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )
    
    port: int = Field(
        default=9200,
        description="Port to listen on"
    )
    
    workers: int = Field(
        default=1,
        ge=1,
        description="Number of uvicorn worker processes. Links live in process memory, so each worker has its own registry."
    )
    
    # Short link settings
    base_url: str = Field(
        default="http://localhost:9200",
        description="Base URL for generating short URLs"
    )
    
    path_prefix: str = Field(
        default="",
        description="Path prefix for short URLs (e.g., '/s' for /s/abc123)"
    )
    
    short_code_length: int = Field(
        default=6,
        ge=4,
        le=10,
        description="Length of generated short codes"
    )
    
    default_validity_minutes: Optional[float] = Field(
        default=30.0,
        ge=0,
        le=MAX_VALIDITY_MINUTES,
        description="Lifetime of links created without a validity (unset = never expire)"
    )
    
    enable_custom_codes: bool = Field(
        default=True,
        description="Allow users to provide custom short codes"
    )
    
    sweep_interval_seconds: float = Field(
        default=0,
        ge=0,
        description="Interval of the background purge of expired links (0 = lazy deletion only)"
    )
    
    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    
    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )
    
    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )
    
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
