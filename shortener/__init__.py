"""Core business logic for the short link service."""

from .exceptions import (
    ShortenerError,
    MissingFieldError,
    InvalidFormatError,
    ConflictError,
    NotFoundError,
    ExpiredError,
    UnauthorizedError,
)
from .models import ClickEvent, ShortLink
from .shortcode import ShortCodeGenerator
from .registry import LinkRegistry
from .service import URLShortenerService

__all__ = [
    "ShortenerError",
    "MissingFieldError",
    "InvalidFormatError",
    "ConflictError",
    "NotFoundError",
    "ExpiredError",
    "UnauthorizedError",
    "ClickEvent",
    "ShortLink",
    "ShortCodeGenerator",
    "LinkRegistry",
    "URLShortenerService",
]
