"""Error taxonomy for the short link service.

Every error carries a stable ``error_code`` and the HTTP ``status_code`` the
web layer answers with, so callers can tell failures apart without parsing
messages.
"""


class ShortenerError(Exception):
    """Base exception for all short link errors."""

    error_code = "shortener_error"
    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__


class MissingFieldError(ShortenerError):
    """A required field was not provided."""

    error_code = "missing_field"
    status_code = 400


class InvalidFormatError(ShortenerError):
    """A supplied value violates a format constraint."""

    error_code = "invalid_format"
    status_code = 400


class ConflictError(ShortenerError):
    """The requested short code is already in use."""

    error_code = "conflict"
    status_code = 409


class NotFoundError(ShortenerError):
    """The short code does not exist."""

    error_code = "not_found"
    status_code = 404


class ExpiredError(ShortenerError):
    """The short code existed but its validity window has elapsed."""

    error_code = "expired"
    status_code = 410


class UnauthorizedError(ShortenerError):
    """No bearer token was presented."""

    error_code = "unauthorized"
    status_code = 401
