"""Validation utilities for the short link service."""

import math
import re
from urllib.parse import urlparse
from typing import Tuple


CUSTOM_CODE_MIN_LENGTH = 4
CUSTOM_CODE_MAX_LENGTH = 10

# Ten years; keeps now + validity inside datetime range
MAX_VALIDITY_MINUTES = 60 * 24 * 365 * 10

_CUSTOM_CODE_RE = re.compile(r'^[a-zA-Z0-9]+$')


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a URL.
    
    Args:
        url: The URL to validate
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"
    
    if len(url) > 2048:
        return False, "URL is too long (max 2048 characters)"
    
    try:
        result = urlparse(url)
    except ValueError as e:
        return False, f"Invalid URL format: {e}"
    
    # Check if scheme is http or https
    if result.scheme not in ["http", "https"]:
        return False, "URL must use http or https protocol"
    
    # Check if netloc (domain) exists
    if not result.netloc:
        return False, "URL must have a valid domain"
    
    return True, ""


def is_valid_custom_code(
    short_code: str,
    min_length: int = CUSTOM_CODE_MIN_LENGTH,
    max_length: int = CUSTOM_CODE_MAX_LENGTH,
) -> Tuple[bool, str]:
    """Validate a caller-supplied short code.
    
    Args:
        short_code: The short code to validate
        min_length: Minimum length for short code
        max_length: Maximum length for short code
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Short code is required"
    
    if len(short_code) < min_length:
        return False, f"Short code must be at least {min_length} characters"
    
    if len(short_code) > max_length:
        return False, f"Short code must be at most {max_length} characters"
    
    if not _CUSTOM_CODE_RE.match(short_code):
        return False, "Short code can only contain letters and numbers"
    
    return True, ""


def is_valid_validity(validity_minutes) -> Tuple[bool, str]:
    """Validate a validity window in minutes (``None`` means default)."""
    if validity_minutes is None:
        return True, ""
    
    # bool is an int subclass; true/false is never a duration
    if isinstance(validity_minutes, bool) or not isinstance(validity_minutes, (int, float)):
        return False, "Validity must be a number of minutes"
    
    if not math.isfinite(validity_minutes):
        return False, "Validity must be a finite number of minutes"
    
    if validity_minutes < 0:
        return False, "Validity cannot be negative"
    
    if validity_minutes > MAX_VALIDITY_MINUTES:
        return False, f"Validity must be at most {MAX_VALIDITY_MINUTES} minutes"
    
    return True, ""
