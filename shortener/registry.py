"""In-memory registry of short links.

The registry is the only owner of the ``code -> ShortLink`` map. A single
lock guards every read-modify-write on the map: allocating a code and
inserting the link is one step, and so is resolving a code (lookup, expiry
check, lazy deletion, click append). Nothing under the lock does I/O.
"""

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from .exceptions import ConflictError, ExpiredError, InvalidFormatError, MissingFieldError, NotFoundError
from .models import ClickEvent, ShortLink
from .shortcode import ShortCodeGenerator
from .common.headers import DIRECT_SOURCE
from .common.validators import is_valid_custom_code, is_valid_url, is_valid_validity


DEFAULT_VALIDITY_MINUTES = 30.0


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LinkRegistry:
    """Authoritative store of short links with lazy expiry."""

    def __init__(
        self,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        default_validity_minutes: Optional[float] = DEFAULT_VALIDITY_MINUTES,
        clock: Callable[[], datetime] = utc_now,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the registry.

        Args:
            short_code_generator: Generator used for codes the caller does not supply
            default_validity_minutes: Lifetime applied when a caller gives none;
                ``None`` makes such links permanent
            clock: Returns the current timezone-aware time
            logger: Optional logger
        """
        self.generator = short_code_generator or ShortCodeGenerator()
        self.default_validity_minutes = default_validity_minutes
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)
        self._links: Dict[str, ShortLink] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._links)

    def __contains__(self, code: str) -> bool:
        with self._lock:
            return self._is_live(code, self.clock())

    def create(
        self,
        original_url: Optional[str],
        validity_minutes: Optional[float] = None,
        custom_code: Optional[str] = None,
    ) -> ShortLink:
        """Register a new short link.

        Args:
            original_url: Redirect target, an absolute http(s) URL
            validity_minutes: Lifetime in minutes; ``None`` applies the
                registry default and ``0`` expires the link immediately
            custom_code: Optional caller-chosen code (4-10 alphanumerics)

        Returns:
            A snapshot of the stored link

        Raises:
            MissingFieldError: If original_url is absent
            InvalidFormatError: If the URL, validity or custom code is malformed
            ConflictError: If custom_code belongs to a live link
        """
        if original_url is None or (isinstance(original_url, str) and not original_url.strip()):
            raise MissingFieldError("Original URL is required")

        is_valid, error = is_valid_url(original_url)
        if not is_valid:
            raise InvalidFormatError(f"Invalid URL: {error}")

        is_valid, error = is_valid_validity(validity_minutes)
        if not is_valid:
            raise InvalidFormatError(f"Invalid validity: {error}")

        if custom_code is not None:
            is_valid, error = is_valid_custom_code(custom_code)
            if not is_valid:
                raise InvalidFormatError(f"Invalid short code: {error}")

        if validity_minutes is None:
            validity_minutes = self.default_validity_minutes

        with self._lock:
            now = self.clock()

            if custom_code is not None:
                if self._is_live(custom_code, now):
                    raise ConflictError(f"Short code '{custom_code}' already exists")
                code = custom_code
            else:
                code = self.generator.allocate(lambda candidate: self._is_live(candidate, now))

            expires_at = None
            if validity_minutes is not None:
                expires_at = now + timedelta(minutes=validity_minutes)

            link = ShortLink(
                code=code,
                original_url=original_url,
                created_at=now,
                expires_at=expires_at,
            )
            # A dead link still holding the code is dropped, not updated in place
            self._links.pop(code, None)
            self._links[code] = link
            return link.snapshot()

    def resolve(
        self,
        code: str,
        source: Optional[str] = None,
        client_address: Optional[str] = None,
    ) -> str:
        """Resolve a code to its original URL and record the click.

        Args:
            code: The short code
            source: Referrer of the request (``"direct"`` if empty)
            client_address: Best-effort address of the requester

        Returns:
            The original URL to redirect to

        Raises:
            NotFoundError: If no link holds the code
            ExpiredError: If the link has expired; it is deleted
        """
        with self._lock:
            link = self._links.get(code)
            if link is None:
                raise NotFoundError(f"Short code '{code}' not found")

            now = self.clock()
            if link.is_expired(now):
                del self._links[code]
                self.logger.debug(f"Deleted expired link {code}")
                raise ExpiredError(f"Short code '{code}' has expired")

            link.clicks.append(ClickEvent(
                timestamp=now,
                source=source or DIRECT_SOURCE,
                client_address=client_address,
            ))
            return link.original_url

    def get(self, code: str) -> Optional[ShortLink]:
        """Snapshot of one stored link without recording a click."""
        with self._lock:
            link = self._links.get(code)
            return link.snapshot() if link else None

    def list_all(self) -> List[ShortLink]:
        """Snapshot every stored link, expired-but-unswept ones included.

        Links come back in insertion order.
        """
        with self._lock:
            return [link.snapshot() for link in self._links.values()]

    def purge_expired(self) -> int:
        """Delete every dead link.

        Returns:
            Number of links removed
        """
        with self._lock:
            now = self.clock()
            expired = [code for code, link in self._links.items() if link.is_expired(now)]
            for code in expired:
                del self._links[code]

        if expired:
            self.logger.debug(f"Purged {len(expired)} expired links")
        return len(expired)

    def is_responsive(self, timeout: float = 1.0) -> bool:
        """Check that the registry lock can be taken within ``timeout`` seconds."""
        acquired = self._lock.acquire(timeout=timeout)
        if acquired:
            self._lock.release()
        return acquired

    def _is_live(self, code: str, now: datetime) -> bool:
        # Caller must hold self._lock
        link = self._links.get(code)
        return link is not None and not link.is_expired(now)
