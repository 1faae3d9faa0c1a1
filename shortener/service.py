"""Business logic service for the short link service."""

import asyncio
import contextlib
import logging
from typing import Any, Dict, List, Optional

from .exceptions import ConflictError, ExpiredError, InvalidFormatError, NotFoundError
from .models import ShortLink
from .registry import LinkRegistry


class URLShortenerService:
    """Service layer for short link business logic."""

    def __init__(
        self,
        registry: LinkRegistry,
        logger: Optional[logging.Logger] = None,
        enable_custom_codes: bool = True,
        sweep_interval_seconds: float = 0,
    ):
        """Initialize short link service.

        Args:
            registry: Registry owning the links
            logger: Optional logger
            enable_custom_codes: Whether to allow custom short codes
            sweep_interval_seconds: Period of the background purge of expired
                links; 0 leaves expired links to lazy deletion only
        """
        self.registry = registry
        self.logger = logger or logging.getLogger(__name__)
        self.enable_custom_codes = enable_custom_codes
        self.sweep_interval_seconds = sweep_interval_seconds
        self._sweep_task: Optional[asyncio.Task] = None

    async def create_short_url(
        self,
        original_url: Optional[str],
        validity_minutes: Optional[float] = None,
        custom_code: Optional[str] = None,
    ) -> ShortLink:
        """Create a new short link.

        Args:
            original_url: The original long URL
            validity_minutes: Optional lifetime in minutes
            custom_code: Optional custom short code

        Returns:
            The stored link

        Raises:
            MissingFieldError: If the URL is missing
            InvalidFormatError: If validation fails or custom codes are disabled
            ConflictError: If the custom code is in use
        """
        if custom_code is not None and not self.enable_custom_codes:
            raise InvalidFormatError("Custom short codes are not enabled")

        try:
            link = self.registry.create(
                original_url,
                validity_minutes=validity_minutes,
                custom_code=custom_code,
            )
        except ConflictError:
            self.logger.warning(f"Short code collision: {custom_code}")
            raise

        self.logger.info(
            f"Created short URL: {link.code} -> {link.original_url} (expires {link.expiry_label()})"
        )
        return link

    async def get_original_url(
        self,
        short_code: str,
        source: Optional[str] = None,
        client_address: Optional[str] = None,
    ) -> str:
        """Resolve a short code and record the click.

        Raises:
            NotFoundError: If the code does not exist
            ExpiredError: If the link has expired
        """
        try:
            original_url = self.registry.resolve(
                short_code,
                source=source,
                client_address=client_address,
            )
        except ExpiredError:
            self.logger.info(f"Short code expired: {short_code}")
            raise
        except NotFoundError:
            self.logger.warning(f"Short code not found: {short_code}")
            raise

        self.logger.debug(f"Redirect: {short_code} -> {original_url} (source={source or 'direct'})")
        return original_url

    async def list_links(self) -> List[ShortLink]:
        """List every stored link with its click history."""
        return self.registry.list_all()

    async def get_statistics(self) -> Dict[str, Any]:
        """Get service statistics.

        Returns:
            Dictionary with statistics
        """
        links = self.registry.list_all()
        now = self.registry.clock()

        return {
            "total_links": len(links),
            "active_links": sum(1 for link in links if not link.is_expired(now)),
            "total_clicks": sum(link.total_clicks for link in links),
            "custom_codes_enabled": self.enable_custom_codes,
        }

    async def health_check(self, timeout: float = 1.0) -> Dict[str, bool]:
        """Perform health check.

        The registry counts as healthy when its lock can be taken within
        ``timeout`` seconds. The wait runs in a worker thread so a wedged
        lock never blocks the event loop.
        """
        registry_healthy = await asyncio.to_thread(self.registry.is_responsive, timeout)
        if not registry_healthy:
            self.logger.error(f"Registry health check failed: lock not acquired within {timeout}s")

        return {
            "registry": registry_healthy,
            "overall": registry_healthy,
        }

    async def start(self) -> None:
        """Start the background sweep of expired links, if configured."""
        if self.sweep_interval_seconds > 0 and self._sweep_task is None:
            self._sweep_task = asyncio.create_task(self._sweep_loop())
            self.logger.info(f"Expired link sweep every {self.sweep_interval_seconds}s")

    async def close(self) -> None:
        """Stop the background sweep."""
        if self._sweep_task is not None:
            self._sweep_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._sweep_task
            self._sweep_task = None

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self.sweep_interval_seconds)
            removed = self.registry.purge_expired()
            if removed:
                self.logger.info(f"Swept {removed} expired links")
