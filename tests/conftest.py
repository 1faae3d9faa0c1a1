"""Pytest configuration and fixtures."""

import random
from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from shortener.common.logging_config import setup_logging
from shortener.registry import LinkRegistry
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from web_app import create_app


class FakeClock:
    """Manually advanced clock for expiry tests."""
    
    def __init__(self, start: datetime = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    
    def __call__(self) -> datetime:
        return self.now
    
    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def short_code_generator():
    """Create short code generator with a seeded random source."""
    return ShortCodeGenerator(default_length=6, rng=random.Random(1234))


@pytest.fixture
def registry(short_code_generator, clock, logger) -> LinkRegistry:
    """Fresh registry per test."""
    return LinkRegistry(
        short_code_generator=short_code_generator,
        clock=clock,
        logger=logger,
    )


@pytest.fixture
def service(registry, logger) -> URLShortenerService:
    """Create service instance."""
    return URLShortenerService(registry=registry, logger=logger)


@pytest.fixture
def config():
    return Config(base_url="http://testserver")


@pytest.fixture
def app(registry, service, config):
    """Create test FastAPI app."""
    return create_app(
        registry_instance=registry,
        service_instance=service,
        config=config,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer test-token"}


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
