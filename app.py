#!/usr/bin/env python3
"""
Main entry point for the short link service.

Links live in process memory: one registry per process, created at startup
and handed to the service and routes through app state. WORKERS > 1 gives
each worker its own independent registry.

Usage:
    python app.py

Environment variables:
    BASE_URL - Base URL for short links
    PATH_PREFIX - Path prefix for short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    SHORT_CODE_LENGTH - Length of generated codes (default 6)
    DEFAULT_VALIDITY_MINUTES - Lifetime of links created without a validity (default 30)
    ENABLE_CUSTOM_CODES - Allow caller-chosen codes (default true)
    SWEEP_INTERVAL_SECONDS - Background purge of expired links (default 0, disabled)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortener.common.logging_config import setup_logging
from shortener.registry import LinkRegistry
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from web_app import create_app


def build_service(config: Config, logger=None) -> URLShortenerService:
    """Build a fresh registry and the service that fronts it."""
    registry = LinkRegistry(
        short_code_generator=ShortCodeGenerator(default_length=config.short_code_length),
        default_validity_minutes=config.default_validity_minutes,
        logger=logger,
    )
    return URLShortenerService(
        registry=registry,
        logger=logger,
        enable_custom_codes=config.enable_custom_codes,
        sweep_interval_seconds=config.sweep_interval_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting short link service...")

    service = build_service(config, logger=logger)
    await service.start()

    app.state.registry = service.registry
    app.state.service = service

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down short link service...")
    await service.close()
    logger.info(f"Service stopped ({len(service.registry)} links discarded)")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("Short Link Service")
    logger.info(f"Configuration: {config.model_dump()}")

    app = create_app(
        registry_instance=None,  # Set in lifespan
        service_instance=None,
        config=config,
    )
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
