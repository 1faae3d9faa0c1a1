"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shortener.exceptions import InvalidFormatError, ShortenerError
from .api import api_router
from .web import web_router
from .middleware.headers import ForwardedHeadersMiddleware
from .middleware.logging import LoggingMiddleware


logger = logging.getLogger("shortener.web")


async def shortener_error_handler(request: Request, exc: ShortenerError) -> JSONResponse:
    """Render a typed service error as ``{"error": code, "detail": message}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error_code, "detail": exc.message},
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed request bodies as ``invalid_format`` errors."""
    errors = exc.errors()
    detail = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in errors
    )
    logger.debug(f"Rejected request to {request.url.path}: {detail}")
    return JSONResponse(
        status_code=InvalidFormatError.status_code,
        content={"error": InvalidFormatError.error_code, "detail": detail},
    )


def create_app(
    registry_instance,
    service_instance,
    config,
) -> FastAPI:
    """Create and configure FastAPI application.
    
    Args:
        registry_instance: Link registry instance
        service_instance: Service instance
        config: Configuration instance
        
    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Short Link Service",
        description="URL shortening service with expiring links and click statistics",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )
    
    # Store instances in app state for access in routes
    app.state.registry = registry_instance
    app.state.service = service_instance
    app.state.config = config
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    # Forwarded headers run first so the logger sees the client address
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ForwardedHeadersMiddleware)
    
    app.add_exception_handler(ShortenerError, shortener_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    
    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Redirect"])
    
    return app
