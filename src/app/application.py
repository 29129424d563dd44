import logging
from contextlib import asynccontextmanager
from typing import AsyncContextManager, Callable

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from src.app.api import quote_requests
from src.app.api.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    UnhandledErrorMiddleware,
    create_limiter,
    unhandled_exception_handler,
    validation_exception_handler,
)
from src.app.containers import Container

logger = logging.getLogger(__name__)

# Type alias for lifespan context manager
LifespanType = Callable[[FastAPI], AsyncContextManager[None]]


@asynccontextmanager
async def default_lifespan(app: FastAPI):
    """Default application lifespan manager - prepares the store and mail collaborators on startup."""
    container: Container = app.state.container
    logger.info("Starting Quote Request API...")

    db = container.database()
    await db.create_all()
    logger.info("Database initialized successfully")

    # Load templates and the inline logo now so a missing asset fails startup, not a request
    _ = container.quote_confirmation_notifier()
    logger.info("Confirmation email templates loaded")

    yield

    logger.info("Shutting down Quote Request API...")
    await db.dispose()


def create_app(container: Container, lifespan: LifespanType | None = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Middleware runs outermost first: request logging, CORS, security headers,
    rate limiting, unhandled-error translation, then the route.

    Args:
        container: DI container holding the configuration and collaborators.
        lifespan: Optional lifespan context manager. If not provided, uses default_lifespan.

    Returns:
        Configured FastAPI application.
    """
    container.wire(modules=[
        "src.app.api.quote_requests",
    ])

    config = container.config()

    app = FastAPI(
        title=config.app_name,
        version=config.app_version,
        lifespan=lifespan or default_lifespan,
    )

    # Attach container to app state for access in lifespan and routes
    app.state.container = container

    limiter = create_limiter(config.rate_limit)
    app.state.limiter = limiter

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Added innermost first
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors.allow_origins,
        allow_credentials=config.cors.allow_credentials,
        allow_methods=config.cors.allow_methods,
        allow_headers=config.cors.allow_headers,
    )
    app.add_middleware(RequestLoggingMiddleware)

    # Include routers
    app.include_router(quote_requests.router, prefix="/api")

    @app.get("/")
    async def root():
        return {"message": "Welcome to the Quote Request API"}

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app
