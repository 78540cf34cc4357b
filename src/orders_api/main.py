"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from orders_api import __version__
from orders_api.api.router import api_router
from orders_api.config import Settings, get_settings
from orders_api.core.constants import HANDLER_TRACER_NAME
from orders_api.core.errors import register_exception_handlers
from orders_api.core.logging import RequestIdMiddleware, RequestLoggingMiddleware
from orders_api.core.observability import TracingPipeline
from orders_api.core.store import OrderStore


logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    The store and tracing pipeline are owned by the service process, which
    closes them after the listener has drained; this only logs the edges.
    """
    logger.info("application_startup", app_name=app.title)
    yield
    logger.info("application_shutdown", app_name=app.title)


def create_app(
    store: OrderStore,
    tracing: TracingPipeline,
    settings: Settings | None = None,
    instrument_http: bool | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Connected order store shared by all requests
        tracing: The process's tracing pipeline
        settings: Application settings, defaults to the cached settings
        instrument_http: Override ``settings.instrument_http``

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Read endpoint for orders kept in Redis",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
        # Disable docs in production
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
    )

    app.state.store = store
    app.state.tracer = tracing.tracer(HANDLER_TRACER_NAME)

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Add request ID middleware (outermost, runs first)
    app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(app)

    app.include_router(api_router)

    if settings.instrument_http if instrument_http is None else instrument_http:
        tracing.instrument_app(app)

    return app
