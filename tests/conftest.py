"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator, Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import (
    InMemorySpanExporter,
)

from orders_api.config import Settings
from orders_api.core.constants import STORE_TRACER_NAME
from orders_api.core.observability import TracingPipeline
from orders_api.core.store import OrderStore
from orders_api.main import create_app


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        otlp_endpoint=None,
        instrument_http=False,
    )


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    """Collects finished spans for assertions."""
    return InMemorySpanExporter()


@pytest.fixture
def tracing(span_exporter: InMemorySpanExporter) -> Generator[TracingPipeline, None, None]:
    """Tracing pipeline exporting synchronously to memory.

    Yields:
        Pipeline whose spans land in ``span_exporter`` as soon as they end
    """
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    yield TracingPipeline(provider)
    provider.shutdown()


@pytest.fixture
def redis_client() -> MagicMock:
    """Stand-in for ``redis.asyncio.Redis``.

    ``get`` returns None (missing key) unless a test says otherwise.
    """
    client = MagicMock()
    client.get = AsyncMock(return_value=None)
    client.ping = AsyncMock(return_value=True)
    client.aclose = AsyncMock(return_value=None)
    return client


@pytest.fixture
def store(redis_client: MagicMock, tracing: TracingPipeline) -> OrderStore:
    """Order store wired to the mock redis client."""
    return OrderStore(redis_client, tracing.tracer(STORE_TRACER_NAME))


@pytest.fixture
def app(store: OrderStore, tracing: TracingPipeline, test_settings: Settings) -> FastAPI:
    """Create test application instance."""
    return create_app(store, tracing, test_settings)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
