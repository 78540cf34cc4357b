"""Redis-backed order store.

Wraps a single asyncio Redis client. Each lookup is traced as its own
client span, nested under whatever span is current in the caller's context.
"""

import redis.asyncio as redis
import structlog
from opentelemetry import trace
from opentelemetry.trace import SpanKind, Status, StatusCode
from redis.exceptions import RedisError

from orders_api.core.constants import STORE_GET_SPAN, STORE_KEY_ATTRIBUTE


logger = structlog.get_logger()


class StoreError(Exception):
    """Base exception for store lookups."""


class StoreKeyNotFoundError(StoreError):
    """Raised when the requested key does not exist in the store."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"key not found: {key}")


class StoreBackendError(StoreError):
    """Raised for any other store failure (network, timeout, protocol).

    The underlying redis exception is chained as ``__cause__``.
    """


class OrderStore:
    """Read-only access to orders kept in Redis.

    The client owns its own connection pool and is safe to share across
    concurrent requests.
    """

    def __init__(self, client: redis.Redis, tracer: trace.Tracer) -> None:  # type: ignore[type-arg]
        self._client = client
        self._tracer = tracer

    @classmethod
    async def connect(
        cls,
        url: str,
        tracer: trace.Tracer,
        socket_timeout: float | None = None,
    ) -> "OrderStore":
        """Create a client for ``url`` and verify connectivity using PING.

        Args:
            url: Redis URL, e.g. ``redis://localhost:6379``
            tracer: Tracer used for per-call spans
            socket_timeout: Optional per-command socket timeout in seconds

        Returns:
            A connected store

        Raises:
            StoreBackendError: If the store does not answer the ping
        """
        client = redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=socket_timeout,
        )
        try:
            await client.ping()
        except RedisError as exc:
            await client.aclose()
            raise StoreBackendError(f"ping: {exc}") from exc

        logger.info("store_connected", url=url)
        return cls(client, tracer)

    async def get(self, key: str) -> str:
        """Return the value stored under ``key``.

        The caller guarantees ``key`` is non-empty. The value may be an
        empty string if that is what the store holds.

        Args:
            key: Order ID

        Returns:
            The stored value

        Raises:
            StoreKeyNotFoundError: If the key is absent
            StoreBackendError: On any other store failure
        """
        with self._tracer.start_as_current_span(
            STORE_GET_SPAN,
            kind=SpanKind.CLIENT,
            attributes={"db.system": "redis", STORE_KEY_ATTRIBUTE: key},
            record_exception=False,
            set_status_on_exception=False,
        ) as span:
            try:
                value = await self._client.get(key)
            except RedisError as exc:
                span.record_exception(exc)
                span.set_status(Status(StatusCode.ERROR, str(exc)))
                raise StoreBackendError(str(exc)) from exc

            span.set_attribute("found", value is not None)
            if value is None:
                raise StoreKeyNotFoundError(key)
            return value

    async def ping(self) -> None:
        """Check the store is reachable.

        Raises:
            StoreBackendError: If the ping fails
        """
        try:
            await self._client.ping()
        except RedisError as exc:
            raise StoreBackendError(f"ping: {exc}") from exc

    async def close(self) -> None:
        """Release the underlying connection pool.

        Call once, during shutdown.
        """
        await self._client.aclose()
        logger.info("store_closed")
