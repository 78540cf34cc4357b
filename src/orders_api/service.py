"""Service process: startup, listening and ordered shutdown.

Startup order is tracing pipeline, store, application, listener; any failure
before the listener is up is a ``StartupError``. Shutdown runs in the
reverse direction: the listener stops accepting and drains within the grace
period, then the store is closed, then buffered spans are flushed.
"""

import asyncio
import contextlib
import signal
from collections.abc import Generator

import structlog
import uvicorn

from orders_api.config import Settings
from orders_api.core.constants import STORE_TRACER_NAME
from orders_api.core.errors import ShutdownError, StartupError
from orders_api.core.observability import TracingPipeline
from orders_api.core.store import OrderStore, StoreError
from orders_api.main import create_app


logger = structlog.get_logger()

STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)
LISTEN_POLL_SECONDS = 0.05


class ListenerServer(uvicorn.Server):
    """uvicorn server that leaves signal handling to the service process."""

    def install_signal_handlers(self) -> None:
        pass

    @contextlib.contextmanager
    def capture_signals(self) -> Generator[None, None, None]:
        yield


async def start_dependencies(settings: Settings) -> tuple[TracingPipeline, OrderStore]:
    """Bring up the tracing pipeline, then the store.

    Args:
        settings: Application settings

    Returns:
        The tracing pipeline and a connected store

    Raises:
        StartupError: If either dependency cannot be brought up
    """
    try:
        tracing = TracingPipeline.from_settings(settings)
    except Exception as exc:
        raise StartupError(f"tracing pipeline: {exc}") from exc

    try:
        store = await OrderStore.connect(
            str(settings.redis_url),
            tracing.tracer(STORE_TRACER_NAME),
            socket_timeout=settings.redis_socket_timeout,
        )
    except StoreError as exc:
        tracing.shutdown()
        raise StartupError(f"store at {settings.redis_url}: {exc}") from exc

    return tracing, store


async def shutdown(
    server: uvicorn.Server,
    listener: "asyncio.Task[None]",
    store: OrderStore,
    tracing: TracingPipeline,
) -> None:
    """Stop the listener, close the store, flush the tracing pipeline.

    Every step runs even when an earlier one fails.

    Raises:
        ShutdownError: With every failure collected along the way
    """
    errors: list[BaseException] = []

    server.should_exit = True
    try:
        await listener
    except Exception as exc:
        logger.error("listener_shutdown_failed", error=str(exc))
        errors.append(exc)

    try:
        await store.close()
    except Exception as exc:
        logger.error("store_close_failed", error=str(exc))
        errors.append(exc)

    try:
        tracing.shutdown()
    except Exception as exc:
        logger.error("tracing_shutdown_failed", error=str(exc))
        errors.append(exc)

    if errors:
        raise ShutdownError(errors)


async def _wait_until_listening(
    server: uvicorn.Server,
    listener: "asyncio.Task[None]",
    stop: asyncio.Event,
) -> bool:
    """Wait for the listener to bind its socket.

    Returns:
        False if the listener ended or a stop arrived before binding
    """
    while not server.started:
        if listener.done() or stop.is_set():
            return False
        await asyncio.sleep(LISTEN_POLL_SECONDS)
    return True


async def run(settings: Settings, stop: asyncio.Event | None = None) -> None:
    """Run the service until ``stop`` is set or a stop signal arrives.

    Args:
        settings: Application settings
        stop: Event that ends the service; SIGINT/SIGTERM set it when omitted

    Raises:
        StartupError: If the service could not start, or the listener
            stopped on its own before a stop was requested
        ShutdownError: If teardown failed
    """
    tracing, store = await start_dependencies(settings)
    app = create_app(store, tracing, settings)

    server = ListenerServer(
        uvicorn.Config(
            app,
            host=settings.host,
            port=settings.port,
            timeout_graceful_shutdown=settings.shutdown_grace_seconds,
            log_config=None,
            access_log=False,
        )
    )
    listener = asyncio.create_task(server.serve(), name="http-listener")

    loop = asyncio.get_running_loop()
    installed_signals = stop is None
    if stop is None:
        stop = asyncio.Event()
        for sig in STOP_SIGNALS:
            loop.add_signal_handler(sig, stop.set)

    stop_waiter = asyncio.create_task(stop.wait(), name="stop-waiter")
    try:
        if await _wait_until_listening(server, listener, stop):
            logger.info("service_listening", host=settings.host, port=settings.port)
        await asyncio.wait(
            {listener, stop_waiter}, return_when=asyncio.FIRST_COMPLETED
        )
    finally:
        stop_waiter.cancel()
        if installed_signals:
            for sig in STOP_SIGNALS:
                loop.remove_signal_handler(sig)

    logger.info(
        "shutdown_started",
        reason="signal" if stop.is_set() else "listener_exited",
    )
    await shutdown(server, listener, store, tracing)
    logger.info("shutdown_complete")

    if not stop.is_set():
        raise StartupError("listener exited before a stop signal")
