"""OpenTelemetry tracing configuration.

The tracing pipeline is an explicitly constructed object rather than the
process-global tracer provider: the service builds exactly one at startup
and passes it to the store client and the request handler.

Traces are exported in batches to an OTLP-compatible collector (Jaeger,
Tempo, the OpenTelemetry Collector, ...) when OTLP_ENDPOINT is configured,
and to the console otherwise.
"""

import platform
import socket

import structlog
from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)

from orders_api import __version__
from orders_api.config import Settings


log = structlog.get_logger()


def build_resource(settings: Settings) -> Resource:
    """Describe this process to the tracing backend.

    Args:
        settings: Application settings

    Returns:
        Resource with service and host attributes
    """
    return Resource.create(
        {
            "service.name": settings.app_name,
            "service.version": __version__,
            "deployment.environment": settings.environment,
            "host.arch": platform.machine(),
            "host.name": socket.gethostname(),
        }
    )


class TracingPipeline:
    """One tracer provider per process, handed around by reference.

    Attributes:
        provider: The SDK tracer provider owning the span processors
    """

    def __init__(self, provider: TracerProvider) -> None:
        self.provider = provider

    @classmethod
    def from_settings(cls, settings: Settings) -> "TracingPipeline":
        """Build the batched export pipeline described by settings.

        Args:
            settings: Application settings

        Returns:
            A ready pipeline; nothing is installed globally
        """
        provider = TracerProvider(resource=build_resource(settings))

        exporter: SpanExporter
        if settings.otlp_endpoint:
            exporter = OTLPSpanExporter(
                endpoint=settings.otlp_endpoint,
                insecure=settings.otlp_insecure,
            )
            log.info(
                "tracing_configured",
                exporter="otlp",
                endpoint=settings.otlp_endpoint,
            )
        else:
            exporter = ConsoleSpanExporter()
            log.info("tracing_configured", exporter="console")

        provider.add_span_processor(BatchSpanProcessor(exporter))
        return cls(provider)

    def tracer(self, name: str) -> trace.Tracer:
        """Get a tracer for manual span creation.

        Args:
            name: Instrumentation scope name

        Returns:
            OpenTelemetry Tracer bound to this pipeline's provider

        Example:
            tracer = pipeline.tracer("ordersAPI")
            with tracer.start_as_current_span("my_operation"):
                # ... do work
        """
        return self.provider.get_tracer(name)

    def instrument_app(self, app: FastAPI) -> None:
        """Wrap the app in server-side HTTP instrumentation.

        Inbound ``traceparent`` headers become the parent of the request
        span. Health checks are not traced.

        Args:
            app: The FastAPI application instance to instrument
        """
        FastAPIInstrumentor.instrument_app(
            app,
            tracer_provider=self.provider,
            excluded_urls="health/.*",
        )
        log.debug("instrumented_fastapi")

    def shutdown(self) -> None:
        """Flush buffered spans and stop the exporters.

        Should be called once, after the HTTP listener and the store are closed.
        """
        self.provider.shutdown()
        log.info("tracing_shutdown_complete")
