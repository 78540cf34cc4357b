"""Observability module for tracing.

Provides OpenTelemetry integration for distributed tracing.
"""

from orders_api.core.observability.tracing import TracingPipeline, build_resource


__all__ = ["TracingPipeline", "build_resource"]
