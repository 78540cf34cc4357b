"""Tests for structlog setup."""

from opentelemetry.sdk.trace import TracerProvider

from orders_api.core.logging import add_trace_context


def test_trace_context_added_inside_span():
    """Verify trace and span IDs are attached while a span is active."""
    tracer = TracerProvider().get_tracer("test")

    with tracer.start_as_current_span("work") as span:
        event = add_trace_context(None, "info", {"event": "order_fetched"})
        context = span.get_span_context()

    assert event["trace_id"] == format(context.trace_id, "032x")
    assert event["span_id"] == format(context.span_id, "016x")
    assert event["event"] == "order_fetched"


def test_trace_context_absent_outside_span():
    """Verify events outside any span are left untouched."""
    event = add_trace_context(None, "info", {"event": "store_connected"})

    assert event == {"event": "store_connected"}
