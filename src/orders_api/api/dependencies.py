"""Shared API dependencies.

The store and the handler tracer are built once by the service process
and hung off ``app.state``; these dependencies hand them to endpoints.
"""

from typing import Annotated

from fastapi import Depends, Request
from opentelemetry import trace

from orders_api.core.store import OrderStore


def get_order_store(request: Request) -> OrderStore:
    """Get the shared order store."""
    return request.app.state.store


def get_handler_tracer(request: Request) -> trace.Tracer:
    """Get the tracer used for request spans."""
    return request.app.state.tracer


# Type aliases for dependency injection
OrderStoreDep = Annotated[OrderStore, Depends(get_order_store)]
HandlerTracer = Annotated[trace.Tracer, Depends(get_handler_tracer)]
