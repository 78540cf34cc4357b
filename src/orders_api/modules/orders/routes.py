"""Order lookup endpoint.

One traced span per request. The decision table:

- empty id                          -> 400, no store call
- value found and non-empty         -> 200 ``{"order": value}``
- key missing, or empty value       -> 404
- any other store failure           -> 500

Every failure is recorded once on the request span before the request is
aborted, and the span is always ended before the response is written.
"""

from typing import NoReturn

import structlog
from fastapi import APIRouter, status
from opentelemetry.trace import Span, Status, StatusCode

from orders_api.api.dependencies import HandlerTracer, OrderStoreDep
from orders_api.core.constants import ORDER_ID_ATTRIBUTE, ORDER_ROUTE_SPAN
from orders_api.core.errors import (
    AppException,
    BackendError,
    BadRequestError,
    NotFoundError,
)
from orders_api.core.store import StoreError, StoreKeyNotFoundError
from orders_api.modules.orders.schemas import OrderResponse


logger = structlog.get_logger()

router = APIRouter(prefix="/v1/orders", tags=["orders"])


def _abort(span: Span, error: AppException, cause: Exception | None = None) -> NoReturn:
    """Record the failure on the span and abort the request."""
    recorded = cause or error
    span.record_exception(recorded)
    span.set_status(Status(StatusCode.ERROR, str(recorded)))
    raise error


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    summary="Get order",
    description="Fetch a single order by ID.",
    responses={
        status.HTTP_400_BAD_REQUEST: {"description": "Empty order ID"},
        status.HTTP_404_NOT_FOUND: {"description": "No order stored under this ID"},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Store failure"},
    },
)
async def get_order(
    order_id: str,
    store: OrderStoreDep,
    tracer: HandlerTracer,
) -> OrderResponse:
    """Look up an order by ID."""
    with tracer.start_as_current_span(
        ORDER_ROUTE_SPAN,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        if not order_id:
            _abort(span, BadRequestError("id is empty"))

        span.set_attribute(ORDER_ID_ATTRIBUTE, order_id)

        try:
            order = await store.get(order_id)
        except StoreKeyNotFoundError:
            order = ""
        except StoreError as exc:
            _abort(span, BackendError(str(exc), details={"order_id": order_id}), exc)

        # Absent and empty are the same thing to a client
        if not order:
            _abort(
                span,
                NotFoundError("order not found", resource="order", resource_id=order_id),
            )

        logger.debug("order_fetched", order_id=order_id)
        return OrderResponse(order=order)


@router.get("/", include_in_schema=False)
async def get_order_without_id(
    store: OrderStoreDep,
    tracer: HandlerTracer,
) -> OrderResponse:
    """``GET /v1/orders/`` is a lookup with an empty ID."""
    return await get_order("", store, tracer)
