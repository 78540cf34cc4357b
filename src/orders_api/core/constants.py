"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# HTTP listener
DEFAULT_SERVICE_PORT = 9911
MAX_PORT = 65535

# Tracer names
HANDLER_TRACER_NAME = "ordersAPI"
STORE_TRACER_NAME = "redis"

# Span names
ORDER_ROUTE_SPAN = "/v1/orders/{id}"
STORE_GET_SPAN = "redis.get"

# Span attributes
ORDER_ID_ATTRIBUTE = "order.id"
STORE_KEY_ATTRIBUTE = "id"

# Paths kept out of request logging and HTTP instrumentation
HEALTH_PATH_PREFIX = "/health"
