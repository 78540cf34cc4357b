"""Orders module: read-only lookup of stored orders."""

from orders_api.modules.orders.routes import router


__all__ = ["router"]
