"""Key-value store access for orders."""

from orders_api.core.store.redis import (
    OrderStore,
    StoreBackendError,
    StoreError,
    StoreKeyNotFoundError,
)


__all__ = [
    "OrderStore",
    "StoreBackendError",
    "StoreError",
    "StoreKeyNotFoundError",
]
