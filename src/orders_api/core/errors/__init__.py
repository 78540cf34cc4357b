"""Error handling module: request errors and process lifecycle errors."""

from orders_api.core.errors.exceptions import (
    AppException,
    BackendError,
    BadRequestError,
    NotFoundError,
    ShutdownError,
    StartupError,
)
from orders_api.core.errors.handlers import register_exception_handlers


__all__ = [
    "AppException",
    "BackendError",
    "BadRequestError",
    "NotFoundError",
    "ShutdownError",
    "StartupError",
    "register_exception_handlers",
]
