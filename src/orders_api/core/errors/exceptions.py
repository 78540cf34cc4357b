"""Domain exceptions for the application.

``AppException`` subclasses are HTTP-facing: the exception handlers turn
them into a bare status code response. ``StartupError`` and
``ShutdownError`` belong to the service process and never reach a client.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all request-level errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code, used in logs
        status_code: HTTP status code for the response
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class BadRequestError(AppException):
    """Raised for general client errors.

    Example:
        raise BadRequestError("id is empty")
    """

    message = "Bad request"
    error_code = "bad_request"
    status_code = 400


class NotFoundError(AppException):
    """Raised when a requested resource is not found.

    Example:
        raise NotFoundError("order not found", resource="order", resource_id=order_id)
    """

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class BackendError(AppException):
    """Raised when a downstream dependency fails while serving a request.

    Example:
        raise BackendError(str(exc)) from exc
    """

    message = "Backend failure"
    error_code = "backend_error"
    status_code = 500


class StartupError(Exception):
    """Raised when a process dependency cannot be brought up.

    Startup errors are fatal: the CLI logs them and exits non-zero.
    """


class ShutdownError(Exception):
    """Raised when one or more teardown steps fail.

    Every failure is kept in ``errors`` in the order it happened so that a
    failing store close never hides a failing listener shutdown.
    """

    def __init__(self, errors: list[BaseException]) -> None:
        self.errors = list(errors)
        summary = "; ".join(f"{type(e).__name__}: {e}" for e in self.errors)
        super().__init__(f"shutdown failed: {summary}")
