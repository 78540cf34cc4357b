"""Exception handlers.

Failed requests are aborted with a status code and an empty body; the
success path is the only one that writes JSON. Details go to the logs and
to the request's trace span, not to the client.
"""

from typing import TYPE_CHECKING, cast

import structlog
from fastapi import FastAPI, Request, Response, status

from orders_api.core.errors.exceptions import AppException


if TYPE_CHECKING:
    from starlette.types import ExceptionHandler


logger = structlog.get_logger()


async def app_exception_handler(request: Request, exc: AppException) -> Response:
    """Handle application-specific exceptions.

    Converts AppException subclasses to an empty response carrying the
    exception's status code.
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "app_exception",
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        path=str(request.url.path),
        details=exc.details,
    )
    return Response(status_code=exc.status_code)


async def generic_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle unexpected exceptions.

    Catches all unhandled exceptions and returns a bare 500.
    """
    logger.exception(
        "unhandled_exception",
        path=str(request.url.path),
        error_type=type(exc).__name__,
    )
    return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app.

    Call this function during app initialization:

        app = FastAPI()
        register_exception_handlers(app)
    """
    app.add_exception_handler(
        AppException, cast("ExceptionHandler", app_exception_handler)
    )
    app.add_exception_handler(Exception, generic_exception_handler)
