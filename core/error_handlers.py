"""Exception handlers for the FastAPI application.

All errors leave the API in the same envelope::

    {"error": {"message": ..., "status_code": ..., "details": {...}}}
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from core.exceptions import (
    AIServiceError,
    AppException,
    ConfigurationError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from core.logger import get_logger

logger = get_logger("core.error_handlers")


def create_error_response(
    message: str,
    status_code: int = 500,
    details: dict = None,
) -> JSONResponse:
    """Build the standard error envelope.

    Args:
        message: Error message.
        status_code: HTTP status code.
        details: Optional error details dictionary.

    Returns:
        JSONResponse with error details.
    """
    error_body = {
        "error": {
            "message": message,
            "status_code": status_code,
        }
    }

    if details:
        error_body["error"]["details"] = details

    return JSONResponse(
        status_code=status_code,
        content=error_body
    )


ERROR_TYPES = {
    NotFoundError: "not_found",
    ValidationError: "invalid_input",
    StorageError: "storage_error",
    AIServiceError: "ai_unavailable",
    ConfigurationError: "configuration_error",
}


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Translate an `AppException` into its declared status and details.

    The details gain a `type` naming the error family. Server-side failures
    (corrupt documents, AI outages) are logged as errors, caller mistakes as
    warnings.
    """
    error_type = ERROR_TYPES.get(type(exc), "app_error")
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "%s: %s [%s %s] %s",
        error_type,
        exc.message,
        request.method,
        request.url.path,
        exc.details,
    )

    return create_error_response(
        message=exc.message,
        status_code=exc.status_code,
        details={"type": error_type, **exc.details},
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Flatten pydantic request validation errors into field/message pairs."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"]
        })

    logger.warning(
        "Validation error on %s %s: %s",
        request.method,
        request.url.path,
        errors
    )

    return create_error_response(
        message="Validation error",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        details={"validation_errors": errors}
    )


async def sqlalchemy_exception_handler(
    request: Request,
    exc: SQLAlchemyError
) -> JSONResponse:
    """Report storage failures without leaking SQL to the client."""
    logger.error(
        "Storage error on %s %s: %s",
        request.method,
        request.url.path,
        str(exc),
        exc_info=True
    )

    return create_error_response(
        message="A storage error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        details={"type": "storage_error"}
    )


async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Last-resort handler for anything the routes did not anticipate."""
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        str(exc),
        exc_info=True
    )

    return create_error_response(
        message="An internal server error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        details={"type": "internal_error"}
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers registered")
