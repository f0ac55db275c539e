from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from order_relay.core.exceptions import (
    APIException,
    InvalidInputError,
    NotFoundError,
    UpstreamUnavailableError,
)
from order_relay.core.logging import get_logger

logger = get_logger(__name__)


async def handle_api_exception(request: Request, exc: APIException) -> JSONResponse:
    """
    Handle APIException instances.

    Args:
        request: FastAPI request object
        exc: APIException instance

    Returns:
        JSONResponse: Formatted error response
    """
    logger.error(
        f"API Exception: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "error_code": exc.code,
            "context": exc.context
        }
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_invalid_input(request: Request, exc: InvalidInputError) -> JSONResponse:
    logger.warning(
        f"Invalid input: {exc.detail}",
        extra={"field": exc.context.get("field"), "request_path": request.url.path}
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info(
        f"Resource not found: {exc.detail}",
        extra={
            "resource_type": exc.context.get("resource_type"),
            "resource_id": exc.context.get("resource_id")
        }
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_upstream_unavailable(request: Request, exc: UpstreamUnavailableError) -> JSONResponse:
    """
    Upstream failures are answered with a generic message; the upstream
    body was already logged where the call failed.
    """
    logger.error(
        f"Upstream error: {exc.detail}",
        extra={"upstream_status": exc.upstream_status, "request_path": request.url.path}
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": exc.code,
                "message": exc.detail,
                "status_code": exc.status_code,
                "context": {}
            }
        }
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": error["loc"], "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": {
                "code": "validation_error",
                "message": "Request validation error",
                "status_code": status.HTTP_422_UNPROCESSABLE_ENTITY,
                "context": {"errors": errors}
            }
        }
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "internal_server_error",
                "message": "An unexpected error occurred",
                "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
                "context": {}
            }
        }
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error envelope handlers to ``app``."""
    app.add_exception_handler(UpstreamUnavailableError, handle_upstream_unavailable)
    app.add_exception_handler(InvalidInputError, handle_invalid_input)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(APIException, handle_api_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected)
