"""
Error Handler Utility for the HTTP API

Provides centralized error handling with:
- Automatic exception to HTTP status mapping
- The {success: false, error: message} envelope for every failure
- Logging for debugging

Usage:
    from utils.error_handler import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from exceptions import (
    FashionHubException,
    ValidationException,
    NotFoundException,
    AuthenticationException,
    AuthorizationException,
    OrderOwnershipException,
)

logger = logging.getLogger(__name__)

# Most specific class first; the first isinstance match wins
STATUS_MAPPING: list[tuple[type[FashionHubException], int]] = [
    # Ownership failures keep the 401 the storefront client expects
    (OrderOwnershipException, 401),
    (AuthenticationException, 401),
    (AuthorizationException, 403),
    (NotFoundException, 404),
    (ValidationException, 400),
]


def status_code_for(exception: FashionHubException) -> int:
    """
    Map a domain exception to an HTTP status code.

    Example:
        >>> status_code_for(ProductNotFoundException(7))
        404
    """
    for exception_cls, status_code in STATUS_MAPPING:
        if isinstance(exception, exception_cls):
            return status_code
    logger.error(f"Unmapped exception type: {type(exception).__name__}")
    return 500


def error_envelope(message: str) -> dict:
    return {"success": False, "error": message}


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_envelope(message), headers=headers)


async def handle_service_error(request: Request, exception: FashionHubException) -> JSONResponse:
    status_code = status_code_for(exception)
    logger.warning(f"Service error handled: {type(exception).__name__} - {exception.message} "
                   f"({request.method} {request.url.path})")
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exception, AuthenticationException) else None
    return error_response(status_code, exception.message, headers)


async def handle_validation_error(request: Request, exception: RequestValidationError) -> JSONResponse:
    errors = exception.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"
    logger.info(f"Request validation failed for {request.method} {request.url.path}: {message}")
    return error_response(400, message)


async def handle_http_error(request: Request, exception: StarletteHTTPException) -> JSONResponse:
    if exception.status_code == 404:
        return error_response(404, "Route not found")
    return error_response(exception.status_code, str(exception.detail), getattr(exception, "headers", None))


async def handle_unexpected_error(request: Request, exception: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions (non-FashionHubException).

    The client only sees a generic message; the traceback goes to the log.
    """
    logger.error(f"Unexpected error on {request.method} {request.url.path}: "
                 f"{type(exception).__name__} - {str(exception)}", exc_info=exception)
    return error_response(500, "Server Error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FashionHubException, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
