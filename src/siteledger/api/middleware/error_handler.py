"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action
- field: the request field a validation error belongs to
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from siteledger.application.dto.responses import ErrorResponse
from siteledger.config import get_logger
from siteledger.core.exceptions import (
    AuthorizationError,
    ConfigurationError,
    DuplicateProductError,
    DuplicateProjectError,
    InsufficientMainStockError,
    InsufficientProjectStockError,
    InvalidStatusTransitionError,
    ProductNotFoundError,
    ProjectNotFoundError,
    SiteLedgerError,
    StorageError,
    ValidationError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes; first match wins, so subclasses go first
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    InsufficientMainStockError: status.HTTP_409_CONFLICT,
    InsufficientProjectStockError: status.HTTP_409_CONFLICT,
    InvalidStatusTransitionError: status.HTTP_409_CONFLICT,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
    ProductNotFoundError: status.HTTP_404_NOT_FOUND,
    ProjectNotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateProductError: status.HTTP_409_CONFLICT,
    DuplicateProjectError: status.HTTP_409_CONFLICT,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ValueError: status.HTTP_400_BAD_REQUEST,
}

# Hint messages per error code
HINT_MAP: dict[str, str] = {
    "INVALID_QUANTITY": "Send a quantity greater than zero.",
    "INSUFFICIENT_MAIN_STOCK": "Reduce the quantity or restock the main warehouse first.",
    "INSUFFICIENT_PROJECT_STOCK": "Check GET /api/projects/{id}/inventory for what the project holds.",
    "PRODUCT_NOT_FOUND": "Check the product ID and try GET /api/warehouse/products to list products.",
    "PROJECT_NOT_FOUND": "Check the project ID and try GET /api/projects to list projects.",
    "DUPLICATE_PRODUCT": "A product with this ID already exists.",
    "DUPLICATE_PROJECT": "A project with this ID already exists.",
    "INVALID_STATUS_TRANSITION": "Check the project's current status before changing it.",
    "FORBIDDEN": "Ask an administrator for a role that allows this operation.",
    "PERSISTENCE_FAILURE": "Nothing was recorded. Retry the transfer.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "DATABASE_ERROR": "A database operation failed. Check server logs.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    403: "The acting user is not allowed to do this.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The request conflicts with the current state.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert an exception to the standardized JSON response."""
    status_code = status_for(exc)

    if isinstance(exc, SiteLedgerError):
        error_code = exc.code
        message = exc.message
        details = exc.details or None
    else:
        error_code = exc.__class__.__name__
        message = str(exc)
        details = None

    request_id = getattr(request.state, "request_id", None)
    log = logger.error if status_code >= 500 else logger.info
    log(
        "request_error",
        request_id=request_id,
        path=request.url.path,
        status=status_code,
        error_type=error_code,
        error=message,
        traceback=(
            "".join(traceback.format_exception(exc)) if status_code >= 500 else None
        ),
    )

    error_response = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=_get_hint(error_code, status_code),
        field=getattr(exc, "field", None),
        details=details,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Last line of defence for exceptions no registered handler picked up.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)
        except Exception as e:
            return build_error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(SiteLedgerError)
    async def domain_exception_handler(
        request: Request,
        exc: SiteLedgerError,
    ) -> JSONResponse:
        """Handle domain errors raised by use cases."""
        return build_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        first_field = None
        if exc.errors():
            loc = [str(part) for part in exc.errors()[0]["loc"] if part != "body"]
            first_field = ".".join(loc) or None

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                hint="Check the request body fields and types.",
                detail="; ".join(errors),
                field=first_field,
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = "NOT_FOUND" if exc.status_code == 404 else "HTTP_ERROR"
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=str(exc.detail) if exc.detail else "An error occurred",
                hint=_get_hint(error_code, exc.status_code),
                path=request.url.path,
            ).model_dump(mode="json"),
        )
