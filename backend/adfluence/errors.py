"""Domain error taxonomy and the HTTP handlers that render it."""

from typing import Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError


class MarketplaceError(Exception):
    """Base class for failures reported to the caller with a taxonomy code."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "MarketplaceError"
    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class DuplicateIdentity(MarketplaceError):
    code = "DuplicateIdentity"
    default_message = "Email already in use"


class InvalidCredentials(MarketplaceError):
    code = "InvalidCredentials"
    default_message = "Invalid credentials"


class Unauthenticated(MarketplaceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "Unauthenticated"
    default_message = "Please authenticate."


class Forbidden(MarketplaceError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "Forbidden"
    default_message = "Not enough permissions"


class NotFound(MarketplaceError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NotFound"
    default_message = "Resource not found"


class AlreadyApplied(MarketplaceError):
    code = "AlreadyApplied"
    default_message = "You have already applied to this campaign"


class ValidationError(MarketplaceError):
    code = "ValidationError"
    default_message = "Invalid request"


class StoreFailure(MarketplaceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "StoreFailure"
    default_message = "Internal server error"


def _error_response(error: MarketplaceError) -> JSONResponse:
    headers = None
    if isinstance(error, Unauthenticated):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=error.status_code,
        content={"error": error.code, "detail": error.message},
        headers=headers
    )


async def marketplace_error_handler(request: Request, exc: MarketplaceError) -> JSONResponse:
    """Render a domain error as {error, detail}."""
    if isinstance(exc, StoreFailure):
        from adfluence.services.error_tracking import error_tracker
        error_tracker.capture_exception(exc, context={"path": request.url.path})
    return _error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies, forms and query strings are reported as ValidationError."""
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path"))
        problems.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return _error_response(ValidationError("; ".join(problems) or None))


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Persistence errors never leak their internals."""
    from adfluence.services.error_tracking import error_tracker
    error_tracker.capture_exception(exc, context={"path": request.url.path})
    return _error_response(StoreFailure())


def register_error_handlers(app) -> None:
    """Install the taxonomy handlers on a FastAPI application."""
    app.add_exception_handler(MarketplaceError, marketplace_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
