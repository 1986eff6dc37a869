"""Translation of application errors to HTTP responses."""

import logfire
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError

from anemi.adapter.error import AdapterError
from anemi.domain.error import (
    DomainError,
    InviteConflictError,
    InviteExpiredError,
    NotAuthorizedError,
    NotFoundError,
    RateLimitExceededError,
    ValidationError,
)

_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InviteExpiredError, status.HTTP_410_GONE),
    (InviteConflictError, status.HTTP_409_CONFLICT),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (RateLimitExceededError, status.HTTP_429_TOO_MANY_REQUESTS),
]


def to_http_exception(error: DomainError) -> HTTPException:
    """Map a domain error to the HTTP exception a route should raise.

    Args:
        error: Domain error raised by a use case

    Returns:
        HTTPException with the matching status code
    """
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            break
    else:
        status_code = status.HTTP_400_BAD_REQUEST

    headers = None
    if isinstance(error, RateLimitExceededError):
        headers = {"Retry-After": str(error.retry_after)}

    if isinstance(error, NotAuthorizedError):
        # Caller identity stays in the logs
        detail = f"Not authorized to modify this {error.resource}"
    else:
        detail = str(error)

    return HTTPException(status_code=status_code, detail=detail, headers=headers)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies and parameters as 400."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first["loc"] if part != "body")
        detail = f"{location}: {first['msg']}" if location else first["msg"]
    else:
        detail = "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail}
    )


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Report infrastructure failures as 500 without leaking internals."""
    logfire.error(
        "Infrastructure error",
        method=request.method,
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the application-wide exception handlers."""
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(AdapterError, internal_error_handler)
    app.add_exception_handler(SQLAlchemyError, internal_error_handler)
    # Client input is validated at the route; anything else is a bug
    app.add_exception_handler(PydanticValidationError, internal_error_handler)
