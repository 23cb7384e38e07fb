"""
Domain errors and their translation to HTTP responses.

Services raise one of the ``ServiceError`` subclasses below; they never
build HTTP responses themselves.  ``register_exception_handlers``
installs handlers on the FastAPI app that render every failure as
``{"error": <message>, "kind": <kind>, "code": <code>}``.  Errors that
are not ``ServiceError`` instances are logged and reported as a
generic internal error so that database messages never reach clients.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class ServiceError(ValueError):
    """Base class for expected failures raised by the service layer."""

    kind = "internal"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code = "internal_error"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        return {"error": self.message, "kind": self.kind, "code": self.code}


class ValidationError(ServiceError):
    kind = "validation"
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "validation_error"


class ConflictError(ServiceError):
    """The request collides with existing state (duplicate, capacity)."""

    kind = "conflict"
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "conflict"


class NotFoundError(ServiceError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "not_found"


class ForbiddenError(ServiceError):
    kind = "forbidden"
    status_code = status.HTTP_403_FORBIDDEN
    default_code = "forbidden"


class AuthenticationError(ServiceError):
    kind = "unauthorized"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_code = "invalid_credentials"


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report the first invalid or missing field as a 400 validation error."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    error = ValidationError(message)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        error = NotFoundError("Endpoint not found", code="endpoint_not_found")
        return JSONResponse(status_code=error.status_code, content=error.to_dict())
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail), "kind": "http", "code": f"http_{exc.status_code}"},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    error = ServiceError("Internal server error")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error handlers above to ``app``."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
