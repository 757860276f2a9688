"""
Application errors and their HTTP rendering.

Services raise these without touching FastAPI; the handlers registered by
``register_exception_handlers`` turn them into JSON responses. Every error
body carries either a ``msg`` or, for batched failures, an ``errors`` list.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class DevConnectorError(Exception):
    """Base class for errors that map onto a client-visible response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Server Error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_body(self) -> dict[str, Any]:
        return {"msg": self.message}


class ValidationError(DevConnectorError):
    """One or more request fields failed validation; all failures are kept."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Validation failed"

    def __init__(self, errors: list[dict[str, Any]]):
        self.errors = errors
        super().__init__()

    def to_body(self) -> dict[str, Any]:
        return {"errors": self.errors}


class Conflict(DevConnectorError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User already exists"

    def to_body(self) -> dict[str, Any]:
        return {"errors": [{"msg": self.message}]}


class InvalidCredentials(DevConnectorError):
    # Same message for unknown email and wrong password
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid credentials"

    def to_body(self) -> dict[str, Any]:
        return {"errors": [{"msg": self.message}]}


class Unauthenticated(DevConnectorError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "No token, authorization denied"


class InvalidToken(DevConnectorError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Token is not valid"


class ExpiredToken(InvalidToken):
    message = "Token has expired"


class NotFound(DevConnectorError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not Found"


class Forbidden(DevConnectorError):
    # Non-owner mutations answer 401, as the public API always has
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not Authorized"


class AlreadyLiked(DevConnectorError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Post already liked"


class ServerError(DevConnectorError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server Error"


def _format_request_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Flatten FastAPI's validation errors into the ``errors`` list shape."""
    errors = []
    for error in exc.errors():
        loc = tuple(error.get("loc", ()))
        location = str(loc[0]) if loc else "body"
        fields = loc[1:]
        # An unparseable body reports a character position, not a field name
        param = ".".join(fields) if fields and all(isinstance(part, str) for part in fields) else ""
        errors.append({"msg": error.get("msg", "Invalid value"), "param": param, "location": location})
    return errors


async def devconnector_error_handler(request: Request, exc: DevConnectorError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": _format_request_errors(exc)},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Stack trace stays in the server log, the client only sees the generic message
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ServerError().to_body(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DevConnectorError, devconnector_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
