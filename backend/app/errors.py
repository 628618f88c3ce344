"""
Error Taxonomy & Exception Handlers
Domain errors carry an HTTP status and a client-safe message; the handlers
render every failure as the {success: false, message} envelope.
"""
import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class RegistrationError(Exception):
    """Base class for all registration/payment errors."""

    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.public_message)
        self.detail = detail or self.public_message

    @property
    def message(self) -> str:
        return self.public_message


class ValidationError(RegistrationError):
    """Bad or missing registration input. The detail is shown to the caller."""

    status_code = 400
    public_message = "Invalid registration details"

    @property
    def message(self) -> str:
        return self.detail


class GatewayError(RegistrationError):
    """The payment gateway rejected the request or could not be reached."""

    status_code = 500
    public_message = "Payment gateway error"


class PersistenceError(RegistrationError):
    """A store read or write failed."""

    status_code = 500
    public_message = "Payment initiation failed"


class MalformedEventError(RegistrationError):
    """Webhook body is not a JSON object."""

    status_code = 400
    public_message = "Malformed webhook payload"


class UnresolvableIdentifierError(RegistrationError):
    """Webhook carries neither data.id nor a usable data.metadata.resourceId."""

    status_code = 400
    public_message = "Unable to resolve payment identifier"


class QueryError(RegistrationError):
    """Listing registrations failed."""

    status_code = 500
    public_message = "Failed to fetch registrations."


def _envelope(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


def _flatten_detail(detail: Any) -> str:
    if isinstance(detail, str):
        return detail
    if detail is None:
        return "An error occurred"
    return str(detail)


def register_exception_handlers(app: FastAPI) -> None:
    """Register FastAPI exception handlers that return the standard envelope."""

    @app.exception_handler(RegistrationError)
    async def registration_error_handler(request: Request, exc: RegistrationError):
        if exc.status_code >= 500:
            logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.detail)
        else:
            logger.info("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.detail)
        return _envelope(exc.status_code, exc.message)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return _envelope(exc.status_code, _flatten_detail(exc.detail), headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        messages = []
        for error in exc.errors():
            location = [str(loc) for loc in error.get("loc", []) if loc != "body"]
            message = error.get("msg", "Invalid input")
            messages.append(f"{'.'.join(location)}: {message}" if location else message)

        return _envelope(400, "; ".join(messages) if messages else "Invalid request")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception while processing %s %s", request.method, request.url)
        return _envelope(500, "Internal server error")


__all__ = [
    "RegistrationError",
    "ValidationError",
    "GatewayError",
    "PersistenceError",
    "MalformedEventError",
    "UnresolvableIdentifierError",
    "QueryError",
    "register_exception_handlers",
]
