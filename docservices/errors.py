"""
Service error taxonomy shared by the user-directory and authentication services.

Every error carries the HTTP status it maps to and a message that is safe to
show to callers. `install_error_handlers` wires them into a FastAPI app so
routers and services can simply raise.
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from docservices.base_microservice import logger

GENERIC_INTERNAL_MESSAGE = "Internal server error."


class ServiceError(Exception):
    """Base exception for the platform services."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = GENERIC_INTERNAL_MESSAGE

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Required input is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request."


class UnauthorizedError(ServiceError):
    """Credentials could not be verified."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials."


class NotFoundError(ServiceError):
    """No record exists for the given id or email."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found."


class ConflictError(ServiceError):
    """A uniqueness rule would be violated."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict."


class InternalError(ServiceError):
    """Unexpected failure; the message never carries internal detail."""


class DirectoryUnavailableError(Exception):
    """The user-directory service could not be reached or answered unexpectedly."""


def error_body(message: str) -> dict:
    return {"error": message}


async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Only the first problem is reported; the full list stays in the logs
    errors = exc.errors()
    logger.info(f"Rejected request to {request.url.path}: {errors}")
    detail = "Invalid request body."
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        detail = f"Invalid request body: {location} {errors[0].get('msg', '')}".strip()
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body(detail))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(GENERIC_INTERNAL_MESSAGE),
    )


def install_error_handlers(app: FastAPI):
    """Register the JSON error handlers on a service app."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
