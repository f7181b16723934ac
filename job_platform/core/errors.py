"""
Error taxonomy and the FastAPI handlers that turn it into responses.

Every failure leaves the API as exactly one of these kinds:

    ValidationError     400  {"errors": [{"field", "message"}, ...]}
    NotFoundError       404  {"error": ...}
    UnauthorizedError   401  missing credentials
    InvalidTokenError   403  bad signature, malformed or expired token
    ForbiddenError      403  authenticated but not the owner
    ConflictError       400  duplicate registration email
    InternalFaultError  500  store/network failure, message is opaque
"""

from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from job_platform.core.logging import get_logger

logger = get_logger(__name__)


class AppError(Exception):
    """Base class for errors that map onto a single HTTP status."""

    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_content(self) -> dict:
        return {"error": self.message}


class ValidationError(AppError):
    status_code = 400
    default_message = "Validation failed"

    def __init__(self, errors: List[dict], message: Optional[str] = None):
        super().__init__(message)
        self.errors = errors

    @property
    def fields(self) -> List[str]:
        return [e["field"] for e in self.errors]

    def to_content(self) -> dict:
        return {"errors": self.errors}


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class UnauthorizedError(AppError):
    status_code = 401
    default_message = "Unauthorized: No token provided."


class InvalidTokenError(UnauthorizedError):
    # Bad tokens are refused with 403, not 401
    status_code = 403
    default_message = "Forbidden: Invalid or expired token."


class ForbiddenError(AppError):
    status_code = 403
    default_message = "Forbidden"


class ConflictError(AppError):
    status_code = 400
    default_message = "Resource already exists"


class InternalFaultError(AppError):
    status_code = 500


def field_error(field: str, message: str) -> dict:
    return {"field": field, "message": message}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reshape FastAPI's 422 body into the 400 field-level format."""
    errors = []
    for err in exc.errors():
        # Drop the leading "body"/"query"/"path" segment
        loc = [str(part) for part in err.get("loc", ())[1:]]
        errors.append(field_error(".".join(loc) or "body", err.get("msg", "Invalid value")))
    return JSONResponse(status_code=400, content={"errors": errors})


async def store_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": InternalFaultError.default_message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": InternalFaultError.default_message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(PyMongoError, store_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
