"""
Error kinds surfaced by the service.

Every error carries a machine-readable ``code`` and the HTTP status it maps
to. Handlers registered in ``register_exception_handlers`` render them as
``{"error": message, "code": code}``.
"""
import logging
from typing import List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class ServiceError(Exception):
    code = "internal"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code}


class ValidationFailed(ServiceError):
    code = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input data. Check all fields meet requirements."

    def __init__(self, fields: List[str], message: str | None = None):
        self.fields = list(fields)
        if message is None and self.fields:
            message = f"{self.default_message} Invalid fields: {', '.join(self.fields)}"
        super().__init__(message)

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["fields"] = self.fields
        return body


class EmailTaken(ServiceError):
    code = "email_taken"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Email already registered"


class InvalidCredentials(ServiceError):
    code = "invalid_credentials"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class AuthMissing(ServiceError):
    code = "auth_missing"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access token required"


class AuthInvalid(ServiceError):
    code = "auth_invalid"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid token"


class Forbidden(ServiceError):
    code = "forbidden"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Insufficient permissions"


class NotFound(ServiceError):
    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class NotEligible(ServiceError):
    code = "not_eligible"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Normal user not found or is not eligible for verification."


class InternalError(ServiceError):
    pass


async def _service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        if loc and loc[-1] not in fields:
            fields.append(loc[-1])
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=ValidationFailed(fields).to_dict())


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=InternalError().to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, _service_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
