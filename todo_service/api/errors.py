"""Mapping of service errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from todo_service.services.errors import (
    DuplicateEmail,
    InvalidCredentials,
    InvalidId,
    InvalidToken,
    NotFound,
    ServiceError,
    StoreError,
    Unauthorized,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_CODES: dict[type[ServiceError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    DuplicateEmail: status.HTTP_400_BAD_REQUEST,
    InvalidId: status.HTTP_400_BAD_REQUEST,
    InvalidCredentials: status.HTTP_401_UNAUTHORIZED,
    InvalidToken: status.HTTP_401_UNAUTHORIZED,
    Unauthorized: status.HTTP_401_UNAUTHORIZED,
    NotFound: status.HTTP_404_NOT_FOUND,
    StoreError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: ServiceError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_response(code: int, detail: str, errors: list | None = None) -> JSONResponse:
    body = {"status": code, "detail": detail}
    if errors:
        body["errors"] = errors
    return JSONResponse(status_code=code, content=body)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    code = status_for(exc)
    if code >= 500:
        # Never leak store internals to the client
        logger.error(f"{request.method} {request.url.path} failed: {exc.kind}")
        return _error_response(code, "Internal server error")
    return _error_response(code, exc.message, getattr(exc, "errors", None))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in exc.errors()
    ]
    return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid input", errors)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
