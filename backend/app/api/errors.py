"""Translate domain errors into HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import AppError, ErrorKind, StorageBackendError

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.EXPIRED: status.HTTP_410_GONE,
    ErrorKind.DOWNLOAD_LIMIT_REACHED: status.HTTP_410_GONE,
    ErrorKind.BAD_PASSWORD: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.AUTH_INVALID: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.QUOTA_EXCEEDED: status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    ErrorKind.FILE_TOO_LARGE: status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    ErrorKind.DUPLICATE_CONTENT: status.HTTP_409_CONFLICT,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorKind.STORAGE_BACKEND_FAILURE: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    message = exc.message
    if isinstance(exc, StorageBackendError):
        logger.error(
            "Storage backend failure on %s %s", request.method, request.url.path, exc_info=exc
        )
        message = StorageBackendError.default_message

    headers = None
    if exc.kind == ErrorKind.AUTH_INVALID:
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=STATUS_BY_KIND.get(exc.kind, status.HTTP_400_BAD_REQUEST),
        content={"detail": message, "kind": exc.kind.value},
        headers=headers,
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
