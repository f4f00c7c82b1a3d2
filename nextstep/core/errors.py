"""Domain errors and the JSON exception handlers that render them.

Every error response body carries a ``message`` field; validation failures
also carry field-level ``errors``.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors converted to 4xx responses at the handler boundary."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(AppError):
    """Duplicate unique field, duplicate like or redundant unlike."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str, *, clear_cookie: bool = False):
        super().__init__(message)
        self.clear_cookie = clear_cookie


def _field_name(loc: tuple) -> str:
    # drop the "body"/"path"/"query" prefix FastAPI puts in front
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in ("body", "path", "query"):
        parts = parts[1:]
    return ".".join(parts)


def register_exception_handlers(app: FastAPI, cookie_name: str) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        response = JSONResponse(status_code=exc.status_code, content={"message": exc.message})
        if isinstance(exc, AuthenticationError) and exc.clear_cookie:
            response.delete_cookie(cookie_name, path="/")
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"field": _field_name(tuple(error["loc"])), "message": error["msg"]}
            for error in exc.errors()
        ]
        logger.info("Validation error on %s %s: %d field(s)", request.method, request.url.path, len(errors))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Validation failed", "errors": errors},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception("Unexpected error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )
