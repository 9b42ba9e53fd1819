import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Validation failed"

    def __init__(self, message: str = None, errors: list = None):
        super().__init__(message)
        self.errors = errors or []


class DuplicateEmail(AppError):
    status_code = status.HTTP_409_CONFLICT
    message = "Email already registered"


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Authentication required"


class InvalidToken(Unauthenticated):
    message = "Invalid token"


class TokenExpired(Unauthenticated):
    message = "Token has expired"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Resource not found"


class InternalError(AppError):
    pass


def error_body(status_code: int, message: str, **extra) -> dict:
    body = {"statusCode": status_code, "message": message}
    body.update(extra)
    return body


async def app_error_handler(request: Request, exc: AppError):
    headers = None
    message = exc.message
    if isinstance(exc, Unauthenticated):
        headers = {"WWW-Authenticate": "Bearer"}
    if isinstance(exc, (InvalidToken, TokenExpired)):
        # Expired and forged tokens share one client-facing message
        message = Unauthenticated.message

    extra = {}
    if isinstance(exc, ValidationError) and exc.errors:
        extra["errors"] = exc.errors

    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, message, **extra),
        headers=headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in err["loc"] if part != "body"),
            "message": err["msg"],
        }
        for err in exc.errors()
    ]
    return await app_error_handler(request, ValidationError(errors=errors))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return await app_error_handler(request, InternalError())


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return await app_error_handler(request, InternalError())


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
