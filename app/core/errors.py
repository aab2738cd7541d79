from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException


class ApiError(Exception):
    """An error that maps directly onto an ``{"error": ...}`` JSON response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = 'Internal server error'

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = 'Unauthorized'


class BadRequest(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Invalid request body'


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Not found'


class StoreFailure(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class StoreError(Exception):
    """Raised by services when the underlying store operation fails."""

    def __init__(self, operation: str, cause: Exception | None = None) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f'{operation} failed: {cause}' if cause else f'{operation} failed')


class AuthError(Exception):
    """Raised when a session credential is missing or cannot be verified."""


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({'error': message}, status_code=status_code)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return _error_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Unauthenticated callers learn nothing about body validation.
    if request.app.state.session_verifier.resolve(request) is None:
        return _error_response(Unauthorized.status_code, Unauthorized.default_message)
    logger.info('request.invalid_body', path=request.url.path, errors=len(exc.errors()))
    return _error_response(BadRequest.status_code, BadRequest.default_message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse({'error': exc.detail}, status_code=exc.status_code, headers=exc.headers)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error('request.unhandled', path=request.url.path, method=request.method)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, 'Internal server error')


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
