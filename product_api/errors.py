"""
Error kinds and their rendering.

Every failure a request can hit ends here: handlers and dependencies
raise an ``ApiError`` subclass and the handlers registered by
``register_error_handlers`` turn it into ``{"error": kind, "message": ...}``
with the matching status code.  Unexpected exceptions are rendered by
``ExceptionHandlingMiddleware`` in ``product_api.middleware``.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

SERVER_ERROR_KIND = "ServerError"
SERVER_ERROR_MESSAGE = "Something went wrong"

PRODUCT_FIELDS_MESSAGE = (
    "Invalid or missing fields. Make sure to provide: name (string), "
    "description (string), price (number), category (string), inStock (boolean)."
)


class ApiError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, kind: Optional[str] = None):
        self.message = message
        self.kind = kind or type(self).__name__
        super().__init__(message)


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(ApiError):
    """No credential was supplied."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "API key missing"):
        super().__init__(message, kind=message)


class AuthorizationError(ApiError):
    """A credential was supplied but does not match."""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Invalid API key"):
        super().__init__(message, kind=message)


def error_body(kind: str, message: str) -> Dict[str, Any]:
    return {"error": kind or SERVER_ERROR_KIND, "message": message or SERVER_ERROR_MESSAGE}


def render_error(exc: ApiError) -> JSONResponse:
    logger.warning("Error: %s - %s", exc.kind, exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.kind, exc.message))


def render_unhandled(exc: Exception) -> JSONResponse:
    logger.error("Error: %s - %s", type(exc).__name__, exc, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(SERVER_ERROR_KIND, SERVER_ERROR_MESSAGE),
    )


def _describe_request_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = err.get("loc", ())
        field = loc[-1] if loc else "request"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "Invalid request parameters. " + "; ".join(parts)


def register_error_handlers(app: FastAPI) -> None:
    """Attach the error-to-response mapping to ``app``."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return render_error(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return render_error(ValidationError(_describe_request_errors(exc)))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            kind, message = "NotFoundError", f"Route {request.method} {request.url.path} not found"
        elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            kind, message = "MethodNotAllowed", f"Method {request.method} not allowed on {request.url.path}"
        else:
            kind, message = "HTTPError", str(exc.detail)
        logger.warning("Error: %s - %s", kind, message)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(kind, message),
            headers=getattr(exc, "headers", None),
        )
