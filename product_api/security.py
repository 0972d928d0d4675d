"""
Shared-secret authentication.

Every request under ``/api/products`` must carry the configured secret
in the ``x-api-key`` header.  The check runs as middleware ahead of
routing, so it applies to every method and sub-path, matched or not.
The comparison is exact string equality.
"""

import enum
import hmac
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .errors import AuthenticationError, AuthorizationError, render_error

API_KEY_HEADER = "x-api-key"
PROTECTED_PREFIX = "/api/products"


class KeyCheck(enum.Enum):
    MISSING = "missing"
    INVALID = "invalid"
    VALID = "valid"


def check_api_key(supplied: Optional[str], secret: str) -> KeyCheck:
    if not supplied:
        return KeyCheck.MISSING
    # An unset secret matches nothing.
    if not secret or not hmac.compare_digest(supplied.encode("utf-8"), secret.encode("utf-8")):
        return KeyCheck.INVALID
    return KeyCheck.VALID


def is_protected(path: str) -> bool:
    return path == PROTECTED_PREFIX or path.startswith(PROTECTED_PREFIX + "/")


class ApiKeyMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, secret: str):
        super().__init__(app)
        self.secret = secret

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if is_protected(request.url.path):
            result = check_api_key(request.headers.get(API_KEY_HEADER), self.secret)
            if result is KeyCheck.MISSING:
                return render_error(AuthenticationError())
            if result is KeyCheck.INVALID:
                return render_error(AuthorizationError())
        return await call_next(request)
