"""Bearer token authentication.

Tokens are Azure AD style JWTs: the caller id is the ``oid`` claim (``sub``
for locally minted tokens) and ``name`` is the display name recorded on
projects the caller creates or joins.
"""

import logging

from jose import JWTError, jwt
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from grow.config import settings
from grow.logging_config import bind_caller

logger = logging.getLogger(__name__)

_PUBLIC_PREFIXES = ("/api/v1/health", "/docs", "/redoc", "/openapi.json")

ANONYMOUS = "anonymous"


def _decode_jwt(token: str) -> dict:
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
    except JWTError as exc:
        logger.debug("JWT decode failed: %s", exc)
        raise ValueError(f"Invalid token: {exc}") from exc


def user_from_claims(claims: dict) -> dict:
    return {
        "sub": claims.get("oid") or claims.get("sub") or "",
        "name": claims.get("name", ""),
    }


def _anonymous(auth_error: str | None = None) -> dict:
    user = {"sub": ANONYMOUS, "name": ""}
    if auth_error:
        user["_auth_error"] = auth_error
    return user


def authenticate(authorization: str) -> dict:
    """Resolve an Authorization header value to the caller dict.

    Failures yield an anonymous caller carrying ``_auth_error``; routes that
    need a caller reject it through ``get_current_user``.
    """
    if not authorization.startswith("Bearer "):
        return _anonymous()
    try:
        user = user_from_claims(_decode_jwt(authorization[7:]))
    except ValueError:
        return _anonymous("invalid_token")
    if not user["sub"]:
        return _anonymous("missing_subject")
    return user


class AuthMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path.startswith(_PUBLIC_PREFIXES):
            request.state.user = _anonymous()
            return await call_next(request)

        user = authenticate(request.headers.get("authorization", ""))
        request.state.user = user
        if user["sub"] != ANONYMOUS:
            bind_caller(user["sub"])
        return await call_next(request)
