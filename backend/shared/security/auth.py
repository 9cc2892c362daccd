"""
Staff token verification.

Every API call carries `Authorization: Bearer <jwt>` signed with HS256. The
`tenant_id` claim scopes all data access. Tokens are issued by the identity
service; sign_jwt exists for tooling and tests.
"""

from __future__ import annotations

import time
import uuid
from typing import Any

import jwt
from fastapi import Header

from shared.config.logging import auth_logger as logger
from shared.config.settings import JWT_AUDIENCE, JWT_ISSUER, JWT_SECRET, settings
from shared.utils.exceptions import UnauthorizedError

ALGORITHM = "HS256"
TOKEN_TYPE = "access"


def sign_jwt(payload: dict[str, Any], ttl_seconds: int | None = None) -> str:
    """Sign `payload` as an access token valid for `ttl_seconds` (default from settings)."""
    issued_at = int(time.time())
    lifetime = settings.jwt_access_token_expire_minutes * 60 if ttl_seconds is None else ttl_seconds
    claims = {
        **payload,
        "iss": JWT_ISSUER,
        "aud": JWT_AUDIENCE,
        "iat": issued_at,
        "exp": issued_at + lifetime,
        "type": TOKEN_TYPE,
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(claims, JWT_SECRET, algorithm=ALGORITHM)


def _has_tenant(claims: dict[str, Any]) -> bool:
    tenant_id = claims.get("tenant_id")
    return isinstance(tenant_id, int) and not isinstance(tenant_id, bool)


def verify_jwt(token: str) -> dict[str, Any]:
    """
    Decode an access token and check its claims.

    Returns the claims; `sub` and an integer `tenant_id` are guaranteed.

    Raises:
        UnauthorizedError: Bad signature, expired, wrong audience or issuer,
            or missing claims.
    """
    try:
        claims = jwt.decode(
            token,
            JWT_SECRET,
            algorithms=[ALGORITHM],
            audience=JWT_AUDIENCE,
            issuer=JWT_ISSUER,
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired")
    except jwt.InvalidTokenError as exc:
        # The reason stays in the log only
        logger.warning("Token rejected", reason=str(exc))
        raise UnauthorizedError("Invalid token")

    if "sub" not in claims:
        raise UnauthorizedError("Invalid token: missing subject claim")
    if not _has_tenant(claims):
        raise UnauthorizedError("Invalid token: missing or malformed tenant_id claim")
    if claims.get("type", TOKEN_TYPE) != TOKEN_TYPE:
        raise UnauthorizedError("Invalid token: not an access token")
    return claims


def get_bearer_token(authorization: str | None) -> str:
    """Token part of an `Authorization: Bearer ...` header."""
    scheme, _, token = (authorization or "").partition(" ")
    if not authorization:
        raise UnauthorizedError("Missing Authorization header")
    if scheme != "Bearer" or not token.strip():
        raise UnauthorizedError("Invalid Authorization header format. Expected: Bearer <token>")
    return token.strip()


def current_user_context(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict[str, Any]:
    """
    FastAPI dependency returning the verified claims.

        @router.get("/bookings")
        def list_bookings(ctx = Depends(current_user_context)):
            tenant_id = ctx["tenant_id"]
    """
    return verify_jwt(get_bearer_token(authorization))
