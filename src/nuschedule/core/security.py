"""
Password hashing and access tokens for student accounts.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from .config import Settings


class TokenError(Exception):
    """Token is missing, malformed, expired or signed with another key"""


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    return check_password_hash(password_hash, password)


def create_access_token(settings: Settings, user_id: int, email: str) -> str:
    if not settings.jwt_secret:
        raise TokenError("JWT_SECRET not set")

    now = datetime.now(timezone.utc)
    claims = {
        "user_id": user_id,
        "email": email,
        "iat": now,
        "exp": now + timedelta(hours=settings.jwt_expiry_hours),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(settings: Settings, token: str) -> Dict[str, Any]:
    """
    Verify a token and return its claims.

    Raises:
        TokenError: for any invalid or expired token
    """
    if not settings.jwt_secret:
        raise TokenError("JWT_SECRET not set")

    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenError("token has expired") from e
    except jwt.InvalidTokenError as e:
        raise TokenError("invalid token") from e

    if not isinstance(claims.get("user_id"), int):
        raise TokenError("invalid token")
    return claims
