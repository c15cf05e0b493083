"""
Password hashing (bcrypt) and session token signing (JWT, HS256).

Tokens carry {"uuid", "email", "iat", "exp"}; the lifetime matches the
max-age of the authToken cookie set at login.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

import bcrypt
import jwt

from platepoint.config import settings
from platepoint.schemas.user import TokenPayload

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of the secret
_BCRYPT_MAX_BYTES = 72


def hash_password(plain: str) -> str:
    secret = plain.encode()[:_BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=settings.bcrypt_rounds)).decode()


def verify_password(plain: str, hashed: str) -> bool:
    secret = plain.encode()[:_BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(secret, hashed.encode())
    except ValueError:
        # Malformed hash in the database
        logger.warning("Stored password hash could not be parsed")
        return False


def sign_token(payload: dict[str, Any], expires_in: Optional[int] = None) -> str:
    """Sign payload with the configured secret, adding iat/exp claims."""
    now = int(time.time())
    claims = dict(payload)
    claims["iat"] = now
    claims["exp"] = now + (expires_in if expires_in is not None else settings.jwt_expiry_seconds)
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> Optional[TokenPayload]:
    """
    Return the decoded claims, or None when the token is malformed, expired,
    signed with another key, or missing the uuid/email claims.
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.PyJWTError as exc:
        logger.debug("JWT rejected: %s", exc)
        return None

    try:
        return TokenPayload.model_validate(claims)
    except ValueError:
        logger.debug("JWT missing uuid/email claims")
        return None
