"""Security primitives for local auth (password hashing + JWT).

Tokens are verified statelessly from their signature and claims. The only
server-side input is the user's ``auth_token_version``: logout increments it,
which invalidates every token issued before.
"""

from __future__ import annotations

import hashlib
import hmac
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from pwdlib import PasswordHash
from pwdlib.hashers.argon2 import Argon2Hasher

from academy.auth.exceptions import InvalidTokenError, TokenExpiredError
from academy.config.settings import get_settings


password_hash = PasswordHash((Argon2Hasher(),))
ALGORITHM = "HS256"
_JWT_KEY_PURPOSE = "jwt"


def _derive_secret_key(secret_key: str, purpose: str) -> str:
    """Derive deterministic sub-keys for auth contexts from a shared secret."""
    return hmac.new(secret_key.encode("utf-8"), purpose.encode("utf-8"), hashlib.sha256).hexdigest()


def get_jwt_signing_key() -> str:
    """Return JWT signing key derived from SECRET_KEY."""
    return _derive_secret_key(get_settings().SECRET_KEY, _JWT_KEY_PURPOSE)


def create_access_token(
    user_id: int,
    email: str,
    expires_delta: timedelta,
    *,
    token_version: int = 0,
) -> str:
    """Create a signed JWT access token."""
    now = datetime.now(UTC)
    to_encode = {
        "exp": now + expires_delta,
        "iat": now,
        "nbf": now,
        "sub": str(user_id),
        "id": user_id,
        "email": email,
        "ver": token_version,
    }
    return jwt.encode(to_encode, get_jwt_signing_key(), algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """Verify a token and return its claims."""
    try:
        claims = jwt.decode(
            token,
            get_jwt_signing_key(),
            algorithms=[ALGORITHM],
            options={"require": ["exp", "sub", "ver"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError from e
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError from e

    if not str(claims["sub"]).isdigit():
        raise InvalidTokenError
    return claims


def verify_password(plain: str, hashed: str) -> tuple[bool, str | None]:
    """Verify password and return (verified, updated_hash_if_any)."""
    return password_hash.verify_and_update(plain, hashed)


def get_password_hash(password: str) -> str:
    """Hash password for storage."""
    return password_hash.hash(password)
