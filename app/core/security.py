# app/core/security.py
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import jwt, JWTError

from app.core.config import Settings
from app.core.errors import AuthError

# bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72


def _password_bytes(plain: str) -> bytes:
    return plain.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain: str, rounds: int = 10) -> str:
    """
    One-way salted bcrypt hash of a plain-text password.

    Args:
        plain: the password as typed by the user.
        rounds: bcrypt cost factor (log2 of the iteration count).

    Returns:
        The encoded hash, safe to store in users.password.
    """
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(plain), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """
    Check a plain-text password against a stored bcrypt hash.

    A malformed stored hash never verifies.
    """
    try:
        return bcrypt.checkpw(_password_bytes(plain), hashed.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(settings: Settings, user_id: int, email: str) -> str:
    """
    Issue a signed access token.

    Payload:
      - id, email: identity of the user
      - iat, exp: issued-at / expiry (ACCESS_TOKEN_EXPIRE_HOURS, default 24h)
    """
    now = datetime.now(timezone.utc)
    claims = {
        "id": user_id,
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int(
            (now + timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS)).timestamp()
        ),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def decode_access_token(settings: Settings, token: str) -> dict[str, Any]:
    """
    Decode and verify an access token.

    Verification:
      - signature (JWT_ALG using JWT_SECRET)
      - expiration time (exp)
      - presence of the id / email claims

    Returns:
        {"id": int, "email": str}

    Raises:
        AuthError: if the token is malformed, expired or wrongly signed.
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
    except JWTError:
        raise AuthError("Invalid or expired token")

    user_id = payload.get("id")
    email = payload.get("email")
    if not isinstance(user_id, int) or not email:
        raise AuthError("Token missing id/email")

    return {"id": user_id, "email": email}
