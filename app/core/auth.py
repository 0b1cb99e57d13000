# app/core/auth.py
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.config import Settings, get_app_settings
from app.core.errors import AuthError, InvalidTokenError
from app.core.security import decode_access_token
from app.schemas.user import CurrentUser

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so we can answer with our own 401 envelope.
# - only the "Bearer" scheme is read; "Authorization: Token <jwt>" counts as
#   no token at all (401), not as a bad one (403).
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> CurrentUser | None:
    """
    Resolve the caller identity from the bearer token.

    Flow:
      1. If no Authorization header => guest => return None.
      2. Decode JWT => extract 'id' and 'email'.

    Returns:
        CurrentUser if a token was sent, else None for guests.

    Raises:
        InvalidTokenError(403): if the token is malformed, expired or forged.
    """
    if credentials is None:
        return None

    try:
        claims = decode_access_token(settings, credentials.credentials)
    except AuthError:
        raise InvalidTokenError()

    return CurrentUser(id=claims["id"], email=claims["email"])


def require_user(user: CurrentUser | None = Depends(get_current_user)) -> CurrentUser:
    """
    Enforce authentication.

    Use this for:
      - cart endpoints
      - checkout / order history endpoints

    Raises:
        AuthError(401): if no bearer token was sent.
    """
    if user is None:
        raise AuthError("Access token required")
    return user
