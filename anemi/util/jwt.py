"""JWT access token utilities.

Access tokens come from the hosted auth provider. They are HS256 tokens
signed with the provider's JWT secret and carry the user id in ``sub`` and
the user's email in ``email``.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from anemi.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload."""

    sub: str
    email: str
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    user_id: str, email: str, settings: AuthSettings, expires_in: timedelta | None = None
) -> str:
    """Create an access token the way the auth provider does.

    Used by tests and local tooling; production tokens are minted by the
    auth provider.

    Args:
        user_id: User ID (``sub`` claim)
        email: User email
        settings: Authentication settings
        expires_in: Token lifetime (defaults to one hour)

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + (expires_in or timedelta(hours=1))

    payload = {
        "sub": user_id,
        "email": email,
        "aud": settings.jwt_audience,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid, expired or has no email claim
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    if not payload.get("email"):
        raise JWTError("Token has no email claim")
    return TokenPayload(**payload)
