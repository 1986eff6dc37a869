"""JWT token domain service."""

import logfire

from anemi.config import AuthSettings
from anemi.util.jwt import TokenPayload, verify_token

from .base import Service


class JWTService(Service):
    """Verifies access tokens issued by the auth provider."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.info("JWT token verified", user_id=payload.sub)
                return payload
            except Exception as e:
                logfire.error("JWT token verification failed", error=str(e))
                raise

    def get_caller_identity(self, token: str | None) -> str | None:
        """Extract the caller identity (normalized email) without raising.

        Invites record their owner by email, so the email claim is the
        identity compared against ``created_by``.

        Args:
            token: JWT token string (optional)

        Returns:
            Lower-cased email if the token is valid, None if missing or invalid
        """
        if not token:
            return None

        try:
            payload = self.verify_token(token)
            return payload.email.strip().lower()
        except Exception as e:
            # Invalid or expired token, treat as unauthenticated
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None
