"""JWT token domain service."""

import logfire

from aeobro.config import AuthSettings
from aeobro.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for session token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, email: str | None = None) -> str:
        """Create a session token for a user."""
        with logfire.span("jwt_service.create_token", user_id=user_id):
            return create_token(user_id, email, self.auth_settings)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify a session token and extract its payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                return verify_token(token, self.auth_settings)
            except Exception as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise
