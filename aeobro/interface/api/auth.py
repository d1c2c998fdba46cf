"""Session cookie handling shared by routes."""

from uuid import UUID

from fastapi import HTTPException, status

from aeobro.domain.service import JWTService
from aeobro.util.jwt import JWTError, TokenPayload


def require_user(auth_token: str | None, jwt_service: JWTService) -> TokenPayload:
    """Resolve the caller from the `auth_token` cookie.

    Args:
        auth_token: JWT token from cookie
        jwt_service: JWT service from DI

    Returns:
        Verified token payload

    Raises:
        HTTPException: 401 if the cookie is missing, invalid or expired
    """
    if not auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    try:
        payload = jwt_service.verify_token(auth_token)
        UUID(payload.user_id)
    except (JWTError, ValueError) as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
        ) from e

    return payload
