"""Authentication helpers for routes."""

from fastapi import HTTPException, Request, status

from forum.domain.service import JWTService


def require_user_id(jwt_service: JWTService, request: Request, action: str) -> str:
    """Resolve the authenticated user ID from the auth cookie.

    The cookie name comes from ``AuthSettings.cookie_name``.

    Args:
        jwt_service: JWT service for token verification
        request: Incoming request
        action: What the user is trying to do, for the error message

    Returns:
        User ID

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    token = request.cookies.get(jwt_service.auth_settings.cookie_name)
    user_id = jwt_service.get_user_id_from_token(token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return user_id
