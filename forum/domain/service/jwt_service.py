"""Auth token verification.

Tokens are HS256 JWTs carrying the user's ID and handle. They are normally
issued by the external auth service; ``create_token`` exists so local tools
and tests can mint compatible ones.
"""

from datetime import datetime, timedelta, timezone

import jwt
import logfire
from pydantic import BaseModel

from forum.config import AuthSettings

from .base import Service


class TokenPayload(BaseModel):
    user_id: str
    handle: str
    exp: datetime


class JWTError(Exception):
    """Token is malformed, has a bad signature, or has expired."""


class JWTService(Service):
    """Encode and decode auth tokens with the configured secret."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, handle: str) -> str:
        expires = datetime.now(timezone.utc) + timedelta(
            days=self.auth_settings.jwt_expiry_days
        )
        claims = {"user_id": user_id, "handle": handle, "exp": expires}
        return jwt.encode(
            claims,
            self.auth_settings.jwt_secret,
            algorithm=self.auth_settings.jwt_algorithm,
        )

    def verify_token(self, token: str) -> TokenPayload:
        """Decode a token.

        Raises:
            JWTError: If the token cannot be trusted
        """
        try:
            claims = jwt.decode(
                token,
                self.auth_settings.jwt_secret,
                algorithms=[self.auth_settings.jwt_algorithm],
            )
        except jwt.ExpiredSignatureError as e:
            raise JWTError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise JWTError("Invalid token") from e
        return TokenPayload(**claims)

    def get_user_id_from_token(self, token: str | None) -> str | None:
        """Resolve the caller, or None for anonymous and untrusted tokens."""
        if not token:
            return None
        try:
            return self.verify_token(token).user_id
        except JWTError as e:
            logfire.debug("Ignoring auth token", reason=str(e))
            return None
