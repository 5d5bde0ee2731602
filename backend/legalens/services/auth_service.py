"""
Authentication Service
Validation of access tokens issued by the hosted identity service.
"""

from typing import Optional

import jwt

from legalens.config import get_settings


class AuthService:
    """Handle JWT token verification."""

    @staticmethod
    def validate_token(token: str) -> Optional[dict]:
        """Validate JWT token and return payload."""
        settings = get_settings()
        try:
            payload = jwt.decode(
                token,
                settings.jwt_secret,
                algorithms=[settings.jwt_algorithm],
                audience=settings.jwt_audience,
            )
            return payload
        except jwt.ExpiredSignatureError:
            return None
        except jwt.InvalidTokenError:
            return None
