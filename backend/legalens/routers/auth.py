"""
Authentication Router
Bearer token dependencies and the current-identity endpoint. Sign-up and
login live in the hosted identity service.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from legalens.services.auth_service import AuthService


router = APIRouter()
security = HTTPBearer(auto_error=False)


async def require_claims(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> dict:
    """Require a valid JWT token and return its verified claims."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authorization header"
        )

    payload = AuthService.validate_token(credentials.credentials)
    if not payload or not payload.get('sub'):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token"
        )

    return payload


async def require_user_id(claims: dict = Depends(require_claims)) -> str:
    """Require a valid JWT token and return its user id (the sub claim)."""
    return str(claims['sub'])


@router.get("/me")
async def get_me(claims: dict = Depends(require_claims)):
    """Get the authenticated user's id and email."""
    return {"user_id": str(claims['sub']), "email": claims.get('email')}
