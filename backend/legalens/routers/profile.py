"""
Profile Router
Read and edit the current user's profile.
"""

from fastapi import APIRouter, Depends

from legalens.errors import LegalensError
from legalens.routers.common import get_profile_service, raise_http
from legalens.schemas.profile import ProfileResponse, ProfileUpdate
from legalens.services.profile_service import ProfileService


router = APIRouter()


@router.get("", response_model=ProfileResponse)
async def get_profile(service: ProfileService = Depends(get_profile_service)):
    """Get the current user's profile, creating it on first access."""
    try:
        return service.get_profile()
    except LegalensError as e:
        raise_http(e)


@router.patch("", response_model=ProfileResponse)
async def update_profile(
    request: ProfileUpdate,
    service: ProfileService = Depends(get_profile_service)
):
    try:
        return service.update_profile(request)
    except LegalensError as e:
        raise_http(e)
