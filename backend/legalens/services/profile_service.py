"""
Profile Service
Read and edit the authenticated user's profile row.
"""

import logging
from typing import Any, Dict, Optional

from legalens.schemas.profile import ProfileUpdate
from legalens.services.repository import ProfileRepository


logger = logging.getLogger(__name__)


class ProfileService:
    """
    Profile of one user. The row is created on first access and seeded
    with the email address carried by the access token.
    """

    def __init__(self, repository: ProfileRepository, email: Optional[str] = None):
        self.repository = repository
        self.email = email

    def _defaults(self) -> Dict[str, Any]:
        return {'email': self.email} if self.email else {}

    def get_profile(self) -> Dict[str, Any]:
        return self.repository.get_or_create(self._defaults())

    def update_profile(self, changes: ProfileUpdate) -> Dict[str, Any]:
        # A null email never clears the stored address
        values = {
            key: value
            for key, value in changes.model_dump(exclude_unset=True).items()
            if not (key == 'email' and value is None)
        }
        profile = self.repository.update(values, defaults=self._defaults())
        logger.info(f"Updated profile of user {self.repository.user_id}: {', '.join(sorted(values)) or 'no changes'}")
        return profile
