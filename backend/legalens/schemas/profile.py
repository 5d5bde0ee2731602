"""
Profile Pydantic Schemas
Request/response models for the current user's profile.
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class ProfileUpdate(BaseModel):
    """Partial profile update; only fields that are set are written."""
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    email: EmailStr | None = None


class ProfileResponse(BaseModel):
    """Response model for a user's profile."""
    id: str
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
