"""
Document Pydantic Schemas
Request/response models for document analysis endpoints.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from legalens.schemas.analysis import Finding


DocumentStatus = Literal['analyzing', 'completed', 'error']


class CreateDocumentRequest(BaseModel):
    """Request model for pasted document content."""
    title: str | None = Field(None, max_length=255)
    content: str = Field(..., min_length=1)


class DocumentResponse(BaseModel):
    """Response model for a stored document."""
    id: str
    user_id: str
    title: str
    content: str | None = None
    status: DocumentStatus
    risk_level: str | None = None
    risk_score: int | None = None
    findings: list[Finding] = []
    recommendations: str | None = None
    error: str | None = None
    progress: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True

    @field_validator('findings', mode='before')
    @classmethod
    def coerce_findings(cls, value):
        # Older rows stored findings as bare strings
        from legalens.services.normalizer import normalize_findings
        return normalize_findings(value)
