"""
Contract Pydantic Schemas
Request/response models for contract drafting and storage endpoints.
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, Field

from legalens.schemas.analysis import RiskLevel


def _coerce_intensity(value):
    if value is None:
        return value
    if isinstance(value, bool):
        raise ValueError("intensity must be a number between 0 and 100")
    try:
        number = int(str(value).strip())
    except ValueError:
        raise ValueError("intensity must be a number between 0 and 100")
    if not 0 <= number <= 100:
        raise ValueError("intensity must be a number between 0 and 100")
    return str(number)


# String-encoded 0-100 protectiveness level
Intensity = Annotated[str, BeforeValidator(_coerce_intensity)]


# Drafting schemas
class ContractDraftRequest(BaseModel):
    """Parameters used to draft a contract with an LLM."""
    contract_type: str = Field(..., min_length=1)
    first_party_name: str = Field(..., min_length=1)
    second_party_name: str = Field(..., min_length=1)
    first_party_address: str | None = None
    second_party_address: str | None = None
    jurisdiction: str | None = None
    description: str | None = None
    key_terms: str | None = None
    intensity: int = Field(50, ge=0, le=100)


class ContractDraftResponse(BaseModel):
    """A single provider's draft."""
    provider: str
    content: str


class ContractDrafts(BaseModel):
    """Drafts from the dual-provider fan-out, keyed by provider name."""
    drafts: dict[str, str] = {}
    errors: dict[str, str] = {}


# Storage schemas
class ContractCreate(BaseModel):
    """Request model for saving a finalized contract."""
    title: str | None = Field(None, max_length=255)
    contract_type: str = Field(..., min_length=1)
    first_party_name: str = Field(..., min_length=1)
    second_party_name: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    first_party_address: str | None = None
    second_party_address: str | None = None
    jurisdiction: str | None = None
    description: str | None = None
    key_terms: str | None = None
    intensity: Intensity = "50"
    risk_level: RiskLevel | None = None
    risk_score: int | None = Field(None, ge=0, le=100)


class ContractUpdate(BaseModel):
    """Partial update; only fields that are set are written."""
    title: str | None = Field(None, min_length=1, max_length=255)
    contract_type: str | None = Field(None, min_length=1)
    first_party_name: str | None = Field(None, min_length=1)
    second_party_name: str | None = Field(None, min_length=1)
    content: str | None = Field(None, min_length=1)
    first_party_address: str | None = None
    second_party_address: str | None = None
    jurisdiction: str | None = None
    description: str | None = None
    key_terms: str | None = None
    intensity: Intensity | None = None
    risk_level: RiskLevel | None = None
    risk_score: int | None = Field(None, ge=0, le=100)


class ContractResponse(BaseModel):
    """Response model for a stored contract."""
    id: str
    user_id: str
    title: str
    contract_type: str
    first_party_name: str
    first_party_address: str | None = None
    second_party_name: str
    second_party_address: str | None = None
    jurisdiction: str | None = None
    description: str | None = None
    key_terms: str | None = None
    intensity: str | None = None
    risk_level: str | None = None
    risk_score: int | None = None
    content: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class ContractCatalog(BaseModel):
    """Known contract types, jurisdictions and drafting providers."""
    contract_types: list[str]
    jurisdictions: list[str]
    providers: list[dict]
