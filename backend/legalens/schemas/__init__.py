"""
Pydantic Schemas
Request/response models for API validation.
"""

from legalens.schemas.analysis import (
    Finding,
    AnalysisResult,
    RiskLevel
)
from legalens.schemas.document import (
    CreateDocumentRequest,
    DocumentResponse
)
from legalens.schemas.profile import (
    ProfileUpdate,
    ProfileResponse
)
from legalens.schemas.contract import (
    ContractDraftRequest,
    ContractDraftResponse,
    ContractDrafts,
    ContractCreate,
    ContractUpdate,
    ContractResponse,
    ContractCatalog
)

__all__ = [
    # Analysis
    'Finding',
    'AnalysisResult',
    'RiskLevel',
    # Document
    'CreateDocumentRequest',
    'DocumentResponse',
    # Contract
    'ContractDraftRequest',
    'ContractDraftResponse',
    'ContractDrafts',
    'ContractCreate',
    'ContractUpdate',
    'ContractResponse',
    'ContractCatalog',
    # Profile
    'ProfileUpdate',
    'ProfileResponse'
]
