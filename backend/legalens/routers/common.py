"""
Router Helpers
Service wiring and error-to-status translation shared by the routers.
"""

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import sessionmaker

from legalens.config import get_settings
from legalens.database import get_session_factory
from legalens.errors import (
    LegalensError,
    NoContentError,
    NotFoundError,
    ParseError,
    PersistenceError,
    ProviderError,
)
from legalens.routers.auth import require_claims, require_user_id
from legalens.services.ai_service import AIService
from legalens.services.analysis_queue import AnalysisQueue
from legalens.services.contract_service import ContractService
from legalens.services.document_service import DocumentService
from legalens.services.profile_service import ProfileService
from legalens.services.repository import ContractRepository, DocumentRepository, ProfileRepository


STATUS_BY_ERROR = {
    NotFoundError: 404,
    NoContentError: 422,
    ProviderError: 502,
    ParseError: 502,
    PersistenceError: 503,
}


def raise_http(error: LegalensError):
    """Re-raise an application error as the matching HTTP error."""
    status_code = STATUS_BY_ERROR.get(type(error), 500)
    raise HTTPException(status_code=status_code, detail=str(error)) from error


def get_ai_service(request: Request) -> AIService:
    return request.app.state.ai_service


def get_analysis_queue(request: Request) -> AnalysisQueue:
    return request.app.state.analysis_queue


def get_document_service(
    user_id: str = Depends(require_user_id),
    session_factory: sessionmaker = Depends(get_session_factory),
    ai_service: AIService = Depends(get_ai_service),
    queue: AnalysisQueue = Depends(get_analysis_queue),
) -> DocumentService:
    return DocumentService(
        DocumentRepository(session_factory, user_id),
        ai_service,
        queue,
        strict_findings=get_settings().strict_findings,
    )


def get_contract_service(
    user_id: str = Depends(require_user_id),
    session_factory: sessionmaker = Depends(get_session_factory),
    ai_service: AIService = Depends(get_ai_service),
) -> ContractService:
    return ContractService(ContractRepository(session_factory, user_id), ai_service)


def get_profile_service(
    claims: dict = Depends(require_claims),
    session_factory: sessionmaker = Depends(get_session_factory),
) -> ProfileService:
    return ProfileService(
        ProfileRepository(session_factory, str(claims['sub'])),
        email=claims.get('email'),
    )
