"""
Services
Business logic and external integrations.
"""

from legalens.services.auth_service import AuthService
from legalens.services.ai_service import AIService
from legalens.services.analysis_queue import AnalysisQueue
from legalens.services.contract_service import ContractService
from legalens.services.document_service import DocumentService
from legalens.services.profile_service import ProfileService

__all__ = ['AuthService', 'AIService', 'AnalysisQueue', 'ContractService', 'DocumentService', 'ProfileService']
