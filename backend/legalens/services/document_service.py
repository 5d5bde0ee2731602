"""
Document Service
Drives a document through analyzing -> completed | error and exposes the
owner-scoped document operations used by the routers.
"""

import logging
from typing import Any, Dict, List, Optional

from legalens.errors import (
    NoContentError,
    NotFoundError,
    ParseError,
    PersistenceError,
    ProviderError,
)
from legalens.services.ai_service import AIService
from legalens.services.analysis_queue import AnalysisQueue
from legalens.services.normalizer import extract_and_normalize
from legalens.services.repository import DocumentRepository


logger = logging.getLogger(__name__)


# Progress checkpoints while a document is analyzing
PROGRESS_CREATED = 0
PROGRESS_STARTED = 10
PROGRESS_RESPONDED = 70

DEFAULT_TITLE = "Pasted Document"

# Result columns only hold values while a document is completed
CLEARED_RESULT = {
    'risk_level': None,
    'risk_score': None,
    'findings': [],
    'recommendations': None,
}


class DocumentService:
    """Lifecycle orchestrator for document analysis."""

    def __init__(
        self,
        repository: DocumentRepository,
        ai_service: AIService,
        queue: AnalysisQueue,
        strict_findings: bool = False,
    ):
        self.repository = repository
        self.ai_service = ai_service
        self.queue = queue
        self.strict_findings = strict_findings

    async def create_document(self, content: str, title: Optional[str] = None) -> Dict[str, Any]:
        """
        Store a new document and start its analysis in the background.

        Returns the stored row immediately, still in the analyzing state.
        Callers re-fetch the document to observe the terminal state.
        """
        if not content or not content.strip():
            raise NoContentError("Document has no content to analyze")

        document = self.repository.create({
            'title': (title or "").strip() or DEFAULT_TITLE,
            'content': content,
            'status': 'analyzing',
            'progress': PROGRESS_CREATED,
            'findings': [],
        })
        logger.info(f"Created document {document['id']} for user {self.repository.user_id}")

        document_id = document['id']
        self.queue.submit(document_id, lambda: self.analyze(document_id, content))
        return document

    async def analyze(self, document_id: str, content: str) -> Dict[str, Any]:
        """
        Run one analysis pass and persist the terminal state.

        Provider and parse failures are recorded on the document as its
        error state. Any other failure, including a storage failure on one
        of the progress or result writes, is re-raised after a best-effort
        attempt to record it as an error, so no pass ends in analyzing.
        """
        try:
            return await self._run_analysis(document_id, content)
        except PersistenceError as e:
            logger.exception(f"Could not store analysis for document {document_id}")
            self._try_record_failure(document_id, f"Could not store analysis results: {e}")
            raise

    async def _run_analysis(self, document_id: str, content: str) -> Dict[str, Any]:
        self.repository.update(document_id, {
            'status': 'analyzing',
            'progress': PROGRESS_STARTED,
            'error': None,
            **CLEARED_RESULT,
        })

        try:
            raw_text = await self.ai_service.analyze_document(content)
        except ProviderError as e:
            return self._record_failure(document_id, str(e))
        except Exception as e:
            self._try_record_failure(document_id, f"Analysis failed: {type(e).__name__}: {e}")
            raise

        self.repository.update(document_id, {'progress': PROGRESS_RESPONDED})

        try:
            result = extract_and_normalize(raw_text, strict=self.strict_findings)
        except ParseError as e:
            return self._record_failure(document_id, f"Failed to parse analysis results: {e}")

        document = self.repository.update(document_id, {
            'status': 'completed',
            'error': None,
            'progress': None,
            **result.to_document_fields(),
        })

        logger.info(
            f"Document {document_id} analyzed: {result.risk_level} risk, "
            f"score {result.risk_score}, {len(result.findings)} findings"
        )
        return document

    def _record_failure(self, document_id: str, message: str) -> Dict[str, Any]:
        logger.warning(f"Analysis of document {document_id} failed: {message}")
        return self.repository.update(document_id, {
            'status': 'error',
            'error': message or "An unknown error occurred",
            'progress': None,
            **CLEARED_RESULT,
        })

    def _try_record_failure(self, document_id: str, message: str):
        try:
            self._record_failure(document_id, message)
        except (PersistenceError, NotFoundError):
            logger.exception(f"Could not record failure for document {document_id}")

    async def retry_analysis(self, document_id: str) -> Dict[str, Any]:
        """
        Re-run analysis on the stored content and wait for the result.

        Joins the running pass instead of starting a second one when the
        document is already being analyzed in this process.
        """
        content = self.repository.get_content(document_id)
        if not content or not content.strip():
            raise NoContentError("Document has no content to analyze")

        logger.info(f"Retrying analysis of document {document_id}")
        return await self.queue.submit(document_id, lambda: self.analyze(document_id, content))

    def get_documents(self) -> List[Dict[str, Any]]:
        return self.repository.get_all()

    def get_document(self, document_id: str) -> Dict[str, Any]:
        return self.repository.get_by_id(document_id)

    def delete_document(self, document_id: str) -> None:
        self.repository.delete(document_id)
        logger.info(f"Deleted document {document_id}")
