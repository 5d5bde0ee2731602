"""
Documents Router
Submit documents for risk analysis, list them, retry and delete.
"""

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status

from legalens.config import get_settings
from legalens.errors import LegalensError
from legalens.routers.common import get_document_service, raise_http
from legalens.schemas.document import CreateDocumentRequest, DocumentResponse
from legalens.services.document_service import DocumentService
from legalens.services.text_extraction import extract_text, title_from_filename


router = APIRouter()


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    request: CreateDocumentRequest,
    service: DocumentService = Depends(get_document_service)
):
    """Store pasted content and start its analysis in the background."""
    try:
        return await service.create_document(request.content, title=request.title)
    except LegalensError as e:
        raise_http(e)


@router.post("/upload", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def upload_document(
    file: UploadFile = File(...),
    service: DocumentService = Depends(get_document_service)
):
    """Extract text from an uploaded PDF/DOCX/text file and analyze it."""
    max_bytes = get_settings().max_upload_mb * 1024 * 1024
    data = await file.read()
    if len(data) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File is larger than {get_settings().max_upload_mb} MB"
        )

    try:
        content = extract_text(file.filename, data)
        return await service.create_document(content, title=title_from_filename(file.filename))
    except LegalensError as e:
        raise_http(e)


@router.get("", response_model=list[DocumentResponse])
async def list_documents(service: DocumentService = Depends(get_document_service)):
    """Get the current user's documents, newest first."""
    try:
        return service.get_documents()
    except LegalensError as e:
        raise_http(e)


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    service: DocumentService = Depends(get_document_service)
):
    try:
        return service.get_document(document_id)
    except LegalensError as e:
        raise_http(e)


@router.post("/{document_id}/retry", response_model=DocumentResponse)
async def retry_analysis(
    document_id: str,
    service: DocumentService = Depends(get_document_service)
):
    """Re-run analysis on the stored content and return the final state."""
    try:
        return await service.retry_analysis(document_id)
    except LegalensError as e:
        raise_http(e)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: str,
    service: DocumentService = Depends(get_document_service)
):
    try:
        service.delete_document(document_id)
    except LegalensError as e:
        raise_http(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
