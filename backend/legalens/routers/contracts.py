"""
Contracts Router
Draft contracts with one or two providers, then save and manage them.
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from legalens.config import get_settings
from legalens.errors import LegalensError
from legalens.routers.common import get_contract_service, raise_http
from legalens.schemas.contract import (
    ContractCatalog,
    ContractCreate,
    ContractDraftRequest,
    ContractDraftResponse,
    ContractDrafts,
    ContractResponse,
    ContractUpdate,
)
from legalens.services.contract_service import ContractService, contract_catalog


router = APIRouter()


@router.get("/catalog", response_model=ContractCatalog)
async def get_catalog():
    """Contract types, jurisdictions and drafting providers."""
    return ContractCatalog(**contract_catalog(get_settings()))


@router.post("/drafts", response_model=ContractDrafts)
async def draft_with_both_providers(
    request: ContractDraftRequest,
    service: ContractService = Depends(get_contract_service)
):
    """Draft the contract with both providers so the user can pick one."""
    try:
        return await service.draft_both(request)
    except LegalensError as e:
        raise_http(e)


@router.post("/drafts/{provider}", response_model=ContractDraftResponse)
async def draft_with_provider(
    provider: str,
    request: ContractDraftRequest,
    service: ContractService = Depends(get_contract_service)
):
    try:
        content = await service.draft(request, provider=provider)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except LegalensError as e:
        raise_http(e)
    return ContractDraftResponse(provider=provider, content=content)


@router.post("", response_model=ContractResponse, status_code=status.HTTP_201_CREATED)
async def create_contract(
    request: ContractCreate,
    service: ContractService = Depends(get_contract_service)
):
    """Save a contract with its chosen content."""
    try:
        return service.create_contract(request)
    except LegalensError as e:
        raise_http(e)


@router.get("", response_model=list[ContractResponse])
async def list_contracts(service: ContractService = Depends(get_contract_service)):
    """Get the current user's contracts, newest first."""
    try:
        return service.get_contracts()
    except LegalensError as e:
        raise_http(e)


@router.get("/{contract_id}", response_model=ContractResponse)
async def get_contract(
    contract_id: str,
    service: ContractService = Depends(get_contract_service)
):
    try:
        return service.get_contract(contract_id)
    except LegalensError as e:
        raise_http(e)


@router.patch("/{contract_id}", response_model=ContractResponse)
async def update_contract(
    contract_id: str,
    request: ContractUpdate,
    service: ContractService = Depends(get_contract_service)
):
    try:
        return service.update_contract(contract_id, request)
    except LegalensError as e:
        raise_http(e)


@router.delete("/{contract_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contract(
    contract_id: str,
    service: ContractService = Depends(get_contract_service)
):
    try:
        service.delete_contract(contract_id)
    except LegalensError as e:
        raise_http(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
