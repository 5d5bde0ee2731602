"""
Contract Service
Contract drafting through the AI service and owner-scoped contract storage.
"""

import logging
from typing import Any, Dict, List, Optional

from legalens.config import Settings
from legalens.schemas.contract import (
    ContractCreate,
    ContractDraftRequest,
    ContractDrafts,
    ContractUpdate,
)
from legalens.services.ai_service import AIService
from legalens.services.repository import ContractRepository


logger = logging.getLogger(__name__)


# Most popular agreements first
CONTRACT_TYPES = [
    "Non-Disclosure Agreement (NDA)",
    "Employment Agreement",
    "Service Agreement",
    "Consulting Agreement",
    "Sales Contract",
    "Lease Agreement",
    "Term Sheet",
    "SAFE Note Agreement",
    "Convertible Note Agreement",
    "Equity Vesting Agreement",
    "Partnership Agreement",
    "Distribution Agreement",
    "Licensing Agreement",
    "Software License Agreement",
    "Freelancer Contract",
    "Intellectual Property Assignment",
    "Co-Founder Agreement",
    "Stock Option Agreement",
    "Investment Agreement",
    "Terms of Service",
    "Privacy Policy",
    "Data Processing Agreement",
    "SAAS Agreement",
]

JURISDICTIONS = [
    "Alabama", "Alaska", "Arizona", "Arkansas", "California", "Colorado", "Connecticut", "Delaware",
    "Florida", "Georgia", "Hawaii", "Idaho", "Illinois", "Indiana", "Iowa", "Kansas", "Kentucky",
    "Louisiana", "Maine", "Maryland", "Massachusetts", "Michigan", "Minnesota", "Mississippi",
    "Missouri", "Montana", "Nebraska", "Nevada", "New Hampshire", "New Jersey", "New Mexico",
    "New York", "North Carolina", "North Dakota", "Ohio", "Oklahoma", "Oregon", "Pennsylvania",
    "Rhode Island", "South Carolina", "South Dakota", "Tennessee", "Texas", "Utah", "Vermont",
    "Virginia", "Washington", "West Virginia", "Wisconsin", "Wyoming",
]

# Columns that can never be cleared by an update
REQUIRED_FIELDS = ('title', 'contract_type', 'first_party_name', 'second_party_name', 'content')

PROVIDER_LABELS = {
    "openai": "OpenAI",
    "gemini": "Google Gemini",
    "anthropic": "Anthropic Claude",
}


def contract_title(contract_type: str, first_party: str, second_party: str) -> str:
    """Default title used when the caller does not supply one."""
    return f"{contract_type} between {first_party} and {second_party}"


def contract_catalog(settings: Settings) -> Dict[str, Any]:
    """Contract types, jurisdictions and drafting providers."""
    return {
        "contract_types": list(CONTRACT_TYPES),
        "jurisdictions": list(JURISDICTIONS),
        "providers": [
            {
                "id": name,
                "name": PROVIDER_LABELS.get(name, name),
                "model": getattr(settings, f"{name}_model", ""),
            }
            for name in settings.draft_providers
        ],
    }


class ContractService:
    """Drafting and storage for contracts of one user."""

    def __init__(self, repository: ContractRepository, ai_service: AIService):
        self.repository = repository
        self.ai_service = ai_service

    async def draft(self, params: ContractDraftRequest, provider: Optional[str] = None) -> str:
        return await self.ai_service.generate_contract(params, provider=provider)

    async def draft_both(self, params: ContractDraftRequest) -> ContractDrafts:
        drafts = await self.ai_service.generate_both_contracts(params)
        logger.info(f"Drafted {params.contract_type} with {', '.join(drafts.drafts)}")
        return drafts

    def create_contract(self, data: ContractCreate) -> Dict[str, Any]:
        """Save a contract whose content has already been chosen."""
        values = data.model_dump()
        if not (values.get('title') or "").strip():
            values['title'] = contract_title(
                data.contract_type, data.first_party_name, data.second_party_name
            )
        contract = self.repository.create(values)
        logger.info(f"Saved contract {contract['id']} for user {self.repository.user_id}")
        return contract

    def get_contracts(self) -> List[Dict[str, Any]]:
        return self.repository.get_all()

    def get_contract(self, contract_id: str) -> Dict[str, Any]:
        return self.repository.get_by_id(contract_id)

    def update_contract(self, contract_id: str, changes: ContractUpdate) -> Dict[str, Any]:
        values = {
            key: value
            for key, value in changes.model_dump(exclude_unset=True).items()
            if not (value is None and key in REQUIRED_FIELDS)
        }
        return self.repository.update(contract_id, values)

    def delete_contract(self, contract_id: str) -> None:
        self.repository.delete(contract_id)
        logger.info(f"Deleted contract {contract_id}")
