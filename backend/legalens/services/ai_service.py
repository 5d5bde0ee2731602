"""
AI Service
Builds analysis and drafting prompts and routes them to the configured
LLM providers, including the dual-provider drafting fan-out.
"""

import asyncio
import logging
from typing import Dict, Optional

from legalens.config import Settings, get_settings
from legalens.errors import ProviderError
from legalens.schemas.contract import ContractDraftRequest, ContractDrafts
from legalens.services.providers import LLMProvider, Prompt, build_provider


logger = logging.getLogger(__name__)


# System Prompts
ANALYSIS_PROMPT = """You are a legal document analysis expert. Analyze the provided legal document and extract the following information:
1. Key findings (potential issues, non-standard clauses, or areas of concern), each with its own risk level and concrete suggestions
2. Overall risk level (low, medium, or high)
3. Risk score (an integer between 0 and 100)
4. Recommendations for improvement

Return the results as a single JSON object with the following structure:
{
  "findings": [
    {"text": "Description of the issue", "riskLevel": "low|medium|high", "suggestions": ["Suggestion 1", "..."]}
  ],
  "riskLevel": "low|medium|high",
  "riskScore": number,
  "recommendations": "text with recommendations"
}"""


CONTRACT_PROMPT = """You are a legal contract generation expert. Generate a professional legal contract based on the provided parameters.
The contract should be well-structured, legally sound, and include all necessary clauses for the specified type.

Format the contract with the following structure:
1. Title
2. Date
3. Parties (with full names and addresses)
4. Recitals (if applicable)
5. Main body with numbered sections
6. Signatures section

Use proper legal formatting:
- Number all sections and subsections
- Use clear headings for each section
- Include standard legal boilerplate
- Format dates consistently
- Use proper capitalization for headings and line breaks between sections
- Do not use markdown symbols (* or #)

Do not include any placeholders or template markers - generate a complete, ready-to-use contract.
Format the output as plain text without any markdown or special formatting symbols."""


def describe_intensity(intensity: int) -> str:
    """Translate the 0-100 protectiveness level into drafting guidance."""
    if intensity >= 75:
        return "strongly protective of the first party; favor one-sided remedies, caps and indemnities"
    if intensity >= 40:
        return "balanced between both parties"
    return "lenient and cooperative; keep obligations and remedies light"


class AIService:
    """
    Provider facade used by the orchestrators.
    - analyze_document: system/user prompt pair, raw JSON-ish text back
    - generate_contract: single drafting prompt, one provider
    - generate_both_contracts: two providers concurrently
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        providers: Optional[Dict[str, LLMProvider]] = None,
    ):
        self.settings = settings or get_settings()
        self._providers: Dict[str, LLMProvider] = dict(providers or {})

    def get_provider(self, name: str) -> LLMProvider:
        """Return the named provider, building it on first use."""
        key = name.strip().lower()
        if key not in self._providers:
            self._providers[key] = build_provider(key, self.settings)
        return self._providers[key]

    def build_analysis_prompt(self, content: str) -> Prompt:
        limit = self.settings.max_document_chars
        if len(content) > limit:
            logger.warning(f"Document content truncated from {len(content)} to {limit} chars")
            content = content[:limit]
        return Prompt(system=ANALYSIS_PROMPT, user=content)

    def build_contract_prompt(self, params: ContractDraftRequest) -> Prompt:
        lines = [
            f"Generate a {params.contract_type} contract between {params.first_party_name} and {params.second_party_name}.",
        ]
        if params.first_party_address:
            lines.append(f"First Party Address: {params.first_party_address}")
        if params.second_party_address:
            lines.append(f"Second Party Address: {params.second_party_address}")
        if params.jurisdiction:
            lines.append(f"Jurisdiction: {params.jurisdiction}")
        if params.description:
            lines.append(f"Description: {params.description}")
        if params.key_terms:
            lines.append(f"Key Terms: {params.key_terms}")
        lines.append(f"Protectiveness ({params.intensity}/100): {describe_intensity(params.intensity)}")
        lines.append("")
        lines.append("Please generate a complete, professional contract with proper formatting and structure.")

        return Prompt(system=CONTRACT_PROMPT, user="\n".join(lines))

    async def analyze_document(self, content: str) -> str:
        """Run one analysis request and return the raw model text."""
        provider = self.get_provider(self.settings.analysis_provider)
        return await provider.generate(self.build_analysis_prompt(content))

    async def generate_contract(self, params: ContractDraftRequest, provider: Optional[str] = None) -> str:
        """Draft a contract with a single provider."""
        name = provider or self.settings.draft_providers[0]
        return await self.get_provider(name).generate(self.build_contract_prompt(params))

    async def generate_both_contracts(self, params: ContractDraftRequest) -> ContractDrafts:
        """
        Draft with every configured draft provider concurrently.

        Each branch resolves to a draft or an error. Under the
        all_or_nothing policy any failed branch fails the whole call;
        under best_effort the call fails only when no branch succeeded.
        """
        names = list(self.settings.draft_providers)
        prompt = self.build_contract_prompt(params)

        async def run(name: str) -> str:
            return await self.get_provider(name).generate(prompt)

        outcomes = await asyncio.gather(*(run(name) for name in names), return_exceptions=True)

        drafts: Dict[str, str] = {}
        errors: Dict[str, ProviderError] = {}
        for name, outcome in zip(names, outcomes):
            if isinstance(outcome, ProviderError):
                errors[name] = outcome
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                drafts[name] = outcome

        for name, error in errors.items():
            logger.warning(f"Draft from {name} failed: {error}")

        if errors and (self.settings.dual_draft_policy == "all_or_nothing" or not drafts):
            raise next(iter(errors.values()))

        return ContractDrafts(
            drafts=drafts,
            errors={name: str(error) for name, error in errors.items()},
        )
