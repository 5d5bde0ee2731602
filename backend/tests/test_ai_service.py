import pytest

from conftest import FakeProvider, make_ai_service
from legalens.errors import ProviderError
from legalens.schemas.contract import ContractDraftRequest
from legalens.services.ai_service import ANALYSIS_PROMPT, CONTRACT_PROMPT


DRAFT_PARAMS = ContractDraftRequest(
    contract_type="Non-Disclosure Agreement (NDA)",
    first_party_name="Acme Corp",
    second_party_name="Jane Doe",
    jurisdiction="Delaware",
    key_terms="Two year confidentiality period",
    intensity=80,
)


@pytest.mark.asyncio
async def test_analysis_uses_system_user_pair():
    provider = FakeProvider("openai", replies=["{}"])
    service = make_ai_service([provider])

    assert await service.analyze_document("This Agreement is made...") == "{}"

    prompt = provider.prompts[0]
    assert prompt.system == ANALYSIS_PROMPT
    assert prompt.user == "This Agreement is made..."


@pytest.mark.asyncio
async def test_analysis_content_is_capped():
    provider = FakeProvider("openai", replies=["{}"])
    service = make_ai_service([provider], max_document_chars=10)

    await service.analyze_document("x" * 50)

    assert provider.prompts[0].user == "x" * 10


@pytest.mark.asyncio
async def test_analysis_provider_is_configurable():
    claude = FakeProvider("anthropic", replies=["{}"])
    service = make_ai_service([claude], analysis_provider="anthropic")

    await service.analyze_document("text")

    assert len(claude.prompts) == 1


def test_contract_prompt_includes_parameters():
    service = make_ai_service([])

    prompt = service.build_contract_prompt(DRAFT_PARAMS)

    assert prompt.system == CONTRACT_PROMPT
    assert "Generate a Non-Disclosure Agreement (NDA) contract between Acme Corp and Jane Doe." in prompt.user
    assert "Jurisdiction: Delaware" in prompt.user
    assert "Key Terms: Two year confidentiality period" in prompt.user
    assert "Protectiveness (80/100): strongly protective" in prompt.user
    assert "Address" not in prompt.user


@pytest.mark.asyncio
async def test_generate_contract_defaults_to_first_draft_provider():
    openai_ = FakeProvider("openai", replies=["OPENAI DRAFT"])
    gemini = FakeProvider("gemini", replies=["GEMINI DRAFT"])
    service = make_ai_service([openai_, gemini])

    assert await service.generate_contract(DRAFT_PARAMS) == "OPENAI DRAFT"
    assert await service.generate_contract(DRAFT_PARAMS, provider="gemini") == "GEMINI DRAFT"


@pytest.mark.asyncio
async def test_both_drafts_returned():
    service = make_ai_service([
        FakeProvider("openai", replies=["OPENAI DRAFT"], delay=0.01),
        FakeProvider("gemini", replies=["GEMINI DRAFT"]),
    ])

    drafts = await service.generate_both_contracts(DRAFT_PARAMS)

    assert drafts.drafts == {"openai": "OPENAI DRAFT", "gemini": "GEMINI DRAFT"}
    assert drafts.errors == {}


@pytest.mark.asyncio
async def test_all_or_nothing_discards_surviving_draft():
    service = make_ai_service([
        FakeProvider("openai", replies=["OPENAI DRAFT"]),
        FakeProvider("gemini", error=RuntimeError("quota exceeded")),
    ])

    with pytest.raises(ProviderError, match="gemini request failed"):
        await service.generate_both_contracts(DRAFT_PARAMS)


@pytest.mark.asyncio
async def test_best_effort_keeps_surviving_draft():
    service = make_ai_service([
        FakeProvider("openai", replies=["OPENAI DRAFT"]),
        FakeProvider("gemini", error=RuntimeError("quota exceeded")),
    ], dual_draft_policy="best_effort")

    drafts = await service.generate_both_contracts(DRAFT_PARAMS)

    assert drafts.drafts == {"openai": "OPENAI DRAFT"}
    assert "quota exceeded" in drafts.errors["gemini"]


@pytest.mark.asyncio
async def test_best_effort_fails_when_every_branch_fails():
    service = make_ai_service([
        FakeProvider("openai", replies=[""]),
        FakeProvider("gemini", error=RuntimeError("down")),
    ], dual_draft_policy="best_effort")

    with pytest.raises(ProviderError):
        await service.generate_both_contracts(DRAFT_PARAMS)


@pytest.mark.asyncio
async def test_missing_api_key_fails_that_branch():
    service = make_ai_service([FakeProvider("openai", replies=["OPENAI DRAFT"])],
                              dual_draft_policy="best_effort", gemini_api_key="")

    drafts = await service.generate_both_contracts(DRAFT_PARAMS)

    assert drafts.drafts == {"openai": "OPENAI DRAFT"}
    assert drafts.errors == {"gemini": "gemini API key is not configured"}
