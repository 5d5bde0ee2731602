import asyncio
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from legalens.config import Settings, get_settings
from legalens.database import create_tables, get_engine, get_session_factory
from legalens.services.ai_service import AIService
from legalens.services.providers import LLMProvider


TEST_JWT_SECRET = "test-jwt-secret-with-enough-length-for-hs256"

ALICE = "11111111-1111-1111-1111-111111111111"
BOB = "22222222-2222-2222-2222-222222222222"

ANALYSIS_REPLY = (
    'Here is my analysis:\n'
    '{"findings": ['
    '{"text": "Termination clause is one-sided", "riskLevel": "high", '
    '"suggestions": ["Add mutual termination rights"]}, '
    '"Missing governing law clause"], '
    '"riskLevel": "high", "riskScore": 82, '
    '"recommendations": "Renegotiate termination."}\n'
    'Let me know if you need more.'
)


def _clear_caches():
    get_session_factory.cache_clear()
    get_engine.cache_clear()
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _test_env(monkeypatch, tmp_path):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'legalens.db'}")
    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    for key in ("OPENAI_API_KEY", "GEMINI_API_KEY", "ANTHROPIC_API_KEY",
                "DRAFT_PROVIDERS", "DUAL_DRAFT_POLICY", "ANALYSIS_PROVIDER"):
        monkeypatch.delenv(key, raising=False)
    _clear_caches()
    yield
    get_engine().dispose()
    _clear_caches()


@pytest.fixture
def session_factory():
    create_tables()
    return get_session_factory()


class FakeProvider(LLMProvider):
    """Provider returning canned replies; records every prompt."""

    def __init__(self, name="openai", replies=None, error=None, delay=0.0, timeout=5.0):
        super().__init__(model=f"fake-{name}", timeout=timeout)
        self.name = name
        self.replies = list(replies or [ANALYSIS_REPLY])
        self.error = error
        self.delay = delay
        self.prompts = []

    async def _complete(self, prompt):
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if len(self.replies) > 1:
            return self.replies.pop(0)
        return self.replies[0]


def make_ai_service(providers, **overrides):
    settings = Settings(_env_file=None, **overrides)
    return AIService(settings=settings, providers={p.name: p for p in providers})


def make_token(user_id, secret=TEST_JWT_SECRET, expires_in=timedelta(hours=1), email=None):
    payload = {
        "sub": user_id,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, secret, algorithm="HS256")


def auth_headers(user_id, email=None):
    return {"Authorization": f"Bearer {make_token(user_id, email=email)}"}
