"""
LLM Providers
Thin async adapters over the chat-completion, generative-content and
messages style APIs. Each returns the raw completion text.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import anthropic
import google.generativeai as genai
import openai

from legalens.config import Settings
from legalens.errors import ProviderError


logger = logging.getLogger(__name__)


@dataclass
class Prompt:
    """A system/user prompt pair. Providers without roles join the two."""
    user: str
    system: Optional[str] = None

    def as_single_text(self) -> str:
        if not self.system:
            return self.user
        return f"{self.system}\n\n{self.user}"


class LLMProvider(ABC):
    """Base provider: deadline and error wrapping around one completion call."""

    name = "provider"

    def __init__(self, model: str, timeout: float = 120.0):
        self.model = model
        self.timeout = timeout

    async def generate(self, prompt: Prompt) -> str:
        """Issue one completion request and return its text. Never retries."""
        try:
            text = await asyncio.wait_for(self._complete(prompt), timeout=self.timeout)
        except ProviderError:
            raise
        except asyncio.TimeoutError as e:
            raise ProviderError(
                f"{self.name} timed out after {self.timeout:g}s", provider=self.name
            ) from e
        except Exception as e:
            raise ProviderError(
                f"{self.name} request failed: {type(e).__name__}: {e}", provider=self.name
            ) from e

        if not text or not text.strip():
            raise ProviderError("empty response", provider=self.name)

        logger.debug(f"{self.name}/{self.model} returned {len(text)} chars")
        return text

    @abstractmethod
    async def _complete(self, prompt: Prompt) -> str:
        ...


class OpenAIProvider(LLMProvider):
    """Chat-completion style provider."""

    name = "openai"

    def __init__(self, api_key: str, model: str = "gpt-4o", timeout: float = 120.0, client=None):
        super().__init__(model, timeout)
        self.client = client or openai.AsyncOpenAI(api_key=api_key, max_retries=0)

    async def _complete(self, prompt: Prompt) -> str:
        messages = []
        if prompt.system:
            messages.append({"role": "system", "content": prompt.system})
        messages.append({"role": "user", "content": prompt.user})

        response = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
        )

        if not response.choices:
            raise ProviderError("empty response", provider=self.name)
        return response.choices[0].message.content or ""


class GeminiProvider(LLMProvider):
    """Generative-content style provider: one prompt string in, .text out."""

    name = "gemini"

    def __init__(self, api_key: str, model: str = "gemini-1.5-pro", timeout: float = 120.0, client=None):
        super().__init__(model, timeout)
        if client is None:
            genai.configure(api_key=api_key)
            client = genai.GenerativeModel(model)
        self.client = client

    async def _complete(self, prompt: Prompt) -> str:
        response = await self.client.generate_content_async(prompt.as_single_text())

        if not response.candidates:
            raise ProviderError("empty response", provider=self.name)
        return response.text


class AnthropicProvider(LLMProvider):
    """Messages API provider."""

    name = "anthropic"

    def __init__(
        self,
        api_key: str,
        model: str = "claude-3-5-haiku-20241022",
        max_tokens: int = 8000,
        timeout: float = 120.0,
        client=None,
    ):
        super().__init__(model, timeout)
        self.max_tokens = max_tokens
        self.client = client or anthropic.AsyncAnthropic(api_key=api_key, max_retries=0)

    async def _complete(self, prompt: Prompt) -> str:
        kwargs = {}
        if prompt.system:
            kwargs["system"] = prompt.system

        response = await self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=[{"role": "user", "content": prompt.user}],
            **kwargs,
        )

        # Extract text from response
        response_text = ""
        for block in response.content:
            if block.type == "text":
                response_text += block.text
        return response_text


PROVIDER_NAMES = ("openai", "gemini", "anthropic")


def build_provider(name: str, settings: Settings) -> LLMProvider:
    """Build a provider by name from application settings."""
    kind = (name or "").strip().lower()
    timeout = settings.provider_timeout_seconds

    if kind == "openai":
        api_key = settings.openai_api_key
    elif kind == "gemini":
        api_key = settings.gemini_api_key
    elif kind == "anthropic":
        api_key = settings.anthropic_api_key
    else:
        raise ValueError(f"Unknown provider: {name}. Expected one of: {', '.join(PROVIDER_NAMES)}")

    if not api_key:
        raise ProviderError(f"{kind} API key is not configured", provider=kind)

    if kind == "openai":
        return OpenAIProvider(api_key=api_key, model=settings.openai_model, timeout=timeout)
    if kind == "gemini":
        return GeminiProvider(api_key=api_key, model=settings.gemini_model, timeout=timeout)
    return AnthropicProvider(
        api_key=api_key,
        model=settings.anthropic_model,
        max_tokens=settings.anthropic_max_tokens,
        timeout=timeout,
    )
