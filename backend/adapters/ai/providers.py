"""
Vendor adapters for OpenAI, Anthropic Claude and Google Gemini.

Every adapter exposes the same ``complete()`` coroutine, which sends one
prompt and returns the raw answer text. SDK failures surface as
``AIProviderError`` tagged with the vendor name. No retries are attempted.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import anthropic
import google.generativeai as genai
from openai import AsyncOpenAI

from core.exceptions import AIProviderError, UnsupportedModelError
from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_MESSAGE = (
    "You are an expert marketing campaign writer for nonprofit newsrooms. "
    "Always respond with valid JSON."
)


class AIProvider(ABC):
    """Common interface for a language-model vendor."""

    name: str = ""
    display_name: str = ""

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """True when an API key is available and real calls can be made."""

    @abstractmethod
    async def complete(
        self,
        prompt: str,
        model: str,
        system: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> str:
        """Send a single prompt and return the answer text."""


class OpenAIProvider(AIProvider):
    name = "openai"
    display_name = "OpenAI"

    def __init__(self, api_key: Optional[str] = None):
        api_key = api_key if api_key is not None else settings.openai_api_key
        if api_key:
            self._client = AsyncOpenAI(api_key=api_key, timeout=float(settings.ai_timeout))
        else:
            self._client = None

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    async def complete(self, prompt, model, system=None, max_tokens=None, temperature=None) -> str:
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        try:
            response = await self._client.chat.completions.create(
                model=model,
                messages=messages,
                max_tokens=max_tokens or settings.ai_max_tokens,
                response_format={"type": "json_object"},
                temperature=temperature if temperature is not None else settings.ai_temperature,
            )
            return response.choices[0].message.content or ""
        except Exception as e:
            logger.error("OpenAI request failed (model=%s): %s", model, e)
            raise AIProviderError(self.display_name, str(e)) from e


class AnthropicProvider(AIProvider):
    name = "anthropic"
    display_name = "Anthropic"

    def __init__(self, api_key: Optional[str] = None):
        api_key = api_key if api_key is not None else settings.anthropic_api_key
        if api_key:
            self._client = anthropic.AsyncAnthropic(
                api_key=api_key,
                timeout=float(settings.ai_timeout),
            )
        else:
            self._client = None

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    async def complete(self, prompt, model, system=None, max_tokens=None, temperature=None) -> str:
        try:
            message = await self._client.messages.create(
                model=model,
                max_tokens=max_tokens or settings.ai_max_tokens,
                temperature=temperature if temperature is not None else settings.ai_temperature,
                system=system or DEFAULT_SYSTEM_MESSAGE,
                messages=[{"role": "user", "content": prompt}],
            )
            return message.content[0].text
        except Exception as e:
            logger.error("Anthropic request failed (model=%s): %s", model, e)
            raise AIProviderError(self.display_name, str(e)) from e


class GeminiProvider(AIProvider):
    name = "gemini"
    display_name = "Gemini"

    def __init__(self, api_key: Optional[str] = None):
        self._api_key = api_key if api_key is not None else settings.gemini_api_key
        self._configured = False

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def complete(self, prompt, model, system=None, max_tokens=None, temperature=None) -> str:
        if not self._configured:
            genai.configure(api_key=self._api_key)
            self._configured = True

        generation_config = {
            "temperature": temperature if temperature is not None else settings.ai_temperature,
            "max_output_tokens": max_tokens or settings.ai_max_tokens,
            "response_mime_type": "application/json",
        }
        model_client = genai.GenerativeModel(
            model_name=model,
            generation_config=generation_config,
            system_instruction=system or DEFAULT_SYSTEM_MESSAGE,
        )
        try:
            result = await model_client.generate_content_async(
                prompt + "\n\nIMPORTANT: Respond only with valid JSON.",
                request_options={"timeout": settings.ai_timeout},
            )
            return result.text
        except Exception as e:
            logger.error("Gemini request failed (model=%s): %s", model, e)
            raise AIProviderError(self.display_name, str(e)) from e


@dataclass(frozen=True)
class ModelRoute:
    """Where a public model identifier is sent."""

    provider: str
    vendor_model: str


# Public model identifiers accepted by the API. Anything else is rejected.
MODEL_REGISTRY: dict[str, ModelRoute] = {
    "gpt-4o": ModelRoute("openai", "gpt-4o"),
    "claude-sonnet-4": ModelRoute("anthropic", "claude-sonnet-4-20250514"),
    "claude-sonnet-4-20250514": ModelRoute("anthropic", "claude-sonnet-4-20250514"),
    "gemini-2.5-flash": ModelRoute("gemini", "gemini-2.5-flash"),
    "gemini-pro": ModelRoute("gemini", "gemini-pro"),
}

SUPPORTED_MODELS = tuple(MODEL_REGISTRY)


def resolve_model(model: str) -> ModelRoute:
    """
    Map a public model identifier to its provider.

    Raises:
        UnsupportedModelError: If the identifier is not registered
    """
    route = MODEL_REGISTRY.get(model)
    if route is None:
        raise UnsupportedModelError(model)
    return route


def build_default_providers() -> dict[str, AIProvider]:
    return {
        OpenAIProvider.name: OpenAIProvider(),
        AnthropicProvider.name: AnthropicProvider(),
        GeminiProvider.name: GeminiProvider(),
    }
