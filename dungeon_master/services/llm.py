"""
LLM Service for the Dungeon Master.

Generates narration through any OpenAI-compatible chat completion API
(OpenRouter by default). Providers never raise: every failure is
reported as a GenerationError inside a GenerationResult so callers can
fall back to canned narration.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

import openai
from openai import AsyncOpenAI

from dungeon_master.content.voices import VOICES

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "deepseek/deepseek-r1-0528"
DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_TIMEOUT = 30.0


def _voice_guide() -> str:
    lines = []
    for index, voice in enumerate(VOICES.values(), start=1):
        words = ", ".join(f'"{word}"' for word in voice.vocabulary)
        lines.append(f"{index}. {voice.name.upper()}: {words}")
    return "\n".join(lines)


DM_SYSTEM_PROMPT = f"""You are an expert Dungeon Master for a fantasy tabletop adventure.
Create engaging adventures with unique NPC voices.

RESPONSE STYLE:
- Write in English
- Be concise but vivid, focus on action and plot
- Only key details of the environment
- Emphasize NPC dialogue with a distinct voice
- Always finish your thoughts, never end mid-sentence

NPC VOICES (use characteristic vocabulary):
{_voice_guide()}

RESPONSE STRUCTURE (4-6 sentences):
1. Result of the player's action (1-2 sentences)
2. One NPC line in a distinct voice
3. A new event or plot twist (1-2 sentences)
4. One explicit choice for the player (1 sentence)"""


class GenerationError(str, Enum):
    """Why a generation attempt produced no usable text."""

    UNAUTHORIZED = "unauthorized"
    RATE_LIMITED = "rate_limited"
    BAD_REQUEST = "bad_request"
    TRANSPORT = "transport"
    MALFORMED = "malformed"
    EMPTY = "empty"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class GenerationResult:
    """Either generated text or the reason there is none."""

    text: str | None = None
    error: GenerationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.text)

    @classmethod
    def success(cls, text: str) -> GenerationResult:
        return cls(text=text)

    @classmethod
    def failure(cls, error: GenerationError) -> GenerationResult:
        return cls(error=error)


class LLMProvider(Protocol):
    """
    Interface for narration providers.

    Supports any OpenAI-compatible API (OpenRouter, OpenAI, Ollama, etc.)
    """

    async def generate(
        self,
        prompt: str,
        max_tokens: int = 600,
        temperature: float = 0.8,
    ) -> GenerationResult:
        """
        Generate Dungeon Master narration for a prompt.

        Args:
            prompt: The user turn sent after the fixed DM instruction
            max_tokens: Maximum tokens in response
            temperature: Randomness (0.0 = deterministic, 1.0 = creative)

        Returns:
            GenerationResult holding the text or a GenerationError
        """
        ...

    @property
    def model_name(self) -> str:
        """The model being used."""
        ...

    @property
    def is_available(self) -> bool:
        """Whether the provider is configured and ready."""
        ...


def _classify_api_error(exc: Exception) -> GenerationError:
    # APITimeoutError subclasses APIConnectionError.
    if isinstance(exc, openai.AuthenticationError):
        return GenerationError.UNAUTHORIZED
    if isinstance(exc, openai.RateLimitError):
        return GenerationError.RATE_LIMITED
    if isinstance(exc, openai.BadRequestError):
        return GenerationError.BAD_REQUEST
    if isinstance(exc, openai.APIResponseValidationError):
        return GenerationError.MALFORMED
    if isinstance(exc, (openai.APIConnectionError, openai.APIStatusError)):
        return GenerationError.TRANSPORT
    return GenerationError.MALFORMED


@dataclass
class OpenRouterProvider:
    """
    OpenRouter LLM provider using OpenAI-compatible API.

    Makes exactly one attempt per call, bounded by an explicit timeout.

    Configuration via environment variables:
        OPENROUTER_API_KEY: Your OpenRouter API key (required)
        OPENROUTER_MODEL: Model to use (default: deepseek/deepseek-r1-0528)
        LLM_BASE_URL: Custom base URL (default: OpenRouter)
        OPENROUTER_SITE_URL: Your site URL for rankings (optional)
        OPENROUTER_SITE_NAME: Your site name (optional)
        LLM_TIMEOUT: Request timeout in seconds (default: 30)
    """

    api_key: str | None = None
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    site_url: str | None = None
    site_name: str = "AI Dungeon Master"
    timeout: float = DEFAULT_TIMEOUT
    system_prompt: str = DM_SYSTEM_PROMPT

    _client: AsyncOpenAI | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        """Initialize from environment if not provided."""
        if self.api_key is None:
            self.api_key = os.getenv("OPENROUTER_API_KEY")

        if os.getenv("OPENROUTER_MODEL"):
            self.model = os.getenv("OPENROUTER_MODEL", self.model)

        if os.getenv("LLM_BASE_URL"):
            self.base_url = os.getenv("LLM_BASE_URL", self.base_url)

        if os.getenv("OPENROUTER_SITE_URL"):
            self.site_url = os.getenv("OPENROUTER_SITE_URL")

        if os.getenv("OPENROUTER_SITE_NAME"):
            self.site_name = os.getenv("OPENROUTER_SITE_NAME", self.site_name)

        if os.getenv("LLM_TIMEOUT"):
            try:
                self.timeout = float(os.environ["LLM_TIMEOUT"])
            except ValueError:
                logger.warning("Ignoring invalid LLM_TIMEOUT=%r", os.environ["LLM_TIMEOUT"])

        if self.api_key:
            headers = {"X-Title": self.site_name}
            if self.site_url:
                headers["HTTP-Referer"] = self.site_url

            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                default_headers=headers,
                timeout=self.timeout,
                max_retries=0,
            )

    @property
    def model_name(self) -> str:
        """The model being used."""
        return self.model

    @property
    def is_available(self) -> bool:
        """Whether the provider is configured and ready."""
        return self._client is not None

    async def generate(
        self,
        prompt: str,
        max_tokens: int = 600,
        temperature: float = 0.8,
    ) -> GenerationResult:
        """Send one chat completion request; never raises."""
        if self._client is None:
            logger.warning("No API key configured, narration unavailable")
            return GenerationResult.failure(GenerationError.UNAVAILABLE)

        logger.debug("Requesting narration from %s (prompt %d chars)", self.model, len(prompt))
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": self.system_prompt},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except (openai.OpenAIError, ValueError, json.JSONDecodeError) as exc:
            error = _classify_api_error(exc)
            logger.warning("Narration request failed (%s): %s", error.value, exc)
            return GenerationResult.failure(error)

        choices = getattr(response, "choices", None)
        if not choices:
            logger.warning("Narration response had no choices")
            return GenerationResult.failure(GenerationError.MALFORMED)

        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if content is None:
            logger.warning("Narration response had no message content")
            return GenerationResult.failure(GenerationError.EMPTY)
        if not isinstance(content, str):
            logger.warning("Narration content was %s, not text", type(content).__name__)
            return GenerationResult.failure(GenerationError.MALFORMED)
        if not content.strip():
            logger.warning("Narration content was blank")
            return GenerationResult.failure(GenerationError.EMPTY)

        return GenerationResult.success(content)


@dataclass
class MockLLMProvider:
    """
    Mock LLM provider for testing and offline play.

    Returns canned responses without making API calls. Set ``fail_with``
    to simulate a provider failure.
    """

    model: str = "mock"
    responses: dict[str, str] = field(default_factory=dict)
    default_response: str = "[Mock LLM response]"
    fail_with: GenerationError | None = None
    prompts: list[str] = field(default_factory=list)

    @property
    def model_name(self) -> str:
        """The model being used."""
        return self.model

    @property
    def is_available(self) -> bool:
        """Mock provider is always available."""
        return True

    async def generate(
        self,
        prompt: str,
        max_tokens: int = 600,
        temperature: float = 0.8,
    ) -> GenerationResult:
        """Return a mock response."""
        self.prompts.append(prompt)
        if self.fail_with is not None:
            return GenerationResult.failure(self.fail_with)
        return GenerationResult.success(self.responses.get(prompt, self.default_response))

    def set_response(self, trigger: str, response: str) -> None:
        """Set a custom response for a specific prompt."""
        self.responses[trigger] = response


def create_llm_provider(provider_type: str = "openrouter", **kwargs) -> LLMProvider:
    """
    Factory function to create a narration provider.

    Args:
        provider_type: Type of provider ("openrouter", "mock")
        **kwargs: Provider-specific configuration

    Example:
        # Auto-configure from environment
        provider = create_llm_provider()

        # Mock for testing
        provider = create_llm_provider("mock", default_response="The door creaks open.")
    """
    if provider_type == "mock":
        return MockLLMProvider(**kwargs)
    if provider_type == "openrouter":
        return OpenRouterProvider(**kwargs)
    raise ValueError(f"Unknown provider type: {provider_type}")
