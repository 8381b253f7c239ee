"""
Text-completion client used by the intent classifier.
"""

import logging
from typing import Optional

from anthropic import Anthropic
from openai import OpenAI

from ..config.settings import LLM_CONFIG, DEFAULT_MODELS, PLACEHOLDER_API_KEYS

logger = logging.getLogger(__name__)


def is_api_key_configured(api_key: Optional[str]) -> bool:
    """True when `api_key` looks like a real credential"""
    if not api_key:
        return False
    key = api_key.strip()
    return len(key) > 10 and key not in PLACEHOLDER_API_KEYS


class CompletionClient:
    """
    Thin wrapper over the provider SDKs exposing a single `complete` call.

    Every request is bounded by `timeout` seconds and is never retried:
    a failed call surfaces immediately so batch latency stays bounded.
    """

    def __init__(
        self,
        api_key: str,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the provider client.

        Args:
            api_key: API key for the provider
            provider: "openai", "openrouter" or "anthropic"
            model: Model identifier in the provider's format
            timeout: Per-request timeout in seconds
        """
        self.provider = provider or LLM_CONFIG["provider"]
        self.model = model or self._default_model(self.provider)
        self.timeout = timeout or LLM_CONFIG["timeout"]

        if self.provider == "openrouter":
            self.client = OpenAI(
                api_key=api_key,
                base_url=LLM_CONFIG["base_url"],
                timeout=self.timeout,
                max_retries=0,
                default_headers={
                    "HTTP-Referer": LLM_CONFIG["site_url"],
                    "X-Title": LLM_CONFIG["app_name"],
                },
            )
        elif self.provider == "openai":
            self.client = OpenAI(api_key=api_key, timeout=self.timeout, max_retries=0)
        elif self.provider == "anthropic":
            self.client = Anthropic(api_key=api_key, timeout=self.timeout, max_retries=0)
        else:
            raise ValueError(f"Unknown provider: {self.provider}")

        logger.info(f"Completion client initialized: {self.provider}/{self.model}")

    @staticmethod
    def _default_model(provider: str) -> str:
        """LLM_MODEL for the configured provider, else that provider's stock model"""
        if provider == LLM_CONFIG["provider"]:
            return LLM_CONFIG["model"]
        return DEFAULT_MODELS.get(provider, LLM_CONFIG["model"])

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = LLM_CONFIG["temperature"],
        max_tokens: int = LLM_CONFIG["max_tokens"],
    ) -> str:
        """Send one prompt and return the reply text"""
        if self.provider in ["openrouter", "openai"]:
            # Both OpenRouter and OpenAI use the same SDK interface
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=temperature,
                max_tokens=max_tokens,
            )
            return response.choices[0].message.content or ""

        response = self.client.messages.create(
            model=self.model,
            system=system_prompt,
            max_tokens=max_tokens,
            temperature=temperature,
            messages=[
                {"role": "user", "content": user_prompt},
            ],
        )
        return response.content[0].text if response.content else ""


def create_completion_client(
    api_key: Optional[str] = None,
    provider: Optional[str] = None,
) -> Optional[CompletionClient]:
    """
    Build a client from explicit arguments or the environment.

    Returns None when no usable credential is configured; callers treat
    that as an expected state rather than an error.
    """
    api_key = api_key or LLM_CONFIG.get("api_key")
    if not is_api_key_configured(api_key):
        return None
    return CompletionClient(api_key=api_key, provider=provider)
