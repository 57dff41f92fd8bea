"""Provider lookup table keyed by display name."""

from __future__ import annotations

from typing import Dict, List

from .providers.anthropic_provider import AnthropicProvider
from .providers.base import LLMProvider
from .providers.cohere_provider import CohereProvider
from .providers.gemini_provider import GeminiProvider
from .providers.openai_provider import OpenAIProvider
from .providers.xai_provider import XAIProvider

PROVIDERS: Dict[str, LLMProvider] = {
    provider.name: provider
    for provider in (
        XAIProvider(),
        OpenAIProvider(),
        AnthropicProvider(),
        GeminiProvider(),
        CohereProvider(),
    )
}


def lookup(name: str) -> LLMProvider | None:
    if not isinstance(name, str):
        return None
    return PROVIDERS.get(name)


def provider_names() -> List[str]:
    return list(PROVIDERS)
