"""xAI Grok provider (OpenAI-compatible chat completions)."""

from __future__ import annotations

from .openai_provider import OpenAIProvider


class XAIProvider(OpenAIProvider):
    name = "xAI (Grok)"
    endpoint = "https://api.x.ai/v1/chat/completions"
    default_model = "grok-3"
    credential_env = "XAI_API_KEY"
