"""Pulls the model's answer text out of a provider envelope."""

from __future__ import annotations

import re
from typing import Any

from .llm.providers.base import LLMProvider
from .llm.types import MalformedProviderResponse

FENCE_MARKER = "```"

# Opening marker, then an optional language tag (only when a line break
# follows it, or a bare `json` directly before the payload), then everything
# up to the closing marker or the end of an unclosed block.
_FENCE_RE = re.compile(r"```(?:[\w.+-]*[ \t]*\r?\n|json(?=\s*[\[{]))?(.*?)(?:```|\Z)", re.DOTALL | re.IGNORECASE)


def extract(provider: LLMProvider, raw_response: Any) -> str:
    """Applies the provider's answer path and trims whitespace."""
    try:
        text = provider.extract_answer(raw_response)
    except MalformedProviderResponse as exc:
        raise MalformedProviderResponse(f"Unexpected {provider.name} response: {exc}") from exc
    return text.strip()


def strip_code_fence(text: str) -> str:
    """Returns the content of the first fenced block, or ``text`` unchanged if there is none."""
    if FENCE_MARKER not in text:
        return text
    match = _FENCE_RE.search(text)
    if match is None:
        return text
    return match.group(1).strip()
