"""Anthropic Messages API provider."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence, TypedDict

from ..types import MalformedProviderResponse, Message, first_system_content
from .base import dig


class AnthropicMessage(TypedDict):
    role: str
    content: str


class MessagesRequest(TypedDict):
    model: str
    max_tokens: int
    system: str
    messages: List[AnthropicMessage]


class ContentBlock(TypedDict, total=False):
    type: str
    text: str


class MessagesResponse(TypedDict, total=False):
    id: str
    content: List[ContentBlock]
    stop_reason: str


class AnthropicProvider:
    name = "Anthropic (Claude)"
    endpoint = "https://api.anthropic.com/v1/messages"
    default_model = "claude-3-haiku-20240307"
    credential_env = "ANTHROPIC_API_KEY"
    credential_aliases: tuple[str, ...] = ()
    auth_query_param = None
    api_version = "2023-06-01"

    def build_headers(self, credential: str) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": credential,
            "anthropic-version": self.api_version,
        }

    def build_body(self, model: str, messages: Sequence[Message], max_tokens: int) -> MessagesRequest:
        # The Messages API has no system role; instructions travel in `system`.
        return {
            "model": model,
            "max_tokens": max_tokens,
            "system": first_system_content(list(messages)),
            "messages": [{"role": m.role, "content": m.content} for m in messages if m.role != "system"],
        }

    def extract_answer(self, response: Any) -> str:
        content = dig(response, "content")
        if not isinstance(content, list) or not content:
            raise MalformedProviderResponse("response has no content blocks")
        texts = [
            block["text"]
            for block in content
            if isinstance(block, dict) and block.get("type", "text") == "text" and isinstance(block.get("text"), str)
        ]
        if not texts:
            raise MalformedProviderResponse("response has no text content block")
        return "".join(texts)
