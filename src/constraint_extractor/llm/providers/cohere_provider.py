"""Cohere Chat (v1) provider."""

from __future__ import annotations

from typing import Any, Dict, Sequence, TypedDict

from ..types import Message, first_system_content
from .base import dig, require_text


class ChatRequest(TypedDict):
    model: str
    message: str
    preamble: str


class ChatResponse(TypedDict, total=False):
    text: str
    generation_id: str
    finish_reason: str


class CohereProvider:
    name = "Cohere"
    endpoint = "https://api.cohere.ai/v1/chat"
    default_model = "command-r-plus"
    credential_env = "COHERE_API_KEY"
    credential_aliases: tuple[str, ...] = ()
    auth_query_param = None

    def build_headers(self, credential: str) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {credential}",
        }

    def build_body(self, model: str, messages: Sequence[Message], max_tokens: int) -> ChatRequest:
        # Only the latest turn is sent; earlier turns are dropped.
        return {
            "model": model,
            "message": messages[-1].content if messages else "",
            "preamble": first_system_content(list(messages)),
        }

    def extract_answer(self, response: Any) -> str:
        return require_text(dig(response, "text"), "text")
