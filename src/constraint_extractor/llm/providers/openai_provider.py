"""OpenAI Chat Completions provider."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence, TypedDict

from ..types import Message
from .base import dig, require_text


class ChatMessage(TypedDict):
    role: str
    content: str


class ChatCompletionRequest(TypedDict):
    model: str
    messages: List[ChatMessage]


class ChatCompletionChoice(TypedDict, total=False):
    index: int
    message: ChatMessage
    finish_reason: str


class ChatCompletionResponse(TypedDict, total=False):
    id: str
    choices: List[ChatCompletionChoice]


class OpenAIProvider:
    name = "OpenAI"
    endpoint = "https://api.openai.com/v1/chat/completions"
    default_model = "gpt-4o-mini"
    credential_env = "OPENAI_API_KEY"
    credential_aliases: tuple[str, ...] = ()
    auth_query_param = None

    def build_headers(self, credential: str) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {credential}",
        }

    def build_body(self, model: str, messages: Sequence[Message], max_tokens: int) -> ChatCompletionRequest:
        # Chat Completions treats max_tokens as optional; omitting it leaves the model default.
        return {
            "model": model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
        }

    def extract_answer(self, response: Any) -> str:
        return require_text(dig(response, "choices", 0, "message", "content"), "choices[0].message.content")
