"""Google Gemini REST provider."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence, TypedDict

from ..types import MalformedProviderResponse, Message
from .base import dig


class Part(TypedDict, total=False):
    text: str


class Content(TypedDict, total=False):
    role: str
    parts: List[Part]


class GenerateContentRequest(TypedDict):
    contents: List[Content]


class Candidate(TypedDict, total=False):
    content: Content
    finishReason: str


class GenerateContentResponse(TypedDict, total=False):
    candidates: List[Candidate]
    responseId: str


class GeminiProvider:
    name = "Google (Gemini)"
    endpoint = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
    default_model = "gemini-1.5-flash"
    credential_env = "GOOGLE_API_KEY"
    credential_aliases: tuple[str, ...] = ("GEMINI_API_KEY",)
    auth_query_param = "key"

    def build_headers(self, credential: str) -> Dict[str, str]:
        # Authenticated via the `key` query parameter, not a header.
        return {"Content-Type": "application/json"}

    def build_body(self, model: str, messages: Sequence[Message], max_tokens: int) -> GenerateContentRequest:
        transcript = "\n\n".join(f"{m.role}: {m.content}" for m in messages)
        return {"contents": [{"parts": [{"text": transcript}]}]}

    def extract_answer(self, response: Any) -> str:
        parts = dig(response, "candidates", 0, "content", "parts")
        if not isinstance(parts, list):
            raise MalformedProviderResponse("candidates[0].content.parts is not a list")
        texts = [part["text"] for part in parts if isinstance(part, dict) and isinstance(part.get("text"), str)]
        if not texts:
            raise MalformedProviderResponse("response has no text part")
        return "".join(texts)
