"""LLM provider interface."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Protocol, Sequence

from ..types import MalformedProviderResponse, Message


class LLMProvider(Protocol):
    name: str
    endpoint: str
    default_model: str
    credential_env: str
    credential_aliases: tuple[str, ...]
    auth_query_param: str | None

    def build_headers(self, credential: str) -> Dict[str, str]:
        ...

    def build_body(self, model: str, messages: Sequence[Message], max_tokens: int) -> Mapping[str, Any]:
        ...

    def extract_answer(self, response: Any) -> str:
        ...


def dig(data: Any, *path: str | int) -> Any:
    """Walks ``path`` through nested dicts/lists, raising on any missing step.

    Providers return error-shaped envelopes with the same status code, so
    no step may be assumed to exist.
    """
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                raise MalformedProviderResponse(f"response has no item [{step}]")
            current = current[step]
        else:
            if not isinstance(current, dict) or step not in current:
                raise MalformedProviderResponse(f"response has no field '{step}'")
            current = current[step]
    return current


def require_text(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise MalformedProviderResponse(f"{where} is not text")
    return value
