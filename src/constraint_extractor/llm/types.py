"""Shared LLM data structures and the error taxonomy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Role = Literal["system", "user"]


@dataclass(frozen=True)
class Message:
    role: Role
    content: str


def first_system_content(messages: list[Message]) -> str:
    for message in messages:
        if message.role == "system":
            return message.content
    return ""


class ExtractorError(RuntimeError):
    """Base class for failures surfaced to the caller."""


class InvalidRequest(ExtractorError):
    """The inbound request is unusable (bad method, body, provider or mode)."""


class MissingCredential(ExtractorError):
    """The selected provider has no API key configured."""

    def __init__(self, provider_name: str) -> None:
        super().__init__(f"{provider_name} API key not configured")
        self.provider_name = provider_name


class ProviderError(ExtractorError):
    """Provider answered with a non-success HTTP status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportError(ExtractorError):
    """Network-level failure talking to the provider (DNS, timeout, reset)."""


class MalformedProviderResponse(ExtractorError):
    """Provider response did not have the expected envelope shape."""
