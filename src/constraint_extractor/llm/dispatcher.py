"""Builds and issues the provider-specific HTTP request."""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Mapping, Sequence

import requests

from .providers.base import LLMProvider
from .types import MalformedProviderResponse, Message, MissingCredential, ProviderError, TransportError

logger = logging.getLogger(__name__)


def resolve_credential(provider: LLMProvider, environ: Mapping[str, str] | None = None) -> str:
    """Reads the provider's API key, checking aliases after the primary name."""
    env = os.environ if environ is None else environ
    for key in (provider.credential_env, *provider.credential_aliases):
        value = (env.get(key) or "").strip()
        if value:
            return value
    raise MissingCredential(provider.name)


def build_url(provider: LLMProvider, model: str) -> str:
    return provider.endpoint.format(model=model)


def _error_message(res: requests.Response) -> str:
    try:
        data = res.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str) and error["message"]:
            return error["message"]
        if isinstance(error, str) and error:
            return error
        if isinstance(data.get("message"), str) and data["message"]:
            return data["message"]
    return f"request failed with status {res.status_code}"


def send(
    provider: LLMProvider,
    credential: str,
    model: str,
    messages: Sequence[Message],
    *,
    max_tokens: int,
    timeout: float | None = None,
) -> Any:
    """Issues one POST to the provider and returns the decoded JSON body.

    No retries: a failure is raised to the caller immediately.
    """
    url = build_url(provider, model)
    params = {provider.auth_query_param: credential} if provider.auth_query_param else None
    headers = provider.build_headers(credential)
    payload = provider.build_body(model, messages, max_tokens)

    logger.info("Calling %s model=%s endpoint=%s", provider.name, model, url)
    start = time.perf_counter()
    try:
        res = requests.post(url, headers=headers, params=params, json=payload, timeout=timeout)
    except requests.RequestException as exc:
        # requests echoes the URL, which carries the key for query-string auth.
        detail = str(exc).replace(credential, "***") if credential else str(exc)
        raise TransportError(f"{provider.name} request failed: {detail}") from exc

    latency_ms = int((time.perf_counter() - start) * 1000)
    if not res.ok:
        message = _error_message(res)
        logger.warning("%s returned status %s in %sms: %s", provider.name, res.status_code, latency_ms, message)
        raise ProviderError(message, status_code=res.status_code)

    logger.debug("%s answered in %sms", provider.name, latency_ms)
    try:
        return res.json()
    except ValueError as exc:
        raise MalformedProviderResponse(f"{provider.name} returned a non-JSON body") from exc
