"""Drives one request through prompt -> provider -> normalizer -> reconciler."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from .config import llm_options, model_for
from .llm import dispatcher
from .llm.registry import lookup
from .llm.types import InvalidRequest
from .normalizer import extract, strip_code_fence
from .prompts import AnalysisMode, build_messages
from .reconciler import reconcile, reconcile_simple

logger = logging.getLogger(__name__)


def parse_mode(value: Any) -> AnalysisMode:
    try:
        return AnalysisMode(value)
    except ValueError as exc:
        raise InvalidRequest(f"Invalid mode: {value}") from exc


def run_analysis(
    provider_name: str,
    input_text: str,
    *,
    mode: AnalysisMode | str = AnalysisMode.FULL,
    config: Dict[str, Any],
    environ: Mapping[str, str] | None = None,
) -> Dict[str, Any]:
    """Returns the wire dict for ``mode``.

    Raises InvalidRequest, MissingCredential, ProviderError, TransportError
    or MalformedProviderResponse. A badly formatted model answer is not an
    error; it is reconciled.
    """
    mode = parse_mode(mode)
    provider = lookup(provider_name)
    if provider is None:
        raise InvalidRequest("Invalid provider")

    credential = dispatcher.resolve_credential(provider, environ)
    if not isinstance(input_text, str):
        raise InvalidRequest("inputText must be a string")
    model = model_for(config, provider.name, provider.default_model)
    max_tokens, timeout = llm_options(config)

    messages = build_messages(mode, input_text)
    raw = dispatcher.send(provider, credential, model, messages, max_tokens=max_tokens, timeout=timeout)
    answer = extract(provider, raw)
    logger.debug("%s answered %d chars in %s mode", provider.name, len(answer), mode.value)

    if mode is AnalysisMode.SIMPLE:
        return reconcile_simple(answer).to_dict()

    result = reconcile(strip_code_fence(answer), input_text)
    logger.info(
        "Analysis via %s: %d constraint(s), %d redundant group(s), %d contradiction(s)",
        provider.name,
        len(result.constraints),
        len(result.redundant_groups),
        len(result.contradictions),
    )
    return result.to_dict()
