"""Configuration loading and defaults."""

from __future__ import annotations

import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict

import yaml

SETTINGS_ENV = "CONSTRAINT_EXTRACTOR_SETTINGS"
DEFAULT_SETTINGS_PATH = "config/settings.yaml"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "llm": {
        "max_tokens": 2000,
        # None leaves the request open until the transport gives up.
        "timeout_seconds": None,
    },
    "providers": {
        "xAI (Grok)": {"model": None},
        "OpenAI": {"model": None},
        "Anthropic (Claude)": {"model": None},
        "Google (Gemini)": {"model": None},
        "Cohere": {"model": None},
    },
    "analysis": {
        "default_mode": "full",
    },
    "logging": {
        "level": "INFO",
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(settings_path: str | None = None) -> Dict[str, Any]:
    """Loads settings.yaml and merges it onto defaults.

    Without an explicit path, ``$CONSTRAINT_EXTRACTOR_SETTINGS`` is used,
    then ``config/settings.yaml``. A missing file yields the defaults.
    """
    path = settings_path or os.getenv(SETTINGS_ENV) or DEFAULT_SETTINGS_PATH
    merged = deepcopy(DEFAULT_SETTINGS)
    config_path = Path(path)
    if config_path.exists():
        with config_path.open("r", encoding="utf-8") as f:
            user_cfg = yaml.safe_load(f) or {}
        if not isinstance(user_cfg, dict):
            raise ValueError(f"Settings file {config_path} must contain a mapping")
        merged = _deep_merge(merged, user_cfg)
    return merged


def model_for(config: Dict[str, Any], provider_name: str, default_model: str) -> str:
    override = config.get("providers", {}).get(provider_name, {}) or {}
    return str(override.get("model") or default_model)


def llm_options(config: Dict[str, Any]) -> tuple[int, float | None]:
    llm_cfg = config.get("llm", {})
    max_tokens = int(llm_cfg.get("max_tokens", 2000))
    timeout = llm_cfg.get("timeout_seconds")
    return max_tokens, float(timeout) if timeout is not None else None
