"""HTTP entry point in the serverless-function shape.

Expected request body format:
{
    "providerName": "OpenAI",
    "inputText": "Books must have a title. Books must have a title and author.",
    "mode": "full"            (optional, "full" or "simple")
}
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any, Dict, Mapping

import yaml

from .analysis import parse_mode, run_analysis
from .config import load_settings
from .llm.types import ExtractorError, InvalidRequest, MissingCredential
from .models import AnalysisResult
from .prompts import AnalysisMode

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


def create_response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": dict(CORS_HEADERS),
        "body": json.dumps(body),
    }


def create_error_response(status_code: int, message: str, mode: AnalysisMode | None = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": message}
    if mode is AnalysisMode.FULL:
        body.update(AnalysisResult.empty("").to_dict())
    return create_response(status_code, body)


def parse_body(event: Mapping[str, Any]) -> Dict[str, Any]:
    raw = event.get("body") or ""
    if not isinstance(raw, str):
        raise InvalidRequest("Request body must be a JSON string")
    try:
        if event.get("isBase64Encoded", False):
            raw = base64.b64decode(raw).decode("utf-8")
        data = json.loads(raw)
    except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
        raise InvalidRequest("Request body must be valid JSON") from exc
    if not isinstance(data, dict):
        raise InvalidRequest("Request body must be a JSON object")
    return data


def handle_request(
    event: Mapping[str, Any],
    *,
    config: Dict[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Dict[str, Any]:
    if str(event.get("httpMethod", "")).upper() != "POST":
        return create_error_response(405, "Method not allowed")

    if config is None:
        try:
            config = load_settings()
        except (OSError, ValueError, yaml.YAMLError):
            logger.exception("Failed to load settings")
            return create_error_response(500, "Internal server error")

    try:
        request_data = parse_body(event)
        mode = parse_mode(request_data.get("mode") or config.get("analysis", {}).get("default_mode", "full"))
    except InvalidRequest as exc:
        return create_error_response(400, str(exc))

    provider_name = request_data.get("providerName")
    input_text = request_data.get("inputText")
    try:
        result = run_analysis(provider_name, input_text, mode=mode, config=config, environ=environ)
    except InvalidRequest as exc:
        return create_error_response(400, str(exc))
    except MissingCredential as exc:
        logger.error("%s", exc)
        return create_error_response(500, f"{provider_name} API key not configured")
    except ExtractorError as exc:
        logger.error("Analysis via %s failed: %s", provider_name, exc)
        return create_error_response(500, str(exc) or "Internal server error", mode)
    except Exception as exc:
        logger.exception("Unhandled error while analyzing via %s", provider_name)
        return create_error_response(500, str(exc) or "Internal server error", mode)

    return create_response(200, result)


def handler(event: Mapping[str, Any], context: Any = None) -> Dict[str, Any]:
    return handle_request(event)
