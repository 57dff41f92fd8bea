"""Command-line interface: list providers or run one analysis."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from .analysis import run_analysis
from .config import load_settings
from .llm.dispatcher import resolve_credential
from .llm.registry import PROVIDERS
from .llm.types import ExtractorError, MissingCredential
from .prompts import AnalysisMode


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extract constraints, redundancies and contradictions from text")
    parser.add_argument("--settings", default=None, help="Path to settings.yaml")

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("providers", help="List providers and whether their API key is set")

    analyze = subparsers.add_parser("analyze", help="Analyze text from a file or stdin")
    analyze.add_argument("--provider", required=True, help="Provider name, e.g. 'OpenAI'")
    analyze.add_argument(
        "--mode",
        choices=[m.value for m in AnalysisMode],
        default=None,
        help="full (default) or simple bullet extraction",
    )
    analyze.add_argument("--input", default="-", help="Text file to analyze ('-' for stdin)")
    return parser


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _list_providers() -> None:
    for name, provider in PROVIDERS.items():
        try:
            resolve_credential(provider)
            status = "configured"
        except MissingCredential:
            status = "missing"
        print(f"- {name}: {provider.credential_env} ({status}) default_model={provider.default_model}")


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args(argv)

    config = load_settings(args.settings)
    logging.basicConfig(
        level=str(config.get("logging", {}).get("level", "INFO")).upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "providers":
        _list_providers()
        return 0

    if args.command != "analyze":
        parser.print_help()
        return 1

    mode = args.mode or config.get("analysis", {}).get("default_mode", "full")
    try:
        result = run_analysis(args.provider, _read_input(args.input), mode=mode, config=config)
    except (ExtractorError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0
