"""Prompt builders for the two analysis modes."""

from __future__ import annotations

import json
from enum import Enum
from typing import List

from .llm.types import Message


class AnalysisMode(str, Enum):
    SIMPLE = "simple"
    FULL = "full"


SIMPLE_SYSTEM_PROMPT = (
    "You are a helpful assistant that extracts specific constraints from a given paragraph of text. "
    "Respond only with a bulleted list of the constraints, nothing else. "
    "Correct any spelling errors in the extraction."
)

FULL_SYSTEM_PROMPT = (
    "You are a helpful assistant that analyzes text for constraints, redundancies, and contradictions. "
    "Always respond with valid JSON only."
)

FULL_RULES = (
    "1. Extract all constraints/requirements/rules from the text",
    "2. Identify groups of constraints that say essentially the same thing (redundant)",
    "3. Find constraints that directly contradict each other",
    "4. Provide source positions (character indices) for highlighting in original text",
    "5. Include confidence scores for contradictions (0-1)",
    "6. Include similarity scores for redundant groups (0-1)",
    "7. Generate unique IDs for all objects",
    "8. Return ONLY valid JSON, no additional text or formatting",
)


def build_simple_prompt(input_text: str) -> str:
    return f"Extract the specific constraints from this paragraph as a bulleted list: {input_text}"


def build_full_prompt(input_text: str) -> str:
    # json.dumps keeps quotes and newlines in the input from breaking the template.
    echoed = json.dumps(input_text, ensure_ascii=False)
    return (
        "Analyze the following text and provide a comprehensive constraint analysis.\n\n"
        f"Text: {echoed}\n\n"
        "Please return ONLY a valid JSON response with this exact structure:\n"
        "{\n"
        '  "constraints": [\n'
        "    {\n"
        '      "id": "unique-id",\n'
        '      "text": "constraint text",\n'
        '      "sourceStart": 0,\n'
        '      "sourceEnd": 10\n'
        "    }\n"
        "  ],\n"
        '  "redundantGroups": [\n'
        "    {\n"
        '      "id": "group-id",\n'
        '      "constraints": [constraint objects from above],\n'
        '      "similarity": 0.85\n'
        "    }\n"
        "  ],\n"
        '  "contradictions": [\n'
        "    {\n"
        '      "id": "contradiction-id",\n'
        '      "constraint1": constraint object,\n'
        '      "constraint2": constraint object,\n'
        '      "explanation": "why they contradict",\n'
        '      "confidence": 0.9\n'
        "    }\n"
        "  ],\n"
        f'  "originalText": {echoed}\n'
        "}\n\n"
        "Rules:\n" + "\n".join(FULL_RULES)
    )


def build_messages(mode: AnalysisMode | str, input_text: str) -> List[Message]:
    """Returns the system + user messages for ``mode``.

    Raises ValueError for an unknown mode.
    """
    mode = AnalysisMode(mode)
    if mode is AnalysisMode.SIMPLE:
        return [
            Message(role="system", content=SIMPLE_SYSTEM_PROMPT),
            Message(role="user", content=build_simple_prompt(input_text)),
        ]
    return [
        Message(role="system", content=FULL_SYSTEM_PROMPT),
        Message(role="user", content=build_full_prompt(input_text)),
    ]
