"""Turns an untrusted model answer into a well-formed analysis result.

Every function here is total: malformed input is repaired or dropped item
by item, never raised. Repairs:

- ids missing or empty get a fresh uuid4, other non-string ids are stringified
- ``similarity``/``confidence`` missing or outside [0, 1] become 0.8
- spans missing, negative or reversed become [0, len(original_text))
- a group without any usable constraint, or a contradiction missing a
  side, is dropped
"""

from __future__ import annotations

import json
import logging
import math
import re
import uuid
from typing import Any, List, Optional

from .models import AnalysisResult, Constraint, Contradiction, RedundantGroup, Score, SimpleResult

logger = logging.getLogger(__name__)

DEFAULT_SCORE = 0.8

_BULLET_RE = re.compile(r"^[-*•]\s+(.*)$")
# Marker alone is enough; lines made only of marker characters (rules) are skipped.
_LOOSE_BULLET_RE = re.compile(r"^[-*•]\s*(.*?[^-*•\s].*)$")


def new_id() -> str:
    return str(uuid.uuid4())


def parse_bullets(text: str, require_space: bool = True) -> List[str]:
    """Lines starting with ``-``, ``*`` or ``•``, marker removed.

    With ``require_space`` the marker must be followed by whitespace.
    """
    pattern = _BULLET_RE if require_space else _LOOSE_BULLET_RE
    items: List[str] = []
    for line in (text or "").splitlines():
        match = pattern.match(line.strip())
        if not match:
            continue
        item = match.group(1).strip()
        if item:
            items.append(item)
    return items


def _coerce_id(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return new_id()
    text = value if isinstance(value, str) else str(value)
    return text if text.strip() else new_id()


def _coerce_score(value: Any) -> Score:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_SCORE
    if isinstance(value, float) and math.isnan(value):
        return DEFAULT_SCORE
    if not 0 <= value <= 1:
        return DEFAULT_SCORE
    return value


def _coerce_offset(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and value >= 0:
        return value
    return None


def _coerce_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def reconcile_constraint(raw: Any, original_text: str) -> Optional[Constraint]:
    if isinstance(raw, str):
        raw = {"text": raw}
    if not isinstance(raw, dict):
        return None

    start = _coerce_offset(raw.get("sourceStart"))
    end = _coerce_offset(raw.get("sourceEnd"))
    if start is None:
        start = 0
    if end is None:
        end = len(original_text)
    if start > end:
        start, end = 0, len(original_text)

    category = raw.get("category")
    return Constraint(
        id=_coerce_id(raw.get("id")),
        text=_coerce_text(raw.get("text")),
        source_start=start,
        source_end=end,
        category=category if isinstance(category, str) else None,
    )


def _reconcile_list(raw: Any, reconcile_item, original_text: str) -> list:
    if not isinstance(raw, list):
        return []
    items = [reconcile_item(item, original_text) for item in raw]
    kept = [item for item in items if item is not None]
    if len(kept) != len(items):
        logger.debug("Dropped %d unusable item(s)", len(items) - len(kept))
    return kept


def reconcile_group(raw: Any, original_text: str) -> Optional[RedundantGroup]:
    if not isinstance(raw, dict):
        return None
    constraints = _reconcile_list(raw.get("constraints"), reconcile_constraint, original_text)
    if not constraints:
        return None
    return RedundantGroup(
        id=_coerce_id(raw.get("id")),
        constraints=constraints,
        similarity=_coerce_score(raw.get("similarity")),
    )


def reconcile_contradiction(raw: Any, original_text: str) -> Optional[Contradiction]:
    if not isinstance(raw, dict):
        return None
    first = reconcile_constraint(raw.get("constraint1"), original_text)
    second = reconcile_constraint(raw.get("constraint2"), original_text)
    if first is None or second is None:
        return None
    return Contradiction(
        id=_coerce_id(raw.get("id")),
        constraint1=first,
        constraint2=second,
        explanation=_coerce_text(raw.get("explanation")),
        confidence=_coerce_score(raw.get("confidence")),
    )


def reconcile_document(candidate: Any, original_text: str) -> AnalysisResult:
    """Field-by-field validation of a parsed JSON answer."""
    if not isinstance(candidate, dict):
        logger.warning("Model answer parsed as %s, not an object; using empty result", type(candidate).__name__)
        return AnalysisResult.empty(original_text)

    return AnalysisResult(
        original_text=original_text,
        constraints=_reconcile_list(candidate.get("constraints"), reconcile_constraint, original_text),
        redundant_groups=_reconcile_list(candidate.get("redundantGroups"), reconcile_group, original_text),
        contradictions=_reconcile_list(candidate.get("contradictions"), reconcile_contradiction, original_text),
    )


def reconcile_bullets(text: str, original_text: str) -> AnalysisResult:
    constraints = [
        Constraint(id=new_id(), text=item, source_start=0, source_end=len(original_text))
        for item in parse_bullets(text, require_space=False)
    ]
    return AnalysisResult(original_text=original_text, constraints=constraints)


def reconcile(text: str, original_text: str) -> AnalysisResult:
    """Builds an AnalysisResult from a (fence-stripped) full-mode answer."""
    try:
        candidate = json.loads(text)
    except (TypeError, ValueError, RecursionError):
        logger.warning("Model answer is not valid JSON; falling back to bullet extraction")
        return reconcile_bullets(text, original_text)
    return reconcile_document(candidate, original_text)


def reconcile_simple(text: str) -> SimpleResult:
    return SimpleResult(constraints=parse_bullets(text))
