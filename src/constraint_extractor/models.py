"""Analysis result types and their wire (camelCase JSON) shape."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

Score = Union[int, float]


@dataclass
class Constraint:
    id: str
    text: str
    source_start: int
    source_end: int
    category: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "sourceStart": self.source_start,
            "sourceEnd": self.source_end,
        }
        if self.category is not None:
            data["category"] = self.category
        return data


@dataclass
class RedundantGroup:
    id: str
    constraints: List[Constraint]
    similarity: Score

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "constraints": [c.to_dict() for c in self.constraints],
            "similarity": self.similarity,
        }


@dataclass
class Contradiction:
    id: str
    constraint1: Constraint
    constraint2: Constraint
    explanation: str
    confidence: Score

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "constraint1": self.constraint1.to_dict(),
            "constraint2": self.constraint2.to_dict(),
            "explanation": self.explanation,
            "confidence": self.confidence,
        }


@dataclass
class AnalysisResult:
    original_text: str
    constraints: List[Constraint] = field(default_factory=list)
    redundant_groups: List[RedundantGroup] = field(default_factory=list)
    contradictions: List[Contradiction] = field(default_factory=list)

    @classmethod
    def empty(cls, original_text: str = "") -> "AnalysisResult":
        return cls(original_text=original_text)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "constraints": [c.to_dict() for c in self.constraints],
            "redundantGroups": [g.to_dict() for g in self.redundant_groups],
            "contradictions": [c.to_dict() for c in self.contradictions],
            "originalText": self.original_text,
        }


@dataclass
class SimpleResult:
    """Bullet-list answer of the simple extraction mode."""

    constraints: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"constraints": [{"text": text} for text in self.constraints]}
