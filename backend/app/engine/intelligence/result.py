# engine/intelligence/result.py
"""
ScoredResult : sortie du test, entité immuable.

Le format stocké (table test_results) ne diffère que par le nommage :
    group              ↔ student_class
    scores             ↔ results
    dominant_category  ↔ dominant_type
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping
import uuid

from app.engine.intelligence.scoring import ScoreProfile
from app.shared.enums import IntelligenceCategory, CANONICAL_ORDER, parse_category


@dataclass(frozen=True)
class ScoredResult:
    name:              str
    age:               int
    gender:            str
    group:             str
    scores:            Dict[IntelligenceCategory, int]
    dominant_category: IntelligenceCategory
    date:              datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id:                str = field(default_factory=lambda: str(uuid.uuid4()))


def build_result(profile: Mapping[str, Any], score: ScoreProfile) -> ScoredResult:
    """Assemble le profil du répondant et le profil calculé."""
    return ScoredResult(
        name=profile["name"].strip(),
        age=int(profile["age"]),
        gender=profile["gender"].strip(),
        group=profile["group"].strip(),
        scores=dict(score.scores),
        dominant_category=score.dominant_category,
    )


def to_store_row(result: ScoredResult) -> Dict[str, Any]:
    return {
        "id":            result.id,
        "name":          result.name,
        "age":           result.age,
        "gender":        result.gender,
        "student_class": result.group,
        "date":          result.date,
        "results":       {c.value: int(result.scores.get(c, 0)) for c in CANONICAL_ORDER},
        "dominant_type": result.dominant_category.value,
    }


def from_store_row(row) -> ScoredResult:
    """Accepte un TestResult ORM ou un dict de même forme."""
    get = row.get if isinstance(row, Mapping) else lambda key: getattr(row, key)
    raw_scores = get("results") or {}
    date = get("date")
    if isinstance(date, str):
        date = datetime.fromisoformat(date.replace("Z", "+00:00"))

    return ScoredResult(
        id=str(get("id")),
        name=get("name"),
        age=int(get("age")),
        gender=get("gender"),
        group=get("student_class"),
        date=date,
        scores={c: int(raw_scores.get(c.value, 0)) for c in CANONICAL_ORDER},
        dominant_category=parse_category(get("dominant_type")),
    )
