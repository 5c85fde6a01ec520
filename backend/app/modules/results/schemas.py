# app/modules/results/schemas.py
from pydantic import BaseModel, ConfigDict, field_validator
from typing import Dict, List, Literal, Optional, Union
from datetime import date, datetime

from app.shared.enums import IntelligenceCategory, ResultSortKey, SortDirection

ALL = "all"


# ── Résultat ───────────────────────────────────────────────

class ScoredResultOut(BaseModel):
    id: str
    name: str
    age: int
    gender: str
    group: str
    date: datetime
    scores: Dict[IntelligenceCategory, int]     # toujours 8 clés
    dominant_category: IntelligenceCategory
    model_config = ConfigDict(from_attributes=True)


# ── Filtres et tri (query string) ──────────────────────────

class ResultFilters(BaseModel):
    """"all" vaut absence de filtre, pour la classe comme pour le type dominant."""
    group: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    name_contains: Optional[str] = None
    dominant_category: Optional[Union[IntelligenceCategory, Literal["all"]]] = None
    sort: ResultSortKey = ResultSortKey.DATE
    direction: SortDirection = SortDirection.DESC

    @field_validator("group", "dominant_category")
    @classmethod
    def all_means_no_filter(cls, v):
        if isinstance(v, str) and v.strip().lower() == ALL:
            return None
        return v


# ── Agrégats (tableau de bord) ─────────────────────────────

class AggregateViewOut(BaseModel):
    per_category_average: Dict[IntelligenceCategory, float]
    dominant_counts: Dict[IntelligenceCategory, int]
    total: int
    most_common_category: Optional[IntelligenceCategory] = None
    average_age: Optional[int] = None
    stored_total: int = 0                       # tous les résultats en base, hors filtres
    model_config = ConfigDict(from_attributes=True)


class GroupsOut(BaseModel):
    groups: List[str]
