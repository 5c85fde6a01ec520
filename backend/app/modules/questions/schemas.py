# app/modules/questions/schemas.py
from pydantic import BaseModel, ConfigDict, Field, AliasChoices, field_validator
from typing import List, Optional

from app.shared.enums import IntelligenceCategory


# ── Lecture ────────────────────────────────────────────────

class QuestionOut(BaseModel):
    id: str
    text: str
    category: IntelligenceCategory
    model_config = ConfigDict(from_attributes=True)


class QuestionListOut(BaseModel):
    questions: List[QuestionOut]
    total: int
    fallback: bool = False          # True → banque embarquée (base indisponible ou vide)


# ── Écriture ───────────────────────────────────────────────

class QuestionIn(BaseModel):
    """`type` est accepté comme alias de `category` (anciens exports JSON)."""
    id: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)
    category: IntelligenceCategory = Field(
        ..., validation_alias=AliasChoices("category", "type")
    )

    @field_validator("id", "text")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Champ obligatoire.")
        return v.strip()


class QuestionPatchIn(BaseModel):
    text: Optional[str] = Field(None, min_length=1)
    category: Optional[IntelligenceCategory] = Field(
        None, validation_alias=AliasChoices("category", "type")
    )

    @field_validator("text")
    @classmethod
    def not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Le texte ne peut pas être vide.")
        return v.strip() if v is not None else v


# ── Import ─────────────────────────────────────────────────

class ImportRejectOut(BaseModel):
    index: int
    id: Optional[str] = None
    reason: str


class ImportReportOut(BaseModel):
    imported: int
    conflicts: List[str] = []
    invalid: List[ImportRejectOut] = []
