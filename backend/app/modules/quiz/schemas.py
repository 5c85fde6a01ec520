# app/modules/quiz/schemas.py
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Optional

from app.shared.enums import IntelligenceCategory
from app.modules.results.schemas import ScoredResultOut


# ── Profil du répondant ────────────────────────────────────

class ProfileIn(BaseModel):
    """Brouillon de profil : la validation métier est faite par validate_profile()."""
    name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    group: Optional[str] = Field(None, validation_alias=AliasChoices("group", "student_class"))


# ── Session ────────────────────────────────────────────────

class QuizQuestionOut(BaseModel):
    id: str
    text: str
    category: IntelligenceCategory
    model_config = ConfigDict(from_attributes=True)


class SessionStateOut(BaseModel):
    session_id: str
    position: int                   # index 0-based de la question courante
    total: int
    answered: int
    progress: float                 # pourcentage, 1 décimale
    fallback: bool                  # questions embarquées (base indisponible)
    is_complete: bool
    current_question: QuizQuestionOut
    selected_value: Optional[int] = None


class MoveOut(BaseModel):
    moved: bool
    session: SessionStateOut


# ── Réponses ───────────────────────────────────────────────

class AnswerIn(BaseModel):
    value: int                      # Likert 1-5, contrôlé par le collector


# ── Résultat ───────────────────────────────────────────────

class SubmitOut(BaseModel):
    result: ScoredResultOut
    persisted: bool
