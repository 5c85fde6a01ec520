# engine/intelligence/collector.py
"""
Collecte des réponses d'UNE session de test.

Invariants :
- une seule réponse par question (record_answer fait un upsert)
- revenir en arrière permet d'écraser une réponse déjà donnée
- on n'avance pas tant que la question courante n'a pas de réponse

L'état complet est sérialisable (to_state / from_state) pour vivre
dans le session store entre deux requêtes HTTP.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from app.engine.intelligence.scoring import Answer, LIKERT_MIN, LIKERT_MAX
from app.shared.enums import IntelligenceCategory, parse_category
from app.shared.exceptions import InvalidAnswerError


class UnknownQuestionError(KeyError):
    pass


@dataclass(frozen=True)
class QuestionItem:
    id:       str
    text:     str
    category: IntelligenceCategory

    @classmethod
    def from_question(cls, question) -> "QuestionItem":
        return cls(id=str(question.id), text=question.text, category=parse_category(question.category))


class ResponseCollector:

    def __init__(self, questions: Sequence, position: int = 0, answers: Optional[Dict[str, int]] = None):
        self._questions: List[QuestionItem] = [
            q if isinstance(q, QuestionItem) else QuestionItem.from_question(q)
            for q in questions
        ]
        if not self._questions:
            raise ValueError("Une session nécessite au moins une question.")
        self._by_id = {q.id: q for q in self._questions}
        self._position = min(max(position, 0), len(self._questions) - 1)
        self._answers: Dict[str, int] = dict(answers or {})

    # ── Navigation ────────────────────────────────────────────

    @property
    def position(self) -> int:
        return self._position

    @property
    def total(self) -> int:
        return len(self._questions)

    @property
    def questions(self) -> List[QuestionItem]:
        return list(self._questions)

    def current_question(self) -> QuestionItem:
        return self._questions[self._position]

    def advance(self) -> bool:
        """Passe à la question suivante. False si dernière question ou question courante sans réponse."""
        if self.current_question().id not in self._answers:
            return False
        if self._position >= len(self._questions) - 1:
            return False
        self._position += 1
        return True

    def go_back(self) -> bool:
        if self._position == 0:
            return False
        self._position -= 1
        return True

    # ── Réponses ──────────────────────────────────────────────

    def record_answer(self, question_id: str, value: int) -> Answer:
        question = self._by_id.get(question_id)
        if question is None:
            raise UnknownQuestionError(question_id)
        if isinstance(value, bool) or not isinstance(value, int) or not LIKERT_MIN <= value <= LIKERT_MAX:
            raise InvalidAnswerError(f"Valeur hors échelle [{LIKERT_MIN},{LIKERT_MAX}] : {value!r}")
        self._answers[question_id] = value
        return Answer(question_id=question_id, value=value, category=question.category)

    def answer_for(self, question_id: str) -> Optional[int]:
        return self._answers.get(question_id)

    def answers(self) -> List[Answer]:
        """Réponses dans l'ordre de présentation des questions."""
        return [
            Answer(question_id=q.id, value=self._answers[q.id], category=q.category)
            for q in self._questions
            if q.id in self._answers
        ]

    def answered_count(self) -> int:
        return len(self._answers)

    def is_complete(self) -> bool:
        return len(self._answers) == len(self._questions)

    def progress(self) -> float:
        return round(self.answered_count() / self.total * 100, 1)

    # ── Sérialisation ─────────────────────────────────────────

    def to_state(self) -> Dict[str, Any]:
        return {
            "questions": [
                {"id": q.id, "text": q.text, "category": q.category.value}
                for q in self._questions
            ],
            "position": self._position,
            "answers": dict(self._answers),
        }

    @classmethod
    def from_state(cls, state: Dict[str, Any]) -> "ResponseCollector":
        questions = [
            QuestionItem(id=q["id"], text=q["text"], category=parse_category(q["category"]))
            for q in state["questions"]
        ]
        return cls(questions, position=state.get("position", 0), answers=state.get("answers"))
