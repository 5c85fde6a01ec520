# modules/quiz/service.py
"""
Orchestration d'une session de test.

Pipeline :
1. Validation du profil (carte champ → message, pas d'exception)
2. Composition équilibrée des questions (base → repli embarqué)
3. Collecte des réponses (engine/intelligence/collector.py)
4. Calcul pur (engine/intelligence/scoring.py)
5. Sauvegarde : UNE tentative ; un échec ne perd pas le résultat,
   il reste dans la session avec persisted=False (POST /save pour réessayer)

Une fois soumise, la session est figée : réponses et navigation sont
refusées (SessionSubmittedError) et le résultat n'est jamais recalculé.
"""
import logging
import random
from typing import Any, Dict, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.content.default_questions import default_question_models
from app.core.config import settings
from app.engine.intelligence.collector import ResponseCollector
from app.engine.intelligence.result import build_result
from app.engine.intelligence.scoring import score_answers
from app.engine.intelligence.selection import missing_categories, select_balanced_questions
from app.infra.session_store import QuizSession, SessionStore
from app.modules.questions.fallback import FallbackQuestionRepository
from app.modules.questions.repository import QuestionRepository
from app.modules.results.repository import ResultRepository
from app.shared.exceptions import SessionIncompleteError, SessionSubmittedError, StoreUnavailableError
from app.shared.ports import ResultRepositoryPort

logger = logging.getLogger(__name__)

question_repo = FallbackQuestionRepository(QuestionRepository())
result_repo: ResultRepositoryPort = ResultRepository()

# --- PROFIL ---
AGE_MIN = 5
AGE_MAX = 100


def _filled(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def validate_profile(draft: Mapping[str, Any]) -> Dict[str, str]:
    """Retourne {champ: message}. Carte vide = profil valide."""
    errors: Dict[str, str] = {}

    if not _filled(draft.get("name")):
        errors["name"] = "Le nom est obligatoire."

    age = _as_int(draft.get("age"))
    if age is None or age <= 0:
        errors["age"] = "L'âge doit être un nombre valide."
    elif not AGE_MIN <= age <= AGE_MAX:
        errors["age"] = f"L'âge doit être compris entre {AGE_MIN} et {AGE_MAX} ans."

    if not _filled(draft.get("gender")):
        errors["gender"] = "Le genre doit être renseigné."

    if not _filled(draft.get("group")):
        errors["group"] = "La classe ou la profession est obligatoire."

    return errors


class QuizService:

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng

    # ─────────────────────────────────────────────
    # SESSION
    # ─────────────────────────────────────────────

    async def start_session(self, db: AsyncSession, store: SessionStore, profile: Mapping[str, Any]) -> QuizSession:
        """Le profil doit avoir été validé par validate_profile()."""
        questions, fallback = await question_repo.list_with_source(db)

        missing = missing_categories(questions)
        if missing:
            logger.warning(
                "Banque incomplète (%s sans question), repli sur les questions embarquées",
                ", ".join(c.value for c in missing),
            )
            questions, fallback = default_question_models(), True

        selected = select_balanced_questions(
            questions, per_category=settings.QUESTIONS_PER_CATEGORY, rng=self._rng,
        )
        normalized = {
            "name": profile["name"].strip(),
            "age": _as_int(profile["age"]),
            "gender": profile["gender"].strip(),
            "group": profile["group"].strip(),
        }
        return store.create(normalized, ResponseCollector(selected), fallback=fallback)

    def get_session(self, store: SessionStore, session_id: str) -> QuizSession:
        return store.get(session_id)

    def end_session(self, store: SessionStore, session_id: str) -> bool:
        return store.delete(session_id)

    def session_state(self, session: QuizSession) -> Dict[str, Any]:
        collector = session.collector
        current = collector.current_question()
        return {
            "session_id": session.id,
            "position": collector.position,
            "total": collector.total,
            "answered": collector.answered_count(),
            "progress": collector.progress(),
            "fallback": session.fallback,
            "is_complete": collector.is_complete(),
            "current_question": current,
            "selected_value": collector.answer_for(current.id),
        }

    # ─────────────────────────────────────────────
    # RÉPONSES & NAVIGATION
    # ─────────────────────────────────────────────

    def answer(self, store: SessionStore, session_id: str, question_id: str, value: int) -> QuizSession:
        """Lève UnknownQuestionError / InvalidAnswerError (valeur hors 1-5) / SessionSubmittedError."""
        session = self._open_session(store, session_id)
        collector = session.collector
        collector.record_answer(question_id, value)
        session.commit_collector(collector)
        return session

    def next_question(self, store: SessionStore, session_id: str):
        session = self._open_session(store, session_id)
        collector = session.collector
        moved = collector.advance()
        session.commit_collector(collector)
        return session, moved

    def previous_question(self, store: SessionStore, session_id: str):
        session = self._open_session(store, session_id)
        collector = session.collector
        moved = collector.go_back()
        session.commit_collector(collector)
        return session, moved

    # ─────────────────────────────────────────────
    # SOUMISSION
    # ─────────────────────────────────────────────

    async def submit(self, db: AsyncSession, store: SessionStore, session_id: str) -> QuizSession:
        """Re-soumission : le résultat existant est renvoyé tel quel, sans nouvelle écriture."""
        session = store.get(session_id)
        if session.submitted:
            return session

        collector = session.collector
        if not collector.is_complete():
            raise SessionIncompleteError(
                f"{collector.total - collector.answered_count()} question(s) sans réponse."
            )

        session.result = build_result(session.profile, score_answers(collector.answers()))
        session.persisted = False

        await self._try_save(db, session)
        return session

    async def save(self, db: AsyncSession, store: SessionStore, session_id: str) -> QuizSession:
        """Nouvelle tentative de sauvegarde. Sans effet si déjà persisté."""
        session = self._with_result(store, session_id)
        if not session.persisted:
            await self._try_save(db, session)
        return session

    def get_result(self, store: SessionStore, session_id: str) -> QuizSession:
        return self._with_result(store, session_id)

    # ── Internals ─────────────────────────────────────────────

    def _open_session(self, store: SessionStore, session_id: str) -> QuizSession:
        session = store.get(session_id)
        if session.submitted:
            raise SessionSubmittedError("Test déjà soumis : les réponses ne sont plus modifiables.")
        return session

    def _with_result(self, store: SessionStore, session_id: str) -> QuizSession:
        session = store.get(session_id)
        if session.result is None:
            raise SessionIncompleteError("Test non soumis : aucun résultat disponible.")
        return session

    async def _try_save(self, db: AsyncSession, session: QuizSession) -> None:
        try:
            await result_repo.save(db, session.result)
        except StoreUnavailableError as e:
            logger.warning("Résultat %s non sauvegardé, conservé en session : %s", session.result.id, e)
            session.persisted = False
            return
        session.persisted = True
