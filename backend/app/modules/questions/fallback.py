# modules/questions/fallback.py
"""
Repli sur la banque embarquée : lectures uniquement.

Enveloppe un QuestionRepositoryPort :
- base injoignable (StoreUnavailableError) → questions embarquées
- base vide                                → questions embarquées
- écritures                                → délégation directe, l'erreur remonte

list_with_source() renvoie (questions, fallback) : l'appelant sait
s'il affiche des données de repli.
"""
import logging
from typing import List, Mapping, Optional, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.content.default_questions import default_question_models
from app.shared.enums import IntelligenceCategory
from app.shared.exceptions import StoreUnavailableError
from app.shared.ports import QuestionRepositoryPort

logger = logging.getLogger(__name__)


class FallbackQuestionRepository:

    def __init__(self, inner: QuestionRepositoryPort, defaults=default_question_models):
        self.inner = inner
        self._defaults = defaults

    # ── Lectures ──────────────────────────────────────────────

    async def list_with_source(
        self,
        db: AsyncSession,
        category: Optional[IntelligenceCategory] = None,
        search: Optional[str] = None,
    ) -> Tuple[List, bool]:
        try:
            questions = await self.inner.list(db, category=category, search=search)
        except StoreUnavailableError as e:
            logger.warning("Banque de questions injoignable, repli sur les questions embarquées : %s", e)
            return self._filtered_defaults(category, search), True

        if not questions and not search and category is None:
            logger.warning("Banque de questions vide, repli sur les questions embarquées")
            return self._filtered_defaults(category, search), True
        return questions, False

    async def list(
        self,
        db: AsyncSession,
        category: Optional[IntelligenceCategory] = None,
        search: Optional[str] = None,
    ) -> List:
        questions, _ = await self.list_with_source(db, category=category, search=search)
        return questions

    async def get(self, db: AsyncSession, question_id: str):
        try:
            return await self.inner.get(db, question_id)
        except StoreUnavailableError:
            return next((q for q in self._defaults() if q.id == question_id), None)

    def _filtered_defaults(self, category, search) -> List:
        questions = self._defaults()
        if category is not None:
            questions = [q for q in questions if q.type == category.value]
        if search and search.strip():
            term = search.strip().lower()
            questions = [q for q in questions if term in q.text.lower() or term in q.id.lower()]
        return questions

    # ── Écritures (pas de repli) ──────────────────────────────

    async def existing_ids(self, db: AsyncSession, ids: Sequence[str]) -> set:
        return await self.inner.existing_ids(db, ids)

    async def add(self, db: AsyncSession, data: Mapping[str, str]):
        return await self.inner.add(db, data)

    async def update(self, db: AsyncSession, question_id: str, data: Mapping[str, str]):
        return await self.inner.update(db, question_id, data)

    async def remove(self, db: AsyncSession, question_id: str) -> bool:
        return await self.inner.remove(db, question_id)

    async def add_many(self, db: AsyncSession, rows: Sequence[Mapping[str, str]]) -> int:
        return await self.inner.add_many(db, rows)
