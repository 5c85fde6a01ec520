# modules/questions/service.py
"""
Gestion de la banque de questions (admin) + lecture publique.

Règles :
- id, texte et catégorie obligatoires ; catégorie parmi les 8
- id unique : doublon à l'ajout → IdConflictError
- import en masse : les doublons sont rejetés un par un, le reste est importé
- lectures : repli sur la banque embarquée si la base est indisponible ou vide
"""
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.questions.fallback import FallbackQuestionRepository
from app.modules.questions.repository import QuestionRepository
from app.modules.questions.schemas import QuestionIn, QuestionPatchIn
from app.shared.enums import IntelligenceCategory
from app.shared.exceptions import IdConflictError, QuestionImportError, QuestionNotFoundError

logger = logging.getLogger(__name__)

repo = FallbackQuestionRepository(QuestionRepository())


class QuestionService:

    # ── Lecture ───────────────────────────────────────────────

    async def list_questions(
        self,
        db: AsyncSession,
        category: Optional[IntelligenceCategory] = None,
        search: Optional[str] = None,
    ) -> Tuple[List, bool]:
        return await repo.list_with_source(db, category=category, search=search)

    async def get_question(self, db: AsyncSession, question_id: str):
        question = await repo.get(db, question_id)
        if not question:
            raise QuestionNotFoundError(question_id)
        return question

    # ── Écriture ──────────────────────────────────────────────

    async def add_question(self, db: AsyncSession, payload: QuestionIn):
        if await repo.existing_ids(db, [payload.id]):
            raise IdConflictError([payload.id])
        return await repo.add(db, self._row(payload))

    async def update_question(self, db: AsyncSession, question_id: str, patch: QuestionPatchIn):
        """Applique le patch puis revalide l'enregistrement complet."""
        current = await repo.inner.get(db, question_id)
        if not current:
            raise QuestionNotFoundError(question_id)

        merged = QuestionIn(
            id=question_id,
            text=patch.text if patch.text is not None else current.text,
            category=patch.category if patch.category is not None else current.category,
        )
        updated = await repo.update(db, question_id, self._row(merged))
        if not updated:
            raise QuestionNotFoundError(question_id)
        return updated

    async def remove_question(self, db: AsyncSession, question_id: str) -> None:
        if not await repo.remove(db, question_id):
            raise QuestionNotFoundError(question_id)

    # ── Import ────────────────────────────────────────────────

    async def bulk_import(self, db: AsyncSession, raw_rows: List[Any]) -> Dict:
        """
        Pipeline :
        1. Validation ligne par ligne (les lignes invalides sont écartées)
        2. Doublons internes au lot → conflit (la première occurrence gagne)
        3. Doublons avec la banque existante → conflit
        4. Insertion du reste en une transaction (conflit tardif → ligne par ligne)
        """
        valid: List[QuestionIn] = []
        invalid: List[Dict] = []
        conflicts: List[str] = []
        seen = set()

        for index, raw in enumerate(raw_rows):
            try:
                question = QuestionIn.model_validate(raw)
            except ValidationError as e:
                raw_id = raw.get("id") if isinstance(raw, dict) else None
                invalid.append({"index": index, "id": raw_id, "reason": self._first_error(e)})
                continue

            if question.id in seen:
                conflicts.append(question.id)
                continue
            seen.add(question.id)
            valid.append(question)

        existing = await repo.existing_ids(db, [q.id for q in valid])
        to_insert = []
        for question in valid:
            if question.id in existing:
                conflicts.append(question.id)
            else:
                to_insert.append(self._row(question))

        try:
            imported = await repo.add_many(db, to_insert)
        except IdConflictError as e:
            # id pris entre le contrôle et l'insertion
            imported = e.inserted
            conflicts.extend(e.ids)
        if conflicts:
            logger.info("Import questions : %d importée(s), %d conflit(s)", imported, len(conflicts))

        return {"imported": imported, "conflicts": conflicts, "invalid": invalid}

    async def import_from_file(self, db: AsyncSession, content: bytes) -> Dict:
        try:
            data = json.loads(content.decode("utf-8-sig"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            raise QuestionImportError(
                "Fichier illisible. Fournir un tableau JSON de questions {id, text, category}."
            ) from None
        if not isinstance(data, list):
            raise QuestionImportError("Le fichier doit contenir un tableau JSON de questions.")
        return await self.bulk_import(db, data)

    # ── Internals ─────────────────────────────────────────────

    def _row(self, question: QuestionIn) -> Dict[str, str]:
        return {"id": question.id, "text": question.text, "category": question.category.value}

    def _first_error(self, error: ValidationError) -> str:
        first = error.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        return f"{location}: {first.get('msg')}" if location else first.get("msg", "invalide")
