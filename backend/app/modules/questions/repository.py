# modules/questions/repository.py
"""
Accès DB pour la banque de questions.
Toute la logique SQL est ici : les services n'écrivent jamais de queries directes.
"""
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func, or_
from typing import List, Optional, Mapping, Sequence

from app.core.db_errors import store_guard
from app.shared.enums import IntelligenceCategory
from app.shared.exceptions import IdConflictError
from app.shared.models import Question

logger = logging.getLogger(__name__)


class QuestionRepository:

    async def list(
        self,
        db: AsyncSession,
        category: Optional[IntelligenceCategory] = None,
        search: Optional[str] = None,
    ) -> List[Question]:
        query = select(Question)
        if category is not None:
            query = query.where(Question.type == category.value)
        if search and search.strip():
            pattern = f"%{search.strip().lower()}%"
            query = query.where(or_(
                func.lower(Question.text).like(pattern),
                func.lower(Question.id).like(pattern),
            ))
        query = query.order_by(Question.type, Question.id)

        async with store_guard(db, "liste des questions"):
            r = await db.execute(query)
            return list(r.scalars().all())

    async def get(self, db: AsyncSession, question_id: str) -> Optional[Question]:
        async with store_guard(db, "lecture question"):
            r = await db.execute(select(Question).where(Question.id == question_id))
            return r.scalar_one_or_none()

    async def existing_ids(self, db: AsyncSession, ids: Sequence[str]) -> set:
        if not ids:
            return set()
        async with store_guard(db, "contrôle des identifiants"):
            r = await db.execute(select(Question.id).where(Question.id.in_(list(ids))))
            return set(r.scalars().all())

    async def add(self, db: AsyncSession, data: Mapping[str, str]) -> Question:
        """Lève IdConflictError si l'id est déjà pris (contrainte d'unicité en base)."""
        db_obj = Question(id=data["id"], text=data["text"], type=data["category"])
        try:
            async with store_guard(db, "ajout question"):
                db.add(db_obj)
                await db.commit()
                await db.refresh(db_obj)
        except IntegrityError:
            await db.rollback()
            raise IdConflictError([data["id"]]) from None
        return db_obj

    async def update(
        self, db: AsyncSession, question_id: str, data: Mapping[str, str]
    ) -> Optional[Question]:
        """Remplace l'enregistrement complet (texte + catégorie). None si absent."""
        async with store_guard(db, "mise à jour question"):
            question = await self.get(db, question_id)
            if not question:
                return None
            question.text = data["text"]
            question.type = data["category"]
            await db.commit()
            await db.refresh(question)
            return question

    async def remove(self, db: AsyncSession, question_id: str) -> bool:
        async with store_guard(db, "suppression question"):
            r = await db.execute(delete(Question).where(Question.id == question_id))
            await db.commit()
            return (r.rowcount or 0) > 0

    async def add_many(self, db: AsyncSession, rows: Sequence[Mapping[str, str]]) -> int:
        """
        Insère le lot en une transaction.
        Conflit d'unicité sur le lot : rollback puis insertion ligne par ligne ;
        les lignes refusées remontent dans IdConflictError(ids, inserted=n).
        """
        if not rows:
            return 0
        try:
            async with store_guard(db, "import questions"):
                db.add_all([
                    Question(id=row["id"], text=row["text"], type=row["category"])
                    for row in rows
                ])
                await db.commit()
            return len(rows)
        except IntegrityError:
            await db.rollback()

        logger.warning("Import questions : identifiant déjà pris dans le lot, insertion ligne par ligne")
        inserted, conflicts = 0, []
        for row in rows:
            try:
                await self.add(db, row)
            except IdConflictError:
                conflicts.append(row["id"])
            else:
                inserted += 1
        if conflicts:
            raise IdConflictError(conflicts, inserted=inserted)
        return inserted
