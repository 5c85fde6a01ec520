# modules/results/repository.py
"""
Accès DB pour les résultats de test.
Toute la logique SQL est ici : les services n'écrivent jamais de queries directes.

Le repository parle en ScoredResult : la conversion ORM ↔ domaine
(simple renommage de champs) se fait ici.
"""
from datetime import date, datetime, time, timedelta, timezone
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func, text
from typing import List, Optional

from app.core.db_errors import store_guard
from app.engine.intelligence.result import ScoredResult, to_store_row, from_store_row
from app.shared.enums import IntelligenceCategory, ResultSortKey, SortDirection
from app.shared.exceptions import StoreUnavailableError
from app.shared.models import TestResult

ALL = "all"

_SORT_COLUMNS = {
    ResultSortKey.NAME:  TestResult.name,
    ResultSortKey.GROUP: TestResult.student_class,
    ResultSortKey.DATE:  TestResult.date,
}


class ResultRepository:

    async def save(self, db: AsyncSession, result: ScoredResult) -> ScoredResult:
        """Idempotent par id : un second save du même résultat ne crée pas de doublon."""
        async with store_guard(db, "sauvegarde résultat"):
            db_obj = await db.merge(TestResult(**to_store_row(result)))
            await db.commit()
            await db.refresh(db_obj)
        return from_store_row(db_obj)

    async def list_all(
        self,
        db: AsyncSession,
        group: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        name_contains: Optional[str] = None,
        dominant_category: Optional[IntelligenceCategory] = None,
        sort: ResultSortKey = ResultSortKey.DATE,
        direction: SortDirection = SortDirection.DESC,
    ) -> List[ScoredResult]:
        """Filtre absent (ou "all") = aucune contrainte. Tri par défaut : date décroissante."""
        query = select(TestResult)

        if group and group != ALL:
            query = query.where(TestResult.student_class == group)
        if date_from:
            query = query.where(TestResult.date >= _start_of(date_from))
        if date_to:
            # borne incluse : < lendemain 00:00
            query = query.where(TestResult.date < _start_of(date_to + timedelta(days=1)))
        if name_contains and name_contains.strip():
            query = query.where(TestResult.name.ilike(f"%{name_contains.strip()}%"))
        if dominant_category is not None:
            query = query.where(TestResult.dominant_type == dominant_category.value)

        column = _sort_column(sort)
        ordering = column.asc() if direction == SortDirection.ASC else column.desc()
        # départage stable : plus récent d'abord, puis id
        query = query.order_by(ordering, TestResult.date.desc(), TestResult.id)

        async with store_guard(db, "liste des résultats"):
            r = await db.execute(query)
            rows = r.scalars().all()
        return [from_store_row(row) for row in rows]

    async def get(self, db: AsyncSession, result_id: str) -> Optional[ScoredResult]:
        async with store_guard(db, "lecture résultat"):
            r = await db.execute(select(TestResult).where(TestResult.id == result_id))
            row = r.scalar_one_or_none()
        return from_store_row(row) if row is not None else None

    async def delete_by_id(self, db: AsyncSession, result_id: str) -> bool:
        async with store_guard(db, "suppression résultat"):
            r = await db.execute(delete(TestResult).where(TestResult.id == result_id))
            await db.commit()
        return (r.rowcount or 0) > 0

    async def count(self, db: AsyncSession) -> int:
        async with store_guard(db, "comptage résultats"):
            r = await db.execute(select(func.count()).select_from(TestResult))
            return int(r.scalar_one())

    async def unique_groups(self, db: AsyncSession) -> List[str]:
        async with store_guard(db, "liste des classes"):
            r = await db.execute(
                select(TestResult.student_class).distinct().order_by(TestResult.student_class)
            )
            return [g for g in r.scalars().all() if g]

    async def ping(self, db: AsyncSession) -> bool:
        try:
            async with store_guard(db, "ping"):
                await db.execute(text("SELECT 1"))
            return True
        except StoreUnavailableError:
            return False


def _start_of(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def _sort_column(key: ResultSortKey):
    """Colonne fixe, ou score d'une catégorie lu dans le JSON results."""
    key = ResultSortKey(key)
    if key in _SORT_COLUMNS:
        return _SORT_COLUMNS[key]
    return TestResult.results[key.value].as_integer()
