# app/shared/ports.py
"""
Capacités attendues des repositories.

Les services dépendent de ces interfaces, jamais de SQLAlchemy directement :
- implémentation SQL    → modules/*/repository.py
- repli données embarquées → modules/questions/fallback.py
L'engine (scoring, agrégation) ne dépend d'aucune des deux.
"""
from datetime import date
from typing import Any, List, Mapping, Optional, Protocol, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.engine.intelligence.result import ScoredResult
from app.shared.enums import IntelligenceCategory, ResultSortKey, SortDirection


class QuestionRepositoryPort(Protocol):

    async def list(
        self,
        db: AsyncSession,
        category: Optional[IntelligenceCategory] = None,
        search: Optional[str] = None,
    ) -> List[Any]: ...

    async def get(self, db: AsyncSession, question_id: str) -> Optional[Any]: ...

    async def existing_ids(self, db: AsyncSession, ids: Sequence[str]) -> set: ...

    async def add(self, db: AsyncSession, data: Mapping[str, str]) -> Any: ...

    async def update(self, db: AsyncSession, question_id: str, data: Mapping[str, str]) -> Optional[Any]: ...

    async def remove(self, db: AsyncSession, question_id: str) -> bool: ...

    async def add_many(self, db: AsyncSession, rows: Sequence[Mapping[str, str]]) -> int: ...


class ResultRepositoryPort(Protocol):

    async def save(self, db: AsyncSession, result: ScoredResult) -> ScoredResult: ...

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
    ) -> List[ScoredResult]: ...

    async def get(self, db: AsyncSession, result_id: str) -> Optional[ScoredResult]: ...

    async def delete_by_id(self, db: AsyncSession, result_id: str) -> bool: ...

    async def count(self, db: AsyncSession) -> int: ...

    async def unique_groups(self, db: AsyncSession) -> List[str]: ...

    async def ping(self, db: AsyncSession) -> bool: ...
