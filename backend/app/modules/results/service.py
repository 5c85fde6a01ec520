# modules/results/service.py
"""
Consultation admin des résultats.

Responsabilités :
1. Interroger le Result Store via repository (filtres et tri côté serveur)
2. Déléguer les agrégats à engine/intelligence/aggregation.py
3. Déléguer l'export à engine/intelligence/export.py

Aucun cache : chaque appel relit le store et passe la liste
explicitement à l'engine.
"""
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.engine.intelligence.aggregation import AggregateView, build_aggregate_view
from app.engine.intelligence.export import results_to_csv, export_filename
from app.engine.intelligence.result import ScoredResult
from app.modules.results.repository import ResultRepository
from app.modules.results.schemas import ResultFilters
from app.shared.ports import ResultRepositoryPort

repo: ResultRepositoryPort = ResultRepository()


class ResultService:

    async def list_results(self, db: AsyncSession, filters: ResultFilters) -> List[ScoredResult]:
        return await repo.list_all(db, **filters.model_dump())

    async def delete_result(self, db: AsyncSession, result_id: str) -> bool:
        return await repo.delete_by_id(db, result_id)

    async def get_groups(self, db: AsyncSession) -> List[str]:
        return await repo.unique_groups(db)

    async def get_result(self, db: AsyncSession, result_id: str) -> Optional[ScoredResult]:
        return await repo.get(db, result_id)

    async def count_results(self, db: AsyncSession) -> int:
        """Tous les résultats en base, indépendamment des filtres."""
        return await repo.count(db)

    async def get_aggregate_view(self, db: AsyncSession, filters: ResultFilters) -> AggregateView:
        results = await repo.list_all(db, **filters.model_dump())
        return build_aggregate_view(results)

    async def export_csv(self, db: AsyncSession, filters: ResultFilters, today: date) -> tuple:
        """Retourne (nom de fichier, contenu CSV)."""
        results = await repo.list_all(db, **filters.model_dump())
        return export_filename(today), results_to_csv(results)

    async def store_available(self, db: AsyncSession) -> bool:
        return await repo.ping(db)
