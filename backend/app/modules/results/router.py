# modules/results/router.py
"""
Endpoints admin du tableau de bord des résultats.
Liste filtrée et triée → Agrégats → Export → Détail → Suppression

Règle : ce fichier ne touche jamais la DB ni l'engine.
Tout passe par ResultService.
"""
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Response, status
from typing import Annotated, List

from app.shared.deps import DbDep, AdminDep
from app.shared.exceptions import StoreUnavailableError
from app.modules.results.service import ResultService
from app.modules.results.schemas import (
    ScoredResultOut,
    ResultFilters,
    AggregateViewOut,
    GroupsOut,
)

router = APIRouter(prefix="/results", tags=["Results"])
service = ResultService()

FiltersDep = Annotated[ResultFilters, Depends()]

STORE_DOWN = "Base de données indisponible. Réessayez dans quelques instants."
RESULT_GONE = "Résultat introuvable."


@router.get("", response_model=List[ScoredResultOut], summary="Résultats filtrés")
async def list_results(db: DbDep, admin: AdminDep, filters: FiltersDep):
    """
    Filtres : group, date_from, date_to (inclus), name_contains, dominant_category
    ("all" = pas de filtre). Tri : sort (name, group, date ou une catégorie), direction (asc | desc).
    """
    try:
        return await service.list_results(db, filters)
    except StoreUnavailableError:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, STORE_DOWN)


@router.get("/groups", response_model=GroupsOut, summary="Classes / groupes distincts")
async def list_groups(db: DbDep, admin: AdminDep):
    try:
        return {"groups": await service.get_groups(db)}
    except StoreUnavailableError:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, STORE_DOWN)


@router.get(
    "/stats",
    response_model=AggregateViewOut,
    summary="Agrégats du tableau de bord",
    description=(
        "Moyenne par catégorie, nombre de résultats par type dominant "
        "(les 8 catégories toujours présentes), total, type le plus fréquent, âge moyen. "
        "stored_total : nombre de résultats en base, hors filtres."
    ),
)
async def get_stats(db: DbDep, admin: AdminDep, filters: FiltersDep):
    try:
        view = await service.get_aggregate_view(db, filters)
        stored_total = await service.count_results(db)
    except StoreUnavailableError:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, STORE_DOWN)
    return AggregateViewOut.model_validate(view).model_copy(update={"stored_total": stored_total})


@router.get("/export.csv", summary="Export CSV des résultats filtrés")
async def export_csv(db: DbDep, admin: AdminDep, filters: FiltersDep):
    try:
        filename, content = await service.export_csv(db, filters, today=date.today())
    except StoreUnavailableError:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, STORE_DOWN)
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{result_id}", response_model=ScoredResultOut, summary="Détail d'un résultat")
async def get_result(result_id: str, db: DbDep, admin: AdminDep):
    try:
        result = await service.get_result(db, result_id)
    except StoreUnavailableError:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, STORE_DOWN)
    if result is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, RESULT_GONE)
    return result


@router.delete("/{result_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_result(result_id: str, db: DbDep, admin: AdminDep):
    try:
        deleted = await service.delete_result(db, result_id)
    except StoreUnavailableError:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, STORE_DOWN)
    if not deleted:
        raise HTTPException(status.HTTP_404_NOT_FOUND, RESULT_GONE)
