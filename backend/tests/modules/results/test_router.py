# tests/modules/results/test_router.py
"""
Tests HTTP pour modules.results.router

Couverture :
    GET    /results               sans auth → 401/403, admin → 200 liste
    GET    /results               filtres et tri en query string, "all" = pas de filtre
    GET    /results               base indisponible → 503
    GET    /results/groups        → 200
    GET    /results/stats         → 8 catégories toujours présentes, stored_total
    GET    /results/{id}          → 200, absent → 404
    GET    /results/export.csv    → text/csv + Content-Disposition
    DELETE /results/{id}          → 204, absent → 404
    GET    /health                → état de la base
"""
import pytest
from datetime import date
from unittest.mock import AsyncMock

from app.core.security import create_access_token
from app.engine.intelligence.aggregation import build_aggregate_view
from app.shared.enums import IntelligenceCategory as IC, ResultSortKey, SortDirection
from app.shared.exceptions import StoreUnavailableError
from tests.conftest import make_scored_result

pytestmark = pytest.mark.router

SERVICE = "app.modules.results.router.service"


# ── GET /results ──────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_liste_sans_auth(client):
    resp = await client.get("/results")
    assert resp.status_code in (401, 403)


@pytest.mark.asyncio
async def test_liste_avec_token_admin(client, mocker):
    mocker.patch(f"{SERVICE}.list_results", AsyncMock(return_value=[]))
    token = create_access_token({"sub": "admin@sekolah.id", "role": "admin"})
    resp = await client.get("/results", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_liste_200(admin_client, mocker):
    mocker.patch(f"{SERVICE}.list_results", AsyncMock(return_value=[make_scored_result()]))
    resp = await admin_client.get("/results")

    assert resp.status_code == 200
    item = resp.json()[0]
    assert item["group"] == "XI IPA 1"
    assert item["dominant_category"] == "linguistic"
    assert len(item["scores"]) == 8


@pytest.mark.asyncio
async def test_liste_filtres_query(admin_client, mocker):
    mock = mocker.patch(f"{SERVICE}.list_results", AsyncMock(return_value=[]))
    resp = await admin_client.get("/results", params={
        "group": "XI IPA 1",
        "date_from": "2025-01-01",
        "date_to": "2025-01-31",
        "name_contains": "budi",
        "dominant_category": "musical",
    })

    assert resp.status_code == 200
    filters = mock.call_args.args[1]
    assert filters.group == "XI IPA 1"
    assert filters.date_to == date(2025, 1, 31)
    assert filters.dominant_category == IC.MUSICAL


@pytest.mark.asyncio
async def test_liste_tri_query(admin_client, mocker):
    mock = mocker.patch(f"{SERVICE}.list_results", AsyncMock(return_value=[]))
    resp = await admin_client.get("/results", params={"sort": "logical", "direction": "asc"})

    assert resp.status_code == 200
    filters = mock.call_args.args[1]
    assert filters.sort == ResultSortKey.LOGICAL
    assert filters.direction == SortDirection.ASC


@pytest.mark.asyncio
async def test_liste_tri_inconnu_422(admin_client):
    resp = await admin_client.get("/results", params={"sort": "age"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_liste_type_dominant_all(admin_client, mocker):
    mock = mocker.patch(f"{SERVICE}.list_results", AsyncMock(return_value=[]))
    resp = await admin_client.get("/results", params={"group": "all", "dominant_category": "all"})

    assert resp.status_code == 200
    filters = mock.call_args.args[1]
    assert filters.group is None
    assert filters.dominant_category is None


@pytest.mark.asyncio
async def test_liste_base_indisponible_503(admin_client, mocker):
    mocker.patch(f"{SERVICE}.list_results", AsyncMock(side_effect=StoreUnavailableError("down")))
    resp = await admin_client.get("/results")
    assert resp.status_code == 503


# ── Groupes / stats / export ─────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_groupes_200(admin_client, mocker):
    mocker.patch(f"{SERVICE}.get_groups", AsyncMock(return_value=["X IPS 2", "XI IPA 1"]))
    resp = await admin_client.get("/results/groups")
    assert resp.json() == {"groups": ["X IPS 2", "XI IPA 1"]}


@pytest.mark.asyncio
async def test_stats_huit_categories(admin_client, mocker):
    view = build_aggregate_view([
        make_scored_result(id="a", dominant_category=IC.MUSICAL),
        make_scored_result(id="b", dominant_category=IC.MUSICAL),
        make_scored_result(id="c", dominant_category=IC.LOGICAL),
    ])
    mocker.patch(f"{SERVICE}.get_aggregate_view", AsyncMock(return_value=view))
    mocker.patch(f"{SERVICE}.count_results", AsyncMock(return_value=12))

    resp = await admin_client.get("/results/stats")

    body = resp.json()
    assert resp.status_code == 200
    assert body["dominant_counts"] == {
        "linguistic": 0, "logical": 1, "musical": 2, "bodily": 0,
        "spatial": 0, "interpersonal": 0, "intrapersonal": 0, "naturalistic": 0,
    }
    assert body["total"] == 3
    assert body["most_common_category"] == "musical"
    assert body["stored_total"] == 12


@pytest.mark.asyncio
async def test_export_csv(admin_client, mocker):
    mocker.patch(
        f"{SERVICE}.export_csv",
        AsyncMock(return_value=("multiple-intelligence-results-2025-05-01.csv", '"Nom"\n')),
    )
    resp = await admin_client.get("/results/export.csv")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "multiple-intelligence-results-2025-05-01.csv" in resp.headers["content-disposition"]
    assert resp.text == '"Nom"\n'


# ── GET /results/{id} ─────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_detail_200(admin_client, mocker):
    mocker.patch(f"{SERVICE}.get_result", AsyncMock(return_value=make_scored_result(id="r1")))
    resp = await admin_client.get("/results/r1")

    assert resp.status_code == 200
    assert resp.json()["id"] == "r1"
    assert resp.json()["name"] == "Budi Santoso"


@pytest.mark.asyncio
async def test_detail_absent_404(admin_client, mocker):
    mocker.patch(f"{SERVICE}.get_result", AsyncMock(return_value=None))
    resp = await admin_client.get("/results/absent")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_detail_sans_auth(client):
    resp = await client.get("/results/r1")
    assert resp.status_code in (401, 403)


# ── DELETE /results/{id} ──────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_suppression_204(admin_client, mocker):
    mocker.patch(f"{SERVICE}.delete_result", AsyncMock(return_value=True))
    resp = await admin_client.delete("/results/abc")
    assert resp.status_code == 204


@pytest.mark.asyncio
async def test_suppression_absent_404(admin_client, mocker):
    mocker.patch(f"{SERVICE}.delete_result", AsyncMock(return_value=False))
    resp = await admin_client.delete("/results/abc")
    assert resp.status_code == 404


# ── GET /health ───────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_health_base_ok(client, mocker):
    mocker.patch("app.modules.results.service.repo.ping", AsyncMock(return_value=True))
    resp = await client.get("/health")
    assert resp.json()["status"] == "ok"
    assert resp.json()["database"] == "up"


@pytest.mark.asyncio
async def test_health_base_down(client, mocker):
    mocker.patch("app.modules.results.service.repo.ping", AsyncMock(return_value=False))
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "degraded"
