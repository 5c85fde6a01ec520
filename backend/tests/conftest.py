# tests/conftest.py
"""
Fixtures et factories partagées sur l'ensemble de la suite de tests.

Trois couches :
    1. Engine  : fonctions pures, aucun mock nécessaire (factories de réponses)
    2. Service : mocks AsyncSession + repos via pytest-mock
    3. Router  : httpx.AsyncClient + dependency_overrides FastAPI
"""
import pytest
from types import SimpleNamespace
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession

from app.main import app
from app.core.database import get_db
from app.engine.intelligence.result import ScoredResult
from app.engine.intelligence.scoring import Answer
from app.infra.session_store import SessionStore
from app.shared.deps import get_current_admin
from app.shared.enums import IntelligenceCategory, CANONICAL_ORDER


# ── Préfixes d'identifiants par catégorie (banque embarquée) ──────────────────

ID_PREFIX = {
    IntelligenceCategory.LINGUISTIC:    "L",
    IntelligenceCategory.LOGICAL:       "LM",
    IntelligenceCategory.MUSICAL:       "MU",
    IntelligenceCategory.BODILY:        "K",
    IntelligenceCategory.SPATIAL:       "S",
    IntelligenceCategory.INTERPERSONAL: "IE",
    IntelligenceCategory.INTRAPERSONAL: "IA",
    IntelligenceCategory.NATURALISTIC:  "N",
}


# ── Réponses (input principal du scorer) ──────────────────────────────────────

def make_answers(category, values) -> list:
    """Une Answer par valeur, toutes dans la même catégorie."""
    category = IntelligenceCategory(category)
    prefix = ID_PREFIX[category]
    return [
        Answer(question_id=f"{prefix}{i + 1}", value=v, category=category)
        for i, v in enumerate(values)
    ]


def make_full_answers(value: int = 3, overrides: dict = None) -> list:
    """5 réponses par catégorie ; overrides = {catégorie: [v1..v5]}."""
    overrides = overrides or {}
    answers = []
    for category in CANONICAL_ORDER:
        answers.extend(make_answers(category, overrides.get(category, [value] * 5)))
    return answers


# ── Factories de modèles ORM (SimpleNamespace : léger, sans ORM) ──────────────

def make_question(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": "L1",
        "text": "J'aime lire des livres et des articles pendant mon temps libre.",
        "type": "linguistic",
    }
    if "category" in kwargs:
        kwargs["type"] = IntelligenceCategory(kwargs.pop("category")).value
    defaults.update(kwargs)
    # Propriété calculée sur le modèle ORM
    defaults["category"] = defaults["type"]
    return SimpleNamespace(**defaults)


def make_question_pool(per_category: int = 5, categories=CANONICAL_ORDER) -> list:
    return [
        make_question(
            id=f"{ID_PREFIX[category]}{i + 1}",
            text=f"Énoncé {category.value} n°{i + 1}",
            category=category,
        )
        for category in categories
        for i in range(per_category)
    ]


def make_scores(default: int = 60, **kwargs) -> dict:
    """Scores sur les 8 catégories ; kwargs = {valeur_catégorie: score}."""
    return {category: kwargs.get(category.value, default) for category in CANONICAL_ORDER}


def make_scored_result(**kwargs) -> ScoredResult:
    defaults = {
        "id": "7f1c2e1a-0000-4000-8000-000000000001",
        "name": "Budi Santoso",
        "age": 16,
        "gender": "Homme",
        "group": "XI IPA 1",
        "date": datetime(2025, 3, 10, 9, 30, tzinfo=timezone.utc),
        "scores": make_scores(linguistic=80),
        "dominant_category": IntelligenceCategory.LINGUISTIC,
    }
    defaults.update(kwargs)
    return ScoredResult(**defaults)


def make_test_result_row(**kwargs) -> SimpleNamespace:
    """Ligne test_results telle que lue en base (nommage du store)."""
    defaults = {
        "id": "7f1c2e1a-0000-4000-8000-000000000001",
        "name": "Budi Santoso",
        "age": 16,
        "gender": "Homme",
        "student_class": "XI IPA 1",
        "date": datetime(2025, 3, 10, 9, 30, tzinfo=timezone.utc),
        "results": {c.value: 60 for c in CANONICAL_ORDER} | {"linguistic": 80},
        "dominant_type": "linguistic",
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_profile(**kwargs) -> dict:
    defaults = {"name": "Siti Aminah", "age": 15, "gender": "Femme", "group": "X IPS 2"}
    defaults.update(kwargs)
    return defaults


# ── DB mock factory ───────────────────────────────────────────────────────────

def make_async_db() -> AsyncMock:
    """AsyncMock simulant une AsyncSession SQLAlchemy."""
    db = AsyncMock(spec=AsyncSession)
    db.add = MagicMock()
    db.add_all = MagicMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    db.close = AsyncMock()
    return db


# ── Fixtures HTTP (httpx.AsyncClient + dependency_overrides) ─────────────────

@pytest.fixture
def session_store():
    """Store neuf à chaque test : aucune session ne fuit d'un test à l'autre."""
    store = SessionStore(ttl_minutes=120)
    app.state.session_store = store
    return store


@pytest.fixture
async def client(session_store):
    """Client sans auth : endpoints publics, ou service entier mocké."""
    mock_db = make_async_db()
    app.dependency_overrides[get_db] = lambda: mock_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def admin_client(session_store):
    """Client authentifié comme administrateur (token déjà vérifié)."""
    mock_db = make_async_db()
    app.dependency_overrides[get_db] = lambda: mock_db
    app.dependency_overrides[get_current_admin] = lambda: {"sub": "admin@sekolah.id", "role": "admin"}
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
