# main.py
"""
Point d'entrée de l'API Intelligences Multiples.
Enregistre tous les modules via leurs routers.

Architecture : modules verticaux (router / service / repository) + engine pur.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.logging_config import setup_logging
from app.infra.session_store import SessionStore
from app.shared.deps import DbDep

from app.modules.quiz.router      import router as quiz_router
from app.modules.questions.router import router as questions_router
from app.modules.results.router   import router as results_router
from app.modules.results.service  import ResultService

VERSION = "1.0.0"

setup_logging()

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=VERSION,
    docs_url="/docs" if settings.DEBUG else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Sessions de test en mémoire (un store par process)
app.state.session_store = SessionStore(ttl_minutes=settings.SESSION_TTL_MINUTES)

app.include_router(quiz_router)
app.include_router(questions_router)
app.include_router(results_router)


@app.get("/health")
async def health(db: DbDep):
    database = await ResultService().store_available(db)
    return {
        "status": "ok" if database else "degraded",
        "database": "up" if database else "down",
        "version": VERSION,
    }
