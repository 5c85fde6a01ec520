# seed/seed_questions.py
"""
Seed de la banque de questions : les 40 questions embarquées.

Contenu :
    8 catégories × 5 questions (L, LM, MU, K, S, IE, IA, N)

Idempotent : les identifiants déjà présents sont laissés tels quels
(une question modifiée par l'admin n'est jamais écrasée).

Usage :
    python -m app.seed.seed_questions
    (après alembic upgrade head)
"""
import asyncio

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from app.content.default_questions import DEFAULT_QUESTIONS
from app.core.config import settings
from app.modules.questions.repository import QuestionRepository

repo = QuestionRepository()


async def seed(db: AsyncSession) -> int:
    print("🧪 Seed banque de questions démarré...")

    existing = await repo.existing_ids(db, [q["id"] for q in DEFAULT_QUESTIONS])
    rows = [q for q in DEFAULT_QUESTIONS if q["id"] not in existing]
    inserted = await repo.add_many(db, rows)

    print(f"  ✓ Questions : {inserted} insérée(s), {len(existing)} déjà présente(s)")
    print("✅ Seed banque de questions terminé.")
    return inserted


async def main():
    engine = create_async_engine(settings.DATABASE_URL, echo=False)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    try:
        async with session_factory() as db:
            await seed(db)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
