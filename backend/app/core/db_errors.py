# backend/app/core/db_errors.py
"""
Traduction des erreurs SQLAlchemy en StoreUnavailableError.

Usage dans les repositories :

    async with store_guard(db, "liste des résultats"):
        r = await db.execute(...)

→ rollback, log WARNING, puis StoreUnavailableError (chaînée sur l'erreur d'origine).
Les IntegrityError ne sont PAS interceptées : le repository des questions
les traduit en IdConflictError, ailleurs elles remontent telles quelles.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def store_guard(db: AsyncSession, operation: str) -> AsyncIterator[None]:
    try:
        yield
    except IntegrityError:
        raise
    except SQLAlchemyError as e:
        logger.warning("Échec base de données (%s) : %s", operation, e)
        try:
            await db.rollback()
        except SQLAlchemyError:
            logger.warning("Rollback impossible après échec (%s)", operation)
        raise StoreUnavailableError(f"Base de données indisponible ({operation}).") from e
