# modules/questions/router.py
"""
Endpoints de la banque de questions.

Lecture publique (avec repli sur la banque embarquée).
Écriture réservée à l'admin : ajout, modification, suppression, import.

Règle : ce fichier ne touche jamais la DB.
Tout passe par QuestionService.
"""
from fastapi import APIRouter, File, HTTPException, UploadFile, status
from typing import Any, List, Optional

from app.shared.deps import DbDep, AdminDep
from app.shared.enums import IntelligenceCategory
from app.shared.exceptions import (
    IdConflictError, QuestionImportError, QuestionNotFoundError, StoreUnavailableError,
)
from app.modules.questions.service import QuestionService
from app.modules.questions.schemas import (
    QuestionIn,
    QuestionPatchIn,
    QuestionOut,
    QuestionListOut,
    ImportReportOut,
)

router = APIRouter(prefix="/questions", tags=["Questions"])
service = QuestionService()

STORE_DOWN = "Base de données indisponible. Réessayez dans quelques instants."


# ─────────────────────────────────────────────
# LECTURE
# ─────────────────────────────────────────────

@router.get("", response_model=QuestionListOut, summary="Liste des questions")
async def list_questions(
    db: DbDep,
    category: Optional[IntelligenceCategory] = None,
    search: Optional[str] = None,
):
    questions, fallback = await service.list_questions(db, category=category, search=search)
    return {"questions": questions, "total": len(questions), "fallback": fallback}


@router.get("/{question_id}", response_model=QuestionOut, summary="Détail d'une question")
async def get_question(question_id: str, db: DbDep):
    try:
        return await service.get_question(db, question_id)
    except QuestionNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Question introuvable.")


# ─────────────────────────────────────────────
# ADMIN : CRUD
# ─────────────────────────────────────────────

@router.post("", response_model=QuestionOut, status_code=status.HTTP_201_CREATED)
async def add_question(payload: QuestionIn, db: DbDep, admin: AdminDep):
    try:
        return await service.add_question(db, payload)
    except IdConflictError as e:
        raise HTTPException(status.HTTP_409_CONFLICT, str(e))
    except StoreUnavailableError:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, STORE_DOWN)


@router.put("/{question_id}", response_model=QuestionOut)
async def update_question(question_id: str, payload: QuestionPatchIn, db: DbDep, admin: AdminDep):
    try:
        return await service.update_question(db, question_id, payload)
    except QuestionNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Question introuvable.")
    except StoreUnavailableError:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, STORE_DOWN)


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_question(question_id: str, db: DbDep, admin: AdminDep):
    try:
        await service.remove_question(db, question_id)
    except QuestionNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Question introuvable.")
    except StoreUnavailableError:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, STORE_DOWN)


# ─────────────────────────────────────────────
# ADMIN : IMPORT
# ─────────────────────────────────────────────

@router.post(
    "/import",
    response_model=ImportReportOut,
    summary="Import en masse (JSON)",
    description="Import partiel autorisé : doublons et lignes invalides sont rejetés individuellement.",
)
async def bulk_import(payload: List[Any], db: DbDep, admin: AdminDep):
    try:
        return await service.bulk_import(db, payload)
    except StoreUnavailableError:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, STORE_DOWN)


@router.post("/import/file", response_model=ImportReportOut, summary="Import depuis un fichier JSON")
async def import_file(db: DbDep, admin: AdminDep, file: UploadFile = File(...)):
    content = await file.read()
    try:
        return await service.import_from_file(db, content)
    except QuestionImportError as e:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, str(e))
    except StoreUnavailableError:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, STORE_DOWN)
