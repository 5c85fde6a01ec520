# modules/quiz/router.py
"""
Endpoints du passage du test (publics).
Profil → Questions → Réponses → Soumission → Résultat

Règle : ce fichier ne touche jamais la DB ni l'engine.
Tout passe par QuizService.
"""
from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse

from app.engine.intelligence.collector import UnknownQuestionError
from app.shared.deps import DbDep, SessionsDep
from app.shared.exceptions import (
    InvalidAnswerError, SessionIncompleteError, SessionNotFoundError, SessionSubmittedError,
)
from app.modules.quiz.service import QuizService, validate_profile
from app.modules.quiz.schemas import (
    ProfileIn,
    AnswerIn,
    SessionStateOut,
    MoveOut,
    SubmitOut,
)

router = APIRouter(prefix="/quiz", tags=["Quiz"])
service = QuizService()

SESSION_GONE = "Session introuvable ou expirée."


# ─────────────────────────────────────────────
# SESSION
# ─────────────────────────────────────────────

@router.post(
    "/sessions",
    response_model=SessionStateOut,
    status_code=status.HTTP_201_CREATED,
    summary="Démarrer un test",
    responses={422: {"description": "Profil invalide : {\"errors\": {champ: message}}"}},
)
async def start_session(payload: ProfileIn, db: DbDep, store: SessionsDep):
    """
    Valide le profil puis compose 5 questions par catégorie (40 au total).
    Si la banque est injoignable ou incomplète, les questions embarquées
    sont utilisées (fallback=true).
    """
    draft = payload.model_dump()
    errors = validate_profile(draft)
    if errors:
        return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"errors": errors})

    session = await service.start_session(db, store, draft)
    return service.session_state(session)


@router.get("/sessions/{session_id}", response_model=SessionStateOut)
async def get_session(session_id: str, store: SessionsDep):
    try:
        return service.session_state(service.get_session(store, session_id))
    except SessionNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, SESSION_GONE)


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def end_session(session_id: str, store: SessionsDep):
    """Retour à l'accueil : la session et son résultat en mémoire sont oubliés."""
    if not service.end_session(store, session_id):
        raise HTTPException(status.HTTP_404_NOT_FOUND, SESSION_GONE)


# ─────────────────────────────────────────────
# RÉPONSES & NAVIGATION
# ─────────────────────────────────────────────

@router.put("/sessions/{session_id}/answers/{question_id}", response_model=SessionStateOut)
async def answer_question(session_id: str, question_id: str, payload: AnswerIn, store: SessionsDep):
    try:
        session = service.answer(store, session_id, question_id, payload.value)
    except SessionNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, SESSION_GONE)
    except SessionSubmittedError as e:
        raise HTTPException(status.HTTP_409_CONFLICT, str(e))
    except UnknownQuestionError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Question absente de cette session.")
    except InvalidAnswerError as e:
        raise HTTPException(status.HTTP_422_UNPROCESSABLE_ENTITY, str(e))
    return service.session_state(session)


@router.post("/sessions/{session_id}/next", response_model=MoveOut)
async def next_question(session_id: str, store: SessionsDep):
    """moved=false si la question courante n'a pas de réponse ou si c'est la dernière. 409 après soumission."""
    try:
        session, moved = service.next_question(store, session_id)
    except SessionNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, SESSION_GONE)
    except SessionSubmittedError as e:
        raise HTTPException(status.HTTP_409_CONFLICT, str(e))
    return {"moved": moved, "session": service.session_state(session)}


@router.post("/sessions/{session_id}/back", response_model=MoveOut)
async def previous_question(session_id: str, store: SessionsDep):
    try:
        session, moved = service.previous_question(store, session_id)
    except SessionNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, SESSION_GONE)
    except SessionSubmittedError as e:
        raise HTTPException(status.HTTP_409_CONFLICT, str(e))
    return {"moved": moved, "session": service.session_state(session)}


# ─────────────────────────────────────────────
# SOUMISSION & RÉSULTAT
# ─────────────────────────────────────────────

@router.post(
    "/sessions/{session_id}/submit",
    response_model=SubmitOut,
    status_code=status.HTTP_201_CREATED,
    summary="Soumettre le test",
    description=(
        "Calcule le profil et tente UNE sauvegarde ; une re-soumission renvoie le résultat existant. "
        "persisted=false si la base est indisponible : le résultat reste affiché "
        "et POST /save permet de réessayer."
    ),
)
async def submit(session_id: str, db: DbDep, store: SessionsDep):
    try:
        session = await service.submit(db, store, session_id)
    except SessionNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, SESSION_GONE)
    except SessionIncompleteError as e:
        raise HTTPException(status.HTTP_409_CONFLICT, str(e))
    return {"result": session.result, "persisted": session.persisted}


@router.post("/sessions/{session_id}/save", response_model=SubmitOut)
async def retry_save(session_id: str, db: DbDep, store: SessionsDep):
    try:
        session = await service.save(db, store, session_id)
    except SessionNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, SESSION_GONE)
    except SessionIncompleteError as e:
        raise HTTPException(status.HTTP_409_CONFLICT, str(e))
    return {"result": session.result, "persisted": session.persisted}


@router.get("/sessions/{session_id}/result", response_model=SubmitOut)
async def get_result(session_id: str, store: SessionsDep):
    try:
        session = service.get_result(store, session_id)
    except SessionNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, SESSION_GONE)
    except SessionIncompleteError as e:
        raise HTTPException(status.HTTP_409_CONFLICT, str(e))
    return {"result": session.result, "persisted": session.persisted}
