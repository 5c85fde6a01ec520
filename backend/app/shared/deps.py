# app/shared/deps.py
"""
Dépendances FastAPI réutilisables dans tous les routers.
Injectées via Depends() : jamais appelées directement.
"""
from typing import Annotated, Any, Dict
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import decode_token
from app.infra.session_store import SessionStore

bearer = HTTPBearer()


async def _get_claims_from_token(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer)],
) -> Dict[str, Any]:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Token invalide ou expiré",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise credentials_exception
    if payload.get("sub") is None:
        raise credentials_exception
    return payload


# ── Deps publiques ─────────────────────────────────────────

async def get_current_admin(
    claims: Annotated[Dict[str, Any], Depends(_get_claims_from_token)],
) -> Dict[str, Any]:
    """Exige le rôle admin dans le token."""
    if claims.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Accès administrateur requis")
    return claims


def get_session_store(request: Request) -> SessionStore:
    """Store de sessions de test : un par application (app.state)."""
    return request.app.state.session_store


# ── Type aliases pour les routers ─────────────────────────
DbDep       = Annotated[AsyncSession, Depends(get_db)]
AdminDep    = Annotated[Dict[str, Any], Depends(get_current_admin)]
SessionsDep = Annotated[SessionStore, Depends(get_session_store)]
