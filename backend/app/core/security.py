# backend/app/core/security.py
"""
Décodage des tokens JWT.

Le login admin n'est pas géré ici : on ne fait que vérifier
la signature et l'expiration d'un token émis par le service d'auth.
"""
from typing import Any, Dict

from jose import jwt

from app.core.config import settings


def decode_token(token: str) -> Dict[str, Any]:
    """Lève jose.JWTError si la signature ou l'expiration est invalide."""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])


def create_access_token(data: Dict[str, Any]) -> str:
    """Utilisé par les tests et les scripts d'administration."""
    return jwt.encode(dict(data), settings.SECRET_KEY, algorithm=settings.ALGORITHM)
