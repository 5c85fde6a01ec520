# app/infra/session_store.py
"""
Sessions de test en mémoire (un process = un store).

Une session = profil du répondant + état du collecteur + dernier résultat.
L'état du collecteur est gardé sous forme de dict (ResponseCollector.to_state) :
aucun objet vivant dans le store, chaque requête restaure son collecteur
puis réécrit l'état avec commit_collector().

Rien n'est persisté : un redémarrage du serveur perd les sessions en cours,
seuls les résultats soumis et sauvegardés survivent.

Accès depuis la boucle asyncio uniquement, pas de verrou.
"""
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from app.engine.intelligence.collector import ResponseCollector
from app.engine.intelligence.result import ScoredResult
from app.shared.exceptions import SessionNotFoundError

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class QuizSession:
    profile:   Dict[str, Any]
    state:     Dict[str, Any]
    fallback:  bool = False
    result:    Optional[ScoredResult] = None
    persisted: bool = False
    id:        str = field(default_factory=lambda: str(uuid.uuid4()))
    touched:   datetime = field(default_factory=_now)

    @property
    def collector(self) -> ResponseCollector:
        """Collecteur restauré depuis l'état. Les modifications ne comptent qu'après commit_collector()."""
        return ResponseCollector.from_state(self.state)

    @property
    def submitted(self) -> bool:
        return self.result is not None

    def commit_collector(self, collector: ResponseCollector) -> None:
        self.state = collector.to_state()


class SessionStore:

    def __init__(self, ttl_minutes: int = 120):
        self._ttl = timedelta(minutes=ttl_minutes)
        self._sessions: Dict[str, QuizSession] = {}

    def create(self, profile: Dict[str, Any], collector: ResponseCollector, fallback: bool = False) -> QuizSession:
        self.purge_expired()
        session = QuizSession(profile=dict(profile), state=collector.to_state(), fallback=fallback)
        self._sessions[session.id] = session
        return session

    def get(self, session_id: str) -> QuizSession:
        """Lève SessionNotFoundError si absente ou expirée. Rafraîchit l'expiration."""
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        if _now() - session.touched > self._ttl:
            del self._sessions[session_id]
            raise SessionNotFoundError(session_id)
        session.touched = _now()
        return session

    def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def purge_expired(self) -> int:
        limit = _now() - self._ttl
        expired = [sid for sid, s in self._sessions.items() if s.touched < limit]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("%d session(s) de test expirée(s) supprimée(s)", len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)
