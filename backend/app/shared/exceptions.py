# app/shared/exceptions.py
"""
Exceptions métier.

Levées par l'engine, les repositories et les services.
Traduites en HTTPException uniquement dans les routers.
"""
from typing import Iterable


class InvalidAnswerError(ValueError):
    """Valeur hors [1,5] ou catégorie inconnue : jamais corrigée silencieusement."""


class IdConflictError(Exception):
    """inserted : lignes insérées malgré le conflit (import partiel)."""

    def __init__(self, ids: Iterable[str], inserted: int = 0):
        self.ids = list(ids)
        self.inserted = inserted
        super().__init__(f"Identifiant(s) déjà utilisé(s) : {', '.join(self.ids)}")


class QuestionNotFoundError(LookupError):
    pass


class QuestionImportError(ValueError):
    pass


class StoreUnavailableError(Exception):
    """Base de données injoignable ou en erreur (save / list / delete)."""


class SessionNotFoundError(LookupError):
    pass


class SessionIncompleteError(Exception):
    pass


class SessionSubmittedError(Exception):
    """Session déjà soumise : réponses et navigation figées."""
