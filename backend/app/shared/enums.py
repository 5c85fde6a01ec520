# app/shared/enums.py
"""
Toutes les énumérations du projet.

Source unique de vérité pour les catégories d'intelligence.
Importé par les modèles, schemas, services et engine.
"""

from enum import Enum


class IntelligenceCategory(str, Enum):
    # L'ordre de déclaration EST l'ordre canonique (départage du type dominant)
    LINGUISTIC    = "linguistic"
    LOGICAL       = "logical"
    MUSICAL       = "musical"
    BODILY        = "bodily"
    SPATIAL       = "spatial"
    INTERPERSONAL = "interpersonal"
    INTRAPERSONAL = "intrapersonal"
    NATURALISTIC  = "naturalistic"


CANONICAL_ORDER = tuple(IntelligenceCategory)

CATEGORY_LABELS = {
    IntelligenceCategory.LINGUISTIC:    "Linguistique",
    IntelligenceCategory.LOGICAL:       "Logico-mathématique",
    IntelligenceCategory.MUSICAL:       "Musicale",
    IntelligenceCategory.BODILY:        "Kinesthésique",
    IntelligenceCategory.SPATIAL:       "Spatiale",
    IntelligenceCategory.INTERPERSONAL: "Interpersonnelle",
    IntelligenceCategory.INTRAPERSONAL: "Intrapersonnelle",
    IntelligenceCategory.NATURALISTIC:  "Naturaliste",
}


def parse_category(value) -> IntelligenceCategory:
    """Accepte un membre de l'enum ou sa valeur brute. Lève ValueError sinon."""
    if isinstance(value, IntelligenceCategory):
        return value
    return IntelligenceCategory(str(value).strip().lower())


class ResultSortKey(str, Enum):
    # Colonnes triables du tableau de résultats, scores compris
    NAME          = "name"
    GROUP         = "group"
    DATE          = "date"
    LINGUISTIC    = "linguistic"
    LOGICAL       = "logical"
    MUSICAL       = "musical"
    BODILY        = "bodily"
    SPATIAL       = "spatial"
    INTERPERSONAL = "interpersonal"
    INTRAPERSONAL = "intrapersonal"
    NATURALISTIC  = "naturalistic"


class SortDirection(str, Enum):
    ASC  = "asc"
    DESC = "desc"
