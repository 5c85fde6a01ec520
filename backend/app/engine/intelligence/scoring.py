# engine/intelligence/scoring.py
"""
Calcul du profil d'intelligences multiples : ZÉRO accès DB.
Reçoit les réponses en paramètre, retourne un profil structuré.

Formule par catégorie c :
    score_c = arrondi( Σ valeurs_c / (5 · n_c) × 100 )

    n_c = nombre de réponses de la catégorie c
    n_c = 0 → score_c = 0 (cas dégénéré, la sélection équilibrée l'évite)

Arrondi :
    Demi vers le haut (0.5 → 1), calculé sur la fraction exacte.
    Le round() natif de Python est un arrondi bancaire (12.5 → 12) :
    il n'est PAS utilisé ici.

Type dominant :
    Catégorie au score strictement le plus haut.
    Ex-aequo → la première dans l'ordre canonique
    (linguistic, logical, musical, bodily, spatial,
     interpersonal, intrapersonal, naturalistic).
    Tous les scores à 0 → linguistic.

Appelé par : modules/quiz/service.py
"""
from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from fractions import Fraction
from typing import Dict, Iterable, List

from app.shared.enums import IntelligenceCategory, CANONICAL_ORDER, parse_category
from app.shared.exceptions import InvalidAnswerError

# --- ÉCHELLE LIKERT ---
LIKERT_MIN = 1
LIKERT_MAX = 5


@dataclass(frozen=True)
class Answer:
    """Une réponse Likert. La catégorie est copiée depuis la question."""
    question_id: str
    value:       int
    category:    IntelligenceCategory


@dataclass(frozen=True)
class ScoreProfile:
    scores:            Dict[IntelligenceCategory, int]   # toujours 8 clés
    dominant_category: IntelligenceCategory


def round_half_up(value) -> int:
    """Arrondi commercial : 12.5 → 13, 12.4 → 12. Accepte Fraction, int, float."""
    if isinstance(value, Fraction):
        value = Decimal(value.numerator) / Decimal(value.denominator)
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def validate_answers(answers: Iterable[Answer]) -> List[Answer]:
    """
    Contrôle de frontière, AVANT tout calcul.
    Une seule réponse invalide rejette l'appel entier (pas de clamp).
    """
    checked = []
    for answer in answers:
        try:
            category = parse_category(answer.category)
        except ValueError:
            raise InvalidAnswerError(
                f"Catégorie inconnue pour la question {answer.question_id} : {answer.category!r}"
            ) from None

        value = answer.value
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidAnswerError(
                f"Valeur non entière pour la question {answer.question_id} : {value!r}"
            )
        if not LIKERT_MIN <= value <= LIKERT_MAX:
            raise InvalidAnswerError(
                f"Valeur hors échelle [{LIKERT_MIN},{LIKERT_MAX}] pour la question "
                f"{answer.question_id} : {value}"
            )
        checked.append(Answer(question_id=answer.question_id, value=value, category=category))

    if not checked:
        raise InvalidAnswerError("Aucune réponse fournie.")
    return checked


def score_answers(answers: Iterable[Answer]) -> ScoreProfile:
    """
    Calcule le profil à partir des réponses brutes.

    Fonction 100% pure : même multiset de réponses → même profil,
    quel que soit l'ordre.
    """
    checked = validate_answers(answers)

    stats = {category: {"points": 0, "count": 0} for category in CANONICAL_ORDER}
    for answer in checked:
        stats[answer.category]["points"] += answer.value
        stats[answer.category]["count"] += 1

    scores: Dict[IntelligenceCategory, int] = {}
    for category in CANONICAL_ORDER:
        data = stats[category]
        max_possible = data["count"] * LIKERT_MAX
        if max_possible == 0:
            scores[category] = 0
            continue
        scores[category] = round_half_up(Fraction(data["points"] * 100, max_possible))

    return ScoreProfile(scores=scores, dominant_category=dominant_category(scores))


def dominant_category(scores: Dict[IntelligenceCategory, int]) -> IntelligenceCategory:
    """Premier maximum rencontré en parcourant l'ordre canonique (comparaison stricte)."""
    dominant = CANONICAL_ORDER[0]
    highest = scores.get(dominant, 0)
    for category in CANONICAL_ORDER[1:]:
        if scores.get(category, 0) > highest:
            highest = scores[category]
            dominant = category
    return dominant
