# engine/intelligence/aggregation.py
"""
Agrégats du tableau de bord : ZÉRO accès DB.

La liste de résultats est TOUJOURS passée explicitement : pas de cache,
pas d'état global. Fonctions pures, indépendantes de l'ordre.

Entrée : tout objet exposant .scores, .dominant_category (et .age
pour les statistiques rapides) : ScoredResult en pratique.
"""
from __future__ import annotations
from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, Optional, Sequence

from app.engine.intelligence.scoring import round_half_up
from app.shared.enums import IntelligenceCategory, CANONICAL_ORDER


@dataclass(frozen=True)
class AggregateView:
    per_category_average:   Dict[IntelligenceCategory, float]
    dominant_counts:        Dict[IntelligenceCategory, int]
    total:                  int = 0
    most_common_category:   Optional[IntelligenceCategory] = None
    average_age:            Optional[int] = None


def average_per_category(results: Sequence) -> Dict[IntelligenceCategory, float]:
    """Moyenne par catégorie ; 0.0 partout si aucun résultat."""
    count = len(results)
    if count == 0:
        return {category: 0.0 for category in CANONICAL_ORDER}

    totals = {category: 0 for category in CANONICAL_ORDER}
    for result in results:
        for category in CANONICAL_ORDER:
            totals[category] += result.scores.get(category, 0)
    return {category: totals[category] / count for category in CANONICAL_ORDER}


def dominant_counts(results: Sequence) -> Dict[IntelligenceCategory, int]:
    """Les 8 catégories sont présentes, même à 0 (barres vides du graphique)."""
    counts = {category: 0 for category in CANONICAL_ORDER}
    for result in results:
        counts[result.dominant_category] += 1
    return counts


def most_common_category(counts: Dict[IntelligenceCategory, int]) -> Optional[IntelligenceCategory]:
    best, best_count = None, 0
    for category in CANONICAL_ORDER:
        if counts.get(category, 0) > best_count:
            best, best_count = category, counts[category]
    return best


def average_age(results: Sequence) -> Optional[int]:
    if not results:
        return None
    return round_half_up(Fraction(sum(r.age for r in results), len(results)))


def build_aggregate_view(results: Sequence) -> AggregateView:
    results = list(results)
    counts = dominant_counts(results)
    return AggregateView(
        per_category_average=average_per_category(results),
        dominant_counts=counts,
        total=len(results),
        most_common_category=most_common_category(counts),
        average_age=average_age(results),
    )
