# engine/intelligence/selection.py
"""
Composition équilibrée d'une session de test.

Règle : au plus N questions par catégorie (N=5 par défaut → 40 questions),
tirées au hasard dans chaque catégorie, puis mélangées entre elles.
Composition fixe, ordre aléatoire.

Déterministe si un random.Random initialisé est fourni (tests) ;
en production aucune graine n'est exposée.
"""
from __future__ import annotations
import random
from typing import Dict, List, Optional, Sequence

from app.shared.enums import IntelligenceCategory, CANONICAL_ORDER, parse_category

DEFAULT_QUESTIONS_PER_CATEGORY = 5


def group_by_category(questions: Sequence) -> Dict[IntelligenceCategory, List]:
    groups: Dict[IntelligenceCategory, List] = {category: [] for category in CANONICAL_ORDER}
    for question in questions:
        try:
            category = parse_category(question.category)
        except ValueError:
            continue
        groups[category].append(question)
    return groups


def missing_categories(questions: Sequence) -> List[IntelligenceCategory]:
    """Catégories sans aucune question : une session ne peut pas démarrer."""
    groups = group_by_category(questions)
    return [category for category in CANONICAL_ORDER if not groups[category]]


def select_balanced_questions(
    questions: Sequence,
    per_category: int = DEFAULT_QUESTIONS_PER_CATEGORY,
    rng: Optional[random.Random] = None,
) -> List:
    rng = rng or random.Random()
    groups = group_by_category(questions)

    selected: List = []
    for category in CANONICAL_ORDER:
        pool = list(groups[category])
        if not pool:
            continue
        rng.shuffle(pool)
        selected.extend(pool[:per_category])

    rng.shuffle(selected)
    return selected
