# tests/engine/intelligence/test_selection.py
"""
Tests unitaires pour engine.intelligence.selection

Couverture :
    - Quota par catégorie : exactement min(disponibles, N)
    - 40 questions à partir de la banque embarquée
    - Reproductible avec une graine, ordre mélangé
    - Catégories manquantes détectées
    - Entrées à catégorie invalide ignorées
"""
import random
import pytest
from collections import Counter

from app.content.default_questions import DEFAULT_QUESTIONS, default_question_models
from app.engine.intelligence.selection import (
    group_by_category,
    missing_categories,
    select_balanced_questions,
)
from app.shared.enums import IntelligenceCategory as IC, CANONICAL_ORDER
from tests.conftest import make_question, make_question_pool

pytestmark = pytest.mark.engine


def _per_category(questions) -> Counter:
    return Counter(IC(q.category) for q in questions)


class TestSelectBalanced:
    def test_quota_cinq_par_categorie(self):
        selected = select_balanced_questions(make_question_pool(per_category=9), rng=random.Random(1))
        assert len(selected) == 40
        assert all(n == 5 for n in _per_category(selected).values())

    def test_categorie_pauvre_prend_ce_qui_existe(self):
        pool = make_question_pool(per_category=6) + [
            make_question(id="X1", category="musical"),
        ]
        pool = [q for q in pool if not (q.type == "bodily" and q.id != "K1")]
        counts = _per_category(select_balanced_questions(pool, rng=random.Random(3)))
        assert counts[IC.BODILY] == 1
        assert counts[IC.MUSICAL] == 5

    def test_quota_parametrable(self):
        selected = select_balanced_questions(make_question_pool(5), per_category=2, rng=random.Random(0))
        assert len(selected) == 16

    def test_reproductible_avec_graine(self):
        pool = make_question_pool(per_category=8)
        first = select_balanced_questions(pool, rng=random.Random(42))
        second = select_balanced_questions(pool, rng=random.Random(42))
        assert [q.id for q in first] == [q.id for q in second]

    def test_ordre_melange(self):
        pool = make_question_pool(per_category=5)
        selected = select_balanced_questions(pool, rng=random.Random(5))
        assert [q.id for q in selected] != [q.id for q in pool]
        assert {q.id for q in selected} == {q.id for q in pool}

    def test_pas_de_doublon(self):
        selected = select_balanced_questions(make_question_pool(per_category=7), rng=random.Random(9))
        assert len({q.id for q in selected}) == len(selected)

    def test_banque_embarquee_donne_quarante_questions(self):
        selected = select_balanced_questions(default_question_models(), rng=random.Random(11))
        assert len(selected) == 40
        assert set(_per_category(selected)) == set(CANONICAL_ORDER)


class TestGroupByCategory:
    def test_categorie_invalide_ignoree(self):
        pool = [make_question(id="L1"), make_question(id="Z1", type="emotional")]
        groups = group_by_category(pool)
        assert [q.id for q in groups[IC.LINGUISTIC]] == ["L1"]
        assert sum(len(g) for g in groups.values()) == 1


class TestMissingCategories:
    def test_banque_complete(self):
        assert missing_categories(make_question_pool(1)) == []

    def test_categories_absentes_dans_ordre_canonique(self):
        pool = make_question_pool(2, categories=[IC.LINGUISTIC, IC.SPATIAL])
        missing = missing_categories(pool)
        assert missing[0] == IC.LOGICAL
        assert IC.SPATIAL not in missing
        assert len(missing) == 6

    def test_banque_vide(self):
        assert missing_categories([]) == list(CANONICAL_ORDER)


class TestDefaultQuestions:
    def test_cinq_questions_par_categorie(self):
        counts = Counter(q["category"] for q in DEFAULT_QUESTIONS)
        assert counts == {c.value: 5 for c in CANONICAL_ORDER}

    def test_identifiants_uniques(self):
        ids = [q["id"] for q in DEFAULT_QUESTIONS]
        assert len(ids) == len(set(ids)) == 40
